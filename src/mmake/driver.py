"""Build driver — resolve prerequisites depth-first and run stale commands."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .context import RunContext
from .errors import CircularDependencyError
from .executor import execute
from .rules import Rule, RuleModel
from .staleness import needs_rebuild

logger = logging.getLogger(__name__)


def build(target: str, model: RuleModel, ctx: RunContext) -> None:
    """Bring ``target`` up to date, building its prerequisites first."""
    rule = model.lookup(target)
    if rule is None:
        logger.debug("No rule for '%s'; treating it as a plain file", target)
        return

    if target in ctx.active:
        chain = ctx.active[ctx.active.index(target) :] + [target]
        raise CircularDependencyError(chain)

    ctx.active.append(target)
    try:
        for prereq in rule.prerequisites:
            build(prereq, model, ctx)
    finally:
        ctx.active.pop()

    if not _is_out_of_date(rule, model, ctx):
        logger.debug("'%s' is up to date", target)
    elif not rule.has_command:
        logger.debug("'%s' has no command to run", target)
    else:
        logger.info("Building '%s'", target)
        execute(rule.command, ctx)


def _is_out_of_date(rule: Rule, model: RuleModel, ctx: RunContext) -> bool:
    if ctx.force_rebuild:
        return True
    if not rule.prerequisites:
        return True
    # every prerequisite is checked so an unresolvable one is always reported
    stale = [needs_rebuild(rule.name, prereq, model) for prereq in rule.prerequisites]
    return any(stale)


def build_targets(targets: Sequence[str], model: RuleModel, ctx: RunContext) -> int:
    """Build each target in order, or the default target if none are given.

    Returns the exit status of the last command executed.
    """
    for target in targets or [model.default_target]:
        build(target, model, ctx)
    logger.debug("Ran %d command(s); exit status %d", ctx.commands_run, ctx.exit_code)
    return ctx.exit_code
