"""Staleness oracle — decide whether a prerequisite forces a rebuild."""

from __future__ import annotations

import logging
import os

from .errors import NoRuleError
from .rules import RuleModel

logger = logging.getLogger(__name__)


def needs_rebuild(target: str, prereq: str, model: RuleModel) -> bool:
    """Return True if ``target`` must be rebuilt because of ``prereq``.

    A prerequisite missing from disk is fatal unless the model has a rule
    for it. A missing target is always stale. Otherwise the prerequisite
    must be strictly newer than the target; equal timestamps are up to date.
    """
    if not os.path.exists(prereq):
        if model.lookup(prereq) is None:
            raise NoRuleError(prereq)
        logger.debug("'%s' is stale; prerequisite '%s' does not exist yet", target, prereq)
        return True

    if not os.path.exists(target):
        logger.debug("'%s' does not exist", target)
        return True

    prereq_mtime = os.stat(prereq).st_mtime
    target_mtime = os.stat(target).st_mtime
    if prereq_mtime > target_mtime:
        logger.debug("'%s' is older than prerequisite '%s'", target, prereq)
        return True

    logger.debug("'%s' is up to date with respect to '%s'", target, prereq)
    return False
