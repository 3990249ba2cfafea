"""HCL rule files — render with Jinja2, parse with python-hcl2, build a RuleModel.

A rule file holds one ``rule`` block per target; the first block is the
default target::

    rule "app" {
      prerequisites = ["app.o"]
      command       = ["cc", "-o", "app", "app.o"]
    }
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import hcl2
import jinja2
from lark.exceptions import LarkError

from .errors import ParseError
from .resolve import Resolver
from .rules import Rule, RuleModel

logger = logging.getLogger(__name__)

_RULE_ATTRS = {"prerequisites", "command"}


def render(text: str, *, context: dict[str, Any] | None = None, source: str = "<string>") -> str:
    """Render rule file text as a Jinja2 template."""
    env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    ctx = {"env": dict(os.environ), **(context or {})}
    try:
        return env.from_string(text).render(ctx)
    except jinja2.TemplateError as exc:
        raise ParseError(f"{source}: {exc}") from exc


def load(file: Path, *, context: dict[str, Any] | None = None) -> RuleModel:
    """Load and parse a single HCL rule file."""
    text = file.read_text(encoding="utf-8")
    return loads(text, context=context, source=str(file))


def loads(
    text: str,
    *,
    context: dict[str, Any] | None = None,
    source: str = "<string>",
) -> RuleModel:
    """Parse HCL rule file text into a rule model."""
    rendered = render(text, context=context, source=source)
    try:
        data = hcl2.loads(rendered)
    except LarkError as exc:
        raise ParseError(f"{source}: {exc}") from exc

    resolver = Resolver({"env": os.environ, "CWD": os.getcwd, **(context or {})})
    rules: list[Rule] = []
    for rule_block in data.get("rule", []):
        # Each rule_block is {"target": {attrs}}
        for name, attrs in rule_block.items():
            if not isinstance(attrs, dict):
                raise ParseError(f"{source}: rule blocks need exactly one label")
            rules.append(_decode_rule(name, dict(attrs), resolver, source))

    try:
        return RuleModel.from_rules(rules)
    except ParseError as exc:
        raise ParseError(f"{source}: {exc}") from exc


def _decode_rule(name: str, attrs: dict[str, Any], resolver: Resolver, source: str) -> Rule:
    """Decode a single rule block, expanding ${...} references."""
    if not name:
        raise ParseError(f"{source}: rule names must not be empty")
    unknown = set(attrs) - _RULE_ATTRS
    if unknown:
        raise ParseError(f"{source}: rule '{name}' has unknown attribute(s): {', '.join(sorted(unknown))}")

    prerequisites = _as_words(attrs.get("prerequisites", []), name, "prerequisites", source)
    command = _as_words(attrs.get("command", []), name, "command", source)
    try:
        prerequisites = resolver.expand_words(prerequisites)
        command = resolver.expand_words(command)
    except ValueError as exc:
        raise ParseError(f"{source}: rule '{name}': {exc}") from exc

    logger.debug("Decoded rule '%s' -> %s", name, command)
    return Rule(name=name, prerequisites=prerequisites, command=command)


def _as_words(value: Any, name: str, attr: str, source: str) -> list[str]:
    if isinstance(value, str):
        return value.split()
    if isinstance(value, list):
        return [str(item) for item in value]
    raise ParseError(f"{source}: rule '{name}': '{attr}' must be a string or a list")
