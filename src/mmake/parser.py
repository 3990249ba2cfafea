"""Parser for the mmakefile text format.

A rule is a ``target: prerequisites...`` line, optionally followed by one
TAB-indented command line::

    app: app.o
    	cc -o app app.o

Blank lines and ``#`` comments are ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import ParseError
from .rules import Rule, RuleModel

logger = logging.getLogger(__name__)


def load(file: Path) -> RuleModel:
    """Load and parse a single mmakefile."""
    text = file.read_text(encoding="utf-8")
    return parse(text, source=str(file))


def parse(text: str, *, source: str = "<string>") -> RuleModel:
    """Parse mmakefile text into a rule model."""
    pending: list[tuple[str, list[str], list[str] | None]] = []

    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        if line.startswith("\t"):
            if not pending:
                raise ParseError(f"{source}:{lineno}: command without a rule")
            name, prereqs, command = pending[-1]
            if command is not None:
                raise ParseError(f"{source}:{lineno}: target '{name}' already has a command")
            pending[-1] = (name, prereqs, stripped.split())
            continue

        name, sep, rest = line.partition(":")
        name = name.rstrip()
        if not sep or not name or name[0].isspace() or any(c.isspace() for c in name):
            raise ParseError(f"{source}:{lineno}: expected 'target: prerequisites'")
        logger.debug("%s:%d: rule '%s'", source, lineno, name)
        pending.append((name, rest.split(), None))

    try:
        return RuleModel.from_rules(
            Rule(name=name, prerequisites=prereqs, command=command or [])
            for name, prereqs, command in pending
        )
    except ParseError as exc:
        raise ParseError(f"{source}: {exc}") from exc
