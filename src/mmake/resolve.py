"""Expansion of ${...} references in rule prerequisites and commands."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

_REF_PATTERN = re.compile(r"\$\$\{|\$\{([^{}]+)\}")
_WHOLE_REF = re.compile(r"\$\{([^{}]+)\}")


class Resolver:
    """Expand ${name} and ${dotted.name} references against a variable scope.

    Values are looked up by key, then by attribute; a callable found at the
    end of a reference is called. ``$${`` produces a literal ``${``.
    """

    def __init__(self, scope: Mapping[str, Any] | None = None) -> None:
        self._scope = scope or {}

    def lookup(self, ref: str) -> Any:
        current: Any = self._scope
        for part in ref.split("."):
            try:
                current = current[part]
            except (KeyError, TypeError):
                try:
                    current = getattr(current, part)
                except AttributeError:
                    raise ValueError(f"undefined variable '{ref}'") from None

        if callable(current) and not isinstance(current, type):
            current = current()
        return current

    def expand(self, value: str) -> str:
        """Expand every reference in ``value`` to its string form."""
        if "${" not in value:
            return value

        def _replace(m: re.Match) -> str:  # type: ignore[type-arg]
            if m.group(0) == "$${":
                return "${"
            return _stringify(self.lookup(m.group(1).strip()))

        return _REF_PATTERN.sub(_replace, value)

    def expand_words(self, words: Iterable[str]) -> list[str]:
        """Expand a word list, splicing in list values referenced as a whole word."""
        result: list[str] = []
        for word in words:
            match = _WHOLE_REF.fullmatch(word)
            if match:
                value = self.lookup(match.group(1).strip())
                if isinstance(value, (list, tuple)):
                    logger.debug("Splicing %d word(s) from '%s'", len(value), word)
                    result.extend(_stringify(item) for item in value)
                    continue
                result.append(_stringify(value))
            else:
                result.append(self.expand(word))
        return result


def _stringify(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(_stringify(item) for item in value)
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)
