"""Exceptions raised while loading rule files and building targets."""

from __future__ import annotations

from collections.abc import Sequence


class MakeError(Exception):
    """Base class for fatal build errors; carries the process exit status."""

    exit_code: int = 1

    def __init__(self, message: str, *, exit_code: int | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = _clamp_status(exit_code)


class ParseError(MakeError):
    """The rule file is malformed."""


class RuleFileError(MakeError):
    """The rule file could not be read."""


class NoRuleError(MakeError):
    """A prerequisite has neither a file on disk nor a rule to make it."""

    def __init__(self, target: str) -> None:
        super().__init__(f"No rule to make target '{target}'")
        self.target = target


class CircularDependencyError(MakeError):
    """A target depends on itself, directly or transitively."""

    def __init__(self, chain: Sequence[str]) -> None:
        super().__init__(f"Circular dependency: {' -> '.join(chain)}")
        self.chain = tuple(chain)


class CommandError(MakeError):
    """A command could not be spawned or waited on."""

    def __init__(self, command: Sequence[str], exc: OSError) -> None:
        super().__init__(f"{command[0]}: {exc.strerror or exc}", exit_code=exc.errno or 1)
        self.command = tuple(command)


def _clamp_status(status: int) -> int:
    # exit statuses are a single byte; zero would hide the failure
    return status if 0 < status < 256 else 1
