"""Runtime state threaded through a build."""

from __future__ import annotations


class RunContext:
    """Per-invocation options and the accumulated exit status."""

    def __init__(self, *, force_rebuild: bool = False, quiet: bool = False) -> None:
        self.force_rebuild = force_rebuild
        self.quiet = quiet
        # status of the most recent command; the process exits with it
        self.exit_code = 0
        self.commands_run = 0
        # targets on the current recursion path
        self.active: list[str] = []
