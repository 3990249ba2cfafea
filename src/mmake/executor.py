"""Command executor — run a rule's command and record its exit status."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from .context import RunContext
from .errors import CommandError

logger = logging.getLogger(__name__)


def format_command(command: Sequence[str]) -> str:
    """Render a command the way it is echoed before running."""
    return " ".join(command)


def execute(command: Sequence[str], ctx: RunContext) -> None:
    """Run ``command`` to completion and store its exit status in ``ctx``.

    An empty command does nothing. A non-zero exit status is recorded but
    not raised; failing to start the program raises CommandError.
    """
    if not command:
        return

    if not ctx.quiet:
        print(format_command(command), flush=True)

    try:
        process = subprocess.run(list(command), check=False)
    except OSError as exc:
        raise CommandError(command, exc) from exc

    ctx.commands_run += 1
    if process.returncode < 0:
        logger.warning("%s: terminated by signal %d", command[0], -process.returncode)
        return

    if process.returncode != 0:
        logger.info("%s: exited with status %d", command[0], process.returncode)
    ctx.exit_code = process.returncode
