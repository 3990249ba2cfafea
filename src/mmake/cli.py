"""Command-line entry point: ``mmake [-f FILE] [-B] [-s] [TARGET...]``."""

from __future__ import annotations

import logging
import sys

import click

from .context import RunContext
from .driver import build_targets
from .errors import MakeError
from .loader import DEFAULT_RULE_FILE, load_model

logger = logging.getLogger(__name__)

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def _parse_defines(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    defines: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got '{item}'")
        defines[name] = value
    return defines


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-f",
    "--file",
    "rule_file",
    type=click.Path(dir_okay=False),
    envvar="MMAKE_FILE",
    default=DEFAULT_RULE_FILE,
    show_default=True,
    help="Rule file to read.",
)
@click.option("-B", "--always-make", "force_rebuild", is_flag=True, help="Rebuild every target.")
@click.option("-s", "--silent", "quiet", is_flag=True, help="Do not echo commands.")
@click.option("-v", "--verbose", count=True, help="Log more; repeat for debug output.")
@click.option(
    "-D",
    "--define",
    "defines",
    multiple=True,
    callback=_parse_defines,
    metavar="NAME=VALUE",
    help="Template variable for HCL rule files.",
)
@click.argument("targets", nargs=-1)
def main(
    rule_file: str,
    force_rebuild: bool,
    quiet: bool,
    verbose: int,
    defines: dict[str, str],
    targets: tuple[str, ...],
) -> None:
    """Bring TARGETS (default: the first rule) up to date."""
    logging.basicConfig(
        level=_LOG_LEVELS[min(verbose, len(_LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    ctx = RunContext(force_rebuild=force_rebuild, quiet=quiet)
    try:
        model = load_model(rule_file, context=defines)
        status = build_targets(targets, model, ctx)
    except MakeError as exc:
        click.echo(f"mmake: {exc}", err=True)
        sys.exit(exc.exit_code)

    logger.debug("Exiting with status %d", status)
    sys.exit(status)
