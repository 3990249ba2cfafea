"""Rule file selection and format dispatch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from . import hcl, parser
from .errors import ParseError, RuleFileError
from .rules import RuleModel

logger = logging.getLogger(__name__)

DEFAULT_RULE_FILE = "mmakefile"


def load_model(
    path: str | Path | None = None,
    *,
    context: dict[str, Any] | None = None,
) -> RuleModel:
    """Load the rule file at ``path`` (default: ./mmakefile).

    Files ending in ``.hcl`` are read as HCL; anything else uses the
    mmakefile text format.
    """
    file = Path(path if path is not None else DEFAULT_RULE_FILE)
    logger.debug("Loading rules from %s", file)
    try:
        model = hcl.load(file, context=context) if file.suffix == ".hcl" else parser.load(file)
    except OSError as exc:
        raise RuleFileError(f"{file}: {exc.strerror or exc}", exit_code=exc.errno or 1) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"{file}: not valid UTF-8 text ({exc.reason} at byte {exc.start})") from exc

    logger.debug("Loaded %d rule(s) from %s", len(model), file)
    return model
