"""mmake - A minimal make: rebuild stale targets from a declarative rule file."""

from .context import RunContext as RunContext
from .driver import build as build
from .driver import build_targets as build_targets
from .errors import CircularDependencyError as CircularDependencyError
from .errors import CommandError as CommandError
from .errors import MakeError as MakeError
from .errors import NoRuleError as NoRuleError
from .errors import ParseError as ParseError
from .errors import RuleFileError as RuleFileError
from .executor import execute as execute
from .loader import load_model as load_model
from .rules import Rule as Rule
from .rules import RuleModel as RuleModel
from .staleness import needs_rebuild as needs_rebuild
