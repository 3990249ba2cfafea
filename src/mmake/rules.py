"""Rule model — the immutable, parsed form of a rule file."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field, model_validator

from .errors import ParseError

logger = logging.getLogger(__name__)


class Rule(BaseModel):
    """A target together with its prerequisites and the command that produces it."""

    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    prerequisites: tuple[str, ...] = ()
    command: tuple[str, ...] = ()

    @property
    def has_command(self) -> bool:
        return len(self.command) > 0


class RuleModel(BaseModel):
    """All rules of a rule file, keyed by target name, plus the default target."""

    model_config = {"frozen": True}

    rules: dict[str, Rule]
    default: str

    @model_validator(mode="after")
    def _check_rules(self) -> RuleModel:
        if not self.rules:
            raise ValueError("a rule model needs at least one rule")
        for key, rule in self.rules.items():
            if key != rule.name:
                raise ValueError(f"rule '{rule.name}' registered under '{key}'")
        if self.default not in self.rules:
            raise ValueError(f"default target '{self.default}' has no rule")
        return self

    @classmethod
    def from_rules(cls, rules: Iterable[Rule]) -> RuleModel:
        """Build a model from rules in declaration order; the first is the default."""
        by_name: dict[str, Rule] = {}
        for rule in rules:
            if rule.name in by_name:
                raise ParseError(f"Duplicate rule for target '{rule.name}'")
            by_name[rule.name] = rule
        if not by_name:
            raise ParseError("No rules found")
        default = next(iter(by_name))
        logger.debug("Loaded %d rule(s); default target '%s'", len(by_name), default)
        return cls(rules=by_name, default=default)

    @property
    def default_target(self) -> str:
        return self.default

    def lookup(self, name: str) -> Rule | None:
        """Return the rule that produces ``name``, or None if there is none."""
        return self.rules.get(name)

    def __len__(self) -> int:
        return len(self.rules)
