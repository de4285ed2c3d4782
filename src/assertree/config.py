from __future__ import annotations

import re
from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator

from assertree.negation import NEGATION_RULES, NegationRule
from assertree.verbose import setup_logger


class NegationRuleConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    pattern: str
    replacement: str

    @field_validator("pattern")
    @classmethod
    def pattern_must_compile(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid negation pattern '{v}': {e}") from e
        return v


class AssertreeConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    max_value_length: int | None = None
    extra_negation_rules: list[NegationRuleConfig] = []
    log_file: str | None = None
    verbose: bool = False

    @field_validator("max_value_length")
    @classmethod
    def max_value_length_must_be_positive(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("max_value_length must be at least 1")
        return v

    @field_validator("log_file")
    @classmethod
    def expand_log_file(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            return expandvars(v, nounset=True)
        except Exception as e:
            raise ValueError(f"log_file references an unset environment variable: {v}") from e

    def negation_rules(self) -> tuple[NegationRule, ...]:
        """Built-in rules followed by the configured extras."""
        extras = tuple(
            NegationRule.compile(rule.pattern, rule.replacement)
            for rule in self.extra_negation_rules
        )
        return NEGATION_RULES + extras


_config = AssertreeConfig()


def load_config(path: Path) -> AssertreeConfig:
    """Load and validate settings from a YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    config = AssertreeConfig(**raw)

    # Resolve a relative log file against the config file location
    if config.log_file is not None:
        log_path = Path(config.log_file)
        if not log_path.is_absolute():
            config.log_file = str((path.parent.resolve() / log_path).resolve())

    return config


def configure(config: AssertreeConfig) -> AssertreeConfig:
    """Install ``config`` as the process-wide settings and set up logging."""
    global _config
    _config = config
    if config.log_file is not None or config.verbose:
        setup_logger(
            Path(config.log_file) if config.log_file else None,
            verbose=config.verbose,
        )
    return config


def get_config() -> AssertreeConfig:
    return _config


def reset_config() -> None:
    global _config
    _config = AssertreeConfig()
