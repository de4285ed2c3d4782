"""Rewriting assertion descriptions for negated assertions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class NegationRule:
    """Replace a leading ``pattern`` match with ``replacement``."""

    pattern: re.Pattern[str]
    replacement: str

    @classmethod
    def compile(cls, pattern: str, replacement: str) -> NegationRule:
        return cls(re.compile(pattern), replacement)

    def apply(self, description: str) -> str | None:
        if self.pattern.search(description) is None:
            return None
        return self.pattern.sub(self.replacement, description, count=1)


# Order matters: "is not" must be tried before "is". The first rule undoes the
# "does not match:" fallback.
NEGATION_RULES: tuple[NegationRule, ...] = (
    NegationRule.compile(r"^does not match: ", ""),
    NegationRule.compile(r"^is not\b", "is"),
    NegationRule.compile(r"^is\b", "is not"),
    NegationRule.compile(r"^contains\b", "does not contain"),
    NegationRule.compile(r"^starts with\b", "does not start with"),
    NegationRule.compile(r"^ends with\b", "does not end with"),
    NegationRule.compile(r"^matches\b", "does not match"),
    NegationRule.compile(r"^throws\b", "does not throw"),
    NegationRule.compile(r"^has\b", "does not have"),
)


def negate_description(
    description: str, rules: Iterable[NegationRule] | None = None
) -> str:
    """Return the negated form of ``description``.

    The first rule whose pattern matches wins. When nothing matches the
    description is wrapped as ``does not match: <description>``.
    """
    for rule in NEGATION_RULES if rules is None else rules:
        negated = rule.apply(description)
        if negated is not None:
            return negated
    return f"does not match: {description}"
