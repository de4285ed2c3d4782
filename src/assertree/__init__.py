"""Fluent assertions evaluated as a tree and reported as a nested outline."""

from assertree.builder import (
    AssertionBuilder,
    CompoundAssertions,
    Expectations,
    collect,
    expect,
    expect_that,
)
from assertree.errors import (
    AssertionFailedError,
    CompoundAssertionFailure,
    StatusAlreadySetError,
)
from assertree.negation import NEGATION_RULES, NegationRule, negate_description
from assertree.nodes import (
    AssertionTree,
    AtomicAssertionNode,
    CompoundAssertionNode,
    SubjectNode,
)
from assertree.status import PASSED, PENDING, ComparedValues, Failed, Passed, Pending, Status
from assertree.strategy import (
    COLLECTING,
    THROWING,
    AssertionStrategy,
    Collecting,
    Negating,
    Throwing,
)

__all__ = [
    "AssertionBuilder",
    "AssertionFailedError",
    "AssertionStrategy",
    "AssertionTree",
    "AtomicAssertionNode",
    "COLLECTING",
    "Collecting",
    "ComparedValues",
    "CompoundAssertionFailure",
    "CompoundAssertionNode",
    "CompoundAssertions",
    "Expectations",
    "Failed",
    "NEGATION_RULES",
    "Negating",
    "NegationRule",
    "PASSED",
    "PENDING",
    "Passed",
    "Pending",
    "StatusAlreadySetError",
    "Status",
    "SubjectNode",
    "THROWING",
    "Throwing",
    "collect",
    "expect",
    "expect_that",
    "negate_description",
]
