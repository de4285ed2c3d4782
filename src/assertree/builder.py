"""Fluent construction API and the entry points that create a subject.

Chained calls only build nodes. Predicates run when a strategy evaluates the
tree: after every call for :func:`expect_that` without a block, at the end of
the block otherwise.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from operator import attrgetter
from typing import Any, Callable

from assertree.assertions import CoreAssertions, IterableAssertions
from assertree.nodes import (
    AssertionGroup,
    AssertionTree,
    AtomicPredicate,
    CompoundAssertionNode,
    ResultsPredicate,
    append_subject,
)
from assertree.reporting.text import format_value
from assertree.strategy import COLLECTING, THROWING, AssertionStrategy, Negating

logger = logging.getLogger("assertree.builder")


def _format_slice(key: slice) -> str:
    parts = ["" if part is None else repr(part) for part in (key.start, key.stop)]
    if key.step is not None:
        parts.append(repr(key.step))
    return ":".join(parts)


class AssertionBuilder(CoreAssertions, IterableAssertions):
    """A chainable handle on one subject node of an assertion tree."""

    def __init__(
        self,
        tree: AssertionTree,
        context: AssertionGroup,
        strategy: AssertionStrategy,
        eager: bool = False,
    ):
        self.tree = tree
        self.context = context
        self.strategy = strategy
        self.eager = eager

    @property
    def subject(self) -> Any:
        return self.context.subject

    def assert_that(
        self, description: str, assertion: AtomicPredicate, expected: Any = None
    ) -> AssertionBuilder:
        """Append an atomic assertion.

        ``assertion(node, subject)`` runs during evaluation and must call
        exactly one of ``node.pass_()`` or ``node.fail(...)``. ``description``
        may contain ``%s``, rendered as the subject.
        """
        self.strategy.append_atomic(self.context, description, expected, assertion)
        self._evaluate_if_eager()
        return self

    def compose(
        self,
        description: str,
        block: Callable[[AssertionBuilder, Any], None],
        expected: Any = None,
    ) -> CompoundAssertions:
        """Append a compound assertion whose children are built by ``block`` right away.

        The children are collected, never raised individually. Finish with
        :meth:`CompoundAssertions.results` to supply the aggregation predicate.
        """
        node = self.strategy.append_compound(self.context, description, expected)
        block(AssertionBuilder(self.tree, node, COLLECTING), self.context.subject)
        return CompoundAssertions(self, node)

    def expect(
        self, value: Any, block: Callable[[AssertionBuilder], None] | None = None
    ) -> AssertionBuilder:
        """Open a nested subject for ``value`` beneath the current node."""
        node = append_subject(self.context, value)
        nested = AssertionBuilder(self.tree, node, self.strategy, self.eager)
        if block is not None:
            block(nested)
        return nested

    def get(
        self, selector: Callable[[Any], Any] | str, description: str | None = None
    ) -> AssertionBuilder:
        """Map the subject to a derived value and continue the chain on it.

        ``selector`` may be a callable or an attribute name. The selector runs
        immediately, so errors it raises propagate from this call. Without a
        description the node is labelled after the attribute or function.
        """
        if isinstance(selector, str):
            description = description or f"value of property {selector}"
            selector = attrgetter(selector)
        if description is None:
            name = getattr(selector, "__name__", "<lambda>")
            description = "mapped value" if name == "<lambda>" else f"return value of {name}"
        node = append_subject(self.context, selector(self.subject), f"{description}:")
        return AssertionBuilder(self.tree, node, self.strategy, self.eager)

    def described_as(self, description: str) -> AssertionBuilder:
        """Relabel the current derived subject."""
        if self.context.parent is None:
            self.context.description = f"Expect that {description}:"
        else:
            self.context.description = f"{description}:"
        return self

    def __getitem__(self, key: Any) -> AssertionBuilder:
        """Map to an element, a slice, or the value stored under a mapping key.

        A missing mapping key maps to None.
        """
        if isinstance(self.subject, Mapping):
            return self.get(lambda subject: subject.get(key), f"value for key {format_value(key)}")
        if isinstance(key, slice):
            return self.get(lambda subject: subject[key], f"elements [{_format_slice(key)}]")
        return self.get(lambda subject: subject[key], f"element [{key!r}]")

    def not_(self) -> AssertionBuilder:
        """A handle whose assertions are negated."""
        return AssertionBuilder(self.tree, self.context, Negating(self.strategy), self.eager)

    def _evaluate_if_eager(self) -> None:
        if self.eager:
            self.strategy.evaluate(self.tree)

    def __repr__(self) -> str:
        return f"<AssertionBuilder {self.subject!r} {self.strategy!r}>"


class CompoundAssertions:
    def __init__(self, builder: AssertionBuilder, node: CompoundAssertionNode):
        self.builder = builder
        self.node = node

    def results(self, predicate: ResultsPredicate) -> AssertionBuilder:
        """Supply the aggregation predicate, run once all children are resolved.

        ``predicate(node)`` can read ``node.all_passed``, ``node.any_passed``,
        ``node.all_failed`` and ``node.any_failed`` and must call
        ``node.pass_()`` or ``node.fail(...)``.
        """
        self.node.set_results(predicate)
        self.builder._evaluate_if_eager()
        return self.builder


class Expectations:
    """Collects several subjects to be evaluated as one batch."""

    def __init__(self):
        self.trees: list[AssertionTree] = []

    def that(self, subject: Any) -> AssertionBuilder:
        tree = AssertionTree(subject)
        self.trees.append(tree)
        return AssertionBuilder(tree, tree.root, COLLECTING)


def expect_that(
    subject: Any, block: Callable[[AssertionBuilder], None] | None = None
) -> AssertionBuilder | AssertionTree:
    """Start asserting on ``subject``.

    Without ``block`` returns a chainable handle that raises
    :class:`~assertree.errors.AssertionFailedError` at the first failing call.
    With ``block`` every assertion made in it is evaluated and all failures
    are raised together as a :class:`~assertree.errors.CompoundAssertionFailure`.
    """
    tree = AssertionTree(subject)
    if block is None:
        return AssertionBuilder(tree, tree.root, THROWING, eager=True)
    block(AssertionBuilder(tree, tree.root, COLLECTING))
    logger.debug(f"Evaluating {len(tree.children)} assertions on {subject!r}")
    THROWING.evaluate(tree)
    return tree


def expect(block: Callable[[Expectations], None]) -> list[AssertionTree]:
    """Assert on several subjects, raising one error for all failed subjects."""
    scope = Expectations()
    block(scope)
    logger.debug(f"Evaluating {len(scope.trees)} subjects")
    THROWING.evaluate_all(scope.trees)
    return scope.trees


def collect(subject: Any, block: Callable[[AssertionBuilder], None]) -> AssertionTree:
    """Build and evaluate assertions on ``subject`` without raising."""
    tree = AssertionTree(subject)
    block(AssertionBuilder(tree, tree.root, COLLECTING))
    COLLECTING.evaluate(tree)
    return tree
