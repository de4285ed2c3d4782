"""Policies deciding what pass/fail mean and how failures surface.

``Collecting`` records outcomes and never raises, ``Throwing`` raises as soon
as one of its own nodes fails and raises an aggregate after evaluating a
whole tree, ``Negating`` wraps another strategy and inverts outcomes.

Evaluation is idempotent: nodes that already have a status are skipped, so
evaluating a tree twice never re-runs a predicate.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from assertree.config import get_config
from assertree.errors import CompoundAssertionFailure, create_assertion_failed_error
from assertree.negation import NegationRule, negate_description
from assertree.nodes import (
    AssertionGroup,
    AssertionNode,
    AssertionTree,
    AtomicAssertionNode,
    AtomicPredicate,
    CompoundAssertionNode,
    append_atomic,
    append_compound,
)
from assertree.reporting.text import (
    write_partial_to_string,
    write_to_string,
    write_trees_to_string,
)
from assertree.status import PASSED, ComparedValues, Failed, Status

logger = logging.getLogger("assertree.strategy")


def _group_of(tree: AssertionTree | AssertionGroup) -> AssertionGroup:
    return tree.root if isinstance(tree, AssertionTree) else tree


class AssertionStrategy:
    def append_atomic(
        self,
        parent: AssertionGroup,
        description: str,
        expected: Any,
        assertion: AtomicPredicate,
    ) -> AtomicAssertionNode:
        return append_atomic(
            parent, self.provide_description(description), expected, assertion, self
        )

    def append_compound(
        self, parent: AssertionGroup, description: str, expected: Any
    ) -> CompoundAssertionNode:
        return append_compound(parent, self.provide_description(description), expected, self)

    def evaluate(self, tree: AssertionTree | AssertionGroup) -> None:
        """Run every pending predicate in ``tree``, children before their parents."""
        self._walk(_group_of(tree))

    def evaluate_all(self, trees: Iterable[AssertionTree]) -> None:
        for tree in trees:
            self._walk(_group_of(tree))

    def _walk(self, group: AssertionGroup) -> None:
        if isinstance(group, CompoundAssertionNode):
            if group.status.is_resolved:
                return
            group.freeze()

        for child in group.children:
            if isinstance(child, AtomicAssertionNode):
                if not child.status.is_resolved:
                    child.run()
            elif isinstance(child, AssertionGroup):
                self._walk(child)
            else:
                raise TypeError(f"Don't know how to evaluate a {type(child).__name__}")

        if isinstance(group, CompoundAssertionNode):
            group.run_results()

    def provide_description(self, default: str) -> str:
        return default

    def after_status_set(self, node: AssertionNode) -> None:
        pass

    def on_pass(self) -> Status:
        return PASSED

    def on_fail(
        self,
        description: str | None = None,
        comparison: ComparedValues | None = None,
        cause: BaseException | None = None,
    ) -> Status:
        return Failed(description, comparison, cause)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Collecting(AssertionStrategy):
    """Record outcomes without raising."""


class Throwing(AssertionStrategy):
    def evaluate(self, tree: AssertionTree | AssertionGroup) -> None:
        super().evaluate(tree)
        group = _group_of(tree)
        if isinstance(group.status, Failed):
            failures = [
                create_assertion_failed_error(write_partial_to_string(child), child.status)
                for child in group.children
                if isinstance(child.status, Failed)
            ]
            logger.debug(f"Raising aggregate failure with {len(failures)} failed assertions")
            raise CompoundAssertionFailure(write_to_string(group), failures)

    def evaluate_all(self, trees: Iterable[AssertionTree]) -> None:
        trees = list(trees)
        super().evaluate_all(trees)
        failed = [tree for tree in trees if isinstance(tree.status, Failed)]
        if failed:
            logger.debug(f"Raising aggregate failure for {len(failed)} of {len(trees)} subjects")
            raise CompoundAssertionFailure(
                write_trees_to_string(trees),
                [create_assertion_failed_error(write_to_string(tree), tree.status) for tree in failed],
            )

    def after_status_set(self, node: AssertionNode) -> None:
        status = node.status
        if isinstance(status, Failed):
            logger.debug(f"Assertion {node.description!r} failed, raising immediately")
            raise create_assertion_failed_error(write_partial_to_string(node), status)


class Negating(AssertionStrategy):
    """Inverts the outcome of every node it creates and rewrites descriptions.

    Raising is left to ``delegate``: status hooks and evaluation are forwarded.
    """

    def __init__(
        self, delegate: AssertionStrategy, rules: Iterable[NegationRule] | None = None
    ):
        self.delegate = delegate
        self.rules = tuple(rules) if rules is not None else None

    def provide_description(self, default: str) -> str:
        rules = self.rules if self.rules is not None else get_config().negation_rules()
        return negate_description(self.delegate.provide_description(default), rules)

    def on_pass(self) -> Status:
        return self.delegate.on_fail()

    def on_fail(
        self,
        description: str | None = None,
        comparison: ComparedValues | None = None,
        cause: BaseException | None = None,
    ) -> Status:
        return self.delegate.on_pass()

    def after_status_set(self, node: AssertionNode) -> None:
        self.delegate.after_status_set(node)

    def evaluate(self, tree: AssertionTree | AssertionGroup) -> None:
        self.delegate.evaluate(tree)

    def evaluate_all(self, trees: Iterable[AssertionTree]) -> None:
        self.delegate.evaluate_all(trees)

    def __repr__(self) -> str:
        return f"Negating({self.delegate!r})"


COLLECTING = Collecting()
THROWING = Throwing()
