"""Assertion tree model: atomic leaves, compound groups and subject roots.

Nodes are created during the construction phase and evaluated later by an
:class:`~assertree.strategy.AssertionStrategy`. Every node remembers the
strategy that created it; status transitions are routed through that
strategy's ``on_pass``/``on_fail``/``after_status_set`` hooks.

A tree is owned by a single caller. Building or evaluating the same tree from
several threads at once is not supported.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from assertree.errors import StatusAlreadySetError
from assertree.status import PASSED, PENDING, ComparedValues, Failed, Passed, Status

if TYPE_CHECKING:
    from assertree.strategy import AssertionStrategy

logger = logging.getLogger("assertree.nodes")

_NO_ACTUAL = object()

AtomicPredicate = Callable[["AtomicAssertionNode", Any], None]
ResultsPredicate = Callable[["CompoundAssertionNode"], None]


class AssertionNode:
    def __init__(
        self,
        parent: AssertionGroup | None,
        description: str,
        subject: Any,
        expected: Any = None,
        strategy: AssertionStrategy | None = None,
    ):
        self.parent = parent
        self.description = description
        self.subject = subject
        self.expected = expected
        self.strategy = strategy

    @property
    def status(self) -> Status:
        return PENDING

    @property
    def rendered_description(self) -> str:
        """The description with ``%s`` replaced by the rendered subject."""
        from assertree.reporting.text import describe

        return describe(self)

    @property
    def id(self) -> tuple[int, ...]:
        """Position of this node as child indices from the root."""
        if self.parent is None:
            return ()
        index = next(i for i, child in enumerate(self.parent.children) if child is self)
        return self.parent.id + (index,)

    @property
    def root(self) -> AssertionNode:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def ancestors(self) -> list[AssertionNode]:
        """Nodes from the root down to (excluding) this one."""
        chain: list[AssertionNode] = []
        node = self.parent
        while node is not None:
            chain.append(node)
            node = node.parent
        return list(reversed(chain))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.description!r} {self.status!r}>"


class _SingleAssignmentStatus:
    """Pending -> Passed | Failed, exactly once, reported to the owning strategy."""

    _status: Status = PENDING

    @property
    def status(self) -> Status:
        return self._status

    def _set_status(self, status: Status) -> None:
        if self._status.is_resolved:
            raise StatusAlreadySetError(
                f"Status of {self.description!r} is already {type(self._status).__name__}"
            )
        self._status = status
        self.strategy.after_status_set(self)

    def pass_(self) -> None:
        self._set_status(self.strategy.on_pass())

    def fail(
        self,
        description: str | None = None,
        cause: BaseException | None = None,
        *,
        actual: Any = _NO_ACTUAL,
    ) -> None:
        """Mark this node failed.

        Passing ``actual`` attaches a :class:`ComparedValues` built from the
        node's expected value and ``actual``.
        """
        comparison = None
        if actual is not _NO_ACTUAL:
            comparison = ComparedValues(self.expected, actual)
        self._set_status(
            self.strategy.on_fail(description=description, comparison=comparison, cause=cause)
        )


class AtomicAssertionNode(_SingleAssignmentStatus, AssertionNode):
    def __init__(
        self,
        parent: AssertionGroup,
        description: str,
        subject: Any,
        assertion: AtomicPredicate,
        expected: Any = None,
        strategy: AssertionStrategy | None = None,
    ):
        super().__init__(parent, description, subject, expected, strategy)
        self.assertion = assertion

    def run(self) -> None:
        """Invoke the deferred predicate against this node's subject."""
        self.assertion(self, self.subject)
        if not self._status.is_resolved:
            logger.warning(f"Assertion {self.description!r} returned without passing or failing")


class AssertionGroup(AssertionNode):
    """A node with ordered children and read-only aggregate queries over them."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._children: list[AssertionNode] = []
        self._frozen = False

    @property
    def children(self) -> tuple[AssertionNode, ...]:
        return tuple(self._children)

    def append(self, node: AssertionNode) -> AssertionNode:
        if self._frozen:
            raise RuntimeError(f"Cannot add assertions to {self.description!r} after it was closed")
        self._children.append(node)
        return node

    def freeze(self) -> None:
        self._frozen = True

    @property
    def all_passed(self) -> bool:
        return all(isinstance(child.status, Passed) for child in self._children)

    @property
    def any_passed(self) -> bool:
        return any(isinstance(child.status, Passed) for child in self._children)

    @property
    def all_failed(self) -> bool:
        return all(isinstance(child.status, Failed) for child in self._children)

    @property
    def any_failed(self) -> bool:
        return any(isinstance(child.status, Failed) for child in self._children)


class CompoundAssertionNode(_SingleAssignmentStatus, AssertionGroup):
    """A group whose own outcome is decided by an aggregation predicate."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.results: ResultsPredicate | None = None

    def set_results(self, predicate: ResultsPredicate) -> None:
        self.freeze()
        self.results = predicate

    def run_results(self) -> None:
        """Run the aggregation predicate; every child must already be resolved."""
        pending = [child for child in self._children if not child.status.is_resolved]
        if pending:
            logger.warning(
                f"Compound assertion {self.description!r} has {len(pending)} unresolved children"
            )
            return
        if self.results is None:
            logger.warning(f"Compound assertion {self.description!r} has no results predicate")
            return
        self.results(self)
        if not self._status.is_resolved:
            logger.warning(f"Results of {self.description!r} neither passed nor failed")


class SubjectNode(AssertionGroup):
    """Groups the assertions made against one subject.

    The status is derived from the children rather than assigned, so a chain
    can keep appending to it after earlier links were evaluated. A failed
    child fails the subject even while siblings are still pending.
    """

    def __init__(
        self,
        parent: AssertionGroup | None,
        subject: Any,
        description: str = "Expect that %s:",
    ):
        super().__init__(parent, description, subject)

    @property
    def status(self) -> Status:
        statuses = [child.status for child in self._children]
        if any(isinstance(status, Failed) for status in statuses):
            return Failed()
        if not statuses or any(not status.is_resolved for status in statuses):
            return PENDING
        return PASSED


class AssertionTree:
    """Binds a subject value to the tree of assertions made against it."""

    def __init__(self, subject: Any):
        self.subject = subject
        self.root = SubjectNode(None, subject)

    @property
    def status(self) -> Status:
        return self.root.status

    @property
    def children(self) -> tuple[AssertionNode, ...]:
        return self.root.children

    def __repr__(self) -> str:
        return f"<AssertionTree {self.subject!r} {self.status!r}>"


def append_atomic(
    parent: AssertionGroup,
    description: str,
    expected: Any,
    assertion: AtomicPredicate,
    strategy: AssertionStrategy,
) -> AtomicAssertionNode:
    node = AtomicAssertionNode(
        parent, description, parent.subject, assertion, expected=expected, strategy=strategy
    )
    parent.append(node)
    return node


def append_compound(
    parent: AssertionGroup,
    description: str,
    expected: Any,
    strategy: AssertionStrategy,
) -> CompoundAssertionNode:
    node = CompoundAssertionNode(
        parent, description, parent.subject, expected=expected, strategy=strategy
    )
    parent.append(node)
    return node


def append_subject(parent: AssertionGroup, subject: Any, description: str = "Expect that %s:") -> SubjectNode:
    node = SubjectNode(parent, subject, description)
    parent.append(node)
    return node
