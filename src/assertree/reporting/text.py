"""Nested outline report of an assertion tree.

Literal test expectations compare against this output, so the glyphs and the
two-space indentation are fixed::

    ▼ Expect that [2, 3]:
      ▼ all elements of [2, 3] match:
        ▼ Expect that 2:
          ✓ is even
        ▼ Expect that 3:
          ✗ is even
"""

from __future__ import annotations

from typing import Any, Iterable

from assertree.config import get_config
from assertree.nodes import AssertionGroup, AssertionNode, AssertionTree
from assertree.status import Failed, Passed

GROUP = "▼"
PASSED = "✓"
FAILED = "✗"
PENDING = "…"
INDENT = "  "


def format_value(value: Any) -> str:
    text = repr(value)
    limit = get_config().max_value_length
    if limit is not None and len(text) > limit:
        text = text[:limit] + "…"
    return text


def describe(node: AssertionNode) -> str:
    """The node description with ``%s`` replaced by its subject."""
    return node.description.replace("%s", format_value(node.subject), 1)


def _failure_detail(status: Failed) -> str | None:
    if status.description is not None:
        if status.comparison is not None:
            return status.description.replace(
                "%s", format_value(status.comparison.actual), 1
            )
        return status.description
    if status.comparison is not None:
        return f"found {format_value(status.comparison.actual)}"
    return None


def _line(node: AssertionNode) -> str:
    if isinstance(node, AssertionGroup):
        return f"{GROUP} {describe(node)}"
    status = node.status
    if isinstance(status, Passed):
        return f"{PASSED} {describe(node)}"
    if isinstance(status, Failed):
        detail = _failure_detail(status)
        if detail is None:
            return f"{FAILED} {describe(node)}"
        return f"{FAILED} {describe(node)} : {detail}"
    return f"{PENDING} {describe(node)}"


def _write(node: AssertionNode, depth: int, lines: list[str]) -> None:
    lines.append(INDENT * depth + _line(node))
    if isinstance(node, AssertionGroup):
        for child in node.children:
            _write(child, depth + 1, lines)


def write_to_string(target: AssertionTree | AssertionNode) -> str:
    """Render a whole tree, or one node with everything beneath it."""
    node = target.root if isinstance(target, AssertionTree) else target
    lines: list[str] = []
    _write(node, 0, lines)
    return "\n".join(lines)


def write_partial_to_string(node: AssertionNode) -> str:
    """Render the ancestor chain of ``node`` followed by ``node``'s own subtree."""
    ancestors = node.ancestors
    lines = [INDENT * depth + _line(ancestor) for depth, ancestor in enumerate(ancestors)]
    _write(node, len(ancestors), lines)
    return "\n".join(lines)


def write_trees_to_string(trees: Iterable[AssertionTree]) -> str:
    return "\n".join(write_to_string(tree) for tree in trees)
