from __future__ import annotations

import pytest
from junitparser import Failure, JUnitXml, Skipped

from assertree import collect
from assertree.config import AssertreeConfig, configure
from assertree.nodes import AssertionTree
from assertree.reporting import (
    format_value,
    write_partial_to_string,
    write_to_string,
    write_trees_to_string,
)
from assertree.reporting.junit import build_junit, write_junit
from assertree.strategy import COLLECTING


def _is_even(node, subject):
    if subject % 2 == 0:
        node.pass_()
    else:
        node.fail(actual=subject)


def is_even(builder):
    return builder.assert_that("is even", _is_even)


# ---------------------------------------------------------------------------
# Text report
# ---------------------------------------------------------------------------


def test_format_value_uses_repr():
    assert format_value("a") == "'a'"
    assert format_value([1, "b"]) == "[1, 'b']"
    assert format_value(None) == "None"


def test_format_value_truncates_when_configured():
    configure(AssertreeConfig(max_value_length=4))
    assert format_value("abcdefgh") == "'abc…"
    assert format_value(12) == "12"


def test_pending_atomic_rendered_with_ellipsis():
    tree = AssertionTree(1)
    COLLECTING.append_atomic(tree.root, "not yet", None, _is_even)
    assert write_to_string(tree) == "▼ Expect that 1:\n  … not yet"


def test_failure_description_substitutes_actual():
    tree = AssertionTree([1])
    COLLECTING.append_atomic(tree.root, "is empty", None, lambda n, s: n.fail("found %s", actual=s))
    COLLECTING.evaluate(tree)
    assert write_to_string(tree) == "▼ Expect that [1]:\n  ✗ is empty : found [1]"


def test_failure_description_without_comparison():
    tree = AssertionTree(1)
    COLLECTING.append_atomic(tree.root, "is valid", None, lambda n, s: n.fail("checksum mismatch"))
    COLLECTING.evaluate(tree)
    assert write_to_string(tree) == "▼ Expect that 1:\n  ✗ is valid : checksum mismatch"


def test_nested_indentation():
    tree = collect([1, 2], lambda it: it.all(is_even))
    assert write_to_string(tree) == (
        "▼ Expect that [1, 2]:\n"
        "  ▼ all elements of [1, 2] match:\n"
        "    ▼ Expect that 1:\n"
        "      ✗ is even : found 1\n"
        "    ▼ Expect that 2:\n"
        "      ✓ is even"
    )


def test_render_single_node_subtree():
    tree = collect([1, 2], lambda it: it.all(is_even))
    element = tree.children[0].children[0]
    assert write_to_string(element) == "▼ Expect that 1:\n  ✗ is even : found 1"


def test_partial_render_shows_ancestor_chain_only():
    tree = collect([1, 2], lambda it: it.all(is_even))
    failing = tree.children[0].children[0].children[0]
    assert write_partial_to_string(failing) == (
        "▼ Expect that [1, 2]:\n"
        "  ▼ all elements of [1, 2] match:\n"
        "    ▼ Expect that 1:\n"
        "      ✗ is even : found 1"
    )


def test_render_is_stable():
    tree = collect([1, 2], lambda it: it.all(is_even))
    assert write_to_string(tree) == write_to_string(tree)
    COLLECTING.evaluate(tree)
    assert write_to_string(tree) == write_to_string(tree)


def test_write_trees_joins_reports():
    trees = [collect(n, is_even) for n in (2, 3)]
    assert write_trees_to_string(trees) == (
        "▼ Expect that 2:\n  ✓ is even\n▼ Expect that 3:\n  ✗ is even : found 3"
    )


# ---------------------------------------------------------------------------
# JUnit export
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_trees() -> list[AssertionTree]:
    def block(it):
        it.is_equal_to(3)
        it.is_equal_to(4)
        is_even(it)

    return [collect(2, block), collect(3, lambda it: it.is_equal_to(3))]


def test_write_junit_returns_path(tmp_path, sample_trees):
    path = write_junit(tmp_path / "reports" / "junit.xml", sample_trees)
    assert path == tmp_path / "reports" / "junit.xml"
    assert path.exists()


def test_junit_one_suite_per_tree(tmp_path, sample_trees):
    path = write_junit(tmp_path / "junit.xml", sample_trees, suite_name="numbers")
    xml = JUnitXml.fromfile(str(path))
    names = [suite.name for suite in xml]
    assert names == ["numbers / Expect that 2:", "numbers / Expect that 3:"]


def test_junit_case_per_top_level_assertion(tmp_path, sample_trees):
    path = write_junit(tmp_path / "junit.xml", sample_trees)
    xml = JUnitXml.fromfile(str(path))
    suite = next(iter(xml))
    assert suite.tests == 3
    assert [case.name for case in suite] == ["is equal to 3", "is equal to 4", "is even"]
    for case in suite:
        assert case.classname == "assertree"


def test_junit_failure_recorded(tmp_path, sample_trees):
    path = write_junit(tmp_path / "junit.xml", sample_trees)
    xml = JUnitXml.fromfile(str(path))
    suite = next(iter(xml))
    assert suite.failures == 2
    failing_case = next(c for c in suite if c.name == "is equal to 4")
    failure = next(r for r in failing_case.result if isinstance(r, Failure))
    assert failure.message == "is equal to 4"
    assert "✗ is equal to 4 : found 2" in failure.text


def test_junit_passing_suite_no_failures(sample_trees):
    xml = build_junit(sample_trees)
    suite = list(xml)[1]
    assert suite.failures == 0


def test_junit_pending_assertion_skipped():
    tree = AssertionTree(5)
    COLLECTING.append_atomic(tree.root, "not evaluated", None, _is_even)
    suite = next(iter(build_junit([tree])))
    case = next(iter(suite))
    assert any(isinstance(r, Skipped) for r in case.result)
