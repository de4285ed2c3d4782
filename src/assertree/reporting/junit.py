from __future__ import annotations

from pathlib import Path
from typing import Iterable

from junitparser import Failure, JUnitXml, Skipped, TestCase, TestSuite

from assertree.nodes import AssertionTree
from assertree.reporting.text import describe, write_partial_to_string
from assertree.status import Failed


def build_junit(trees: Iterable[AssertionTree], suite_name: str = "assertree") -> JUnitXml:
    """One test suite per tree, one test case per top-level assertion."""
    xml = JUnitXml()

    for tree in trees:
        suite = TestSuite(f"{suite_name} / {describe(tree.root)}")

        for child in tree.children:
            case = TestCase(describe(child))
            case.classname = suite_name
            status = child.status
            if isinstance(status, Failed):
                failure = Failure(status.description or describe(child))
                failure.text = write_partial_to_string(child)
                case.result = failure
            elif not status.is_resolved:
                case.result = Skipped("not evaluated")
            suite.add_testcase(case)

        # Use append (not +=) to preserve suite attributes
        xml.append(suite)

    return xml


def write_junit(path: Path, trees: Iterable[AssertionTree], suite_name: str = "assertree") -> Path:
    """Write evaluated trees to a JUnit XML file, return path."""
    xml = build_junit(trees, suite_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path
