"""Matchers for iterable subjects.

These compose child assertions and aggregate them with a ``results``
predicate. Iterable subjects are read more than once, so pass a list,
tuple or set rather than a one-shot generator.
"""

from __future__ import annotations

from typing import Any, Callable

from assertree.reporting.text import format_value


def _pass_if(condition: bool, node) -> None:
    if condition:
        node.pass_()
    else:
        node.fail()


def _all_passed(node) -> None:
    _pass_if(node.all_passed, node)


def _remove(items: list, element: Any) -> bool:
    try:
        items.remove(element)
    except ValueError:
        return False
    return True


def _passes(node, subject) -> None:
    node.pass_()


def _fails(node, subject) -> None:
    node.fail()


def _contains(element: Any):
    def assertion(node, subject):
        _pass_if(element in subject, node)

    return assertion


def _at_index(original: list, index: int, element: Any):
    def assertion(node, subject):
        if index >= len(original):
            node.fail(f"only {len(original)} elements present")
        elif original[index] == element:
            node.pass_()
        else:
            node.fail("found %s", actual=original[index])

    def block(builder, subject):
        builder.assert_that(f"…at index {index}", assertion, element)

    return block


def _no_further_elements(remaining: list):
    def assertion(node, subject):
        if not remaining:
            node.pass_()
        else:
            node.fail("found %s", actual=list(remaining))

    return assertion


def _first(subject):
    return list(subject)[0]


def _last(subject):
    return list(subject)[-1]


def _single(subject):
    return next(iter(subject), None)


class IterableAssertions:
    def all(self, predicate: Callable):
        """Asserts that every element of the subject passes ``predicate``."""

        def block(builder, subject):
            for element in subject:
                builder.expect(element, predicate)

        return self.compose("all elements of %s match:", block).results(_all_passed)

    def any(self, predicate: Callable):
        """Asserts that at least one element of the subject passes ``predicate``.

        Fails for an empty subject.
        """

        def block(builder, subject):
            for element in subject:
                builder.expect(element, predicate)

        def results(node):
            _pass_if(node.any_passed, node)

        return self.compose("at least one element of %s matches:", block).results(results)

    def none(self, predicate: Callable):
        """Asserts that no element of the subject passes ``predicate``."""

        def block(builder, subject):
            for element in subject:
                builder.expect(element, predicate)

        def results(node):
            _pass_if(node.all_failed, node)

        return self.compose("no elements of %s match:", block).results(results)

    def contains(self, *elements: Any):
        """Asserts that all ``elements`` are present in the subject.

        Order, repetition and further elements are not checked. Always fails
        when no elements are given.
        """
        description = f"%s contains the elements {format_value(list(elements))}"
        if not elements:

            def nothing_to_find(node, subject):
                node.fail("no elements were specified")

            return self.assert_that(description, nothing_to_find)

        def block(builder, subject):
            for element in elements:
                builder.assert_that(f"contains {format_value(element)}", _contains(element), element)

        return self.compose(description, block, list(elements)).results(_all_passed)

    def contains_exactly(self, *elements: Any):
        """Asserts that ``elements`` and no others are present, in this order."""

        def block(builder, subject):
            original = list(subject)
            remaining = list(subject)
            for index, element in enumerate(elements):
                description = f"contains {format_value(element)}"
                if _remove(remaining, element):
                    builder.compose(
                        description, _at_index(original, index, element), element
                    ).results(_all_passed)
                else:
                    builder.assert_that(description, _fails, element)
            builder.assert_that("contains no further elements", _no_further_elements(remaining), [])

        return self.compose(
            f"%s contains exactly the elements {format_value(list(elements))}",
            block,
            list(elements),
        ).results(_all_passed)

    def contains_exactly_in_any_order(self, *elements: Any):
        """Asserts that ``elements`` and no others are present, in any order.

        Cardinality matters: each requested element consumes one occurrence.
        """

        def block(builder, subject):
            remaining = list(subject)
            for element in elements:
                found = _remove(remaining, element)
                builder.assert_that(
                    f"contains {format_value(element)}", _passes if found else _fails, element
                )
            builder.assert_that("contains no further elements", _no_further_elements(remaining), [])

        return self.compose(
            f"%s contains exactly the elements {format_value(list(elements))} in any order",
            block,
            list(elements),
        ).results(_all_passed)

    def first(self, predicate: Callable | None = None):
        """Maps to the first element, or the first one ``predicate`` accepts.

        The element is taken while the chain is built: an empty subject raises
        IndexError and a predicate matching nothing raises ValueError.
        """
        if predicate is None:
            return self.get(_first, "first element")

        def first_matching(subject):
            for element in subject:
                if predicate(element):
                    return element
            raise ValueError(f"No element of {format_value(subject)} matches the predicate")

        return self.get(first_matching, "first matching element")

    def last(self):
        """Maps to the last element. An empty subject raises IndexError."""
        return self.get(_last, "last element")

    def map(self, function: Callable):
        """Maps every element through ``function`` into a list."""
        return self.get(lambda subject: [function(element) for element in subject], "mapped elements")

    def flat_map(self, function: Callable):
        """Maps every element to an iterable and flattens the results into one list."""
        return self.get(
            lambda subject: [item for element in subject for item in function(element)],
            "flat mapped elements",
        )

    def single(self):
        """Asserts the subject has exactly one element and maps to it."""

        def assertion(node, subject):
            _pass_if(len(list(subject)) == 1, node)

        return self.assert_that("has only one element", assertion).get(_single, "single element")
