"""Matchers that apply to any subject."""

from __future__ import annotations

from typing import Any

from assertree.reporting.text import format_value


class CoreAssertions:
    def is_equal_to(self, expected: Any):
        def assertion(node, subject):
            if subject == expected:
                node.pass_()
            else:
                node.fail(actual=subject)

        return self.assert_that(f"is equal to {format_value(expected)}", assertion, expected)

    def is_not_equal_to(self, expected: Any):
        def assertion(node, subject):
            if subject != expected:
                node.pass_()
            else:
                node.fail()

        return self.assert_that(f"is not equal to {format_value(expected)}", assertion, expected)

    def is_none(self):
        def assertion(node, subject):
            if subject is None:
                node.pass_()
            else:
                node.fail(actual=subject)

        return self.assert_that("is None", assertion)

    def is_not_none(self):
        def assertion(node, subject):
            if subject is not None:
                node.pass_()
            else:
                node.fail()

        return self.assert_that("is not None", assertion)

    def is_a(self, expected_type: type):
        def assertion(node, subject):
            if isinstance(subject, expected_type):
                node.pass_()
            else:
                node.fail("found %s", actual=type(subject))

        return self.assert_that(
            f"is an instance of {expected_type.__name__}", assertion, expected_type
        )

    def is_true(self):
        def assertion(node, subject):
            if subject is True:
                node.pass_()
            else:
                node.fail(actual=subject)

        return self.assert_that("is true", assertion, True)

    def is_false(self):
        def assertion(node, subject):
            if subject is False:
                node.pass_()
            else:
                node.fail(actual=subject)

        return self.assert_that("is false", assertion, False)
