"""Errors raised when a strategy surfaces assertion failures."""

from __future__ import annotations

from typing import Any, Iterable

from assertree.status import Failed

_UNDEFINED = object()


class StatusAlreadySetError(RuntimeError):
    """A node's status was set a second time."""


class AssertionFailedError(AssertionError):
    """A single assertion failure, optionally carrying expected/actual values."""

    def __init__(
        self,
        message: str,
        expected: Any = _UNDEFINED,
        actual: Any = _UNDEFINED,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.is_expected_defined = expected is not _UNDEFINED
        self.is_actual_defined = actual is not _UNDEFINED
        self.expected = expected if self.is_expected_defined else None
        self.actual = actual if self.is_actual_defined else None
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message


class CompoundAssertionFailure(AssertionFailedError):
    """Several assertion failures bundled into one raised error."""

    def __init__(self, message: str, failures: Iterable[AssertionFailedError]):
        super().__init__(message)
        self.failures = list(failures)


def create_assertion_failed_error(
    message: str, failed: Failed | None
) -> AssertionFailedError:
    if failed is not None and failed.comparison is not None:
        return AssertionFailedError(
            message,
            failed.comparison.expected,
            failed.comparison.actual,
            failed.cause,
        )
    return AssertionFailedError(message, cause=failed.cause if failed else None)
