"""Outcome of a single assertion node."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ComparedValues:
    """Expected/actual pair attached to a failure produced by a value comparison."""

    expected: Any
    actual: Any


@dataclass(frozen=True)
class Status:
    @property
    def is_resolved(self) -> bool:
        return not isinstance(self, Pending)


@dataclass(frozen=True)
class Pending(Status):
    pass


@dataclass(frozen=True)
class Passed(Status):
    pass


@dataclass(frozen=True)
class Failed(Status):
    """A failed assertion.

    Attributes:
        description: Optional detail about the failure. May contain a ``%s``
            placeholder that reports substitute with the actual value.
        comparison: Expected/actual values when the failure came from a comparison.
        cause: Exception that triggered the failure, if any.
    """

    description: str | None = None
    comparison: ComparedValues | None = None
    cause: BaseException | None = None


PENDING = Pending()
PASSED = Passed()
