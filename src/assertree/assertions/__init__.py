"""Leaf matchers built on the assertion engine, mixed into the fluent builder."""

from assertree.assertions.core import CoreAssertions
from assertree.assertions.iterable import IterableAssertions

__all__ = ["CoreAssertions", "IterableAssertions"]
