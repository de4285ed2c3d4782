"""Rendering evaluated assertion trees."""

from assertree.reporting.text import (
    format_value,
    write_partial_to_string,
    write_to_string,
    write_trees_to_string,
)

__all__ = [
    "format_value",
    "write_partial_to_string",
    "write_to_string",
    "write_trees_to_string",
]
