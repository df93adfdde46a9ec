"""Comparison options for text search."""

from enum import Flag, auto


class CompareOptions(Flag):
    """
    Flags controlling how a pattern is matched against text.

    Flags combine with ``|``. ``NONE`` is a case-sensitive, diacritic-sensitive,
    literal, forward search.
    """

    NONE = 0

    CASE_INSENSITIVE = auto()
    """Letters match regardless of case."""

    DIACRITIC_INSENSITIVE = auto()
    """Combining marks are ignored on both sides of the comparison."""

    BACKWARDS = auto()
    """Search from the end of the range towards its start."""

    REGULAR_EXPRESSION = auto()
    """Treat the pattern as a regular expression instead of a literal."""

    ANCHORED = auto()
    """Only accept a match touching the start of the range (the end when searching backwards)."""


DEFAULT_OPTIONS = CompareOptions.BACKWARDS | CompareOptions.CASE_INSENSITIVE | CompareOptions.DIACRITIC_INSENSITIVE
"""Options used by enumeration and replacement when none are given."""
