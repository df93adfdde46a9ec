"""
A minimal attributed-text container indexed in UTF-16 code units.

The container stores a string plus a list of attribute runs. Runs are kept
contiguous (together they cover the whole string), sorted, and coalesced:
two neighbouring runs never carry equal attribute dictionaries.

Usage example:
    >>> text = AttributedText("Hello World")
    >>> text.add_attribute(AttributeKey.KERN, 1.5, Utf16Range(0, 5))
    >>> text.attribute(AttributeKey.KERN, 2)
    1.5
    >>> [(run.start, run.end) for run in text.runs()]
    [(0, 5), (5, 11)]
"""

from bisect import bisect_right
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .text_range import Utf16Range, utf16_length, utf16_to_index

_MISSING = object()


class AttributeKey(str, Enum):
    """Names of the attributes understood by the styling layer."""

    FONT = "font"
    FOREGROUND_COLOR = "foreground_color"
    BACKGROUND_COLOR = "background_color"
    PARAGRAPH_STYLE = "paragraph_style"
    STRIKETHROUGH_STYLE = "strikethrough_style"
    STRIKETHROUGH_COLOR = "strikethrough_color"
    UNDERLINE_STYLE = "underline_style"
    UNDERLINE_COLOR = "underline_color"
    WRITING_DIRECTION = "writing_direction"
    BASELINE_OFFSET = "baseline_offset"
    LINK = "link"
    ATTACHMENT = "attachment"
    KERN = "kern"


@dataclass
class AttributeRun:
    """
    A maximal stretch of text sharing the same attributes.

    Attributes:
        start: UTF-16 offset of the first code unit.
        end: UTF-16 offset one past the last code unit.
        attributes: Attribute values keyed by attribute name.

    """

    start: int
    end: int
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def range(self) -> Utf16Range:
        """Return the run's extent as a UTF-16 range."""
        return Utf16Range(self.start, self.end - self.start)


class AttributedText:
    """A string with attributes attached to UTF-16 ranges of it."""

    def __init__(self, string: str = "", attributes: Mapping[str, Any] | None = None) -> None:
        """
        Create attributed text.

        Args:
            string: The characters.
            attributes: Attributes applied to the whole string.

        """
        self._string = string
        self._length = utf16_length(string)
        self._runs: list[AttributeRun] = []
        if self._length:
            self._runs.append(AttributeRun(0, self._length, dict(attributes or {})))

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return f"AttributedText({self._string!r}, runs={len(self._runs)})"

    def __str__(self) -> str:
        """Return the plain string."""
        return self._string

    def __len__(self) -> int:
        """Return the length in UTF-16 code units."""
        return self._length

    def __eq__(self, other: object) -> bool:
        """Compare strings and attribute runs."""
        if not isinstance(other, AttributedText):
            return NotImplemented
        return self._string == other._string and self._runs == other._runs

    __hash__ = None  # type: ignore[assignment]

    @property
    def string(self) -> str:
        """Return the plain string."""
        return self._string

    @property
    def length(self) -> int:
        """Return the length in UTF-16 code units."""
        return self._length

    def copy(self) -> "AttributedText":
        """Return a copy whose runs can be changed independently."""
        duplicate = AttributedText(self._string)
        duplicate._runs = [AttributeRun(run.start, run.end, dict(run.attributes)) for run in self._runs]
        return duplicate

    # --- Reading ---

    def attribute(self, key: str, location: int) -> Any:  # noqa: ANN401
        """
        Return the value of ``key`` at ``location``, or None if it is not set.

        Raises:
            IndexError: If ``location`` is outside ``[0, length)``.

        """
        return self._runs[self._run_index_at(location)].attributes.get(key)

    def attribute_with_range(self, key: str, location: int) -> tuple[Any, Utf16Range]:
        """
        Return the value of ``key`` at ``location`` and the longest range around it with the same value.

        Raises:
            IndexError: If ``location`` is outside ``[0, length)``.

        """
        index = self._run_index_at(location)
        value = self._runs[index].attributes.get(key, _MISSING)

        first = index
        while first > 0 and self._runs[first - 1].attributes.get(key, _MISSING) == value:
            first -= 1
        last = index
        while last + 1 < len(self._runs) and self._runs[last + 1].attributes.get(key, _MISSING) == value:
            last += 1

        start, end = self._runs[first].start, self._runs[last].end
        return (None if value is _MISSING else value), Utf16Range(start, end - start)

    def attributes(self, location: int) -> dict[str, Any]:
        """
        Return a copy of all attributes at ``location``.

        Raises:
            IndexError: If ``location`` is outside ``[0, length)``.

        """
        return dict(self._runs[self._run_index_at(location)].attributes)

    def runs(self) -> Iterator[AttributeRun]:
        """Iterate over copies of the attribute runs, in order."""
        for run in self._runs:
            yield AttributeRun(run.start, run.end, dict(run.attributes))

    def substring(self, text_range: Utf16Range) -> str:
        """
        Return the characters covered by ``text_range``.

        Raises:
            IndexError: If the range exceeds the text.

        """
        self._check_range(text_range)
        start = utf16_to_index(self._string, text_range.location)
        end = utf16_to_index(self._string, text_range.end)
        return self._string[start:end]

    # --- Editing ---

    def add_attribute(self, key: str, value: Any, text_range: Utf16Range) -> None:  # noqa: ANN401
        """Set ``key`` to ``value`` over ``text_range``, keeping other attributes."""
        self._edit(text_range, lambda attributes: attributes.__setitem__(key, value))

    def add_attributes(self, attributes: Mapping[str, Any], text_range: Utf16Range) -> None:
        """Set every attribute of ``attributes`` over ``text_range``, keeping others."""
        self._edit(text_range, lambda current: current.update(attributes))

    def set_attributes(self, attributes: Mapping[str, Any], text_range: Utf16Range) -> None:
        """Replace all attributes over ``text_range`` with ``attributes``."""

        def _replace(current: dict[str, Any]) -> None:
            current.clear()
            current.update(attributes)

        self._edit(text_range, _replace)

    def remove_attribute(self, key: str, text_range: Utf16Range) -> None:
        """Remove ``key`` over ``text_range``."""
        self._edit(text_range, lambda attributes: attributes.pop(key, None))

    # --- Internals ---

    def _check_range(self, text_range: Utf16Range) -> None:
        """Raise IndexError if ``text_range`` reaches past the end."""
        if text_range.end > self._length:
            msg = f"Range {text_range.location}..{text_range.end} is out of bounds for length {self._length}"
            raise IndexError(msg)

    def _run_index_at(self, location: int) -> int:
        """Return the index of the run containing ``location``."""
        if not 0 <= location < self._length:
            msg = f"Location {location} is out of bounds for length {self._length}"
            raise IndexError(msg)
        return bisect_right([run.start for run in self._runs], location) - 1

    def _split(self, offset: int) -> int:
        """Make ``offset`` a run boundary and return the index of the run starting there."""
        index = bisect_right([run.start for run in self._runs], offset) - 1
        run = self._runs[index]
        if offset == run.start:
            return index
        if offset >= run.end:
            return index + 1
        self._runs.insert(index + 1, AttributeRun(offset, run.end, dict(run.attributes)))
        run.end = offset
        return index + 1

    def _edit(self, text_range: Utf16Range, edit: Callable[[dict[str, Any]], object]) -> None:
        """Apply ``edit`` to the attributes of every run inside ``text_range``."""
        self._check_range(text_range)
        if text_range.length == 0:
            return
        first = self._split(text_range.location)
        last = self._split(text_range.end)
        for run in self._runs[first:last]:
            edit(run.attributes)
        self._coalesce()

    def _coalesce(self) -> None:
        """Merge neighbouring runs with equal attributes."""
        merged: list[AttributeRun] = [self._runs[0]]
        for run in self._runs[1:]:
            if run.attributes == merged[-1].attributes:
                merged[-1].end = run.end
            else:
                merged.append(run)
        self._runs = merged
