"""
Text range types and offset arithmetic.

Two coordinate systems meet in this module:

- ``TextRange``: half-open ranges of Python string indices (code points). Ranges
  produced by the search layer always start and end on grapheme-cluster
  boundaries, so slicing a string with them never splits a user-perceived
  character.
- ``Utf16Range``: location/length pairs counted in UTF-16 code units, the shape
  used by rich-text systems that index their storage in UTF-16.

Usage example:
    >>> text = "a\U0001f600b"
    >>> utf16_length(text)
    4
    >>> index_to_utf16(text, 2)
    3
    >>> utf16_to_index(text, 3)
    2
"""

from dataclasses import dataclass

import regex

_GRAPHEME_PATTERN = regex.compile(r"\X")
_ASTRAL_START = 0x10000


@dataclass(frozen=True)
class TextRange:
    """
    A half-open range ``[start, end)`` of string indices.

    Attributes:
        start: First index covered by the range.
        end: Index one past the last covered index.

    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate the bounds."""
        if self.start < 0:
            msg = f"Invalid range: start ({self.start}) cannot be less than 0"
            raise ValueError(msg)
        if self.start > self.end:
            msg = f"Invalid range: start ({self.start}) cannot be greater than end ({self.end})"
            raise ValueError(msg)

    @classmethod
    def whole(cls, text: str) -> "TextRange":
        """Return the range covering all of ``text``."""
        return cls(0, len(text))

    @property
    def length(self) -> int:
        """Return the number of indices covered."""
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        """Check if the range covers nothing."""
        return self.start == self.end

    def as_slice(self) -> slice:
        """Return a slice object selecting this range from a string."""
        return slice(self.start, self.end)


@dataclass(frozen=True)
class Utf16Range:
    """
    A location/length pair counted in UTF-16 code units.

    Attributes:
        location: Offset of the first code unit.
        length: Number of code units covered.

    """

    location: int
    length: int

    def __post_init__(self) -> None:
        """Validate that location and length are non-negative."""
        if self.location < 0:
            msg = f"Invalid UTF-16 range: location ({self.location}) cannot be less than 0"
            raise ValueError(msg)
        if self.length < 0:
            msg = f"Invalid UTF-16 range: length ({self.length}) cannot be less than 0"
            raise ValueError(msg)

    @property
    def end(self) -> int:
        """Return the offset one past the last covered code unit."""
        return self.location + self.length


def utf16_length(text: str) -> int:
    """
    Count the UTF-16 code units needed to encode ``text``.

    Examples:
        >>> utf16_length("abc")
        3
        >>> utf16_length("\U0001f600")
        2

    """
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def grapheme_boundaries(text: str) -> list[int]:
    """
    Return the indices at which grapheme clusters start, followed by ``len(text)``.

    Clusters are extended grapheme clusters as matched by ``\\X``.

    Examples:
        >>> grapheme_boundaries("ab")
        [0, 1, 2]
        >>> grapheme_boundaries("")
        [0]

    """
    boundaries = [match.start() for match in _GRAPHEME_PATTERN.finditer(text)]
    boundaries.append(len(text))
    return boundaries


def index_to_utf16(text: str, index: int) -> int:
    """
    Convert a string index into a UTF-16 offset.

    Raises:
        ValueError: If ``index`` lies outside ``[0, len(text)]``.

    """
    if index < 0 or index > len(text):
        msg = f"Index ({index}) is outside the text bounds (0..{len(text)})"
        raise ValueError(msg)
    return utf16_length(text[:index])


def utf16_to_index(text: str, offset: int) -> int | None:
    """
    Convert a UTF-16 offset into a string index.

    An offset that falls between the two code units of a surrogate pair maps to
    the index of that code point.

    Returns:
        The string index, or None if ``offset`` lies beyond the end of the text.

    Raises:
        ValueError: If ``offset`` is negative.

    """
    if offset < 0:
        msg = f"UTF-16 offset ({offset}) cannot be less than 0"
        raise ValueError(msg)

    units = 0
    for index, char in enumerate(text):
        if units >= offset:
            return index
        width = 2 if ord(char) >= _ASTRAL_START else 1
        if units + width > offset:
            return index
        units += width

    return len(text) if units >= offset else None
