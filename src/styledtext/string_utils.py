"""A small facade for range translation, match enumeration and replacement on a string."""

import logging
from bisect import bisect_left, bisect_right
from collections.abc import Callable, Iterator

from .options import DEFAULT_OPTIONS, CompareOptions
from .search import iter_matches
from .text_range import TextRange, Utf16Range, grapheme_boundaries, index_to_utf16, utf16_length, utf16_to_index

logger = logging.getLogger(__name__)

MatchCallback = Callable[[str, TextRange], None]
ReplaceCallback = Callable[[str, TextRange], str]


class StringUtils:
    """
    Wraps a string and exposes grapheme-aware search helpers over it.

    Ranges handed out are ``TextRange`` objects that can slice the wrapped
    string directly; ``utf16_range`` translates them for UTF-16 based consumers.

    Usage example:
        >>> utils = StringUtils("Swift is swift")
        >>> [utils.value[r.as_slice()] for r in utils.matches("swift")]
        ['swift', 'Swift']
        >>> utils.replace_matches("swift", lambda _, __: "Objc").value
        'Objc is Objc'

    """

    def __init__(self, text: str) -> None:
        """Wrap ``text``."""
        self._text = text

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return f"StringUtils({self._text!r})"

    def __eq__(self, other: object) -> bool:
        """Compare by wrapped value."""
        if not isinstance(other, StringUtils):
            return NotImplemented
        return self._text == other._text

    __hash__ = None  # type: ignore[assignment]

    @property
    def value(self) -> str:
        """Return the wrapped string."""
        return self._text

    def utf16_range(self, text_range: TextRange | None = None) -> Utf16Range:
        """
        Translate a text range into UTF-16 location and length.

        Args:
            text_range: The range to translate. Defaults to the whole string.

        Raises:
            ValueError: If the range exceeds the string.

        """
        if text_range is None:
            return Utf16Range(0, utf16_length(self._text))
        if text_range.end > len(self._text):
            msg = f"Invalid range: end ({text_range.end}) exceeds text length ({len(self._text)})"
            raise ValueError(msg)
        location = index_to_utf16(self._text, text_range.start)
        return Utf16Range(location, utf16_length(self._text[text_range.as_slice()]))

    def range(self, utf16: Utf16Range | None = None) -> TextRange:
        """
        Translate a UTF-16 range into a text range aligned on grapheme clusters.

        A location beyond the end of the string falls back to the start of the
        string, and a length reaching beyond the end is clamped to the end. The
        lower bound is widened down and the upper bound up to the nearest
        cluster boundary.

        Args:
            utf16: The range to translate. Defaults to the whole string.

        """
        if utf16 is None:
            return TextRange.whole(self._text)

        boundaries = grapheme_boundaries(self._text)

        location = utf16.location
        lower = utf16_to_index(self._text, location)
        if lower is None:
            lower = location = 0
        lower = boundaries[bisect_right(boundaries, lower) - 1]

        upper_offset = location + utf16.length
        upper = utf16_to_index(self._text, upper_offset)
        if upper is None:
            upper = len(self._text)
        elif upper_offset > index_to_utf16(self._text, upper):
            # The offset fell inside a surrogate pair; take the whole code point.
            upper += 1
        upper = boundaries[bisect_left(boundaries, upper)]

        return TextRange(lower, upper)

    def matches(self, pattern: str, options: CompareOptions = DEFAULT_OPTIONS) -> Iterator[TextRange]:
        """
        Iterate over non-overlapping matches of ``pattern``.

        Matches come last-first when ``options`` contains ``BACKWARDS``.

        Raises:
            InvalidPatternError: If a regular expression pattern does not compile.

        """
        return iter_matches(self._text, pattern, options)

    def enumerate_matches(self, pattern: str, block: MatchCallback, options: CompareOptions = DEFAULT_OPTIONS) -> None:
        """
        Call ``block(pattern, range)`` for every match of ``pattern``.

        Args:
            pattern: The needle or regular expression to look for.
            block: Called once per match, in search order.
            options: How to compare. Defaults to a backwards, case- and diacritic-insensitive search.

        """
        for text_range in self.matches(pattern, options):
            block(pattern, text_range)

    def replace_matches(self, pattern: str, block: ReplaceCallback, options: CompareOptions = DEFAULT_OPTIONS) -> "StringUtils":
        """
        Replace every match of ``pattern`` with the string returned by ``block(pattern, range)``.

        The search always runs backwards: replacing the last match first leaves
        the ranges of all earlier matches valid in the copy being edited. The
        ranges handed to ``block`` refer to the original string.

        Returns:
            A new StringUtils wrapping the edited copy. This instance is unchanged.

        """
        result = self._text
        replaced = 0
        for text_range in self.matches(pattern, options | CompareOptions.BACKWARDS):
            result = result[: text_range.start] + block(pattern, text_range) + result[text_range.end :]
            replaced += 1
        logger.debug("Replaced %d match(es) of %r.", replaced, pattern)
        return StringUtils(result)
