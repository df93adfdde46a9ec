"""
Grapheme-aware pattern search.

The matcher never runs on the raw text. It runs on a ``SearchView``: the text cut
into grapheme clusters, each cluster optionally folded (diacritics removed),
and concatenated again. The view remembers where every cluster starts in both
the original and the folded string, so a match found in the folded string can
be translated back, and a match that would split a cluster can be rejected.

Design Goals:
- A match always covers whole grapheme clusters of the original text.
- Restricting a search to a sub-range behaves as if that sub-range were the
  whole string (anchors and look-around cannot see past it).
- Enumeration shrinks the remaining range after every hit, so matches never
  overlap and come out in search order.
"""

import logging
import unicodedata
from bisect import bisect_left, bisect_right
from collections.abc import Iterator
from dataclasses import dataclass, field
from functools import lru_cache

import regex

from .options import CompareOptions
from .text_range import TextRange, grapheme_boundaries

logger = logging.getLogger(__name__)


class InvalidPatternError(ValueError):
    """Raised when a regular expression pattern cannot be compiled."""


def fold_diacritics(text: str) -> str:
    """
    Remove combining marks from ``text`` after canonical decomposition.

    Examples:
        >>> fold_diacritics("Crème brûlée")
        'Creme brulee'

    """
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def fold_clusters(text: str) -> list[str]:
    """
    Split ``text`` into grapheme clusters and fold each one.

    A cluster made only of marks folds to nothing; it is kept as is so it stays
    addressable. Needles and searched text are folded the same way.
    """
    return [fold_diacritics(cluster) or cluster for cluster in regex.findall(r"\X", text)]


@lru_cache(maxsize=128)
def compile_pattern(pattern: str, options: CompareOptions) -> regex.Pattern:
    """
    Compile ``pattern`` for use against a ``SearchView`` built with the same options.

    With ``DIACRITIC_INSENSITIVE`` the pattern source is folded like the text,
    before it is parsed. Escapes are not expanded first, so ``\\u00e9`` still
    means the accented letter and never matches folded text. Accented characters
    in a class are folded too: ``[à-ÿ]`` becomes ``[a-y]``.

    Raises:
        InvalidPatternError: If a regular expression pattern does not compile.

    """
    source = pattern
    if CompareOptions.DIACRITIC_INSENSITIVE in options:
        source = "".join(fold_clusters(source))
    if CompareOptions.REGULAR_EXPRESSION not in options:
        source = regex.escape(source)

    flags = regex.V0
    if CompareOptions.CASE_INSENSITIVE in options:
        flags |= regex.IGNORECASE
    if CompareOptions.BACKWARDS in options:
        flags |= regex.REVERSE

    try:
        return regex.compile(source, flags)
    except regex.error as e:
        msg = f"Invalid regex pattern '{pattern}': {e}"
        raise InvalidPatternError(msg) from e


@dataclass
class SearchView:
    """
    The text as seen by the matcher.

    Attributes:
        text: The original text.
        boundaries: Cluster start indices in ``text``, followed by ``len(text)``.
        folded: The concatenation of all (possibly folded) clusters.
        folded_boundaries: Cluster start indices in ``folded``, followed by ``len(folded)``.

    """

    text: str
    boundaries: list[int]
    folded: str
    folded_boundaries: list[int]
    _cluster_at: dict[int, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Index the folded boundaries for constant-time alignment checks."""
        self._cluster_at = {offset: cluster for cluster, offset in enumerate(self.folded_boundaries)}

    @classmethod
    def build(cls, text: str, *, diacritic_insensitive: bool) -> "SearchView":
        """Cut ``text`` into clusters, folding each one if requested."""
        boundaries = grapheme_boundaries(text)
        if not diacritic_insensitive:
            return cls(text, boundaries, text, boundaries)

        parts: list[str] = []
        folded_boundaries: list[int] = []
        offset = 0
        for folded in fold_clusters(text):
            folded_boundaries.append(offset)
            parts.append(folded)
            offset += len(folded)
        folded_boundaries.append(offset)
        return cls(text, boundaries, "".join(parts), folded_boundaries)

    @property
    def cluster_count(self) -> int:
        """Return the number of grapheme clusters."""
        return len(self.boundaries) - 1

    def cluster_at(self, folded_offset: int) -> int | None:
        """Return the cluster starting at ``folded_offset``, or None if the offset splits a cluster."""
        return self._cluster_at.get(folded_offset)

    def cluster_span(self, within: TextRange | None) -> tuple[int, int]:
        """Return the clusters covering ``within``, widened outwards to cluster boundaries."""
        if within is None:
            return 0, self.cluster_count
        if within.end > len(self.text):
            msg = f"Invalid range: end ({within.end}) exceeds text length ({len(self.text)})"
            raise ValueError(msg)
        first = bisect_right(self.boundaries, within.start) - 1
        last = bisect_left(self.boundaries, within.end)
        return first, last

    def text_range(self, first: int, last: int) -> TextRange:
        """Return the text range covered by clusters ``[first, last)``."""
        return TextRange(self.boundaries[first], self.boundaries[last])

    def find(self, compiled: regex.Pattern, options: CompareOptions, first: int, last: int) -> tuple[int, int] | None:
        """
        Find one match of ``compiled`` inside clusters ``[first, last)``.

        Candidates are tried in search order (overlapping candidates included)
        until one is non-empty and aligned on cluster boundaries.

        Returns:
            The ``(first, last)`` cluster span of the match, or None.

        """
        segment_start = self.folded_boundaries[first]
        segment = self.folded[segment_start : self.folded_boundaries[last]]
        backwards = CompareOptions.BACKWARDS in options
        anchored = CompareOptions.ANCHORED in options

        for match in compiled.finditer(segment, overlapped=True):
            start, end = match.span()
            if start == end:
                continue
            if anchored and (end != len(segment) if backwards else start != 0):
                continue
            match_first = self.cluster_at(segment_start + start)
            match_last = self.cluster_at(segment_start + end)
            if match_first is None or match_last is None:
                continue
            return match_first, match_last
        return None


def find_match(
    text: str,
    pattern: str,
    options: CompareOptions = CompareOptions.NONE,
    within: TextRange | None = None,
) -> TextRange | None:
    """
    Find the first match of ``pattern`` in ``text`` (the last one when searching backwards).

    Args:
        text: The text to search.
        pattern: A literal needle, or a regular expression with ``REGULAR_EXPRESSION``.
        options: How to compare.
        within: Restrict the search to this range. Defaults to the whole text.

    Returns:
        The matched range, or None if there is no match.

    Raises:
        InvalidPatternError: If a regular expression pattern does not compile.
        ValueError: If ``within`` exceeds the text.

    """
    if not pattern:
        return None
    compiled = compile_pattern(pattern, options)
    view = SearchView.build(text, diacritic_insensitive=CompareOptions.DIACRITIC_INSENSITIVE in options)
    first, last = view.cluster_span(within)
    found = view.find(compiled, options, first, last)
    return None if found is None else view.text_range(*found)


def iter_matches(text: str, pattern: str, options: CompareOptions = CompareOptions.NONE) -> Iterator[TextRange]:
    """
    Iterate over non-overlapping matches of ``pattern`` in ``text``.

    Each search covers what is left of the text: everything after the previous
    match, or everything before it when searching backwards.

    Raises:
        InvalidPatternError: Immediately, if a regular expression pattern does not compile.

    """
    if not pattern:
        return iter(())
    compiled = compile_pattern(pattern, options)
    view = SearchView.build(text, diacritic_insensitive=CompareOptions.DIACRITIC_INSENSITIVE in options)
    logger.debug("Searching for %r with options %s in %d clusters.", pattern, options, view.cluster_count)
    return _iterate(view, compiled, options)


def _iterate(view: SearchView, compiled: regex.Pattern, options: CompareOptions) -> Iterator[TextRange]:
    """Yield matches while shrinking the remaining cluster range."""
    backwards = CompareOptions.BACKWARDS in options
    first, last = 0, view.cluster_count
    while first < last:
        found = view.find(compiled, options, first, last)
        if found is None:
            break
        match_first, match_last = found
        yield view.text_range(match_first, match_last)
        if backwards:
            last = match_first
        else:
            first = match_last
