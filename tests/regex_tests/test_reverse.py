"""Tests for reverse searching, used by backwards search."""

import regex


def test_reverse_search_finds_last_occurrence() -> None:
    """Test that a reverse search returns the rightmost match first."""
    match = regex.search(r"abc", "abc abc", flags=regex.REVERSE)
    assert match is not None
    assert match.span() == (4, 7)


def test_reverse_finditer_order() -> None:
    """Test that reverse iteration yields matches from right to left."""
    spans = [m.span() for m in regex.finditer(r"\d+", "1 22 333", flags=regex.REVERSE)]
    assert spans == [(5, 8), (2, 4), (0, 1)]


def test_reverse_with_ignorecase() -> None:
    """Test that REVERSE and IGNORECASE combine."""
    pattern = regex.compile(r"swift", regex.IGNORECASE | regex.REVERSE)
    match = pattern.search("Swift is swift")
    assert match is not None
    assert match.group() == "swift"
    assert match.start() == 9


def test_reverse_anchors() -> None:
    """Test that '$' anchors the first reverse match at the end."""
    match = regex.search(r"b+$", "abbabb", flags=regex.REVERSE)
    assert match is not None
    assert match.span() == (4, 6)
