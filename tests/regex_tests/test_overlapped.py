"""Tests for overlapped iteration and case folding."""

import regex


def test_overlapped_finditer_yields_every_start() -> None:
    """Test that overlapped iteration reports overlapping candidates."""
    spans = [m.span() for m in regex.finditer(r"aa", "aaaa", overlapped=True)]
    assert spans == [(0, 2), (1, 3), (2, 4)]


def test_non_overlapped_finditer() -> None:
    """Test the default, non-overlapping iteration for comparison."""
    spans = [m.span() for m in regex.finditer(r"aa", "aaaa")]
    assert spans == [(0, 2), (2, 4)]


def test_overlapped_reverse() -> None:
    """Test that overlapped iteration also works in reverse."""
    spans = [m.span() for m in regex.finditer(r"aa", "aaaa", overlapped=True, flags=regex.REVERSE)]
    assert spans == [(2, 4), (1, 3), (0, 2)]


def test_ignorecase_non_ascii() -> None:
    """Test case-insensitive matching of accented capitals."""
    assert regex.search(r"école", "ÉCOLE", flags=regex.IGNORECASE) is not None


def test_escape_keeps_literals_literal() -> None:
    """Test that escaped metacharacters match themselves."""
    pattern = regex.compile(regex.escape("a.c[1]"))
    assert pattern.search("xa.c[1]") is not None
    assert pattern.search("abc1") is None
