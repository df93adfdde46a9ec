"""Tests for the StringUtils facade."""

import unittest

import pytest

from styledtext.options import CompareOptions
from styledtext.search import InvalidPatternError
from styledtext.string_utils import StringUtils
from styledtext.text_range import TextRange, Utf16Range

SAMPLE = (
    "Swift is a powerful and intuitive programming language for iOS, iPadOS, macOS, tvOS, and watchOS. "
    "Writing Swift code is interactive and fun, the syntax is concise yet expressive, and Swift includes modern features developers love. "
    "Swift code is safe by design, yet also produces software that runs lightning-fast."
)


class TestRangeConversion(unittest.TestCase):
    """Test suite for converting between text and UTF-16 ranges."""

    def setUp(self) -> None:
        """Set up the sample text."""
        self.sut = StringUtils(SAMPLE)

    def test_utf16_range_whole_string(self) -> None:
        """1. Whole String: Defaults to location 0 and the full length."""
        utf16 = self.sut.utf16_range()
        assert utf16.location == 0
        assert utf16.length == len(SAMPLE)

    def test_utf16_range_whole_string_explicit(self) -> None:
        """2. Whole String Explicit: Passing the whole range gives the same answer."""
        assert self.sut.utf16_range(TextRange.whole(SAMPLE)) == Utf16Range(0, len(SAMPLE))

    def test_utf16_range_for_powerful(self) -> None:
        """3. Sub-range: 'powerful' sits at location 11, length 8."""
        utf16 = self.sut.utf16_range(TextRange(11, 19))
        assert utf16.location == 11
        assert utf16.length == 8
        assert SAMPLE[11:19] == "powerful"

    def test_range_whole_string(self) -> None:
        """4. Whole String: Defaults to the full text range."""
        assert self.sut.range() == TextRange(0, len(SAMPLE))

    def test_range_whole_string_explicit(self) -> None:
        """5. Whole String Explicit: The full UTF-16 range maps to the full text range."""
        assert self.sut.range(Utf16Range(0, len(SAMPLE))) == TextRange(0, len(SAMPLE))

    def test_range_for_powerful(self) -> None:
        """6. Sub-range: location 11, length 8 maps back to 'powerful'."""
        assert self.sut.range(Utf16Range(11, 8)) == TextRange(11, 19)

    def test_utf16_range_counts_surrogate_pairs(self) -> None:
        """7. Astral Characters: Offsets after an emoji shift by its extra code unit."""
        utils = StringUtils("\U0001f600 hi")
        assert utils.utf16_range(TextRange(2, 4)) == Utf16Range(3, 2)

    def test_utf16_range_out_of_bounds_raises(self) -> None:
        """8. Out of Bounds: A range past the end raises ValueError."""
        with pytest.raises(ValueError, match="exceeds text length"):
            StringUtils("abc").utf16_range(TextRange(0, 4))

    def test_range_inside_surrogate_pair_takes_whole_code_point(self) -> None:
        """9. Surrogate Pair: A range ending mid-pair covers the whole emoji."""
        assert StringUtils("a\U0001f600b").range(Utf16Range(2, 1)) == TextRange(1, 2)

    def test_range_location_past_end_falls_back_to_start(self) -> None:
        """10. Past End: A location beyond the text restarts at 0."""
        assert StringUtils("abc").range(Utf16Range(10, 2)) == TextRange(0, 2)

    def test_range_length_is_clamped(self) -> None:
        """11. Clamping: A length reaching past the end stops at the end."""
        assert StringUtils("abc").range(Utf16Range(1, 100)) == TextRange(1, 3)

    def test_range_is_widened_to_clusters(self) -> None:
        """12. Clusters: A range inside a cluster is widened to the whole cluster."""
        # 'cafe' + combining acute + '!': the accent sits at index (and UTF-16 offset) 4.
        assert StringUtils("cafe\u0301!").range(Utf16Range(4, 1)) == TextRange(3, 5)


class TestEnumerateMatches(unittest.TestCase):
    """Test suite for match enumeration."""

    def setUp(self) -> None:
        """Set up the sample text."""
        self.sut = StringUtils(SAMPLE)

    def _collect(self, pattern: str, options: CompareOptions) -> list[TextRange]:
        ranges: list[TextRange] = []

        def _block(match: str, text_range: TextRange) -> None:
            assert match == pattern
            assert text_range not in ranges
            ranges.append(text_range)

        self.sut.enumerate_matches(pattern, _block, options)
        return ranges

    def test_case_sensitive_swift(self) -> None:
        """1. Case Sensitive: 'swift' never appears in lowercase."""
        assert self._collect("swift", CompareOptions.NONE) == []

    def test_case_insensitive_swift(self) -> None:
        """2. Case Insensitive: 'Swift' appears four times."""
        ranges = self._collect("swift", CompareOptions.CASE_INSENSITIVE)
        assert len(ranges) == 4
        assert all(SAMPLE[r.as_slice()] == "Swift" for r in ranges)

    def test_regex_case_sensitive_swift(self) -> None:
        """3. Regex Case Sensitive: 'swift i' does not match."""
        assert self._collect("swift i", CompareOptions.REGULAR_EXPRESSION) == []

    def test_regex_case_insensitive_swift(self) -> None:
        """4. Regex Case Insensitive: 'swift i' matches 'Swift i' twice."""
        ranges = self._collect("swift i", CompareOptions.CASE_INSENSITIVE | CompareOptions.REGULAR_EXPRESSION)
        assert len(ranges) == 2
        assert all(SAMPLE[r.as_slice()] == "Swift i" for r in ranges)

    def test_default_options_run_backwards(self) -> None:
        """5. Defaults: Matches come last-first, case- and diacritic-insensitively."""
        utils = StringUtils("Swift is swift")
        assert [utils.value[r.as_slice()] for r in utils.matches("swift")] == ["swift", "Swift"]

    def test_invalid_regex_raises(self) -> None:
        """6. Invalid Regex: Raises InvalidPatternError."""
        with pytest.raises(InvalidPatternError):
            self.sut.enumerate_matches("(", lambda _, __: None, CompareOptions.REGULAR_EXPRESSION)


class TestReplaceMatches(unittest.TestCase):
    """Test suite for match replacement."""

    def setUp(self) -> None:
        """Set up the sample text."""
        self.sut = StringUtils(SAMPLE)

    def test_case_sensitive_swift_to_objc(self) -> None:
        """1. Case Sensitive: Nothing matches, the text is unchanged."""
        calls: list[TextRange] = []

        def _block(_: str, text_range: TextRange) -> str:
            calls.append(text_range)
            return "objc"

        result = self.sut.replace_matches("swift", _block, CompareOptions.NONE)
        assert calls == []
        assert result.value == SAMPLE

    def test_case_insensitive_swift_to_objc(self) -> None:
        """2. Case Insensitive: Four replacements, same as a plain replace of 'Swift'."""
        calls: list[TextRange] = []

        def _block(match: str, text_range: TextRange) -> str:
            assert match.casefold() == "swift"
            assert text_range not in calls
            calls.append(text_range)
            return "Objc"

        result = self.sut.replace_matches("swift", _block, CompareOptions.CASE_INSENSITIVE)
        assert len(calls) == 4
        assert result.value == SAMPLE.replace("Swift", "Objc")

    def test_ranges_refer_to_original(self) -> None:
        """3. Ranges: Every range handed to the callback slices the original text."""
        seen: list[str] = []

        def _block(_: str, text_range: TextRange) -> str:
            seen.append(SAMPLE[text_range.as_slice()])
            return "A much longer replacement"

        self.sut.replace_matches("swift", _block, CompareOptions.CASE_INSENSITIVE)
        assert seen == ["Swift"] * 4

    def test_replacement_of_different_length(self) -> None:
        """4. Lengths: Earlier matches stay valid after longer replacements."""
        result = StringUtils("a-b-c").replace_matches("-", lambda _, __: "--")
        assert result.value == "a--b--c"

    def test_receiver_is_unchanged(self) -> None:
        """5. Immutability: The original instance keeps its value."""
        result = self.sut.replace_matches("swift", lambda _, __: "Objc")
        assert self.sut.value == SAMPLE
        assert result is not self.sut

    def test_diacritic_insensitive_replacement(self) -> None:
        """6. Diacritics: Accented and plain spellings are both replaced."""
        result = StringUtils("Café or cafe").replace_matches("cafe", lambda _, __: "tea")
        assert result.value == "tea or tea"


class TestValueSemantics(unittest.TestCase):
    """Test suite for equality and representation."""

    def test_equality(self) -> None:
        """1. Equality: Compares by wrapped value."""
        assert StringUtils("a") == StringUtils("a")
        assert StringUtils("a") != StringUtils("b")

    def test_unhashable(self) -> None:
        """2. Hashing: Instances are not hashable."""
        with pytest.raises(TypeError):
            hash(StringUtils("a"))

    def test_repr(self) -> None:
        """3. Repr: Shows the wrapped value."""
        assert repr(StringUtils("a")) == "StringUtils('a')"


if __name__ == "__main__":
    unittest.main()
