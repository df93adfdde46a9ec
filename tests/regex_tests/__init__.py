"""
Regex Library Test Suite for StyledText.

This test suite checks the behaviour of the third-party `regex` library that
the StyledText search engine relies on:

- Grapheme clusters (``\\X``) for combining marks, emoji sequences and flags
- Reverse searching (``REVERSE``) used for backwards search
- Overlapped iteration used to skip candidates that split a cluster
- Case-insensitive matching of non-ASCII letters

Run tests with: pytest tests/regex_tests/ -v
"""
