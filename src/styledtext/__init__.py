"""StyledText: grapheme-aware search and match-driven styling of text."""

import importlib.metadata

from .attributed_text import AttributedText, AttributeKey, AttributeRun
from .attributed_text_utils import AttributedTextUtils
from .options import DEFAULT_OPTIONS, CompareOptions
from .search import InvalidPatternError
from .string_utils import StringUtils
from .text_range import TextRange, Utf16Range
from .types import Match, MatchKind, Modifier, ModifierKind


def _get_version() -> str:
    """
    Retrieve the package version from metadata.

    Returns:
        The version string, or a development version if not installed.

    """
    try:
        return importlib.metadata.version("StyledText")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


__version__ = _get_version()

__all__ = [
    "DEFAULT_OPTIONS",
    "AttributeKey",
    "AttributeRun",
    "AttributedText",
    "AttributedTextUtils",
    "CompareOptions",
    "InvalidPatternError",
    "Match",
    "MatchKind",
    "Modifier",
    "ModifierKind",
    "StringUtils",
    "TextRange",
    "Utf16Range",
    "__version__",
]
