"""Defines the match selectors and style modifiers used by the styling layer."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import AnyUrl, TypeAdapter

from .options import CompareOptions
from .styles import Color, Font, ParagraphStyle, TextAlignment, TextAttachment, UnderlineStyle

_URL_ADAPTER = TypeAdapter(AnyUrl)


class MatchKind(str, Enum):
    """How a ``Match`` selects substrings."""

    EXACT = "exact"
    """The literal text, case-sensitive."""

    EXACT_CASE_INSENSITIVE = "exact_case_insensitive"
    """The literal text, ignoring case."""

    REGEX = "regex"
    """A regular expression."""


@dataclass(frozen=True)
class Match:
    """
    Selects the substrings a style is applied to.

    Matching is always diacritic-insensitive and runs front to back.
    """

    kind: MatchKind
    pattern: str

    @classmethod
    def exact(cls, text: str) -> "Match":
        """Select occurrences of ``text``."""
        return cls(MatchKind.EXACT, text)

    @classmethod
    def exact_case_insensitive(cls, text: str) -> "Match":
        """Select occurrences of ``text`` in any letter case."""
        return cls(MatchKind.EXACT_CASE_INSENSITIVE, text)

    @classmethod
    def regex(cls, pattern: str) -> "Match":
        """Select matches of the regular expression ``pattern``."""
        return cls(MatchKind.REGEX, pattern)

    @property
    def options(self) -> CompareOptions:
        """Return the compare options this selector searches with."""
        options = CompareOptions.DIACRITIC_INSENSITIVE
        if self.kind == MatchKind.EXACT_CASE_INSENSITIVE:
            options |= CompareOptions.CASE_INSENSITIVE
        elif self.kind == MatchKind.REGEX:
            options |= CompareOptions.REGULAR_EXPRESSION
        return options


class ModifierKind(str, Enum):
    """The fixed set of style changes a ``Modifier`` can describe."""

    FONT = "font"
    FOREGROUND_COLOR = "foreground_color"
    BACKGROUND_COLOR = "background_color"
    PARAGRAPH_STYLE = "paragraph_style"
    TEXT_ALIGNMENT = "text_alignment"
    LINE_HEIGHT = "line_height"
    LINE_SPACING = "line_spacing"
    STRIKETHROUGH = "strikethrough"
    UNDERLINE = "underline"
    WRITING_DIRECTION = "writing_direction"
    BASELINE_OFFSET = "baseline_offset"
    LINK = "link"
    ATTACHMENT = "attachment"
    KERN = "kern"


_NUMBER = (int, float)


def _is_number(value: Any) -> bool:  # noqa: ANN401
    """Return True for ints and floats. ``bool`` is an ``int`` subclass but not a number here."""
    return isinstance(value, _NUMBER) and not isinstance(value, bool)


# Expected payload type per kind. LINE_HEIGHT and WRITING_DIRECTION are checked separately.
_VALUE_TYPES: dict[ModifierKind, type | tuple[type, ...]] = {
    ModifierKind.FONT: Font,
    ModifierKind.FOREGROUND_COLOR: Color,
    ModifierKind.BACKGROUND_COLOR: Color,
    ModifierKind.PARAGRAPH_STYLE: ParagraphStyle,
    ModifierKind.TEXT_ALIGNMENT: TextAlignment,
    ModifierKind.LINE_HEIGHT: tuple,
    ModifierKind.LINE_SPACING: _NUMBER,
    ModifierKind.STRIKETHROUGH: int,
    ModifierKind.UNDERLINE: int,
    ModifierKind.WRITING_DIRECTION: tuple,
    ModifierKind.BASELINE_OFFSET: _NUMBER,
    ModifierKind.LINK: (str, AnyUrl),
    ModifierKind.ATTACHMENT: TextAttachment,
    ModifierKind.KERN: _NUMBER,
}

_DECORATIONS = frozenset({ModifierKind.STRIKETHROUGH, ModifierKind.UNDERLINE})


@dataclass(frozen=True)
class Modifier:
    """
    One style change.

    Attributes:
        kind: What to change.
        value: The payload. For LINE_HEIGHT a ``(minimum, maximum)`` pair, for
            WRITING_DIRECTION a tuple of ints, for STRIKETHROUGH and UNDERLINE an
            ``UnderlineStyle``.
        color: The decoration color. Required for STRIKETHROUGH and UNDERLINE.

    """

    kind: ModifierKind
    value: Any
    color: Color | None = None

    def __post_init__(self) -> None:
        """Validate the payload against the kind."""
        expected = _VALUE_TYPES[self.kind]
        # bool is an int subclass; no kind takes one.
        if not isinstance(self.value, expected) or isinstance(self.value, bool):
            msg = f"Invalid value for '{self.kind.value}' modifier: {self.value!r}"
            raise TypeError(msg)

        if self.kind in _DECORATIONS and not isinstance(self.color, Color):
            msg = f"The 'color' must be provided for the '{self.kind.value}' modifier."
            raise ValueError(msg)

        if self.kind == ModifierKind.LINE_HEIGHT and (len(self.value) != 2 or not all(_is_number(v) for v in self.value)):  # noqa: PLR2004
            msg = f"Line height must be a (minimum, maximum) pair, got {self.value!r}"
            raise ValueError(msg)

        if self.kind == ModifierKind.WRITING_DIRECTION and not all(isinstance(v, int) and not isinstance(v, bool) for v in self.value):
            msg = f"Writing direction must be a sequence of ints, got {self.value!r}"
            raise ValueError(msg)

        if self.kind == ModifierKind.LINK:
            object.__setattr__(self, "value", str(_URL_ADAPTER.validate_python(self.value)))

    @classmethod
    def font(cls, font: Font) -> "Modifier":
        """Set the font."""
        return cls(ModifierKind.FONT, font)

    @classmethod
    def foreground_color(cls, color: Color) -> "Modifier":
        """Set the text color."""
        return cls(ModifierKind.FOREGROUND_COLOR, color)

    @classmethod
    def background_color(cls, color: Color) -> "Modifier":
        """Set the background color."""
        return cls(ModifierKind.BACKGROUND_COLOR, color)

    @classmethod
    def paragraph_style(cls, style: ParagraphStyle) -> "Modifier":
        """Replace the paragraph style."""
        return cls(ModifierKind.PARAGRAPH_STYLE, style)

    @classmethod
    def text_alignment(cls, alignment: TextAlignment) -> "Modifier":
        """Change only the alignment of the paragraph style."""
        return cls(ModifierKind.TEXT_ALIGNMENT, alignment)

    @classmethod
    def line_height(cls, minimum: float, maximum: float) -> "Modifier":
        """Change only the minimum and maximum line height of the paragraph style."""
        return cls(ModifierKind.LINE_HEIGHT, (minimum, maximum))

    @classmethod
    def line_spacing(cls, spacing: float) -> "Modifier":
        """Change only the line spacing of the paragraph style."""
        return cls(ModifierKind.LINE_SPACING, spacing)

    @classmethod
    def strikethrough(cls, style: UnderlineStyle, color: Color) -> "Modifier":
        """Strike the text through."""
        return cls(ModifierKind.STRIKETHROUGH, style, color)

    @classmethod
    def underline(cls, style: UnderlineStyle, color: Color) -> "Modifier":
        """Underline the text."""
        return cls(ModifierKind.UNDERLINE, style, color)

    @classmethod
    def writing_direction(cls, fmt: Sequence[int]) -> "Modifier":
        """Set embedded writing directions (see ``writing_direction_format``)."""
        return cls(ModifierKind.WRITING_DIRECTION, tuple(fmt))

    @classmethod
    def baseline_offset(cls, offset: float) -> "Modifier":
        """Shift the text off its baseline."""
        return cls(ModifierKind.BASELINE_OFFSET, offset)

    @classmethod
    def link(cls, url: str) -> "Modifier":
        """Link the text to ``url``."""
        return cls(ModifierKind.LINK, url)

    @classmethod
    def attachment(cls, attachment: TextAttachment) -> "Modifier":
        """Anchor an attachment to the text."""
        return cls(ModifierKind.ATTACHMENT, attachment)

    @classmethod
    def kern(cls, kern: float) -> "Modifier":
        """Adjust the spacing between characters."""
        return cls(ModifierKind.KERN, kern)
