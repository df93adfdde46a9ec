"""
Fluent styling of attributed text.

``AttributedTextUtils`` selects substrings with ``Match`` selectors, turns each
hit into a list of ``Modifier`` objects and applies them to an
``AttributedText``. Every setter returns the receiver, so calls chain:

    >>> from styledtext.styles import Color, Font
    >>> styled = (
    ...     AttributedTextUtils("Swift is fast")
    ...     .set_font(Font.system(18))
    ...     .set_foreground_color(Color.RED, if_matches=[Match.exact("fast")])
    ...     .value
    ... )
    >>> styled.attribute(AttributeKey.FOREGROUND_COLOR, 9) == Color.RED
    True
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from .attributed_text import AttributedText, AttributeKey
from .string_utils import StringUtils
from .styles import Color, Font, ParagraphStyle, TextAlignment, TextAttachment, UnderlineStyle
from .text_range import TextRange, Utf16Range
from .types import Match, Modifier, ModifierKind

logger = logging.getLogger(__name__)

ModifierCallback = Callable[[str, TextRange], Sequence[Modifier]]


class AttributedTextUtils:
    """Applies style modifiers to the parts of a text selected by match rules."""

    def __init__(self, source: str | AttributedText) -> None:
        """
        Wrap a copy of ``source``.

        Args:
            source: Plain text, or attributed text whose existing attributes are kept.

        """
        self._text = AttributedText(source) if isinstance(source, str) else source.copy()

    def __repr__(self) -> str:
        """Return a debugging representation."""
        return f"AttributedTextUtils({self._text!r})"

    @property
    def value(self) -> AttributedText:
        """Return the styled text."""
        return self._text

    # --- Convenience setters ---

    def set_font(self, font: Font, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Set the font of the matched text (all text when ``if_matches`` is None)."""
        return self.set([Modifier.font(font)], if_matches)

    def set_foreground_color(self, color: Color, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Set the text color."""
        return self.set([Modifier.foreground_color(color)], if_matches)

    def set_background_color(self, color: Color, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Set the background color."""
        return self.set([Modifier.background_color(color)], if_matches)

    def set_paragraph_style(self, style: ParagraphStyle, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Replace the paragraph style."""
        return self.set([Modifier.paragraph_style(style)], if_matches)

    def set_text_alignment(self, alignment: TextAlignment, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Change the alignment, keeping the rest of the paragraph style."""
        return self.set([Modifier.text_alignment(alignment)], if_matches)

    def set_line_height(self, minimum: float, maximum: float, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Change the minimum and maximum line height, keeping the rest of the paragraph style."""
        return self.set([Modifier.line_height(minimum, maximum)], if_matches)

    def set_line_spacing(self, spacing: float, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Change the line spacing, keeping the rest of the paragraph style."""
        return self.set([Modifier.line_spacing(spacing)], if_matches)

    def set_strikethrough(self, style: UnderlineStyle, color: Color, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Strike the text through with ``style`` in ``color``."""
        return self.set([Modifier.strikethrough(style, color)], if_matches)

    def set_underline(self, style: UnderlineStyle, color: Color, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Underline the text with ``style`` in ``color``."""
        return self.set([Modifier.underline(style, color)], if_matches)

    def set_writing_direction(self, fmt: Sequence[int], if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Set embedded writing directions."""
        return self.set([Modifier.writing_direction(fmt)], if_matches)

    def set_baseline_offset(self, offset: float, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Shift the text off its baseline."""
        return self.set([Modifier.baseline_offset(offset)], if_matches)

    def set_link(self, url: str, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Link the text to ``url``."""
        return self.set([Modifier.link(url)], if_matches)

    def set_attachment(self, attachment: TextAttachment, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Anchor ``attachment`` to the text."""
        return self.set([Modifier.attachment(attachment)], if_matches)

    def set_kerning(self, kern: float, if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """Adjust the spacing between characters."""
        return self.set([Modifier.kern(kern)], if_matches)

    def set(self, modifiers: Sequence[Modifier], if_matches: Sequence[Match] | None = None) -> "AttributedTextUtils":
        """
        Apply ``modifiers`` in order to every match.

        Args:
            modifiers: The style changes. Later ones win where they touch the same attribute.
            if_matches: Selectors for the text to style. None styles the whole text.

        """
        return self.format_matches(if_matches, lambda _, __: modifiers)

    def set_paragraph_attribute(self, name: str, value: Any, text_range: TextRange) -> "AttributedTextUtils":  # noqa: ANN401
        """
        Change a single paragraph-style setting over ``text_range``.

        The paragraph style found at the start of the range is copied, ``name``
        is set to ``value`` on the copy, and the copy is applied to the range.

        Raises:
            AttributeError: If ``name`` is not a paragraph-style setting.

        """
        style = self._modify_style(text_range, **{name: value})
        self._text.add_attribute(AttributeKey.PARAGRAPH_STYLE, style, self._utf16(text_range))
        return self

    def format_matches(self, matches: Sequence[Match] | None, block: ModifierCallback) -> "AttributedTextUtils":
        """
        Apply the modifiers returned by ``block(pattern, range)`` to every match.

        Each selector is searched front to back over the current string.

        Raises:
            InvalidPatternError: If a regex selector does not compile.

        """
        if matches is None:
            if self._text.length:
                whole = TextRange.whole(self._text.string)
                for modifier in block(self._text.string, whole):
                    self._apply(modifier, whole)
            return self

        utils = StringUtils(self._text.string)
        for match in matches:
            count = 0
            for text_range in utils.matches(match.pattern, match.options):
                for modifier in block(match.pattern, text_range):
                    self._apply(modifier, text_range)
                count += 1
            logger.debug("Styled %d match(es) of %s %r.", count, match.kind.value, match.pattern)
        return self

    # --- Internals ---

    def _utf16(self, text_range: TextRange) -> Utf16Range:
        return StringUtils(self._text.string).utf16_range(text_range)

    def _modify_style(self, text_range: TextRange, **changes: Any) -> ParagraphStyle:  # noqa: ANN401
        """Return a copy of the paragraph style at the start of ``text_range`` with ``changes`` applied."""
        unknown = set(changes) - ParagraphStyle.field_names()
        if unknown:
            msg = f"ParagraphStyle has no setting named {', '.join(sorted(unknown))}"
            raise AttributeError(msg)

        style = ParagraphStyle.default()
        location = self._utf16(text_range).location
        if location < self._text.length:
            current = self._text.attribute(AttributeKey.PARAGRAPH_STYLE, location)
            if isinstance(current, ParagraphStyle):
                style.set_paragraph_style(current)
        for name, value in changes.items():
            setattr(style, name, value)
        return style

    def _apply(self, modifier: Modifier, text_range: TextRange) -> None:
        """Translate one modifier into attribute changes over ``text_range``."""
        utf16_range = self._utf16(text_range)
        kind = modifier.kind
        add = self._text.add_attribute

        if kind in _DIRECT_KEYS:
            add(_DIRECT_KEYS[kind], modifier.value, utf16_range)
        elif kind == ModifierKind.PARAGRAPH_STYLE:
            add(AttributeKey.PARAGRAPH_STYLE, modifier.value.copy(), utf16_range)
        elif kind == ModifierKind.TEXT_ALIGNMENT:
            add(AttributeKey.PARAGRAPH_STYLE, self._modify_style(text_range, alignment=modifier.value), utf16_range)
        elif kind == ModifierKind.LINE_HEIGHT:
            minimum, maximum = modifier.value
            style = self._modify_style(text_range, minimum_line_height=minimum, maximum_line_height=maximum)
            add(AttributeKey.PARAGRAPH_STYLE, style, utf16_range)
        elif kind == ModifierKind.LINE_SPACING:
            add(AttributeKey.PARAGRAPH_STYLE, self._modify_style(text_range, line_spacing=modifier.value), utf16_range)
        elif kind == ModifierKind.STRIKETHROUGH:
            add(AttributeKey.STRIKETHROUGH_STYLE, int(modifier.value), utf16_range)
            add(AttributeKey.STRIKETHROUGH_COLOR, modifier.color, utf16_range)
        elif kind == ModifierKind.UNDERLINE:
            add(AttributeKey.UNDERLINE_STYLE, int(modifier.value), utf16_range)
            add(AttributeKey.UNDERLINE_COLOR, modifier.color, utf16_range)
        elif kind == ModifierKind.WRITING_DIRECTION:
            add(AttributeKey.WRITING_DIRECTION, tuple(int(v) for v in modifier.value), utf16_range)
        elif kind in (ModifierKind.BASELINE_OFFSET, ModifierKind.KERN):
            key = AttributeKey.BASELINE_OFFSET if kind == ModifierKind.BASELINE_OFFSET else AttributeKey.KERN
            add(key, float(modifier.value), utf16_range)


# Modifiers that set one attribute to their payload unchanged.
_DIRECT_KEYS: dict[ModifierKind, AttributeKey] = {
    ModifierKind.FONT: AttributeKey.FONT,
    ModifierKind.FOREGROUND_COLOR: AttributeKey.FOREGROUND_COLOR,
    ModifierKind.BACKGROUND_COLOR: AttributeKey.BACKGROUND_COLOR,
    ModifierKind.LINK: AttributeKey.LINK,
    ModifierKind.ATTACHMENT: AttributeKey.ATTACHMENT,
}
