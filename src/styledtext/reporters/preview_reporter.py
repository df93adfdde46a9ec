"""A reporter rendering attributed text on the terminal."""

import logging
from typing import Any

from rich.color import Color as RichColor
from rich.console import Console
from rich.style import Style
from rich.text import Text

from styledtext.attributed_text import AttributedText, AttributeKey
from styledtext.styles import Color, Font, UnderlineStyle
from styledtext.text_range import utf16_to_index

logger = logging.getLogger(__name__)


def _rich_color(color: Any) -> RichColor | None:  # noqa: ANN401
    """Convert a color attribute value, ignoring anything that is not a Color."""
    if not isinstance(color, Color):
        return None
    return RichColor.from_rgb(color.red * 255, color.green * 255, color.blue * 255)


def rich_style(attributes: dict[str, Any]) -> Style | None:
    """
    Map the attributes of one run to the closest terminal style.

    Fonts only contribute weight and slant; paragraph settings, kerning,
    baseline offsets and attachments have no terminal equivalent and are
    ignored.

    Returns:
        The style, or None if no attribute has a terminal equivalent.

    """
    options: dict[str, Any] = {}

    font = attributes.get(AttributeKey.FONT)
    if isinstance(font, Font):
        if font.is_bold:
            options["bold"] = True
        if font.italic:
            options["italic"] = True

    foreground = _rich_color(attributes.get(AttributeKey.FOREGROUND_COLOR))
    if foreground is not None:
        options["color"] = foreground
    background = _rich_color(attributes.get(AttributeKey.BACKGROUND_COLOR))
    if background is not None:
        options["bgcolor"] = background

    underline = attributes.get(AttributeKey.UNDERLINE_STYLE)
    if underline:
        if underline & UnderlineStyle.DOUBLE == UnderlineStyle.DOUBLE:
            options["underline2"] = True
        else:
            options["underline"] = True
    if attributes.get(AttributeKey.STRIKETHROUGH_STYLE):
        options["strike"] = True

    link = attributes.get(AttributeKey.LINK)
    if link:
        options["link"] = str(link)

    return Style(**options) if options else None


class PreviewReporter:
    """Prints attributed text with its styling approximated by terminal styles."""

    def __init__(self, console: Console | None = None) -> None:
        """
        Initialize the reporter.

        Args:
            console: Where to print. Defaults to a console on stdout.

        """
        self.console = console or Console()

    def to_rich_text(self, text: AttributedText) -> Text:
        """Convert ``text`` into a rich Text with one styled span per run."""
        rich_text = Text(text.string)
        for run in text.runs():
            style = rich_style(run.attributes)
            if style is None:
                continue
            start = utf16_to_index(text.string, run.start)
            end = utf16_to_index(text.string, run.end)
            rich_text.stylize(style, start, end)
        return rich_text

    def generate(self, text: AttributedText) -> None:
        """Print the preview of ``text``."""
        logger.debug("Rendering preview of %d code unit(s).", text.length)
        self.console.print(self.to_rich_text(text))
