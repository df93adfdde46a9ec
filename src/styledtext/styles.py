"""Value types used as attribute values on styled text."""

import copy
from dataclasses import dataclass, field, fields
from enum import Enum, IntEnum, IntFlag
from typing import ClassVar

import regex

_HEX_COLOR_PATTERN = regex.compile(r"#?(?P<rgb>[0-9a-fA-F]{6})(?P<alpha>[0-9a-fA-F]{2})?")


class FontWeight(str, Enum):
    """The weight (thickness) of a font face."""

    ULTRALIGHT = "ultralight"
    THIN = "thin"
    LIGHT = "light"
    REGULAR = "regular"
    MEDIUM = "medium"
    SEMIBOLD = "semibold"
    BOLD = "bold"
    HEAVY = "heavy"
    BLACK = "black"


_BOLD_WEIGHTS = frozenset({FontWeight.SEMIBOLD, FontWeight.BOLD, FontWeight.HEAVY, FontWeight.BLACK})


@dataclass(frozen=True)
class Font:
    """
    A font description.

    Attributes:
        size: Point size.
        weight: Face weight.
        family: Family name. ``"system"`` stands for the platform's default face.
        italic: Whether the italic face is requested.

    """

    size: float
    weight: FontWeight = FontWeight.REGULAR
    family: str = "system"
    italic: bool = False

    def __post_init__(self) -> None:
        """Validate the point size."""
        if self.size <= 0:
            msg = f"Font size must be positive, got {self.size}"
            raise ValueError(msg)

    @classmethod
    def system(cls, size: float, weight: FontWeight = FontWeight.REGULAR) -> "Font":
        """Return the system font at ``size`` and ``weight``."""
        return cls(size=size, weight=weight)

    @property
    def is_bold(self) -> bool:
        """Check if the weight renders as bold."""
        return self.weight in _BOLD_WEIGHTS


@dataclass(frozen=True)
class Color:
    """An sRGB color with components in ``[0, 1]``."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    BLACK: ClassVar["Color"]
    WHITE: ClassVar["Color"]
    RED: ClassVar["Color"]
    GREEN: ClassVar["Color"]
    BLUE: ClassVar["Color"]
    CLEAR: ClassVar["Color"]

    def __post_init__(self) -> None:
        """Validate that every component lies in ``[0, 1]``."""
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                msg = f"Color component '{name}' must be between 0 and 1, got {value}"
                raise ValueError(msg)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """
        Parse ``#rrggbb`` or ``#rrggbbaa`` (the ``#`` is optional).

        Examples:
            >>> Color.from_hex("#ff0000") == Color.RED
            True

        """
        match = _HEX_COLOR_PATTERN.fullmatch(value.strip())
        if match is None:
            msg = f"Invalid hex color: '{value}'"
            raise ValueError(msg)
        rgb = match.group("rgb")
        red, green, blue = (int(rgb[i : i + 2], 16) / 255 for i in range(0, 6, 2))
        alpha = int(match.group("alpha"), 16) / 255 if match.group("alpha") else 1.0
        return cls(red, green, blue, alpha)

    @property
    def hex(self) -> str:
        """Return ``#rrggbb``, with an alpha byte appended when not opaque."""
        channels = [self.red, self.green, self.blue]
        if self.alpha < 1.0:
            channels.append(self.alpha)
        return "#" + "".join(f"{round(channel * 255):02x}" for channel in channels)


Color.BLACK = Color(0.0, 0.0, 0.0)
Color.WHITE = Color(1.0, 1.0, 1.0)
Color.RED = Color(1.0, 0.0, 0.0)
Color.GREEN = Color(0.0, 1.0, 0.0)
Color.BLUE = Color(0.0, 0.0, 1.0)
Color.CLEAR = Color(0.0, 0.0, 0.0, 0.0)


class TextAlignment(str, Enum):
    """Horizontal alignment of the lines of a paragraph."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFIED = "justified"
    NATURAL = "natural"


class WritingDirection(IntEnum):
    """Base writing direction of a paragraph or an embedded run."""

    NATURAL = -1
    LEFT_TO_RIGHT = 0
    RIGHT_TO_LEFT = 1


class WritingDirectionFormat(IntEnum):
    """How an embedded run's direction is applied."""

    EMBEDDING = 0 << 1
    OVERRIDE = 1 << 1


def writing_direction_format(direction: WritingDirection, fmt: WritingDirectionFormat) -> int:
    """
    Combine a direction and a format into one writing-direction attribute entry.

    Examples:
        >>> writing_direction_format(WritingDirection.RIGHT_TO_LEFT, WritingDirectionFormat.OVERRIDE)
        3

    """
    return int(direction) | int(fmt)


class UnderlineStyle(IntFlag):
    """Line style for underline and strikethrough decorations."""

    NONE = 0x00
    SINGLE = 0x01
    THICK = 0x02
    DOUBLE = 0x09

    PATTERN_DOT = 0x0100
    PATTERN_DASH = 0x0200
    PATTERN_DASH_DOT = 0x0300
    PATTERN_DASH_DOT_DOT = 0x0400

    BY_WORD = 0x8000


@dataclass
class ParagraphStyle:
    """
    Paragraph-level layout settings.

    Instances are mutable; styles attached to text should be treated as values
    and copied before being changed.
    """

    alignment: TextAlignment = TextAlignment.NATURAL
    line_spacing: float = 0.0
    paragraph_spacing: float = 0.0
    paragraph_spacing_before: float = 0.0
    head_indent: float = 0.0
    tail_indent: float = 0.0
    first_line_head_indent: float = 0.0
    minimum_line_height: float = 0.0
    maximum_line_height: float = 0.0
    line_height_multiple: float = 0.0
    base_writing_direction: WritingDirection = WritingDirection.NATURAL
    hyphenation_factor: float = 0.0

    @classmethod
    def default(cls) -> "ParagraphStyle":
        """Return a style with every setting at its default."""
        return cls()

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Return the names of all settings."""
        return frozenset(f.name for f in fields(cls))

    def copy(self) -> "ParagraphStyle":
        """Return an independent copy."""
        return copy.copy(self)

    def set_paragraph_style(self, other: "ParagraphStyle") -> None:
        """Overwrite every setting with the ones from ``other``."""
        for name in self.field_names():
            setattr(self, name, getattr(other, name))


@dataclass(frozen=True)
class TextAttachment:
    """
    An inline attachment (typically an image) anchored in the text.

    Attributes:
        contents: Raw attachment data.
        file_type: A type identifier for ``contents``, such as a MIME type.
        bounds: ``(x, y, width, height)`` of the attachment's layout box.

    """

    contents: bytes | None = None
    file_type: str | None = None
    bounds: tuple[float, float, float, float] = field(default=(0.0, 0.0, 0.0, 0.0))
