"""Handles the parsing and validation of StyledText stylesheet files."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import AnyUrl, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .search import InvalidPatternError, compile_pattern
from .styles import Color, Font, FontWeight, ParagraphStyle, TextAlignment, UnderlineStyle, WritingDirection
from .types import Match, Modifier

logger = logging.getLogger(__name__)


def _parse_underline_style(value: str) -> UnderlineStyle:
    """Parse ``'single'`` or a ``|``-separated combination such as ``'thick|pattern_dot'``."""
    style = UnderlineStyle.NONE
    for part in value.split("|"):
        name = part.strip().upper()
        if name not in UnderlineStyle.__members__:
            msg = f"Unknown line style '{part.strip()}'. Expected one of: {', '.join(m.lower() for m in UnderlineStyle.__members__)}"
            raise ValueError(msg)
        style |= UnderlineStyle[name]
    return style


class FontSettings(BaseModel):
    """Font settings of a style."""

    model_config = ConfigDict(extra="forbid")

    size: float = Field(gt=0)
    weight: FontWeight = FontWeight.REGULAR
    family: str = "system"
    italic: bool = False

    def to_font(self) -> Font:
        """Build the font value."""
        return Font(size=self.size, weight=self.weight, family=self.family, italic=self.italic)


class DecorationSettings(BaseModel):
    """Underline or strikethrough settings of a style."""

    model_config = ConfigDict(extra="forbid")

    style: str = "single"
    color: str = "#000000"

    @field_validator("style")
    @classmethod
    def _check_style(cls, value: str) -> str:
        _parse_underline_style(value)
        return value

    @field_validator("color")
    @classmethod
    def _check_color(cls, value: str) -> str:
        Color.from_hex(value)
        return value


class LineHeightSettings(BaseModel):
    """Minimum and maximum line height of a style."""

    model_config = ConfigDict(extra="forbid")

    minimum: float = Field(ge=0)
    maximum: float = Field(ge=0)


class ParagraphStyleSettings(BaseModel):
    """A complete paragraph style. Settings left out keep their defaults."""

    model_config = ConfigDict(extra="forbid")

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

    def to_paragraph_style(self) -> ParagraphStyle:
        """Build the paragraph style value."""
        return ParagraphStyle(**self.model_dump())


class StyleSettings(BaseModel):
    """
    A set of style changes, as written in a stylesheet.

    Every field is optional; only the ones present produce modifiers.
    """

    model_config = ConfigDict(extra="forbid")

    paragraph_style: ParagraphStyleSettings | None = None
    alignment: TextAlignment | None = None
    line_height: LineHeightSettings | None = None
    line_spacing: float | None = None
    font: FontSettings | None = None
    foreground_color: str | None = None
    background_color: str | None = None
    strikethrough: DecorationSettings | None = None
    underline: DecorationSettings | None = None
    writing_direction: list[int] | None = None
    baseline_offset: float | None = None
    link: AnyUrl | None = None
    kern: float | None = None

    @field_validator("foreground_color", "background_color")
    @classmethod
    def _check_color(cls, value: str | None) -> str | None:
        if value is not None:
            Color.from_hex(value)
        return value

    def to_modifiers(self) -> list[Modifier]:
        """
        Translate the settings into modifiers.

        A full paragraph style comes first so that alignment, line height and
        line spacing refine it instead of being overwritten by it.
        """
        modifiers: list[Modifier] = []
        if self.paragraph_style is not None:
            modifiers.append(Modifier.paragraph_style(self.paragraph_style.to_paragraph_style()))
        if self.alignment is not None:
            modifiers.append(Modifier.text_alignment(self.alignment))
        if self.line_height is not None:
            modifiers.append(Modifier.line_height(self.line_height.minimum, self.line_height.maximum))
        if self.line_spacing is not None:
            modifiers.append(Modifier.line_spacing(self.line_spacing))
        if self.font is not None:
            modifiers.append(Modifier.font(self.font.to_font()))
        if self.foreground_color is not None:
            modifiers.append(Modifier.foreground_color(Color.from_hex(self.foreground_color)))
        if self.background_color is not None:
            modifiers.append(Modifier.background_color(Color.from_hex(self.background_color)))
        if self.strikethrough is not None:
            modifiers.append(Modifier.strikethrough(_parse_underline_style(self.strikethrough.style), Color.from_hex(self.strikethrough.color)))
        if self.underline is not None:
            modifiers.append(Modifier.underline(_parse_underline_style(self.underline.style), Color.from_hex(self.underline.color)))
        if self.writing_direction is not None:
            modifiers.append(Modifier.writing_direction(self.writing_direction))
        if self.baseline_offset is not None:
            modifiers.append(Modifier.baseline_offset(self.baseline_offset))
        if self.link is not None:
            modifiers.append(Modifier.link(str(self.link)))
        if self.kern is not None:
            modifiers.append(Modifier.kern(self.kern))
        return modifiers


class MatchSettings(BaseModel):
    """A selector naming exactly one of ``exact``, ``exact_case_insensitive`` or ``regex``."""

    model_config = ConfigDict(extra="forbid")

    exact: str | None = None
    exact_case_insensitive: str | None = None
    regex: str | None = None

    @model_validator(mode="after")
    def _check_selector(self) -> "MatchSettings":
        given = [name for name in ("exact", "exact_case_insensitive", "regex") if getattr(self, name) is not None]
        if len(given) != 1:
            msg = f"A match must name exactly one of 'exact', 'exact_case_insensitive' or 'regex', got: {given or 'none'}"
            raise ValueError(msg)
        if self.regex is not None:
            try:
                compile_pattern(self.regex, Match.regex(self.regex).options)
            except InvalidPatternError as e:
                msg = f"Invalid regex pattern in rule: {e}"
                raise ValueError(msg) from e
        return self

    def to_match(self) -> Match:
        """Build the selector."""
        if self.exact is not None:
            return Match.exact(self.exact)
        if self.exact_case_insensitive is not None:
            return Match.exact_case_insensitive(self.exact_case_insensitive)
        return Match.regex(self.regex or "")


class StyleRule(BaseModel):
    """A style applied to every match of one or more selectors."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    match: list[MatchSettings]
    style: StyleSettings

    @field_validator("match", mode="before")
    @classmethod
    def _wrap_single_match(cls, value: Any) -> Any:  # noqa: ANN401
        return [value] if isinstance(value, dict) else value


class StyleSheet(BaseModel):
    """The root of a stylesheet: an optional base style plus ordered rules."""

    model_config = ConfigDict(extra="forbid")

    base: StyleSettings | None = None
    rules: list[StyleRule] = Field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StyleSheet":
        """
        Create a StyleSheet from a dictionary.

        Raises:
            ValueError: If the data does not describe a valid stylesheet.

        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            msg = f"Invalid or missing configuration: {e}"
            raise ValueError(msg) from e


class StrictSingleQuoteLoader(yaml.SafeLoader):
    """
    A YAML loader that rejects double-quoted strings.

    Regular expressions are full of backslashes, which double-quoted YAML
    strings would treat as escapes.
    """


def _construct_scalar(loader: StrictSingleQuoteLoader, node: yaml.ScalarNode) -> Any:  # noqa: ANN401
    """Construct a scalar node, but first check its style."""
    if node.style == '"':
        line = node.start_mark.line + 1
        col = node.start_mark.column + 1
        msg = f"Double-quoted string found at line {line}, column {col}. Please use single quotes (') instead."
        raise yaml.YAMLError(msg)
    return loader.construct_scalar(node)


StrictSingleQuoteLoader.add_constructor("tag:yaml.org,2002:str", _construct_scalar)


def load_config(config_path: str | Path) -> StyleSheet:
    """
    Load, parse, and validate a YAML stylesheet.

    Args:
        config_path: The path to the stylesheet.

    Returns:
        The validated StyleSheet.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If there is a syntax error in the YAML file.
        ValueError: If the stylesheet is invalid.

    """
    path = Path(config_path)
    if not path.is_file():
        msg = f"Stylesheet not found at: {config_path}"
        raise FileNotFoundError(msg)

    def _raise_type_error(msg: str) -> None:
        """Raise a TypeError with a specific message."""
        raise TypeError(msg)

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.load(f, Loader=StrictSingleQuoteLoader)  # noqa: S506

        if data is None:
            data = {}
        if not isinstance(data, dict):
            _raise_type_error("Stylesheet must be a YAML mapping (dictionary).")

        sheet = StyleSheet.from_dict(data)

    except yaml.YAMLError as e:
        msg = f"Error parsing YAML stylesheet: {e}"
        raise yaml.YAMLError(msg) from e
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        msg = f"Invalid or missing configuration: {e}"
        raise ValueError(msg) from e
    else:
        logger.debug("Loaded stylesheet from %s with %d rule(s).", path, len(sheet.rules))
        return sheet
