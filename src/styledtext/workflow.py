"""Applies a stylesheet to a text."""

import logging

from .attributed_text import AttributedText
from .attributed_text_utils import AttributedTextUtils
from .config import StyleSheet

logger = logging.getLogger(__name__)


def apply_stylesheet(text: str | AttributedText, sheet: StyleSheet) -> AttributedText:
    """
    Style ``text`` with every rule of ``sheet``.

    The base style covers the whole text first; rules follow in the order they
    are listed, so a later rule wins where it touches the same attribute as an
    earlier one.

    Args:
        text: Plain or already attributed text. It is not modified.
        sheet: The stylesheet.

    Returns:
        The styled copy.

    """
    utils = AttributedTextUtils(text)

    if sheet.base is not None:
        utils.set(sheet.base.to_modifiers())

    for index, rule in enumerate(sheet.rules, start=1):
        label = rule.name or f"#{index}"
        logger.debug("Applying style rule %s.", label)
        utils.set(rule.style.to_modifiers(), if_matches=[settings.to_match() for settings in rule.match])

    logger.debug("Applied %d style rule(s).", len(sheet.rules))
    return utils.value
