"""A reporter for summarizing search results."""

import logging
from collections.abc import Sequence

from styledtext.string_utils import StringUtils
from styledtext.text_range import TextRange

logger = logging.getLogger(__name__)


class MatchReporter:
    """Logs a concise summary of the matches found for a pattern."""

    def generate(self, text: str, pattern: str, ranges: Sequence[TextRange]) -> None:
        """
        Log the number of matches and, at DEBUG level, every match with its UTF-16 range.

        Args:
            text: The searched text.
            pattern: The pattern that was searched for.
            ranges: The matches, in the order they were found.

        """
        logger.info("--- Search Summary for %r ---", pattern)
        logger.info("Total matches: %d", len(ranges))

        utils = StringUtils(text)
        covered = sum(utils.utf16_range(text_range).length for text_range in ranges)
        total = utils.utf16_range().length
        if total:
            logger.info("Matched code units: %d of %d (%.1f%%)", covered, total, covered / total * 100)

        for text_range in ranges:
            utf16 = utils.utf16_range(text_range)
            logger.debug("  - location=%d length=%d text=%r", utf16.location, utf16.length, text[text_range.as_slice()])

        logger.info("-------------------------------------------------")
