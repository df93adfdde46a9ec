"""Reporters presenting search results and styled text to the user."""

from .match_reporter import MatchReporter
from .preview_reporter import PreviewReporter

__all__ = [
    "MatchReporter",
    "PreviewReporter",
]
