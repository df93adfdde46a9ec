"""Main entry point for the StyledText command-line interface."""

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import yaml

from . import __version__
from .config import load_config
from .logging_utils import setup_logging
from .options import CompareOptions
from .reporters import MatchReporter, PreviewReporter
from .string_utils import StringUtils
from .workflow import apply_stylesheet

logger = logging.getLogger(__name__)


def _add_search_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the flags shared by the search-based commands."""
    parser.add_argument(
        "--regex",
        action="store_true",
        help="Treat the pattern as a regular expression.",
    )
    parser.add_argument(
        "-i",
        "--ignore-case",
        action="store_true",
        help="Match regardless of letter case.",
    )
    parser.add_argument(
        "-d",
        "--diacritic-insensitive",
        action="store_true",
        help="Ignore accents and other combining marks.",
    )
    parser.add_argument(
        "-b",
        "--backwards",
        action="store_true",
        help="Search from the end of the text.",
    )


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the StyledText CLI.

    Args:
        argv: The arguments to parse. Defaults to ``sys.argv[1:]``.

    Returns:
        argparse.Namespace: An object containing the parsed command-line arguments.

    """
    parser = argparse.ArgumentParser(description="StyledText search, replace and styling tool")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"StyledText {__version__}",
        help="Show the version number and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug level logging.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write a detailed debug log to this file (requires --debug).",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'find' command
    find_parser = subparsers.add_parser("find", help="List the matches of a pattern.")
    find_parser.add_argument("pattern", help="The text or regular expression to look for.")
    find_parser.add_argument("file", nargs="?", default="-", help="The file to search (default: stdin).")
    _add_search_arguments(find_parser)

    # 'replace' command
    replace_parser = subparsers.add_parser("replace", help="Replace every match of a pattern.")
    replace_parser.add_argument("pattern", help="The text or regular expression to look for.")
    replace_parser.add_argument("replacement", help="The text to put in place of each match.")
    replace_parser.add_argument("file", nargs="?", default="-", help="The file to edit (default: stdin).")
    _add_search_arguments(replace_parser)

    # 'style' command
    style_parser = subparsers.add_parser("style", help="Preview a text styled with a stylesheet.")
    style_parser.add_argument("file", nargs="?", default="-", help="The file to style (default: stdin).")
    style_parser.add_argument("-s", "--stylesheet", type=Path, required=True, help="The YAML stylesheet.")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(sys.stderr)
        sys.exit(1)

    return args


def _options_from_args(args: argparse.Namespace) -> CompareOptions:
    """Build compare options from the search flags."""
    options = CompareOptions.NONE
    if args.regex:
        options |= CompareOptions.REGULAR_EXPRESSION
    if args.ignore_case:
        options |= CompareOptions.CASE_INSENSITIVE
    if args.diacritic_insensitive:
        options |= CompareOptions.DIACRITIC_INSENSITIVE
    if args.backwards:
        options |= CompareOptions.BACKWARDS
    return options


def _read_text(source: str) -> str:
    """Read the input text from a file, or from stdin when ``source`` is '-'."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _find(args: argparse.Namespace) -> None:
    """Print one line per match: UTF-16 location, length and matched text."""
    text = _read_text(args.file)
    utils = StringUtils(text)
    ranges = list(utils.matches(args.pattern, _options_from_args(args)))
    MatchReporter().generate(text, args.pattern, ranges)
    for text_range in ranges:
        utf16 = utils.utf16_range(text_range)
        sys.stdout.write(f"{utf16.location}\t{utf16.length}\t{text[text_range.as_slice()]}\n")


def _replace(args: argparse.Namespace) -> None:
    """Print the input with every match replaced."""
    text = _read_text(args.file)
    result = StringUtils(text).replace_matches(args.pattern, lambda _, __: args.replacement, _options_from_args(args))
    sys.stdout.write(result.value)


def _style(args: argparse.Namespace) -> None:
    """Print a terminal preview of the input styled with the stylesheet."""
    sheet = load_config(args.stylesheet)
    logger.info("Loaded stylesheet from: %s", args.stylesheet)
    styled = apply_stylesheet(_read_text(args.file), sheet)
    PreviewReporter().generate(styled)


_COMMANDS: dict[str, Callable[[argparse.Namespace], None]] = {
    "find": _find,
    "replace": _replace,
    "style": _style,
}


def main(argv: Sequence[str] | None = None) -> None:
    """
    Run the main entry point for the StyledText command-line interface.

    1. Parses command-line arguments.
    2. Configures logging.
    3. Runs the selected command.
    """
    args = _parse_args(argv)
    setup_logging(version=__version__, debug=args.debug, log_file=args.log_file)

    try:
        _COMMANDS[args.command](args)
    except (FileNotFoundError, ValueError, yaml.YAMLError):
        logger.exception("Command '%s' failed", args.command)
        sys.exit(1)
    except Exception:
        logger.exception("An unexpected error occurred")
        logger.critical("An unrecoverable error occurred. Please check the logs for details.")
        sys.exit(1)


if __name__ == "__main__":
    main()
