#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/cli.py
"""Command line interface for mdcanon.

Usage::

    mdcanon README.md docs/*.md          # print formatted output
    mdcanon --in-place README.md         # rewrite files
    mdcanon --check docs/*.md            # exit 1 if anything would change
    cat notes.md | mdcanon --emphasis-marker '*'

Style and parser flags are generated from the option dataclasses' field
metadata, so every option field that can be expressed on the command line
is available there.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any, Optional

from mdcanon.api import format_markdown
from mdcanon.config import load_config_with_priority, merge_configs, options_from_config
from mdcanon.constants import (
    CONFIG_ENV_VAR,
    EXIT_CHECK_FAILED,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from mdcanon.exceptions import (
    FileError,
    MdcanonError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from mdcanon.logging_utils import DEFAULT_LOG_LEVEL, configure_logging
from mdcanon.options.markdown import MarkdownFormatOptions, MarkdownParserOptions
from mdcanon.parsers.base import load_text
from mdcanon.utils.decorators import timed
from mdcanon.utils.io_utils import open_text_sink

logger = logging.getLogger(__name__)

STDIN_NAME = "-"


def _get_version() -> str:
    """Get the version of the mdcanon package."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("mdcanon")
    except PackageNotFoundError:
        return "unknown"


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR


def _add_option_arguments(group: argparse._ArgumentGroup, options_class: type) -> None:
    """Add one flag per option field that carries a ``cli_name``.

    Boolean fields default to True and get a negative ``--no-*`` flag; the
    other fields take a value. Every flag defaults to None so that only
    flags actually given override configuration file values.
    """
    for field in fields(options_class):
        metadata = field.metadata
        if metadata.get("exclude_from_cli") or "cli_name" not in metadata:
            continue

        flag = f"--{metadata['cli_name']}"
        if field.type in ("bool", bool):
            group.add_argument(flag, dest=field.name, action="store_const", const=False, help=metadata.get("help"))
        else:
            group.add_argument(
                flag,
                dest=field.name,
                choices=metadata.get("choices"),
                metavar="MARKER" if "choices" not in metadata else None,
                help=metadata.get("help"),
            )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mdcanon",
        description="Reformat CommonMark documents into a canonical style.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Markdown files to format; '-' or no file reads standard input",
    )
    parser.add_argument("--version", action="version", version=f"mdcanon {_get_version()}")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--in-place", "-i", action="store_true", help="Rewrite files instead of printing them")
    mode.add_argument(
        "--check",
        action="store_true",
        help="Write nothing; exit with status 1 if any input is not already formatted",
    )

    style = parser.add_argument_group("style options")
    _add_option_arguments(style, MarkdownFormatOptions)

    syntax = parser.add_argument_group("parser options")
    _add_option_arguments(syntax, MarkdownParserOptions)

    config = parser.add_argument_group("configuration")
    config.add_argument("--config", help=f"Configuration file (overrides ${CONFIG_ENV_VAR} and discovery)")
    config.add_argument("--no-config", action="store_true", help="Ignore discovered configuration files")

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log messages to this file")
    logging_group.add_argument("--verbose", "-v", action="store_true", help="Shortcut for --log-level DEBUG")
    logging_group.add_argument(
        "--trace", action="store_true", help="Debug logging with timestamps and logger names"
    )

    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging from the command-line switches."""
    configure_logging(
        parsed_args.log_level,
        log_file=parsed_args.log_file,
        verbose=parsed_args.verbose,
        trace=parsed_args.trace,
    )


def _cli_overrides(parsed_args: argparse.Namespace) -> dict[str, Any]:
    names = MarkdownFormatOptions.field_names() + MarkdownParserOptions.field_names()
    return {name: getattr(parsed_args, name) for name in names if getattr(parsed_args, name, None) is not None}


def build_options(parsed_args: argparse.Namespace) -> tuple[MarkdownFormatOptions, MarkdownParserOptions]:
    """Combine configuration files and command-line flags into options.

    Raises
    ------
    ConfigError
        If a configuration file or a flag value is invalid

    """
    env_path = None if parsed_args.no_config else os.environ.get(CONFIG_ENV_VAR)
    config = load_config_with_priority(
        explicit_path=parsed_args.config,
        env_var_path=env_path,
        discover=not parsed_args.no_config,
    )
    return options_from_config(merge_configs(config, _cli_overrides(parsed_args)))


def _read_source(name: str) -> str:
    # Same loader as the parser, so a byte order mark never counts as a change
    if name == STDIN_NAME:
        return load_text(sys.stdin)
    return load_text(Path(name))


def _write_file(name: str, content: str) -> None:
    with open_text_sink(Path(name)) as sink:
        sink.write(content)


@timed(logger, "Processing file")
def process_file(
    name: str,
    parsed_args: argparse.Namespace,
    format_options: MarkdownFormatOptions,
    parser_options: MarkdownParserOptions,
) -> bool:
    """Format one input according to the selected mode.

    Returns
    -------
    bool
        False when ``--check`` finds the input unformatted, True otherwise

    """
    source = _read_source(name)
    formatted = format_markdown(source, format_options, parser_options)

    if parsed_args.check:
        if formatted != source:
            display = "<stdin>" if name == STDIN_NAME else name
            print(f"would reformat {display}", file=sys.stderr)
            return False
        return True

    if parsed_args.in_place and name != STDIN_NAME:
        if formatted != source:
            logger.info(f"Reformatted {name}")
            _write_file(name, formatted)
        else:
            logger.debug(f"{name} already formatted")
        return True

    sys.stdout.write(formatted)
    return True


def main(args: Optional[list[str]] = None) -> int:
    """Execute the command line tool and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    inputs = parsed_args.files or [STDIN_NAME]
    if parsed_args.in_place and STDIN_NAME in inputs:
        print("Error: --in-place cannot be used with standard input", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        format_options, parser_options = build_options(parsed_args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    exit_code = EXIT_SUCCESS
    for name in inputs:
        try:
            if not process_file(name, parsed_args, format_options, parser_options):
                exit_code = exit_code or EXIT_CHECK_FAILED
        except MdcanonError as e:
            logger.error(f"{name}: {e}")
            exit_code = exit_code or get_exit_code_for_exception(e)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
