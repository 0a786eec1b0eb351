#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/logging_utils.py
"""Logging policy for the mdcanon command line tool.

Library modules only create ``logging.getLogger(__name__)`` loggers and
never install handlers. The command line tool calls :func:`configure_logging`
once, which decides the level from ``--log-level``, ``--verbose`` and
``--trace`` and routes records to stderr and, optionally, a log file.

Formatted markdown goes to stdout, so log output must never share it.

"""

from __future__ import annotations

import logging
import sys
from typing import Optional

DEFAULT_LOG_LEVEL = "WARNING"

_PLAIN_FORMAT = "mdcanon: %(levelname)s: %(message)s"
_TRACE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-8s %(name)s: %(message)s"
_TRACE_DATE_FORMAT = "%H:%M:%S"

logger = logging.getLogger(__name__)


def resolve_log_level(log_level: int | str = DEFAULT_LOG_LEVEL, verbose: bool = False, trace: bool = False) -> int:
    """Pick the effective level from the command line switches.

    ``trace`` always means DEBUG. ``verbose`` means DEBUG only while the level
    is still the default, so an explicit ``--log-level`` wins over it.

    Raises
    ------
    ValueError
        If ``log_level`` is not a known level name

    Examples
    --------
        >>> resolve_log_level("INFO", verbose=True) == logging.INFO
        True
        >>> resolve_log_level(verbose=True) == logging.DEBUG
        True

    """
    if trace:
        return logging.DEBUG

    if isinstance(log_level, int):
        level = log_level
    else:
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level '{log_level}'")

    if verbose and level == logging.getLevelName(DEFAULT_LOG_LEVEL):
        return logging.DEBUG
    return level


def _formatter(trace: bool) -> logging.Formatter:
    if trace:
        return logging.Formatter(_TRACE_FORMAT, datefmt=_TRACE_DATE_FORMAT)
    return logging.Formatter(_PLAIN_FORMAT)


def configure_logging(
    log_level: int | str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    verbose: bool = False,
    trace: bool = False,
) -> logging.Logger:
    """Install mdcanon's stderr and log file handlers on the root logger.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.

    Parameters
    ----------
    log_level : int or str, default "WARNING"
        Level number or name
    log_file : str, optional
        File that receives the same records as stderr, appended to
    verbose : bool, default False
        Lower the default level to DEBUG
    trace : bool, default False
        DEBUG level with timestamps and logger names

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = resolve_log_level(log_level, verbose=verbose, trace=trace)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: Optional[OSError] = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            file_error = e

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    formatter = _formatter(trace)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    # Reported once handlers exist, so the warning is not lost
    if file_error is not None:
        logger.warning(f"Could not open log file {log_file}: {file_error}")
    elif log_file:
        logger.debug(f"Logging to file: {log_file}")

    return root
