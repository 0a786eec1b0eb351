#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/utils/decorators.py
"""Timing helpers shared by the parser and the renderer."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger receiving the timing message
    operation : str
        Description of the timed operation (e.g., "Tokenizing markdown")

    Examples
    --------
        >>> logger = logging.getLogger(__name__)
        >>> with debug_timer(logger, "Rendering markdown"):
        ...     renderer.render(events, sink)
        ... # Logs: "Rendering markdown completed in 0.01s" at DEBUG level

    Notes
    -----
    The clock is only read when DEBUG is enabled for ``logger``.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield


def timed(logger: logging.Logger, operation: str) -> Callable:
    """Decorator form of :func:`debug_timer`.

    Examples
    --------
        >>> @timed(logger, "Formatting file")
        ... def format_file(path):
        ...     ...

    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with debug_timer(logger, operation):
                return func(*args, **kwargs)

        return wrapper

    return decorator
