#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/utils/__init__.py
"""Shared utilities for mdcanon."""

from mdcanon.utils.decorators import debug_timer, timed
from mdcanon.utils.io_utils import OutputDestination, is_binary_stream, open_text_sink

__all__ = ["OutputDestination", "debug_timer", "is_binary_stream", "open_text_sink", "timed"]
