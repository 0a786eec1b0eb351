#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/renderers/__init__.py
"""Renderers turning event streams into output text."""

from mdcanon.renderers.base import BaseRenderer, References
from mdcanon.renderers.markdown import MarkdownRenderer, render_markdown

__all__ = ["BaseRenderer", "MarkdownRenderer", "References", "render_markdown"]
