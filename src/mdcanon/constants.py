#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for mdcanon.

This module centralizes the hardcoded markers, literal tokens and default
configuration values used across the formatter.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Style Defaults - Configurable marker defaults
3. Fixed Markdown Tokens - Delimiters the renderer always emits
4. Escaping - Characters that trigger backslash escapes
5. Configuration and CLI - Config file names, environment variables, exit codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

EmphasisSymbol = Literal["*", "_"]
BulletSymbol = Literal["-", "*", "+"]
CodeBlockKind = Literal["fenced", "indented"]

# =============================================================================
# Style Defaults
# =============================================================================

DEFAULT_BLOCKQUOTE_MARKER = ">"
DEFAULT_EMPHASIS_MARKER: EmphasisSymbol = "_"
DEFAULT_UNORDERED_LIST_MARKER: BulletSymbol = "-"

EMPHASIS_SYMBOLS: tuple[str, ...] = ("*", "_")
BULLET_SYMBOLS: tuple[str, ...] = ("-", "*", "+")

# =============================================================================
# Fixed Markdown Tokens
# =============================================================================

STRONG_MARKER = "**"
STRIKETHROUGH_MARKER = "~~"
CODE_FENCE = "```"
THEMATIC_BREAK = "---"
CODE_INDENT = "    "

# Narrowest divider cell a table column can have ("---")
MIN_TABLE_COLUMN_WIDTH = 3

# =============================================================================
# Escaping
# =============================================================================

# Escaped whenever they open a text fragment
ALWAYS_ESCAPED_CHARS = frozenset("\\<>*_`[]~")

# Escaped only when they would open an output line
LINE_START_ESCAPED_CHARS = frozenset("#-+")

TABLE_CELL_SEPARATOR = "|"

# =============================================================================
# Configuration and CLI
# =============================================================================

CONFIG_FILENAMES = [".mdcanon.toml", ".mdcanon.yaml", ".mdcanon.yml", ".mdcanon.json"]
PYPROJECT_TOOL_SECTION = "mdcanon"
CONFIG_ENV_VAR = "MDCANON_CONFIG"

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CHECK_FAILED = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7
