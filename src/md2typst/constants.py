#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the md2typst library.

Constants are organized by category:
1. Asset Naming
2. Typst Output
3. Table Span Markers
4. Markdown Frontend
"""

from __future__ import annotations

import re

# =============================================================================
# Asset Naming
# =============================================================================

# xxHash64 seed; asset ids must stay stable across releases, never change it
ASSET_HASH_SEED = 147154220
ASSET_ID_PREFIX = "img-"

# =============================================================================
# Typst Output
# =============================================================================

DEFAULT_FOOTNOTE_LABEL_PREFIX = "user-footnote: "
DEFAULT_IMAGE_ATTRIBUTES: tuple[str, ...] = ("width", "height")

DEFAULT_CODE_LANGUAGE = "txt"
CODE_LANGUAGE_ALIASES: dict[str, str] = {
    "plain": "txt",
    "markdown": "md",
}

TABLE_ALIGNMENT_MARKUP: dict[str, str] = {
    "left": "left + horizon",
    "center": "center + horizon",
    "right": "right + horizon",
}

FIGURE_DIRECTIVE = "figure"
FIGURE_CAPTION_ATTRIBUTE = "caption"

# One or more <number><unit> terms joined by single +/- operators
_LENGTH_NUMBER = r"(?:[0-9]+(?:\.[0-9]+)?|\.[0-9]+)"
_LENGTH_UNIT = r"(?:pt|mm|cm|in|em|%)"
_LENGTH_TERM = _LENGTH_NUMBER + _LENGTH_UNIT
TYPST_RELATIVE_LENGTH_PATTERN = re.compile(rf" *[+-]? *{_LENGTH_TERM}(?: *[+-] *{_LENGTH_TERM})* *")

# =============================================================================
# Table Span Markers
# =============================================================================

COLSPAN_MARKER = "<"
ROWSPAN_MARKER = "^"

# =============================================================================
# Markdown Frontend
# =============================================================================

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_FRONTMATTER = [("PyYAML", "yaml", "")]

RAW_TYPST_DIRECTIVE = "typst"
DEFAULT_DIRECTIVE_NAMES: tuple[str, ...] = (FIGURE_DIRECTIVE, RAW_TYPST_DIRECTIVE, "pause", "meanwhile")
DIRECTIVE_FENCE_MARKERS = ":"

# Leaf directives understood by slide templates
SLIDE_DIRECTIVE_MARKUP: dict[str, str] = {
    "pause": "#pause\n",
    "meanwhile": "#meanwhile\n",
}
