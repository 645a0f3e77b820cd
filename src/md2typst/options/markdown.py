#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the Markdown frontend.

This module defines which Markdown extensions the mistune-based parser
enables when building the document tree.
"""
# src/md2typst/options/markdown.py


from __future__ import annotations

import re
from dataclasses import dataclass, field

from md2typst.constants import DEFAULT_DIRECTIVE_NAMES
from md2typst.options.base import BaseParserOptions

_DIRECTIVE_NAME_RE = re.compile(r"[a-zA-Z0-9_-]+")


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    parse_tables : bool, default True
        Whether to parse table syntax (GFM pipe tables).
    parse_footnotes : bool, default True
        Whether to parse footnote references and definitions.
    parse_math : bool, default True
        Whether to parse inline ($...$) and block ($$...$$) math.
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (~~text~~).
    parse_frontmatter : bool, default True
        Whether to strip a leading YAML front matter block into
        ``Document.metadata``.
    parse_directives : bool, default True
        Whether to parse colon-fenced directives (``:::{figure} Caption``).
    directive_names : tuple of str
        Directive names recognized by the fenced directive syntax. Fences
        with other names are left as plain text.

    """

    parse_tables: bool = field(
        default=True,
        metadata={"help": "Parse table syntax (GFM pipe tables)", "cli_name": "no-parse-tables", "importance": "core"},
    )
    parse_footnotes: bool = field(
        default=True,
        metadata={
            "help": "Parse footnote references and definitions",
            "cli_name": "no-parse-footnotes",
            "importance": "core",
        },
    )
    parse_math: bool = field(
        default=True,
        metadata={
            "help": "Parse inline and block math ($...$ and $$...$$)",
            "cli_name": "no-parse-math",
            "importance": "core",
        },
    )
    parse_strikethrough: bool = field(
        default=True,
        metadata={
            "help": "Parse strikethrough syntax (~~text~~)",
            "cli_name": "no-parse-strikethrough",
            "importance": "core",
        },
    )
    parse_frontmatter: bool = field(
        default=True,
        metadata={
            "help": "Parse YAML front matter at document start",
            "cli_name": "no-parse-frontmatter",
            "importance": "core",
        },
    )
    parse_directives: bool = field(
        default=True,
        metadata={
            "help": "Parse colon-fenced directives (:::{name} title)",
            "cli_name": "no-parse-directives",
            "importance": "advanced",
        },
    )
    directive_names: tuple[str, ...] = field(
        default=DEFAULT_DIRECTIVE_NAMES,
        metadata={"help": "Directive names recognized by the fenced directive syntax", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate directive names.

        Raises
        ------
        ValueError
            If a directive name contains characters the fence syntax cannot
            express.

        """
        super().__post_init__()
        for name in self.directive_names:
            if not _DIRECTIVE_NAME_RE.fullmatch(name):
                raise ValueError(f"Invalid directive name {name!r}: use letters, digits, '_' or '-'")
