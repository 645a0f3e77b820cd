#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/options/__init__.py
"""Frozen dataclass options for the Markdown parser and Typst renderer."""

from md2typst.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from md2typst.options.markdown import MarkdownParserOptions
from md2typst.options.typst import TypstRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "TypstRendererOptions",
]
