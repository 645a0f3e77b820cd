#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/parsers/__init__.py
"""Parsers building the md2typst AST from Markdown."""

from md2typst.parsers.base import BaseParser
from md2typst.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = ["BaseParser", "MarkdownToAstConverter", "markdown_to_ast"]
