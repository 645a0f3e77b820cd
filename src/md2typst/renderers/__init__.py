#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/renderers/__init__.py
"""Renderers turning the document AST into target markup."""

from md2typst.renderers.base import BaseRenderer
from md2typst.renderers.typst import Asset, CompileResult, TypstRenderer

__all__ = ["Asset", "BaseRenderer", "CompileResult", "TypstRenderer"]
