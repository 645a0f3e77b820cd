"""md2typst - compile Markdown documents to Typst markup.

md2typst parses Markdown (CommonMark plus GFM tables, footnotes, math and
colon-fenced directives) into a typed AST, rewrites the tree with a small
set of transforms, and compiles it to Typst source together with the list
of image assets the source refers to.

Key Features
------------
- ``{width=5cm height=2cm}`` attribute blocks after images
- ``<`` and ``^`` table cells merged into column and row spans
- Reference links, reference images and footnotes resolved in a
  collect-then-emit compile
- Content-addressed image asset ids (xxHash64)
- Raw Typst blocks, preambles and slide directives for templates

Examples
--------
Compile a Markdown string:

    >>> from md2typst import compile_markdown
    >>> source, assets = compile_markdown("# Hello\\n\\n![Logo](logo.png){width=2cm}")
    >>> [asset.source_url for asset in assets]
    ['logo.png']

Compile a hand-built tree:

    >>> from md2typst import TypstRenderer
    >>> from md2typst.ast import Document, Paragraph, Text
    >>> TypstRenderer().compile(Document(children=[Paragraph(content=[Text(content="Hi")])])).source
    '#par[#"Hi"]\\n\\n#hide(place(top+left, [\\n]))\\n'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "md2typst requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from md2typst.api import apply_transforms, compile_document, compile_markdown, default_transforms, to_ast
from md2typst.exceptions import (
    DependencyError,
    MalformedTreeError,
    Md2TypstError,
    ParsingError,
    RenderingError,
    TransformError,
)
from md2typst.options import MarkdownParserOptions, TypstRendererOptions
from md2typst.renderers.typst import Asset, CompileResult, TypstRenderer

__all__ = [
    "__version__",
    "compile_markdown",
    "compile_document",
    "to_ast",
    "apply_transforms",
    "default_transforms",
    "Asset",
    "CompileResult",
    "TypstRenderer",
    "MarkdownParserOptions",
    "TypstRendererOptions",
    "Md2TypstError",
    "DependencyError",
    "MalformedTreeError",
    "ParsingError",
    "RenderingError",
    "TransformError",
]
