#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/api.py
"""High-level entry points: Markdown to AST, transforms, and Typst compilation.

The pipeline is::

    Markdown --parse--> Document --transforms--> Document --compile--> (source, assets)

Examples
--------
Compile a Markdown string:

    >>> from md2typst import compile_markdown
    >>> source, assets = compile_markdown("# Title\\n\\n![Logo](logo.png){width=2cm}")

Work on the tree between the steps:

    >>> from md2typst.api import apply_transforms, compile_document, default_transforms, to_ast
    >>> doc = to_ast("| a | < |\\n|---|---|\\n| 1 | 2 |")
    >>> doc = apply_transforms(doc, default_transforms())
    >>> result = compile_document(doc)

"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from md2typst.ast import Document
from md2typst.exceptions import Md2TypstError, ParsingError, TransformError
from md2typst.options import MarkdownParserOptions, TypstRendererOptions
from md2typst.parsers.base import ParserInput
from md2typst.parsers.markdown import MarkdownToAstConverter
from md2typst.renderers.typst import CompileResult, TypstRenderer
from md2typst.transforms import DocumentTransform, ImageAttributeTransform, PreambleTransform, TableSpanTransform

logger = logging.getLogger(__name__)


def to_ast(markdown: ParserInput, parser_options: Optional[MarkdownParserOptions] = None) -> Document:
    """Parse Markdown into an AST document.

    Parameters
    ----------
    markdown : str, Path, IO[bytes], IO[str] or bytes
        Markdown source. A ``str`` is the Markdown text itself; pass a
        ``Path`` to read a file.
    parser_options : MarkdownParserOptions, optional
        Frontend configuration

    Returns
    -------
    Document
        AST Document node

    Raises
    ------
    DependencyError
        If mistune is not installed
    ParsingError
        If the input cannot be read or parsing fails

    """
    try:
        return MarkdownToAstConverter(parser_options).parse(markdown)
    except Md2TypstError:
        raise
    except Exception as e:
        raise ParsingError(f"AST conversion failed: {e!r}", parsing_stage="ast_conversion", original_error=e) from e


def default_transforms() -> list[DocumentTransform]:
    """Return the transforms every compile runs: image attributes, then table spans."""
    return [ImageAttributeTransform(), TableSpanTransform()]


def apply_transforms(document: Document, transforms: Iterable[DocumentTransform]) -> Document:
    """Run ``transforms`` over ``document`` in order.

    Parameters
    ----------
    document : Document
        Document to rewrite in place
    transforms : iterable of DocumentTransform
        Transforms to apply

    Returns
    -------
    Document
        The transformed document

    Raises
    ------
    MalformedTreeError
        If a transform rejects the tree
    TransformError
        If a transform fails unexpectedly

    """
    for transform in transforms:
        transform_name = type(transform).__name__
        logger.debug(f"Applying transform: {transform_name}")
        try:
            document = transform.transform(document)
        except Md2TypstError:
            raise
        except Exception as e:
            raise TransformError(
                f"Transform {transform_name} failed: {e!r}", transform_name=transform_name, original_error=e
            ) from e
    return document


def compile_document(document: Document, renderer_options: Optional[TypstRendererOptions] = None) -> CompileResult:
    """Compile an AST document to Typst source and its image assets.

    Parameters
    ----------
    document : Document
        Root of the tree to compile
    renderer_options : TypstRendererOptions, optional
        Renderer configuration

    Returns
    -------
    CompileResult
        ``(source, assets)`` named tuple

    """
    return TypstRenderer(renderer_options).compile(document)


def compile_markdown(
    markdown: ParserInput,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[TypstRendererOptions] = None,
    transforms: Optional[Sequence[DocumentTransform]] = None,
    preamble: Optional[str] = None,
) -> CompileResult:
    """Compile Markdown to Typst source.

    Runs the default transforms, then ``transforms``, then inserts
    ``preamble`` as raw Typst before compiling.

    Parameters
    ----------
    markdown : str, Path, IO[bytes], IO[str] or bytes
        Markdown source
    parser_options : MarkdownParserOptions, optional
        Frontend configuration
    renderer_options : TypstRendererOptions, optional
        Renderer configuration
    transforms : sequence of DocumentTransform, optional
        Extra transforms run after the defaults
    preamble : str, optional
        Raw Typst placed at the top of the output, such as an ``#import``

    Returns
    -------
    CompileResult
        ``(source, assets)`` named tuple

    Examples
    --------
    >>> from md2typst.transforms import DirectiveMarkupTransform
    >>> result = compile_markdown(
    ...     "Hello\\n\\n:::{pause}\\n:::\\n\\nWorld",
    ...     transforms=[DirectiveMarkupTransform()],
    ...     preamble='#import "@preview/touying:0.5.3": *\\n\\n',
    ... )

    """
    document = to_ast(markdown, parser_options)

    pipeline: list[DocumentTransform] = default_transforms()
    pipeline.extend(transforms or [])
    if preamble:
        pipeline.append(PreambleTransform(preamble))

    document = apply_transforms(document, pipeline)
    return compile_document(document, renderer_options)


__all__ = [
    "apply_transforms",
    "compile_document",
    "compile_markdown",
    "default_transforms",
    "to_ast",
]
