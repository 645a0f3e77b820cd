#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/ast/__init__.py
"""Abstract Syntax Tree (AST) module for Markdown documents.

The Markdown frontend builds a tree of the node classes defined here; the
tree transforms rewrite it in place and the Typst renderer consumes it.

- nodes: AST node classes representing document structure
- visitors: Visitor base class used by renderers
- utils: Traversal and text extraction helpers

Examples
--------
Basic usage:

    >>> from md2typst.ast import Document, Heading, Paragraph, Text
    >>> from md2typst.renderers.typst import TypstRenderer
    >>>
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])
    >>> source, assets = TypstRenderer().compile(doc)

"""

from __future__ import annotations

from md2typst.ast.nodes import (
    Alignment,
    AttributeMap,
    BlockQuote,
    Code,
    CodeBlock,
    ContainerDirective,
    Definition,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    ImageReference,
    LeafDirective,
    LineBreak,
    Link,
    LinkReference,
    List,
    ListItem,
    MathBlock,
    MathInline,
    Node,
    Paragraph,
    ReferenceType,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    TextDirective,
    ThematicBreak,
    TypstContent,
    TypstMarkup,
    get_node_children,
    set_node_children,
)
from md2typst.ast.utils import extract_text, find_nodes, walk
from md2typst.ast.visitors import NodeVisitor

__all__ = [
    # Types
    "Alignment",
    "AttributeMap",
    "ReferenceType",
    # Base
    "Node",
    # Block nodes
    "Document",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "BlockQuote",
    "List",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "ThematicBreak",
    "HTMLBlock",
    "MathBlock",
    "Definition",
    "FootnoteDefinition",
    "ContainerDirective",
    "LeafDirective",
    # Inline nodes
    "Text",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Code",
    "Link",
    "Image",
    "LinkReference",
    "ImageReference",
    "LineBreak",
    "HTMLInline",
    "MathInline",
    "FootnoteReference",
    "TextDirective",
    # Raw markup
    "TypstMarkup",
    "TypstContent",
    # Helpers
    "NodeVisitor",
    "get_node_children",
    "set_node_children",
    "walk",
    "find_nodes",
    "extract_text",
]
