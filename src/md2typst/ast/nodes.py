#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/ast/nodes.py
"""AST node definitions for the Markdown document tree.

This module defines the closed set of node classes produced by the Markdown
frontend, rewritten in place by the tree transforms, and consumed by the
Typst renderer. Every node is a dataclass deriving from :class:`Node` and
dispatches to a visitor through :meth:`Node.accept`.

Node hierarchy:

- Node (abstract base)
    - Block nodes: Document, Heading, Paragraph, CodeBlock, BlockQuote,
      List, ListItem, Table, TableRow, TableCell, ThematicBreak, HTMLBlock,
      MathBlock, Definition, FootnoteDefinition, ContainerDirective,
      LeafDirective
    - Inline nodes: Text, Emphasis, Strong, Strikethrough, Code, Link, Image,
      LinkReference, ImageReference, LineBreak, HTMLInline, MathInline,
      FootnoteReference, TextDirective
    - Raw markup nodes: TypstMarkup, TypstContent

Cross references (links, images, footnotes) point at their definitions by
string identifier only; no node holds a reference to another node outside
its own children.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

Alignment = Literal["left", "center", "right"]
ReferenceType = Literal["shortcut", "collapsed", "full"]
AttributeMap = dict[str, Optional[str]]


class Node(ABC):
    """Base class for all AST nodes.

    All document nodes inherit from this base class and support the visitor
    pattern for traversal and rendering.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary auxiliary data associated with this node. Never consulted
        for structure.

    """

    metadata: dict[str, Any]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level child nodes
    metadata : dict, default = empty dict
        Document metadata (front matter is stored here)

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node (h1-h6).

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    content : list of Node, default = empty list
        Inline nodes representing heading text
    metadata : dict, default = empty dict
        Heading metadata

    """

    level: int
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading."""
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content
    metadata : dict, default = empty dict
        Paragraph metadata

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Fenced or indented code block.

    Parameters
    ----------
    content : str
        The code, verbatim
    language : str or None, default = None
        Language tag from the fence info string
    metadata : dict, default = empty dict
        Code block metadata

    """

    content: str
    language: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote node containing block-level content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes inside the quote
    metadata : dict, default = empty dict
        Block quote metadata

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """Ordered or unordered list.

    Parameters
    ----------
    ordered : bool, default = False
        Whether this is a numbered list
    items : list of ListItem, default = empty list
        The list items
    start : int or None, default = None
        Explicit starting number of an ordered list. None when the list
        starts at the default number.
    tight : bool, default = True
        Whether the list items are separated by blank lines
    metadata : dict, default = empty dict
        List metadata

    """

    ordered: bool = False
    items: list[ListItem] = field(default_factory=list)
    start: Optional[int] = None
    tight: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item containing block-level content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes making up the item
    metadata : dict, default = empty dict
        List item metadata

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table node with optional header and alignment.

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        Table rows (excluding header)
    header : TableRow or None, default = None
        Optional header row
    alignments : list, default = empty list
        Column alignments ('left', 'center', 'right', or None). An empty
        list means no alignment row was given.
    metadata : dict, default = empty dict
        Table metadata

    """

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    alignments: list[Optional[Alignment]] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def all_rows(self) -> list[TableRow]:
        """Return the header row (if any) followed by the body rows."""
        if self.header is None:
            return list(self.rows)
        return [self.header, *self.rows]

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row node containing cells.

    Parameters
    ----------
    cells : list of TableCell, default = empty list
        Cells in this row
    is_header : bool, default = False
        Whether this is a header row
    metadata : dict, default = empty dict
        Row metadata

    """

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell node with span annotations.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline content of the cell
    colspan : int, default = 1
        Number of columns this cell spans
    rowspan : int, default = 1
        Number of rows this cell spans
    suppressed : bool, default = False
        Whether the cell was absorbed into a neighbouring cell by a span
        merge. Suppressed cells are never emitted.
    alignment : {'left', 'center', 'right'} or None, default = None
        Cell alignment
    metadata : dict, default = empty dict
        Cell metadata

    """

    content: list[Node] = field(default_factory=list)
    colspan: int = 1
    rowspan: int = 1
    suppressed: bool = False
    alignment: Optional[Alignment] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate that spans are positive."""
        if self.colspan < 1 or self.rowspan < 1:
            raise ValueError(f"Cell spans must be at least 1, got colspan={self.colspan}, rowspan={self.rowspan}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass
class ThematicBreak(Node):
    """Thematic break node (horizontal rule)."""

    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


@dataclass
class HTMLBlock(Node):
    """Raw HTML block, passed through verbatim.

    Parameters
    ----------
    content : str
        Raw HTML source
    metadata : dict, default = empty dict
        HTML block metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this HTML block."""
        return visitor.visit_html_block(self)


@dataclass
class MathBlock(Node):
    """Display math block.

    Parameters
    ----------
    content : str
        Formula source, without delimiters
    metadata : dict, default = empty dict
        Math block metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this math block."""
        return visitor.visit_math_block(self)


@dataclass
class Definition(Node):
    """Link reference definition (``[label]: url "title"``).

    Definitions produce no output where they appear; reference nodes look
    them up by identifier.

    Parameters
    ----------
    identifier : str
        Normalized identifier used for lookups
    url : str
        Destination URL
    title : str or None, default = None
        Optional title
    label : str or None, default = None
        The label as written in the source
    metadata : dict, default = empty dict
        Definition metadata

    """

    identifier: str
    url: str
    title: Optional[str] = None
    label: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition."""
        return visitor.visit_definition(self)


@dataclass
class FootnoteDefinition(Node):
    """Footnote definition containing block-level content.

    Parameters
    ----------
    identifier : str
        Footnote identifier
    content : list of Node, default = empty list
        Block-level nodes making up the footnote body
    metadata : dict, default = empty dict
        Footnote metadata

    """

    identifier: str
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote definition."""
        return visitor.visit_footnote_definition(self)


@dataclass
class ContainerDirective(Node):
    """Block directive wrapping block-level content (``:::{name}``).

    Parameters
    ----------
    name : str
        Directive name, e.g. ``"figure"``
    attributes : dict, default = empty dict
        Directive attributes
    children : list of Node, default = empty list
        Block-level content
    metadata : dict, default = empty dict
        Directive metadata

    """

    name: str
    attributes: AttributeMap = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this container directive."""
        return visitor.visit_container_directive(self)


@dataclass
class LeafDirective(Node):
    """Block directive with inline content only.

    Parameters
    ----------
    name : str
        Directive name
    attributes : dict, default = empty dict
        Directive attributes
    content : list of Node, default = empty list
        Inline content
    metadata : dict, default = empty dict
        Directive metadata

    """

    name: str
    attributes: AttributeMap = field(default_factory=dict)
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this leaf directive."""
        return visitor.visit_leaf_directive(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    content : str
        The literal text
    metadata : dict, default = empty dict
        Text metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasis (italic) inline node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) inline node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong emphasis."""
        return visitor.visit_strong(self)


@dataclass
class Strikethrough(Node):
    """Strikethrough inline node (``~~text~~``)."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strikethrough."""
        return visitor.visit_strikethrough(self)


@dataclass
class Code(Node):
    """Inline code span.

    Parameters
    ----------
    content : str
        The code, verbatim
    metadata : dict, default = empty dict
        Code metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline code."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Inline hyperlink.

    Parameters
    ----------
    url : str
        Link destination
    content : list of Node, default = empty list
        Link text as inline nodes
    title : str or None, default = None
        Optional link title
    metadata : dict, default = empty dict
        Link metadata

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Inline image.

    Parameters
    ----------
    url : str
        Image source URL
    alt_text : str, default = ""
        Alternative text
    title : str or None, default = None
        Optional image title
    attributes : dict, default = empty dict
        Attributes attached by an inline ``{key=value}`` block following the
        image. A value of None means the key was given without a value.
    metadata : dict, default = empty dict
        Image metadata

    """

    url: str
    alt_text: str = ""
    title: Optional[str] = None
    attributes: AttributeMap = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


@dataclass
class LinkReference(Node):
    """Reference-style link (``[text][label]``, ``[text][]`` or ``[text]``).

    Parameters
    ----------
    identifier : str
        Normalized identifier of the target definition
    label : str or None, default = None
        The label as written in the source
    reference_type : {'shortcut', 'collapsed', 'full'}, default = 'full'
        Which reference syntax was used
    content : list of Node, default = empty list
        Link text as inline nodes
    metadata : dict, default = empty dict
        Reference metadata

    """

    identifier: str
    label: Optional[str] = None
    reference_type: ReferenceType = "full"
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link reference."""
        return visitor.visit_link_reference(self)


@dataclass
class ImageReference(Node):
    """Reference-style image (``![alt][label]``).

    Parameters
    ----------
    identifier : str
        Normalized identifier of the target definition
    label : str or None, default = None
        The label as written in the source
    reference_type : {'shortcut', 'collapsed', 'full'}, default = 'full'
        Which reference syntax was used
    alt_text : str, default = ""
        Alternative text
    attributes : dict, default = empty dict
        Attributes attached by an inline ``{key=value}`` block
    metadata : dict, default = empty dict
        Reference metadata

    """

    identifier: str
    label: Optional[str] = None
    reference_type: ReferenceType = "full"
    alt_text: str = ""
    attributes: AttributeMap = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image reference."""
        return visitor.visit_image_reference(self)


@dataclass
class LineBreak(Node):
    """Line break.

    Parameters
    ----------
    soft : bool, default = False
        True for a soft break (a newline inside a paragraph), False for a
        hard break (trailing backslash or two spaces)
    metadata : dict, default = empty dict
        Line break metadata

    """

    soft: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line break."""
        return visitor.visit_line_break(self)


@dataclass
class HTMLInline(Node):
    """Inline raw HTML."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline HTML."""
        return visitor.visit_html_inline(self)


@dataclass
class MathInline(Node):
    """Inline math (``$...$``)."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline math."""
        return visitor.visit_math_inline(self)


@dataclass
class FootnoteReference(Node):
    """Footnote reference (``[^identifier]``).

    Parameters
    ----------
    identifier : str
        Identifier of the target footnote definition
    metadata : dict, default = empty dict
        Reference metadata

    """

    identifier: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote reference."""
        return visitor.visit_footnote_reference(self)


@dataclass
class TextDirective(Node):
    """Inline directive carrying inline content."""

    name: str
    attributes: AttributeMap = field(default_factory=dict)
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text directive."""
        return visitor.visit_text_directive(self)


# ============================================================================
# Raw Typst Nodes
# ============================================================================


@dataclass
class TypstMarkup(Node):
    """Container splicing raw Typst into the tree.

    Transforms use this node to inject target markup (template headers,
    slide controls). Its children are rendered without any wrapper; usually
    they are :class:`TypstContent` leaves, but ordinary inline nodes are
    allowed and rendered as usual.

    Parameters
    ----------
    children : list of Node, default = empty list
        Nodes to render in place
    metadata : dict, default = empty dict
        Metadata

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this markup container."""
        return visitor.visit_typst_markup(self)


@dataclass
class TypstContent(Node):
    """Literal Typst source, emitted verbatim without escaping."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this literal markup."""
        return visitor.visit_typst_content(self)


# ============================================================================
# Child access helpers
# ============================================================================

_BLOCK_CHILDREN = (Document, BlockQuote, ListItem, ContainerDirective, TypstMarkup)
_INLINE_CHILDREN = (
    Heading,
    Paragraph,
    Emphasis,
    Strong,
    Strikethrough,
    Link,
    LinkReference,
    TableCell,
    FootnoteDefinition,
    LeafDirective,
    TextDirective,
)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    This is the single place that knows which field holds the children of
    each node kind. The returned list is a copy; use
    :func:`set_node_children` to change the children of a container.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Strong(content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, _BLOCK_CHILDREN):
        return list(node.children)

    if isinstance(node, _INLINE_CHILDREN):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        return list(node.all_rows())

    if isinstance(node, TableRow):
        return list(node.cells)

    # Leaf nodes (no children)
    return []


def set_node_children(node: Node, children: list[Node]) -> None:
    """Replace the children of a container node in place.

    Only nodes whose children are a plain sequence field are supported;
    lists, tables and rows keep their own typed structure.

    Parameters
    ----------
    node : Node
        Container node to modify
    children : list of Node
        New children

    Raises
    ------
    ValueError
        If the node kind does not hold a plain child sequence

    """
    if isinstance(node, _BLOCK_CHILDREN):
        node.children = children
    elif isinstance(node, _INLINE_CHILDREN):
        node.content = children
    else:
        raise ValueError(f"Cannot replace children of {type(node).__name__} nodes")
