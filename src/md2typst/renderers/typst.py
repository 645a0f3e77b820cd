#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/renderers/typst.py
"""Typst rendering from AST.

This module provides the :class:`TypstRenderer`, which compiles a Markdown
document tree into Typst source text plus the list of image assets the
source refers to.

Compilation runs in two passes. :func:`collect_definitions` first walks the
whole tree and records every link definition and footnote definition by
identifier, so references may precede what they point at. The renderer then
visits the tree once, appending output fragments to a
:class:`CompilerContext`. Footnote bodies are emitted after the document body,
inside a hidden block, and only for footnotes that were referenced.

All text is emitted as Typst string literals (``#"..."``), so user content is
never interpreted as Typst markup; :class:`~md2typst.ast.TypstContent` is the
one way to splice raw markup into the output.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, NamedTuple, Optional, Union

import xxhash

from md2typst.ast.nodes import (
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
)
from md2typst.ast.utils import walk
from md2typst.ast.visitors import NodeVisitor
from md2typst.constants import (
    ASSET_HASH_SEED,
    ASSET_ID_PREFIX,
    CODE_LANGUAGE_ALIASES,
    DEFAULT_CODE_LANGUAGE,
    FIGURE_CAPTION_ATTRIBUTE,
    FIGURE_DIRECTIVE,
    TABLE_ALIGNMENT_MARKUP,
    TYPST_RELATIVE_LENGTH_PATTERN,
)
from md2typst.exceptions import MalformedTreeError
from md2typst.options.typst import TypstRendererOptions
from md2typst.renderers.base import BaseRenderer

logger = logging.getLogger(__name__)


def escape_typst_string(text: str) -> str:
    r"""Escape text for use inside a double-quoted Typst string literal.

    Backslash is replaced first, then the double quote, newline, tab and
    carriage return.

    Examples
    --------
    >>> escape_typst_string('say "hi"\n')
    'say \\"hi\\"\\n'

    """
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )


def asset_id_for(url: str) -> str:
    """Return the content-addressed asset id for an image URL.

    The id is ``"img-"`` followed by the 16 lowercase hex digits of the
    xxHash64 of the UTF-8 encoded URL. It depends on nothing but the URL.

    Parameters
    ----------
    url : str
        Image source URL

    Returns
    -------
    str
        Asset id, used as the file name the caller stores the image under

    """
    return ASSET_ID_PREFIX + xxhash.xxh64_hexdigest(url.encode("utf-8"), seed=ASSET_HASH_SEED)


def is_valid_relative_length(value: str) -> bool:
    """Check whether ``value`` is a Typst relative length such as ``1pt + 50%``."""
    return TYPST_RELATIVE_LENGTH_PATTERN.fullmatch(value) is not None


@dataclass(frozen=True)
class Asset:
    """An image the compiled source refers to.

    Parameters
    ----------
    source_url : str
        Where the caller should fetch the image from
    asset_id : str
        File name the image must be stored under next to the Typst source

    """

    source_url: str
    asset_id: str


class CompileResult(NamedTuple):
    """Typst source and the assets it references."""

    source: str
    assets: list[Asset]


@dataclass
class FootnoteState:
    """A collected footnote definition and whether anything referenced it."""

    definition: FootnoteDefinition
    visited: bool = False


@dataclass
class CompilerContext:
    """Mutable state of a single compile.

    Parameters
    ----------
    output : list of str
        Output fragments, joined once the document is done
    assets : list of Asset
        Images in order of appearance; a URL used twice is listed twice
    definitions : dict
        First link definition per identifier
    footnotes : dict
        First footnote definition per identifier, in document order

    """

    output: list[str] = field(default_factory=list)
    assets: list[Asset] = field(default_factory=list)
    definitions: dict[str, Definition] = field(default_factory=dict)
    footnotes: dict[str, FootnoteState] = field(default_factory=dict)


def collect_definitions(document: Node, context: CompilerContext) -> None:
    """Record link and footnote definitions found anywhere under ``document``.

    When an identifier is defined more than once the first definition wins.

    Parameters
    ----------
    document : Node
        Root of the tree to scan
    context : CompilerContext
        Context whose ``definitions`` and ``footnotes`` maps are filled

    """
    for node in walk(document):
        if isinstance(node, Definition):
            context.definitions.setdefault(node.identifier, node)
        elif isinstance(node, FootnoteDefinition):
            if node.identifier not in context.footnotes:
                context.footnotes[node.identifier] = FootnoteState(definition=node)

    logger.debug(
        "Collected %d definitions and %d footnote definitions",
        len(context.definitions),
        len(context.footnotes),
    )


class TypstRenderer(NodeVisitor, BaseRenderer):
    """Render AST nodes to Typst source.

    Parameters
    ----------
    options : TypstRendererOptions or None, default = None
        Typst rendering options

    Examples
    --------
    Basic usage:

        >>> from md2typst.ast import Document, Paragraph, Text
        >>> from md2typst.renderers.typst import TypstRenderer
        >>> doc = Document(children=[Paragraph(content=[Text(content="Hi")])])
        >>> result = TypstRenderer().compile(doc)
        >>> print(result.source)
        #par[#"Hi"]
        <BLANKLINE>
        #hide(place(top+left, [
        ]))
        <BLANKLINE>

    """

    def __init__(self, options: TypstRendererOptions | None = None):
        """Initialize the Typst renderer with options."""
        BaseRenderer._validate_options_type(options, TypstRendererOptions, "typst")
        options = options or TypstRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: TypstRendererOptions = options
        self.context = CompilerContext()

    def compile(self, document: Document) -> CompileResult:
        """Compile a document to Typst source.

        Parameters
        ----------
        document : Document
            Root of the tree to compile

        Returns
        -------
        CompileResult
            The Typst source and the assets it references

        Raises
        ------
        MalformedTreeError
            If the root is not a Document or the tree breaks a structural
            precondition (a table row outside a table, an unknown alignment)

        """
        if not isinstance(document, Document):
            raise MalformedTreeError(
                f"Expected a Document root, got {type(document).__name__}",
                node_type=type(document).__name__,
                rendering_stage="typst",
            )

        self.context = CompilerContext()
        collect_definitions(document, self.context)
        document.accept(self)

        logger.debug("Compiled document with %d assets", len(self.context.assets))
        return CompileResult("".join(self.context.output), list(self.context.assets))

    def render_to_string(self, document: Document) -> str:
        """Render a document AST to a Typst string."""
        return self.compile(document).source

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the AST to Typst and write it to ``output``."""
        self.write_text_output(self.render_to_string(doc), output)

    def _emit(self, *fragments: str) -> None:
        self.context.output.extend(fragments)

    def _render_children(self, children: list[Node]) -> None:
        for child in children:
            child.accept(self)

    def _render_image(self, url: str, alt_text: str, attributes: AttributeMap) -> None:
        asset_id = asset_id_for(url)
        self._emit('#box(image("', asset_id, '"')

        for name in self.options.image_attributes:
            value = attributes.get(name)
            if value is None:
                continue
            if is_valid_relative_length(value):
                self._emit(f", {name}: {value}")
            else:
                logger.warning("Ignoring image %s %r for %s: not a Typst relative length", name, value, url)

        if alt_text:
            self._emit(', alt: "', escape_typst_string(alt_text), '"')
        self._emit("))")

        self.context.assets.append(Asset(source_url=url, asset_id=asset_id))
        logger.debug("Discovered asset %s for %s", asset_id, url)

    def _reference_suffix(self, reference_type: ReferenceType, label: Optional[str], identifier: str) -> str:
        """Closing part of an unresolved reference, rendered as literal text."""
        suffix = '#"]'
        if reference_type == "collapsed":
            suffix += "[]"
        elif reference_type == "full":
            suffix += "[" + escape_typst_string(label or identifier) + "]"
        return suffix + '"'

    def _footnote_label(self, identifier: str) -> str:
        return escape_typst_string(self.options.footnote_label_prefix + identifier)

    def visit_document(self, node: Document) -> None:
        """Render the document body followed by the referenced footnotes."""
        self._render_children(node.children)
        self._emit("\n")

        # Footnote bodies live in a hidden block; references point at their labels
        self._emit("#hide(place(top+left, [\n")
        for identifier, state in self.context.footnotes.items():
            if not state.visited:
                continue
            self._emit("#footnote[\n")
            self._render_children(state.definition.content)
            self._emit(']#label("', self._footnote_label(identifier), '")\n')
        self._emit("]))\n")

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node."""
        self._emit(f"#heading(level: {node.level}, [")
        self._render_children(node.content)
        self._emit("])\n")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        self._emit("#par[")
        self._render_children(node.content)
        self._emit("]\n")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node."""
        language = node.language or DEFAULT_CODE_LANGUAGE
        language = CODE_LANGUAGE_ALIASES.get(language, language)
        self._emit(
            f'#raw(block: true, lang: "{escape_typst_string(language)}", "',
            escape_typst_string(node.content),
            '")\n',
        )

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node."""
        self._emit("#quote(block: true)[\n")
        self._render_children(node.children)
        self._emit("]\n")

    def visit_list(self, node: List) -> None:
        """Render a List node as ``#enum`` or ``#list``."""
        if node.ordered:
            self._emit("#enum(")
            if node.start is not None:
                self._emit(f"start: {node.start},")
        else:
            self._emit("#list(")
        self._emit("\n")

        for item in node.items:
            self._emit("[")
            item.accept(self)
            self._emit("],\n")

        self._emit(")\n")

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node; paragraphs are unwrapped into the item."""
        for child in node.children:
            if isinstance(child, Paragraph):
                self._render_children(child.content)
            else:
                child.accept(self)

    def visit_table(self, node: Table) -> None:
        """Render a Table node as a figure holding a Typst table."""
        rows = node.all_rows()
        if not rows:
            return

        columns = len(node.alignments) if node.alignments else len(rows[0].cells)
        alignments: list[str] = []
        for i in range(columns):
            alignment = node.alignments[i] if i < len(node.alignments) else None
            if alignment is None:
                alignment = "center"
            if alignment not in TABLE_ALIGNMENT_MARKUP:
                raise MalformedTreeError(
                    f"Unknown table alignment: {alignment}", node_type="Table", rendering_stage="typst"
                )
            alignments.append(TABLE_ALIGNMENT_MARKUP[alignment])

        self._emit(f"#figure(table(columns: {columns}, align: (")
        for markup in alignments:
            self._emit(markup, ", ")
        self._emit("),\n")

        for row in rows:
            for i in range(columns):
                if i >= len(row.cells):
                    self._emit("table.cell()[], ")
                    continue
                cell = row.cells[i]
                if cell.suppressed:
                    continue
                self._emit("table.cell(")
                if cell.colspan > 1:
                    self._emit(f"colspan: {cell.colspan}, ")
                if cell.rowspan > 1:
                    self._emit(f"rowspan: {cell.rowspan}, ")
                self._emit(")[")
                cell.accept(self)
                self._emit("], ")
            self._emit("\n")

        self._emit("))\n")

    def visit_table_row(self, node: TableRow) -> None:
        """Reject rows reached outside of their table."""
        raise MalformedTreeError(
            "TableRow nodes should be handled in Table nodes", node_type="TableRow", rendering_stage="typst"
        )

    def visit_table_cell(self, node: TableCell) -> None:
        """Render the content of a TableCell node."""
        self._render_children(node.content)

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._emit("#thematic-break\n")

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node as raw code."""
        self._emit('#raw(block: false, lang: "html", "', escape_typst_string(node.content), '")')

    def visit_math_block(self, node: MathBlock) -> None:
        """Render a MathBlock node."""
        self._emit('#mi(block: true, "', escape_typst_string(node.content), '")\n')

    def visit_definition(self, node: Definition) -> None:
        """Definitions were collected before rendering and emit nothing."""
        pass

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Footnote definitions are emitted after the body, if referenced."""
        pass

    def visit_container_directive(self, node: ContainerDirective) -> None:
        """Render a ContainerDirective node; only ``figure`` adds markup."""
        if node.name != FIGURE_DIRECTIVE:
            self._render_children(node.children)
            return

        self._emit("#figure(")
        caption = node.attributes.get(FIGURE_CAPTION_ATTRIBUTE)
        if caption:
            self._emit('caption: "', escape_typst_string(caption), '", ')
        self._emit(")[\n")
        self._render_children(node.children)
        self._emit("]\n")

    def visit_leaf_directive(self, node: LeafDirective) -> None:
        """Render the content of a LeafDirective node."""
        self._render_children(node.content)

    def visit_text(self, node: Text) -> None:
        """Render a Text node as a Typst string literal."""
        self._emit('#"', escape_typst_string(node.content), '"')

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._emit("#emph[")
        self._render_children(node.content)
        self._emit("]")

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._emit("#strong[")
        self._render_children(node.content)
        self._emit("]")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._emit("#strike[")
        self._render_children(node.content)
        self._emit("]")

    def visit_code(self, node: Code) -> None:
        """Render an inline Code node."""
        self._emit(f'#raw(block: false, lang: "{DEFAULT_CODE_LANGUAGE}", "', escape_typst_string(node.content), '")')

    def visit_link(self, node: Link) -> None:
        """Render a Link node."""
        self._emit('#link("', escape_typst_string(node.url), '", [')
        self._render_children(node.content)
        self._emit("])")

    def visit_image(self, node: Image) -> None:
        """Render an Image node and record its asset."""
        self._render_image(node.url, node.alt_text, node.attributes)

    def visit_link_reference(self, node: LinkReference) -> None:
        """Render a LinkReference as a link, or as literal text when undefined."""
        definition = self.context.definitions.get(node.identifier)
        if definition is not None:
            self._emit('#link("', escape_typst_string(definition.url), '", [')
            self._render_children(node.content)
            self._emit("])")
            return

        logger.debug("Link reference %r has no definition, rendering as text", node.identifier)
        self._emit('#"["')
        self._render_children(node.content)
        self._emit(self._reference_suffix(node.reference_type, node.label, node.identifier))

    def visit_image_reference(self, node: ImageReference) -> None:
        """Render an ImageReference as an image, or as literal text when undefined."""
        definition = self.context.definitions.get(node.identifier)
        if definition is not None:
            self._render_image(definition.url, node.alt_text, node.attributes)
            return

        logger.debug("Image reference %r has no definition, rendering as text", node.identifier)
        self._emit(
            '#"!["#"',
            escape_typst_string(node.alt_text),
            '"',
            self._reference_suffix(node.reference_type, node.label, node.identifier),
        )

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node as a string holding a newline."""
        self._emit('#"\\n"')

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node as raw code."""
        self._emit('#raw(block: false, lang: "html", "', escape_typst_string(node.content), '")')

    def visit_math_inline(self, node: MathInline) -> None:
        """Render a MathInline node."""
        self._emit('#mi(block: false, "', escape_typst_string(node.content), '")')

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Render a FootnoteReference and mark its definition as used."""
        state = self.context.footnotes.get(node.identifier)
        if state is None:
            logger.debug("Footnote %r has no definition, rendering as text", node.identifier)
            self._emit('#"[^', escape_typst_string(node.identifier), ']"')
            return

        state.visited = True
        self._emit('#footnote(label("', self._footnote_label(node.identifier), '"))')

    def visit_text_directive(self, node: TextDirective) -> None:
        """Render the content of a TextDirective node."""
        self._render_children(node.content)

    def visit_typst_markup(self, node: TypstMarkup) -> None:
        """Render the children of a TypstMarkup node without a wrapper."""
        self._render_children(node.children)

    def visit_typst_content(self, node: TypstContent) -> None:
        """Emit raw Typst source verbatim."""
        self._emit(node.content)


__all__ = [
    "Asset",
    "CompileResult",
    "CompilerContext",
    "FootnoteState",
    "TypstRenderer",
    "asset_id_for",
    "collect_definitions",
    "escape_typst_string",
    "is_valid_relative_length",
]
