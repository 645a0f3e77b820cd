#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/parsers/markdown.py
"""Markdown to AST converter.

This module builds the md2typst AST from Markdown using mistune's token
stream. Besides CommonMark it understands GFM tables and strikethrough,
footnotes, ``$`` math, YAML front matter and colon-fenced directives.

Reference-style links and images keep their identifier, and every link
definition is appended to the document as a :class:`Definition` node, so the
renderer resolves references itself. Footnote definitions are appended as
:class:`FootnoteDefinition` nodes. Identifiers are case-folded.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from md2typst.ast import (
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
    ThematicBreak,
    TypstContent,
    TypstMarkup,
)
from md2typst.constants import DEPS_FRONTMATTER, DEPS_MARKDOWN, FIGURE_CAPTION_ATTRIBUTE
from md2typst.options.markdown import MarkdownParserOptions
from md2typst.parsers.base import BaseParser, ParserInput
from md2typst.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


def _normalize_identifier(key: str) -> str:
    # mistune upper-cases reference keys; identifiers are kept lower case
    return key.lower()


class MarkdownToAstConverter(BaseParser):
    r"""Convert Markdown to AST representation.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\n\nThis is **bold**.")

    Without directives:

        >>> options = MarkdownParserOptions(parse_directives=False)
        >>> doc = MarkdownToAstConverter(options).parse(markdown_text)

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, input_data: ParserInput) -> Document:
        """Parse Markdown input into AST Document.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str] or bytes
            Markdown input. A ``str`` is the Markdown text itself.

        Returns
        -------
        Document
            AST document node

        """
        markdown_content = self._load_text_content(input_data)
        markdown_content, metadata = self._extract_frontmatter(markdown_content)

        import mistune

        plugins: list[Any] = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")
        if self.options.parse_footnotes:
            plugins.append("footnotes")
        if self.options.parse_math:
            plugins.append("math")
        if self.options.parse_directives and self.options.directive_names:
            from md2typst.parsers.directives import fenced_directives

            plugins.append(fenced_directives(self.options.directive_names))

        markdown = mistune.create_markdown(plugins=plugins, renderer=None)
        tokens, state = markdown.parse(markdown_content)

        children = self._process_tokens(tokens if isinstance(tokens, list) else [])
        children.extend(self._collect_definitions(state.env.get("ref_links") or {}))

        return Document(children=children, metadata=metadata)

    def _extract_frontmatter(self, content: str) -> tuple[str, dict[str, Any]]:
        """Split a leading ``---`` delimited YAML block from the content.

        Returns
        -------
        tuple[str, dict]
            Content without the front matter, and the parsed metadata

        """
        if not self.options.parse_frontmatter:
            return content, {}
        if not (content.startswith("---\n") or content.startswith("---\r\n")):
            return content, {}

        lines = content.splitlines(keepends=True)
        for end_index in range(1, len(lines)):
            if lines[end_index].strip() == "---":
                break
        else:
            return content, {}

        yaml_content = "".join(lines[1:end_index])
        remaining_content = "".join(lines[end_index + 1 :])
        return remaining_content, self._load_frontmatter(yaml_content)

    @requires_dependencies("markdown front matter", DEPS_FRONTMATTER)
    def _load_frontmatter(self, yaml_content: str) -> dict[str, Any]:
        """Parse front matter YAML into a metadata dictionary."""
        import yaml

        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            logger.warning(f"Ignoring malformed YAML front matter: {e}")
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring YAML front matter that is not a mapping: {type(data).__name__}")
            return {}
        return data

    def _collect_definitions(self, ref_links: dict[str, dict[str, Any]]) -> list[Node]:
        """Build Definition nodes from mistune's reference link table."""
        definitions: list[Node] = []
        for key, data in ref_links.items():
            definitions.append(
                Definition(
                    identifier=_normalize_identifier(key),
                    url=data.get("url", ""),
                    title=data.get("title"),
                    label=data.get("label"),
                )
            )
        return definitions

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of mistune block tokens into AST nodes."""
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_token(token)
            if node is None:
                continue
            if isinstance(node, list):
                nodes.extend(node)
            else:
                nodes.append(node)

        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | list[Node] | None:
        """Process a single mistune block token into AST node(s).

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node, list of Node, or None
            Resulting AST node(s); None for tokens without a counterpart
            (blank lines)

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items
            return Paragraph(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return HTMLBlock(content=token.get("raw", ""))
        elif token_type == "block_math":
            return MathBlock(content=token.get("raw", ""))
        elif token_type == "footnotes":
            return self._process_footnotes(token)
        elif token_type == "container_directive":
            return self._process_container_directive(token)
        elif token_type == "leaf_directive":
            attrs = token.get("attrs", {})
            return LeafDirective(
                name=attrs.get("name", ""),
                attributes=dict(attrs.get("options", {})),
                content=self._process_inline_tokens(token.get("children", [])),
            )
        elif token_type == "typst_directive":
            return TypstMarkup(children=[TypstContent(content=token.get("raw", ""))])
        elif token_type == "block_error":
            # Fenced directive with an unregistered name
            raw = token.get("raw", "").strip()
            logger.warning(f"Unknown directive kept as text: {raw.splitlines()[0] if raw else ''!r}")
            return Paragraph(content=[Text(content=raw)])

        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token."""
        level = token.get("attrs", {}).get("level", 1)
        if not isinstance(level, int) or not 1 <= level <= 6:
            level = 1
        return Heading(level=level, content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        The language is the first word of the fence info string; the rest
        of the info string is kept in the node metadata.

        """
        info_string = (token.get("attrs", {}).get("info") or "").strip()
        metadata: dict[str, Any] = {}
        language: Optional[str] = None

        if info_string:
            parts = info_string.split(maxsplit=1)
            language = parts[0]
            if len(parts) > 1:
                metadata["info_attrs"] = parts[1]

        return CodeBlock(content=token.get("raw", ""), language=language, metadata=metadata)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        mistune only reports ``start`` for ordered lists that do not start
        at 1; other lists keep ``start=None``.

        """
        attrs = token.get("attrs", {})
        items = [
            ListItem(children=self._process_tokens(child.get("children", [])))
            for child in token.get("children", [])
            if child.get("type") == "list_item"
        ]
        return List(
            ordered=bool(attrs.get("ordered", False)),
            items=items,
            start=attrs.get("start"),
            tight=bool(token.get("tight", True)),
        )

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process table token.

        Parameters
        ----------
        token : dict
            Table token whose children are ``table_head`` (holding cells
            directly) and ``table_body`` (holding rows)

        Returns
        -------
        Table
            Table AST node

        """
        header = None
        rows: list[TableRow] = []
        alignments: list[Any] = []

        for part in token.get("children", []):
            part_type = part.get("type", "")
            if part_type == "table_head":
                cells = self._process_table_cells(part)
                alignments = [cell.alignment for cell in cells]
                header = TableRow(cells=cells, is_header=True)
            elif part_type == "table_body":
                for row_token in part.get("children", []):
                    rows.append(TableRow(cells=self._process_table_cells(row_token)))

        return Table(header=header, rows=rows, alignments=alignments)

    def _process_table_cells(self, row_token: dict[str, Any]) -> list[TableCell]:
        """Process the table_cell children of a header or body row."""
        cells = []
        for cell_token in row_token.get("children", []):
            if cell_token.get("type") != "table_cell":
                continue
            cells.append(
                TableCell(
                    content=self._process_inline_tokens(cell_token.get("children", [])),
                    alignment=cell_token.get("attrs", {}).get("align"),
                )
            )
        return cells

    def _process_footnotes(self, token: dict[str, Any]) -> list[Node]:
        """Process the trailing footnotes token.

        mistune only emits footnote items that were referenced in the text.

        """
        definitions: list[Node] = []
        for item in token.get("children", []):
            key = item.get("attrs", {}).get("key", "")
            definitions.append(
                FootnoteDefinition(
                    identifier=_normalize_identifier(key),
                    content=self._process_tokens(item.get("children", [])),
                )
            )
        return definitions

    def _process_container_directive(self, token: dict[str, Any]) -> ContainerDirective:
        """Process a fenced directive with a body.

        The directive title becomes the ``caption`` attribute unless a
        ``:caption:`` option is given.

        """
        attrs = token.get("attrs", {})
        attributes: dict[str, Optional[str]] = dict(attrs.get("options", {}))
        title = attrs.get("title", "")
        if title:
            attributes.setdefault(FIGURE_CAPTION_ATTRIBUTE, title)

        return ContainerDirective(
            name=attrs.get("name", ""),
            attributes=attributes,
            children=self._process_tokens(token.get("children", [])),
        )

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens."""
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_inline_token(token)
            if node is not None:
                nodes.append(node)

        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        """Handle text token."""
        return Text(content=token.get("raw", ""))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        """Handle strong token."""
        return Strong(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        """Handle emphasis token."""
        return Emphasis(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        """Handle codespan token."""
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link | LinkReference:
        """Handle link token; links resolved through a definition stay references."""
        content = self._process_inline_tokens(token.get("children", []))
        if "ref" in token:
            return LinkReference(
                identifier=_normalize_identifier(token["ref"]),
                label=token.get("label"),
                reference_type=self._reference_type(token),
                content=content,
            )

        attrs = token.get("attrs", {})
        return Link(url=attrs.get("url", ""), content=content, title=attrs.get("title"))

    def _handle_image_token(self, token: dict[str, Any]) -> Image | ImageReference:
        """Handle image token; alt text is the plain text of its children."""
        alt_text = self._plain_text(token.get("children", []))
        if "ref" in token:
            return ImageReference(
                identifier=_normalize_identifier(token["ref"]),
                label=token.get("label"),
                reference_type=self._reference_type(token),
                alt_text=alt_text,
            )

        attrs = token.get("attrs", {})
        return Image(url=attrs.get("url", ""), alt_text=alt_text, title=attrs.get("title"))

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle hard linebreak token."""
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle softbreak token."""
        return LineBreak(soft=True)

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        """Handle strikethrough token."""
        return Strikethrough(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_inline_html_token(self, token: dict[str, Any]) -> HTMLInline:
        """Handle inline_html token."""
        return HTMLInline(content=token.get("raw", ""))

    def _handle_inline_math_token(self, token: dict[str, Any]) -> MathInline:
        """Handle inline_math token."""
        return MathInline(content=token.get("raw", ""))

    def _handle_display_math_token(self, token: dict[str, Any]) -> MathBlock:
        """Handle ``$$...$$`` written inside a paragraph."""
        return MathBlock(content=token.get("raw", ""))

    def _handle_footnote_ref_token(self, token: dict[str, Any]) -> FootnoteReference:
        """Handle footnote_ref token."""
        return FootnoteReference(identifier=_normalize_identifier(token.get("raw", "")))

    def _process_inline_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single inline token.

        Parameters
        ----------
        token : dict
            Inline token dictionary

        Returns
        -------
        Node or None
            Inline AST node, or None for unknown token types

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "strikethrough": self._handle_strikethrough_token,
            "inline_html": self._handle_inline_html_token,
            "inline_math": self._handle_inline_math_token,
            "block_math": self._handle_display_math_token,
            "footnote_ref": self._handle_footnote_ref_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)
        logger.debug(f"Skipping unsupported inline token: {token_type}")
        return None

    def _plain_text(self, tokens: list[dict[str, Any]]) -> str:
        """Concatenate the raw text of inline tokens, ignoring formatting."""
        parts = []
        for token in tokens:
            if "children" in token:
                parts.append(self._plain_text(token["children"]))
            elif token.get("type") in ("softbreak", "linebreak"):
                parts.append(" ")
            else:
                parts.append(token.get("raw", ""))
        return "".join(parts)

    @staticmethod
    def _reference_type(token: dict[str, Any]) -> ReferenceType:
        """Classify a resolved reference.

        mistune reports the label it looked up; for ``[text]`` and
        ``[text][]`` that is the bracketed text itself.

        """
        label = token.get("label")
        children = token.get("children", [])
        text = "".join(child.get("raw", "") for child in children if child.get("type") == "text")
        return "shortcut" if label == text else "full"


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert Markdown string to AST.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        AST document node

    Examples
    --------
    >>> from md2typst.parsers.markdown import markdown_to_ast
    >>> doc = markdown_to_ast("# Hello\n\nWorld")
    >>> len(doc.children)
    2

    """
    converter = MarkdownToAstConverter(options)
    return converter.parse(markdown_content)
