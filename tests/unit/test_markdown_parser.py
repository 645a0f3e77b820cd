#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the Markdown frontend."""

import io
import logging

import pytest

from md2typst.ast import (
    BlockQuote,
    CodeBlock,
    ContainerDirective,
    Definition,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    HTMLBlock,
    Image,
    ImageReference,
    LeafDirective,
    LineBreak,
    Link,
    LinkReference,
    List,
    MathBlock,
    MathInline,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
    TypstMarkup,
    extract_text,
    find_nodes,
)
from md2typst.exceptions import InvalidOptionsError, ParsingError, ValidationError
from md2typst.options import MarkdownParserOptions, TypstRendererOptions
from md2typst.parsers.markdown import MarkdownToAstConverter, markdown_to_ast


@pytest.mark.unit
class TestBlocks:
    """Tests for block-level Markdown."""

    def test_heading(self):
        """Test ATX heading."""
        doc = markdown_to_ast("## Hello")
        assert doc.children == [Heading(level=2, content=[Text(content="Hello")])]

    def test_paragraph_formatting(self):
        """Test emphasis and strong."""
        doc = markdown_to_ast("*a* **b** ~~c~~")
        para = doc.children[0]
        assert isinstance(para, Paragraph)
        assert isinstance(para.content[0], Emphasis)
        assert isinstance(para.content[2], Strong)
        assert isinstance(para.content[4], Strikethrough)

    def test_fenced_code(self):
        """Test language and extra info."""
        doc = markdown_to_ast("```python title=x\nprint(1)\n```")
        code = doc.children[0]
        assert isinstance(code, CodeBlock)
        assert code.language == "python"
        assert code.content == "print(1)\n"
        assert code.metadata == {"info_attrs": "title=x"}

    def test_code_without_language(self):
        """Test a fence without info string."""
        code = markdown_to_ast("```\nx\n```").children[0]
        assert code.language is None

    def test_block_quote(self):
        """Test block quote children."""
        quote = markdown_to_ast("> quoted").children[0]
        assert isinstance(quote, BlockQuote)
        assert isinstance(quote.children[0], Paragraph)

    def test_thematic_break_and_html(self):
        """Test thematic break and HTML block."""
        doc = markdown_to_ast("---\n\n<div>\nhi\n</div>")
        assert isinstance(doc.children[0], ThematicBreak)
        assert isinstance(doc.children[1], HTMLBlock)
        assert doc.children[1].content.startswith("<div>")

    def test_math(self):
        """Test display and inline math."""
        doc = markdown_to_ast("$$\nx^2\n$$\n\nInline $y$ math")
        assert doc.children[0] == MathBlock(content="x^2")
        assert MathInline(content="y") in doc.children[1].content

    def test_math_disabled(self):
        """Test math can be switched off."""
        doc = markdown_to_ast("Inline $y$ math", MarkdownParserOptions(parse_math=False))
        assert find_nodes(doc, MathInline) == []


@pytest.mark.unit
class TestLists:
    """Tests for lists."""

    def test_unordered(self):
        """Test bullet list."""
        lst = markdown_to_ast("- a\n- b").children[0]
        assert isinstance(lst, List)
        assert not lst.ordered
        assert lst.start is None
        assert lst.tight
        assert len(lst.items) == 2
        assert extract_text(lst.items[1]) == "b"

    def test_ordered_start(self):
        """Test ordered list start number."""
        lst = markdown_to_ast("3. a\n4. b").children[0]
        assert lst.ordered
        assert lst.start == 3

    def test_ordered_from_one(self):
        """Test lists starting at one carry no start."""
        assert markdown_to_ast("1. a\n2. b").children[0].start is None

    def test_loose_list(self):
        """Test blank lines between items make a loose list."""
        assert not markdown_to_ast("- a\n\n- b").children[0].tight


@pytest.mark.unit
class TestTables:
    """Tests for GFM tables."""

    def test_table(self):
        """Test header, alignment and rows."""
        doc = markdown_to_ast("| a | b | c |\n|:--|--:|---|\n| 1 | 2 | 3 |")
        table = doc.children[0]
        assert isinstance(table, Table)
        assert table.alignments == ["left", "right", None]
        assert table.header.is_header
        assert extract_text(table.header.cells[1]) == "b"
        assert len(table.rows) == 1
        assert extract_text(table.rows[0].cells[2]) == "3"

    def test_tables_disabled(self):
        """Test table syntax stays text when disabled."""
        doc = markdown_to_ast("| a |\n|---|\n| 1 |", MarkdownParserOptions(parse_tables=False))
        assert find_nodes(doc, Table) == []


@pytest.mark.unit
class TestReferences:
    """Tests for reference links, images and footnotes."""

    def test_full_link_reference(self):
        """Test a full reference keeps its identifier."""
        doc = markdown_to_ast("[Site][Ex]\n\n[ex]: https://example.com")
        ref = doc.children[0].content[0]
        assert isinstance(ref, LinkReference)
        assert ref.identifier == "ex"
        assert ref.label == "Ex"
        assert ref.reference_type == "full"
        assert extract_text(ref.content) == "Site"
        assert doc.children[-1] == Definition(identifier="ex", url="https://example.com", label="ex")

    def test_shortcut_link_reference(self):
        """Test a shortcut reference."""
        doc = markdown_to_ast("[ex]\n\n[ex]: https://example.com")
        ref = doc.children[0].content[0]
        assert isinstance(ref, LinkReference)
        assert ref.reference_type == "shortcut"

    def test_undefined_reference_is_text(self):
        """Test references without a definition stay text."""
        doc = markdown_to_ast("[x][nope]")
        assert find_nodes(doc, LinkReference) == []
        assert extract_text(doc, joiner="") == "[x][nope]"

    def test_definition_title(self):
        """Test definition titles."""
        doc = markdown_to_ast('[a]: https://example.com "Title"')
        assert doc.children == [Definition(identifier="a", url="https://example.com", title="Title", label="a")]

    def test_inline_link_and_image(self):
        """Test inline links and images."""
        para = markdown_to_ast('[x](https://example.com "T") ![alt *text*](a.png)').children[0]
        assert para.content[0] == Link(url="https://example.com", content=[Text(content="x")], title="T")
        image = para.content[2]
        assert isinstance(image, Image)
        assert image.url == "a.png"
        assert image.alt_text == "alt text"

    def test_image_reference(self):
        """Test reference images."""
        doc = markdown_to_ast("![Alt][img]\n\n[img]: https://example.com/i.png")
        ref = doc.children[0].content[0]
        assert isinstance(ref, ImageReference)
        assert ref.identifier == "img"
        assert ref.alt_text == "Alt"

    def test_footnotes(self):
        """Test footnote references and definitions."""
        doc = markdown_to_ast("Text[^Note]\n\n[^Note]: Body\n\n[^unused]: Never")
        assert doc.children[0].content[1] == FootnoteReference(identifier="note")
        definitions = find_nodes(doc, FootnoteDefinition)
        assert [d.identifier for d in definitions] == ["note"]
        assert extract_text(definitions[0]) == "Body"

    def test_undefined_footnote_is_text(self):
        """Test footnote references without a definition stay text."""
        doc = markdown_to_ast("Text[^x]")
        assert find_nodes(doc, FootnoteReference) == []


@pytest.mark.unit
class TestInline:
    """Tests for inline tokens."""

    def test_hard_and_soft_breaks(self):
        """Test break kinds."""
        para = markdown_to_ast("a  \nb\nc").children[0]
        breaks = [node for node in para.content if isinstance(node, LineBreak)]
        assert [b.soft for b in breaks] == [False, True]

    def test_text_after_image_is_kept(self):
        """Test attribute blocks arrive as text after the image."""
        para = markdown_to_ast("![a](a.png){width=2cm}").children[0]
        assert isinstance(para.content[0], Image)
        assert para.content[1] == Text(content="{width=2cm}")


@pytest.mark.unit
class TestFrontmatter:
    """Tests for YAML front matter."""

    def test_metadata(self):
        """Test front matter becomes metadata."""
        doc = markdown_to_ast("---\ntitle: Hi\ntags: [a, b]\n---\n# H")
        assert doc.metadata == {"title": "Hi", "tags": ["a", "b"]}
        assert isinstance(doc.children[0], Heading)

    def test_malformed_yaml(self, caplog):
        """Test broken front matter is dropped with a warning."""
        with caplog.at_level(logging.WARNING, logger="md2typst.parsers.markdown"):
            doc = markdown_to_ast("---\ntitle: [unclosed\n---\ntext")
        assert doc.metadata == {}
        assert extract_text(doc) == "text"
        assert "front matter" in caplog.text

    def test_unterminated_block(self):
        """Test a leading rule without a closing fence is content."""
        doc = markdown_to_ast("---\ntext")
        assert doc.metadata == {}

    def test_disabled(self):
        """Test front matter parsing can be switched off."""
        doc = markdown_to_ast("---\ntitle: Hi\n---\n", MarkdownParserOptions(parse_frontmatter=False))
        assert doc.metadata == {}


@pytest.mark.unit
class TestDirectives:
    """Tests for colon-fenced directives."""

    def test_figure(self):
        """Test figure title becomes the caption."""
        doc = markdown_to_ast(":::{figure} My caption\n![a](a.png)\n:::")
        figure = doc.children[0]
        assert isinstance(figure, ContainerDirective)
        assert figure.name == "figure"
        assert figure.attributes == {"caption": "My caption"}
        assert isinstance(figure.children[0].content[0], Image)

    def test_caption_option_wins(self):
        """Test an explicit caption option."""
        doc = markdown_to_ast(":::{figure} Title\n:caption: Other\n\nbody\n:::")
        assert doc.children[0].attributes["caption"] == "Other"

    def test_leaf_directive(self):
        """Test a directive without body."""
        doc = markdown_to_ast("a\n\n:::{pause}\n:::\n\nb")
        leaf = doc.children[1]
        assert isinstance(leaf, LeafDirective)
        assert leaf.name == "pause"
        assert leaf.content == []

    def test_leaf_directive_title(self):
        """Test a leaf directive title becomes its inline content."""
        leaf = markdown_to_ast(":::{pause} Next\n:::").children[0]
        assert isinstance(leaf, LeafDirective)
        assert leaf.content == [Text(content="Next")]

    def test_raw_typst(self):
        """Test the typst directive keeps its body verbatim."""
        doc = markdown_to_ast(":::{typst}\n#pagebreak()\n:::")
        markup = doc.children[0]
        assert isinstance(markup, TypstMarkup)
        assert markup.children[0].content == "#pagebreak()\n"

    def test_unknown_name_is_text(self):
        """Test unregistered directive names become a paragraph."""
        doc = markdown_to_ast(":::{unknown}\nx\n:::")
        para = doc.children[0]
        assert isinstance(para, Paragraph)
        assert "{unknown}" in extract_text(para)

    def test_disabled(self):
        """Test directives can be switched off."""
        doc = markdown_to_ast(":::{pause}\n:::", MarkdownParserOptions(parse_directives=False))
        assert find_nodes(doc, LeafDirective) == []


@pytest.mark.unit
class TestInputs:
    """Tests for input handling."""

    def test_bytes_input(self):
        """Test bytes are decoded."""
        doc = MarkdownToAstConverter().parse("# Grüße".encode("utf-8"))
        assert extract_text(doc) == "Grüße"

    def test_path_input(self, tmp_path):
        """Test paths are read."""
        path = tmp_path / "doc.md"
        path.write_text("# From file", encoding="utf-8")
        assert extract_text(MarkdownToAstConverter().parse(path)) == "From file"

    def test_stream_input(self):
        """Test binary streams are read."""
        doc = MarkdownToAstConverter().parse(io.BytesIO(b"*x*"))
        assert isinstance(doc.children[0].content[0], Emphasis)

    def test_invalid_input_type(self):
        """Test unsupported inputs raise ParsingError."""
        with pytest.raises(ParsingError):
            MarkdownToAstConverter().parse(42)

    def test_invalid_input_type_keeps_cause(self):
        """Test the parsing error wraps the rejected input."""
        with pytest.raises(ParsingError) as exc_info:
            MarkdownToAstConverter().parse(42)
        assert exc_info.value.parsing_stage == "input_loading"
        assert isinstance(exc_info.value.original_error, ValidationError)
        assert exc_info.value.original_error.parameter_value == 42

    def test_invalid_options(self):
        """Test the options class is checked."""
        with pytest.raises(InvalidOptionsError):
            MarkdownToAstConverter(TypstRendererOptions())
