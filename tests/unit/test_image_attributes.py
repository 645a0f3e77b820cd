#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for image attribute blocks."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from md2typst.ast import Document, Image, ImageReference, Paragraph, Strong, Text
from md2typst.exceptions import MalformedTreeError
from md2typst.transforms.image_attributes import (
    ImageAttributeTransform,
    attach_image_attributes,
    parse_attribute_block,
)


@pytest.mark.unit
class TestParseAttributeBlock:
    """Tests for parse_attribute_block."""

    @pytest.mark.parametrize(
        "text,attributes,rest",
        [
            ("{width=50%, alt} caption", {"width": "50%", "alt": None}, " caption"),
            ("{width=5cm}", {"width": "5cm"}, ""),
            ('{title="a, b}"}', {"title": "a, b}"}, ""),
            ("{title='x=y'}", {"title": "x=y"}, ""),
            ('{a=""}', {"a": ""}, ""),
            ("{a=}", {"a": ""}, ""),
            ("{a=1,}", {"a": "1"}, ""),
            ("{}", {}, ""),
            ("{a = 1 , b= 2 }", {"a": "1", "b": "2"}, ""),
            ("{a=1, a=2}", {"a": "2"}, ""),
            ('{a="1" , b}', {"a": "1", "b": None}, ""),
            ("{ =1}", {}, ""),
            ("{w=1}{h=2}", {"w": "1"}, "{h=2}"),
        ],
    )
    def test_valid_blocks(self, text, attributes, rest):
        """Test well-formed blocks."""
        assert parse_attribute_block(text) == (attributes, rest)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            " {width=50%}",
            "width=50%}",
            "{a=1",
            '{a="1}',
            "{a=b=c}",
            "{=1}",
            "{a==1}",
            "{a=1\n}",
            "{a=\t1}",
            "{a='x' b}",
        ],
    )
    def test_invalid_blocks(self, text):
        """Test malformed blocks are rejected."""
        assert parse_attribute_block(text) is None


@pytest.mark.unit
@pytest.mark.fuzzing
class TestParseAttributeBlockProperties:
    """Property-based tests for parse_attribute_block."""

    @given(st.text())
    def test_total(self, text):
        """Test any input gives None or attributes plus a suffix of the input."""
        result = parse_attribute_block(text)
        if result is None:
            return
        attributes, rest = result
        assert isinstance(attributes, dict)
        assert text.endswith(rest)
        assert text.startswith("{")

    @given(st.text(alphabet="{}=,'\" ab\n", max_size=30))
    def test_total_on_syntax_characters(self, text):
        """Test inputs made mostly of block syntax."""
        result = parse_attribute_block(text)
        assert result is None or text.endswith(result[1])


@pytest.mark.unit
class TestAttachImageAttributes:
    """Tests for attaching blocks to images."""

    def test_block_is_moved_to_image(self):
        """Test the text node is consumed and removed."""
        image = Image(url="a.png")
        para = Paragraph(content=[image, Text(content="{width=1cm}")])
        assert attach_image_attributes(para) == 1
        assert image.attributes == {"width": "1cm"}
        assert para.content == [image]

    def test_trailing_text_is_kept(self):
        """Test text after the block stays."""
        image = Image(url="a.png")
        para = Paragraph(content=[image, Text(content="{width=1cm} after")])
        attach_image_attributes(para)
        assert para.content[1].content == " after"

    def test_image_reference(self):
        """Test blocks after image references."""
        ref = ImageReference(identifier="i")
        para = Paragraph(content=[ref, Text(content="{height=2cm}")])
        attach_image_attributes(para)
        assert ref.attributes == {"height": "2cm"}

    def test_malformed_block_left_alone(self):
        """Test invalid blocks stay as text."""
        image = Image(url="a.png")
        para = Paragraph(content=[image, Text(content="{width=1cm")])
        assert attach_image_attributes(para) == 0
        assert image.attributes == {}
        assert para.content[1].content == "{width=1cm"

    def test_text_not_after_image(self):
        """Test blocks must directly follow an image."""
        para = Paragraph(content=[Text(content="x"), Text(content="{width=1cm}")])
        assert attach_image_attributes(para) == 0
        assert len(para.content) == 2

    def test_existing_empty_text_is_kept(self):
        """Test only text emptied by the move is removed."""
        image = Image(url="a.png")
        empty = Text(content="")
        para = Paragraph(content=[empty, image, Text(content="{width=1cm}")])
        attach_image_attributes(para)
        assert para.content == [empty, image]


@pytest.mark.unit
class TestImageAttributeTransform:
    """Tests for ImageAttributeTransform."""

    def test_nested_images(self):
        """Test images inside inline formatting."""
        image = Image(url="a.png")
        doc = Document(children=[Paragraph(content=[Strong(content=[image, Text(content="{width=2cm}")])])])
        result = ImageAttributeTransform().transform(doc)
        assert result is doc
        assert image.attributes == {"width": "2cm"}

    def test_requires_document(self):
        """Test the root must be a Document."""
        with pytest.raises(MalformedTreeError):
            ImageAttributeTransform().transform(Paragraph(content=[]))
