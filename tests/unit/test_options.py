#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for option dataclasses and exceptions."""

import dataclasses

import pytest

from md2typst.exceptions import DependencyError, InvalidOptionsError, MalformedTreeError, Md2TypstError, RenderingError
from md2typst.options import MarkdownParserOptions, TypstRendererOptions


@pytest.mark.unit
class TestTypstRendererOptions:
    """Tests for TypstRendererOptions."""

    def test_defaults(self):
        """Test default values."""
        options = TypstRendererOptions()
        assert options.footnote_label_prefix == "user-footnote: "
        assert options.image_attributes == ("width", "height")

    def test_frozen(self):
        """Test options cannot be mutated."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            TypstRendererOptions().footnote_label_prefix = "x"  # type: ignore[misc]

    def test_create_updated(self):
        """Test cloning with changes."""
        options = TypstRendererOptions()
        updated = options.create_updated(footnote_label_prefix="fn:")
        assert updated.footnote_label_prefix == "fn:"
        assert options.footnote_label_prefix == "user-footnote: "

    @pytest.mark.parametrize(
        "kwargs",
        [{"footnote_label_prefix": ""}, {"image_attributes": ("width", " ")}],
    )
    def test_validation(self, kwargs):
        """Test invalid values are rejected."""
        with pytest.raises(ValueError):
            TypstRendererOptions(**kwargs)

    def test_field_metadata(self):
        """Test every field documents itself."""
        for f in dataclasses.fields(TypstRendererOptions):
            assert "help" in f.metadata


@pytest.mark.unit
class TestMarkdownParserOptions:
    """Tests for MarkdownParserOptions."""

    def test_defaults(self):
        """Test every extension is on by default."""
        options = MarkdownParserOptions()
        assert options.parse_tables and options.parse_footnotes and options.parse_directives
        assert "figure" in options.directive_names
        assert "typst" in options.directive_names

    def test_invalid_directive_name(self):
        """Test names the fence syntax cannot express."""
        with pytest.raises(ValueError, match="Invalid directive name"):
            MarkdownParserOptions(directive_names=("figure", "two words"))


@pytest.mark.unit
class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_malformed_tree_error(self):
        """Test MalformedTreeError bases and fields."""
        error = MalformedTreeError("bad", node_type="TableRow", rendering_stage="typst")
        assert isinstance(error, RenderingError)
        assert isinstance(error, TypeError)
        assert isinstance(error, Md2TypstError)
        assert error.node_type == "TableRow"
        assert error.rendering_stage == "typst"

    def test_invalid_options_message(self):
        """Test the generated message names both classes."""
        error = InvalidOptionsError("typst", TypstRendererOptions, MarkdownParserOptions)
        assert "TypstRendererOptions" in str(error)
        assert "MarkdownParserOptions" in str(error)

    def test_dependency_error_message(self):
        """Test the install hint."""
        error = DependencyError("markdown", [("mistune", ">=3.0.0")])
        assert 'pip install --upgrade "mistune>=3.0.0"' in str(error)
