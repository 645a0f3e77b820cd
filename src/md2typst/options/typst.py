#  Copyright (c) 2025 Tom Villani, Ph.D.

# md2typst/options/typst.py
"""Configuration options for Typst rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from md2typst.constants import DEFAULT_FOOTNOTE_LABEL_PREFIX, DEFAULT_IMAGE_ATTRIBUTES
from md2typst.options.base import BaseRendererOptions


@dataclass(frozen=True)
class TypstRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-Typst rendering.

    Parameters
    ----------
    footnote_label_prefix : str, default "user-footnote: "
        Prefix of the Typst labels generated for footnote bodies. Footnote
        references point at ``label(prefix + identifier)``.
    image_attributes : tuple of str, default ("width", "height")
        Image attributes passed through to ``image(...)``. Values are only
        emitted when they are valid Typst relative lengths.

    """

    footnote_label_prefix: str = field(
        default=DEFAULT_FOOTNOTE_LABEL_PREFIX,
        metadata={"help": "Prefix for generated footnote labels", "importance": "advanced"},
    )
    image_attributes: tuple[str, ...] = field(
        default=DEFAULT_IMAGE_ATTRIBUTES,
        metadata={"help": "Image attributes passed through to Typst", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate footnote prefix and attribute allow-list.

        Raises
        ------
        ValueError
            If the prefix is empty or an attribute name is blank.

        """
        super().__post_init__()
        if not self.footnote_label_prefix:
            raise ValueError("footnote_label_prefix must not be empty")
        for name in self.image_attributes:
            if not name or not name.strip():
                raise ValueError(f"image_attributes entries must be non-empty, got {self.image_attributes!r}")
