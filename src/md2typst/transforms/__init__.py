#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/transforms/__init__.py
"""In-place document transforms run between parsing and rendering.

Available Transforms
--------------------
- ImageAttributeTransform: Attach ``{key=value}`` blocks to images
- TableSpanTransform: Merge ``<`` and ``^`` table cells into spans
- PreambleTransform: Insert raw Typst before the document body
- DirectiveMarkupTransform: Replace named directives with Typst markup

"""

from md2typst.transforms.base import DocumentTransform, ensure_document_root
from md2typst.transforms.image_attributes import ImageAttributeTransform, parse_attribute_block
from md2typst.transforms.markup import DirectiveMarkupTransform, PreambleTransform
from md2typst.transforms.table_spans import TableSpanTransform, merge_table_spans

__all__ = [
    "DirectiveMarkupTransform",
    "DocumentTransform",
    "ImageAttributeTransform",
    "PreambleTransform",
    "TableSpanTransform",
    "ensure_document_root",
    "merge_table_spans",
    "parse_attribute_block",
]
