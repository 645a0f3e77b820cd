#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/transforms/table_spans.py
"""Column and row spans for pipe tables.

A cell holding only ``<`` merges into the cell on its left; a cell holding
only ``^`` merges into the cell above it::

    | Name  | Q1 | <  |
    |-------|----|----|
    | Alice | 10 | 12 |
    | ^     | 11 | <  |

Merged cells are marked ``suppressed`` and the span of the surviving cell
grows by the span of the absorbed one. Cells are matched by column index,
not by their visual position once earlier cells span several columns.

"""

from __future__ import annotations

import logging

from md2typst.ast.nodes import Document, Table, TableCell, TableRow, Text
from md2typst.ast.utils import find_nodes
from md2typst.constants import COLSPAN_MARKER, ROWSPAN_MARKER
from md2typst.transforms.base import DocumentTransform

logger = logging.getLogger(__name__)


def _is_marker(cell: TableCell, marker: str) -> bool:
    if not cell.content:
        return False
    first = cell.content[0]
    return isinstance(first, Text) and first.content.strip() == marker


def merge_columns(rows: list[TableRow]) -> int:
    """Fold ``<`` cells into their left neighbour.

    Each row is scanned right to left, so a run of markers accumulates onto
    the leftmost real cell.

    Returns
    -------
    int
        Number of cells merged

    """
    merged = 0
    for row in rows:
        cells = row.cells
        for i in range(len(cells) - 1, 0, -1):
            cell = cells[i]
            if not _is_marker(cell, COLSPAN_MARKER):
                continue
            previous = cells[i - 1]
            if previous.suppressed:
                continue
            cell.suppressed = True
            previous.colspan += cell.colspan
            merged += 1
    return merged


def merge_rows(rows: list[TableRow]) -> int:
    """Fold ``^`` cells into the cell above them.

    Rows are scanned from the bottom up, so a column of markers accumulates
    onto the topmost real cell. A marker that was itself absorbed, or whose
    upper neighbour was, is left alone.

    Returns
    -------
    int
        Number of cells merged

    """
    merged = 0
    for r in range(len(rows) - 1, 0, -1):
        above = rows[r - 1].cells
        for i, cell in enumerate(rows[r].cells):
            if cell.suppressed or not _is_marker(cell, ROWSPAN_MARKER):
                continue
            if i >= len(above) or above[i].suppressed:
                continue
            cell.suppressed = True
            above[i].rowspan += cell.rowspan
            merged += 1
    return merged


class TableSpanTransform(DocumentTransform):
    """Turn ``<`` and ``^`` marker cells into colspan and rowspan."""

    def apply(self, document: Document) -> None:
        """Merge marker cells of every table in the document."""
        for table in find_nodes(document, Table):
            rows = table.all_rows()
            columns = merge_columns(rows)
            spans = merge_rows(rows)
            if columns or spans:
                logger.debug(f"Merged {columns} column and {spans} row marker cell(s) in table")


def merge_table_spans(document: Document) -> Document:
    """Apply :class:`TableSpanTransform` to ``document`` and return it."""
    return TableSpanTransform().transform(document)


__all__ = ["TableSpanTransform", "merge_columns", "merge_rows", "merge_table_spans"]
