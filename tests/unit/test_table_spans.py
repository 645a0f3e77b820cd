#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for table span markers."""

import pytest
from utils import make_cell

from md2typst.ast import BlockQuote, Document, Table, TableRow
from md2typst.transforms.table_spans import TableSpanTransform, merge_columns, merge_rows, merge_table_spans


def make_rows(*rows):
    return [TableRow(cells=[make_cell(text) for text in row]) for row in rows]


def spans(rows):
    return [[(c.colspan, c.rowspan, c.suppressed) for c in row.cells] for row in rows]


@pytest.mark.unit
class TestMergeColumns:
    """Tests for merge_columns."""

    def test_single_marker(self):
        """Test one marker widens its left neighbour."""
        rows = make_rows(["A", "<", "B"])
        assert merge_columns(rows) == 1
        assert spans(rows) == [[(2, 1, False), (1, 1, True), (1, 1, False)]]

    def test_marker_run(self):
        """Test consecutive markers accumulate on the leftmost cell."""
        rows = make_rows(["A", "<", "<"])
        assert merge_columns(rows) == 2
        assert spans(rows) == [[(3, 1, False), (2, 1, True), (1, 1, True)]]

    def test_marker_in_first_column(self):
        """Test a marker without a left neighbour stays."""
        rows = make_rows(["<", "A"])
        assert merge_columns(rows) == 0
        assert spans(rows) == [[(1, 1, False), (1, 1, False)]]

    def test_whitespace_around_marker(self):
        """Test markers are compared after trimming."""
        rows = make_rows(["A", " < "])
        assert merge_columns(rows) == 1

    def test_other_text_is_not_a_marker(self):
        """Test cells with more than the marker."""
        rows = make_rows(["A", "<<", "< x"])
        assert merge_columns(rows) == 0


@pytest.mark.unit
class TestMergeRows:
    """Tests for merge_rows."""

    def test_single_marker(self):
        """Test one marker extends the cell above."""
        rows = make_rows(["A", "B"], ["^", "C"])
        assert merge_rows(rows) == 1
        assert spans(rows) == [[(1, 2, False), (1, 1, False)], [(1, 1, True), (1, 1, False)]]

    def test_marker_column(self):
        """Test stacked markers accumulate on the topmost cell."""
        rows = make_rows(["A"], ["^"], ["^"])
        assert merge_rows(rows) == 2
        assert [row.cells[0].rowspan for row in rows] == [3, 2, 1]
        assert [row.cells[0].suppressed for row in rows] == [False, True, True]

    def test_marker_in_first_row(self):
        """Test a marker without a row above stays."""
        rows = make_rows(["^"], ["A"])
        assert merge_rows(rows) == 0

    def test_shorter_row_above(self):
        """Test a marker past the end of the row above stays."""
        rows = make_rows(["A"], ["B", "^"])
        assert merge_rows(rows) == 0
        assert not rows[1].cells[1].suppressed


@pytest.mark.unit
class TestTableSpanTransform:
    """Tests for TableSpanTransform."""

    def test_columns_before_rows(self):
        """Test a row marker below a merged column marker stays."""
        table = Table(
            header=TableRow(cells=[make_cell("A"), make_cell("<")], is_header=True),
            rows=make_rows(["^", "^"]),
        )
        merge_table_spans(Document(children=[table]))
        header, row = table.all_rows()
        assert (header.cells[0].colspan, header.cells[0].rowspan) == (2, 2)
        assert header.cells[1].suppressed
        assert row.cells[0].suppressed
        assert not row.cells[1].suppressed

    def test_nested_tables(self):
        """Test tables anywhere in the document are merged."""
        table = Table(rows=make_rows(["A", "<"]))
        doc = Document(children=[BlockQuote(children=[table])])
        assert TableSpanTransform().transform(doc) is doc
        assert table.rows[0].cells[0].colspan == 2
