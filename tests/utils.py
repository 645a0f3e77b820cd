"""Helpers shared across md2typst tests."""

from md2typst.ast import TableCell, Text

# Trailer every compile ends with when no footnote is referenced
EMPTY_FOOTNOTES = "\n#hide(place(top+left, [\n]))\n"


def make_cell(text: str, **kwargs) -> TableCell:
    """Build a table cell holding a single text node."""
    return TableCell(content=[Text(content=text)], **kwargs)
