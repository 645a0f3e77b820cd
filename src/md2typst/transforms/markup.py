#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/transforms/markup.py
"""Transforms that splice raw Typst markup into a document.

Document templates use these to put their header in front of the body and
to map bare directives such as ``:::{pause}`` onto template commands.

"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from md2typst.ast.nodes import (
    Document,
    LeafDirective,
    Node,
    TypstContent,
    TypstMarkup,
    get_node_children,
    set_node_children,
)
from md2typst.ast.utils import walk
from md2typst.constants import SLIDE_DIRECTIVE_MARKUP
from md2typst.transforms.base import DocumentTransform

logger = logging.getLogger(__name__)


def raw_typst(markup: str) -> TypstMarkup:
    """Wrap a Typst source snippet in a node that is emitted verbatim."""
    return TypstMarkup(children=[TypstContent(content=markup)])


class PreambleTransform(DocumentTransform):
    """Insert raw Typst at the very start of the document.

    Parameters
    ----------
    preamble : str
        Typst source, for example ``'#import "template.typ": *\\n'``. An
        empty preamble leaves the document unchanged.

    """

    def __init__(self, preamble: str):
        """Initialize with the preamble text."""
        self.preamble = preamble

    def apply(self, document: Document) -> None:
        """Prepend the preamble."""
        if self.preamble:
            document.children.insert(0, raw_typst(self.preamble))


class DirectiveMarkupTransform(DocumentTransform):
    """Replace named leaf directives with fixed Typst markup.

    Parameters
    ----------
    markup : mapping of str to str, optional
        Directive name to Typst source. Defaults to the slide controls
        ``pause`` and ``meanwhile``.

    Examples
    --------
    >>> transform = DirectiveMarkupTransform({"pagebreak": "#pagebreak()\\n"})
    >>> doc = transform.transform(doc)

    """

    def __init__(self, markup: Optional[Mapping[str, str]] = None):
        """Initialize with the directive to markup mapping."""
        self.markup = dict(SLIDE_DIRECTIVE_MARKUP if markup is None else markup)

    def _replace(self, node: Node) -> Node:
        if isinstance(node, LeafDirective) and node.name in self.markup:
            return raw_typst(self.markup[node.name])
        return node

    def apply(self, document: Document) -> None:
        """Replace matching directives throughout the document."""
        replaced = 0
        for node in walk(document):
            children = get_node_children(node)
            updated = [self._replace(child) for child in children]
            changed = sum(1 for old, new in zip(children, updated) if old is not new)
            if changed:
                set_node_children(node, updated)
                replaced += changed
        if replaced:
            logger.debug(f"Replaced {replaced} directive(s) with Typst markup")


__all__ = ["DirectiveMarkupTransform", "PreambleTransform", "raw_typst"]
