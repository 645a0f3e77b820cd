#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/parsers/directives.py
"""Colon-fenced directives for the mistune frontend.

Syntax::

    :::{figure} Sales by quarter
    :label: sales

    ![chart](chart.png)
    :::

The name in braces selects the directive, the rest of the first line is its
title and ``:key: value`` lines are options. This module produces mistune
tokens; :mod:`md2typst.parsers.markdown` turns them into directive nodes.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Match

from mistune.directives import DirectivePlugin, FencedDirective

from md2typst.constants import DIRECTIVE_FENCE_MARKERS, RAW_TYPST_DIRECTIVE

if TYPE_CHECKING:
    from mistune.block_parser import BlockParser
    from mistune.core import BlockState
    from mistune.directives import BaseDirective
    from mistune.markdown import Markdown

CONTAINER_DIRECTIVE_TOKEN = "container_directive"
LEAF_DIRECTIVE_TOKEN = "leaf_directive"
RAW_TYPST_TOKEN = "typst_directive"


class NamedDirectives(DirectivePlugin):
    """Directive plugin accepting a fixed set of names.

    A directive with a body becomes a container token whose children are
    parsed as blocks. A directive without a body becomes a leaf token whose
    title is parsed as inline content. The raw Typst directive keeps its body
    unparsed.

    Parameters
    ----------
    names : iterable of str
        Directive names to register

    """

    def __init__(self, names: Iterable[str]):
        super().__init__()
        self.names = tuple(names)

    def parse(self, block: "BlockParser", m: Match[str], state: "BlockState") -> dict[str, Any]:
        name = self.parse_type(m)
        title = self.parse_title(m).strip()
        content = self.parse_content(m)
        attrs = {"name": name, "title": title, "options": dict(self.parse_options(m))}

        if name == RAW_TYPST_DIRECTIVE:
            return {"type": RAW_TYPST_TOKEN, "raw": content, "attrs": attrs}
        if not content.strip():
            token = {"type": LEAF_DIRECTIVE_TOKEN, "attrs": attrs}
            if title:
                token["text"] = title
            return token
        return {
            "type": CONTAINER_DIRECTIVE_TOKEN,
            "children": self.parse_tokens(block, content, state),
            "attrs": attrs,
        }

    def __call__(self, directive: "BaseDirective", md: "Markdown") -> None:
        for name in self.names:
            directive.register(name, self.parse)


def fenced_directives(names: Iterable[str]) -> FencedDirective:
    """Create the mistune plugin for colon-fenced directives named ``names``."""
    return FencedDirective([NamedDirectives(names)], markers=DIRECTIVE_FENCE_MARKERS)
