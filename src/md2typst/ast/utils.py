#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
walk : Iterate over a node and all of its descendants
find_nodes : Collect descendants of given node types
extract_text : Extract plain text from a node or list of nodes

Examples
--------
Extract text from a heading:

    >>> from md2typst.ast import Heading, Text, Emphasis
    >>> from md2typst.ast.utils import extract_text
    >>>
    >>> heading = Heading(level=1, content=[
    ...     Text(content="Hello "),
    ...     Emphasis(content=[Text(content="world")])
    ... ])
    >>> extract_text(heading, joiner="")
    'Hello world'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, TypeVar, Union

from md2typst.ast.nodes import Text, get_node_children

if TYPE_CHECKING:
    from md2typst.ast.nodes import Node

NodeT = TypeVar("NodeT")


def walk(node: Node) -> Iterator[Node]:
    """Iterate over ``node`` and its descendants in depth-first pre-order.

    The traversal uses an explicit stack, so deeply nested documents do not
    hit the recursion limit. Children are read before they are yielded, so
    callers may mutate a node's own fields (but not its ancestors' child
    lists) while iterating.

    Parameters
    ----------
    node : Node
        Root of the traversal

    Yields
    ------
    Node
        Every node of the subtree, parents before children, siblings in
        document order

    """
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(get_node_children(current)))


def find_nodes(node: Node, node_type: Union[type[NodeT], tuple[type, ...]]) -> list[NodeT]:
    """Return all nodes of ``node_type`` in the subtree rooted at ``node``.

    Parameters
    ----------
    node : Node
        Root of the search
    node_type : type or tuple of types
        Node class(es) to collect

    Returns
    -------
    list
        Matching nodes in document order

    """
    return [n for n in walk(node) if isinstance(n, node_type)]  # type: ignore[misc]


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = " ") -> str:
    """Extract plain text from a node or list of nodes.

    Text parts are joined with ``joiner`` at every level of the tree, so
    ``joiner=""`` keeps only the whitespace present in the Text nodes.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = " "
        String to use for joining text parts

    Returns
    -------
    str
        Concatenated text content from all Text nodes

    """
    if isinstance(node_or_nodes, list):
        text_parts = []
        for node in node_or_nodes:
            extracted = extract_text(node, joiner=joiner)
            if extracted:
                text_parts.append(extracted)
        return joiner.join(text_parts)

    node = node_or_nodes
    if isinstance(node, Text):
        return node.content

    text_parts = []
    for child in get_node_children(node):
        extracted = extract_text(child, joiner=joiner)
        if extracted:
            text_parts.append(extracted)

    return joiner.join(text_parts)


__all__ = [
    "extract_text",
    "find_nodes",
    "walk",
]
