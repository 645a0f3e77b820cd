#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/transforms/image_attributes.py
"""Inline image attributes.

An image may be followed directly by an attribute block::

    ![diagram](diagram.png){width=50%, height="3cm"}

Markdown parses the block as ordinary text after the image. This module
recognizes the block, attaches the attributes to the image node and keeps
whatever text follows the closing brace.

Grammar of a block::

    block    := '{' entry (',' entry)* ','? '}'
    entry    := key ('=' value)?
    value    := 'single quoted' | "double quoted" | unquoted

Keys and unquoted values are trimmed; quoted values are kept verbatim and
may contain ``,``, ``}`` and ``=``. A key without ``=`` maps to None and
``key=`` maps to the empty string. Tabs, carriage returns and newlines are
not allowed anywhere in a block.

"""

from __future__ import annotations

import enum
import logging
from typing import Optional

from md2typst.ast.nodes import (
    AttributeMap,
    Document,
    Image,
    ImageReference,
    Node,
    Text,
    get_node_children,
    set_node_children,
)
from md2typst.ast.utils import walk
from md2typst.transforms.base import DocumentTransform

logger = logging.getLogger(__name__)

_FORBIDDEN_CHARS = frozenset("\n\r\t")
_QUOTES = frozenset("'\"")


class _State(enum.Enum):
    START = enum.auto()
    KEY = enum.auto()
    VALUE_START = enum.auto()
    UNQUOTED_VALUE = enum.auto()
    QUOTED_VALUE = enum.auto()
    AFTER_QUOTE = enum.auto()
    ENDED = enum.auto()


def _store(attributes: AttributeMap, key: str, value: Optional[str]) -> None:
    # Separators with nothing before them ("{a=1,}", "{}") add no entry
    if key:
        attributes[key] = value


def parse_attribute_block(text: str) -> Optional[tuple[AttributeMap, str]]:
    """Parse an attribute block at the start of ``text``.

    Parameters
    ----------
    text : str
        Text that directly follows an image

    Returns
    -------
    tuple of (dict, str) or None
        The attributes and the text after the closing ``}``, or None when
        ``text`` does not start with a well-formed block. Later duplicates
        of a key overwrite earlier ones.

    Examples
    --------
    >>> parse_attribute_block("{width=50%, alt} caption")
    ({'width': '50%', 'alt': None}, ' caption')
    >>> parse_attribute_block(" {width=50%}") is None
    True

    """
    attributes: AttributeMap = {}
    state = _State.START
    key = ""
    quote = ""
    buffer: list[str] = []
    consumed = 0

    for consumed, char in enumerate(text, 1):
        if char in _FORBIDDEN_CHARS:
            return None

        if state is _State.START:
            if char != "{":
                return None
            state = _State.KEY
            buffer = []

        elif state is _State.KEY:
            if char == "=":
                if not buffer:
                    return None
                key = "".join(buffer).strip()
                state = _State.VALUE_START
            elif char in ",}":
                _store(attributes, "".join(buffer).strip(), None)
                buffer = []
                if char == "}":
                    state = _State.ENDED
                    break
            else:
                buffer.append(char)

        elif state is _State.VALUE_START:
            if char == " ":
                continue
            if char in _QUOTES:
                quote = char
                buffer = []
                state = _State.QUOTED_VALUE
            elif char in ",}":
                _store(attributes, key, "")
                buffer = []
                state = _State.KEY
                if char == "}":
                    state = _State.ENDED
                    break
            elif char == "=":
                return None
            else:
                buffer = [char]
                state = _State.UNQUOTED_VALUE

        elif state is _State.UNQUOTED_VALUE:
            if char in ",}":
                _store(attributes, key, "".join(buffer).strip())
                buffer = []
                state = _State.KEY
                if char == "}":
                    state = _State.ENDED
                    break
            elif char == "=":
                return None
            else:
                buffer.append(char)

        elif state is _State.QUOTED_VALUE:
            if char == quote:
                _store(attributes, key, "".join(buffer))
                state = _State.AFTER_QUOTE
            else:
                buffer.append(char)

        elif state is _State.AFTER_QUOTE:
            if char == ",":
                buffer = []
                state = _State.KEY
            elif char == "}":
                state = _State.ENDED
                break
            elif char != " ":
                return None

    if state is not _State.ENDED:
        return None
    return attributes, text[consumed:]


def attach_image_attributes(container: Node) -> int:
    """Move attribute blocks following images in ``container`` onto the images.

    Only the direct children of ``container`` are examined. Text nodes left
    empty by the move are removed.

    Returns
    -------
    int
        Number of attribute blocks applied

    """
    children = get_node_children(container)
    emptied: set[int] = set()
    applied = 0

    for previous, current in zip(children, children[1:]):
        if not isinstance(previous, (Image, ImageReference)) or not isinstance(current, Text):
            continue
        parsed = parse_attribute_block(current.content)
        if parsed is None:
            continue

        attributes, rest = parsed
        previous.attributes.update(attributes)
        current.content = rest
        applied += 1
        if not rest:
            emptied.add(id(current))

    if emptied:
        set_node_children(container, [child for child in children if id(child) not in emptied])
    return applied


class ImageAttributeTransform(DocumentTransform):
    """Attach ``{key=value}`` blocks written after images to the image nodes.

    Examples
    --------
    >>> doc = markdown_to_ast("![x](x.png){width=2cm}")
    >>> doc = ImageAttributeTransform().transform(doc)
    >>> doc.children[0].content[0].attributes
    {'width': '2cm'}

    """

    def apply(self, document: Document) -> None:
        """Apply attribute blocks everywhere in the document."""
        applied = 0
        for node in walk(document):
            applied += attach_image_attributes(node)
        if applied:
            logger.debug(f"Applied {applied} image attribute block(s)")


__all__ = ["ImageAttributeTransform", "attach_image_attributes", "parse_attribute_block"]
