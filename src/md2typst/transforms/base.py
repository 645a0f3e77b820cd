#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/transforms/base.py
"""Base class for document transforms.

Transforms rewrite a parsed :class:`~md2typst.ast.Document` in place before
it is rendered. Each transform only accepts a document root; the node it
returns is the same object it was given, so transforms can be chained.

"""

from __future__ import annotations

from abc import ABC, abstractmethod

from md2typst.ast.nodes import Document, Node
from md2typst.exceptions import MalformedTreeError


def ensure_document_root(node: Node, stage: str) -> Document:
    """Return ``node`` if it is a Document, otherwise raise MalformedTreeError.

    Parameters
    ----------
    node : Node
        Supposed root of a tree
    stage : str
        Name of the caller, reported in the error

    Raises
    ------
    MalformedTreeError
        If ``node`` is not a Document

    """
    if not isinstance(node, Document):
        raise MalformedTreeError(
            f"Expected a Document root, got {type(node).__name__}",
            node_type=type(node).__name__,
            rendering_stage=stage,
        )
    return node


class DocumentTransform(ABC):
    """Base class for in-place tree transforms.

    Subclasses implement :meth:`apply`; callers use :meth:`transform`, which
    checks the root first.

    Examples
    --------
    >>> class DropMetadata(DocumentTransform):
    ...     def apply(self, document):
    ...         document.metadata.clear()
    >>>
    >>> doc = DropMetadata().transform(doc)

    """

    def transform(self, document: Document) -> Document:
        """Apply the transform to ``document`` and return it.

        Parameters
        ----------
        document : Document
            Root of the tree to rewrite

        Returns
        -------
        Document
            The same document, modified in place

        Raises
        ------
        MalformedTreeError
            If ``document`` is not a Document

        """
        ensure_document_root(document, self.__class__.__name__)
        self.apply(document)
        return document

    @abstractmethod
    def apply(self, document: Document) -> None:
        """Rewrite the document in place."""
        pass
