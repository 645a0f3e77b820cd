#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/parsers/base.py
"""Base classes for document parsers.

This module defines the abstract base class that parsers inherit from. A
parser turns input text into the md2typst AST.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from md2typst.ast import Document
from md2typst.exceptions import InvalidOptionsError, ParsingError, ValidationError
from md2typst.options.base import BaseParserOptions
from md2typst.utils.io_utils import read_text_input

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    The parse() method accepts:
    - str: document content (never interpreted as a file name)
    - Path: file to read
    - IO[bytes] or IO[str]: file-like object
    - bytes: raw document bytes, decoded with encoding detection

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Document:
        """Parse the input document into an AST.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str] or bytes
            Input document

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        ParsingError
            If the input cannot be read or parsed
        DependencyError
            If required dependencies are not installed

        """
        pass

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Load text from the supported input types.

        Raises
        ------
        ParsingError
            If the input type is unsupported or the input cannot be read

        """
        try:
            return read_text_input(input_data)
        except ValidationError as e:
            raise ParsingError(e.message, parsing_stage="input_loading", original_error=e) from e
        except OSError as e:
            raise ParsingError(f"Failed to read input: {e}", parsing_stage="input_loading", original_error=e) from e
