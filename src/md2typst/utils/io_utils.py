#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/utils/io_utils.py
"""Input and output helpers for text documents."""

from __future__ import annotations

import io
from pathlib import Path
from typing import IO, Union, cast

from md2typst.exceptions import ValidationError
from md2typst.utils.encoding import normalize_stream_to_text, read_text_with_encoding_detection

TextSource = Union[str, Path, IO[bytes], IO[str], bytes]


def read_text_input(input_data: TextSource) -> str:
    """Load Markdown text from the supported input types.

    Parameters
    ----------
    input_data : str, Path, bytes or file-like
        A ``str`` is always treated as Markdown content, never as a file
        name; pass a :class:`~pathlib.Path` to read a file.

    Returns
    -------
    str
        The document text

    Raises
    ------
    ValidationError
        If the input type is not supported

    """
    if isinstance(input_data, str):
        return input_data
    if isinstance(input_data, bytes):
        return read_text_with_encoding_detection(input_data)
    if isinstance(input_data, Path):
        return read_text_with_encoding_detection(input_data.read_bytes())
    if hasattr(input_data, "read"):
        return normalize_stream_to_text(input_data)
    raise ValidationError(
        f"Unsupported input type: {type(input_data).__name__}",
        parameter_name="input_data",
        parameter_value=input_data,
    )


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write text to a file path or a binary or text stream.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes] or IO[str]
        Destination. Paths are written as UTF-8.

    Raises
    ------
    TypeError
        If output type is not supported

    """
    if isinstance(output, (str, Path)):
        Path(output).write_text(content, encoding="utf-8")
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    if isinstance(output, io.TextIOBase):
        is_binary_mode = False
    elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        is_binary_mode = True
    else:
        mode = getattr(output, "mode", "")
        is_binary_mode = isinstance(mode, str) and "b" in mode

    if is_binary_mode:
        cast(IO[bytes], output).write(content.encode("utf-8"))
    else:
        cast(IO[str], output).write(content)


__all__ = ["read_text_input", "write_content"]
