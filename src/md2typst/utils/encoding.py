#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/utils/encoding.py
"""Character encoding detection for Markdown input read as bytes."""

from __future__ import annotations

import logging
from typing import IO

import chardet

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ("utf-8-sig", "utf-8", "latin-1")


def detect_encoding(
    data: bytes,
    sample_size: int = 8192,
    confidence_threshold: float = 0.7,
) -> str | None:
    """Detect character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name, or None if detection is inconclusive

    """
    result = chardet.detect(data[:sample_size])
    if not result or not result.get("encoding"):
        logger.debug("chardet: No encoding detected")
        return None

    encoding = result["encoding"]
    confidence = result.get("confidence") or 0.0
    logger.debug("chardet detected encoding: %s (confidence: %.2f)", encoding, confidence)

    if confidence < confidence_threshold:
        logger.debug("chardet confidence %.2f below threshold %.2f", confidence, confidence_threshold)
        return None
    return encoding


def read_text_with_encoding_detection(data: bytes, fallback_encodings: tuple[str, ...] | None = None) -> str:
    """Decode bytes as text.

    A UTF-8 byte order mark wins outright. Otherwise UTF-8 is tried first,
    then the chardet guess, then each fallback encoding in order.

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : tuple of str, optional
        Encodings to try after detection. Defaults to
        ``("utf-8-sig", "utf-8", "latin-1")``.

    Returns
    -------
    str
        Decoded text content

    """
    if data.startswith(b"\xef\xbb\xbf"):
        return data.decode("utf-8-sig")

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Input is not valid UTF-8, detecting encoding")

    candidates: list[str] = []
    detected = detect_encoding(data)
    if detected:
        candidates.append(detected)
    candidates.extend(fallback_encodings or DEFAULT_FALLBACK_ENCODINGS)

    for encoding in candidates:
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug("Failed to decode with %s: %s", encoding, e)
            continue
        logger.debug("Successfully decoded with encoding: %s", encoding)
        return text

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def normalize_stream_to_text(stream: IO[bytes] | IO[str]) -> str:
    """Read a binary or text stream to a string."""
    content = stream.read()
    if isinstance(content, bytes):
        return read_text_with_encoding_detection(content)
    return content
