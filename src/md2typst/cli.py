#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/cli.py
"""Command-line interface for md2typst.

Examples
--------
Compile a file to stdout::

    $ md2typst notes.md

Write the Typst source and the image manifest::

    $ md2typst notes.md -o notes.typ --assets-manifest assets.json

Read from stdin with a template import::

    $ cat slides.md | md2typst - --preamble '#import "theme.typ": *'

Exit Codes
----------
0 success, 1 compilation error, 2 usage error, 3 input or output error.

"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from md2typst import __version__
from md2typst.api import apply_transforms, compile_document, to_ast
from md2typst.exceptions import Md2TypstError
from md2typst.logging_utils import configure_logging
from md2typst.renderers.typst import Asset
from md2typst.transforms import DocumentTransform, ImageAttributeTransform, PreambleTransform, TableSpanTransform
from md2typst.utils.io_utils import write_content

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE_ERROR = 2
EXIT_FILE_ERROR = 3


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="md2typst",
        description="Compile a Markdown document to Typst markup.",
    )
    parser.add_argument("input", help="Markdown file to compile, or '-' to read stdin")
    parser.add_argument("-o", "--output", help="Write Typst source to this file instead of stdout")
    parser.add_argument(
        "--assets-manifest",
        metavar="PATH",
        help="Write a JSON list of the image assets referenced by the output",
    )

    preamble_group = parser.add_mutually_exclusive_group()
    preamble_group.add_argument("--preamble", metavar="TEXT", help="Raw Typst inserted before the document body")
    preamble_group.add_argument("--preamble-file", metavar="PATH", help="Read the preamble from a file")

    parser.add_argument(
        "--no-image-attributes",
        action="store_true",
        help="Leave {key=value} blocks after images as text",
    )
    parser.add_argument(
        "--no-table-spans",
        action="store_true",
        help="Do not merge '<' and '^' table cells into spans",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Verbose log format including third-party loggers")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read_input(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def _build_transforms(args: argparse.Namespace, preamble: Optional[str]) -> list[DocumentTransform]:
    transforms: list[DocumentTransform] = []
    if not args.no_image_attributes:
        transforms.append(ImageAttributeTransform())
    if not args.no_table_spans:
        transforms.append(TableSpanTransform())
    if preamble:
        transforms.append(PreambleTransform(preamble))
    return transforms


def _manifest(assets: list[Asset]) -> str:
    entries = [{"source_url": asset.source_url, "asset_id": asset.asset_id} for asset in assets]
    return json.dumps(entries, indent=2) + "\n"


def main(args: list[str] | None = None) -> int:
    """Run the md2typst command line.

    Parameters
    ----------
    args : list of str, optional
        Arguments to parse instead of ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code. Usage errors exit through argparse with code 2.

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        markdown = _read_input(parsed_args.input)
        preamble = parsed_args.preamble
        if parsed_args.preamble_file:
            preamble = Path(parsed_args.preamble_file).read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Could not read input: {e}")
        return EXIT_FILE_ERROR

    try:
        document = to_ast(markdown)
        document = apply_transforms(document, _build_transforms(parsed_args, preamble))
        result = compile_document(document)
    except Md2TypstError as e:
        logger.error(f"Compilation failed: {e}")
        return EXIT_ERROR

    logger.info(f"Compiled {parsed_args.input} with {len(result.assets)} image asset(s)")

    try:
        if parsed_args.output:
            write_content(result.source, parsed_args.output)
        else:
            sys.stdout.write(result.source)
        if parsed_args.assets_manifest:
            write_content(_manifest(result.assets), parsed_args.assets_manifest)
    except OSError as e:
        logger.error(f"Could not write output: {e}")
        return EXIT_FILE_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
