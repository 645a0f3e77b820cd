#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2typst/utils/__init__.py
"""Internal helpers shared by parsers and renderers."""
