"""Pytest configuration and shared fixtures for the md2typst test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import EMPTY_FOOTNOTES

from md2typst.ast import Document
from md2typst.renderers.typst import TypstRenderer

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - Markdown to Typst pipeline")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")


@pytest.fixture
def compile_body():
    """Compile nodes inside a Document and return the output before the footnote block."""

    def _compile(*children, options=None):
        source = TypstRenderer(options).compile(Document(children=list(children))).source
        assert source.endswith(EMPTY_FOOTNOTES)
        return source[: -len(EMPTY_FOOTNOTES)]

    return _compile
