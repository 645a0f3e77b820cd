#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the command line interface."""

import io
import json

import pytest

from md2typst import cli
from md2typst.exceptions import RenderingError
from md2typst.renderers.typst import asset_id_for


@pytest.fixture
def markdown_file(tmp_path):
    path = tmp_path / "doc.md"
    path.write_text("# Title\n\n![logo](logo.png){width=2cm}\n", encoding="utf-8")
    return path


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Tests for cli.main."""

    def test_stdout(self, markdown_file, capsys):
        """Test Typst source is printed."""
        assert cli.main([str(markdown_file)]) == cli.EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.startswith('#heading(level: 1, [#"Title"])\n')
        assert "width: 2cm" in out

    def test_output_and_manifest(self, markdown_file, tmp_path):
        """Test output file and asset manifest."""
        output = tmp_path / "doc.typ"
        manifest = tmp_path / "assets.json"
        code = cli.main([str(markdown_file), "-o", str(output), "--assets-manifest", str(manifest)])
        assert code == cli.EXIT_SUCCESS
        assert output.read_text(encoding="utf-8").startswith("#heading")
        assert json.loads(manifest.read_text(encoding="utf-8")) == [
            {"source_url": "logo.png", "asset_id": asset_id_for("logo.png")}
        ]

    def test_stdin(self, monkeypatch, capsys):
        """Test '-' reads stdin."""
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"*hi*"), encoding="utf-8"))
        assert cli.main(["-"]) == cli.EXIT_SUCCESS
        assert capsys.readouterr().out.startswith('#par[#emph[#"hi"]]\n')

    def test_preamble(self, markdown_file, capsys):
        """Test inline preamble."""
        cli.main([str(markdown_file), "--preamble", '#import "t.typ": *\n'])
        assert capsys.readouterr().out.startswith('#import "t.typ": *\n#heading')

    def test_preamble_file(self, markdown_file, tmp_path, capsys):
        """Test preamble read from a file."""
        preamble = tmp_path / "pre.typ"
        preamble.write_text("#set page(width: 10cm)\n", encoding="utf-8")
        cli.main([str(markdown_file), "--preamble-file", str(preamble)])
        assert capsys.readouterr().out.startswith("#set page(width: 10cm)\n#heading")

    def test_disable_transforms(self, tmp_path, capsys):
        """Test switching off attributes and spans."""
        path = tmp_path / "t.md"
        path.write_text("![a](a.png){width=2cm}\n\n| a | < |\n|---|---|\n| 1 | 2 |\n", encoding="utf-8")
        cli.main([str(path), "--no-image-attributes", "--no-table-spans"])
        out = capsys.readouterr().out
        assert '#"{width=2cm}"' in out
        assert "colspan" not in out

    def test_missing_input(self, tmp_path):
        """Test unreadable input exits with the file error code."""
        assert cli.main([str(tmp_path / "missing.md")]) == cli.EXIT_FILE_ERROR

    def test_library_error(self, markdown_file, monkeypatch):
        """Test compile failures exit with the error code."""

        def fail(document):
            raise RenderingError("boom")

        monkeypatch.setattr(cli, "compile_document", fail)
        assert cli.main([str(markdown_file)]) == cli.EXIT_ERROR

    def test_usage_error(self):
        """Test argparse errors exit with code 2."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--no-such-flag"])
        assert exc_info.value.code == cli.EXIT_USAGE_ERROR

    def test_conflicting_preambles(self, markdown_file):
        """Test --preamble and --preamble-file are exclusive."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(markdown_file), "--preamble", "x", "--preamble-file", "y"])
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        """Test --version."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--version"])
        assert exc_info.value.code == 0
        assert "md2typst" in capsys.readouterr().out
