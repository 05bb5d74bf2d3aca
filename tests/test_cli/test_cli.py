"""Tests for the pagemodel command-line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pagemodel import __version__
from pagemodel.cli.main import cli
from pagemodel.model.diagnostic import Diagnostic, Severity
from pagemodel.validation import RULES_BY_VERSION


PAGE = """<html><head><title>Acme</title>
<style>
  .hero { padding: 64px; color: #667eea; }
  .btn:hover { opacity: 0.8; }
  @media (max-width: 768px) { .hero { padding: 24px; } }
</style></head>
<body>
  <section class="hero"><h1>Launch</h1><a class="btn" href="/go">Go</a></section>
  <footer><p>Bye</p></footer>
</body></html>
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def page_file(tmp_path: Path) -> Path:
    path = tmp_path / "page.html"
    path.write_text(PAGE, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("convert", "validate", "inspect"):
            assert command in result.output


# ---------------------------------------------------------------------------
# convert
# ---------------------------------------------------------------------------


class TestCLIConvert:
    def test_convert_to_stdout(self, page_file: Path) -> None:
        result = CliRunner().invoke(cli, ["convert", str(page_file)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["version"] == "v4"
        assert data["meta"]["title"] == "Acme"
        assert data["nodes"][0]["styles"]["mobile"] == {"padding": "24px", "color": "#667eea"}

    def test_convert_to_file(self, page_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "model.json"
        result = CliRunner().invoke(
            cli, ["convert", str(page_file), "--target", "v3", "--output", str(out)]
        )
        assert result.exit_code == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["version"] == "v3"
        assert [s["type"] for s in data["sections"]] == ["hero", "footer"]

    def test_convert_indent(self, page_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "model.json"
        CliRunner().invoke(cli, ["convert", str(page_file), "-o", str(out), "--indent", "4"])
        assert '\n    "version": "v4"' in out.read_text(encoding="utf-8")

    def test_convert_verbose(self, page_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "model.json"
        result = CliRunner().invoke(cli, ["--verbose", "convert", str(page_file), "-o", str(out)])
        assert result.exit_code == 0

    def test_convert_strict_valid(self, page_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "model.json"
        result = CliRunner().invoke(cli, ["convert", str(page_file), "--strict", "-o", str(out)])
        assert result.exit_code == 0
        assert json.loads(out.read_text(encoding="utf-8"))["version"] == "v4"

    def test_convert_strict_schema_errors(
        self, page_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def reject(data):
            return [Diagnostic(rule="reject", severity=Severity.ERROR, message="Rejected")]

        monkeypatch.setitem(RULES_BY_VERSION, "v4", [reject])
        out = tmp_path / "model.json"
        result = CliRunner().invoke(cli, ["convert", str(page_file), "--strict", "-o", str(out)])
        assert result.exit_code == 1
        assert "Validation failed with 1 error(s)" in result.output
        assert not out.exists()

    def test_convert_rejects_unknown_target(self, page_file: Path) -> None:
        result = CliRunner().invoke(cli, ["convert", str(page_file), "--target", "v5"])
        assert result.exit_code != 0

    def test_convert_missing_file(self) -> None:
        result = CliRunner().invoke(cli, ["convert", "/nonexistent/page.html"])
        assert result.exit_code != 0

    def test_convert_malformed_html(self, tmp_path: Path) -> None:
        page = tmp_path / "bad.html"
        page.write_text("<html><body><div><p>Unclosed<body></html>", encoding="utf-8")
        out = tmp_path / "model.json"
        result = CliRunner().invoke(cli, ["convert", str(page), "-o", str(out)])
        assert result.exit_code == 0
        assert json.loads(out.read_text(encoding="utf-8"))["nodes"]


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


class TestCLIValidate:
    def test_validate_converted_model(self, page_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "model.json"
        runner = CliRunner()
        runner.invoke(cli, ["convert", str(page_file), "-o", str(out)])
        result = runner.invoke(cli, ["validate", str(out)])
        assert result.exit_code == 0
        assert "OK: model.json is valid" in result.output

    def test_validate_invalid_model(self, tmp_path: Path) -> None:
        model = tmp_path / "model.json"
        model.write_text(json.dumps({"version": "v4", "meta": {}, "nodes": []}), encoding="utf-8")
        result = CliRunner().invoke(cli, ["validate", str(model)])
        assert result.exit_code == 1
        assert "Summary:" in result.output
        assert "ERROR" in result.output

    def test_validate_not_json(self, tmp_path: Path) -> None:
        model = tmp_path / "model.json"
        model.write_text("{not json", encoding="utf-8")
        result = CliRunner().invoke(cli, ["validate", str(model)])
        assert result.exit_code == 1

    def test_validate_json_array(self, tmp_path: Path) -> None:
        model = tmp_path / "model.json"
        model.write_text("[]", encoding="utf-8")
        result = CliRunner().invoke(cli, ["validate", str(model)])
        assert result.exit_code == 1


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


class TestCLIInspect:
    def test_inspect(self, page_file: Path) -> None:
        result = CliRunner().invoke(cli, ["inspect", str(page_file)])
        assert result.exit_code == 0
        assert "Title: Acme" in result.output
        assert "type=hero" in result.output
        assert "responsive=mobile" in result.output
        assert "type=footer" in result.output
        assert "color-1: #667eea" in result.output

    def test_inspect_empty_page(self, tmp_path: Path) -> None:
        page = tmp_path / "empty.html"
        page.write_text("", encoding="utf-8")
        result = CliRunner().invoke(cli, ["inspect", str(page)])
        assert result.exit_code == 0
        assert "Title: (untitled)" in result.output
        assert "Nodes: 0" in result.output
