"""Tests for the ``typebook`` CLI commands."""

from __future__ import annotations

import json

import pytest
import structlog
from typer.testing import CliRunner

from typebook.cli.app import app
from typebook.core.logging import clear_context

runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    clear_context()
    structlog.reset_defaults()


def invoke(*args: str):
    return runner.invoke(app, list(args))


class TestRoot:
    def test_version(self):
        result = invoke("--version")
        assert result.exit_code == 0
        assert result.stdout.startswith("typebook ")

    def test_no_args_shows_help(self):
        result = invoke()
        assert "list" in result.output

    def test_bad_config_file(self, tmp_path):
        result = invoke("--config", str(tmp_path / "absent.yaml"), "list")
        assert result.exit_code == 1


class TestList:
    def test_list_table(self, book_dir):
        result = invoke("--book", str(book_dir), "list")
        assert result.exit_code == 0
        assert "ParamSpec" in result.stdout
        assert "5 entries" in result.stdout

    def test_list_json_filtered(self, book_dir):
        result = invoke("--book", str(book_dir), "list", "--tier", "intermediate", "--json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [e["title"] for e in data] == ["callable", "ParamSpec"]

    def test_list_unknown_tier_is_empty(self, book_dir):
        result = invoke("--book", str(book_dir), "list", "--tier", "advanced", "--json")
        assert result.exit_code == 0
        assert json.loads(result.stdout) == []

    def test_list_builtin_when_no_summary(self, tmp_path):
        result = invoke("--book", str(tmp_path), "list", "--json")
        assert result.exit_code == 0
        titles = [e["title"] for e in json.loads(result.stdout)]
        assert "dict" in titles and "ParamSpec" in titles

    def test_list_bad_summary(self, tmp_path):
        (tmp_path / "SUMMARY.md").write_text("# Expert\n- [x](x.md)\n")
        result = invoke("--book", str(tmp_path), "list")
        assert result.exit_code == 1

    def test_list_undecodable_summary(self, tmp_path):
        (tmp_path / "SUMMARY.md").write_bytes(b"\xff\xfe# Basic\n")
        result = invoke("--book", str(tmp_path), "list")
        assert result.exit_code == 1
        assert "PARSE" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)


class TestResolve:
    def test_resolve_json(self, book_dir):
        result = invoke("--book", str(book_dir), "resolve", "./dict.md", "--json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["title"] == "dict"
        assert data["tier"] == "BASIC"

    def test_resolve_table(self, book_dir):
        result = invoke("--book", str(book_dir), "resolve", "callable")
        assert result.exit_code == 0
        assert "Intermediate" in result.stdout

    def test_resolve_missing(self, book_dir):
        result = invoke("--book", str(book_dir), "resolve", "does-not-exist")
        assert result.exit_code == 1
        assert "NOT_FOUND" in result.output


class TestShow:
    def test_show_page(self, book_dir):
        result = invoke("--book", str(book_dir), "show", "dict")
        assert result.exit_code == 0
        assert "goat: 1" in result.stdout
        assert "python: 1" in result.stdout

    def test_show_missing_page(self, book_dir):
        (book_dir / "any.md").unlink()
        result = invoke("--book", str(book_dir), "show", "any")
        assert result.exit_code == 1
        assert "STORAGE" in result.output

    def test_show_undecodable_page(self, book_dir):
        (book_dir / "dict.md").write_bytes(b"\xff\xfe")
        result = invoke("--book", str(book_dir), "show", "dict")
        assert result.exit_code == 1
        assert "STORAGE" in result.output


class TestValidate:
    def test_valid(self, book_dir):
        result = invoke("--book", str(book_dir), "validate", "--json")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["valid"] is True

    def test_invalid(self, book_dir):
        (book_dir / "classvar.md").unlink()
        result = invoke("--book", str(book_dir), "validate")
        assert result.exit_code == 1
        assert "classvar.md" in result.stdout

    def test_undecodable_page_reported(self, book_dir):
        (book_dir / "dict.md").write_bytes(b"\xff\xfe")
        result = invoke("--book", str(book_dir), "validate")
        assert result.exit_code == 1
        assert "dict.md" in result.stdout
        assert not isinstance(result.exception, UnicodeDecodeError)


class TestRender:
    def test_render_summary_to_stdout(self, book_dir, summary_text):
        result = invoke("--book", str(book_dir), "render")
        assert result.exit_code == 0
        assert "- [ParamSpec](./paramspec.md)" in result.stdout

    def test_render_json_to_file(self, book_dir, tmp_path):
        output = tmp_path / "out" / "nav.json"
        result = invoke("--book", str(book_dir), "render", "--format", "json", "-o", str(output))
        assert result.exit_code == 0
        nav = json.loads(output.read_text())
        assert nav["total"] == 5
