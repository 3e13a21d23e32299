"""Tests for typebook.core.settings."""

from pathlib import Path

import pytest

from typebook.core.errors import ConfigError
from typebook.core.settings import TypebookSettings


class TestDefaults:
    def test_defaults(self):
        settings = TypebookSettings()
        assert settings.book_root == Path(".")
        assert settings.summary_file == "SUMMARY.md"
        assert settings.log_level == "WARNING"
        assert settings.log_json is None

    def test_book_root_is_a_plain_default(self):
        field = TypebookSettings.model_fields["book_root"]
        assert field.default == Path(".")
        assert field.default_factory is None

    def test_summary_path(self, tmp_path):
        settings = TypebookSettings(book_root=tmp_path, summary_file="TOC.md")
        assert settings.summary_path == tmp_path / "TOC.md"


class TestEnvironment:
    def test_env_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TYPEBOOK_BOOK_ROOT", str(tmp_path))
        monkeypatch.setenv("TYPEBOOK_LOG_LEVEL", "debug")
        settings = TypebookSettings()
        assert settings.book_root == tmp_path
        assert settings.log_level == "DEBUG"


class TestLoad:
    def test_invalid_log_level_raises_config_error(self):
        with pytest.raises(ConfigError) as exc_info:
            TypebookSettings.load(log_level="LOUD")
        assert exc_info.value.cause is not None


class TestFromYaml:
    def test_from_yaml(self, tmp_path):
        path = tmp_path / "typebook.yaml"
        path.write_text("book_root: docs\nsummary_file: TOC.md\nlog_level: info\n")
        settings = TypebookSettings.from_yaml(path)
        assert settings.book_root == Path("docs")
        assert settings.summary_file == "TOC.md"
        assert settings.log_level == "INFO"

    def test_overrides_win(self, tmp_path):
        path = tmp_path / "typebook.yaml"
        path.write_text("book_root: docs\n")
        settings = TypebookSettings.from_yaml(path, book_root=tmp_path)
        assert settings.book_root == tmp_path

    def test_empty_file(self, tmp_path):
        path = tmp_path / "typebook.yaml"
        path.write_text("")
        assert TypebookSettings.from_yaml(path).summary_file == "SUMMARY.md"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            TypebookSettings.from_yaml(tmp_path / "absent.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "typebook.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            TypebookSettings.from_yaml(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "typebook.yaml"
        path.write_text("book_root: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            TypebookSettings.from_yaml(path)
