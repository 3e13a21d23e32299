"""Settings for typebook.

Where the book lives and how to log, read from ``TYPEBOOK_*`` environment
variables, a ``.env`` file, or an explicit YAML file.

Examples:
    >>> from typebook.core.settings import TypebookSettings
    >>> settings = TypebookSettings(book_root="docs")
    >>> settings.summary_path
    PosixPath('docs/SUMMARY.md')

    YAML::

        book_root: book/src
        summary_file: SUMMARY.md
        log_level: DEBUG

Tags:
    settings, configuration, pydantic, environment, typebook
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from typebook.core.errors import ConfigError

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class TypebookSettings(BaseSettings):
    """Settings for the index loader, page catalog and CLI.

    Fields
    ──────
    book_root    : Directory holding SUMMARY.md and the content pages
    summary_file : Summary page name, relative to ``book_root``
    log_level    : Structlog log level
    log_json     : Force JSON (True) or console (False) logs; auto when unset
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    book_root: Path = Field(
        default=Path("."),
        description="Directory holding SUMMARY.md and the content pages",
    )
    summary_file: str = "SUMMARY.md"

    log_level: str = "WARNING"
    log_json: bool | None = None

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @property
    def summary_path(self) -> Path:
        return self.book_root / self.summary_file

    @classmethod
    def from_yaml(cls, yaml_path: Path | str, **overrides: Any) -> TypebookSettings:
        """Load settings from a YAML file.

        Keyword overrides win over values from the file.

        Raises:
            ConfigError: The file is missing, is not a mapping, or holds
                invalid values.
        """
        path = Path(yaml_path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError as e:
            raise ConfigError(f"Settings file not found: {path}", cause=e).with_context(
                path=str(path)
            )
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}", cause=e).with_context(
                path=str(path)
            )

        if not isinstance(data, dict):
            raise ConfigError(
                f"Settings file must contain a mapping, got {type(data).__name__}"
            ).with_context(path=str(path))

        data.update(overrides)
        return cls.load(**data)

    @classmethod
    def load(cls, **values: Any) -> TypebookSettings:
        """Build settings, converting pydantic failures into ``ConfigError``."""
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e.error_count()} error(s)", cause=e)


__all__ = ["TypebookSettings"]
