"""Ambient infrastructure: errors, logging and settings."""

from typebook.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    IndexIntegrityError,
    PageNotFoundError,
    PageReadError,
    ReferenceNotFoundError,
    SummaryParseError,
    TypebookError,
)

__all__ = [
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "IndexIntegrityError",
    "PageNotFoundError",
    "PageReadError",
    "ReferenceNotFoundError",
    "SummaryParseError",
    "TypebookError",
]
