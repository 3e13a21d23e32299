"""
Structured error types for typebook.

Every failure raised by the index, the summary parser, the page catalog and
the settings layer is a ``TypebookError``. Errors carry a category for
reporting, a structured context (reference, path, line) for logging, and an
optional chained cause.

Manifesto:
    - **Typed Error Hierarchy:** One error type per failure surface
    - **Rich Context:** Errors carry the reference/path/line that failed
    - **Error Chaining:** Preserve original exceptions while adding context
    - **Never silent:** Lookups report absence, they never guess

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                     TypebookError                         │
        │            (category, context, cause)                     │
        ├──────────────────────────────────────────────────────────┤
        │  ReferenceNotFoundError   PageNotFoundError               │
        │  (NOT_FOUND)              PageReadError (STORAGE)         │
        │                                                           │
        │  SummaryParseError        IndexIntegrityError             │
        │  (PARSE)                  (VALIDATION)                    │
        │                                                           │
        │  ConfigError                                              │
        │  (CONFIG)                                                 │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> error = ReferenceNotFoundError("Unknown page: 'nope'")
    >>> error.category
    <ErrorCategory.NOT_FOUND: 'NOT_FOUND'>

    >>> error = SummaryParseError("Bad link").with_context(line=12)
    >>> error.context.line
    12

Tags:
    error-handling, exception-hierarchy, error-context, typebook

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification and CLI reporting."""

    NOT_FOUND = "NOT_FOUND"       # Reference absent from the index
    STORAGE = "STORAGE"           # Page file missing or unreadable
    PARSE = "PARSE"               # Malformed summary page
    VALIDATION = "VALIDATION"     # Index invariant violated
    CONFIG = "CONFIG"             # Missing/invalid settings
    INTERNAL = "INTERNAL"         # Bugs, unexpected state
    UNKNOWN = "UNKNOWN"           # Uncategorized errors


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only fields that were set are serialized by ``to_dict()``; anything
    without a dedicated field goes into ``metadata``.

    Attributes:
        reference: Page reference being looked up or validated
        path: File that was being read
        line: 1-based line number inside ``path``
        tier: Tier involved in the failure
        metadata: Additional key-value pairs
    """

    reference: str | None = None
    path: str | None = None
    line: int | None = None
    tier: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["reference", "path", "line", "tier"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class TypebookError(Exception):
    """
    Base exception for all typebook errors.

    Subclasses set ``default_category``; callers can override it per
    instance. ``with_context()`` returns the same instance so it can be
    used inline in a ``raise`` statement.

    Examples:
        >>> try:
        ...     raise OSError("permission denied")
        ... except OSError as e:
        ...     error = TypebookError("Cannot read page", cause=e)
        >>> error.cause
        OSError('permission denied')

        >>> TypebookError("boom").to_dict()["category"]
        'INTERNAL'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TypebookError:
        """
        Add context to this error (fluent API).

        Usage:
            raise SummaryParseError("Bad heading").with_context(
                path="SUMMARY.md",
                line=4,
            )
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context = self.context.to_dict()
        if context:
            result["context"] = context
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# =============================================================================
# INDEX ERRORS
# =============================================================================


class ReferenceNotFoundError(TypebookError):
    """A page reference is not present in the index."""

    default_category = ErrorCategory.NOT_FOUND


class IndexIntegrityError(TypebookError):
    """
    The entries handed to the index violate one of its invariants.

    Duplicate page references, duplicate or decreasing order within a tier.
    Never recoverable: the summary page must be fixed.
    """

    default_category = ErrorCategory.VALIDATION


# =============================================================================
# SOURCE ERRORS
# =============================================================================


class SummaryParseError(TypebookError):
    """The summary page could not be parsed."""

    default_category = ErrorCategory.PARSE


class PageNotFoundError(TypebookError):
    """An indexed page has no file on disk."""

    default_category = ErrorCategory.STORAGE


class PageReadError(TypebookError):
    """An indexed page exists but cannot be read or decoded."""

    default_category = ErrorCategory.STORAGE


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(TypebookError):
    """Missing or invalid settings."""

    default_category = ErrorCategory.CONFIG


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, TypebookError):
        return error.category
    if isinstance(error, (FileNotFoundError, IsADirectoryError)):
        return ErrorCategory.STORAGE
    if isinstance(error, ValueError):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "TypebookError",
    "ReferenceNotFoundError",
    "IndexIntegrityError",
    "SummaryParseError",
    "PageNotFoundError",
    "PageReadError",
    "ConfigError",
    "categorize_error",
]
