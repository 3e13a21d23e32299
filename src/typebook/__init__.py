"""
typebook - navigation index for the Python type-hints book.

Example:
    >>> from typebook import default_index
    >>> default_index().resolve("dict").title
    'dict'
"""

from typebook.core.errors import ReferenceNotFoundError, TypebookError
from typebook.index import DocumentIndex, Tier, TopicEntry, default_index, load_index, load_summary
from typebook.pages import PageCatalog
from typebook.renderers import TocRenderer

__version__ = "0.1.0"

__all__ = [
    "DocumentIndex",
    "PageCatalog",
    "ReferenceNotFoundError",
    "Tier",
    "TocRenderer",
    "TopicEntry",
    "TypebookError",
    "default_index",
    "load_index",
    "load_summary",
    "__version__",
]
