"""Document index: topic entries, the summary parser and the bundled catalog."""

from typebook.index.catalog import BOOK_ENTRIES, default_index
from typebook.index.index import DocumentIndex
from typebook.index.loader import load_index
from typebook.index.models import Tier, TopicEntry, normalize_reference
from typebook.index.summary import load_summary, parse_summary

__all__ = [
    "BOOK_ENTRIES",
    "DocumentIndex",
    "Tier",
    "TopicEntry",
    "default_index",
    "load_index",
    "load_summary",
    "normalize_reference",
    "parse_summary",
]
