"""Table of contents of the bundled type-hints book.

Read-only constant; ``default_index()`` builds the index once per process.
"""

from __future__ import annotations

from functools import lru_cache

from typebook.index.index import DocumentIndex
from typebook.index.models import Tier, TopicEntry

_BASIC = [
    ("any", "any"),
    ("dict", "dict"),
    ("tuple", "tuple"),
    ("Optional", "optional"),
    ("Union", "union"),
    ("ClassVar", "classvar"),
    ("TypedDict", "typeddict"),
]

_INTERMEDIATE = [
    ("callable", "callable"),
    ("Generics", "generics"),
    ("ParamSpec", "paramspec"),
    ("Self", "self"),
    ("*args and **kwargs", "kwargs"),
]

BOOK_ENTRIES: tuple[TopicEntry, ...] = tuple(
    TopicEntry(title=title, page_reference=ref, tier=tier, order=order)
    for tier, rows in ((Tier.BASIC, _BASIC), (Tier.INTERMEDIATE, _INTERMEDIATE))
    for order, (title, ref) in enumerate(rows)
)


@lru_cache(maxsize=1)
def default_index() -> DocumentIndex:
    return DocumentIndex(BOOK_ENTRIES)


__all__ = ["BOOK_ENTRIES", "default_index"]
