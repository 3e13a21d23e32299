"""
Document index - the ordered, tiered table of contents of the book.

Manifesto:
    The index is the single source of truth for navigation. It is built
    once from authored entries, checked against its invariants at build
    time, and read-only afterwards. Lookups never guess: an absent
    reference is reported to the caller.

Architecture:
    ::

        SUMMARY.md ──► parse_summary() ──► [TopicEntry, ...]
                                                │
        catalog.BOOK_ENTRIES ───────────────────┤
                                                ▼
                                      DocumentIndex(entries)
                                      ├── _check_integrity()
                                      ├── list_entries(tier?)
                                      └── resolve(reference)

Invariants:
    - page_reference is unique across the index
    - order counts entries within a tier: 0, 1, 2, ... in authored order
    - every entry has exactly one tier

Examples:
    >>> from typebook.index import DocumentIndex, Tier, TopicEntry
    >>> index = DocumentIndex([
    ...     TopicEntry("any", "any", Tier.BASIC, 0),
    ...     TopicEntry("callable", "callable", Tier.INTERMEDIATE, 0),
    ... ])
    >>> [e.title for e in index.list_entries(Tier.INTERMEDIATE)]
    ['callable']
    >>> index.resolve("any").tier
    <Tier.BASIC: 'BASIC'>

Tags:
    index, navigation, table-of-contents, typebook

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from typebook.core.errors import IndexIntegrityError, ReferenceNotFoundError
from typebook.core.logging import get_logger
from typebook.index.models import Tier, TopicEntry, normalize_reference

logger = get_logger(__name__)


class DocumentIndex:
    """Immutable, ordered collection of topic entries.

    Entries keep the order they were handed in (authored order). The
    constructor validates the invariants and raises
    ``IndexIntegrityError`` on the first violation.
    """

    __slots__ = ("_entries", "_by_reference", "_by_tier")

    def __init__(self, entries: Iterable[TopicEntry]):
        self._entries: tuple[TopicEntry, ...] = tuple(entries)
        self._check_integrity()

        self._by_reference = MappingProxyType(
            {entry.page_reference: entry for entry in self._entries}
        )
        self._by_tier = MappingProxyType(
            {
                tier: tuple(e for e in self._entries if e.tier is tier)
                for tier in Tier
            }
        )

        logger.debug(
            "index_built",
            entries=len(self._entries),
            tiers={tier.value: len(items) for tier, items in self._by_tier.items()},
        )

    def _check_integrity(self) -> None:
        seen: set[str] = set()
        next_order: dict[Tier, int] = {}

        for position, entry in enumerate(self._entries):
            if not isinstance(entry.tier, Tier):
                raise IndexIntegrityError(
                    f"Entry {entry.title!r} has no valid tier: {entry.tier!r}"
                ).with_context(reference=entry.page_reference, position=position)

            if entry.page_reference in seen:
                raise IndexIntegrityError(
                    f"Duplicate page reference: {entry.page_reference!r}"
                ).with_context(reference=entry.page_reference, position=position)
            seen.add(entry.page_reference)

            expected = next_order.get(entry.tier, 0)
            if entry.order != expected:
                raise IndexIntegrityError(
                    f"Order {entry.order} of {entry.title!r} should be "
                    f"{expected} in tier {entry.tier.value}"
                ).with_context(
                    reference=entry.page_reference,
                    tier=entry.tier.value,
                    position=position,
                )
            next_order[entry.tier] = expected + 1

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def list_entries(self, tier: Tier | str | None = None) -> tuple[TopicEntry, ...]:
        """Return entries in authored order, optionally filtered by tier.

        Args:
            tier: Tier (or tier name) to filter by. An unknown tier yields
                an empty tuple.

        Returns:
            Tuple of entries; the same value on every call.
        """
        if tier is None:
            return self._entries
        parsed = Tier.parse(tier)
        if parsed is None:
            return ()
        return self._by_tier[parsed]

    def resolve(self, page_reference: str) -> TopicEntry:
        """Look up the entry for a page reference.

        Accepts the bare reference (``"dict"``) as well as the link forms
        used in the summary page (``"./dict.md"``).

        Raises:
            ReferenceNotFoundError: The reference is not in the index.
        """
        reference = normalize_reference(page_reference)
        try:
            return self._by_reference[reference]
        except KeyError:
            raise ReferenceNotFoundError(
                f"Page reference not found in index: {page_reference!r}"
            ).with_context(reference=reference) from None

    def tiers(self) -> tuple[Tier, ...]:
        """Tiers that hold at least one entry, in presentation order."""
        return tuple(tier for tier, items in self._by_tier.items() if items)

    # ------------------------------------------------------------------ #
    # Container protocol
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TopicEntry]:
        return iter(self._entries)

    def __contains__(self, page_reference: object) -> bool:
        if not isinstance(page_reference, str):
            return False
        return normalize_reference(page_reference) in self._by_reference

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentIndex):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"DocumentIndex({len(self._entries)} entries)"


__all__ = ["DocumentIndex"]
