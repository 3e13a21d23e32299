"""
Domain models for the document index.

Manifesto:
    A topic entry is authored once, in the summary page, and never changes
    afterwards. Frozen dataclasses make that a property of the type rather
    than a convention.

Tags:
    domain-model, frozen-dataclass, typebook
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Tier(str, Enum):
    """Coarse difficulty classification used to group topics.

    Declaration order is presentation order: BASIC topics come first.
    """

    BASIC = "BASIC"
    INTERMEDIATE = "INTERMEDIATE"

    @classmethod
    def parse(cls, value: Tier | str) -> Tier | None:
        """Match a tier by value or name, case-insensitively.

        Returns None for anything that is not a tier.
        """
        if isinstance(value, Tier):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None

    @property
    def label(self) -> str:
        """Heading text used in the summary page (``Basic``)."""
        return self.value.capitalize()


@dataclass(frozen=True)
class TopicEntry:
    """
    One row of the documentation index.

    Attributes:
        title: Display name of the concept (``"any"``, ``"ClassVar"``)
        page_reference: Identifier of the content page, relative to the
            book root without the ``.md`` suffix (``"dict"``)
        tier: Difficulty tier the entry belongs to
        order: Position within its tier, starting at 0
    """

    title: str
    page_reference: str
    tier: Tier
    order: int

    @property
    def path(self) -> str:
        """Relative file path of the backing page."""
        return f"{self.page_reference}.md"

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "page_reference": self.page_reference,
            "tier": self.tier.value,
            "order": self.order,
            "path": self.path,
        }


def normalize_reference(reference: str) -> str:
    """Normalize a link target or user input to a page reference.

    >>> normalize_reference("./basics/dict.md")
    'basics/dict'
    >>> normalize_reference("dict")
    'dict'
    """
    ref = reference.strip().replace("\\", "/")
    while ref.startswith("./"):
        ref = ref[2:]
    if ref.endswith(".md"):
        ref = ref[: -len(".md")]
    return ref


__all__ = ["Tier", "TopicEntry", "normalize_reference"]
