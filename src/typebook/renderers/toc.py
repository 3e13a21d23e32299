"""
Table-of-contents renderer.

Turns a ``DocumentIndex`` into the artifacts a static-site generator
consumes: a canonical ``SUMMARY.md`` and a JSON-ready navigation tree.

Manifesto:
    The index is the source of truth; rendered output is disposable. A
    summary page rendered here must parse back into an equal index.

Tags:
    renderer, template, jinja2, navigation, typebook

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from itertools import groupby
from operator import attrgetter
from typing import Any

from jinja2 import DictLoader, Environment, select_autoescape

from typebook.core.logging import get_logger
from typebook.index.index import DocumentIndex
from typebook.index.models import Tier, TopicEntry

logger = get_logger(__name__)

SUMMARY_TEMPLATE = "SUMMARY.md.j2"

_TEMPLATES = {
    SUMMARY_TEMPLATE: (
        "# Summary\n"
        "{% for tier, entries in sections %}\n"
        "\n"
        "# {{ tier.label }}\n"
        "\n"
        "{% for entry in entries %}\n"
        "- [{{ entry.title }}](./{{ entry.path }})\n"
        "{% endfor %}\n"
        "{% endfor %}\n"
    ),
}


class TocRenderer:
    """Render navigation artifacts from an index."""

    def __init__(self, index: DocumentIndex):
        self.index = index
        self.env = Environment(
            loader=DictLoader(_TEMPLATES),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def _sections(self) -> list[tuple[Tier, tuple[TopicEntry, ...]]]:
        return [(tier, self.index.list_entries(tier)) for tier in self.index.tiers()]

    def _runs(self) -> list[tuple[Tier, tuple[TopicEntry, ...]]]:
        # A tier that is reopened later in the book gets its own heading again.
        return [
            (tier, tuple(entries))
            for tier, entries in groupby(self.index, key=attrgetter("tier"))
        ]

    def render_summary(self) -> str:
        """Render a canonical mdBook ``SUMMARY.md``.

        Entries keep authored order; each run of same-tier entries is
        introduced by its tier heading.
        """
        template = self.env.get_template(SUMMARY_TEMPLATE)
        content = template.render(sections=self._runs())
        logger.debug("summary_rendered", entries=len(self.index), size=len(content))
        return content

    def to_navigation(self) -> dict[str, Any]:
        """Entries grouped by tier, in tier order, as plain data."""
        return {
            "total": len(self.index),
            "tiers": [
                {
                    "tier": tier.value,
                    "label": tier.label,
                    "entries": [entry.to_dict() for entry in entries],
                }
                for tier, entries in self._sections()
            ],
        }


__all__ = ["TocRenderer"]
