"""
Summary page parser.

Reads the book's ``SUMMARY.md`` (mdBook convention) into topic entries.
Level-1 headings naming a tier open that tier; every list item link below
it becomes an entry of that tier.

Format::

    # Summary

    [Introduction](README.md)

    # Basic

    - [any](./any.md)
    - [dict](./dict.md)
        - [TypedDict](./typeddict.md)

    # Intermediate

    - [callable](./callable.md)

Rules:
    - ``# Summary`` is the document title and is ignored
    - only list items are topics; bare links are prefix/suffix chapters
    - list items before the first tier heading are skipped
    - a heading that names no tier is an error
    - nested list items belong to the same tier as their parent
    - ``[Draft]()`` items (empty target) are skipped
    - ``---`` separators and blank lines are ignored

Tags:
    parser, markdown, summary, mdbook, typebook
"""

from __future__ import annotations

import re
from pathlib import Path

from typebook.core.errors import SummaryParseError
from typebook.core.logging import get_logger
from typebook.index.index import DocumentIndex
from typebook.index.models import Tier, TopicEntry, normalize_reference

logger = get_logger(__name__)

HEADING_RE = re.compile(r"^#\s+(?P<text>.+?)\s*#*\s*$")
LIST_ITEM_RE = re.compile(r"^(?P<indent>\s*)[-*]\s+(?P<body>.*)$")
# Titles may carry balanced brackets, two levels deep: ``dict[str, list[int]]``.
_TITLE = r"(?:[^\[\]]|\[(?:[^\[\]]|\[[^\[\]]*\])*\])+"
LINK_RE = re.compile(rf"^\[(?P<title>{_TITLE})\]\((?P<target>[^)]*)\)\s*$")
SEPARATOR_RE = re.compile(r"^\s*-{3,}\s*$")

TITLE_HEADINGS = {"summary", "table of contents", "contents"}


def parse_summary(text: str, source: str = "<string>") -> list[TopicEntry]:
    """Parse summary page text into topic entries in authored order.

    Args:
        text: Markdown source of the summary page
        source: Name used in error context and logs

    Returns:
        Entries with ``order`` numbered from 0 within each tier

    Raises:
        SummaryParseError: Unknown tier heading or malformed list item
    """
    entries: list[TopicEntry] = []
    counters: dict[Tier, int] = {}
    current: Tier | None = None
    in_fence = False

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.rstrip()
        stripped = line.strip()

        if stripped.startswith("```"):
            in_fence = not in_fence
            continue
        if in_fence or not stripped or SEPARATOR_RE.match(line):
            continue

        heading = HEADING_RE.match(line)
        if heading:
            heading_text = heading.group("text")
            if heading_text.lower() in TITLE_HEADINGS:
                continue
            tier = Tier.parse(heading_text)
            if tier is None:
                raise SummaryParseError(
                    f"Heading {heading_text!r} does not name a tier "
                    f"(expected one of: {', '.join(t.label for t in Tier)})"
                ).with_context(path=source, line=lineno)
            current = tier
            continue

        if stripped.startswith("#"):
            # Sub-headings group topics visually; they do not change the tier.
            continue

        item = LIST_ITEM_RE.match(line)
        if not item:
            # Prefix/suffix chapters and free prose are not topics.
            if LINK_RE.match(stripped):
                logger.info("unlisted_chapter_skipped", line=lineno, text=stripped)
            continue

        body = item.group("body").strip()
        link = LINK_RE.match(body)
        if not link:
            raise SummaryParseError(
                f"List item is not a link: {body!r}"
            ).with_context(path=source, line=lineno)

        title = link.group("title").strip()
        target = link.group("target").strip()

        if not target:
            logger.debug("draft_chapter_skipped", title=title, line=lineno)
            continue

        if current is None:
            logger.info("prefix_chapter_skipped", title=title, target=target, line=lineno)
            continue

        order = counters.get(current, 0)
        counters[current] = order + 1
        entries.append(
            TopicEntry(
                title=title,
                page_reference=normalize_reference(target),
                tier=current,
                order=order,
            )
        )

    logger.debug("summary_parsed", source=source, entries=len(entries))
    return entries


def load_summary(path: Path | str) -> DocumentIndex:
    """Read a summary page from disk and build the index.

    Raises:
        SummaryParseError: The file cannot be read or parsed
        IndexIntegrityError: The parsed entries violate an index invariant
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SummaryParseError(
            f"Summary page {path} is not valid UTF-8", cause=e
        ).with_context(path=str(path))
    except OSError as e:
        raise SummaryParseError(f"Cannot read summary page {path}", cause=e).with_context(
            path=str(path)
        )

    index = DocumentIndex(parse_summary(text, source=str(path)))
    logger.info("summary_loaded", path=str(path), entries=len(index))
    return index


__all__ = ["parse_summary", "load_summary"]
