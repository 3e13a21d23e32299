"""
Page catalog - checks the index against the pages on disk.

The index only knows references; the catalog maps them to files under the
book root, reads pages, and reports drift in both directions: indexed
pages with no file, and files no entry points at.

Architecture:
    ::

        DocumentIndex ──┐
                        ├──► PageCatalog ──► missing_pages()
        book_root/*.md ─┘                ├─► orphan_pages()
                                         ├─► read_page(ref) ──► Page
                                         └─► validate() ──► ValidationReport

Examples:
    >>> from typebook.index import default_index
    >>> catalog = PageCatalog(Path("book"), default_index())
    >>> report = catalog.validate()
    >>> report.valid
    True

Tags:
    pages, validation, markdown, typebook
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from typebook.core.errors import PageNotFoundError, PageReadError
from typebook.core.logging import get_logger
from typebook.index.index import DocumentIndex
from typebook.index.models import TopicEntry

logger = get_logger(__name__)

# Files that live next to the pages but are never topics.
NON_TOPIC_PAGES = frozenset({"SUMMARY", "README"})

FENCE_RE = re.compile(r"^(?P<fence>`{3,}|~{3,})\s*(?P<lang>[\w+-]*)")
TITLE_RE = re.compile(r"^#{1,6}\s+(?P<title>.+?)\s*#*\s*$")


@dataclass(frozen=True)
class CodeBlock:
    """A fenced block inside a page."""

    language: str
    content: str
    line: int


@dataclass(frozen=True)
class Page:
    """A content page as read from disk."""

    entry: TopicEntry
    path: Path
    title: str | None
    blocks: tuple[CodeBlock, ...] = ()

    def block_counts(self) -> dict[str, int]:
        """Number of fenced blocks per language (``text`` when untagged)."""
        return dict(Counter(block.language or "text" for block in self.blocks))


@dataclass
class ValidationReport:
    """Outcome of ``PageCatalog.validate``.

    Issues make the book invalid; warnings do not.
    """

    issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    pages_checked: int = 0

    @property
    def valid(self) -> bool:
        return not self.issues

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "issues": list(self.issues),
            "warnings": list(self.warnings),
            "pages_checked": self.pages_checked,
        }


def parse_page(text: str) -> tuple[str | None, tuple[CodeBlock, ...]]:
    """Extract the first heading and the fenced code blocks of a page.

    Headings inside fences do not count as the title. An unterminated
    fence runs to the end of the page.
    """
    title: str | None = None
    blocks: list[CodeBlock] = []

    fence: str | None = None
    lang = ""
    start = 0
    body: list[str] = []

    for lineno, line in enumerate(text.splitlines(), start=1):
        if fence is not None:
            if line.strip().startswith(fence) and not line.strip().strip(fence[0]):
                blocks.append(CodeBlock(language=lang, content="\n".join(body), line=start))
                fence = None
            else:
                body.append(line)
            continue

        opening = FENCE_RE.match(line.strip())
        if opening:
            fence = opening.group("fence")
            lang = opening.group("lang").lower()
            start = lineno
            body = []
            continue

        if title is None:
            heading = TITLE_RE.match(line)
            if heading:
                title = heading.group("title")

    if fence is not None:
        blocks.append(CodeBlock(language=lang, content="\n".join(body), line=start))

    return title, tuple(blocks)


class PageCatalog:
    """Maps index entries to page files under ``book_root``."""

    def __init__(self, book_root: Path | str, index: DocumentIndex):
        self.book_root = Path(book_root)
        self.index = index

    def page_path(self, entry: TopicEntry) -> Path:
        return self.book_root / entry.path

    def missing_pages(self) -> list[TopicEntry]:
        """Entries whose page file does not exist, in index order."""
        return [entry for entry in self.index if not self.page_path(entry).is_file()]

    def orphan_pages(self) -> list[Path]:
        """Markdown files under the root that no entry references."""
        if not self.book_root.is_dir():
            return []

        orphans = []
        for path in sorted(self.book_root.rglob("*.md")):
            reference = path.relative_to(self.book_root).with_suffix("").as_posix()
            if path.stem.upper() in NON_TOPIC_PAGES:
                continue
            if reference not in self.index:
                orphans.append(path)
        return orphans

    def read_page(self, page_reference: str) -> Page:
        """Read and parse the page behind a reference.

        Raises:
            ReferenceNotFoundError: The reference is not in the index
            PageNotFoundError: The reference is indexed but has no file
            PageReadError: The file exists but cannot be read as UTF-8 text
        """
        entry = self.index.resolve(page_reference)
        path = self.page_path(entry)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise PageNotFoundError(
                f"Page for {entry.title!r} does not exist: {path}", cause=e
            ).with_context(reference=entry.page_reference, path=str(path))
        except UnicodeDecodeError as e:
            raise PageReadError(
                f"Page for {entry.title!r} is not valid UTF-8: {path}", cause=e
            ).with_context(reference=entry.page_reference, path=str(path))
        except OSError as e:
            raise PageReadError(
                f"Cannot read page for {entry.title!r}: {path}", cause=e
            ).with_context(reference=entry.page_reference, path=str(path))

        title, blocks = parse_page(text)
        return Page(entry=entry, path=path, title=title, blocks=blocks)

    def validate(self) -> ValidationReport:
        """Check every indexed page and look for orphans."""
        report = ValidationReport()

        if not self.book_root.is_dir():
            report.issues.append(f"Book root is not a directory: {self.book_root}")
            return report

        missing = {entry.page_reference for entry in self.missing_pages()}
        for entry in self.index:
            if entry.page_reference in missing:
                report.issues.append(
                    f"Missing page for {entry.title!r}: {self.page_path(entry)}"
                )
                continue

            try:
                page = self.read_page(entry.page_reference)
            except (PageNotFoundError, PageReadError) as e:
                logger.warning("page_unreadable", reference=entry.page_reference, error=e.message)
                report.issues.append(e.message)
                continue
            report.pages_checked += 1
            if page.title is None:
                report.warnings.append(f"Page has no heading: {page.path}")

        for path in self.orphan_pages():
            report.warnings.append(f"Page is not in the index: {path}")

        logger.info(
            "pages_validated",
            book_root=str(self.book_root),
            checked=report.pages_checked,
            issues=len(report.issues),
            warnings=len(report.warnings),
        )
        return report


__all__ = [
    "CodeBlock",
    "Page",
    "PageCatalog",
    "ValidationReport",
    "parse_page",
]
