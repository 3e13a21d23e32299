"""Pick the index for a book root: its own summary page, or the bundled one."""

from __future__ import annotations

from typebook.core.logging import get_logger
from typebook.core.settings import TypebookSettings
from typebook.index.catalog import default_index
from typebook.index.index import DocumentIndex
from typebook.index.summary import load_summary

logger = get_logger(__name__)


def load_index(settings: TypebookSettings) -> DocumentIndex:
    """Load the index described by ``settings``.

    Parse and integrity errors from an existing summary page propagate;
    only a missing summary page falls back to the bundled catalog.
    """
    path = settings.summary_path
    if path.is_file():
        return load_summary(path)

    logger.info("summary_not_found_using_builtin", path=str(path))
    return default_index()


__all__ = ["load_index"]
