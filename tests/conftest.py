"""
Shared pytest fixtures and configuration for typebook tests.

This module provides:
- A small authored entry list and its summary page
- A temporary book on disk (SUMMARY.md plus content pages)
- Location-based markers (unit / integration)
"""

import sys
from pathlib import Path

import pytest

# Ensure typebook package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from typebook.index import Tier, TopicEntry


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if test_path.parts and test_path.parts[0] == "cli":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Index Fixtures
# =============================================================================


@pytest.fixture
def sample_entries() -> list[TopicEntry]:
    """Three BASIC and two INTERMEDIATE entries in authored order."""
    return [
        TopicEntry("any", "any", Tier.BASIC, 0),
        TopicEntry("dict", "dict", Tier.BASIC, 1),
        TopicEntry("ClassVar", "classvar", Tier.BASIC, 2),
        TopicEntry("callable", "callable", Tier.INTERMEDIATE, 0),
        TopicEntry("ParamSpec", "paramspec", Tier.INTERMEDIATE, 1),
    ]


SUMMARY_MD = """\
# Summary

[Introduction](README.md)

# Basic

- [any](./any.md)
- [dict](./dict.md)
- [ClassVar](./classvar.md)

# Intermediate

- [callable](./callable.md)
- [ParamSpec](./paramspec.md)
"""


@pytest.fixture
def summary_text() -> str:
    """Summary page matching ``sample_entries``."""
    return SUMMARY_MD


# =============================================================================
# Book Fixtures
# =============================================================================


PAGES = {
    "README.md": "# Type hints\n\nAn introduction.\n",
    "any.md": "# any\n\n```python\nfrom typing import Any\n\nx: Any = 1\n```\n",
    "dict.md": (
        "# dict\n\n"
        "```python\n"
        "scores: dict[str, int] = {}\n"
        "```\n\n"
        "```goat\n"
        "+-----+     +-----+\n"
        "| str | --> | int |\n"
        "+-----+     +-----+\n"
        "```\n"
    ),
    "classvar.md": "# ClassVar\n\nShared across instances.\n",
    "callable.md": (
        "# callable\n\n"
        "```mermaid\n"
        "flowchart LR\n"
        "  A --> B\n"
        "```\n\n"
        "```python\n"
        "from collections.abc import Callable\n"
        "```\n"
    ),
    "paramspec.md": "ParamSpec without a heading.\n",
}


@pytest.fixture
def book_dir(tmp_path: Path, summary_text: str) -> Path:
    """A complete book on disk matching ``sample_entries``."""
    root = tmp_path / "book"
    root.mkdir()
    (root / "SUMMARY.md").write_text(summary_text, encoding="utf-8")
    for name, content in PAGES.items():
        (root / name).write_text(content, encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep TYPEBOOK_* variables from the developer shell out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("TYPEBOOK_"):
            monkeypatch.delenv(key, raising=False)
