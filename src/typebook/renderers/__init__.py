"""Renderers that turn the index into navigation artifacts."""

from typebook.renderers.toc import TocRenderer

__all__ = ["TocRenderer"]
