"""Command-line interface for typebook."""
