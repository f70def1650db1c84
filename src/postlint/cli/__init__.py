"""Command line interface for postlint."""

from postlint.cli.main import app

__all__ = ["app"]
