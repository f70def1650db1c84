"""Logging for the postlint CLI.

Diagnostics go to stderr through a single Rich handler so that report output
on stdout (notably ``--format json``) stays machine-readable.
"""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["LOG_LEVEL_ENV", "configure_logging", "console", "verbosity_level"]

LOG_LEVEL_ENV: Final[str] = "POSTLINT_LOG_LEVEL"
_MANAGED_ATTR: Final[str] = "_postlint_managed"

console = Console(stderr=True)


def verbosity_level(verbose: int) -> str | None:
    """Map a ``-v`` count to a level name; None keeps the environment default."""
    if verbose <= 0:
        return None
    return "INFO" if verbose == 1 else "DEBUG"


def _resolve_level(override: str | None) -> int:
    name = (override or os.getenv(LOG_LEVEL_ENV) or "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def _managed_handler(logger: logging.Logger) -> logging.Handler | None:
    return next((h for h in logger.handlers if getattr(h, _MANAGED_ATTR, False)), None)


def configure_logging(level: str | None = None) -> None:
    """Install the Rich handler on the root logger and set its level.

    Safe to call repeatedly: the handler is installed once and only the level
    changes afterwards.

    Args:
        level: Level name such as ``"INFO"``; defaults to ``POSTLINT_LOG_LEVEL``,
            then ``WARNING``.

    """
    root = logging.getLogger()
    if _managed_handler(root) is None:
        handler = RichHandler(console=console, show_path=False, markup=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(handler, _MANAGED_ATTR, True)
        root.handlers.clear()
        root.addHandler(handler)
    root.setLevel(_resolve_level(level))
    logging.captureWarnings(True)
