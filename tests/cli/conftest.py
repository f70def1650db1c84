from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler


@pytest.fixture(autouse=True)
def _wide_terminal(monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.delenv("POSTLINT_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler) and getattr(handler, "_postlint_managed", False):
            root.removeHandler(handler)
    root.setLevel(level)
