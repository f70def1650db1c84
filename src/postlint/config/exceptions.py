"""Custom exceptions for configuration handling."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from postlint.exceptions import PostlintError


class ConfigError(PostlintError):
    """Base exception for all configuration-related errors."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration file fails parsing or validation."""

    def __init__(self, path: Path, errors: Sequence[dict[str, Any]] | None = None, detail: str | None = None) -> None:
        self.path = path
        self.errors = list(errors or [])
        self.detail = detail
        if detail:
            message = f"Invalid configuration in {path}: {detail}"
        else:
            message = f"Configuration validation failed in {path} with {len(self.errors)} error(s)."
        super().__init__(message)


class PostsDirectoryNotFoundError(ConfigError):
    """Raised when the posts directory does not exist."""

    def __init__(self, posts_dir: Path) -> None:
        self.posts_dir = posts_dir
        super().__init__(f"Posts directory not found: {posts_dir}")


class ConfigWriteError(ConfigError):
    """Raised when the configuration file cannot be written."""

    def __init__(self, path: Path, original_exception: Exception) -> None:
        self.path = path
        self.original_exception = original_exception
        super().__init__(f"Failed to write configuration to {path}: {original_exception}")
