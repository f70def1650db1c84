"""Exceptions raised while parsing post markdown."""

from __future__ import annotations

from postlint.exceptions import PostlintError


class MarkdownError(PostlintError):
    """Base exception for markdown parsing errors."""


class FrontMatterError(MarkdownError):
    """Raised when a front-matter block is present but cannot be used."""

    def __init__(self, reason: str, line: int = 1) -> None:
        self.reason = reason
        self.line = line
        super().__init__(f"Invalid front-matter (line {line}): {reason}")


class UnterminatedFrontMatterError(FrontMatterError):
    """Raised when the opening ``---`` has no closing delimiter."""

    def __init__(self) -> None:
        super().__init__("opening '---' has no closing '---'", line=1)
