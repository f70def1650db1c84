"""Centralized exceptions for the postlint application."""


class PostlintError(Exception):
    """Base exception for all postlint errors."""


class PostReadError(PostlintError):
    """Raised when a post file cannot be read or decoded."""

    def __init__(self, path: str, original_exception: Exception) -> None:
        self.path = path
        self.original_exception = original_exception
        super().__init__(f"Failed to read post at: {path}. Original error: {original_exception}")


class PostNotFoundError(PostlintError):
    """Raised when a post lookup by slug or filename finds nothing."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No post matches '{key}'")
