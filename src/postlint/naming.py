"""Post filename convention: ``YYYY-MM-DD-slug.md``.

The external generator derives the publish date from the prefix and the URL
slug from the remainder, so both must survive a round trip through the name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from unicodedata import normalize

from pymdownx.slugs import slugify as _md_slugify

from postlint.exceptions import PostlintError

FILENAME_PATTERN = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-"
    r"(?P<slug>[A-Za-z0-9][A-Za-z0-9._-]*?)(?P<extension>\.[A-Za-z0-9]+)$"
)

_slugify_lower = _md_slugify(case="lower", separator="-")
_SLUG_EDGE = "-_"


class NamingError(PostlintError):
    """Base exception for post filename errors."""


class InvalidFilenameError(NamingError):
    """Raised when a filename does not follow ``YYYY-MM-DD-slug.ext``."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Filename '{name}' does not match YYYY-MM-DD-slug.md")


class InvalidPostDateError(NamingError):
    """Raised when the filename date prefix is not a real calendar date."""

    def __init__(self, name: str, date_str: str, original_exception: Exception) -> None:
        self.name = name
        self.date_str = date_str
        self.original_exception = original_exception
        super().__init__(f"Filename '{name}' has invalid date prefix '{date_str}': {original_exception}")


@dataclass(frozen=True, slots=True)
class PostFilename:
    """A parsed post filename."""

    publish_date: date
    slug: str
    extension: str

    @property
    def name(self) -> str:
        return build_post_filename(self.publish_date, self.slug, self.extension)


def parse_post_filename(name: str) -> PostFilename:
    """Parse a post filename into its date, slug and extension.

    Args:
        name: Bare filename, e.g. ``2023-05-01-rust-guessing-game.md``

    Returns:
        PostFilename

    Raises:
        InvalidFilenameError: If the name does not match the convention.
        InvalidPostDateError: If the date prefix is not a valid date, e.g.
            ``2023-02-30``.

    """
    match = FILENAME_PATTERN.match(name)
    if match is None:
        raise InvalidFilenameError(name)

    date_str = f"{match.group('year')}-{match.group('month')}-{match.group('day')}"
    try:
        publish_date = date(int(match.group("year")), int(match.group("month")), int(match.group("day")))
    except ValueError as e:
        raise InvalidPostDateError(name, date_str, e) from e

    return PostFilename(
        publish_date=publish_date,
        slug=match.group("slug"),
        extension=match.group("extension").lower(),
    )


def build_post_filename(publish_date: date, slug: str, extension: str = ".md") -> str:
    """Build ``YYYY-MM-DD-slug.ext``."""
    if not extension.startswith("."):
        extension = f".{extension}"
    return f"{publish_date.isoformat()}-{slug}{extension}"


def slugify(text: str, max_len: int = 60) -> str:
    """Convert text to a lowercase URL-friendly slug.

    Examples:
        >>> slugify("Hashing passwords with bcrypt!")
        'hashing-passwords-with-bcrypt'
        >>> slugify("Café à Paris")
        'cafe-a-paris'
        >>> slugify("???")
        'post'
        >>> slugify("-- Intro")
        'intro'

    """
    if text is None:
        return ""

    normalized = normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    # the filename pattern needs a letter or digit at both ends of the slug
    slug = _slugify_lower(normalized, sep="-").strip(_SLUG_EDGE)
    if len(slug) > max_len:
        slug = slug[:max_len].rstrip(_SLUG_EDGE)

    return slug or "post"


__all__ = [
    "FILENAME_PATTERN",
    "InvalidFilenameError",
    "InvalidPostDateError",
    "NamingError",
    "PostFilename",
    "build_post_filename",
    "parse_post_filename",
    "slugify",
]
