"""Data model for posts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from postlint.markdown.exceptions import FrontMatterError
from postlint.markdown.fences import CodeBlock
from postlint.markdown.headings import find_title_heading, humanize_slug
from postlint.naming import NamingError, PostFilename


class FrontMatter(BaseModel):
    """Validated front-matter contract.

    ``layout`` and ``category`` are opaque identifiers consumed by the external
    site generator; ``custom_js`` names an optional script bundle. Any other
    keys are preserved in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True, frozen=True)

    layout: str = Field(min_length=1)
    category: str = Field(min_length=1)
    custom_js: str | None = None
    title: str | None = None

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    @classmethod
    def from_metadata(cls, metadata: dict[str, Any]) -> FrontMatter | None:
        """Validate raw metadata, returning None when the contract is not met."""
        try:
            return cls.model_validate(metadata)
        except ValidationError:
            return None


@dataclass(frozen=True, slots=True)
class Post:
    """A single blog entry loaded from disk.

    Content problems do not prevent a Post from existing: a post whose name or
    front-matter is broken carries the corresponding error so checks can
    report it.
    """

    path: Path
    metadata: dict[str, Any]
    body: str
    body_offset: int = 0
    has_frontmatter: bool = True
    code_blocks: tuple[CodeBlock, ...] = ()
    filename: PostFilename | None = None
    filename_error: NamingError | None = None
    front_matter: FrontMatter | None = None
    frontmatter_error: FrontMatterError | None = field(default=None)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def slug(self) -> str:
        return self.filename.slug if self.filename else self.path.stem

    @property
    def publish_date(self) -> date | None:
        return self.filename.publish_date if self.filename else None

    @property
    def layout(self) -> str | None:
        return _string_field(self.metadata, "layout")

    @property
    def category(self) -> str | None:
        return _string_field(self.metadata, "category")

    @property
    def custom_js(self) -> str | None:
        return _string_field(self.metadata, "custom_js")

    @property
    def title(self) -> str:
        """Explicit title, else first H1, else a humanized slug, else the stem."""
        explicit = _string_field(self.metadata, "title")
        if explicit:
            return explicit
        heading = find_title_heading(self.body)
        if heading:
            return heading
        if self.filename is not None:
            humanized = humanize_slug(self.filename.slug)
            if humanized:
                return humanized
        return self.path.stem

    def sort_key(self) -> tuple[date, str]:
        return (self.publish_date or date.min, self.name)


def _string_field(metadata: dict[str, Any], key: str) -> str | None:
    value = metadata.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


__all__ = ["CodeBlock", "FrontMatter", "Post", "PostFilename"]
