"""Pydantic models for ``.postlint.yml``."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_POSTS_DIR = "_posts"
DEFAULT_EXTENSIONS = [".md", ".markdown"]
DEFAULT_EXCLUDE = ["index.md", "README.md"]
DEFAULT_REQUIRED_FIELDS = ["layout", "category"]
DEFAULT_LAYOUT = "post"


class FrontMatterSettings(BaseModel):
    """Front-matter contract every post must satisfy."""

    model_config = ConfigDict(extra="forbid")

    required: list[str] = Field(
        default_factory=lambda: list(DEFAULT_REQUIRED_FIELDS),
        description="Keys that must be present with a non-empty string value",
    )
    layouts: list[str] | None = Field(
        default=None,
        description="Allowed layout identifiers (unchecked when omitted)",
    )
    categories: list[str] | None = Field(
        default=None,
        description="Allowed category tags (unchecked when omitted)",
    )

    @field_validator("required")
    @classmethod
    def validate_required(cls, v: list[str]) -> list[str]:
        """Reject blank keys and drop duplicates while keeping order."""
        cleaned: list[str] = []
        for key in v:
            key = key.strip()
            if not key:
                msg = "Required front-matter keys must be non-empty"
                raise ValueError(msg)
            if key not in cleaned:
                cleaned.append(key)
        return cleaned


class CheckSettings(BaseModel):
    """Which structural checks run and how strictly the result is judged."""

    model_config = ConfigDict(extra="forbid")

    disabled: list[str] = Field(default_factory=list, description="Rule codes to skip")
    strict: bool = Field(default=False, description="Treat warnings as failures")
    require_fence_language: bool = Field(
        default=False,
        description="Report fenced code blocks that carry no language tag",
    )


class AuthoringSettings(BaseModel):
    """Defaults used when scaffolding a new post."""

    model_config = ConfigDict(extra="forbid")

    default_layout: str = Field(default=DEFAULT_LAYOUT, min_length=1)
    default_category: str | None = None
    template: Path | None = Field(
        default=None,
        description="Optional Jinja2 template, relative to the site root",
    )


class PostlintConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    posts_dir: Path = Field(default=Path(DEFAULT_POSTS_DIR))
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    frontmatter: FrontMatterSettings = Field(default_factory=FrontMatterSettings)
    checks: CheckSettings = Field(default_factory=CheckSettings)
    authoring: AuthoringSettings = Field(default_factory=AuthoringSettings)

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Ensure every extension is lowercase and dot-prefixed."""
        if not v:
            msg = "At least one post extension is required"
            raise ValueError(msg)
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]
