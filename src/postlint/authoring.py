"""Scaffolding new posts that satisfy the front-matter contract."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any

import yaml
from jinja2 import Environment, FileSystemLoader, PackageLoader, StrictUndefined, TemplateError

from postlint.exceptions import PostlintError
from postlint.markdown.exceptions import FrontMatterError
from postlint.markdown.frontmatter import split_frontmatter
from postlint.models import FrontMatter
from postlint.naming import NamingError, build_post_filename, parse_post_filename, slugify

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "post.md.jinja"
MAX_FILENAME_ATTEMPTS = 100


class AuthoringError(PostlintError):
    """Base exception for post scaffolding errors."""


class MissingMetadataError(AuthoringError):
    """Raised when required metadata for a new post is missing."""

    def __init__(self, missing_keys: list[str]) -> None:
        self.missing_keys = missing_keys
        super().__init__(f"Missing required metadata keys: {', '.join(missing_keys)}")


class UniqueFilenameError(AuthoringError):
    """Raised when a unique filename cannot be generated after a set number of attempts."""

    def __init__(self, base_slug: str, attempts: int) -> None:
        self.base_slug = base_slug
        self.attempts = attempts
        super().__init__(
            f"Could not generate a unique filename for slug '{base_slug}' after {attempts} attempts."
        )


class TemplateRenderError(AuthoringError):
    """Raised when the post template fails to render a valid post."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Template '{template}' did not produce a valid post: {reason}")


class FileWriteError(AuthoringError):
    """Raised when writing the new post fails."""

    def __init__(self, path: str, original_exception: Exception) -> None:
        self.path = path
        self.original_exception = original_exception
        super().__init__(f"Failed to write file to: {path}. Original error: {original_exception}")


def yaml_value(value: Any) -> str:
    """Render a scalar as an inline YAML value, quoting when needed."""
    dumped = yaml.safe_dump(value, default_flow_style=True, allow_unicode=True, width=float("inf"))
    return dumped.removesuffix("\n...\n").rstrip("\n")


def _environment(template_path: Path | None) -> Environment:
    if template_path is None:
        loader = PackageLoader("postlint", "templates")
    else:
        loader = FileSystemLoader(str(template_path.parent))
    # Markdown output, not HTML.
    env = Environment(  # noqa: S701
        loader=loader,
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["yaml_value"] = yaml_value
    return env


def render_post(
    *,
    title: str,
    layout: str,
    category: str,
    custom_js: str | None = None,
    template_path: Path | None = None,
) -> str:
    """Render a new post and verify it meets the front-matter contract.

    Raises:
        TemplateRenderError: If the template fails or its output is not a valid post.

    """
    template_name = template_path.name if template_path is not None else DEFAULT_TEMPLATE
    try:
        template = _environment(template_path).get_template(template_name)
        content = template.render(title=title, layout=layout, category=category, custom_js=custom_js)
    except TemplateError as e:
        raise TemplateRenderError(template_name, str(e)) from e

    try:
        metadata, _, _ = split_frontmatter(content)
    except FrontMatterError as e:
        raise TemplateRenderError(template_name, str(e)) from e
    if FrontMatter.from_metadata(metadata) is None:
        raise TemplateRenderError(template_name, "front-matter lacks a non-empty layout or category")
    return content


def _taken_keys(posts_dir: Path) -> set[tuple[date, str]]:
    """Date and slug pairs already used by posts under ``posts_dir``, any extension."""
    if not posts_dir.exists():
        return set()
    taken: set[tuple[date, str]] = set()
    for path in posts_dir.rglob("*"):
        if not path.is_file():
            continue
        try:
            parsed = parse_post_filename(path.name)
        except NamingError:
            continue
        taken.add((parsed.publish_date, parsed.slug.casefold()))
    return taken


def _resolve_filepath(
    posts_dir: Path, publish_date: date, base_slug: str, max_attempts: int | None = None
) -> tuple[Path, str]:
    """Resolve a filename whose date and slug are unused anywhere under ``posts_dir``.

    Appends a numeric suffix to the slug if the pair is taken, whatever the
    extension of the post holding it.

    Raises:
        UniqueFilenameError: If no unique filename is found after max_attempts.

    """
    max_attempts = max_attempts or MAX_FILENAME_ATTEMPTS
    taken = _taken_keys(posts_dir)
    if (publish_date, base_slug.casefold()) not in taken:
        return posts_dir / build_post_filename(publish_date, base_slug), base_slug

    for i in range(2, max_attempts + 2):
        slug_candidate = f"{base_slug}-{i}"
        if (publish_date, slug_candidate.casefold()) not in taken:
            return posts_dir / build_post_filename(publish_date, slug_candidate), slug_candidate

    raise UniqueFilenameError(base_slug, max_attempts)


def new_post(
    posts_dir: Path,
    title: str,
    *,
    layout: str,
    category: str,
    custom_js: str | None = None,
    publish_date: date | None = None,
    slug: str | None = None,
    template_path: Path | None = None,
) -> Path:
    """Write a new post named ``YYYY-MM-DD-<slug>.md``.

    Args:
        posts_dir: Directory the post is written to (created if missing).
        title: Post title; also the source of the slug unless ``slug`` is given.
        layout: Template identifier for the external generator.
        category: Grouping tag.
        custom_js: Optional script bundle identifier.
        publish_date: Date prefix, defaults to today.
        slug: Explicit slug, normalised with :func:`slugify`.
        template_path: Optional Jinja2 template replacing the bundled one.

    Returns:
        Path of the written post. Existing posts are never overwritten.

    Raises:
        MissingMetadataError: If title, layout or category is blank.
        UniqueFilenameError: If no free filename is found.
        TemplateRenderError: If the template does not yield a valid post.
        FileWriteError: If the file cannot be written.

    """
    values = {"title": title, "layout": layout, "category": category}
    missing = [key for key, value in values.items() if not (value and value.strip())]
    if missing:
        raise MissingMetadataError(missing)

    publish_date = publish_date or date.today()
    base_slug = slugify(slug or title)

    content = render_post(
        title=title.strip(),
        layout=layout.strip(),
        category=category.strip(),
        custom_js=custom_js.strip() if custom_js else None,
        template_path=template_path,
    )

    filepath, final_slug = _resolve_filepath(posts_dir, publish_date, base_slug)
    try:
        posts_dir.mkdir(parents=True, exist_ok=True)
        with filepath.open("x", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise FileWriteError(str(filepath), e) from e

    if final_slug != base_slug:
        logger.info("Slug '%s' taken, wrote %s instead", base_slug, filepath.name)
    logger.info("Created %s", filepath)
    return filepath
