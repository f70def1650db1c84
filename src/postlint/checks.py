"""Structural checks over a post corpus.

Every check is identified by a stable rule code so it can be disabled in
``.postlint.yml``. Per-post checks look at one post at a time; the duplicate
filename check is the only one that compares posts with each other.

Usage:
    from postlint.checks import run_checks

    report = run_checks(corpus, config)
    for issue in report.issues:
        print(f"{issue.path}:{issue.line} {issue.rule} {issue.message}")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from postlint.config.schema import PostlintConfig
from postlint.corpus import PostCorpus
from postlint.models import Post
from postlint.naming import InvalidPostDateError

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Issue severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Rule(str, Enum):
    """Stable rule codes."""

    POST_UNREADABLE = "post-unreadable"
    FRONTMATTER_INVALID = "frontmatter-invalid"
    FRONTMATTER_MISSING = "frontmatter-missing"
    FIELD_MISSING = "field-missing"
    FIELD_TYPE = "field-type"
    FILENAME_FORMAT = "filename-format"
    FILENAME_DATE = "filename-date"
    FENCE_UNCLOSED = "fence-unclosed"
    FILENAME_DUPLICATE = "filename-duplicate"
    LAYOUT_UNKNOWN = "layout-unknown"
    CATEGORY_UNKNOWN = "category-unknown"
    FENCE_UNLABELED = "fence-unlabeled"


RULE_SEVERITY: dict[Rule, Severity] = {
    Rule.POST_UNREADABLE: Severity.ERROR,
    Rule.FRONTMATTER_INVALID: Severity.ERROR,
    Rule.FRONTMATTER_MISSING: Severity.ERROR,
    Rule.FIELD_MISSING: Severity.ERROR,
    Rule.FIELD_TYPE: Severity.ERROR,
    Rule.FILENAME_FORMAT: Severity.ERROR,
    Rule.FILENAME_DATE: Severity.ERROR,
    Rule.FENCE_UNCLOSED: Severity.ERROR,
    Rule.FILENAME_DUPLICATE: Severity.ERROR,
    Rule.LAYOUT_UNKNOWN: Severity.WARNING,
    Rule.CATEGORY_UNKNOWN: Severity.WARNING,
    Rule.FENCE_UNLABELED: Severity.INFO,
}

_OPTIONAL_STRING_FIELDS = ("custom_js", "title")


@dataclass(frozen=True, slots=True)
class Issue:
    """A single problem found in a post.

    Attributes:
        rule: Rule that produced the issue
        path: Post path relative to the corpus root
        message: Human-readable message
        line: 1-based line number, when the problem has a location
        severity: Severity, derived from the rule

    """

    rule: Rule
    path: str
    message: str
    line: int | None = None
    severity: Severity = Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule.value,
            "severity": self.severity.value,
            "path": self.path,
            "line": self.line,
            "message": self.message,
        }


@dataclass(slots=True)
class CheckReport:
    """Outcome of running the checks over a corpus."""

    posts_checked: int
    issues: list[Issue] = field(default_factory=list)
    strict: bool = False

    @property
    def errors(self) -> list[Issue]:
        return [issue for issue in self.issues if issue.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Issue]:
        return [issue for issue in self.issues if issue.severity == Severity.WARNING]

    @property
    def ok(self) -> bool:
        if self.errors:
            return False
        return not (self.strict and self.warnings)

    def summary(self) -> dict[str, int]:
        return {
            "posts": self.posts_checked,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "info": sum(1 for issue in self.issues if issue.severity == Severity.INFO),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "posts": self.posts_checked,
            "ok": self.ok,
            "summary": self.summary(),
            "issues": [issue.to_dict() for issue in self.issues],
        }


PostCheck = Callable[[Post, str, PostlintConfig], Iterator[Issue]]


def _issue(rule: Rule, path: str, message: str, line: int | None = None) -> Issue:
    return Issue(rule=rule, path=path, message=message, line=line, severity=RULE_SEVERITY[rule])


def check_frontmatter(post: Post, path: str, config: PostlintConfig) -> Iterator[Issue]:
    """Front-matter must exist and parse to key/value pairs with the required fields."""
    if post.frontmatter_error is not None:
        yield _issue(Rule.FRONTMATTER_INVALID, path, post.frontmatter_error.reason, post.frontmatter_error.line)
        return
    if not post.has_frontmatter:
        yield _issue(Rule.FRONTMATTER_MISSING, path, "no front-matter block at the top of the file", 1)
        return

    for key in config.frontmatter.required:
        value = post.metadata.get(key)
        if value is None:
            yield _issue(Rule.FIELD_MISSING, path, f"required field '{key}' is missing", 1)
        elif not isinstance(value, str):
            yield _issue(Rule.FIELD_TYPE, path, f"field '{key}' must be a string, got {type(value).__name__}", 1)
        elif not value.strip():
            yield _issue(Rule.FIELD_MISSING, path, f"required field '{key}' is empty", 1)

    for key in _OPTIONAL_STRING_FIELDS:
        if key in config.frontmatter.required or key not in post.metadata:
            continue
        value = post.metadata[key]
        if value is not None and not isinstance(value, str):
            yield _issue(Rule.FIELD_TYPE, path, f"field '{key}' must be a string, got {type(value).__name__}", 1)


def check_filename(post: Post, path: str, config: PostlintConfig) -> Iterator[Issue]:
    """The name must be ``YYYY-MM-DD-slug.ext`` with a real calendar date."""
    error = post.filename_error
    if error is None:
        return
    if isinstance(error, InvalidPostDateError):
        yield _issue(Rule.FILENAME_DATE, path, f"date prefix '{error.date_str}' is not a valid calendar date")
    else:
        yield _issue(Rule.FILENAME_FORMAT, path, "filename does not match YYYY-MM-DD-slug.md")


def check_fences(post: Post, path: str, config: PostlintConfig) -> Iterator[Issue]:
    """Every opening fence needs a matching closing fence."""
    for block in post.code_blocks:
        if not block.closed:
            yield _issue(
                Rule.FENCE_UNCLOSED,
                path,
                f"code fence '{block.fence}' opened here is never closed",
                block.start_line,
            )
        elif config.checks.require_fence_language and block.language is None:
            yield _issue(Rule.FENCE_UNLABELED, path, "code fence has no language", block.start_line)


def check_allowed_values(post: Post, path: str, config: PostlintConfig) -> Iterator[Issue]:
    """Layout and category must come from the configured allow-lists, if any."""
    layouts = config.frontmatter.layouts
    if layouts is not None and post.layout is not None and post.layout not in layouts:
        yield _issue(Rule.LAYOUT_UNKNOWN, path, f"layout '{post.layout}' is not one of: {', '.join(layouts)}", 1)
    categories = config.frontmatter.categories
    if categories is not None and post.category is not None and post.category not in categories:
        yield _issue(
            Rule.CATEGORY_UNKNOWN, path, f"category '{post.category}' is not one of: {', '.join(categories)}", 1
        )


POST_CHECKS: tuple[PostCheck, ...] = (
    check_frontmatter,
    check_filename,
    check_fences,
    check_allowed_values,
)


def _duplicate_key(post: Post) -> tuple[str, ...]:
    if post.filename is None:
        return ("name", post.name.casefold())
    return ("post", post.filename.publish_date.isoformat(), post.filename.slug.casefold())


def check_duplicate_filenames(corpus: PostCorpus) -> Iterator[Issue]:
    """No two posts may share a date and slug, even in different subdirectories.

    The generator maps ``2023-01-01-same.md`` and ``2023-01-01-same.markdown``
    to the same URL, so the extension is ignored. Slugs are compared
    case-insensitively so the corpus stays valid on case-insensitive
    filesystems. Names that do not parse are compared whole.
    """
    seen: dict[tuple[str, ...], list[Post]] = {}
    for post in corpus:
        seen.setdefault(_duplicate_key(post), []).append(post)
    for posts in seen.values():
        if len(posts) < 2:
            continue
        paths = [corpus.relative(post) for post in posts]
        for path in paths:
            others = ", ".join(other for other in paths if other != path)
            yield _issue(Rule.FILENAME_DUPLICATE, path, f"date and slug also used by {others}")


def check_unreadable(corpus: PostCorpus) -> Iterator[Issue]:
    """Files that could not be read or decoded as UTF-8."""
    for error in corpus.unreadable:
        path = corpus.relative_path(Path(error.path))
        yield _issue(Rule.POST_UNREADABLE, path, f"cannot read post: {error.original_exception}")


def run_checks(corpus: PostCorpus, config: PostlintConfig | None = None) -> CheckReport:
    """Run every enabled check over ``corpus``.

    Returns:
        CheckReport with issues ordered by path then line.

    """
    config = config or PostlintConfig()
    disabled = set(config.checks.disabled)
    unknown = disabled - {rule.value for rule in Rule}
    if unknown:
        logger.warning("Ignoring unknown rule code(s) in checks.disabled: %s", ", ".join(sorted(unknown)))

    issues: list[Issue] = []
    for post in corpus:
        path = corpus.relative(post)
        for check in POST_CHECKS:
            issues.extend(check(post, path, config))
    issues.extend(check_duplicate_filenames(corpus))
    issues.extend(check_unreadable(corpus))

    issues = [issue for issue in issues if issue.rule.value not in disabled]
    issues.sort(key=lambda issue: (issue.path, issue.line or 0, issue.rule.value))

    report = CheckReport(
        posts_checked=len(corpus) + len(corpus.unreadable),
        issues=issues,
        strict=config.checks.strict,
    )
    logger.info(
        "Checked %d post(s): %d error(s), %d warning(s)",
        report.posts_checked,
        len(report.errors),
        len(report.warnings),
    )
    return report
