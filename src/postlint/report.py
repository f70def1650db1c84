"""Rendering check reports and corpus listings."""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from postlint.checks import CheckReport, Severity
from postlint.corpus import PostCorpus
from postlint.models import Post

_SEVERITY_STYLE = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


def render_report_text(report: CheckReport, console: Console) -> None:
    """Print a table of issues followed by a summary line."""
    if report.issues:
        table = Table(title="Issues", show_lines=False)
        table.add_column("Location", style="bold")
        table.add_column("Severity")
        table.add_column("Rule", style="dim")
        table.add_column("Message")
        for issue in report.issues:
            location = f"{issue.path}:{issue.line}" if issue.line else issue.path
            style = _SEVERITY_STYLE[issue.severity]
            severity = f"[{style}]{issue.severity.value}[/{style}]"
            table.add_row(escape(location), severity, issue.rule.value, escape(issue.message))
        console.print(table)

    summary = report.summary()
    line = (
        f"{summary['posts']} post(s) checked: {summary['errors']} error(s), "
        f"{summary['warnings']} warning(s), {summary['info']} info"
    )
    if report.ok:
        console.print(f"[bold green]✅ {line}[/bold green]")
    else:
        console.print(f"[bold red]❌ {line}[/bold red]")


def render_report_json(report: CheckReport) -> str:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def posts_table(posts: Iterable[Post]) -> Table:
    table = Table(title="Posts")
    table.add_column("Date", no_wrap=True)
    table.add_column("Slug")
    table.add_column("Layout")
    table.add_column("Category")
    table.add_column("Title")
    for post in posts:
        table.add_row(
            post.publish_date.isoformat() if post.publish_date else "-",
            escape(post.slug),
            escape(post.layout or "-"),
            escape(post.category or "-"),
            escape(post.title),
        )
    return table


def categories_table(corpus: PostCorpus) -> Table:
    table = Table(title="Categories")
    table.add_column("Category")
    table.add_column("Posts", justify="right")
    table.add_column("Latest", no_wrap=True)
    for category, posts in corpus.by_category().items():
        latest = posts[-1].publish_date
        table.add_row(escape(category), str(len(posts)), latest.isoformat() if latest else "-")
    return table


def languages_table(counts: Counter[str | None]) -> Table:
    table = Table(title="Code block languages")
    table.add_column("Language")
    table.add_column("Blocks", justify="right")
    for language, count in sorted(counts.items(), key=lambda item: (-item[1], item[0] or "")):
        table.add_row(escape(language or "(none)"), str(count))
    return table
