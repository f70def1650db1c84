"""Main Typer application for postlint."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from postlint.authoring import new_post
from postlint.checks import run_checks
from postlint.cli.errorhandler import EXIT_FAILURE, handle_cli_errors
from postlint.config import (
    CONFIG_FILENAME,
    PostlintConfig,
    find_config,
    load_config,
    resolve_posts_dir,
    save_config,
)
from postlint.corpus import PostCorpus
from postlint.logging_setup import configure_logging, verbosity_level
from postlint.report import (
    categories_table,
    languages_table,
    posts_table,
    render_report_json,
    render_report_text,
)

app = typer.Typer(
    name="postlint",
    help="Check, list and scaffold blog posts written as markdown with front-matter",
    add_completion=False,
)

console = Console()
logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@dataclass(slots=True)
class CliState:
    debug: bool = False


@dataclass(slots=True)
class Workspace:
    """Configuration plus the posts directory it points at."""

    config: PostlintConfig
    config_path: Path | None
    posts_dir: Path


PostsDirArg = Annotated[
    Path | None,
    typer.Argument(help="Posts directory (defaults to posts_dir from .postlint.yml, or ./_posts)"),
]
ConfigOpt = Annotated[
    Path | None,
    typer.Option("--config", "-c", help=f"Path to {CONFIG_FILENAME} (searched upward by default)", dir_okay=False),
]


@app.callback()
def main(
    ctx: typer.Context,
    *,
    debug: Annotated[bool, typer.Option("--debug", help="Show full tracebacks on errors")] = False,
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Increase log verbosity")] = 0,
) -> None:
    """Configure logging and shared options."""
    configure_logging(verbosity_level(verbose))
    ctx.obj = CliState(debug=debug)


def _debug(ctx: typer.Context) -> bool:
    state = ctx.obj
    return bool(state.debug) if isinstance(state, CliState) else False


def _workspace(posts_dir: Path | None, config_file: Path | None) -> Workspace:
    cwd = Path.cwd()
    config_path = config_file if config_file is not None else find_config(posts_dir or cwd)
    config = load_config(config_path)
    if posts_dir is not None:
        resolved = posts_dir.expanduser().resolve()
    else:
        resolved = resolve_posts_dir(config, config_path, cwd)
    logger.debug("Using posts directory %s", resolved)
    return Workspace(config=config, config_path=config_path, posts_dir=resolved)


def _load(posts_dir: Path | None, config_file: Path | None) -> tuple[Workspace, PostCorpus]:
    workspace = _workspace(posts_dir, config_file)
    return workspace, PostCorpus.load(workspace.posts_dir, workspace.config)


@app.command()
def check(
    ctx: typer.Context,
    posts_dir: PostsDirArg = None,
    *,
    config_file: ConfigOpt = None,
    strict: Annotated[bool, typer.Option("--strict", help="Treat warnings as failures")] = False,
    output_format: Annotated[OutputFormat, typer.Option("--format", "-f", help="Report format")] = OutputFormat.TEXT,
) -> None:
    """Check every post against the front-matter, naming and fence rules."""
    with handle_cli_errors(debug=_debug(ctx)):
        workspace, corpus = _load(posts_dir, config_file)
        config = workspace.config
        if strict:
            config = config.model_copy(update={"checks": config.checks.model_copy(update={"strict": True})})
        report = run_checks(corpus, config)

    if output_format is OutputFormat.JSON:
        typer.echo(render_report_json(report))
    else:
        render_report_text(report, console)

    if not report.ok:
        raise typer.Exit(EXIT_FAILURE)


@app.command(name="list")
def list_posts(
    ctx: typer.Context,
    posts_dir: PostsDirArg = None,
    *,
    config_file: ConfigOpt = None,
    category: Annotated[str | None, typer.Option("--category", help="Only posts in this category")] = None,
) -> None:
    """List posts by publish date."""
    with handle_cli_errors(debug=_debug(ctx)):
        _, corpus = _load(posts_dir, config_file)
    posts = corpus.filter(category=category)
    if not posts:
        console.print("[dim]No posts found.[/dim]")
        return
    console.print(posts_table(posts))


@app.command()
def categories(
    ctx: typer.Context,
    posts_dir: PostsDirArg = None,
    *,
    config_file: ConfigOpt = None,
) -> None:
    """Show how many posts each category holds."""
    with handle_cli_errors(debug=_debug(ctx)):
        _, corpus = _load(posts_dir, config_file)
    if not len(corpus):
        console.print("[dim]No posts found.[/dim]")
        return
    console.print(categories_table(corpus))


@app.command()
def languages(
    ctx: typer.Context,
    posts_dir: PostsDirArg = None,
    *,
    config_file: ConfigOpt = None,
) -> None:
    """Count fenced code blocks per language."""
    with handle_cli_errors(debug=_debug(ctx)):
        _, corpus = _load(posts_dir, config_file)
    counts = corpus.languages()
    if not counts:
        console.print("[dim]No code blocks found.[/dim]")
        return
    console.print(languages_table(counts))


@app.command()
def show(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Filename, relative path or slug of the post")],
    posts_dir: PostsDirArg = None,
    *,
    config_file: ConfigOpt = None,
) -> None:
    """Show a post's metadata and code blocks."""
    with handle_cli_errors(debug=_debug(ctx)):
        _, corpus = _load(posts_dir, config_file)
        post = corpus.get(key)

    details = Table.grid(padding=(0, 2))
    details.add_column(style="bold")
    details.add_column()
    details.add_row("Path", escape(corpus.relative(post)))
    details.add_row("Date", post.publish_date.isoformat() if post.publish_date else "-")
    details.add_row("Slug", escape(post.slug))
    for field_name, value in sorted(post.metadata.items()):
        details.add_row(escape(field_name), escape(str(value)))
    console.print(Panel(details, title=escape(post.title), expand=False))

    if post.code_blocks:
        blocks = Table(title="Code blocks")
        blocks.add_column("Lines", no_wrap=True)
        blocks.add_column("Language")
        blocks.add_column("Closed")
        for block in post.code_blocks:
            lines = f"{block.start_line}-{block.end_line}"
            blocks.add_row(lines, escape(block.language or "-"), "yes" if block.closed else "no")
        console.print(blocks)


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        msg = f"Invalid date '{value}'. Expected YYYY-MM-DD."
        raise typer.BadParameter(msg, param_hint="--date") from e


@app.command()
def new(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Post title")],
    *,
    layout: Annotated[str | None, typer.Option("--layout", help="Layout identifier (defaults to config)")] = None,
    category: Annotated[str | None, typer.Option("--category", help="Category tag (defaults to config)")] = None,
    custom_js: Annotated[str | None, typer.Option("--custom-js", help="Script bundle to attach")] = None,
    publish_date: Annotated[str | None, typer.Option("--date", help="Publish date, YYYY-MM-DD (default today)")] = None,
    slug: Annotated[str | None, typer.Option("--slug", help="Slug (default derived from the title)")] = None,
    posts_dir: Annotated[Path | None, typer.Option("--dir", help="Posts directory")] = None,
    config_file: ConfigOpt = None,
) -> None:
    """Create a new post with valid front-matter and a dated filename."""
    parsed_date = _parse_date(publish_date)
    with handle_cli_errors(debug=_debug(ctx)):
        workspace = _workspace(posts_dir, config_file)
        authoring = workspace.config.authoring
        template_path = None
        if authoring.template is not None:
            base = workspace.config_path.parent if workspace.config_path else Path.cwd()
            template_path = authoring.template if authoring.template.is_absolute() else base / authoring.template
        path = new_post(
            workspace.posts_dir,
            title,
            layout=layout or authoring.default_layout,
            category=category or authoring.default_category or "",
            custom_js=custom_js,
            publish_date=parsed_date,
            slug=slug,
            template_path=template_path,
        )
    console.print(f"[green]Created[/green] {path}")


@app.command()
def init(
    ctx: typer.Context,
    root: Annotated[Path, typer.Argument(help="Site root to write .postlint.yml into")] = Path(),
    *,
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file")] = False,
) -> None:
    """Write a default .postlint.yml."""
    target = root / CONFIG_FILENAME
    if target.exists() and not force:
        console.print(f"[yellow]{escape(str(target))} already exists; use --force to overwrite.[/yellow]")
        raise typer.Exit(EXIT_FAILURE)
    with handle_cli_errors(debug=_debug(ctx)):
        path = save_config(PostlintConfig(), root)
    console.print(f"[green]Wrote[/green] {path}")
