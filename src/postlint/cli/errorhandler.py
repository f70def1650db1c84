"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape

from postlint.authoring import AuthoringError
from postlint.config.exceptions import ConfigError, ConfigValidationError
from postlint.exceptions import PostlintError, PostNotFoundError

console = Console(stderr=True)

EXIT_FAILURE = 1
EXIT_USAGE = 2


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to handle CLI errors gracefully.

    Args:
        debug: If True, re-raise with the full traceback. If False, print a
            user-friendly error and exit.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit, typer.Exit):
        raise
    except ConfigValidationError as e:
        if debug:
            raise
        console.print(f"[bold red]⚙️  Configuration Error:[/bold red] {escape(str(e))}")
        for err in e.errors:
            location = ".".join(str(part) for part in err.get("loc", ()))
            console.print(f"  - {escape(location)}: {escape(str(err.get('msg', '')))}")
        raise typer.Exit(EXIT_USAGE) from e
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]⚙️  Configuration Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE) from e
    except PostNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]🔎 Not Found:[/bold red] {escape(str(e))}")
        raise typer.Exit(EXIT_FAILURE) from e
    except AuthoringError as e:
        if debug:
            raise
        console.print(f"[bold red]✍️  Cannot Create Post:[/bold red] {escape(str(e))}")
        raise typer.Exit(EXIT_FAILURE) from e
    except PostlintError as e:
        if debug:
            raise
        console.print(f"[bold red]❌ Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(EXIT_FAILURE) from e
