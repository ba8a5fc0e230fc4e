"""Main CLI entry point for deltavcs."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from deltavcs.constants import (
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_LOG_LEVEL,
    DELTA_DIR,
    EXIT_DATA_ERROR,
    EXIT_SYSTEM_ERROR,
    EXIT_SUCCESS,
    EXIT_USER_ERROR,
    LOG_LEVEL_ENVVAR,
    VERSION,
)
from deltavcs.core import Repository, init_repository
from deltavcs.errors import (
    CorruptCommit,
    CorruptIndex,
    DeltaError,
    NotARepository,
    NothingToCommit,
    ObjectCorrupted,
    ObjectNotFound,
    StorageIOError,
)
from deltavcs.models import Commit

console = Console()
logger = logging.getLogger(__name__)
app = typer.Typer(
    name="delta",
    help="Minimal content-addressed version control",
    add_completion=False,
)


def _exit_code_for(error: DeltaError) -> int:
    if isinstance(error, StorageIOError):
        return EXIT_SYSTEM_ERROR
    if isinstance(error, (ObjectNotFound, ObjectCorrupted, CorruptCommit, CorruptIndex)):
        return EXIT_DATA_ERROR
    return EXIT_USER_ERROR


def _fail(error: DeltaError) -> NoReturn:
    """Print ``error`` and exit with the status matching its kind."""
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", style="red")
    if isinstance(error, NotARepository):
        console.print(
            "\nRun [bold]delta init[/bold] to initialize a repository",
            style="yellow",
        )
    logger.debug("Command failed", exc_info=error)
    raise typer.Exit(_exit_code_for(error))


def _open_repository() -> Repository:
    try:
        return Repository.open(Path.cwd())
    except DeltaError as e:
        _fail(e)


def _format_date(timestamp: str) -> str:
    try:
        dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    return dt.strftime("%Y-%m-%d %H:%M:%S")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
    log_level: str = typer.Option(
        DEFAULT_LOG_LEVEL,
        "--log-level",
        envvar=LOG_LEVEL_ENVVAR,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    """Minimal content-addressed version control."""
    level = logging.DEBUG if verbose else getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.getLogger().setLevel(level)


@app.command()
def version() -> None:
    """Show deltavcs version."""
    typer.echo(f"deltavcs version {VERSION}")


@app.command()
def init(
    dir_name: Optional[str] = typer.Argument(
        None,
        help="Create this directory and initialize inside it",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress output except errors",
    ),
) -> None:
    """Initialize a repository in the current directory or a new one."""
    try:
        ctx = init_repository(Path.cwd(), dir_name)
    except DeltaError as e:
        _fail(e)

    if not quiet:
        success_message = f"""[bold green]✓[/bold green] Initialized delta repository

[dim]Repository root:[/dim] {escape(str(ctx.root))}
[dim]Storage location:[/dim] {escape(str(ctx.delta_dir))}

[bold]Next steps:[/bold]
  1. Stage files: [cyan]delta add <path>[/cyan]
  2. Commit them: [cyan]delta commit "Initial commit"[/cyan]
  3. Review history: [cyan]delta log[/cyan]
"""
        console.print(Panel(success_message, border_style="green", title="Repository Initialized"))


def _stage_paths(paths: List[str]) -> None:
    repo = _open_repository()

    staged = 0
    for path in paths:
        try:
            entry = repo.add(path)[0]
        except DeltaError as e:
            if staged:
                console.print(f"\n[bold green]>[/bold green] {staged} file(s) staged before the error")
            _fail(e)
        console.print(
            f"  [green]+[/green] Tracking file: {escape(entry.path)}  "
            f"[dim]({entry.fingerprint[:8]})[/dim]"
        )
        staged += 1

    console.print(f"\n[bold green]>[/bold green] {staged} file(s) staged for commit")


@app.command()
def add(
    paths: List[str] = typer.Argument(..., help="Files to stage"),
) -> None:
    """Add files to the staging area."""
    _stage_paths(paths)


@app.command()
def stage(
    paths: List[str] = typer.Argument(..., help="Files to stage"),
) -> None:
    """Add files to the staging area (alias of add)."""
    _stage_paths(paths)


@app.command()
def commit(
    message: Optional[str] = typer.Argument(
        None,
        help="Commit message",
    ),
    message_option: Optional[str] = typer.Option(
        None,
        "--message",
        "-m",
        help="Commit message (overrides the positional message)",
    ),
) -> None:
    """Commit staged files as a snapshot."""
    repo = _open_repository()
    if message_option is not None:
        text = message_option
    elif message is not None:
        text = message
    else:
        text = DEFAULT_COMMIT_MESSAGE

    try:
        commit_fingerprint = repo.commit(text)
    except NothingToCommit as e:
        console.print(f"[bold yellow]Warning:[/bold yellow] {escape(str(e))}", style="yellow")
        console.print(
            "  Use [bold]delta add <path>[/bold] to stage files",
            style="dim",
        )
        raise typer.Exit(EXIT_SUCCESS)
    except DeltaError as e:
        _fail(e)

    console.print(f"[bold green]✓[/bold green] Committed [yellow]{commit_fingerprint}[/yellow]")
    console.print(f"  {escape(text)}")


def _print_commit(commit_obj: Commit) -> None:
    console.print(f"[bold yellow]commit {commit_obj.fingerprint}[/bold yellow]")

    if commit_obj.parent:
        console.print(f"[dim]Parent: {commit_obj.parent[:7]}[/dim]")
    else:
        console.print("[dim]Parent: (root commit)[/dim]")

    console.print(f"[bold]Date:[/bold]   {_format_date(commit_obj.created_at)}")
    console.print()

    # Print commit message (indented)
    for line in commit_obj.message.split("\n"):
        console.print(f"    {escape(line)}")

    console.print()
    console.print(f"    [bold]Files ({len(commit_obj.files)}):[/bold]")
    for entry in commit_obj.files:
        console.print(f"      {escape(entry.path)}  [dim]{entry.fingerprint}[/dim]")


@app.command()
def log(
    max_count: Optional[int] = typer.Option(
        None,
        "--max-count",
        "-n",
        min=1,
        help="Limit number of commits to show",
    ),
    oneline: bool = typer.Option(
        False,
        "--oneline",
        help="Show each commit on a single line",
    ),
    format: str = typer.Option(  # noqa: A002
        "default",
        "--format",
        help="Output format: default, oneline, json",
    ),
) -> None:
    """Show commit history, newest first."""
    if format not in ("default", "oneline", "json"):
        console.print(f"[bold red]Error:[/bold red] Unknown format: {escape(format)}", style="red")
        raise typer.Exit(EXIT_USER_ERROR)

    repo = _open_repository()
    use_oneline = oneline or format == "oneline"

    try:
        if format == "json":
            records = []
            for commit_obj in repo.log(limit=max_count):
                record = commit_obj.to_dict()
                record["fingerprint"] = commit_obj.fingerprint
                records.append(record)
            typer.echo(json.dumps(records, indent=2, ensure_ascii=False))
            return

        shown = 0
        for commit_obj in repo.log(limit=max_count):
            if use_oneline:
                # One-line format: <short_hash> <message>
                first_line = commit_obj.message.split("\n")[0]
                console.print(f"[yellow]{commit_obj.fingerprint[:7]}[/yellow] {escape(first_line)}")
            else:
                # Separator between commits
                if shown:
                    console.print()
                _print_commit(commit_obj)
            shown += 1
    except DeltaError as e:
        _fail(e)

    if not shown:
        console.print("[dim]No commits yet[/dim]")


@app.command()
def status() -> None:
    """Show HEAD and the staged entries."""
    repo = _open_repository()

    try:
        head = repo.graph.get_head()
        entries = repo.index.load()
    except DeltaError as e:
        _fail(e)

    if head:
        console.print(f"[bold]HEAD:[/bold] [yellow]{head}[/yellow]")
    else:
        console.print("[bold]HEAD:[/bold] [dim](no commits yet)[/dim]")

    console.print()
    if not entries:
        console.print("[dim]Nothing staged[/dim]")
        return

    console.print(f"[bold green]Staged ({len(entries)}):[/bold green]")
    for entry in entries:
        console.print(f"  [green]+[/green] {escape(entry.path)}  [dim]({entry.fingerprint[:8]})[/dim]")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
