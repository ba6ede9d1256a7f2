"""Main CLI entry point for RootVCS."""

import json
from datetime import datetime
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from rootvcs.constants import (
    DEFAULT_PUSH_TIMEOUT,
    EXIT_DATA_ERROR,
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    ROOT_DIR,
)
from rootvcs.core import Repository
from rootvcs.errors import (
    CorruptionError,
    RepositoryNotFoundError,
    RootVCSError,
    TransportError,
)
from rootvcs.models import CommitStatus

console = Console()
app = typer.Typer(
    name="rootvcs",
    help="Minimal content-addressed version control",
    add_completion=False,
)


def _exit_code_for(error: RootVCSError) -> int:
    if isinstance(error, CorruptionError):
        return EXIT_DATA_ERROR
    if isinstance(error, TransportError):
        return EXIT_SYSTEM_ERROR
    return EXIT_USER_ERROR


def _fail(error: RootVCSError) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {error}", style="red")
    if isinstance(error, RepositoryNotFoundError):
        console.print(
            "\nRun [bold]rootvcs init[/bold] to initialize a repository",
            style="yellow",
        )
    raise typer.Exit(_exit_code_for(error))


def _open_repository() -> Repository:
    try:
        return Repository.open(Path.cwd())
    except RootVCSError as e:
        _fail(e)


@app.command()
def version() -> None:
    """Show RootVCS version."""
    from rootvcs import __version__
    typer.echo(f"RootVCS version {__version__}")


@app.command()
def init(
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress output except errors",
    ),
) -> None:
    """Initialize a RootVCS repository in the current directory."""
    repo = Repository(Path.cwd())

    try:
        result = repo.init()
    except (RootVCSError, OSError) as e:
        console.print(
            f"[bold red]Error:[/bold red] Failed to initialize repository: {e}",
            style="red",
        )
        raise typer.Exit(EXIT_SYSTEM_ERROR)

    if quiet:
        return

    if not result.created:
        console.print(f"[yellow]Already initialized the {ROOT_DIR} folder[/yellow]")
        console.print(f"  [dim]{result.repo_dir}[/dim]")
        return

    success_message = f"""[bold green]✓[/bold green] Initialized RootVCS repository

[dim]Repository root:[/dim] {repo.workspace_root}
[dim]Storage location:[/dim] {result.repo_dir}

[bold]Next steps:[/bold]
  1. Stage files: [cyan]rootvcs add <file>[/cyan]
  2. Create a commit: [cyan]rootvcs commit -m "Initial commit"[/cyan]
"""
    console.print(Panel(success_message, border_style="green", title="RootVCS Initialized"))


@app.command()
def add(
    paths: list[str] = typer.Argument(..., help="Files to add"),
) -> None:
    """Add files to the staging area."""
    repo = _open_repository()

    staged = 0
    errors = 0
    for path in paths:
        try:
            result = repo.add(path)
        except RootVCSError as e:
            console.print(f"  [red]x[/red] {e}")
            errors += 1
            continue

        if result.staged:
            console.print(f"  [green]+[/green] {result.path}  [dim]({result.digest[:8]})[/dim]")
            staged += 1
        else:
            console.print(f"  [yellow]-[/yellow] {result.path}  [dim](removed before staging)[/dim]")

    if staged:
        console.print(f"\n[bold green]>[/bold green] {staged} file(s) staged for commit")
    else:
        console.print("\n[yellow]No files staged[/yellow]")

    if errors:
        raise typer.Exit(EXIT_USER_ERROR)


@app.command()
def commit(
    message: Optional[str] = typer.Option(
        None,
        "--message",
        "-m",
        help="Commit message (required)",
    ),
) -> None:
    """Commit staged files as a snapshot."""
    repo = _open_repository()

    try:
        result = repo.commit(message)
    except RootVCSError as e:
        _fail(e)

    if result.status is CommitStatus.NOTHING_STAGED:
        console.print(
            "[bold yellow]Warning:[/bold yellow] Nothing to commit (staging area is empty)",
            style="yellow",
        )
        console.print("  Use [bold]rootvcs add <files>[/bold] to stage files", style="dim")
        raise typer.Exit(EXIT_USER_ERROR)

    if result.status is CommitStatus.UNCHANGED:
        console.print(
            "[bold yellow]Warning:[/bold yellow] Nothing changed since the last commit",
            style="yellow",
        )
        raise typer.Exit(EXIT_USER_ERROR)

    console.print(
        f"[bold green]✓[/bold green] Committed [yellow]{result.digest[:7]}[/yellow]: {message}"
    )
    console.print(f"  [dim]{len(result.files)} file(s)[/dim]")


@app.command()
def log(
    max_count: Optional[int] = typer.Option(
        None,
        "--max-count",
        "-n",
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
    """Show commit history."""
    repo = _open_repository()

    try:
        commits = repo.log(max_count=max_count)
    except RootVCSError as e:
        _fail(e)

    if format == "json":
        typer.echo(json.dumps([entry.to_dict() for entry in commits], indent=2))
        return

    if not commits:
        if repo.graph.head() is None:
            console.print("[dim]No commits yet[/dim]")
        return

    if oneline or format == "oneline":
        for entry in commits:
            first_line = entry.message.split("\n")[0]
            console.print(f"[yellow]{entry.digest[:7]}[/yellow] {first_line}")
        return

    for i, entry in enumerate(commits):
        dt = datetime.fromisoformat(entry.timestamp.replace("Z", "+00:00"))
        date_str = dt.strftime("%Y-%m-%d %H:%M:%S")

        console.print(f"[bold yellow]commit {entry.digest}[/bold yellow]")
        if entry.parent:
            console.print(f"[dim]Parent: {entry.parent[:7]}[/dim]")
        else:
            console.print("[dim]Parent: (root commit)[/dim]")
        console.print(f"[bold]Date:[/bold]   {date_str}")
        console.print()

        for line in entry.message.split("\n"):
            console.print(f"    {line}")

        if i < len(commits) - 1:
            console.print()


@app.command()
def status(
    short: bool = typer.Option(
        False,
        "--short",
        help="Show short format output",
    ),
) -> None:
    """Show HEAD and the staging area."""
    repo = _open_repository()

    try:
        report = repo.status()
    except RootVCSError as e:
        _fail(e)

    if short:
        for entry in report.entries:
            console.print(f"A  {entry.path}")
        return

    if report.head:
        console.print(f"[bold]HEAD:[/bold] {report.head[:7]}  [dim]({report.head})[/dim]")
    else:
        console.print("[bold]HEAD:[/bold] [dim](no commits yet)[/dim]")

    console.print()

    if report.entries:
        console.print("[bold green]Changes to be committed:[/bold green]")
        console.print("  [dim](use \"rootvcs commit -m <message>\" to commit)[/dim]\n")
        for entry in report.entries:
            console.print(f"  [green]+[/green] {entry.path}  [dim]({entry.digest[:8]})[/dim]")
        console.print()
    elif report.head:
        console.print("[dim]Nothing to commit[/dim]")
    else:
        console.print("[yellow]No files staged for commit[/yellow]")
        console.print("  Use [bold]rootvcs add <file>[/bold] to stage files")


@app.command()
def reset(
    paths: list[str] = typer.Argument(..., help="Files to unstage"),
) -> None:
    """Remove files from the staging area."""
    repo = _open_repository()

    for path in paths:
        try:
            result = repo.reset(path)
        except RootVCSError as e:
            _fail(e)

        if result.removed:
            console.print(f"  [green]-[/green] Unstaged {result.path}")
        else:
            console.print(f"  [yellow]?[/yellow] {result.path} is not staged")


@app.command()
def remote(
    url: Optional[str] = typer.Argument(None, help="Remote base URL to push to"),
) -> None:
    """Show or set the remote endpoint."""
    repo = _open_repository()

    try:
        if url is None:
            current = repo.get_remote()
            if current:
                console.print(current)
            else:
                console.print("[dim]No remote configured[/dim]")
            return

        repo.set_remote(url)
    except RootVCSError as e:
        _fail(e)

    console.print(f"[bold green]✓[/bold green] Remote set to {url.strip()}")


@app.command()
def push(
    timeout: float = typer.Option(
        DEFAULT_PUSH_TIMEOUT,
        "--timeout",
        help="Request timeout in seconds",
    ),
) -> None:
    """Push the HEAD commit to the configured remote."""
    repo = _open_repository()

    try:
        result = repo.push(timeout=timeout)
    except RootVCSError as e:
        _fail(e)

    console.print(
        f"[bold green]✓[/bold green] Pushed [yellow]{result.commit_hash[:7]}[/yellow] "
        f"to {result.remote} [dim](HTTP {result.status_code})[/dim]"
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
