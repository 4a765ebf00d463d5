"""CLI commands for Azure Repos."""

import typer

from azb.cli.output import get_client, get_config, reported_errors
from azb.core.errors import CancelledError
from azb.core.workflow import create_repository, delete_repository, list_repositories

app = typer.Typer(help="Manage Azure Repos repositories")

SIZE_UNITS = ["KB", "MB", "GB", "TB"]


def human_size(size: int) -> str:
    """Format a byte count with a binary unit, rounding down."""
    if size <= 0:
        return "0 B"
    if size < 1024:
        return f"{size} B"
    exp = 0
    while size >= 1024 and exp < len(SIZE_UNITS):
        size //= 1024
        exp += 1
    return f"{size} {SIZE_UNITS[exp - 1]}"


def confirm_delete(name: str) -> None:
    """Ask before deleting a repository.

    Raises:
        CancelledError: If the user declines or interrupts the prompt
    """
    question = f"This will permanently delete repo {name!r}. Continue?"
    try:
        proceed = typer.confirm(question, default=False, err=True)
    except typer.Abort:
        raise CancelledError(f"repos delete {name}")
    if not proceed:
        raise CancelledError(f"repos delete {name}")


@app.command("list")
def list_repos(ctx: typer.Context) -> None:
    """List repositories of the default project, sorted by name."""
    with reported_errors():
        repos = list_repositories(get_client(ctx))
    if not repos:
        typer.echo("No repositories found.", err=True)
        return
    width = max(len(repo.name) for repo in repos)
    for repo in repos:
        typer.echo(f"{repo.name.ljust(width)} | {repo.id} | {human_size(repo.size)}")


@app.command("create")
def create(ctx: typer.Context, name: str = typer.Argument(..., help="Repository name")) -> None:
    """Create a repository.

    Example:
        azb repo create payments-api
    """
    with reported_errors():
        repo = create_repository(get_client(ctx), name)
    typer.echo(f"Created repo {repo.name} ({repo.id})")


@app.command("delete")
def delete(
    ctx: typer.Context, repository: str = typer.Argument(..., help="Repository name or ID")
) -> None:
    """Delete a repository.

    Always asks first unless --yes was given, whatever the confirm mode.

    Example:
        azb -y repo delete payments-api
    """
    with reported_errors():
        if not get_config(ctx).assume_yes:
            confirm_delete(repository.strip())
        repo = delete_repository(get_client(ctx), repository)
    typer.echo(f"Deleted repo {repo.name} ({repo.id})", err=True)
