"""CLI commands for creating work items."""

from typing import Optional

import typer

from azb.cli.output import echo_result, get_client, get_config, reported_errors
from azb.core.errors import ConfigurationError
from azb.core.workflow import create_bug, create_story, create_task

app = typer.Typer(help="Create work items")


@app.command("story")
def story(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Title of the User Story"),
    assign: Optional[str] = typer.Option(
        None, "--assign", "-a", help="Assign to user (use @me for yourself)"
    ),
    column: Optional[str] = typer.Option(
        None, "--column", "-c", help="Kanban column to place the story in"
    ),
) -> None:
    """Create a User Story.

    Example:
        azb create story "Checkout supports gift cards" -a @me
        azb create story "Gift card refunds" --column "Ready for Development"
    """
    config = get_config(ctx)
    with reported_errors():
        if column is not None and column not in config.columns:
            raise ConfigurationError(
                f"unknown column {column!r} (configured: {config.columns})"
            )
        echo_result(create_story(get_client(ctx), title, assign, column))


@app.command("task")
def task(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Title of the Task"),
    parent: int = typer.Option(..., "--parent", "-p", help="Parent User Story ID"),
    assignee: Optional[str] = typer.Option(
        None, "--assignee", "-a", help="Assignee (use @me for yourself)"
    ),
) -> None:
    """Create a Task under a User Story.

    Example:
        azb create task "Write migration" --parent 1234
    """
    with reported_errors():
        echo_result(create_task(get_client(ctx), title, str(parent), assignee))


@app.command("bug")
def bug(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Title of the Bug"),
    parent: int = typer.Option(..., "--parent", "-p", help="Parent User Story ID"),
    assignee: Optional[str] = typer.Option(
        None, "--assignee", "-a", help="Assignee (use @me for yourself)"
    ),
    severity: Optional[str] = typer.Option(
        None, "--severity", help="Severity 1|2|3|4 (1-Critical, 2-High, 3-Medium, 4-Low)"
    ),
) -> None:
    """Create a Bug under a User Story.

    Example:
        azb create bug "Login fails on Safari" --parent 1234 --severity 2
    """
    with reported_errors():
        echo_result(create_bug(get_client(ctx), title, str(parent), assignee, severity))
