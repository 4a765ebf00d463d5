"""azb CLI - Azure Boards task helper."""

from pathlib import Path
from typing import List, Optional

import typer

from azb import __version__
from azb.cli.create import app as create_app
from azb.cli.output import (
    children_lines,
    details_lines,
    echo_lines,
    echo_result,
    get_client,
    get_config,
    items_lines,
    reported_errors,
)
from azb.cli.repo import app as repo_app
from azb.core.client import build_client
from azb.core.config import AzbConfig
from azb.core.errors import ConfigurationError
from azb.core.models import TYPE_TASK, TYPE_USER_STORY
from azb.core.queries import query_items_with_order
from azb.core.utils import setup_logger
from azb.core.workflow import (
    close_item,
    delete_item,
    list_children,
    move_backward,
    move_forward,
    renew_item,
    resolve_item,
    show_item,
    work_on,
)

app = typer.Typer(
    invoke_without_command=True,
    no_args_is_help=True,
    help="azb - Azure Boards task helper",
)
app.add_typer(create_app, name="create")
app.add_typer(repo_app, name="repo")

OUTPUT_HELP = "Also write the listing to this file"


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"azb version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    confirm: Optional[str] = typer.Option(
        None,
        "--confirm",
        help="Confirmation mode: always|mutations|never (overrides AB_CONFIRM)",
    ),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Do not prompt; equivalent to --confirm never"
    ),
    silent: bool = typer.Option(
        False, "--silent", "-s", help="Do not print az commands, only outputs"
    ),
    default_columns: bool = typer.Option(
        False,
        "--default-columns",
        "-d",
        help="Use the Agile columns New,Active,Resolved,Closed (overrides AB_COLUMNS)",
    ),
    po_order: bool = typer.Option(
        False,
        "--po-order",
        "-P",
        help="Order by PO priority where possible (also AB_PO_ORDER or AB_STACKRANK)",
    ),
):
    """azb - Azure Boards task helper."""
    obj = ctx.ensure_object(dict)
    try:
        config = AzbConfig.from_env(obj.get("environ")).with_overrides(
            confirm=confirm,
            yes=yes,
            silent=True if silent else None,
            default_columns=default_columns,
            po_order=True if po_order else None,
        )
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    setup_logger(config.log_level, log_to_file=obj.get("log_to_file", True))
    obj["config"] = config
    obj["client"] = build_client(
        config, executor=obj.get("executor"), prompter=obj.get("prompter")
    )


@app.command("list")
def list_items(
    ctx: typer.Context,
    parent_id: Optional[int] = typer.Argument(None, help="List the children of this work item"),
    include_all: bool = typer.Option(False, "--all", "-a", help="Include Closed items"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
):
    """List non-Closed work items, or the children of PARENT_ID.

    Example:
        azb list
        azb list 1234 --all -o ab1234.txt
    """
    client = get_client(ctx)
    config = get_config(ctx)
    with reported_errors():
        if parent_id is not None:
            parent, children = list_children(client, str(parent_id), include_all)
            echo_lines(children_lines(parent, children), output)
            return
        items = query_items_with_order(client, "", include_all, config.po_order)
        echo_lines(items_lines(items), output)


def _list_type(
    ctx: typer.Context,
    work_item_type: str,
    heading: str,
    include_all: bool,
    output: Optional[Path],
):
    client = get_client(ctx)
    config = get_config(ctx)
    with reported_errors():
        items = query_items_with_order(client, work_item_type, include_all, config.po_order)
        echo_lines(items_lines(items, heading=heading, with_type=False), output)


@app.command()
def tasks(
    ctx: typer.Context,
    include_all: bool = typer.Option(False, "--all", "-a", help="Include Closed items"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
):
    """List Tasks."""
    _list_type(ctx, TYPE_TASK, "Tasks", include_all, output)


@app.command()
def stories(
    ctx: typer.Context,
    include_all: bool = typer.Option(False, "--all", "-a", help="Include Closed items"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
):
    """List User Stories."""
    _list_type(ctx, TYPE_USER_STORY, "User Stories", include_all, output)


@app.command()
def show(
    ctx: typer.Context,
    item_id: int = typer.Argument(..., help="Work item ID"),
    include_all: bool = typer.Option(False, "--all", "-a", help="Include Closed children"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Also write the details to this file"
    ),
):
    """Show a work item; User Stories include their children."""
    with reported_errors():
        echo_lines(details_lines(show_item(get_client(ctx), str(item_id), include_all)), output)


@app.command()
def forward(ctx: typer.Context, item_id: int = typer.Argument(..., help="Work item ID")):
    """Move a work item to the next Kanban column."""
    with reported_errors():
        echo_result(move_forward(get_client(ctx), get_config(ctx).columns, str(item_id)))


@app.command()
def backward(ctx: typer.Context, item_id: int = typer.Argument(..., help="Work item ID")):
    """Move a work item to the previous Kanban column."""
    with reported_errors():
        echo_result(move_backward(get_client(ctx), get_config(ctx).columns, str(item_id)))


@app.command()
def resolve(
    ctx: typer.Context, item_ids: List[int] = typer.Argument(..., help="Work item IDs")
):
    """Set work items to Resolved (Tasks are Closed)."""
    client = get_client(ctx)
    with reported_errors():
        for item_id in item_ids:
            echo_result(resolve_item(client, str(item_id)))


@app.command()
def renew(ctx: typer.Context, item_ids: List[int] = typer.Argument(..., help="Work item IDs")):
    """Set work items back to New."""
    client = get_client(ctx)
    with reported_errors():
        for item_id in item_ids:
            echo_result(renew_item(client, str(item_id)))


@app.command()
def close(ctx: typer.Context, item_ids: List[int] = typer.Argument(..., help="Work item IDs")):
    """Set work items to Closed."""
    client = get_client(ctx)
    with reported_errors():
        for item_id in item_ids:
            echo_result(close_item(client, str(item_id)))


@app.command()
def delete(ctx: typer.Context, item_ids: List[int] = typer.Argument(..., help="Work item IDs")):
    """Delete work items."""
    client = get_client(ctx)
    with reported_errors():
        for item_id in item_ids:
            echo_result(delete_item(client, str(item_id)))


@app.command()
def workon(ctx: typer.Context, item_id: int = typer.Argument(..., help="Work item ID")):
    """Assign a work item to me and move it to Active."""
    with reported_errors():
        echo_result(work_on(get_client(ctx), str(item_id)))


@app.command()
def columns(
    ctx: typer.Context,
    work_item_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        help="Show the board columns defined for this work item type",
    ),
):
    """Show the Kanban column order used by forward and backward.

    With --type, the columns of the default team's board for that type are
    fetched from Azure DevOps instead.

    Example:
        azb columns
        azb columns --type "User Story"
    """
    if not work_item_type:
        for position, name in enumerate(get_config(ctx).columns, start=1):
            typer.echo(f"{position}. {name}")
        return

    with reported_errors():
        board_columns = get_client(ctx).board_columns_for_type(work_item_type)
    for position, column in enumerate(board_columns, start=1):
        state = column.state_mappings.get(work_item_type, "")
        typer.echo(f"{position}. {column.name} ({state})" if state else f"{position}. {column.name}")


if __name__ == "__main__":
    app()
