"""Shared helpers for azb CLI commands: error reporting and plain-text output."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

import typer

from azb.core.client import BoardsClient
from azb.core.config import AzbConfig
from azb.core.errors import AzbError, CancelledError, ConfigurationError
from azb.core.models import (
    FIELD_ACCEPTANCE_CRITERIA,
    FIELD_DESCRIPTION,
    FIELD_SEVERITY,
    FIELD_TAGS,
    TYPE_BUG,
    TYPE_USER_STORY,
    WorkItem,
    created_by_display,
    format_tags,
)
from azb.core.workflow import ItemDetails, ItemResult

NO_ITEMS = "No work-items found."
NIL = "NIL"


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn azb errors into a message on stderr and exit status 1."""
    try:
        yield
    except CancelledError:
        typer.echo("Cancelled", err=True)
        raise typer.Exit(1)
    except AzbError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def get_client(ctx: typer.Context) -> BoardsClient:
    return ctx.obj["client"]


def get_config(ctx: typer.Context) -> AzbConfig:
    return ctx.obj["config"]


def _or_nil(value: str) -> str:
    return value.strip() or NIL


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> List[str]:
    """Lay out rows in left-aligned columns separated by two spaces."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    lines = []
    for row in [headers, *rows]:
        lines.append("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip())
    return lines


def item_rows(items: Sequence[WorkItem], with_type: bool = True) -> List[List[str]]:
    rows = []
    for item in items:
        row = [str(item.id)]
        if with_type:
            row.append(item.work_item_type)
        row.extend([item.state, item.assignee, item.title])
        rows.append(row)
    return rows


def items_lines(
    items: Sequence[WorkItem], heading: str = "Work Items", with_type: bool = True
) -> List[str]:
    """Lay out a listing in query order."""
    if not items:
        return [NO_ITEMS]
    headers = ["ID", "Type", "State", "Assignee", "Title"] if with_type else [
        "ID",
        "State",
        "Assignee",
        "Title",
    ]
    return [heading, "", *format_table(headers, item_rows(items, with_type))]


def children_lines(parent: Optional[WorkItem], children: Sequence[WorkItem]) -> List[str]:
    """Lay out a parent header followed by its children."""
    lines = ["Parent", ""]
    if parent is None:
        lines.append("(unknown)")
    else:
        _, column = parent.kanban_column
        column_state = f"{column} ({parent.state})" if column else parent.state
        row = [str(parent.id), column_state, parent.assignee, parent.title]
        lines.extend(format_table(["ID", "Column/State", "Assignee", "Title"], [row]))
    lines.append("")
    lines.extend(items_lines(children))
    return lines


def echo_lines(lines: Sequence[str], output: Optional[Path] = None) -> None:
    """Print ``lines`` and, when ``output`` is given, also save them there.

    Raises:
        ConfigurationError: If the output file cannot be written
    """
    for line in lines:
        typer.echo(line)
    if output is None:
        return
    path = output.expanduser()
    try:
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"cannot write {path}: {e}") from e
    typer.echo(f"Saved listing to {path}", err=True)


def work_item_lines(item: WorkItem) -> List[str]:
    """Summary lines printed after a work item was changed or created."""
    _, column = item.kanban_column
    lines = [
        f"- ID: {item.id}",
        f"- Type: {item.work_item_type}",
        f"- State: {item.state}",
        f"- Title: {item.title}",
        f"- Assigned To: {item.assignee}",
    ]
    severity = item.field(FIELD_SEVERITY)
    if item.work_item_type == TYPE_BUG and severity.strip():
        lines.append(f"- Severity: {severity}")
    lines.extend(
        [
            f"- Kanban Column: {column}",
            f"- Tags: {format_tags(item.field(FIELD_TAGS))}",
            f"- URL: {item.url}",
        ]
    )
    return lines


def echo_result(result: ItemResult) -> None:
    """Print status notes to stderr and the item summary (or raw output) to stdout."""
    for note in result.notes:
        typer.echo(note, err=True)
    if result.item is None:
        if result.raw.strip():
            typer.echo(result.raw.strip())
        return
    typer.echo(result.heading)
    typer.echo()
    for line in work_item_lines(result.item):
        typer.echo(line)


def details_lines(details: ItemDetails) -> List[str]:
    """Lay out a work item's details; User Stories are followed by their children."""
    item = details.item
    work_item_type = item.work_item_type
    is_story = work_item_type == TYPE_USER_STORY

    sections = [("Title", item.title.strip())]
    if work_item_type == TYPE_BUG:
        sections.append(("Severity", _or_nil(item.field(FIELD_SEVERITY))))
    sections.append(("Created By", created_by_display(item.fields) or "(unknown)"))
    sections.append(("Assignee", _or_nil(item.assignee)))
    if is_story:
        sections.append(("Column", _or_nil(item.kanban_column[1])))
    sections.append(("State", item.state))
    sections.append(("Description", _or_nil(item.field(FIELD_DESCRIPTION))))
    if is_story:
        sections.append(("Acceptance Criteria", _or_nil(item.field(FIELD_ACCEPTANCE_CRITERIA))))

    lines = [f"{work_item_type} AB#{item.id}", ""]
    for label, value in sections:
        lines.extend([f"{label}:", f"  {value}"])

    if is_story:
        lines.append("")
        if details.children:
            lines.extend(items_lines(details.children, heading="Children"))
        else:
            lines.extend(["Children", "", NO_ITEMS])
    return lines
