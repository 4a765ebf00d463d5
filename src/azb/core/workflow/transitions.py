"""Forward and backward Kanban column moves."""

import logging
from typing import Callable

from azb.core.client import BoardsClient
from azb.core.columns import ColumnSequence, next_column, previous_column
from azb.core.errors import WorkItemError
from azb.core.normalize import decode_work_item
from azb.core.workflow.types import TransitionResult

logger = logging.getLogger(__name__)

ColumnStep = Callable[[ColumnSequence, str], str]


def _move(
    client: BoardsClient,
    columns: ColumnSequence,
    item_id: str,
    step: ColumnStep,
    heading: str,
) -> TransitionResult:
    item = client.require_work_item(item_id)

    column_field, current = item.kanban_column
    if not column_field or not current:
        raise WorkItemError(f"kanban column field not found on work item {item_id}")

    # Raises before any update is sent when the move is not possible
    target = step(columns, current)

    raw = client.update_work_item_fields(item_id, {column_field: target})
    logger.info("Work item %s moved from %s to %s", item_id, current, target)

    return TransitionResult(
        heading=heading,
        item_id=item.id,
        item=decode_work_item(raw),
        raw=raw.decode("utf-8", errors="replace"),
        notes=[f"Moved column from {current} to {target}"],
        from_column=current,
        to_column=target,
    )


def move_forward(client: BoardsClient, columns: ColumnSequence, item_id: str) -> TransitionResult:
    """Move a work item to the next Kanban column.

    Raises:
        WorkItemError: If the item has no Kanban column field
        UnknownColumnError: If the item's column is not in ``columns``
        BoundaryReachedError: If the item is already in the last column
    """
    return _move(client, columns, item_id, next_column, "Item pushed forward")


def move_backward(client: BoardsClient, columns: ColumnSequence, item_id: str) -> TransitionResult:
    """Move a work item to the previous Kanban column.

    Raises:
        WorkItemError: If the item has no Kanban column field
        UnknownColumnError: If the item's column is not in ``columns``
        BoundaryReachedError: If the item is already in the first column
    """
    return _move(client, columns, item_id, previous_column, "Item stepped back")
