"""Creation of User Stories, Tasks and Bugs.

Tasks and Bugs are always created under a User Story. The parent is
validated before anything is created, and the ``parent`` relation is added
with a separate call once the new item's ID is known.
"""

import logging
from typing import Dict, Optional

from azb.core.client import BoardsClient
from azb.core.errors import ConfigurationError, ExecutionFailure, WorkItemError
from azb.core.models import (
    DEFAULT_SEVERITY,
    FIELD_ASSIGNED_TO,
    FIELD_SEVERITY,
    FIELD_STATE,
    SEVERITY_LABELS,
    STATE_NEW,
    TYPE_BUG,
    TYPE_TASK,
    TYPE_USER_STORY,
)
from azb.core.normalize import decode_work_item
from azb.core.workflow.types import ItemResult

logger = logging.getLogger(__name__)

ME = "@me"


def resolve_assignee(client: BoardsClient, assignee: Optional[str]) -> str:
    """Return the assignee to set, resolving ``@me`` to the signed-in user's UPN."""
    value = (assignee or "").strip()
    if value == ME:
        return client.current_user_upn()
    return value


def resolve_severity_label(value: Optional[str]) -> str:
    """Map a 1-4 severity to its label; blank gives the default (3 - Medium).

    Raises:
        ConfigurationError: If the value is not 1, 2, 3 or 4
    """
    key = (value or "").strip()
    if not key:
        return DEFAULT_SEVERITY
    try:
        return SEVERITY_LABELS[key]
    except KeyError:
        raise ConfigurationError(f"invalid --severity value {value!r} (use 1,2,3,4)") from None


def validate_parent(client: BoardsClient, parent_id: str) -> None:
    """Ensure ``parent_id`` refers to a User Story.

    Raises:
        WorkItemError: If the parent is missing or of another type
    """
    _, parent = client.show_work_item(parent_id)
    if parent is None or parent.work_item_type != TYPE_USER_STORY:
        raise WorkItemError(f"parent {parent_id} is not a User Story")


def _create(
    client: BoardsClient,
    work_item_type: str,
    title: str,
    fields: Dict[str, str],
    heading: str,
) -> ItemResult:
    raw = client.create_work_item(work_item_type, title, fields)
    item = decode_work_item(raw)
    logger.info("Created %s %s", work_item_type, item.id if item else "(undecoded)")
    return ItemResult(
        heading=heading,
        item_id=item.id if item else 0,
        item=item,
        raw=raw.decode("utf-8", errors="replace"),
    )


def _link_parent(client: BoardsClient, result: ItemResult, kind: str, parent_id: str) -> ItemResult:
    if result.item is None or not result.item.id:
        raise WorkItemError(
            f"created {kind} but could not determine its ID; parent relation to {parent_id} not added"
        )
    try:
        client.add_work_item_relation(str(result.item_id), "parent", parent_id)
    except ExecutionFailure as e:
        raise WorkItemError(
            f"created {kind} {result.item_id} but failed to add parent relation to {parent_id}: {e}"
        ) from e
    result.notes.append(f"Linked AB#{result.item_id} as child of AB#{parent_id}")
    return result


def create_story(
    client: BoardsClient,
    title: str,
    assignee: Optional[str] = None,
    column: Optional[str] = None,
) -> ItemResult:
    """Create a User Story in the New state.

    Args:
        client: Boards client
        title: Story title
        assignee: Assignee name or email; ``@me`` for the signed-in user
        column: Kanban column to move the new story into. The board column
            field only exists once the story is on a board, so this is a
            follow-up update.
    """
    fields = {FIELD_STATE: STATE_NEW}
    assigned = resolve_assignee(client, assignee)
    if assigned:
        fields[FIELD_ASSIGNED_TO] = assigned
    result = _create(client, TYPE_USER_STORY, title, fields, "User Story Created")

    target = (column or "").strip()
    if not target or result.item is None:
        return result
    column_field, current = result.item.kanban_column
    if not column_field:
        logger.warning("Story %s has no Kanban column field; column not set", result.item_id)
        return result
    if current == target:
        return result

    raw = client.update_work_item_fields(str(result.item_id), {column_field: target})
    updated = decode_work_item(raw)
    return ItemResult(
        heading=result.heading,
        item_id=result.item_id,
        item=updated,
        raw=raw.decode("utf-8", errors="replace"),
        notes=[f"Moved column from {current} to {target}"],
    )


def create_task(
    client: BoardsClient, title: str, parent_id: str, assignee: Optional[str] = None
) -> ItemResult:
    """Create a Task under a User Story.

    The state is left to the process default, since some processes reject
    an explicit state at creation time.
    """
    validate_parent(client, parent_id)
    fields: Dict[str, str] = {}
    assigned = resolve_assignee(client, assignee)
    if assigned:
        fields[FIELD_ASSIGNED_TO] = assigned
    result = _create(client, TYPE_TASK, title, fields, "Task Created")
    return _link_parent(client, result, "task", parent_id)


def create_bug(
    client: BoardsClient,
    title: str,
    parent_id: str,
    assignee: Optional[str] = None,
    severity: Optional[str] = None,
) -> ItemResult:
    """Create a Bug under a User Story with a severity label."""
    label = resolve_severity_label(severity)
    validate_parent(client, parent_id)
    fields = {FIELD_STATE: STATE_NEW}
    assigned = resolve_assignee(client, assignee)
    if assigned:
        fields[FIELD_ASSIGNED_TO] = assigned
    fields[FIELD_SEVERITY] = label
    result = _create(client, TYPE_BUG, title, fields, "Bug Created")
    return _link_parent(client, result, "bug", parent_id)
