"""Work item state changes: resolve, renew, close, delete and work-on."""

import logging

from azb.core.client import BoardsClient
from azb.core.models import (
    FIELD_ASSIGNED_TO,
    FIELD_STATE,
    STATE_ACTIVE,
    STATE_CLOSED,
    STATE_NEW,
    STATE_RESOLVED,
    TYPE_TASK,
)
from azb.core.normalize import decode_work_item
from azb.core.workflow.types import ItemResult

logger = logging.getLogger(__name__)


def _result(heading: str, item_id: str, raw: bytes) -> ItemResult:
    item = decode_work_item(raw)
    return ItemResult(
        heading=heading,
        item_id=item.id if item else int(item_id),
        item=item,
        raw=raw.decode("utf-8", errors="replace"),
    )


def set_state(client: BoardsClient, item_id: str, state: str, heading: str) -> ItemResult:
    """Set System.State on a work item."""
    raw = client.update_work_item_fields(item_id, {FIELD_STATE: state})
    logger.info("Work item %s set to %s", item_id, state)
    return _result(heading, item_id, raw)


def resolve_target_state(work_item_type: str) -> str:
    """Tasks have no Resolved state and close directly."""
    return STATE_CLOSED if work_item_type == TYPE_TASK else STATE_RESOLVED


def resolve_item(client: BoardsClient, item_id: str) -> ItemResult:
    """Resolve a work item, inspecting it first to pick the target state.

    Raises:
        WorkItemError: If the item cannot be inspected
    """
    item = client.require_work_item(item_id)
    return set_state(client, item_id, resolve_target_state(item.work_item_type), "Resolved")


def renew_item(client: BoardsClient, item_id: str) -> ItemResult:
    return set_state(client, item_id, STATE_NEW, "Renewed")


def close_item(client: BoardsClient, item_id: str) -> ItemResult:
    return set_state(client, item_id, STATE_CLOSED, "Closed")


def delete_item(client: BoardsClient, item_id: str) -> ItemResult:
    raw = client.delete_work_item(item_id)
    logger.info("Work item %s deleted", item_id)
    return ItemResult(
        heading="Deleted",
        item_id=int(item_id),
        raw=raw.decode("utf-8", errors="replace"),
        notes=[f"Deleted AB#{item_id}"],
    )


def work_on(client: BoardsClient, item_id: str) -> ItemResult:
    """Assign a work item to the signed-in user and set it Active."""
    me = client.current_user_upn()
    raw = client.update_work_item_fields(
        item_id, {FIELD_ASSIGNED_TO: me, FIELD_STATE: STATE_ACTIVE}
    )
    logger.info("Work item %s assigned to %s and set Active", item_id, me)
    return _result("Working On", item_id, raw)
