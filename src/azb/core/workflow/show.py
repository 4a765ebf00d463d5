"""Fetching a work item together with its children."""

import logging
from typing import List, Optional, Tuple

from azb.core.client import BoardsClient
from azb.core.models import TYPE_USER_STORY, WorkItem
from azb.core.queries import query_items_by_parent
from azb.core.workflow.types import ItemDetails

logger = logging.getLogger(__name__)


def sort_children(children: List[WorkItem]) -> List[WorkItem]:
    """Children are shown newest first (highest ID first)."""
    return sorted(children, key=lambda child: child.id, reverse=True)


def show_item(client: BoardsClient, item_id: str, include_closed: bool = False) -> ItemDetails:
    """Fetch a work item; User Stories also get their direct children.

    Raises:
        WorkItemError: If the item cannot be inspected
        UnrecognizedShapeError: If the children query output is unrecognized
    """
    item = client.require_work_item(item_id)
    children: List[WorkItem] = []
    if item.work_item_type == TYPE_USER_STORY:
        children = sort_children(query_items_by_parent(client, str(item.id), include_closed))
    return ItemDetails(item=item, children=children)


def list_children(
    client: BoardsClient, parent_id: str, include_closed: bool = False
) -> Tuple[Optional[WorkItem], List[WorkItem]]:
    """Return the parent (None when it does not decode) and its sorted children."""
    children = query_items_by_parent(client, parent_id, include_closed)
    _, parent = client.show_work_item(parent_id)
    if parent is None:
        logger.debug("Parent %s did not decode; header left blank", parent_id)
    return parent, sort_children(children)
