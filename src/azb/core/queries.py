"""Work item listing queries.

Listings are lenient: a query that returns nothing, or returns output in an
unrecognized shape, yields an empty list. Resolving the children of a
parent is strict about identifiers, since a silently empty ID list would
hide broken relations.
"""

import logging
from typing import List

from azb.core.client import BoardsClient
from azb.core.errors import UnrecognizedShapeError
from azb.core.merge import merge_prioritized
from azb.core.models import WorkItem
from azb.core.normalize import extract_item_ids, is_empty_result, normalize_items
from azb.core.wiql import (
    RANKED_TYPES,
    base_list_wiql,
    child_ids_wiql,
    fallback_wiql,
    items_by_ids_wiql,
    ranked_type_wiql,
    ranked_wiql,
)

logger = logging.getLogger(__name__)


def query_items_by_wiql(client: BoardsClient, wiql: str) -> List[WorkItem]:
    """Run ``wiql`` and normalize the response, preserving query order."""
    raw = client.query_wiql(wiql)
    items = normalize_items(raw)
    logger.debug("Query returned %d item(s)", len(items))
    return items


def query_items(
    client: BoardsClient, type_filter: str = "", include_closed: bool = False
) -> List[WorkItem]:
    """Items, optionally of one type, most recently changed first."""
    return query_items_by_wiql(client, base_list_wiql(include_closed, type_filter))


def query_po_ordered(client: BoardsClient, include_closed: bool = False) -> List[WorkItem]:
    """Stories and Bugs by StackRank, followed by every other type by recency.

    Runs two queries in sequence and concatenates their results.
    """
    ranked = query_items_by_wiql(client, ranked_wiql(include_closed))
    fallback = query_items_by_wiql(client, fallback_wiql(include_closed))
    return merge_prioritized(ranked, fallback)


def query_items_with_order(
    client: BoardsClient,
    type_filter: str = "",
    include_closed: bool = False,
    po_order: bool = False,
) -> List[WorkItem]:
    """List items honoring PO order when requested.

    With PO order, a ranked type is ordered by StackRank, no type filter
    gives the ranked-then-fallback merge, and any other type keeps the
    recency order.
    """
    if not po_order:
        return query_items(client, type_filter, include_closed)
    if type_filter in RANKED_TYPES:
        return query_items_by_wiql(client, ranked_type_wiql(type_filter, include_closed))
    if not type_filter:
        return query_po_ordered(client, include_closed)
    return query_items(client, type_filter, include_closed)


def query_items_by_parent(
    client: BoardsClient, parent_id: str, include_closed: bool = False
) -> List[WorkItem]:
    """List the direct children of ``parent_id``.

    First resolves child IDs through System.Parent, then fetches the list
    fields for those IDs in one query.

    Raises:
        UnrecognizedShapeError: If the child ID query output holds no IDs
            and is not a recognized empty result
    """
    raw = client.query_wiql(child_ids_wiql(parent_id))
    try:
        ids = extract_item_ids(raw)
    except UnrecognizedShapeError:
        if is_empty_result(raw):
            return []
        raise

    logger.debug("Parent %s has %d child id(s)", parent_id, len(ids))
    return query_items_by_wiql(client, items_by_ids_wiql(ids, include_closed))
