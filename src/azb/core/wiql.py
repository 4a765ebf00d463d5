"""WIQL query construction.

Queries are assembled by plain concatenation of the caller's type and
closed-state filters; the grammar is never parsed or validated here.
"""

from typing import Iterable, List, Sequence

from azb.core.models import STATE_CLOSED, TYPE_BUG, TYPE_USER_STORY

RANKED_TYPES: tuple = (TYPE_USER_STORY, TYPE_BUG)

LIST_COLUMNS = (
    "[System.Id], [System.Title], [System.State], "
    "[System.WorkItemType], [System.AssignedTo]"
)
RANKED_COLUMNS = LIST_COLUMNS + ", [Microsoft.VSTS.Common.StackRank]"

ORDER_BY_RECENCY = " ORDER BY [System.ChangedDate] DESC"
ORDER_BY_RANK = " ORDER BY [Microsoft.VSTS.Common.StackRank] ASC, [System.ChangedDate] DESC"

NOT_CLOSED = f"[System.State] <> '{STATE_CLOSED}'"


def _quoted_list(values: Iterable[str]) -> str:
    return ",".join(f"'{v}'" for v in values)


def _select(columns: str, where: Sequence[str]) -> str:
    wiql = f"SELECT {columns} FROM WorkItems"
    if where:
        wiql += " WHERE " + " AND ".join(where)
    return wiql


def _closed_filter(include_closed: bool) -> List[str]:
    return [] if include_closed else [NOT_CLOSED]


def base_list_wiql(include_closed: bool = False, type_filter: str = "") -> str:
    """Items optionally filtered to one type, most recently changed first."""
    where = _closed_filter(include_closed)
    if type_filter.strip():
        where.append(f"[System.WorkItemType] = '{type_filter}'")
    return _select(LIST_COLUMNS, where) + ORDER_BY_RECENCY


def ranked_type_wiql(type_filter: str, include_closed: bool = False) -> str:
    """Items of a single ranked type ordered by StackRank."""
    where = _closed_filter(include_closed)
    where.append(f"[System.WorkItemType] = '{type_filter}'")
    return _select(RANKED_COLUMNS, where) + ORDER_BY_RANK


def ranked_wiql(include_closed: bool = False, ranked_types: Sequence[str] = RANKED_TYPES) -> str:
    """Ranked partition: ranked types by StackRank ASC, then ChangedDate DESC."""
    where = _closed_filter(include_closed)
    where.append(f"[System.WorkItemType] IN ({_quoted_list(ranked_types)})")
    return _select(RANKED_COLUMNS, where) + ORDER_BY_RANK


def fallback_wiql(include_closed: bool = False, ranked_types: Sequence[str] = RANKED_TYPES) -> str:
    """Fallback partition: every other type by ChangedDate DESC."""
    where = _closed_filter(include_closed)
    where.append(f"[System.WorkItemType] NOT IN ({_quoted_list(ranked_types)})")
    return _select(LIST_COLUMNS, where) + ORDER_BY_RECENCY


def child_ids_wiql(parent_id: str) -> str:
    return f"SELECT [System.Id] FROM WorkItems WHERE [System.Parent] = {parent_id}"


def items_by_ids_wiql(ids: Sequence[int], include_closed: bool = False) -> str:
    """Fetch list fields for a known set of IDs."""
    id_list = ",".join(str(i) for i in ids)
    where = [f"[System.Id] IN ({id_list})"] + _closed_filter(include_closed)
    return _select(LIST_COLUMNS, where) + ORDER_BY_RECENCY
