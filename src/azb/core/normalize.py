"""Decoding of az boards query responses into work item lists.

``az boards query`` has been observed to answer in several JSON shapes
depending on the az version and output options:

1. a bare array: ``[{"id": 1, "fields": {...}}, ...]``
2. an object with ``workItems``: ``{"workItems": [...]}``
3. an object with ``value``: ``{"value": [...]}``

Listing is lenient: an unrecognized or empty payload yields an empty list,
since no results is a normal outcome. Identifier extraction, used to build
parent/child relations, is strict and raises UnrecognizedShapeError instead.
"""

import json
import logging
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from azb.core.errors import UnrecognizedShapeError
from azb.core.models import FIELD_ID, WorkItem

logger = logging.getLogger(__name__)

RawPayload = Union[bytes, bytearray, str, list, dict, None]

_ITEM_LIST = TypeAdapter(List[WorkItem])
_MISSING = object()


class _QueryEnvelope(BaseModel):
    """Object-shaped query response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    workItems: Optional[List[WorkItem]] = None
    value: Optional[List[WorkItem]] = None


def _load(raw: RawPayload) -> Any:
    """Parse raw output into JSON data, or _MISSING when there is none."""
    if raw is None:
        return _MISSING
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return _MISSING
    if isinstance(raw, str):
        if not raw.strip():
            return _MISSING
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.debug("Query output is not JSON: %s", exc)
            return _MISSING
    return raw


def decode_items(raw: RawPayload) -> Optional[List[WorkItem]]:
    """Decode a query response, returning None when no known shape matches.

    The first shape that validates wins, even when it is empty. For the
    object shape, ``value`` is only consulted when ``workItems`` is absent
    or empty.
    """
    data = _load(raw)
    if data is _MISSING:
        return None

    if isinstance(data, list):
        try:
            return _ITEM_LIST.validate_python(data)
        except ValidationError as exc:
            logger.debug("Array-shaped query output did not validate: %s", exc)
            return None

    if isinstance(data, dict):
        try:
            envelope = _QueryEnvelope.model_validate(data)
        except ValidationError as exc:
            logger.debug("Object-shaped query output did not validate: %s", exc)
            return None
        items = envelope.workItems or []
        if not items:
            items = envelope.value or []
        return items

    return None


def normalize_items(raw: RawPayload) -> List[WorkItem]:
    """Decode a query response into an ordered list of work items.

    Never fails: empty, absent or unrecognized payloads yield an empty list.
    Item order is preserved exactly as returned by the query.
    """
    items = decode_items(raw)
    if items is None:
        logger.debug("Unrecognized query output shape; treating as empty result")
        return []
    return items


def decode_work_item(raw: RawPayload) -> Optional[WorkItem]:
    """Decode a single work item response (show, update, create).

    Returns:
        The decoded WorkItem, or None when the payload is not an item object
    """
    data = _load(raw)
    if not isinstance(data, dict):
        return None
    try:
        return WorkItem.model_validate(data)
    except ValidationError as exc:
        logger.debug("Work item output did not validate: %s", exc)
        return None


def is_empty_result(raw: RawPayload) -> bool:
    """True when the payload is a recognized shape holding an empty list."""
    data = _load(raw)
    if isinstance(data, list):
        return not data
    if isinstance(data, dict):
        lists = [data.get(key) for key in ("workItems", "value")]
        present = [entries for entries in lists if isinstance(entries, list)]
        return bool(present) and not any(present)
    return False


def _as_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _ids_from(entries: Any) -> List[int]:
    ids: List[int] = []
    if not isinstance(entries, list):
        return ids
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        item_id = _as_id(entry.get("id"))
        if item_id:
            ids.append(item_id)
            continue
        fields = entry.get("fields")
        if isinstance(fields, dict):
            field_id = _as_id(fields.get(FIELD_ID))
            if field_id is not None:
                ids.append(field_id)
    return ids


def extract_item_ids(raw: RawPayload) -> List[int]:
    """Extract work item IDs from a query response.

    Tries ``workItems``, a bare array, then ``value``. An entry contributes
    its ``id``, or ``fields["System.Id"]`` when ``id`` is missing.

    Raises:
        UnrecognizedShapeError: If no identifiers can be located
    """
    data = _load(raw)
    candidates: List[Any] = []
    if isinstance(data, dict):
        candidates = [data.get("workItems"), data.get("value")]
    elif isinstance(data, list):
        candidates = [data]

    for entries in candidates:
        ids = _ids_from(entries)
        if ids:
            return ids
    raise UnrecognizedShapeError()
