"""Result types for work item workflows."""

from typing import List, Optional

from pydantic import BaseModel, Field

from azb.core.models import WorkItem


class ItemResult(BaseModel):
    """Outcome of a workflow that changed or created one work item.

    Attributes:
        heading: Short description of what happened (e.g. "Item pushed forward")
        item_id: ID of the affected work item
        item: Work item decoded from the last az response, if it decoded
        raw: Raw output of the last az call, kept for passthrough printing
        notes: Status lines for the user (column moves, links)
    """

    heading: str
    item_id: int = 0
    item: Optional[WorkItem] = None
    raw: str = ""
    notes: List[str] = Field(default_factory=list)


class TransitionResult(ItemResult):
    """Outcome of moving a work item between Kanban columns."""

    from_column: str
    to_column: str


class ItemDetails(BaseModel):
    """A work item together with its direct children."""

    item: WorkItem
    children: List[WorkItem] = Field(default_factory=list)
