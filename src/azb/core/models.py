"""Data types for Azure Boards work items."""

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

FIELD_ID = "System.Id"
FIELD_TITLE = "System.Title"
FIELD_STATE = "System.State"
FIELD_TYPE = "System.WorkItemType"
FIELD_ASSIGNED_TO = "System.AssignedTo"
FIELD_CREATED_BY = "System.CreatedBy"
FIELD_DESCRIPTION = "System.Description"
FIELD_TAGS = "System.Tags"
FIELD_SEVERITY = "Microsoft.VSTS.Common.Severity"
FIELD_STACK_RANK = "Microsoft.VSTS.Common.StackRank"
FIELD_ACCEPTANCE_CRITERIA = "Microsoft.VSTS.Common.AcceptanceCriteria"

TYPE_USER_STORY = "User Story"
TYPE_BUG = "Bug"
TYPE_TASK = "Task"

STATE_NEW = "New"
STATE_ACTIVE = "Active"
STATE_RESOLVED = "Resolved"
STATE_CLOSED = "Closed"

SEVERITY_LABELS = {
    "1": "1 - Critical",
    "2": "2 - High",
    "3": "3 - Medium",
    "4": "4 - Low",
}
DEFAULT_SEVERITY = SEVERITY_LABELS["3"]


class WorkItem(BaseModel):
    """Work item as returned by az boards work-item show and WIQL queries."""

    id: int = 0
    rev: Optional[int] = None
    fields: Dict[str, Any] = Field(default_factory=dict)
    url: str = ""

    @field_validator("fields", mode="before")
    @classmethod
    def default_fields(cls, v):
        """Treat a null fields map as empty."""
        return v if v is not None else {}

    @field_validator("url", mode="before")
    @classmethod
    def default_url(cls, v):
        """Treat a null URL as empty."""
        return v if v is not None else ""

    def field(self, key: str) -> str:
        return field_string(self.fields, key)

    @property
    def title(self) -> str:
        return self.field(FIELD_TITLE)

    @property
    def state(self) -> str:
        return self.field(FIELD_STATE)

    @property
    def work_item_type(self) -> str:
        return self.field(FIELD_TYPE)

    @property
    def assignee(self) -> str:
        return assignee_display(self.fields)

    @property
    def kanban_column(self) -> Tuple[str, str]:
        return find_kanban_column(self.fields)


class Repo(BaseModel):
    """Azure Repos repository as returned by az repos list and create."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    size: int = 0
    ssh_url: str = Field(default="", alias="sshUrl")
    remote_url: str = Field(default="", alias="remoteUrl")
    web_url: str = Field(default="", alias="webUrl")

    @field_validator("size", mode="before")
    @classmethod
    def default_size(cls, v):
        """Treat a null size as zero."""
        return v if v is not None else 0


def field_string(fields: Optional[Dict[str, Any]], key: str) -> str:
    """Return a string field value, or "" when absent or not a string."""
    if not fields:
        return ""
    value = fields.get(key)
    return value if isinstance(value, str) else ""


def find_kanban_column(fields: Optional[Dict[str, Any]]) -> Tuple[str, str]:
    """Locate the board-specific Kanban column field.

    Azure Boards stores the column in a dynamic field named
    ``WEF_<board guid>_Kanban.Column``.

    Args:
        fields: Work item fields map

    Returns:
        Tuple of (field name, column value), or ("", "") when not found
    """
    if not fields:
        return "", ""
    for key, value in fields.items():
        if key.startswith("WEF_") and "Kanban.Column" in key and isinstance(value, str):
            return key, value
    return "", ""


def _identity_display(fields: Optional[Dict[str, Any]], key: str) -> str:
    if not fields:
        return ""
    value = fields.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        display_name = value.get("displayName")
        if isinstance(display_name, str):
            return display_name
    return ""


def assignee_display(fields: Optional[Dict[str, Any]]) -> str:
    """Return the assignee as a string or its nested displayName."""
    return _identity_display(fields, FIELD_ASSIGNED_TO)


def created_by_display(fields: Optional[Dict[str, Any]]) -> str:
    """Return the creator as a string or its nested displayName."""
    return _identity_display(fields, FIELD_CREATED_BY)


def format_tags(tags: str) -> str:
    """Format a semicolon separated tag string for display."""
    parts = [p.strip() for p in tags.split(";") if p.strip()]
    if not parts:
        return "(none)"
    return ", ".join(parts)
