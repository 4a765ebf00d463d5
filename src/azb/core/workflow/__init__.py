"""Work item workflows for azb.

Each workflow combines typed az boards calls from BoardsClient into one
user-facing operation:
- transitions: forward/backward Kanban column moves
- state: resolve, renew, close, delete and work-on
- create: User Story, Task and Bug creation with parent links
- show: item details and parent/children listings
- repos: Azure Repos list, create and delete
- types: result models returned to the CLI
"""

from azb.core.workflow.create import (
    create_bug,
    create_story,
    create_task,
    resolve_assignee,
    resolve_severity_label,
    validate_parent,
)
from azb.core.workflow.repos import (
    create_repository,
    delete_repository,
    find_repository,
    list_repositories,
    sort_repos,
)
from azb.core.workflow.show import list_children, show_item, sort_children
from azb.core.workflow.state import (
    close_item,
    delete_item,
    renew_item,
    resolve_item,
    resolve_target_state,
    set_state,
    work_on,
)
from azb.core.workflow.transitions import move_backward, move_forward
from azb.core.workflow.types import ItemDetails, ItemResult, TransitionResult

__all__ = [
    "ItemDetails",
    "ItemResult",
    "TransitionResult",
    "close_item",
    "create_bug",
    "create_repository",
    "create_story",
    "create_task",
    "delete_item",
    "delete_repository",
    "find_repository",
    "list_children",
    "list_repositories",
    "move_backward",
    "move_forward",
    "renew_item",
    "resolve_assignee",
    "resolve_item",
    "resolve_severity_label",
    "resolve_target_state",
    "set_state",
    "show_item",
    "sort_children",
    "sort_repos",
    "validate_parent",
    "work_on",
]
