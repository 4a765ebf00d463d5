"""Typed az boards operations.

Every method builds an Invocation and sends it through the client's
CommandGate, so echoing, confirmation and execution are decided in one
place.
"""

import json
import logging
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from azb.core.config import AzbConfig
from azb.core.errors import ConfigurationError, RepositoryError, WorkItemError
from azb.core.executor import CommandExecutor
from azb.core.gate import CommandGate, Prompter
from azb.core.invocation import Invocation
from azb.core.models import Repo, WorkItem
from azb.core.normalize import decode_work_item

logger = logging.getLogger(__name__)

BOARDS_API_VERSION = "7.0"


class DevOpsDefaults(BaseModel):
    """Configured az devops defaults and the project's default team."""

    organization: str = ""
    project: str
    team: str


class Board(BaseModel):
    id: str
    name: str = ""


class BoardColumn(BaseModel):
    """Kanban board column as returned by the work/boards REST API."""

    id: str = ""
    name: str
    is_split: bool = Field(default=False, alias="isSplit")
    column_type: str = Field(default="", alias="columnType")
    state_mappings: Dict[str, str] = Field(default_factory=dict, alias="stateMappings")


class _BoardsList(BaseModel):
    value: List[Board] = Field(default_factory=list)


class _ColumnsList(BaseModel):
    value: List[BoardColumn] = Field(default_factory=list)


_REPOS = TypeAdapter(List[Repo])


def _field_args(fields: Mapping[str, str]) -> List[str]:
    """Build ``--fields A=B C=D`` arguments."""
    if not fields:
        return []
    return ["--fields", *(f"{key}={value}" for key, value in fields.items())]


class BoardsClient:
    """Azure Boards operations routed through a CommandGate."""

    def __init__(self, gate: CommandGate) -> None:
        self.gate = gate

    def run(self, invocation: Invocation) -> bytes:
        return self.gate.run(invocation)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def current_user_upn(self) -> str:
        """Return the signed-in user's principal name (email)."""
        out = self.run(
            Invocation.other(
                "ad", "signed-in-user", "show", "--query", "userPrincipalName", "-o", "tsv"
            )
        )
        return out.decode("utf-8", errors="replace").strip()

    # ------------------------------------------------------------------
    # Queries and work items
    # ------------------------------------------------------------------

    def query_wiql(self, wiql: str) -> bytes:
        """Run a WIQL query and return the raw JSON output."""
        return self.run(Invocation.other("boards", "query", "--wiql", wiql, "-o", "json"))

    def show_work_item(self, item_id: str) -> Tuple[bytes, Optional[WorkItem]]:
        """Fetch a work item.

        Returns:
            Tuple of (raw JSON output, decoded WorkItem or None when the
            output does not decode as an item)
        """
        raw = self.run(Invocation.work_item("show", "--id", str(item_id), "-o", "json"))
        return raw, decode_work_item(raw)

    def require_work_item(self, item_id: str) -> WorkItem:
        """Fetch a work item, raising WorkItemError when it cannot be decoded."""
        _, item = self.show_work_item(item_id)
        if item is None:
            raise WorkItemError(f"unable to inspect work item {item_id}")
        return item

    def update_work_item_fields(self, item_id: str, fields: Mapping[str, str]) -> bytes:
        args = ["--id", str(item_id), *_field_args(fields), "-o", "json"]
        return self.run(Invocation.work_item("update", *args))

    def create_work_item(
        self, work_item_type: str, title: str, fields: Optional[Mapping[str, str]] = None
    ) -> bytes:
        args = ["--type", work_item_type, "--title", title, *_field_args(fields or {}), "-o", "json"]
        return self.run(Invocation.work_item("create", *args))

    def add_work_item_relation(self, item_id: str, relation_type: str, target_id: str) -> bytes:
        """Link ``item_id`` to ``target_id`` with ``relation_type`` (e.g. parent)."""
        return self.run(
            Invocation.work_item(
                "relation",
                "--id",
                str(item_id),
                "--relation-type",
                relation_type,
                "--target-id",
                str(target_id),
                "-o",
                "json",
                subverb="add",
            )
        )

    def delete_work_item(self, item_id: str) -> bytes:
        return self.run(
            Invocation.work_item("delete", "--id", str(item_id), "--yes", "-o", "json")
        )

    # ------------------------------------------------------------------
    # Repositories
    # ------------------------------------------------------------------

    def list_repos(self) -> List[Repo]:
        """Return the repositories of the default project, in az order.

        Raises:
            RepositoryError: If the output is not a list of repositories
        """
        out = self.run(Invocation.other("repos", "list", "-o", "json"))
        try:
            return _REPOS.validate_json(out or b"[]")
        except ValidationError as e:
            raise RepositoryError(f"unexpected repos response: {e}") from e

    def create_repo(self, name: str) -> Repo:
        """Create a repository named ``name`` in the default project.

        Raises:
            RepositoryError: If az does not return the new repository
        """
        out = self.run(Invocation.other("repos", "create", "--name", name, "-o", "json"))
        try:
            repo = Repo.model_validate_json(out)
        except ValidationError as e:
            raise RepositoryError(f"unexpected repos create output: {e}") from e
        if not repo.name:
            raise RepositoryError("unexpected repos create output")
        return repo

    def delete_repo(self, repo_id: str) -> bytes:
        """Delete a repository by ID; az's own prompt is always suppressed."""
        return self.run(Invocation.other("repos", "delete", "--id", repo_id, "--yes"))

    # ------------------------------------------------------------------
    # DevOps defaults and board layout
    # ------------------------------------------------------------------

    def rest_get(self, url: str) -> bytes:
        """Perform an authenticated GET through az rest."""
        return self.run(Invocation.rest("get", url))

    def get_devops_defaults(self) -> DevOpsDefaults:
        """Resolve the default organization, project and the project's default team.

        Raises:
            ConfigurationError: If no default project is configured or the
                default team cannot be resolved
        """
        out = self.run(Invocation.other("devops", "configure", "-l", "-o", "json"))
        try:
            defaults = json.loads(out or b"{}").get("defaults") or {}
        except (json.JSONDecodeError, AttributeError):
            defaults = {}
        if not isinstance(defaults, dict):
            defaults = {}
        organization = defaults.get("organization", "") or ""
        project = defaults.get("project", "") or ""
        if not project:
            raise ConfigurationError(
                "az devops default project not set; run "
                "'az devops configure --defaults project=<name> organization=<url>'"
            )

        project_json = self.run(
            Invocation.other("devops", "project", "show", "--project", project, "-o", "json")
        )
        try:
            team = json.loads(project_json)["defaultTeam"]["name"]
        except (json.JSONDecodeError, KeyError, TypeError):
            team = ""
        if not team:
            raise ConfigurationError(f"unable to resolve default team for project {project!r}")

        return DevOpsDefaults(organization=organization, project=project, team=team)

    def board_columns_for_type(self, work_item_type: str) -> List[BoardColumn]:
        """Return the ordered columns of the first team board that maps ``work_item_type``.

        Raises:
            WorkItemError: If no board of the default team maps the type
        """
        defaults = self.get_devops_defaults()
        base = f"{defaults.organization.rstrip('/')}/{defaults.project}/{defaults.team}"

        boards_raw = self.rest_get(f"{base}/_apis/work/boards?api-version={BOARDS_API_VERSION}")
        try:
            boards = _BoardsList.model_validate_json(boards_raw)
        except ValidationError as e:
            raise WorkItemError(f"unexpected boards response: {e}") from e

        for board in boards.value:
            columns_raw = self.rest_get(
                f"{base}/_apis/work/boards/{board.id}/columns?api-version={BOARDS_API_VERSION}"
            )
            try:
                columns = _ColumnsList.model_validate_json(columns_raw)
            except ValidationError as e:
                logger.debug("Skipping board %s: unexpected columns response: %s", board.name, e)
                continue
            if any(work_item_type in column.state_mappings for column in columns.value):
                return columns.value

        raise WorkItemError(
            f"no board columns found for type {work_item_type!r}; "
            "ensure the default team board includes this type"
        )


def build_client(
    config: AzbConfig,
    executor: Optional[CommandExecutor] = None,
    prompter: Optional[Prompter] = None,
) -> BoardsClient:
    """Create a BoardsClient whose gate follows ``config``.

    Args:
        config: Startup configuration (confirm mode, silent toggle)
        executor: Executor to use; defaults to running the real az CLI
        prompter: Confirmation prompt; defaults to a terminal y/N prompt
    """
    gate = CommandGate(
        mode=config.confirm_mode,
        silent=config.silent,
        executor=executor,
        prompter=prompter,
    )
    return BoardsClient(gate)
