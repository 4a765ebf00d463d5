"""Tests for work item models."""

from azb.core.models import (
    Repo,
    WorkItem,
    assignee_display,
    created_by_display,
    field_string,
    find_kanban_column,
    format_tags,
)


class TestWorkItem:
    """Test WorkItem parsing and accessors."""

    def test_parse_item(self):
        item = WorkItem.model_validate(
            {
                "id": 12,
                "rev": 3,
                "fields": {
                    "System.Title": "Login",
                    "System.State": "Active",
                    "System.WorkItemType": "User Story",
                    "System.AssignedTo": {"displayName": "Ann Lee", "uniqueName": "ann@contoso.com"},
                    "WEF_AB12_Kanban.Column": "In Test",
                    "WEF_AB12_Kanban.Column.Done": False,
                },
                "url": "https://dev.azure.com/contoso/_apis/wit/workItems/12",
            }
        )
        assert item.title == "Login"
        assert item.state == "Active"
        assert item.work_item_type == "User Story"
        assert item.assignee == "Ann Lee"
        assert item.kanban_column == ("WEF_AB12_Kanban.Column", "In Test")

    def test_nulls(self):
        item = WorkItem.model_validate({"id": 1, "fields": None, "url": None})
        assert item.fields == {}
        assert item.url == ""
        assert item.title == ""


class TestFieldHelpers:
    """Test field helper functions."""

    def test_field_string(self):
        assert field_string({"a": "x", "b": 3}, "a") == "x"
        assert field_string({"a": "x", "b": 3}, "b") == ""
        assert field_string(None, "a") == ""

    def test_find_kanban_column_missing(self):
        assert find_kanban_column({"System.State": "New"}) == ("", "")
        assert find_kanban_column(None) == ("", "")

    def test_identity_display(self):
        assert assignee_display({"System.AssignedTo": "dev@contoso.com"}) == "dev@contoso.com"
        assert created_by_display({"System.CreatedBy": {"displayName": "Bo"}}) == "Bo"
        assert created_by_display({}) == ""

    def test_format_tags(self):
        assert format_tags("ui; backend ;") == "ui, backend"
        assert format_tags("  ") == "(none)"


class TestRepo:
    """Test Repo parsing."""

    def test_parse_az_output(self):
        repo = Repo.model_validate(
            {
                "id": "4f1c",
                "name": "web",
                "size": 10240,
                "sshUrl": "git@ssh.dev.azure.com:v3/contoso/Shop/web",
                "remoteUrl": "https://contoso@dev.azure.com/contoso/Shop/_git/web",
                "webUrl": "https://dev.azure.com/contoso/Shop/_git/web",
                "project": {"name": "Shop"},
            }
        )
        assert repo.size == 10240
        assert repo.ssh_url.startswith("git@")
        assert repo.web_url.endswith("/_git/web")

    def test_null_size(self):
        assert Repo.model_validate({"id": "4f1c", "size": None}).size == 0
