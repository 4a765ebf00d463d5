"""Tests for invocation construction and mutation classification."""

import pytest

from azb.core.invocation import (
    Invocation,
    OtherCall,
    RemoteCall,
    WorkItemOp,
    is_mutating,
)


class TestConstructors:
    """Test typed invocation builders."""

    def test_rest(self):
        """Test az rest invocations carry their method."""
        inv = Invocation.rest("get", "https://example/api")
        assert inv.argv == ("rest", "--method", "get", "--url", "https://example/api")
        assert inv.kind == RemoteCall("get")

    def test_work_item(self):
        """Test work item verbs."""
        inv = Invocation.work_item("update", "--id", "5")
        assert inv.argv == ("boards", "work-item", "update", "--id", "5")
        assert inv.kind == WorkItemOp("update")

    def test_work_item_relation(self):
        """Test relation subverbs follow the verb."""
        inv = Invocation.work_item("relation", "--id", "5", subverb="add")
        assert inv.argv[:4] == ("boards", "work-item", "relation", "add")
        assert inv.kind == WorkItemOp("relation", "add")

    def test_other(self):
        inv = Invocation.other("boards", "query", "--wiql", "SELECT 1")
        assert inv.kind == OtherCall()

    def test_command_line_quotes_arguments(self):
        """Test the echoed command line is shell-quoted."""
        inv = Invocation.other("boards", "query", "--wiql", "SELECT [System.Id]")
        assert inv.command_line() == "az boards query --wiql 'SELECT [System.Id]'"
        assert str(inv) == inv.command_line()


class TestFromArgv:
    """Test structural classification of raw argument vectors."""

    def test_rest_with_method(self):
        inv = Invocation.from_argv(["rest", "--method", "POST", "--url", "u"])
        assert inv.kind == RemoteCall("POST")

    def test_rest_without_method(self):
        assert Invocation.from_argv(["rest", "--url", "u"]).kind == RemoteCall(None)

    def test_work_item_with_relation(self):
        inv = Invocation.from_argv(["boards", "work-item", "relation", "add", "--id", "1"])
        assert inv.kind == WorkItemOp("relation", "add")

    def test_relation_without_subverb(self):
        inv = Invocation.from_argv(["boards", "work-item", "relation"])
        assert inv.kind == WorkItemOp("relation", None)

    def test_empty_and_other(self):
        assert Invocation.from_argv([]).kind == OtherCall()
        assert Invocation.from_argv(["devops", "configure", "-l"]).kind == OtherCall()


class TestIsMutating:
    """Test the mutation classifier."""

    @pytest.mark.parametrize(
        "kind, expected",
        [
            (RemoteCall("get"), False),
            (RemoteCall("GET"), False),
            (RemoteCall("post"), True),
            (RemoteCall("patch"), True),
            (RemoteCall(None), True),
            (WorkItemOp("show"), False),
            (WorkItemOp("create"), True),
            (WorkItemOp("update"), True),
            (WorkItemOp("Delete"), True),
            (WorkItemOp("relation", "add"), True),
            (WorkItemOp("relation", "remove"), True),
            (WorkItemOp("relation", "delete"), True),
            (WorkItemOp("relation", "list-type"), False),
            (WorkItemOp("relation", None), False),
            (OtherCall(), False),
        ],
    )
    def test_classification(self, kind, expected):
        assert is_mutating(kind) is expected

    def test_property_matches_function(self):
        inv = Invocation.work_item("delete", "--id", "3", "--yes")
        assert inv.is_mutating is True
