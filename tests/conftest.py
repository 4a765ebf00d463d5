"""Shared fixtures: a scripted az executor and clients built on it."""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pytest

from azb.core.client import BoardsClient
from azb.core.confirm import ConfirmMode
from azb.core.errors import ExecutionFailure
from azb.core.executor import CallableExecutor
from azb.core.gate import CommandGate
from azb.core.utils import LOGGER_NAME

KANBAN_FIELD = "WEF_6CB9_Kanban.Column"


class FakeAz:
    """Scripted stand-in for the az CLI.

    Responses are registered with ``on``; the first registration whose
    tokens all occur in the argument vector answers the call. A token
    matches an argument that equals it or contains it, so WIQL fragments
    can be used. Every call is recorded in ``calls``.
    """

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self._responses: List[Tuple[Tuple[str, ...], Any, Optional[str]]] = []

    def on(self, *tokens: str, output: Union[bytes, str, dict, list] = b"", error: Optional[str] = None):
        if isinstance(output, (dict, list)):
            output = json.dumps(output)
        self._responses.append((tokens, output, error))
        return self

    def __call__(self, argv: Sequence[str]) -> Union[bytes, str]:
        self.calls.append(list(argv))
        for tokens, output, error in self._responses:
            if all(any(token == arg or token in arg for arg in argv) for token in tokens):
                if error is not None:
                    raise ExecutionFailure(argv, "exit status 1", stderr=error, returncode=1)
                return output
        raise AssertionError(f"unexpected az call: {list(argv)}")

    def calls_with(self, *tokens: str) -> List[List[str]]:
        return [
            call
            for call in self.calls
            if all(any(token == arg or token in arg for arg in call) for token in tokens)
        ]


def work_item(item_id: int, **fields: Any) -> Dict[str, Any]:
    """Build a work item payload; keyword names map to System.* fields."""
    names = {
        "title": "System.Title",
        "state": "System.State",
        "type": "System.WorkItemType",
        "assigned_to": "System.AssignedTo",
        "column": KANBAN_FIELD,
    }
    return {
        "id": item_id,
        "rev": 1,
        "fields": {names.get(key, key): value for key, value in fields.items()},
        "url": f"https://dev.azure.com/org/_apis/wit/workItems/{item_id}",
    }


@pytest.fixture
def fake_az():
    """Create an empty scripted az executor."""
    return FakeAz()


@pytest.fixture
def client(fake_az):
    """Create a BoardsClient that never prompts or echoes and runs fake_az."""
    gate = CommandGate(mode=ConfirmMode.NEVER, silent=True, executor=CallableExecutor(fake_az))
    return BoardsClient(gate)


@pytest.fixture
def make_item():
    """Expose the work item payload builder to tests."""
    return work_item


@pytest.fixture(autouse=True)
def reset_azb_logger():
    """Close and drop handlers that setup_logger attached during a test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
