"""Tests for the confirmation gate."""

from unittest.mock import Mock

import pytest
import typer

from azb.core.confirm import ConfirmMode
from azb.core.errors import CancelledError, ExecutionFailure
from azb.core.gate import CommandGate
from azb.core.invocation import Invocation

UPDATE = Invocation.work_item("update", "--id", "7", "--fields", "System.State=Active")
SHOW = Invocation.work_item("show", "--id", "7")


@pytest.fixture
def executor():
    """Create a mock executor returning fixed output."""
    mock = Mock()
    mock.execute.return_value = b'{"id": 7}'
    return mock


class TestCommandGate:
    """Test echo, confirmation and dispatch."""

    def test_echoes_then_executes(self, executor):
        """Test the command line is echoed and the argv dispatched."""
        echo = Mock()
        gate = CommandGate(mode=ConfirmMode.NEVER, executor=executor, echo=echo)

        assert gate.run(SHOW) == b'{"id": 7}'
        echo.assert_called_once_with("az boards work-item show --id 7")
        executor.execute.assert_called_once_with(SHOW.argv)

    def test_silent_skips_echo(self, executor):
        echo = Mock()
        gate = CommandGate(mode=ConfirmMode.NEVER, silent=True, executor=executor, echo=echo)
        gate.run(SHOW)
        echo.assert_not_called()

    def test_read_is_not_confirmed_under_mutations(self, executor):
        """Test reads run without a prompt in the default mode."""
        prompter = Mock(return_value=False)
        gate = CommandGate(executor=executor, prompter=prompter, silent=True)
        gate.run(SHOW)
        prompter.assert_not_called()
        executor.execute.assert_called_once()

    def test_mutation_confirmed(self, executor):
        """Test an approved mutation runs once."""
        prompter = Mock(return_value=True)
        gate = CommandGate(executor=executor, prompter=prompter, silent=True)
        gate.run(UPDATE)
        prompter.assert_called_once_with(UPDATE.command_line())
        executor.execute.assert_called_once_with(UPDATE.argv)

    def test_declined_mutation_is_cancelled(self, executor):
        """Test declining raises CancelledError and never executes."""
        gate = CommandGate(executor=executor, prompter=Mock(return_value=False), silent=True)
        with pytest.raises(CancelledError) as exc_info:
            gate.run(UPDATE)
        assert "update" in exc_info.value.command
        executor.execute.assert_not_called()

    @pytest.mark.parametrize("interrupt", [typer.Abort(), KeyboardInterrupt(), EOFError()])
    def test_interrupted_prompt_is_cancelled(self, executor, interrupt):
        """Test an interrupted prompt counts as a decline."""
        gate = CommandGate(executor=executor, prompter=Mock(side_effect=interrupt), silent=True)
        with pytest.raises(CancelledError):
            gate.run(UPDATE)
        executor.execute.assert_not_called()

    def test_always_mode_confirms_reads(self, executor):
        prompter = Mock(return_value=True)
        gate = CommandGate(mode=ConfirmMode.ALWAYS, executor=executor, prompter=prompter, silent=True)
        gate.run(SHOW)
        prompter.assert_called_once()

    def test_execution_failure_propagates(self, executor):
        """Test executor failures reach the caller unchanged."""
        failure = ExecutionFailure(SHOW.argv, "exit status 1", stderr="boom")
        executor.execute.side_effect = failure
        gate = CommandGate(mode=ConfirmMode.NEVER, executor=executor, silent=True)
        with pytest.raises(ExecutionFailure) as exc_info:
            gate.run(SHOW)
        assert exc_info.value is failure
