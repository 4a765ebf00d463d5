"""Confirmation gate in front of the command executor."""

import logging
from typing import Callable, Optional

import typer

from azb.core.confirm import ConfirmMode, should_confirm
from azb.core.errors import CancelledError
from azb.core.executor import CommandExecutor, SubprocessExecutor
from azb.core.invocation import AZ_PROGRAM, Invocation

logger = logging.getLogger(__name__)

Prompter = Callable[[str], bool]
Echo = Callable[[str], None]


def prompt_confirmation(command_line: str) -> bool:
    """Ask on the terminal whether ``command_line`` may run. Defaults to no."""
    return typer.confirm(f"Run this command? {command_line}", default=False, err=True)


def echo_command(command_line: str) -> None:
    typer.echo(command_line, err=True)


class CommandGate:
    """Route every invocation through echo, confirmation and the executor.

    Attributes:
        mode: Confirmation policy consulted once per invocation
        silent: When True, the command line is not echoed before dispatch
        executor: The executor that actually runs az
    """

    def __init__(
        self,
        mode: ConfirmMode = ConfirmMode.MUTATIONS,
        silent: bool = False,
        executor: Optional[CommandExecutor] = None,
        prompter: Optional[Prompter] = None,
        echo: Optional[Echo] = None,
        program: str = AZ_PROGRAM,
    ) -> None:
        self.mode = mode
        self.silent = silent
        self.executor = executor if executor is not None else SubprocessExecutor(program)
        self.prompter = prompter or prompt_confirmation
        self.echo = echo or echo_command
        self.program = program

    def run(self, invocation: Invocation) -> bytes:
        """Echo, confirm if required, then execute ``invocation``.

        Returns:
            Raw stdout bytes from the executor

        Raises:
            CancelledError: If the user declines or interrupts the prompt
            ExecutionFailure: If the executor fails
        """
        command_line = invocation.command_line(self.program)
        if not self.silent:
            self.echo(command_line)

        if should_confirm(invocation, self.mode):
            try:
                proceed = self.prompter(command_line)
            except (typer.Abort, KeyboardInterrupt, EOFError):
                logger.info("Confirmation interrupted: %s", command_line)
                raise CancelledError(command_line)
            if not proceed:
                logger.info("Command declined: %s", command_line)
                raise CancelledError(command_line)

        logger.debug("Dispatching: %s", command_line)
        return self.executor.execute(invocation.argv)
