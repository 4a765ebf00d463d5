"""Execution boundary for az invocations.

Every outbound call reaches the external az CLI through a CommandExecutor.
The executor is handed to the CommandGate when the client is built, which
makes it the single point where tests and embedding code substitute their
own implementation.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from azb.core.errors import ExecutionFailure
from azb.core.invocation import AZ_PROGRAM

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 120


class CommandExecutor(ABC):
    """Abstract base class for az executors."""

    @abstractmethod
    def execute(self, argv: Sequence[str]) -> bytes:
        """Run az with ``argv`` and return its standard output.

        Args:
            argv: Arguments passed to az, without the program name

        Returns:
            Raw bytes written to stdout

        Raises:
            ExecutionFailure: If the process cannot be started, times out,
                or exits with a non-zero status
        """
        ...


class SubprocessExecutor(CommandExecutor):
    """Run the real az CLI in a subprocess."""

    def __init__(
        self,
        program: str = AZ_PROGRAM,
        timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.program = program
        self.timeout = timeout

    def execute(self, argv: Sequence[str]) -> bytes:
        cmd = [self.program, *argv]
        logger.debug("Executing: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise ExecutionFailure(argv, f"{self.program} CLI not found in PATH: {e}") from e
        except subprocess.TimeoutExpired as e:
            stderr = _decode(e.stderr)
            raise ExecutionFailure(
                argv, f"timed out after {self.timeout} seconds", stderr=stderr
            ) from e
        except OSError as e:
            raise ExecutionFailure(argv, str(e)) from e

        if result.returncode != 0:
            stderr = _decode(result.stderr)
            logger.debug(
                "%s exited with code %d: %s", self.program, result.returncode, stderr
            )
            raise ExecutionFailure(
                argv,
                f"exit status {result.returncode}",
                stderr=stderr,
                returncode=result.returncode,
            )

        return result.stdout or b""


class CallableExecutor(CommandExecutor):
    """Adapt a plain function taking the argument vector into an executor."""

    def __init__(self, func: Callable[[Sequence[str]], bytes]) -> None:
        self.func = func

    def execute(self, argv: Sequence[str]) -> bytes:
        output = self.func(list(argv))
        if isinstance(output, str):
            return output.encode("utf-8")
        return output


def _decode(data) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return str(data)
