"""
Command runner interface definitions for vsswriters.

A command runner executes the diagnostic command against exactly one host
and hands back the raw output. Implementations may run the command locally,
over SSH, or replay output captured earlier.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class RunResult:
    """Outcome of running the diagnostic command on one host.

    Attributes:
        host: The host the command was run against.
        lines: Raw stdout split into lines, banner and trailer included.
            Empty when the run failed.
        error: Description of the failure, or None on success.
        exit_code: Process exit code, when one was obtained.
    """
    host: str
    lines: Tuple[str, ...] = ()
    error: Optional[str] = None
    exit_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, host: str, stdout: str, exit_code: int = 0) -> 'RunResult':
        """Build a successful result from the command's stdout text."""
        return cls(host=host, lines=tuple(stdout.splitlines()), exit_code=exit_code)

    @classmethod
    def failure(cls, host: str, error: str, exit_code: Optional[int] = None) -> 'RunResult':
        return cls(host=host, error=error, exit_code=exit_code)


class CommandRunnerInterface(ABC):
    """Interface for running the diagnostic command on a single host.

    ``run`` must not raise for execution problems (unreachable host,
    authentication failure, non-zero exit, timeout); those are reported
    through a failed RunResult so one bad host cannot abort a collection.

    Example:
        class EchoRunner(CommandRunnerInterface):
            def run(self, host):
                return RunResult.success(host, "banner\\n\\n\\n\\n")

            def is_available(self):
                return True

            def get_execution_method(self, host):
                return "echo"
    """

    @abstractmethod
    def run(self, host: str) -> RunResult:
        """Run the diagnostic command on ``host``.

        Args:
            host: Hostname, IP address, or a local-host identifier.

        Returns:
            RunResult carrying either the output lines or a failure message.
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether this runner can be used on the current machine."""
        pass

    @abstractmethod
    def get_execution_method(self, host: str) -> str:
        """Return how ``host`` would be reached, e.g. 'local' or 'ssh'."""
        pass
