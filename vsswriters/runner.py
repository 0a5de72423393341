"""
Command runners that execute the diagnostic command on a host.

HostCommandRunner runs the command directly when the target is the local
machine and over SSH otherwise. StaticCommandRunner serves captured output
and is used for offline replays.
"""

import shlex
import shutil
import socket
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Union

from vsswriters.config import (
    DIAGNOSTIC_COMMAND,
    DEFAULT_SSH_TIMEOUT,
    SSH_TIMEOUT_BUFFER,
    LOCALHOST_IDENTIFIERS,
)
from vsswriters.error_messages import format_error
from vsswriters.errors import ErrorCode, ExecutionFailure, HostUnreachableError
from vsswriters.interfaces.runner import CommandRunnerInterface, RunResult


# =============================================================================
# Localhost Detection
# =============================================================================

def _is_localhost(hostname: str) -> bool:
    """Check if hostname refers to local machine.

    Args:
        hostname: The hostname to check.

    Returns:
        True if hostname refers to localhost, False otherwise.
    """
    hostname_lower = hostname.lower()
    if hostname_lower in LOCALHOST_IDENTIFIERS:
        return True
    try:
        local_hostname = socket.gethostname()
        if hostname_lower == local_hostname.lower():
            return True
        local_fqdn = socket.getfqdn()
        if hostname_lower == local_fqdn.lower():
            return True
    except OSError:
        pass
    return False


def local_host_identity() -> str:
    """Return the name the local machine reports for itself."""
    return socket.gethostname()


# =============================================================================
# SSH / Local Runner
# =============================================================================

class HostCommandRunner(CommandRunnerInterface):
    """Runs the diagnostic command locally or over SSH.

    For the local host the command is executed directly, avoiding SSH
    overhead and configuration requirements.

    Attributes:
        command: The diagnostic command line.
        logger: Logger instance for output.
        ssh_username: Optional SSH username (defaults to current user).
        timeout: Timeout in seconds for SSH connections.
    """

    def __init__(
        self,
        logger,
        command: str = DIAGNOSTIC_COMMAND,
        ssh_username: Optional[str] = None,
        timeout_seconds: int = DEFAULT_SSH_TIMEOUT,
    ):
        """Initialize the runner.

        Args:
            logger: Logger instance for messages.
            command: Diagnostic command to run on each host.
            ssh_username: Optional SSH username. If not provided, uses current user.
            timeout_seconds: SSH connect timeout; the whole call is bounded by
                this plus a small buffer.
        """
        self.logger = logger
        self.command = command
        self.ssh_username = ssh_username
        self.timeout = timeout_seconds

    def _build_ssh_command(self, hostname: str, remote_cmd: str) -> List[str]:
        """Build SSH command with proper options for automation."""
        cmd = [
            'ssh',
            '-o', 'BatchMode=yes',
            '-o', f'ConnectTimeout={self.timeout}',
            '-o', 'StrictHostKeyChecking=accept-new',
        ]
        if self.ssh_username:
            cmd.extend(['-l', self.ssh_username])
        cmd.extend([hostname, remote_cmd])
        return cmd

    def _build_command(self, hostname: str) -> List[str]:
        if _is_localhost(hostname):
            return shlex.split(self.command)
        return self._build_ssh_command(hostname, self.command)

    def _execute(self, hostname: str) -> str:
        """Run the command for one host and return its stdout.

        Raises:
            ExecutionFailure: If the command could not be run or exited non-zero.
        """
        cmd = self._build_command(hostname)
        self.logger.debug(f'Running {cmd} for {hostname}')

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors='replace',
                timeout=self.timeout + SSH_TIMEOUT_BUFFER
            )
        except subprocess.TimeoutExpired as e:
            raise ExecutionFailure(
                format_error('COMMAND_TIMEOUT', host=hostname, timeout=self.timeout),
                host=hostname, command=self.command,
                code=ErrorCode.COMMAND_TIMEOUT
            ) from e
        except FileNotFoundError as e:
            raise ExecutionFailure(
                f'Executable not found: {cmd[0]}',
                host=hostname, command=self.command,
                code=ErrorCode.COMMAND_NOT_FOUND
            ) from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            if result.returncode == 255 and cmd[0] == 'ssh':
                raise HostUnreachableError(format_error('HOST_UNREACHABLE', host=hostname),
                                           host=hostname, stderr=stderr)
            raise ExecutionFailure(
                format_error('COMMAND_FAILED', host=hostname,
                             exit_code=result.returncode, command=self.command),
                host=hostname, command=self.command,
                exit_code=result.returncode, stderr=stderr
            )

        return result.stdout

    def run(self, host: str) -> RunResult:
        """Run the diagnostic command on a single host.

        Returns:
            RunResult with the output lines, or a failure carrying the cause.
        """
        try:
            stdout = self._execute(host)
        except ExecutionFailure as e:
            self.logger.debug(f'Command on {host} failed: {e.error.message}')
            message = e.error.message
            stderr = e.error.context.get('stderr')
            if stderr:
                message = f'{message}\nError output: {stderr}'
            return RunResult.failure(host, message, exit_code=e.error.context.get('exit_code'))
        except Exception as e:
            self.logger.debug(f'Command on {host} failed: {e}')
            return RunResult.failure(host, str(e))

        result = RunResult.success(host, stdout)
        self.logger.debug(f'Received {len(result.lines)} lines from {host}')
        return result

    def is_available(self) -> bool:
        """Check if SSH is available for reaching remote hosts."""
        return shutil.which('ssh') is not None

    def get_execution_method(self, host: str) -> str:
        return 'local' if _is_localhost(host) else 'ssh'


# =============================================================================
# Replay Runner
# =============================================================================

class StaticCommandRunner(CommandRunnerInterface):
    """Serves previously captured command output instead of running anything.

    Attributes:
        outputs: Captured stdout text (or an exception to report as a
            failure) by host.
    """

    def __init__(self, outputs: Dict[str, Union[str, Exception]], logger=None):
        self.outputs = dict(outputs)
        self.logger = logger
        self.calls: List[str] = []

    @classmethod
    def from_files(cls, files: Dict[str, Union[str, Path]], logger=None) -> 'StaticCommandRunner':
        """Build a runner from ``{host: path_to_captured_output}``.

        Unreadable files become failures for their host rather than errors.
        """
        outputs: Dict[str, Union[str, Exception]] = {}
        for host, path in files.items():
            try:
                outputs[host] = Path(path).read_text(errors='replace')
            except OSError as e:
                outputs[host] = e
        return cls(outputs, logger=logger)

    def run(self, host: str) -> RunResult:
        self.calls.append(host)
        output = self.outputs.get(host)
        if output is None:
            return RunResult.failure(host, f'No captured output for {host}')
        if isinstance(output, Exception):
            return RunResult.failure(host, str(output))
        if self.logger:
            self.logger.debug(f'Replaying captured output for {host}')
        return RunResult.success(host, output)

    def is_available(self) -> bool:
        return True

    def get_execution_method(self, host: str) -> str:
        return 'replay'
