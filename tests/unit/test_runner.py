"""Unit tests for the command runners."""

import subprocess
import pytest
from unittest.mock import MagicMock, patch

from vsswriters.config import DIAGNOSTIC_COMMAND
from vsswriters.error_messages import format_error
from vsswriters.errors import ExecutionFailure
from vsswriters.interfaces.runner import RunResult
from vsswriters.runner import (
    HostCommandRunner,
    StaticCommandRunner,
    _is_localhost,
    local_host_identity,
)


def _completed(returncode=0, stdout='', stderr=''):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestIsLocalhost:
    """Tests for _is_localhost function."""

    @pytest.mark.parametrize("hostname", ['localhost', 'LOCALHOST', '127.0.0.1', '::1', '.'])
    def test_known_identifiers(self, hostname):
        assert _is_localhost(hostname) is True

    def test_matches_hostname(self):
        with patch('socket.gethostname', return_value='winhost01'):
            assert _is_localhost('WinHost01') is True

    def test_matches_fqdn(self):
        with patch('socket.gethostname', return_value='winhost01'), \
                patch('socket.getfqdn', return_value='winhost01.corp.example'):
            assert _is_localhost('winhost01.corp.example') is True

    def test_remote_host(self):
        with patch('socket.gethostname', return_value='winhost01'), \
                patch('socket.getfqdn', return_value='winhost01.corp.example'):
            assert _is_localhost('node7') is False

    def test_socket_error_means_remote(self):
        with patch('socket.gethostname', side_effect=OSError("no name")):
            assert _is_localhost('node7') is False

    def test_local_host_identity(self):
        with patch('socket.gethostname', return_value='winhost01'):
            assert local_host_identity() == 'winhost01'


class TestHostCommandRunnerCommands:
    """Tests for command construction."""

    def test_default_command(self, mock_logger):
        assert HostCommandRunner(mock_logger).command == DIAGNOSTIC_COMMAND

    def test_ssh_command_options(self, mock_logger):
        runner = HostCommandRunner(mock_logger, timeout_seconds=15)
        cmd = runner._build_ssh_command('node1', 'vssadmin list writers')

        assert cmd[0] == 'ssh'
        assert 'BatchMode=yes' in cmd
        assert 'ConnectTimeout=15' in cmd
        assert 'StrictHostKeyChecking=accept-new' in cmd
        assert cmd[-2:] == ['node1', 'vssadmin list writers']
        assert '-l' not in cmd

    def test_ssh_command_with_username(self, mock_logger):
        runner = HostCommandRunner(mock_logger, ssh_username='backup')
        cmd = runner._build_ssh_command('node1', 'vssadmin list writers')
        index = cmd.index('-l')
        assert cmd[index + 1] == 'backup'

    def test_local_host_runs_directly(self, mock_logger):
        runner = HostCommandRunner(mock_logger)
        assert runner._build_command('localhost') == ['vssadmin', 'list', 'writers']
        assert runner.get_execution_method('localhost') == 'local'

    def test_remote_host_uses_ssh(self, mock_logger):
        runner = HostCommandRunner(mock_logger)
        with patch('vsswriters.runner._is_localhost', return_value=False):
            assert runner._build_command('node1')[0] == 'ssh'
            assert runner.get_execution_method('node1') == 'ssh'

    def test_is_available_checks_ssh(self, mock_logger):
        runner = HostCommandRunner(mock_logger)
        with patch('shutil.which', return_value='/usr/bin/ssh'):
            assert runner.is_available() is True
        with patch('shutil.which', return_value=None):
            assert runner.is_available() is False


class TestHostCommandRunnerRun:
    """Tests for HostCommandRunner.run with subprocess mocked."""

    @pytest.fixture
    def runner(self, mock_logger):
        with patch('vsswriters.runner._is_localhost', return_value=False):
            yield HostCommandRunner(mock_logger, timeout_seconds=30)

    def test_success_returns_lines(self, runner, sample_output):
        with patch('subprocess.run', return_value=_completed(stdout=sample_output)) as mock_run:
            result = runner.run('node1')

        assert result.ok
        assert result.host == 'node1'
        assert result.lines == tuple(sample_output.splitlines())
        assert mock_run.call_args[1]['timeout'] == 40
        assert mock_run.call_args[1]['capture_output'] is True

    def test_ssh_connection_failure(self, runner):
        """ssh exit code 255 becomes an unreachable-host failure."""
        with patch('subprocess.run', return_value=_completed(255, stderr='Connection refused')):
            result = runner.run('node1')

        assert not result.ok
        assert result.exit_code == 255
        assert result.error.startswith(format_error('HOST_UNREACHABLE', host='node1'))
        assert result.error.endswith('Error output: Connection refused')

    def test_unreachable_without_stderr(self, runner):
        with patch('subprocess.run', return_value=_completed(255)):
            result = runner.run('node1')
        assert result.error == format_error('HOST_UNREACHABLE', host='node1')
        assert result.error.startswith('Cannot reach host: node1')

    def test_command_failure(self, runner):
        with patch('subprocess.run', return_value=_completed(2, stderr='Access is denied.')):
            result = runner.run('node1')

        assert not result.ok
        assert result.exit_code == 2
        assert result.error.startswith('Diagnostic command failed on node1 with exit code 2.')
        assert 'Command: vssadmin list writers' in result.error
        assert result.error.endswith('Error output: Access is denied.')

    def test_command_failure_without_stderr(self, runner):
        with patch('subprocess.run', return_value=_completed(1)):
            result = runner.run('node1')
        assert result.error == format_error('COMMAND_FAILED', host='node1', exit_code=1,
                                            command=DIAGNOSTIC_COMMAND)

    def test_stderr_kept_in_error_details(self, runner):
        with patch('subprocess.run', return_value=_completed(3, stderr='Access is denied.')):
            with pytest.raises(ExecutionFailure) as exc_info:
                runner._execute('node1')
        assert exc_info.value.error.message == format_error(
            'COMMAND_FAILED', host='node1', exit_code=3, command=DIAGNOSTIC_COMMAND)
        assert 'Error output: Access is denied.' in exc_info.value.error.details

    def test_timeout(self, runner):
        with patch('subprocess.run', side_effect=subprocess.TimeoutExpired(cmd='ssh', timeout=40)):
            result = runner.run('node1')

        assert not result.ok
        assert 'timed out after 30 seconds' in result.error

    def test_missing_executable(self, runner):
        with patch('subprocess.run', side_effect=FileNotFoundError()):
            result = runner.run('node1')
        assert result.error == 'Executable not found: ssh'

    def test_unexpected_exception_becomes_failure(self, runner):
        with patch('subprocess.run', side_effect=PermissionError('denied')):
            result = runner.run('node1')
        assert not result.ok
        assert 'denied' in result.error

    def test_failures_not_logged_as_warnings(self, runner, mock_logger):
        """The collector owns the per-host warning; the runner only logs debug."""
        with patch('subprocess.run', return_value=_completed(255)):
            runner.run('node1')
        mock_logger.warning.assert_not_called()
        mock_logger.debug.assert_called()


class TestStaticCommandRunner:
    """Tests for StaticCommandRunner."""

    def test_replays_output(self, sample_output):
        runner = StaticCommandRunner({'node1': sample_output})
        result = runner.run('node1')
        assert result.ok
        assert result.lines == tuple(sample_output.splitlines())
        assert runner.calls == ['node1']

    def test_missing_host_is_failure(self):
        result = StaticCommandRunner({}).run('node9')
        assert not result.ok
        assert result.error == 'No captured output for node9'

    def test_exception_value_is_failure(self):
        result = StaticCommandRunner({'node1': ConnectionError('refused')}).run('node1')
        assert result.error == 'refused'

    def test_from_files(self, replay_dir, sample_output):
        runner = StaticCommandRunner.from_files({
            'node1': replay_dir / 'node1.txt',
            'node2': str(replay_dir / 'node2.txt'),
            'node3': replay_dir / 'missing.txt',
        })
        assert runner.run('node1').lines == tuple(sample_output.splitlines())
        assert runner.run('node2').ok
        assert not runner.run('node3').ok

    def test_execution_method(self):
        runner = StaticCommandRunner({})
        assert runner.get_execution_method('node1') == 'replay'
        assert runner.is_available() is True

    def test_logs_replay_at_debug(self, sample_output):
        logger = MagicMock()
        StaticCommandRunner({'node1': sample_output}, logger=logger).run('node1')
        logger.debug.assert_called_once()


class TestRunResult:
    """Tests for RunResult."""

    def test_success_splits_lines(self):
        result = RunResult.success('h', "a\r\nb\n")
        assert result.lines == ('a', 'b')
        assert result.ok
        assert result.exit_code == 0

    def test_failure(self):
        result = RunResult.failure('h', 'boom', exit_code=7)
        assert not result.ok
        assert result.lines == ()
        assert result.exit_code == 7
