"""
Shared pytest fixtures for vsswriters tests.

These fixtures provide mock loggers, runners, and sample command output
so tests never run the real diagnostic command or open SSH connections.
"""

from argparse import Namespace
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from tests.fixtures import MockLogger, MockCommandRunner, make_output, make_output_lines


# =============================================================================
# Logger Fixtures
# =============================================================================

@pytest.fixture
def mock_logger():
    """
    Create a mock logger that accepts all log calls.

    Usage:
        def test_something(mock_logger):
            some_function(logger=mock_logger)
            mock_logger.warning.assert_called_once()
    """
    logger = MagicMock()
    for level in ['debug', 'info', 'warning', 'error', 'critical',
                  'status', 'verbose', 'verboser', 'ridiculous', 'result']:
        setattr(logger, level, MagicMock())
    return logger


@pytest.fixture
def capturing_logger() -> MockLogger:
    """A MockLogger that records messages by level."""
    return MockLogger()


# =============================================================================
# Sample Output Fixtures
# =============================================================================

@pytest.fixture
def sample_output() -> str:
    """Full command output for three writers."""
    return make_output()


@pytest.fixture
def sample_lines():
    """Full command output for three writers, as lines."""
    return make_output_lines()


@pytest.fixture
def mock_runner(sample_output) -> MockCommandRunner:
    """Runner that returns the sample output for every host."""
    return MockCommandRunner(default_output=sample_output)


@pytest.fixture
def replay_dir(tmp_path, sample_output) -> Path:
    """Directory with captured output files for node1 and node2."""
    (tmp_path / 'node1.txt').write_text(sample_output)
    (tmp_path / 'node2.txt').write_text(sample_output)
    return tmp_path


# =============================================================================
# Args Fixtures (Namespace objects for CLI simulation)
# =============================================================================

@pytest.fixture
def base_args() -> Namespace:
    """Args as produced by parse_arguments with no options given."""
    return Namespace(
        hosts=None,
        command='vssadmin list writers',
        ssh_username=None,
        timeout=60,
        max_workers=1,
        abort_on_parse_error=False,
        replay=None,
        replay_files={},
        output=None,
        config_file=None,
        debug=False,
        verbose=False,
        stream_log_level=None,
    )
