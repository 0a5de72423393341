"""
Test fixtures package for vsswriters tests.

This package provides reusable mock classes and sample command output
for testing the parser, runners, and collector.
"""

from tests.fixtures.mock_logger import MockLogger
from tests.fixtures.mock_runner import MockCommandRunner
from tests.fixtures.sample_data import (
    BANNER,
    SAMPLE_WRITERS,
    SAMPLE_HOSTS,
    TEST_WRITER_BLOCK,
    make_block,
    make_output,
    make_output_lines,
    writers_named,
)

__all__ = [
    # Mock classes
    'MockLogger',
    'MockCommandRunner',
    # Sample data
    'BANNER',
    'SAMPLE_WRITERS',
    'SAMPLE_HOSTS',
    'TEST_WRITER_BLOCK',
    'make_block',
    'make_output',
    'make_output_lines',
    'writers_named',
]
