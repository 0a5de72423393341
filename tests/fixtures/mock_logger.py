"""
Mock logger for testing.

Provides a logger that captures all log calls for verification
without writing to stdout or stderr.
"""

from typing import Dict, List


class MockLogger:
    """
    A mock logger that captures all log messages for testing.

    Attributes:
        messages: Dictionary mapping log level to list of messages.

    Example:
        logger = MockLogger()
        collector = WriterCollector(runner, logger)
        collector.collect(['node1', 'node2'])

        assert logger.count_containing('warning', 'node2') == 1
    """

    # All supported log levels
    LOG_LEVELS = [
        'debug', 'info', 'warning', 'error', 'critical',
        'status', 'verbose', 'verboser', 'ridiculous', 'result'
    ]

    def __init__(self):
        self.messages: Dict[str, List[str]] = {level: [] for level in self.LOG_LEVELS}
        for level in self.LOG_LEVELS:
            setattr(self, level, self._make_log_method(level))

    def _make_log_method(self, level: str):
        def log_method(msg, *args, **kwargs):
            msg = str(msg)
            if args:
                try:
                    msg = msg % args
                except TypeError:
                    pass
            self.messages[level].append(msg)
        return log_method

    def count_containing(self, level: str, substring: str) -> int:
        """Number of messages at ``level`` that contain ``substring``."""
        return sum(1 for msg in self.messages.get(level, []) if substring in msg)

    def has_message(self, level: str, substring: str) -> bool:
        return self.count_containing(level, substring) > 0

    def get_messages(self, level: str) -> List[str]:
        return self.messages.get(level, [])

    def clear(self):
        self.messages = {level: [] for level in self.LOG_LEVELS}
