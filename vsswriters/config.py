"""
Configuration constants for vsswriters.

Everything the collector, parser, and CLI need to agree on lives here:
the diagnostic command, the fixed layout of its text output, connection
defaults, and process exit codes.
"""

import enum

VERSION = "0.3.0"

# The diagnostic command and its output layout. The tool prints a banner,
# then one fixed-size block per writer, then a trailing blank line.
DIAGNOSTIC_COMMAND = "vssadmin list writers"
BANNER_LINE_COUNT = 3
TRAILER_LINE_COUNT = 1
BLOCK_LINE_COUNT = 6

# Positional markers inside a block
NAME_QUOTE = "'"
ID_OPEN, ID_CLOSE = "{", "}"
STATE_OPEN, STATE_CLOSE = "[", "]"
LABEL_SEPARATOR = ":"

# Host handling
LOCALHOST_IDENTIFIERS = ('localhost', '127.0.0.1', '::1', '.')
DEFAULT_SSH_TIMEOUT = 60
SSH_TIMEOUT_BUFFER = 10
DEFAULT_MAX_WORKERS = 1
MAX_WORKERS_LIMIT = 64

RECORD_FIELDS = (
    'ComputerName',
    'WriterName',
    'WriterId',
    'WriterInstanceId',
    'StateCode',
    'StateDescription',
    'LastError',
)


class EXIT_CODE(enum.IntEnum):
    SUCCESS = 0
    PARTIAL = 1
    INVALID_ARGUMENTS = 2
    FAILURE = 3
    INTERRUPTED = 130

    def __str__(self):
        return f"{self.name} ({self.value})"
