"""
vsswriters - collect snapshot writer state from a fleet of hosts.

The diagnostic command is run on each host (locally or over SSH), its
output is parsed into WriterRecords, and the records from all hosts are
returned together with the hosts that could not be collected.
"""

from vsswriters.config import VERSION
from vsswriters.records import WriterRecord
from vsswriters.parser import BlockParser, parse_writer_output
from vsswriters.runner import HostCommandRunner, StaticCommandRunner
from vsswriters.collector import WriterCollector
from vsswriters.interfaces import CollectionResult, HostResult, RunResult
from vsswriters.errors import ParseError, ExecutionFailure, HostUnreachableError

__version__ = VERSION

__all__ = [
    'VERSION',
    'WriterRecord',
    'BlockParser',
    'parse_writer_output',
    'HostCommandRunner',
    'StaticCommandRunner',
    'WriterCollector',
    'CollectionResult',
    'HostResult',
    'RunResult',
    'ParseError',
    'ExecutionFailure',
    'HostUnreachableError',
]
