"""
Interface definitions for vsswriters.

Runner Interfaces:
    - CommandRunnerInterface: Runs the diagnostic command on one host
    - RunResult: Raw output lines or a failure for one host

Collector Interfaces:
    - WriterCollectorInterface: Drives a runner and parser across hosts
    - HostResult: Outcome for a single host
    - CollectionResult: Combined outcome for all hosts
"""

from vsswriters.interfaces.runner import (
    CommandRunnerInterface,
    RunResult,
)

from vsswriters.interfaces.collector import (
    WriterCollectorInterface,
    HostResult,
    CollectionResult,
)

__all__ = [
    # Runner interfaces
    'CommandRunnerInterface',
    'RunResult',
    # Collector interfaces
    'WriterCollectorInterface',
    'HostResult',
    'CollectionResult',
]
