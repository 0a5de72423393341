"""
Collector interface definitions for vsswriters.

This module defines the result containers shared by collector
implementations and the abstract collector contract.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from vsswriters.errors import ParseError
from vsswriters.records import WriterRecord


def utc_timestamp() -> str:
    return time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime())


@dataclass(frozen=True)
class HostResult:
    """Outcome of collecting from one host.

    Attributes:
        host: The host the result belongs to.
        records: Records parsed from this host's output, tagged with ``host``.
        error: Failure message when the host could not be collected.
        parse_errors: Malformed blocks that were skipped.
        method: How the host was reached, when that was determined.
    """
    host: str
    records: Tuple[WriterRecord, ...] = ()
    error: Optional[str] = None
    parse_errors: Tuple[ParseError, ...] = ()
    method: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CollectionResult:
    """Result of collecting writer state from a set of hosts.

    Attributes:
        records: Records from all successful hosts, in host order then
            block order.
        failures: ``(host, message)`` pairs, one per host-list entry that
            produced nothing, in host order.
        parse_errors: Malformed blocks reported across all hosts.
        hosts: Hosts that were processed, in order.
        collection_method: How hosts were reached ('ssh', 'local', 'mixed').
            Derived from the host results as they are added.
        timestamp: ISO timestamp when collection finished.
    """
    records: List[WriterRecord] = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)
    parse_errors: List[ParseError] = field(default_factory=list)
    hosts: List[str] = field(default_factory=list)
    collection_method: str = "none"
    timestamp: Optional[str] = None

    @property
    def success(self) -> bool:
        """True when every host returned output."""
        return not self.failures

    @property
    def complete(self) -> bool:
        """True when every host returned output and no block was skipped."""
        return not self.failures and not self.parse_errors

    @property
    def warnings(self) -> List[str]:
        """Everything that was skipped, as human-readable messages."""
        messages = [f"{host}: {error}" for host, error in self.failures]
        messages.extend(error.error.message for error in self.parse_errors)
        return messages

    @property
    def failed_hosts(self) -> List[str]:
        return [host for host, _ in self.failures]

    def add(self, host_result: HostResult) -> None:
        """Append one host's outcome. Only successful hosts contribute records."""
        self.hosts.append(host_result.host)
        self.parse_errors.extend(host_result.parse_errors)
        if host_result.ok:
            self.records.extend(host_result.records)
        else:
            self.failures.append((host_result.host, host_result.error))
        if host_result.method:
            self._merge_method(host_result.method)

    def _merge_method(self, method: str) -> None:
        if self.collection_method == 'none':
            self.collection_method = method
        elif self.collection_method != method:
            self.collection_method = 'mixed'

    def records_for(self, host: str) -> List[WriterRecord]:
        return [r for r in self.records if r.computer_name == host]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            'timestamp': self.timestamp,
            'collection_method': self.collection_method,
            'hosts': list(self.hosts),
            'records': [r.to_dict() for r in self.records],
            'failures': [{'host': host, 'error': error} for host, error in self.failures],
            'warnings': self.warnings,
        }


class WriterCollectorInterface(ABC):
    """Interface for writer state collectors.

    A collector drives a command runner over a list of hosts, parses each
    host's output independently, and returns one combined result. A failure
    on one host must never stop collection from the others.
    """

    @abstractmethod
    def collect(self, hosts: Optional[List[str]] = None) -> CollectionResult:
        """Collect writer state from all specified hosts.

        Args:
            hosts: Hostnames or IP addresses. Defaults to the local host.

        Returns:
            CollectionResult with records from every reachable host.
        """
        pass

    @abstractmethod
    def collect_local(self) -> CollectionResult:
        """Collect writer state from the local host only."""
        pass
