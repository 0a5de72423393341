"""
Multi-host writer state collection.

WriterCollector runs the diagnostic command on every host through a command
runner, parses each host's output on its own, and combines the records into
one CollectionResult. An unreachable host is logged and skipped; it never
stops collection from the remaining hosts.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from vsswriters.config import BLOCK_LINE_COUNT, DEFAULT_MAX_WORKERS
from vsswriters.error_messages import format_error
from vsswriters.errors import ParseError
from vsswriters.interfaces.collector import (
    CollectionResult,
    HostResult,
    WriterCollectorInterface,
    utc_timestamp,
)
from vsswriters.interfaces.runner import CommandRunnerInterface
from vsswriters.parser import BlockParser
from vsswriters.runner import local_host_identity

ProgressCallback = Callable[[int, int], None]
ResultCallback = Callable[[HostResult], None]


class WriterCollector(WriterCollectorInterface):
    """Collects writer state from a list of hosts.

    Hosts are processed in list order. With ``max_workers`` above one the
    runner calls overlap in a thread pool, but each host's output is still
    parsed on its own and results are combined in host order.

    Attributes:
        runner: Runs the diagnostic command on one host.
        logger: Logger instance for output.
        parser: Parser applied to each host's output.
        max_workers: Maximum number of hosts processed at once.
        skip_malformed: Skip malformed blocks (True) or drop the whole host
            on the first malformed block (False).
        progress_callback: Called with ``(index, total)`` before each host.
        result_callback: Called with each HostResult as it is combined into
            the collection result.
    """

    def __init__(
        self,
        runner: CommandRunnerInterface,
        logger,
        parser: Optional[BlockParser] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        skip_malformed: bool = True,
        progress_callback: Optional[ProgressCallback] = None,
        result_callback: Optional[ResultCallback] = None,
    ):
        self.runner = runner
        self.logger = logger
        self.parser = parser or BlockParser()
        self.max_workers = max(1, max_workers)
        self.skip_malformed = skip_malformed
        self.progress_callback = progress_callback
        self.result_callback = result_callback

    @staticmethod
    def normalize_hosts(hosts: Optional[List[str]]) -> List[str]:
        """Strip whitespace and drop empty entries; default to the local host."""
        if hosts is None:
            return [local_host_identity()]
        return [h.strip() for h in hosts if h and h.strip()]

    def _emit_progress(self, index: int, total: int) -> None:
        if self.progress_callback is not None:
            self.progress_callback(index, total)

    def _collect_from_single_host(self, host: str) -> HostResult:
        """Run and parse the diagnostic command for one host.

        The output lines live only in this call, so nothing from one host can
        leak into another host's records.
        """
        try:
            method = self.runner.get_execution_method(host)
            run_result = self.runner.run(host)
        except Exception as e:
            return HostResult(host=host, error=str(e) or e.__class__.__name__)

        if not run_result.ok:
            return HostResult(host=host, error=run_result.error, method=method)

        parse_errors: List[ParseError] = []
        if self.skip_malformed:
            records = self.parser.parse(run_result.lines, on_error=parse_errors.append, host=host)
            tagged = tuple(record.tag(host) for record in records)
            return HostResult(host=host, records=tagged, parse_errors=tuple(parse_errors), method=method)

        try:
            tagged = tuple(record.tag(host) for record in self.parser.parse(run_result.lines, host=host))
        except ParseError as e:
            return HostResult(host=host, error=e.error.message, method=method)
        return HostResult(host=host, records=tagged, method=method)

    def _report_parse_error(self, error: ParseError) -> None:
        if error.marker == ParseError.INCOMPLETE_BLOCK:
            message = format_error('PARSE_INCOMPLETE_BLOCK', host=error.host,
                                   lines=error.line_count, expected=BLOCK_LINE_COUNT)
        else:
            message = format_error('PARSE_MISSING_MARKER', host=error.host,
                                   block_index=error.block_index,
                                   marker=error.marker, field=error.field)
        self.logger.warning(message)

    def _accumulate(self, result: CollectionResult, host_result: HostResult) -> None:
        """Log the outcome for one host and add it to the combined result."""
        for error in host_result.parse_errors:
            self._report_parse_error(error)

        if host_result.ok:
            self.logger.verbose(f'{host_result.host}: {len(host_result.records)} writer(s) collected')
        else:
            self.logger.warning(f'Collection from {host_result.host} failed: {host_result.error}')

        result.add(host_result)
        if self.result_callback is not None:
            self.result_callback(host_result)

    def collect(self, hosts: Optional[List[str]] = None) -> CollectionResult:
        """Collect writer state from all specified hosts.

        Args:
            hosts: Hostnames or IP addresses. Defaults to the local host.

        Returns:
            CollectionResult with records in host order, then block order.
        """
        hosts = self.normalize_hosts(hosts)
        total = len(hosts)
        result = CollectionResult()
        self.logger.debug(f'Starting writer collection on {total} host(s)')

        if self.max_workers == 1 or total <= 1:
            for index, host in enumerate(hosts):
                self._emit_progress(index, total)
                self._accumulate(result, self._collect_from_single_host(host))
        else:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, total)) as executor:
                futures = []
                for index, host in enumerate(hosts):
                    self._emit_progress(index, total)
                    futures.append(executor.submit(self._collect_from_single_host, host))

                # Only this thread touches the combined result
                for future in futures:
                    self._accumulate(result, future.result())

        result.timestamp = utc_timestamp()
        self.logger.debug(
            f'Collected {len(result.records)} record(s) from {total - len(result.failures)}/{total} host(s)'
        )
        return result

    def collect_local(self) -> CollectionResult:
        """Collect writer state from the local host only."""
        return self.collect([local_host_identity()])
