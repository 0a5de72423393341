#!/usr/bin/env python3
"""
vsswriters - Main Entry Point

Collects snapshot writer state from the requested hosts and writes the
records as JSON, with user-friendly error handling.
"""

import json
import signal
import sys
import traceback

from vsswriters.cli_parser import parse_arguments
from vsswriters.collector import WriterCollector
from vsswriters.config import EXIT_CODE
from vsswriters.error_messages import format_error, ErrorFormatter
from vsswriters.errors import ConfigurationError, VSSWritersException
from vsswriters.interfaces.collector import CollectionResult
from vsswriters.progress import progress_context, host_progress_callback, host_done_callback
from vsswriters.runner import HostCommandRunner, StaticCommandRunner
from vsswriters.vsw_logging import DEBUG, setup_logging, apply_logging_options

logger = setup_logging("vsswriters")
error_formatter = ErrorFormatter(use_colors=sys.stderr.isatty())


def signal_handler(sig, frame):
    """Handle signals like SIGINT (Ctrl+C) and SIGTERM."""
    signal_name = signal.Signals(sig).name
    logger.warning(f"Received signal {signal_name} ({sig})")
    logger.info("Exiting due to signal")
    sys.exit(EXIT_CODE.INTERRUPTED)


def build_runner(args):
    """Create the command runner selected by the arguments."""
    if args.replay_files:
        return StaticCommandRunner.from_files(args.replay_files, logger=logger)

    runner = HostCommandRunner(
        logger,
        command=args.command,
        ssh_username=args.ssh_username,
        timeout_seconds=args.timeout,
    )
    hosts = WriterCollector.normalize_hosts(args.hosts)
    if any(runner.get_execution_method(h) == 'ssh' for h in hosts) and not runner.is_available():
        logger.warning("ssh not found in PATH; remote hosts will fail")
    return runner


def run_collection(args) -> CollectionResult:
    """
    Collect writer state for the hosts in args, with a progress display.

    Args:
        args: Parsed command line arguments.

    Returns:
        CollectionResult for all hosts.
    """
    hosts = WriterCollector.normalize_hosts(args.hosts)
    runner = build_runner(args)

    with progress_context("Collecting writer state", total=len(hosts), logger=logger) as (update, set_desc):
        collector = WriterCollector(
            runner,
            logger,
            max_workers=args.max_workers,
            skip_malformed=not args.abort_on_parse_error,
            progress_callback=host_progress_callback(set_desc, hosts, logger=logger),
            result_callback=host_done_callback(update),
        )
        result = collector.collect(hosts)

    return result


def write_results(result: CollectionResult, output_path=None) -> None:
    """Write the collection result as JSON to a file or stdout."""
    payload = json.dumps(result.to_dict(), indent=2)
    if output_path:
        with open(output_path, 'w') as f:
            f.write(payload + "\n")
        logger.status(f"Wrote {len(result.records)} record(s) to {output_path}")
    else:
        sys.stdout.write(payload + "\n")
        sys.stdout.flush()


def exit_code_for(result: CollectionResult) -> EXIT_CODE:
    """Map a collection result to a process exit code."""
    if result.hosts and len(result.failures) == len(result.hosts):
        return EXIT_CODE.FAILURE
    if not result.complete:
        return EXIT_CODE.PARTIAL
    return EXIT_CODE.SUCCESS


def _main_impl(argv=None):
    """
    Main implementation with error handling.

    This is the actual implementation of main(), separated out
    so that main() can wrap it with exception handling.
    """
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    args = parse_arguments(argv, logger=logger)
    apply_logging_options(logger, args)

    result = run_collection(args)
    write_results(result, args.output)

    hosts_ok = len(result.hosts) - len(result.failures)
    logger.result(
        f"{len(result.records)} writer(s) from {hosts_ok}/{len(result.hosts)} host(s)"
        + (f", {len(result.warnings)} warning(s)" if result.warnings else "")
    )
    return exit_code_for(result)


def main(argv=None):
    """
    Main entry point with comprehensive error handling.

    This function wraps _main_impl() to catch and handle all
    exceptions with user-friendly error messages.
    """
    try:
        return _main_impl(argv)

    except ConfigurationError as e:
        logger.error(error_formatter.format_exception(e))
        return EXIT_CODE.INVALID_ARGUMENTS

    except VSSWritersException as e:
        # Catch-all for any other custom exceptions
        logger.error(str(e))
        if e.suggestion:
            logger.info(f"Suggestion: {e.suggestion}")
        return EXIT_CODE.FAILURE

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return EXIT_CODE.INTERRUPTED

    except SystemExit:
        # Re-raise SystemExit to allow clean exits
        raise

    except Exception as e:
        logger.error(format_error('INTERNAL_ERROR', error=str(e)))
        if any(h.level <= DEBUG for h in logger.handlers):
            traceback.print_exc()
        else:
            logger.info("Run with --debug for full stack trace")
        return EXIT_CODE.FAILURE


if __name__ == "__main__":
    sys.exit(main())
