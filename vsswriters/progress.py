"""Progress indication utilities using Rich library.

This module provides progress indication utilities that automatically detect
interactive vs non-interactive terminals and adjust behavior accordingly.

In interactive terminals, a Rich progress bar is displayed on stderr.
In non-interactive terminals (CI, logs), status messages are logged instead.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator, Optional, Sequence, Tuple

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

if TYPE_CHECKING:
    from logging import Logger

# Type aliases for yielded functions
UpdateFunc = Callable[..., None]
SetDescriptionFunc = Callable[[str], None]
HostProgressFunc = Callable[[int, int], None]


def is_interactive_terminal() -> bool:
    """Detect if running in an interactive terminal.

    Returns:
        True if output is to an interactive terminal, False otherwise.
    """
    console = Console(stderr=True)
    return console.is_terminal


@contextmanager
def progress_context(
    description: str,
    total: Optional[int] = None,
    logger: Optional["Logger"] = None,
    transient: bool = True,
) -> Iterator[Tuple[UpdateFunc, SetDescriptionFunc]]:
    """Context manager for progress indication with automatic TTY detection.

    Args:
        description: Initial description text for the progress indicator.
        total: Total count for determinate progress. If None, shows an
            indeterminate spinner.
        logger: Logger instance for non-interactive mode status messages.
            If None in non-interactive mode, no output is produced.
        transient: If True, progress is cleared when complete (default True).

    Yields:
        Tuple of (update_func, set_description_func):
            - update_func(advance=1, completed=None): Advances progress
            - set_description_func(desc): Updates description text

    Example:
        >>> with progress_context("Collecting", total=len(hosts)) as (update, set_desc):
        ...     for host in hosts:
        ...         collect(host)
        ...         update()
    """
    if not is_interactive_terminal():
        if logger is not None:
            logger.status(f"{description}...")

        def noop_update(advance: int = 1, completed: Optional[int] = None) -> None:
            pass

        def noop_set_description(desc: str) -> None:
            pass

        yield (noop_update, noop_set_description)
        return

    if total is None:
        columns = [
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
        ]
    else:
        columns = [
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
        ]

    progress = Progress(*columns, transient=transient, console=Console(stderr=True))
    task_id: TaskID = TaskID(0)

    try:
        progress.start()
        task_id = progress.add_task(description, total=total)

        def update_func(advance: int = 1, completed: Optional[int] = None) -> None:
            """Update progress by advancing or setting completed value."""
            if completed is not None:
                progress.update(task_id, completed=completed)
            else:
                progress.update(task_id, advance=advance)

        def set_description_func(desc: str) -> None:
            progress.update(task_id, description=desc)

        yield (update_func, set_description_func)
    finally:
        progress.stop()


def host_progress_callback(
    set_description: SetDescriptionFunc,
    hosts: Sequence[str],
    logger: Optional["Logger"] = None,
) -> HostProgressFunc:
    """Adapt the collector's ``(index, total)`` signal to a progress display.

    Only the description changes here; the bar itself is advanced by
    host_done_callback once a host's result is in, so with several workers
    it does not run ahead of the hosts that actually finished.

    Args:
        set_description: set_description_func yielded by progress_context.
        hosts: The host list being collected, for naming the current host.
        logger: Optional logger; each step is logged at VERBOSE level.

    Returns:
        Callable suitable for WriterCollector's ``progress_callback``.
    """
    def on_progress(index: int, total: int) -> None:
        host = hosts[index] if index < len(hosts) else "?"
        set_description(f"Collecting from {host} ({index + 1}/{total})")
        if logger is not None:
            logger.verbose(f"Host {index + 1}/{total}: {host}")

    return on_progress


def host_done_callback(update: UpdateFunc) -> Callable[[object], None]:
    """Return a WriterCollector ``result_callback`` advancing the bar by one host."""
    def on_result(host_result) -> None:
        update(advance=1)

    return on_result


__all__ = [
    "is_interactive_terminal",
    "progress_context",
    "host_progress_callback",
    "host_done_callback",
]
