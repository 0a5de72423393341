"""
Parser for the writer listing printed by the diagnostic command.

The command prints a three line banner, then one six line block per
writer, then a trailing blank line::

    vssadmin 1.1 - Volume Shadow Copy Service administrative command-line tool
    (C) Copyright 2001-2013 Microsoft Corp.

    Writer name: 'Task Scheduler Writer'
       Writer Id: {d61d61c8-d73a-4eee-8cdd-f6f9786b7124}
       Writer Instance Id: {1bddd48e-5052-49db-9b07-b96f96727e6b}
       State: [1] Stable
       Last error: No error

Values are located by positional markers (quotes, braces, brackets, the
label colon) rather than by label text, so localized labels still parse.
"""

from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from vsswriters.config import (
    BANNER_LINE_COUNT,
    BLOCK_LINE_COUNT,
    TRAILER_LINE_COUNT,
    NAME_QUOTE,
    ID_OPEN,
    ID_CLOSE,
    STATE_OPEN,
    STATE_CLOSE,
    LABEL_SEPARATOR,
)
from vsswriters.errors import ParseError
from vsswriters.records import WriterRecord

ErrorHandler = Callable[[ParseError], None]


def trim_output(lines: Sequence[str],
                banner: int = BANNER_LINE_COUNT,
                trailer: int = TRAILER_LINE_COUNT) -> List[str]:
    """
    Drop the banner and trailer lines from raw command output.

    Args:
        lines: Raw output lines for one host.
        banner: Number of leading lines to drop.
        trailer: Number of trailing lines to drop.

    Returns:
        The body lines. Empty when the output is no longer than banner
        plus trailer.

    Example:
        >>> trim_output(['a', 'b', 'c', 'x', ''])
        ['x']
    """
    lines = list(lines)
    if len(lines) <= banner + trailer:
        return []
    return lines[banner:len(lines) - trailer]


def split_blocks(body: Sequence[str], size: int = BLOCK_LINE_COUNT) -> Iterator[Tuple[int, List[str]]]:
    """
    Yield ``(block_index, lines)`` for consecutive fixed-size blocks.

    The final block is shorter than ``size`` when the body length is not a
    multiple of it.
    """
    for block_index, start in enumerate(range(0, len(body), size)):
        yield block_index, list(body[start:start + size])


def _between(line: str, opener: str, closer: str, block_index: int, field: str) -> Tuple[str, str]:
    """
    Return the text strictly between ``opener`` and the first ``closer`` after
    it, plus everything after the closer.

    Raises:
        ParseError: If either marker is missing.
    """
    start = line.find(opener)
    if start < 0:
        raise ParseError(block_index, opener, field=field, line=line)
    end = line.find(closer, start + 1)
    if end < 0:
        raise ParseError(block_index, closer, field=field, line=line)
    return line[start + 1:end], line[end + 1:]


def _after_label(line: str, block_index: int, field: str) -> str:
    _, sep, rest = line.partition(LABEL_SEPARATOR)
    if not sep:
        raise ParseError(block_index, LABEL_SEPARATOR, field=field, line=line)
    return rest.strip()


def parse_block(block: Sequence[str], block_index: int = 0) -> WriterRecord:
    """
    Parse one six line block into a WriterRecord.

    Args:
        block: The block's lines. Only the first five are read; the sixth
            is the blank separator.
        block_index: Position of the block in the body, for error reports.

    Returns:
        WriterRecord with an empty computer_name.

    Raises:
        ParseError: If the block is short or a marker is missing.
    """
    if len(block) < BLOCK_LINE_COUNT:
        raise ParseError(block_index, ParseError.INCOMPLETE_BLOCK, line_count=len(block))

    writer_name, _ = _between(block[0], NAME_QUOTE, NAME_QUOTE, block_index, 'WriterName')
    writer_id, _ = _between(block[1], ID_OPEN, ID_CLOSE, block_index, 'WriterId')
    instance_id, _ = _between(block[2], ID_OPEN, ID_CLOSE, block_index, 'WriterInstanceId')
    state_code, state_rest = _between(block[3], STATE_OPEN, STATE_CLOSE, block_index, 'StateCode')
    last_error = _after_label(block[4], block_index, 'LastError')

    return WriterRecord(
        writer_name=writer_name,
        writer_id=writer_id,
        writer_instance_id=instance_id,
        state_code=state_code,
        state_description=state_rest.strip(),
        last_error=last_error,
    )


class BlockParser:
    """
    Turns one host's raw output lines into WriterRecords.

    Attributes:
        banner_lines: Leading lines to drop before the first block.
        trailer_lines: Trailing lines to drop after the last block.
        block_lines: Lines per writer block.
    """

    def __init__(self, banner_lines: int = BANNER_LINE_COUNT,
                 trailer_lines: int = TRAILER_LINE_COUNT,
                 block_lines: int = BLOCK_LINE_COUNT):
        self.banner_lines = banner_lines
        self.trailer_lines = trailer_lines
        self.block_lines = block_lines

    def parse(self, lines: Iterable[str], on_error: Optional[ErrorHandler] = None,
              host: Optional[str] = None) -> Iterator[WriterRecord]:
        """
        Lazily parse output lines into records, one per block, in order.

        Args:
            lines: Raw output lines for exactly one host.
            on_error: Called with each ParseError; the malformed block is
                skipped and parsing continues. When None the first
                ParseError is raised and the generator stops.
            host: Host the lines came from, attached to reported errors.

        Yields:
            WriterRecord per well-formed block, with an empty computer_name.

        Raises:
            ParseError: On the first malformed block when ``on_error`` is None.
        """
        body = trim_output(list(lines), self.banner_lines, self.trailer_lines)

        for block_index, block in split_blocks(body, self.block_lines):
            try:
                if len(block) < self.block_lines:
                    raise ParseError(block_index, ParseError.INCOMPLETE_BLOCK,
                                     line_count=len(block))
                record = parse_block(block, block_index)
            except ParseError as e:
                if host is not None:
                    e = ParseError(e.block_index, e.marker, field=e.field, line=e.line,
                                   host=host, line_count=e.line_count)
                if on_error is None:
                    raise e
                on_error(e)
                continue
            yield record


def parse_writer_output(output: Union[str, Sequence[str]],
                        host: Optional[str] = None) -> Tuple[List[WriterRecord], List[ParseError]]:
    """
    Parse a complete command output, skipping malformed blocks.

    Args:
        output: Raw stdout text or its lines.
        host: Optional host name used to tag records and errors.

    Returns:
        Tuple of (records, parse_errors).

    Example:
        >>> records, errors = parse_writer_output(open('writers.txt').read())
    """
    lines = output.splitlines() if isinstance(output, str) else output
    errors: List[ParseError] = []
    records = list(BlockParser().parse(lines, on_error=errors.append, host=host))
    if host is not None:
        records = [r.tag(host) for r in records]
    return records, errors
