"""
Sample diagnostic command output for testing.

Provides realistic writer listings plus builders for hand-made blocks, so
parser and collector tests can run without a snapshot-capable host.
"""

from typing import Dict, List, Optional, Sequence

BANNER = [
    "vssadmin 1.1 - Volume Shadow Copy Service administrative command-line tool",
    "(C) Copyright 2001-2013 Microsoft Corp.",
    "",
]

SAMPLE_WRITERS = [
    {
        'WriterName': 'Task Scheduler Writer',
        'WriterId': 'd61d61c8-d73a-4eee-8cdd-f6f9786b7124',
        'WriterInstanceId': '1bddd48e-5052-49db-9b07-b96f96727e6b',
        'StateCode': '1',
        'StateDescription': 'Stable',
        'LastError': 'No error',
    },
    {
        'WriterName': 'System Writer',
        'WriterId': 'e8132975-6f93-4464-a53e-1050253ae220',
        'WriterInstanceId': '7848396d-00b1-47cd-8ba9-769b7ce402d2',
        'StateCode': '1',
        'StateDescription': 'Stable',
        'LastError': 'No error',
    },
    {
        'WriterName': 'SqlServerWriter',
        'WriterId': 'a65faa63-5ea8-4ebc-9dbd-a0c4db26912a',
        'WriterInstanceId': '41db4dbf-6046-470e-8ad5-d5081dfb1b70',
        'StateCode': '8',
        'StateDescription': 'Failed',
        'LastError': 'Retryable error',
    },
]

SAMPLE_HOSTS = ['node1', 'node2', 'node3']


def make_block(name: str, writer_id: str, instance_id: str, state_code: str,
               state_description: str, last_error: str) -> List[str]:
    """Build the six lines describing one writer."""
    return [
        f"Writer name: '{name}'",
        f"   Writer Id: {{{writer_id}}}",
        f"   Writer Instance Id: {{{instance_id}}}",
        f"   State: [{state_code}] {state_description}",
        f"   Last error: {last_error}",
        "",
    ]


def block_for(writer: Dict[str, str]) -> List[str]:
    return make_block(writer['WriterName'], writer['WriterId'], writer['WriterInstanceId'],
                      writer['StateCode'], writer['StateDescription'], writer['LastError'])


def make_output_lines(writers: Optional[Sequence[Dict[str, str]]] = None,
                      extra_body: Sequence[str] = ()) -> List[str]:
    """Build a full output: banner, one block per writer, extra lines, trailing blank."""
    writers = SAMPLE_WRITERS if writers is None else writers
    lines = list(BANNER)
    for writer in writers:
        lines.extend(block_for(writer))
    lines.extend(extra_body)
    lines.append("")
    return lines


def make_output(writers: Optional[Sequence[Dict[str, str]]] = None,
                extra_body: Sequence[str] = ()) -> str:
    """Same as make_output_lines, joined the way the command prints it."""
    return "\n".join(make_output_lines(writers, extra_body)) + "\n"


def writers_named(*names: str) -> List[Dict[str, str]]:
    """Distinct writer dicts, one per name, with ids derived from the name."""
    writers = []
    for i, name in enumerate(names):
        writers.append({
            'WriterName': name,
            'WriterId': f'{i:08d}-aaaa-0000-0000-{name.encode().hex()[:12]:0<12}',
            'WriterInstanceId': f'{i:08d}-bbbb-0000-0000-000000000000',
            'StateCode': '1',
            'StateDescription': 'Stable',
            'LastError': 'No error',
        })
    return writers


TEST_WRITER_BLOCK = [
    "* Writer 'TestWriter':",
    "   Writer Id: {AAAA-1111}",
    "   Writer Instance Id: {BBBB-2222}",
    "   State: [1] Stable",
    "   Last error: No error",
    "",
]
