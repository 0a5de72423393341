"""
Common CLI arguments and help messages.

This module contains:
- Help message definitions
- Universal (logging / config) arguments
- Collection arguments
"""

from vsswriters.config import DIAGNOSTIC_COMMAND, DEFAULT_SSH_TIMEOUT, DEFAULT_MAX_WORKERS


HELP_MESSAGES = {
    'hosts': (
        "Space-separated list of IP addresses or hostnames to collect from. "
        "\nExample: '--hosts 192.168.1.1 192.168.1.2' or '--hosts host1,host2'. "
        "Defaults to the local host."
    ),
    'command': f"Diagnostic command to run on each host. Default: '{DIAGNOSTIC_COMMAND}'",
    'ssh_username': "Username for SSH connections to remote hosts. Defaults to the current user.",
    'timeout': "SSH connect timeout in seconds. Each host is abandoned shortly after this.",
    'max_workers': "Number of hosts to collect from at the same time.",
    'abort_on_parse_error': (
        "Drop all records from a host when any of its writer blocks is malformed. "
        "By default only the malformed block is skipped."
    ),
    'replay': (
        "Parse captured command output instead of running the command. "
        "\nGiven as HOST=FILE pairs, e.g. '--replay node1=node1.txt node2=node2.txt'."
    ),
    'output': "Write the JSON result to this file instead of stdout.",
    'config_file': "YAML file whose keys override command line options (e.g. hosts, timeout).",

    # Logging
    'debug': "Enable debug mode",
    'verbose': "Enable verbose mode",
    'stream_log_level': "Logging level for console output (e.g. DEBUG, INFO, WARNING)",
}

PROGRAM_DESCRIPTION = (
    "Collect the state of the volume snapshot writers on one or more hosts and "
    "report them as JSON records."
)


def add_universal_arguments(parser):
    standard_args = parser.add_argument_group("Standard Arguments")
    standard_args.add_argument('--config-file', type=str, help=HELP_MESSAGES['config_file'])
    standard_args.add_argument('--output', '-o', type=str, help=HELP_MESSAGES['output'])

    view_only_args = standard_args.add_mutually_exclusive_group()
    view_only_args.add_argument('--debug', action="store_true", help=HELP_MESSAGES['debug'])
    view_only_args.add_argument('--verbose', action="store_true", help=HELP_MESSAGES['verbose'])
    standard_args.add_argument('--stream-log-level', type=str, help=HELP_MESSAGES['stream_log_level'])


def add_collection_arguments(parser):
    collection_args = parser.add_argument_group("Collection Arguments")
    collection_args.add_argument('--hosts', '-s', nargs="+", type=str, help=HELP_MESSAGES['hosts'])
    collection_args.add_argument('--command', type=str, default=DIAGNOSTIC_COMMAND,
                                 help=HELP_MESSAGES['command'])
    collection_args.add_argument('--ssh-username', type=str, help=HELP_MESSAGES['ssh_username'])
    collection_args.add_argument('--timeout', type=int, default=DEFAULT_SSH_TIMEOUT,
                                 help=HELP_MESSAGES['timeout'])
    collection_args.add_argument('--max-workers', type=int, default=DEFAULT_MAX_WORKERS,
                                 help=HELP_MESSAGES['max_workers'])
    collection_args.add_argument('--abort-on-parse-error', action="store_true",
                                 help=HELP_MESSAGES['abort_on_parse_error'])
    collection_args.add_argument('--replay', nargs="+", type=str, metavar="HOST=FILE",
                                 help=HELP_MESSAGES['replay'])
