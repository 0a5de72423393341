"""
CLI argument parsing for vsswriters.

This module provides the main argument parsing entry point, using the
argument builders from the cli package, plus YAML config file overrides.
"""

import argparse
from typing import List, Optional

import yaml

from vsswriters.config import VERSION, MAX_WORKERS_LIMIT
from vsswriters.cli import PROGRAM_DESCRIPTION, add_universal_arguments, add_collection_arguments
from vsswriters.error_messages import format_error
from vsswriters.errors import ConfigurationError, ErrorCode


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vsswriters", description=PROGRAM_DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    add_collection_arguments(parser)
    add_universal_arguments(parser)
    return parser


def parse_arguments(argv: Optional[List[str]] = None, logger=None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list; defaults to sys.argv[1:].
        logger: Optional logger for config file warnings.

    Returns:
        argparse.Namespace: Parsed, config-overridden, and validated arguments.

    Raises:
        ConfigurationError: If the config file or an argument value is invalid.
    """
    parser = build_parser()
    parsed_args = parser.parse_args(argv)

    # Apply YAML config file overrides if specified
    if getattr(parsed_args, 'config_file', None):
        parsed_args = apply_yaml_config_overrides(parsed_args, logger=logger)

    update_args(parsed_args)
    validate_args(parsed_args)
    return parsed_args


def apply_yaml_config_overrides(args, logger=None):
    """
    Apply overrides from a YAML config file to the parsed arguments.

    Keys use the option names with underscores (``ssh_username``,
    ``max_workers``). ``hosts`` may be a list or a comma separated string.

    Args:
        args (argparse.Namespace): The parsed command-line arguments
        logger: Optional logger for warnings about unknown keys.

    Returns:
        argparse.Namespace: The updated arguments with YAML overrides applied

    Raises:
        ConfigurationError: If the file is missing or not a YAML mapping.
    """
    try:
        with open(args.config_file, 'r') as f:
            yaml_config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            format_error('CONFIG_FILE_NOT_FOUND', path=args.config_file),
            parameter='config_file',
            code=ErrorCode.CONFIG_FILE_NOT_FOUND
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            format_error('CONFIG_PARSE_ERROR', path=args.config_file, error=e),
            parameter='config_file',
            code=ErrorCode.CONFIG_PARSE_ERROR
        ) from e

    if not yaml_config:
        if logger:
            logger.warning(f"Config file {args.config_file} is empty")
        return args

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(
            f"Config file {args.config_file} must contain a mapping of option names to values",
            parameter='config_file',
            actual=type(yaml_config).__name__,
            code=ErrorCode.CONFIG_PARSE_ERROR
        )

    args_dict = vars(args)

    for key, value in yaml_config.items():
        key = str(key).replace('-', '_')
        if key not in args_dict:
            if logger:
                logger.warning(f"Config file contains unknown parameter '{key}', skipping")
            continue

        # Skip if the value is None (to avoid overriding CLI args with None)
        if value is None:
            continue

        if key in ('hosts', 'replay') and isinstance(value, str):
            args_dict[key] = value.split(',')
        elif key == 'replay' and isinstance(value, dict):
            args_dict[key] = [f"{k}={v}" for k, v in value.items()]
        else:
            args_dict[key] = value

    return argparse.Namespace(**args_dict)


def _split_hosts(hosts: Optional[List[str]]) -> Optional[List[str]]:
    """Flatten comma separated entries: ['a,b', 'c'] -> ['a', 'b', 'c']."""
    if hosts is None:
        return None
    return [h.strip() for entry in hosts for h in str(entry).split(',') if h.strip()]


def update_args(args):
    """
    Normalize argument values after parsing and config overrides.

    - ``hosts`` entries are split on commas.
    - ``replay`` HOST=FILE pairs become ``replay_files`` (a dict).
    - When replaying without explicit hosts, the replayed hosts are used.
    """
    args.hosts = _split_hosts(getattr(args, 'hosts', None))

    replay_files = {}
    for entry in getattr(args, 'replay', None) or []:
        host, sep, path = str(entry).partition('=')
        if not sep or not host.strip() or not path.strip():
            raise ConfigurationError(
                f"Invalid replay entry: '{entry}'",
                parameter='replay',
                expected='HOST=FILE',
                actual=entry
            )
        replay_files[host.strip()] = path.strip()
    args.replay_files = replay_files

    if replay_files and not args.hosts:
        args.hosts = list(replay_files)


def validate_args(args):
    """
    Validate argument values.

    Raises:
        ConfigurationError: Describing the first invalid value.
    """
    if args.hosts is not None and not args.hosts:
        raise ConfigurationError(
            "No hosts to collect from",
            parameter='hosts',
            code=ErrorCode.CONFIG_MISSING_REQUIRED
        )

    if not isinstance(args.max_workers, int) or not 1 <= args.max_workers <= MAX_WORKERS_LIMIT:
        raise ConfigurationError(
            "Invalid number of workers",
            parameter='max_workers',
            expected=f"integer between 1 and {MAX_WORKERS_LIMIT}",
            actual=args.max_workers
        )

    if not isinstance(args.timeout, int) or args.timeout <= 0:
        raise ConfigurationError(
            "Invalid timeout",
            parameter='timeout',
            expected="positive integer (seconds)",
            actual=args.timeout
        )

    if not str(args.command or '').strip():
        raise ConfigurationError(
            "Diagnostic command must not be empty",
            parameter='command',
            code=ErrorCode.CONFIG_MISSING_REQUIRED
        )
