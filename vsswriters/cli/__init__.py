"""
Command line argument builders for vsswriters.
"""

from vsswriters.cli.common_args import (
    HELP_MESSAGES,
    PROGRAM_DESCRIPTION,
    add_universal_arguments,
    add_collection_arguments,
)

__all__ = [
    'HELP_MESSAGES',
    'PROGRAM_DESCRIPTION',
    'add_universal_arguments',
    'add_collection_arguments',
]
