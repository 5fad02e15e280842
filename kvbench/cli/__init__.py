"""
CLI argument builders for kvbench.

Modules:
    - common_args: Shared help messages and universal arguments
    - run_args: Arguments for ``kvbench run``
    - utility_args: Arguments for ``kvbench backends``
"""

from kvbench.cli.common_args import (
    HELP_MESSAGES,
    PROGRAM_DESCRIPTIONS,
    add_universal_arguments,
)

from kvbench.cli.run_args import add_run_arguments
from kvbench.cli.utility_args import add_backends_arguments

__all__ = [
    'HELP_MESSAGES',
    'PROGRAM_DESCRIPTIONS',
    'add_universal_arguments',
    'add_run_arguments',
    'add_backends_arguments',
]
