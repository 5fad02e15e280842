"""
Arguments for the ``kvbench run`` command.
"""

from kvbench.cli.common_args import HELP_MESSAGES, add_universal_arguments
from kvbench.config import (
    DEFAULT_BACKEND, DEFAULT_WORKER_COUNT, DEFAULT_PHASE_DURATION,
    DEFAULT_IDLE_POOL_SIZE, PHASES
)
from kvbench.registry import StoreRegistry


def add_run_arguments(parser):
    """Add backend, workload and output arguments for a benchmark run.

    Args:
        parser: Argparse parser to add arguments to.
    """
    backend_args = parser.add_argument_group("Backend")
    backend_args.add_argument(
        '--backend', '-b',
        choices=StoreRegistry.get_all_names(),
        default=DEFAULT_BACKEND,
        help=HELP_MESSAGES['backend']
    )
    backend_args.add_argument(
        '--target', '-t',
        type=str,
        help=HELP_MESSAGES['target']
    )
    backend_args.add_argument(
        '--idle-pool-size',
        type=int,
        default=DEFAULT_IDLE_POOL_SIZE,
        help=HELP_MESSAGES['idle_pool_size']
    )

    workload_args = parser.add_argument_group("Workload")
    workload_args.add_argument(
        '--workers', '-w',
        type=int,
        default=DEFAULT_WORKER_COUNT,
        help=HELP_MESSAGES['workers']
    )
    workload_args.add_argument(
        '--duration', '-d',
        type=float,
        default=DEFAULT_PHASE_DURATION,
        help=HELP_MESSAGES['duration']
    )
    workload_args.add_argument(
        '--phases',
        nargs="+",
        choices=PHASES,
        default=list(PHASES),
        help=HELP_MESSAGES['phases']
    )

    result_args = parser.add_argument_group("Results")
    result_args.add_argument(
        '--output', '-o',
        type=str,
        help=HELP_MESSAGES['output']
    )
    result_args.add_argument(
        "--what-if",
        action="store_true",
        help=HELP_MESSAGES['what_if']
    )

    add_universal_arguments(parser)
