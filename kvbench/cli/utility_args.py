"""
Arguments for utility commands that do not run a benchmark.
"""

from kvbench.cli.common_args import add_universal_arguments


def add_backends_arguments(parser):
    """Add arguments for ``kvbench backends``.

    Args:
        parser: Argparse parser to add arguments to.
    """
    parser.add_argument(
        '--json',
        action="store_true",
        help="Print the backend registry as JSON"
    )
    add_universal_arguments(parser)
