"""
Common CLI arguments and help messages shared across kvbench commands.

This module contains:
- Help message definitions
- Program descriptions
- Universal argument functions
"""

from kvbench.config import (
    DEFAULT_WORKER_COUNT, DEFAULT_PHASE_DURATION, DEFAULT_IDLE_POOL_SIZE,
    DEFAULT_TARGETS, PHASES
)


HELP_MESSAGES = {
    'backend': "Key-value backend to benchmark.",
    'target': (
        "Connection string for the backend. Defaults per backend: "
        + "; ".join(f"{name}: {target}" for name, target in DEFAULT_TARGETS.items() if target)
    ),
    'workers': (
        f"Number of concurrent workers per phase. Worker i owns key_<i> for the whole phase. "
        f"Default: {DEFAULT_WORKER_COUNT}"
    ),
    'duration': f"Wall-clock length of each phase in seconds. Default: {DEFAULT_PHASE_DURATION:g}",
    'idle_pool_size': (
        f"Connections the backend client keeps open while idle. The pool still grows "
        f"to one connection per worker. Default: {DEFAULT_IDLE_POOL_SIZE}"
    ),
    'phases': (
        f"Phases to run, in order. 'set' writes value_<i> to key_<i>; 'get' reads key_<i> back "
        f"and counts any other value as an error. Default: {' '.join(PHASES)}"
    ),
    'output': "Write the run configuration and per-phase results to this JSON file.",
    'what_if': "Resolve and print the configuration without connecting to the backend.",
    'config_file': "Path to YAML file with argument overrides that will be applied after CLI arguments",
}

PROGRAM_DESCRIPTIONS = {
    'run': "Run the write phase and the read-verify phase against a key-value backend",
    'backends': "List the registered key-value backends",
}


def add_universal_arguments(parser):
    """Add arguments common to all commands.

    Args:
        parser: Argparse parser to add arguments to.
    """
    standard_args = parser.add_argument_group("Standard Arguments")
    standard_args.add_argument(
        '--config-file', '-c',
        type=str,
        help=HELP_MESSAGES['config_file']
    )

    output_control = parser.add_argument_group("Output Control")
    output_control.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode"
    )
    output_control.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose mode"
    )
    output_control.add_argument(
        "--stream-log-level",
        type=str,
        default="INFO"
    )
