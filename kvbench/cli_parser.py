"""
CLI argument parsing for kvbench.

This module provides the main argument parsing entry point,
using modular argument builders from the cli package.
"""

import argparse
import sys

import yaml

import kvbench.stores  # noqa: F401  registers the built-in backends
from kvbench import VERSION
from kvbench.cli import (
    PROGRAM_DESCRIPTIONS,
    add_run_arguments,
    add_backends_arguments,
)
from kvbench.errors import ConfigurationError, ErrorCode

# Config file keys that differ from the argparse dest they override
CONFIG_KEY_ALIASES = {
    'worker_count': 'workers',
    'phase_duration': 'duration',
    'backend_target': 'target',
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kvbench", description="Key-value store concurrency benchmark")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    sub_programs = parser.add_subparsers(dest="program", required=True)

    run_parser = sub_programs.add_parser(
        "run",
        description=PROGRAM_DESCRIPTIONS['run'],
        help="Run the benchmark"
    )
    backends_parser = sub_programs.add_parser(
        "backends",
        description=PROGRAM_DESCRIPTIONS['backends'],
        help="List available backends"
    )

    add_run_arguments(run_parser)
    add_backends_arguments(backends_parser)
    return parser


def parse_arguments(argv=None):
    """Parse command-line arguments for kvbench.

    Args:
        argv: Argument list, ``sys.argv[1:]`` when None.

    Returns:
        argparse.Namespace: Parsed arguments with config file overrides applied.

    Raises:
        ConfigurationError: If the config file is missing or invalid.
    """
    parser = build_parser()

    if argv is None and len(sys.argv) == 1:
        parser.print_help(sys.stderr)
        sys.exit(1)

    parsed_args = parser.parse_args(argv)

    if getattr(parsed_args, 'config_file', None):
        parsed_args = apply_yaml_config_overrides(parsed_args)

    return parsed_args


def apply_yaml_config_overrides(args, logger=None):
    """
    Apply overrides from a YAML config file to the parsed arguments.

    Args:
        args (argparse.Namespace): The parsed command-line arguments
        logger: Optional logger for warnings about skipped keys

    Returns:
        argparse.Namespace: The updated arguments with YAML overrides applied

    Raises:
        ConfigurationError: If the file is missing, unreadable, or not a YAML mapping
    """
    try:
        with open(args.config_file, 'r') as f:
            yaml_config = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Config file {args.config_file} not found",
            parameter="config_file",
            actual=args.config_file,
            code=ErrorCode.CONFIG_FILE_NOT_FOUND
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Error parsing YAML config file: {e}",
            parameter="config_file",
            actual=args.config_file,
            code=ErrorCode.CONFIG_PARSE_ERROR
        ) from e

    if not yaml_config:
        _warn(logger, f"Config file {args.config_file} is empty")
        return args

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(
            f"Config file {args.config_file} must contain a mapping of option names to values",
            parameter="config_file",
            actual=type(yaml_config).__name__,
            code=ErrorCode.CONFIG_PARSE_ERROR
        )

    args_dict = vars(args)

    for key, value in yaml_config.items():
        dest = CONFIG_KEY_ALIASES.get(key, str(key).replace('-', '_'))
        if dest not in args_dict:
            _warn(logger, f"Config file contains unknown parameter '{key}', skipping")
            continue

        # None would erase a CLI value with nothing
        if value is None:
            continue

        if isinstance(args_dict.get(dest), list) and not isinstance(value, list):
            value = [item.strip() for item in str(value).split(',')]

        args_dict[dest] = value

    return argparse.Namespace(**args_dict)


def _warn(logger, message):
    if logger is not None:
        logger.warning(message)
    else:
        print(f"Warning: {message}", file=sys.stderr)


if __name__ == "__main__":
    args = parse_arguments()
    import pprint
    pprint.pprint(vars(args))
