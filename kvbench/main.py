#!/usr/bin/env python3
"""
kvbench - Main Entry Point

This module provides the main entry point for the kvbench key-value
benchmark, with error handling and user-friendly messaging.
"""

import json
import signal
import sys
import traceback

from kvbench.benchmark import KVBenchmark
from kvbench.cli_parser import parse_arguments
from kvbench.config import DATETIME_STR, EXIT_CODE, KVBENCH_DEBUG, RunConfig
from kvbench.context import PhaseContext
from kvbench.kvb_logging import setup_logging, apply_logging_options
from kvbench.registry import StoreRegistry
from kvbench.errors import (
    KVBenchException,
    ConfigurationError,
    StoreSetupError,
    ErrorCode,
)

logger = setup_logging("kvbench")
root_ctx = PhaseContext.background()


def signal_handler(sig, frame):
    """Handle SIGINT (Ctrl+C) and SIGTERM.

    The first signal cancels the root context so running workers stop at their
    next iteration and the current phase still reports. A second signal exits.
    """
    signal_name = signal.Signals(sig).name
    logger.warning(f"Received signal {signal_name} ({sig})")

    if root_ctx.done():
        logger.info("Exiting due to repeated signal")
        sys.exit(EXIT_CODE.INTERRUPTED)

    root_ctx.cancel(f"interrupted by {signal_name}")


def handle_backends_command(args) -> int:
    info = StoreRegistry.get_registry_info()
    if args.json:
        print(json.dumps(info, indent=2))
    else:
        for name, details in info.items():
            print(f"{name}: {details['description']}")
    return EXIT_CODE.SUCCESS


def run_benchmark(args, run_datetime, ctx=None):
    """
    Run the benchmark described by the parsed args.

    Args:
        args: Parsed command line arguments.
        run_datetime: Datetime string for this run.
        ctx: Parent context; cancelling it ends the current phase early.

    Returns:
        Exit code indicating success or failure.

    Raises:
        ConfigurationError: If the arguments do not form a valid run.
        StoreSetupError: If the backend cannot be prepared.
    """
    config = RunConfig.from_args(args)

    if config.what_if:
        logger.info(f"What-if mode: no connection to the backend will be made.\n"
                    f"Configuration: {json.dumps(config.as_dict(), indent=2)}")
        return EXIT_CODE.SUCCESS

    benchmark = KVBenchmark(config, logger=logger, run_datetime=run_datetime,
                            ctx=ctx if ctx is not None else root_ctx)

    try:
        return benchmark.run()
    except KVBenchException:
        raise
    except Exception as e:
        raise KVBenchException(
            f"Benchmark execution failed: {str(e)}",
            code=ErrorCode.INTERNAL_ERROR,
            suggestion="Run with --debug for details"
        ) from e
    finally:
        if config.output and benchmark.results:
            try:
                benchmark.write_results()
            except KVBenchException as e:
                logger.warning(str(e))


def _main_impl(argv=None):
    """
    Main implementation with error handling.

    Separated from main() so that main() can wrap it with exception handling.
    """
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    args = parse_arguments(argv)
    apply_logging_options(logger, args)

    if args.program == "backends":
        return handle_backends_command(args)

    return run_benchmark(args, DATETIME_STR)


def main(argv=None):
    """
    Main entry point with comprehensive error handling.

    This function wraps _main_impl() to catch and handle all
    exceptions with user-friendly error messages.
    """
    try:
        return _main_impl(argv)

    except ConfigurationError as e:
        logger.error(str(e))
        return EXIT_CODE.CONFIG_ERROR

    except StoreSetupError as e:
        logger.error(str(e))
        return EXIT_CODE.SETUP_ERROR

    except KVBenchException as e:
        logger.error(str(e))
        return EXIT_CODE.FAILURE

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return EXIT_CODE.INTERRUPTED

    except SystemExit:
        raise

    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}")
        if KVBENCH_DEBUG:
            logger.debug("Stack trace:")
            traceback.print_exc()
        else:
            logger.info("Set KVBENCH_DEBUG=1 for full stack trace")
        return EXIT_CODE.ERROR


if __name__ == "__main__":
    sys.exit(main())
