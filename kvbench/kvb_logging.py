"""
Logging for kvbench.

Log records go to stderr so that stdout carries only the backend line and the
per-phase summaries. Extra levels sit between the stdlib ones:

    RESULT (35)     phase outcome, shown even when warnings are filtered out
    STATUS (25)     run progress
    VERBOSE (19) .. VERBOSEST (17)   per-worker detail
    RIDICULOUS (7)  per-operation tracing
"""

import enum
import functools
import logging
import sys

RESULT = 35
STATUS = 25
VERBOSE = 19
VERBOSER = 18
VERBOSEST = 17
RIDICULOUS = 7

EXTRA_LEVELS = {
    "RESULT": RESULT,
    "STATUS": STATUS,
    "VERBOSE": VERBOSE,
    "VERBOSER": VERBOSER,
    "VERBOSEST": VERBOSEST,
    "RIDICULOUS": RIDICULOUS,
}

DEFAULT_STREAM_LOG_LEVEL = logging.INFO
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class COLORS(enum.Enum):
    red = "\033[0;31m"
    green = "\033[0;32m"
    yellow = "\033[0;33m"
    bred = "\033[1;31m"
    bblue = "\033[1;34m"
    bipurple = "\033[1;95m"
    normal = "\033[0m"


LEVEL_COLORS = {
    logging.CRITICAL: COLORS.bred,
    logging.ERROR: COLORS.bred,
    RESULT: COLORS.green,
    logging.WARNING: COLORS.yellow,
    STATUS: COLORS.bblue,
    RIDICULOUS: COLORS.bipurple,
}


def get_level_color(level):
    return LEVEL_COLORS.get(level, COLORS.normal).value


class KVBenchLogger(logging.Logger):
    """Logger with one method per extra level, e.g. ``logger.status(msg)``."""


# partialmethod adds no Python frame, so records still point at the real caller
for _name, _level in EXTRA_LEVELS.items():
    logging.addLevelName(_level, _name)
    setattr(KVBenchLogger, _name.lower(), functools.partialmethod(logging.Logger.log, _level))


class _ColoredFormatter(logging.Formatter):
    layout = "%(message)s"

    def __init__(self):
        super().__init__(fmt=self.layout, datefmt=TIMESTAMP_FORMAT)

    def format(self, record):
        return f"{get_level_color(record.levelno)}{super().format(record)}{COLORS.normal.value}"


class ColoredStandardFormatter(_ColoredFormatter):
    layout = "%(asctime)s|%(levelname)s: %(message)s"


class ColoredDebugFormatter(_ColoredFormatter):
    layout = "%(asctime)s|%(levelname)s:%(threadName)s:%(module)s:%(lineno)d: %(message)s"


def _as_level(level):
    if isinstance(level, str):
        return logging.getLevelName(level.upper())
    return level


def setup_logging(name="kvbench", stream_log_level=DEFAULT_STREAM_LOG_LEVEL) -> KVBenchLogger:
    """Build a KVBenchLogger with a single colored stderr handler."""
    logger = KVBenchLogger(name)
    logger.setLevel(RIDICULOUS)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColoredStandardFormatter())
    handler.setLevel(_as_level(stream_log_level))
    logger.addHandler(handler)
    return logger


def apply_logging_options(logger, args):
    """Adjust stream handlers from parsed ``--verbose``, ``--debug`` and ``--stream-log-level``.

    ``--debug`` wins over ``--verbose``, and either one overrides an explicit
    stream level. Both only ever lower the threshold.
    """
    if args is None:
        return

    debug = getattr(args, "debug", False)
    verbose = getattr(args, "verbose", False)
    requested = getattr(args, "stream_log_level", None)

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            continue
        if debug:
            handler.setFormatter(ColoredDebugFormatter())
            handler.setLevel(min(handler.level, logging.DEBUG))
        elif verbose:
            handler.setLevel(min(handler.level, VERBOSE))
        elif requested:
            handler.setLevel(_as_level(requested))
