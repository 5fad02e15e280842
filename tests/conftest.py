"""
Shared pytest fixtures for kvbench tests.

These fixtures provide loggers, stores, contexts and CLI namespaces so the
harness can be tested without PostgreSQL or Redis.
"""

import signal
from argparse import Namespace

import pytest

from kvbench.config import RunConfig
from kvbench.context import PhaseContext
from kvbench.stores.memory import MemoryStore
from tests.fixtures import MockLogger, ScriptedStore


# =============================================================================
# Logger Fixtures
# =============================================================================

@pytest.fixture
def mock_logger():
    """
    Create a logger that captures messages per level.

    Usage:
        def test_something(mock_logger):
            Stats(logger=mock_logger).record_failure(err)
            mock_logger.assert_logged('error', 'boom')
    """
    return MockLogger()


# =============================================================================
# Store and Context Fixtures
# =============================================================================

@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def scripted_store():
    return ScriptedStore()


@pytest.fixture
def background_ctx():
    return PhaseContext.background()


@pytest.fixture
def cancelled_ctx():
    ctx = PhaseContext.background()
    ctx.cancel()
    return ctx


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def fast_config():
    """Memory backend, a few workers, phases short enough for unit tests."""
    return RunConfig(backend="memory", worker_count=8, phase_duration=0.2)


@pytest.fixture
def run_args() -> Namespace:
    """Args as parsed for ``kvbench run`` with defaults."""
    return Namespace(
        program='run',
        backend='memory',
        target=None,
        workers=4,
        duration=0.2,
        idle_pool_size=30,
        phases=['set', 'get'],
        output=None,
        what_if=False,
        config_file=None,
        debug=False,
        verbose=False,
        stream_log_level='INFO',
    )


@pytest.fixture
def restore_signal_handlers():
    """Put SIGINT/SIGTERM handlers back after a test that calls main()."""
    saved = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGTERM)}
    yield
    for sig, handler in saved.items():
        signal.signal(sig, handler)
