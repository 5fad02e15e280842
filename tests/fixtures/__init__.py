"""
Test fixtures package for kvbench tests.

This package provides reusable mock loggers and scripted stores for testing
the workload harness without a database server.
"""

from tests.fixtures.mock_logger import MockLogger, create_mock_logger
from tests.fixtures.fake_stores import ScriptedStore, BlockingStore

__all__ = [
    'MockLogger',
    'create_mock_logger',
    'ScriptedStore',
    'BlockingStore',
]
