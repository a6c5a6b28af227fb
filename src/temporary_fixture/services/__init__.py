"""Test directory services for temporary fixtures."""

from .base_service import BaseTestFixtures
from .fixtures_service import TestFixtures, test_fixtures, make_test_dir
from .fixtures_async_service import TestFixturesAsync, test_fixtures_async, make_test_dir_async

__all__ = [
    'BaseTestFixtures',
    'TestFixtures',
    'TestFixturesAsync',
    'test_fixtures',
    'test_fixtures_async',
    'make_test_dir',
    'make_test_dir_async',
]
