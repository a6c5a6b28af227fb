"""pytest plugin providing test lifecycle hooks and the ``temp_fixtures`` fixture."""

import logging
from typing import Callable, List, Optional

import pytest

from temporary_fixture.exceptions import HooksUnavailableError

logger = logging.getLogger(__name__)

_failed_callbacks_key = pytest.StashKey[List[Callable[[], None]]]()

_current_item: Optional[pytest.Item] = None


def pytest_addoption(parser):
    group = parser.getgroup("temporary-fixture")
    group.addoption(
        "--keep-fixtures",
        action="store_true",
        default=False,
        help="Keep temporary fixture directories after each test."
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_protocol(item, nextitem):
    global _current_item
    _current_item = item
    try:
        yield
    finally:
        _current_item = None


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if not report.failed:
        return

    for callback in item.stash.get(_failed_callbacks_key, []):
        try:
            callback()
        except Exception:
            # The finished hook retries the cleanup during teardown.
            logger.exception(f"Failure callback raised for {item.nodeid}")


def _require_current_item() -> pytest.Item:
    if _current_item is None:
        raise HooksUnavailableError(
            "Test lifecycle hooks are only available while a pytest test is running",
            suggestion="Call cleanup() yourself, or use the temp_fixtures fixture."
        )
    return _current_item


def on_test_finished(callback: Callable[[], None]) -> None:
    """Run ``callback`` when the running test tears down.

    Raises:
        HooksUnavailableError: If no test is running
    """
    _require_current_item().addfinalizer(callback)


def on_test_failed(callback: Callable[[], None]) -> None:
    """Run ``callback`` as soon as a phase of the running test fails.

    Raises:
        HooksUnavailableError: If no test is running
    """
    item = _require_current_item()
    item.stash.setdefault(_failed_callbacks_key, []).append(callback)


@pytest.fixture
def temp_fixtures(request):
    """A fresh TestFixtures whose directories are removed after the test."""
    from temporary_fixture.services import TestFixtures

    fixtures = TestFixtures()
    if request.config.getoption("keep_fixtures", default=False):
        fixtures.keep_fixture = True
    yield fixtures
    fixtures.cleanup()
