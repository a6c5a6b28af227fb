import os
from unittest.mock import Mock

import pytest

from temporary_fixture import plugin
from temporary_fixture.exceptions import HooksUnavailableError
from temporary_fixture.services import TestFixtures
from temporary_fixture.utils.file_utils import FileUtils


@pytest.fixture
def fake_item(monkeypatch):
    item = Mock()
    item.stash = pytest.Stash()
    item.nodeid = "tests/test_fake.py::test_fake"
    monkeypatch.setattr(plugin, "_current_item", item)
    return item


def run_makereport(item, failed):
    """Drive the makereport hookwrapper by hand."""
    hook = plugin.pytest_runtest_makereport(item, Mock())
    next(hook)
    outcome = Mock()
    outcome.get_result.return_value = Mock(failed=failed)
    with pytest.raises(StopIteration):
        hook.send(outcome)


class TestLifecycleHooks:
    """Test on_test_finished and on_test_failed."""

    def test_current_item_is_tracked_while_test_runs(self, request):
        assert plugin._current_item is request.node

    def test_protocol_wrapper_sets_and_resets_current_item(self, monkeypatch):
        # Arrange
        monkeypatch.setattr(plugin, "_current_item", None)
        item = Mock()
        hook = plugin.pytest_runtest_protocol(item, None)

        # Act & Assert
        next(hook)
        assert plugin._current_item is item
        with pytest.raises(StopIteration):
            next(hook)
        assert plugin._current_item is None

    def test_on_test_finished_adds_finalizer(self, fake_item):
        # Arrange
        callback = Mock()

        # Act
        plugin.on_test_finished(callback)

        # Assert
        fake_item.addfinalizer.assert_called_once_with(callback)

    def test_on_test_failed_runs_callbacks_when_report_fails(self, fake_item):
        # Arrange
        first, second = Mock(), Mock()
        plugin.on_test_failed(first)
        plugin.on_test_failed(second)

        # Act
        run_makereport(fake_item, failed=True)

        # Assert
        first.assert_called_once_with()
        second.assert_called_once_with()

    def test_on_test_failed_skips_callbacks_when_report_passes(self, fake_item):
        # Arrange
        callback = Mock()
        plugin.on_test_failed(callback)

        # Act
        run_makereport(fake_item, failed=False)

        # Assert
        callback.assert_not_called()

    def test_failing_callback_does_not_stop_others(self, fake_item):
        # Arrange
        broken = Mock(side_effect=RuntimeError("boom"))
        callback = Mock()
        plugin.on_test_failed(broken)
        plugin.on_test_failed(callback)

        # Act
        run_makereport(fake_item, failed=True)

        # Assert
        callback.assert_called_once_with()

    def test_makereport_without_callbacks(self, fake_item):
        run_makereport(fake_item, failed=True)

    @pytest.mark.parametrize("register", [plugin.on_test_finished, plugin.on_test_failed])
    def test_hooks_unavailable_outside_test(self, register, monkeypatch):
        # Arrange
        monkeypatch.setattr(plugin, "_current_item", None)

        # Act & Assert
        with pytest.raises(HooksUnavailableError, match="only available while a pytest test is running"):
            register(Mock())


class TestTempFixturesFixture:
    """Test the temp_fixtures pytest fixture."""

    def test_provides_fresh_service(self, temp_fixtures):
        # Act
        directory = temp_fixtures.create_test_dir({"a": "1"})

        # Assert
        assert isinstance(temp_fixtures, TestFixtures)
        assert os.path.isfile(os.path.join(directory, "a"))

    def test_keep_fixtures_option_defaults_to_false(self, temp_fixtures):
        assert temp_fixtures.keep_fixture is False


class TestPluginInPytestRun:
    """Run small test files in a separate pytest process."""

    def test_directories_removed_after_passing_and_failing_tests(self, pytester):
        # Arrange
        pytester.makepyfile(
            """
            from temporary_fixture import make_test_dir

            def record(directory):
                with open("dirs.txt", "a") as f:
                    f.write(directory + "\\n")

            def test_passes():
                record(make_test_dir({"a": "1"}))

            def test_fails():
                record(make_test_dir({"b": "2"}))
                assert False
            """
        )

        # Act
        result = pytester.runpytest_subprocess()

        # Assert
        result.assert_outcomes(passed=1, failed=1)
        directories = (pytester.path / "dirs.txt").read_text().split()
        assert len(directories) == 2
        for directory in directories:
            assert not os.path.exists(directory)

    def test_keep_fixtures_option(self, pytester):
        # Arrange
        pytester.makepyfile(
            """
            def test_keeps(temp_fixtures):
                directory = temp_fixtures.create_test_dir({"a": "1"})
                with open("dirs.txt", "w") as f:
                    f.write(directory)
            """
        )

        # Act
        result = pytester.runpytest_subprocess("--keep-fixtures")

        # Assert
        result.assert_outcomes(passed=1)
        directory = (pytester.path / "dirs.txt").read_text()
        try:
            assert os.path.isfile(os.path.join(directory, "a"))
        finally:
            FileUtils.remove_tree(directory)
