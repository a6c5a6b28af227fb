"""Base service class shared by the sync and async test directory services."""

import logging
from abc import ABC
from typing import Any, List, Optional

from temporary_fixture import plugin
from temporary_fixture.config import Config
from temporary_fixture.exceptions import HooksUnavailableError
from temporary_fixture.models.fixture import Fixture, FixtureType
from temporary_fixture.utils.file_utils import FileUtils

logger = logging.getLogger(__name__)


class BaseTestFixtures(ABC):
    """Temporary test directory bookkeeping and cleanup."""

    __test__ = False

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.logger = logging.getLogger(self.__class__.__name__)

        self._keep_fixture: bool = self.config.get('fixtures.keep_fixture', False)
        self._test_dir: Optional[str] = None
        self._created_test_dir = False
        self._test_finished = False
        self._created_dirs: List[str] = []

    @property
    def keep_fixture(self) -> bool:
        """Whether directories survive cleanup.

        Must be set *before* ``create_test_dir`` to have any effect on the
        directories it creates.
        """
        return self._keep_fixture

    @keep_fixture.setter
    def keep_fixture(self, keep: bool) -> None:
        self._keep_fixture = keep

    @property
    def test_dir(self) -> Optional[str]:
        """The directory created by the last ``create_test_dir`` call."""
        return self._test_dir

    @property
    def is_test_dir_created(self) -> bool:
        return self._created_test_dir

    @property
    def temp_prefix(self) -> str:
        return self.config.get('fixtures.temp_prefix')

    @property
    def encoding(self) -> str:
        return self.config.get('fixtures.encoding')

    def fixture(self, kind: FixtureType, content: Any) -> Fixture:
        """Create a Fixture for use in ``create_test_dir`` content."""
        return Fixture(kind, content)

    def cleanup(self) -> None:
        """Remove every directory created by this instance.

        Safe to call repeatedly and after the directories are already gone.
        A directory that fails to be removed stays tracked, so a later call
        retries it.

        Raises:
            FileOperationError: If a directory cannot be removed
        """
        if self._test_finished:
            return

        if self._keep_fixture:
            if self._created_dirs:
                self.logger.info(f"Keeping fixture directories: {', '.join(self._created_dirs)}")
            self._test_finished = True
            return

        while self._created_dirs:
            directory = self._created_dirs[-1]
            FileUtils.remove_tree(directory)
            self._created_dirs.pop()
            self.logger.debug(f"Cleaned up fixture directory {directory}")

        self._test_finished = True

    def _start(self, directory: str) -> None:
        """Track a freshly allocated root and hook its removal to the running test."""
        self._test_finished = False
        self._created_test_dir = False
        self._test_dir = directory
        self._created_dirs.append(directory)
        self._register_cleanup_hooks()

    def _register_cleanup_hooks(self) -> None:
        try:
            plugin.on_test_failed(self.cleanup)
            plugin.on_test_finished(self.cleanup)
        except HooksUnavailableError as e:
            # Outside a pytest test the caller has to clean up manually.
            self.logger.debug(f"Cleanup hooks not registered: {e.message}")
