"""Temporary test directories created synchronously."""

from typing import Any, Optional

from temporary_fixture.core.materializer import make
from temporary_fixture.exceptions import TestDirCreationError
from temporary_fixture.services.base_service import BaseTestFixtures
from temporary_fixture.utils.file_utils import FileUtils


class TestFixtures(BaseTestFixtures):
    """Creates fixture directories that are removed when the running test ends.

    Example:
        >>> root = test_fixtures.create_test_dir({
        ...     'packages': {'pkg': {'setup.cfg': ''}},
        ...     'README.md': '# demo',
        ...     'docs': Fixture('symlink', 'packages'),
        ... })
    """

    def create_test_dir(self, content: Optional[Any] = None) -> str:
        """
        Create a temporary directory and fill it with ``content``.

        To keep the directory after the test, set ``keep_fixture = True``
        before calling this.

        Args:
            content: Directory contents; empty when omitted

        Returns:
            Absolute path of the new directory

        Raises:
            TestDirCreationError: If allocation or materialization fails
        """
        try:
            self.config.validate()
            directory = FileUtils.create_temp_root(self.temp_prefix)
            self._start(directory)
            make(directory, content or {}, encoding=self.encoding)
        except Exception as e:
            raise TestDirCreationError(e) from e

        self._created_test_dir = True
        self.logger.info(f"Created test directory {directory}")
        return directory


test_fixtures = TestFixtures()


def make_test_dir(content: Optional[Any] = None) -> str:
    """Create a temporary test directory, optionally adding contents.

    The directory is removed when the running pytest test finishes. To keep
    it, set ``test_fixtures.keep_fixture = True`` before calling this.
    """
    return test_fixtures.create_test_dir(content)
