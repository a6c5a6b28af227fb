"""Temporary test directories created with asyncio."""

from typing import Any, Optional

from aiofiles.os import wrap

from temporary_fixture.core.materializer_async import make_async
from temporary_fixture.exceptions import TestDirCreationError
from temporary_fixture.services.base_service import BaseTestFixtures
from temporary_fixture.utils.file_utils import FileUtils

create_temp_root_async = wrap(FileUtils.create_temp_root)


class TestFixturesAsync(BaseTestFixtures):
    """Async counterpart of TestFixtures; cleanup stays synchronous."""

    async def create_test_dir(self, content: Optional[Any] = None) -> str:
        """
        Create a temporary directory and fill it with ``content``.

        Raises:
            TestDirCreationError: If allocation or materialization fails
        """
        try:
            self.config.validate()
            directory = await create_temp_root_async(self.temp_prefix)
            self._start(directory)
            await make_async(directory, content or {}, encoding=self.encoding)
        except Exception as e:
            raise TestDirCreationError(e) from e

        self._created_test_dir = True
        self.logger.info(f"Created test directory {directory}")
        return directory


test_fixtures_async = TestFixturesAsync()


async def make_test_dir_async(content: Optional[Any] = None) -> str:
    """Create a temporary test directory, optionally adding contents.

    The directory is removed when the running pytest test finishes. To keep
    it, set ``test_fixtures_async.keep_fixture = True`` before awaiting this.
    """
    return await test_fixtures_async.create_test_dir(content)
