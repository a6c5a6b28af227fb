"""File system utilities for temporary fixtures."""

import errno
import logging
import os
import shutil
import sys
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from temporary_fixture.exceptions import FileOperationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_TEMP_PREFIX = "tmpfixture_"


@contextmanager
def file_operation(action: str, filepath: PathLike) -> Iterator[None]:
    """Translate OS errors raised inside the block into FileOperationError."""
    try:
        yield
    except FileOperationError:
        raise
    except PermissionError as e:
        raise FileOperationError(
            f"Permission denied when trying to {action}: {filepath}",
            filepath=str(filepath),
            suggestion="Check directory permissions or choose a different location."
        ) from e
    except FileExistsError as e:
        raise FileOperationError(
            f"Cannot {action}, path already exists: {filepath}",
            filepath=str(filepath),
            suggestion="Fixture roots must be fresh, empty directories."
        ) from e
    except FileNotFoundError as e:
        raise FileOperationError(
            f"Cannot {action}, no such file or directory: {e.filename or filepath}",
            filepath=str(filepath),
            suggestion="Check that link targets are declared before the links that use them."
        ) from e
    except OSError as e:
        raise FileOperationError(
            f"Failed to {action}: {e}",
            filepath=str(filepath),
            suggestion="Check that the path is valid and the parent directory exists."
        ) from e


class FileUtils:
    """Utility functions for file system operations."""

    @staticmethod
    def ensure_directory_exists(directory: PathLike) -> None:
        """
        Ensure directory exists, create if necessary.

        Args:
            directory: Directory path

        Raises:
            FileOperationError: If directory cannot be created
        """
        with file_operation("create directory", directory):
            os.makedirs(directory, exist_ok=True)

    @staticmethod
    def write_file_safely(file_path: PathLike, data: bytes) -> None:
        """
        Write bytes to a file, replacing any existing content.

        Args:
            file_path: Path to file
            data: Bytes to write

        Raises:
            FileOperationError: If file cannot be written
        """
        with file_operation("write file", file_path):
            with open(file_path, 'wb') as f:
                f.write(data)

    @staticmethod
    def create_hard_link(target: PathLike, link_path: PathLike) -> None:
        with file_operation("create hard link", link_path):
            os.link(target, link_path)

    @staticmethod
    def create_symlink(target: PathLike, link_path: PathLike, target_is_directory: bool) -> None:
        with file_operation("create symlink", link_path):
            os.symlink(target, link_path, target_is_directory=target_is_directory)

    @staticmethod
    def create_temp_root(prefix: str = DEFAULT_TEMP_PREFIX) -> str:
        """
        Allocate a fresh, empty directory under the OS temp directory.

        Args:
            prefix: Name prefix for the directory

        Returns:
            Absolute path of the new directory
        """
        with file_operation("create temporary directory", tempfile.gettempdir()):
            path = tempfile.mkdtemp(prefix=prefix)
        logger.debug(f"Allocated temporary directory: {path}")
        return os.path.abspath(path)

    @staticmethod
    def remove_tree(directory: PathLike) -> None:
        """
        Recursively delete a directory tree.

        Entries that are already gone are ignored, so a partially or fully
        removed tree is not an error.

        Raises:
            FileOperationError: If an existing entry cannot be removed
        """
        def _ignore_missing(func, path, exc):
            # onerror passes an exc_info tuple, onexc the exception itself
            error = exc[1] if isinstance(exc, tuple) else exc
            if isinstance(error, OSError) and error.errno == errno.ENOENT:
                return
            raise error

        if not os.path.lexists(directory):
            return

        with file_operation("remove directory", directory):
            if os.path.isdir(directory) and not os.path.islink(directory):
                if sys.version_info >= (3, 12):
                    shutil.rmtree(directory, onexc=_ignore_missing)
                else:
                    shutil.rmtree(directory, onerror=_ignore_missing)
            else:
                os.unlink(directory)
        logger.debug(f"Removed directory: {directory}")


def encode_content(content, encoding: str = 'utf-8') -> bytes:
    """Return file fixture content as bytes."""
    if isinstance(content, str):
        return content.encode(encoding)
    return bytes(content)
