"""Write fixture trees to disk inside a containment boundary."""

import logging
import os
import stat
from typing import Any, Optional

from temporary_fixture.core.context import (
    MaterializationContext,
    normalize_path,
    resolve_link_target,
)
from temporary_fixture.exceptions import FileOperationError, MissingSymlinkTargetError
from temporary_fixture.models.fixture import FixtureType, raw_to_fixture
from temporary_fixture.utils.file_utils import FileUtils, encode_content

logger = logging.getLogger(__name__)


def make(path, content: Any, context: Optional[MaterializationContext] = None,
         encoding: str = 'utf-8') -> str:
    """
    Create the filesystem structure described by ``content`` at ``path``.

    A call without ``context`` is a top-level call: it starts a fresh
    boundary of ``{cwd, tempdir}``, collapses it to ``path`` once a root
    directory is created, and creates all deferred symlinks at the end.
    Nested calls share the caller's context.

    Args:
        path: Where to create the node
        content: A Fixture, or a raw value (str/bytes for a file, a mapping
            for a directory)
        context: Containment state of the enclosing call
        encoding: Encoding used for text file content

    Returns:
        The normalized absolute path that was created

    Raises:
        ValidationError: If the fixture description is invalid
        IllegalPathError: If a path or link target escapes the boundary
        MissingSymlinkTargetError: If a symlink target does not exist
        FileOperationError: If the filesystem rejects an operation
    """
    normalized_path = normalize_path(path)
    fixture = raw_to_fixture(content)

    is_root = context is None
    if is_root:
        context = MaterializationContext()

    if fixture.type is FixtureType.DIR:
        context.assert_allowed(normalized_path)
        FileUtils.ensure_directory_exists(normalized_path)
        logger.debug(f"Created directory {normalized_path}")

        if is_root:
            context.enter_root(normalized_path)
        else:
            context.allow(normalized_path)

        for name, nested in fixture.content.items():
            make(os.path.join(normalized_path, name), nested, context, encoding)

    elif fixture.type is FixtureType.FILE:
        context.assert_allowed(normalized_path)
        FileUtils.write_file_safely(normalized_path, encode_content(fixture.content, encoding))
        logger.debug(f"Wrote file {normalized_path}")

    elif fixture.type is FixtureType.LINK:
        existing_path = resolve_link_target(normalized_path, fixture.content)
        context.assert_allowed(existing_path)
        context.assert_allowed(normalized_path)
        FileUtils.create_hard_link(existing_path, normalized_path)
        logger.debug(f"Linked {normalized_path} -> {existing_path}")

    elif fixture.type is FixtureType.SYMLINK:
        # Created after the walk so links may point at entries declared later.
        context.defer_symlink(normalized_path, resolve_link_target(normalized_path, fixture.content))

    if is_root:
        create_symlinks(context)

    return normalized_path


def create_symlinks(context: MaterializationContext) -> None:
    """Create every deferred symlink of ``context``."""
    for symlink_path, target in context.pending_symlinks():
        is_directory = _symlink_target_is_directory(symlink_path, target)
        FileUtils.create_symlink(target, symlink_path, is_directory)
        logger.debug(f"Symlinked {symlink_path} -> {target}")


def _symlink_target_is_directory(symlink_path: str, target: str) -> bool:
    try:
        stats = os.stat(target)
    except FileNotFoundError as e:
        raise MissingSymlinkTargetError(symlink_path, target) from e
    except OSError as e:
        raise FileOperationError(
            f"Failed to inspect symlink target: {e}", filepath=target
        ) from e
    return stat.S_ISDIR(stats.st_mode)
