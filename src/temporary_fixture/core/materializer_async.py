"""Asyncio variant of the fixture materializer."""

import logging
import os
import stat
from typing import Any, Optional

import aiofiles
import aiofiles.os

from temporary_fixture.core.context import (
    MaterializationContext,
    normalize_path,
    resolve_link_target,
)
from temporary_fixture.exceptions import FileOperationError, MissingSymlinkTargetError
from temporary_fixture.models.fixture import FixtureType, raw_to_fixture
from temporary_fixture.utils.file_utils import encode_content, file_operation

logger = logging.getLogger(__name__)


async def make_async(path, content: Any, context: Optional[MaterializationContext] = None,
                     encoding: str = 'utf-8') -> str:
    """
    Create the filesystem structure described by ``content`` at ``path``.

    Same semantics as :func:`temporary_fixture.core.materializer.make`. Each
    filesystem operation is awaited in turn; entries are processed one at a
    time, depth-first, in mapping order.
    """
    normalized_path = normalize_path(path)
    fixture = raw_to_fixture(content)

    is_root = context is None
    if is_root:
        context = MaterializationContext()

    if fixture.type is FixtureType.DIR:
        context.assert_allowed(normalized_path)
        with file_operation("create directory", normalized_path):
            await aiofiles.os.makedirs(normalized_path, exist_ok=True)
        logger.debug(f"Created directory {normalized_path}")

        if is_root:
            context.enter_root(normalized_path)
        else:
            context.allow(normalized_path)

        for name, nested in fixture.content.items():
            await make_async(os.path.join(normalized_path, name), nested, context, encoding)

    elif fixture.type is FixtureType.FILE:
        context.assert_allowed(normalized_path)
        with file_operation("write file", normalized_path):
            async with aiofiles.open(normalized_path, 'wb') as f:
                await f.write(encode_content(fixture.content, encoding))
        logger.debug(f"Wrote file {normalized_path}")

    elif fixture.type is FixtureType.LINK:
        existing_path = resolve_link_target(normalized_path, fixture.content)
        context.assert_allowed(existing_path)
        context.assert_allowed(normalized_path)
        with file_operation("create hard link", normalized_path):
            await aiofiles.os.link(existing_path, normalized_path)
        logger.debug(f"Linked {normalized_path} -> {existing_path}")

    elif fixture.type is FixtureType.SYMLINK:
        context.defer_symlink(normalized_path, resolve_link_target(normalized_path, fixture.content))

    if is_root:
        await create_symlinks_async(context)

    return normalized_path


async def create_symlinks_async(context: MaterializationContext) -> None:
    """Create every deferred symlink of ``context``."""
    for symlink_path, target in context.pending_symlinks():
        try:
            stats = await aiofiles.os.stat(target)
        except FileNotFoundError as e:
            raise MissingSymlinkTargetError(symlink_path, target) from e
        except OSError as e:
            raise FileOperationError(
                f"Failed to inspect symlink target: {e}", filepath=target
            ) from e

        with file_operation("create symlink", symlink_path):
            await aiofiles.os.symlink(
                target, symlink_path, target_is_directory=stat.S_ISDIR(stats.st_mode)
            )
        logger.debug(f"Symlinked {symlink_path} -> {target}")
