"""Containment state for a single materialization."""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from typing import Dict, Iterator, Set, Tuple

from temporary_fixture.exceptions import IllegalPathError

logger = logging.getLogger(__name__)


def normalize_path(path) -> str:
    """Return an absolute path with ``.`` and ``..`` segments collapsed.

    Resolution is lexical; symlinks on disk are not followed.
    """
    return os.path.normpath(os.path.abspath(os.fspath(path)))


def resolve_link_target(link_path: str, target: str) -> str:
    """Resolve ``target`` against the directory containing ``link_path``."""
    return normalize_path(os.path.join(os.path.dirname(link_path), target))


def default_allowed_paths() -> Set[str]:
    return {normalize_path(os.getcwd()), normalize_path(tempfile.gettempdir())}


@dataclass
class MaterializationContext:
    """Allowed parents and deferred symlinks for one top-level call.

    A fresh context starts with the working directory and the OS temp
    directory as the only legal parents.
    """
    allowed_paths: Set[str] = field(default_factory=default_allowed_paths)
    symlinks: Dict[str, str] = field(default_factory=dict)

    def assert_allowed(self, path: str) -> None:
        """Require the immediate parent of ``path`` to be an allowed directory.

        Raises:
            IllegalPathError: If the parent is not in the allowed set
        """
        parent = os.path.dirname(path)
        if parent not in self.allowed_paths:
            logger.debug(f"Rejected path {path}: parent {parent} is not allowed")
            raise IllegalPathError(parent, self.allowed_paths)

    def enter_root(self, path: str) -> None:
        """Collapse the boundary to the freshly created root directory."""
        self.allowed_paths.clear()
        self.allowed_paths.add(path)

    def allow(self, path: str) -> None:
        self.allowed_paths.add(path)

    def defer_symlink(self, link_path: str, target: str) -> None:
        self.symlinks[link_path] = target

    def pending_symlinks(self) -> Iterator[Tuple[str, str]]:
        """Yield deferred symlinks in recording order, each checked against the boundary."""
        for link_path, target in self.symlinks.items():
            self.assert_allowed(link_path)
            self.assert_allowed(target)
            yield link_path, target
