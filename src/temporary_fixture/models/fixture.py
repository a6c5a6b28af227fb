"""Data model describing a filesystem node to be created."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union

from temporary_fixture.exceptions import (
    CycleDetectedError,
    InvalidContentError,
    InvalidKindError,
)

FileContent = Union[str, bytes, bytearray]

_FILE_TYPES = (str, bytes, bytearray)


class FixtureType(str, Enum):
    """Kinds of filesystem nodes a fixture can describe."""
    FILE = "file"
    DIR = "dir"
    LINK = "link"
    SYMLINK = "symlink"

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        name = value.lower()
        aliases = {"directory": cls.DIR, "hardlink": cls.LINK}
        if name in aliases:
            return aliases[name]
        for member in cls:
            if member.value == name:
                return member
        return None


@dataclass(frozen=True, eq=False, init=False)
class Fixture:
    """A single node of a fixture tree.

    Directories hold a mapping from entry name to either a raw value
    (``str``/``bytes`` for files, a mapping for directories) or another
    ``Fixture``. Links hold their target path.
    """
    type: FixtureType
    content: Any

    def __init__(self, type: Union[FixtureType, str], content: Any):
        try:
            kind = FixtureType(type)
        except ValueError:
            raise InvalidKindError(type) from None

        assert_valid_content(kind, content)

        object.__setattr__(self, "type", kind)
        object.__setattr__(self, "content", content)

    def __str__(self):
        return f"Fixture<{self.type.value}>"


def raw_to_type(content: Any) -> FixtureType:
    """Classify a raw fixture value."""
    if isinstance(content, Fixture):
        return content.type
    if isinstance(content, _FILE_TYPES):
        return FixtureType.FILE
    if isinstance(content, Mapping):
        return FixtureType.DIR
    raise InvalidContentError(
        f"Invalid fixture content: {content!r}",
        content=content,
        suggestion="Use a string or bytes for files, a mapping for directories, "
                   "or a Fixture for links."
    )


def raw_to_fixture(content: Any) -> Fixture:
    """Return ``content`` as a Fixture, validating raw values."""
    if isinstance(content, Fixture):
        return content
    return Fixture(raw_to_type(content), content)


def assert_valid_content(kind: FixtureType, content: Any) -> None:
    """Validate ``content`` against ``kind``.

    Raises:
        InvalidContentError: If the content shape does not match the kind
        CycleDetectedError: If a directory mapping contains itself
    """
    if kind is FixtureType.DIR:
        if not isinstance(content, Mapping):
            raise InvalidContentError(
                "A 'dir' fixture must have a mapping as content", content=content
            )
        validate_dir_contents(content, (content,))
    elif kind is FixtureType.FILE:
        if not isinstance(content, _FILE_TYPES):
            raise InvalidContentError(
                "A 'file' fixture must have a str, or bytes as content", content=content
            )
    elif kind in (FixtureType.LINK, FixtureType.SYMLINK):
        if not isinstance(content, str) or not content:
            raise InvalidContentError(
                f"A '{kind.value}' fixture must have a non-empty target of type str",
                content=content
            )
    else:
        raise InvalidKindError(kind)


def validate_dir_contents(content: Mapping, ancestors: Tuple[Mapping, ...]) -> None:
    """Recursively validate a directory mapping.

    ``ancestors`` holds the mappings on the path from the root to
    ``content``. A mapping appearing twice on that path is a cycle; the same
    mapping used at two sibling positions is not.
    """
    for name, entry in content.items():
        _validate_entry_name(name)

        kind = raw_to_type(entry)
        if kind is not FixtureType.DIR:
            continue

        nested = entry.content if isinstance(entry, Fixture) else entry
        if any(nested is ancestor for ancestor in ancestors):
            raise CycleDetectedError(name)

        validate_dir_contents(nested, ancestors + (nested,))


def _validate_entry_name(name: Any) -> None:
    separators = {os.sep, "/"}
    if os.altsep:
        separators.add(os.altsep)

    if (
        not isinstance(name, str)
        or name in ("", ".", "..")
        or any(sep in name for sep in separators)
    ):
        raise InvalidContentError(
            f"Invalid fixture entry name: {name!r}",
            content=name,
            suggestion="Entry names must be non-empty strings without path separators."
        )
