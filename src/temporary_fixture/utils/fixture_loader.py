"""Load fixture descriptions from YAML documents.

Plain YAML maps onto the implicit fixture rules: strings are files and
mappings are directories. ``!!binary`` yields bytes. Explicit nodes use the
tags ``!file``, ``!dir``, ``!link`` and ``!symlink``::

    README.md: '# demo'
    packages:
      pkg:
        setup.cfg: ''
    docs: !symlink packages
    readme-copy: !link README.md
"""

import logging
from pathlib import Path
from typing import Union

import yaml

from temporary_fixture.exceptions import FileOperationError, ValidationError
from temporary_fixture.models.fixture import Fixture, FixtureType

logger = logging.getLogger(__name__)


class FixtureLoader(yaml.SafeLoader):
    """SafeLoader that understands the fixture tags."""


def _construct_scalar_fixture(kind: FixtureType):
    def constructor(loader: FixtureLoader, node: yaml.Node) -> Fixture:
        return Fixture(kind, loader.construct_scalar(node))
    return constructor


def _construct_dir_fixture(loader: FixtureLoader, node: yaml.Node) -> Fixture:
    return Fixture(FixtureType.DIR, loader.construct_mapping(node, deep=True))


FixtureLoader.add_constructor('!file', _construct_scalar_fixture(FixtureType.FILE))
FixtureLoader.add_constructor('!link', _construct_scalar_fixture(FixtureType.LINK))
FixtureLoader.add_constructor('!symlink', _construct_scalar_fixture(FixtureType.SYMLINK))
FixtureLoader.add_constructor('!dir', _construct_dir_fixture)


def load_fixture(text: str, source: str = "<string>") -> Fixture:
    """
    Parse a YAML fixture document.

    Args:
        text: YAML source
        source: Name used in error messages

    Returns:
        The root directory fixture

    Raises:
        ValidationError: If the document is not valid YAML or not a valid fixture
    """
    try:
        data = yaml.load(text, Loader=FixtureLoader)
    except yaml.YAMLError as e:
        raise ValidationError(
            f"Failed to parse fixture file {source}: {e}",
            suggestion="Check the YAML syntax of the fixture file."
        ) from e

    if data is None:
        data = {}

    if isinstance(data, Fixture):
        if data.type is not FixtureType.DIR:
            raise ValidationError(
                f"The top level of {source} must be a directory, got {data}"
            )
        return data

    if not isinstance(data, dict):
        raise ValidationError(
            f"The top level of {source} must be a mapping of entry names",
            suggestion="Start the file with 'name: content' entries."
        )

    return Fixture(FixtureType.DIR, data)


def load_fixture_file(path: Union[str, Path]) -> Fixture:
    """
    Read and parse a YAML fixture file.

    Raises:
        FileOperationError: If the file cannot be read
        ValidationError: If the content is not a valid fixture
    """
    try:
        text = Path(path).read_text(encoding='utf-8')
    except FileNotFoundError:
        raise FileOperationError(
            f"Fixture file not found: {path}",
            filepath=str(path),
            suggestion="Check that the file exists and the path is correct."
        ) from None
    except (OSError, UnicodeDecodeError) as e:
        raise FileOperationError(
            f"Failed to read fixture file: {e}",
            filepath=str(path)
        ) from e

    logger.debug(f"Loaded fixture file {path}")
    return load_fixture(text, source=str(path))
