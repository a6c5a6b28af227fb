"""Create temporary directory trees for tests from a declarative description."""

from temporary_fixture.exceptions import (
    TemporaryFixtureError,
    ConfigurationError,
    ValidationError,
    InvalidKindError,
    InvalidContentError,
    CycleDetectedError,
    FileOperationError,
    IllegalPathError,
    MissingSymlinkTargetError,
    HooksUnavailableError,
    TestDirCreationError,
)
from temporary_fixture.models import Fixture, FixtureType
from temporary_fixture.core import MaterializationContext, make, make_async
from temporary_fixture.services import (
    TestFixtures,
    TestFixturesAsync,
    test_fixtures,
    test_fixtures_async,
    make_test_dir,
    make_test_dir_async,
)

__version__ = "0.1.0"

__all__ = [
    "Fixture",
    "FixtureType",
    "MaterializationContext",
    "make",
    "make_async",
    "TestFixtures",
    "TestFixturesAsync",
    "test_fixtures",
    "test_fixtures_async",
    "make_test_dir",
    "make_test_dir_async",
    "TemporaryFixtureError",
    "ConfigurationError",
    "ValidationError",
    "InvalidKindError",
    "InvalidContentError",
    "CycleDetectedError",
    "FileOperationError",
    "IllegalPathError",
    "MissingSymlinkTargetError",
    "HooksUnavailableError",
    "TestDirCreationError",
]
