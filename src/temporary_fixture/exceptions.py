"""Custom exception classes for temporary fixtures."""

from typing import Iterable, Optional, Tuple


class TemporaryFixtureError(Exception):
    """Base exception for all temporary fixture errors."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self):
        result = self.message
        if self.suggestion:
            result += f"\n\nSuggestion: {self.suggestion}"
        return result


class ConfigurationError(TemporaryFixtureError):
    """Raised when there are configuration-related issues."""
    pass


class ValidationError(TemporaryFixtureError):
    """Raised when a fixture description is malformed."""
    pass


class InvalidKindError(ValidationError):
    """Raised when a fixture is created with an unknown type tag."""

    def __init__(self, kind, suggestion: Optional[str] = None):
        super().__init__(
            f"Invalid fixture type: '{kind}'",
            suggestion or "Use one of 'file', 'dir', 'link' or 'symlink'."
        )
        self.kind = kind


class InvalidContentError(ValidationError):
    """Raised when fixture content does not match its declared type."""

    def __init__(self, message: str, content=None, suggestion: Optional[str] = None):
        super().__init__(message, suggestion)
        self.content = content


class CycleDetectedError(ValidationError):
    """Raised when a directory mapping is reachable from itself."""

    def __init__(self, entry: str, suggestion: Optional[str] = None):
        super().__init__(
            f"Cycle detected in fixture contents at '{entry}'",
            suggestion or "A directory may not contain itself; build a copy of the mapping instead."
        )
        self.entry = entry


class FileOperationError(TemporaryFixtureError):
    """Raised when file operations fail."""

    def __init__(self, message: str, filepath: Optional[str] = None, suggestion: Optional[str] = None):
        super().__init__(message, suggestion)
        self.filepath = filepath


class IllegalPathError(FileOperationError):
    """Raised when a path would be created or linked outside the allowed directories."""

    def __init__(self, filepath: str, allowed_paths: Iterable[str] = ()):
        self.allowed_paths: Tuple[str, ...] = tuple(sorted(allowed_paths))
        allowed = "\n".join(f"  - {p}" for p in self.allowed_paths) or "  (none)"
        super().__init__(
            f"Illegal path. Creating, or linking to, path '{filepath}' is not allowed.\n"
            f"Allowed paths are:\n{allowed}",
            filepath=filepath,
            suggestion="Fixtures may only create and link to entries inside the fixture root."
        )


class MissingSymlinkTargetError(FileOperationError):
    """Raised when a symlink target does not exist when links are created."""

    def __init__(self, filepath: str, target: str):
        super().__init__(
            f"Symlink target does not exist: {target}",
            filepath=filepath,
            suggestion="A fixture needs to be created in a subdirectory of the root; "
                       "check that the symlink points at an entry of the fixture."
        )
        self.target = target


class HooksUnavailableError(TemporaryFixtureError):
    """Raised when test lifecycle hooks are requested outside a running test."""
    pass


class TestDirCreationError(TemporaryFixtureError):
    """Raised when a temporary test directory cannot be allocated or filled."""

    __test__ = False

    PREFIX = "[TestFixtures.create_test_dir()] Failed to create test directory: "

    def __init__(self, original: BaseException, suggestion: Optional[str] = None):
        super().__init__(f"{self.PREFIX}{original}", suggestion)
        self.original = original
