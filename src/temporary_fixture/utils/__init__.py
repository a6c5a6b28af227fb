"""Utility functions for temporary fixtures."""

from .file_utils import FileUtils, encode_content, file_operation
from .fixture_loader import FixtureLoader, load_fixture, load_fixture_file
from .user_feedback import UserFeedback, StatusIcon, build_fixture_tree

__all__ = [
    "FileUtils",
    "encode_content",
    "file_operation",
    "FixtureLoader",
    "load_fixture",
    "load_fixture_file",
    "UserFeedback",
    "StatusIcon",
    "build_fixture_tree",
]
