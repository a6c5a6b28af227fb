"""Data models for temporary fixtures."""

from .fixture import (
    Fixture,
    FixtureType,
    FileContent,
    raw_to_fixture,
    raw_to_type,
)

__all__ = [
    "Fixture",
    "FixtureType",
    "FileContent",
    "raw_to_fixture",
    "raw_to_type",
]
