"""Fixture storage exceptions."""

from __future__ import annotations

from pathlib import Path


class FixtureError(Exception):
    """Base class for fixture storage errors."""


class FixtureParseError(FixtureError):
    """A fixture file exists but is not a usable fixture document."""

    def __init__(self, path: Path, data: bytes, reason: str | None = None):
        self.path = path
        self.data = data
        self.reason = reason
        super().__init__(
            f"Failed to parse mock response: {data.decode('utf-8', errors='replace')}"
        )


class FixtureStoreConfigError(FixtureError):
    """The fixture root needed for default lookup or capture is not configured."""
