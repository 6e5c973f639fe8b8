"""Replay subsystem exceptions."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from fixturepack.core.models import WireRequest

if TYPE_CHECKING:
    from fixturepack.matching.matcher import MatchResult


class ReplayError(Exception):
    """Base class for replay errors."""


class NoURL(ReplayError):
    """The request has no usable target path."""

    def __init__(self, request: WireRequest | None = None):
        self.request = request
        super().__init__("Incoming mock request has no URL")


class FixtureNotFound(ReplayError):
    """Every resolution strategy missed."""

    def __init__(self, path: Path | str, index: int):
        self.path = Path(path)
        self.index = index
        super().__init__(f"Failed to find mock response at: {self.path} or the default folder")


class RequestNotRecorded(ReplayError):
    """Validation is enabled but the fixture carries no ``request``."""

    def __init__(self, request: WireRequest, fixture_path: Path | None = None):
        self.request = request
        self.fixture_path = fixture_path
        super().__init__(f"Mock request not found for {request.method} request {request.path}")


class ValidationFailed(ReplayError):
    """The live request does not match the recorded one."""

    def __init__(
        self,
        request: WireRequest,
        result: "MatchResult | None" = None,
        fixture_path: Path | None = None,
    ):
        self.request = request
        self.result = result
        self.fixture_path = fixture_path
        super().__init__(f"Request validation failed for {request.method} request {request.path}")
