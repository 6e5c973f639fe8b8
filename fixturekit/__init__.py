"""Stable public API surface for FixtureKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from fixturepack import __version__
from fixturepack.capture import CaptureSession
from fixturepack.core.models import Fixture, WireRequest, WireResponse, endpoint_key
from fixturepack.fixtures import CallCounter, FixtureError, FixtureParseError, FixtureStore
from fixturepack.matching import (
    ALL_CRITERIA,
    Criterion,
    MatchBody,
    MatchBodyIgnoring,
    MatchHeaders,
    MatchHeadersIgnoring,
    RequestMatchError,
    RequestMatcher,
    ValidationCriteria,
    ValidationMode,
)
from fixturepack.replay import (
    FixtureNotFound,
    NoURL,
    ReplayError,
    ReplaySession,
    RequestNotRecorded,
    ValidationFailed,
)
from fixturepack.service import ApiRequest, ApiService, HTTPMethod
from fixturepack.transport import Transport, TransportError, create_default_transport


def replay_session(
    directory: str | Path,
    *,
    criteria: Iterable[Criterion] | None = None,
) -> ReplaySession:
    """Build a replay session over ``directory``.

    Args:
        directory: Folder holding ``{key}/{index}.json`` fixtures.
        criteria: Validation criteria. ``None`` disables request validation;
            an empty iterable still checks method and path.

    Returns:
        A session usable anywhere a ``Transport`` is expected.
    """
    validation = ValidationMode.disabled() if criteria is None else ValidationMode.match(criteria)
    return ReplaySession(directory, validation=validation)


def capture_session(transport: Transport | None = None) -> CaptureSession:
    """Build a capture session that records into ``$mock_responses/-recorded``.

    Args:
        transport: Live transport to forward to. Defaults to the httpx one.
    """
    return CaptureSession(transport or create_default_transport())


__all__ = [
    "__version__",
    "ALL_CRITERIA",
    "ApiRequest",
    "ApiService",
    "CallCounter",
    "CaptureSession",
    "Criterion",
    "Fixture",
    "FixtureError",
    "FixtureNotFound",
    "FixtureParseError",
    "FixtureStore",
    "HTTPMethod",
    "MatchBody",
    "MatchBodyIgnoring",
    "MatchHeaders",
    "MatchHeadersIgnoring",
    "NoURL",
    "ReplayError",
    "ReplaySession",
    "RequestMatchError",
    "RequestMatcher",
    "RequestNotRecorded",
    "Transport",
    "TransportError",
    "ValidationCriteria",
    "ValidationFailed",
    "ValidationMode",
    "WireRequest",
    "WireResponse",
    "capture_session",
    "endpoint_key",
    "replay_session",
]
