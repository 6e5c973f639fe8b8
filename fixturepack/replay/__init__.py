"""Replay subsystem for FixtureKit."""

from fixturepack.replay.exceptions import (
    FixtureNotFound,
    NoURL,
    ReplayError,
    RequestNotRecorded,
    ValidationFailed,
)
from fixturepack.replay.resolvers import (
    DefaultFixtureResolver,
    FirstIndexResolver,
    FixtureResolver,
    NextIndexResolver,
    Resolution,
    default_resolvers,
)
from fixturepack.replay.session import ReplaySession

__all__ = [
    "ReplayError",
    "NoURL",
    "FixtureNotFound",
    "RequestNotRecorded",
    "ValidationFailed",
    "FixtureResolver",
    "NextIndexResolver",
    "FirstIndexResolver",
    "DefaultFixtureResolver",
    "Resolution",
    "default_resolvers",
    "ReplaySession",
]
