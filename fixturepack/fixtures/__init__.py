"""Fixture storage subsystem for FixtureKit."""

from fixturepack.fixtures.counter import CallCounter
from fixturepack.fixtures.exceptions import (
    FixtureError,
    FixtureParseError,
    FixtureStoreConfigError,
)
from fixturepack.fixtures.store import (
    FixtureStore,
    decode_response_body,
    load_fixture,
    write_fixture,
)

__all__ = [
    "CallCounter",
    "FixtureError",
    "FixtureParseError",
    "FixtureStore",
    "FixtureStoreConfigError",
    "decode_response_body",
    "load_fixture",
    "write_fixture",
]
