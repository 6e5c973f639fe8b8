"""Ordered fixture resolution strategies used by ``ReplaySession``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from fixturepack.core.models import Fixture
from fixturepack.fixtures.counter import CallCounter
from fixturepack.fixtures.store import FixtureStore


@dataclass(frozen=True, slots=True)
class Resolution:
    fixture: Fixture
    strategy: str
    index: int | None = None


class FixtureResolver(Protocol):
    name: str

    def resolve(self, key: str, store: FixtureStore, counter: CallCounter) -> Resolution | None: ...


class NextIndexResolver:
    """Advance the endpoint counter and read that index."""

    name = "next-index"

    def resolve(self, key: str, store: FixtureStore, counter: CallCounter) -> Resolution | None:
        index = counter.advance(key)
        fixture = store.resolve(key, index)
        if fixture is None:
            return None
        return Resolution(fixture=fixture, strategy=self.name, index=index)


class FirstIndexResolver:
    """Reset the endpoint counter and read index 0."""

    name = "first-index"

    def resolve(self, key: str, store: FixtureStore, counter: CallCounter) -> Resolution | None:
        index = counter.reset(key)
        fixture = store.resolve(key, index)
        if fixture is None:
            return None
        return Resolution(fixture=fixture, strategy=self.name, index=index)


class DefaultFixtureResolver:
    """Read the un-numbered fixture from the default folder."""

    name = "default"

    def resolve(self, key: str, store: FixtureStore, counter: CallCounter) -> Resolution | None:
        fixture = store.resolve_default(key)
        if fixture is None:
            return None
        return Resolution(fixture=fixture, strategy=self.name)


def default_resolvers() -> tuple[FixtureResolver, ...]:
    return (NextIndexResolver(), FirstIndexResolver(), DefaultFixtureResolver())
