"""Deterministic replay of recorded fixtures in place of a live transport."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import json
import logging
from pathlib import Path
import threading

from fixturepack.config import FixtureSettings, load_settings
from fixturepack.core.models import WireRequest, WireResponse, endpoint_key
from fixturepack.fixtures.counter import CallCounter
from fixturepack.fixtures.exceptions import FixtureParseError
from fixturepack.fixtures.store import FixtureStore
from fixturepack.matching import RequestMatcher, ValidationMode
from fixturepack.replay.exceptions import (
    FixtureNotFound,
    NoURL,
    RequestNotRecorded,
    ValidationFailed,
)
from fixturepack.replay.resolvers import FixtureResolver, Resolution, default_resolvers

logger = logging.getLogger(__name__)


class ReplaySession:
    """Transport replacement that answers requests from fixture files.

    Each endpoint key walks ``0.json, 1.json, ...`` in call order. When the
    next index is missing the counter resets to 0, and as a last resort the
    default folder is consulted.
    """

    def __init__(
        self,
        directory: str | Path,
        *,
        validation: ValidationMode | None = None,
        store: FixtureStore | None = None,
        counter: CallCounter | None = None,
        resolvers: Sequence[FixtureResolver] | None = None,
        settings_loader: Callable[[], FixtureSettings] = load_settings,
    ):
        self.store = store or FixtureStore(directory, settings_loader=settings_loader)
        self.validation = validation or ValidationMode.disabled()
        self.counter = counter or CallCounter()
        self.resolvers: tuple[FixtureResolver, ...] = (
            default_resolvers() if resolvers is None else tuple(resolvers)
        )
        self._matcher = RequestMatcher(self.validation.criteria)
        self._lock = threading.RLock()

    def send(self, request: WireRequest) -> WireResponse:
        if not request.path:
            raise NoURL(request)

        key = endpoint_key(request.path)
        with self._lock:
            for resolver in self.resolvers:
                resolution = resolver.resolve(key, self.store, self.counter)
                if resolution is not None:
                    return self._process(request, resolution)

            index = max(self.counter.current(key), 0)
            searched = self.store.fixture_path(key, index) or Path(key) / f"{index}.json"
            raise FixtureNotFound(searched, index)

    def close(self) -> None:
        return None

    def reset(self) -> None:
        """Forget all call counts so every endpoint starts again at index 0."""
        self.counter.clear()

    def _process(self, request: WireRequest, resolution: Resolution) -> WireResponse:
        fixture = resolution.fixture
        logger.debug(
            "replaying %s %s from %s (%s)",
            request.method,
            request.path,
            fixture.source,
            resolution.strategy,
        )

        if self.validation.enabled:
            if fixture.request is None:
                raise RequestNotRecorded(request, fixture.source)
            try:
                recorded = WireRequest.from_fixture_dict(fixture.request)
            except ValueError as error:
                data = fixture.source.read_bytes() if fixture.source is not None else b""
                raise FixtureParseError(
                    fixture.source or Path(),
                    data,
                    reason=str(error),
                ) from error

            result = self._matcher.explain(request, recorded)
            if not result.matched:
                raise ValidationFailed(request, result, fixture.source)

        body = json.dumps(fixture.response, ensure_ascii=False, separators=(",", ":"))
        return WireResponse(status_code=fixture.status, body=body.encode("utf-8"))
