"""Record live traffic into the fixture layout replay reads."""

from __future__ import annotations

import logging
import threading

from fixturepack.core.models import WireRequest, WireResponse, endpoint_key
from fixturepack.fixtures.exceptions import FixtureError
from fixturepack.fixtures.store import FixtureStore
from fixturepack.transport.base import Transport

logger = logging.getLogger(__name__)


class CaptureSession:
    """Forward requests to a live transport and persist each exchange.

    Recording problems never change what the caller sees: the live response
    is returned whether or not it was written to disk.
    """

    def __init__(self, transport: Transport, *, store: FixtureStore | None = None):
        self.transport = transport
        self.store = store or FixtureStore()
        self._lock = threading.RLock()

    def send(self, request: WireRequest) -> WireResponse:
        response = self.transport.send(request)
        self.record(request, response)
        return response

    def record(self, request: WireRequest, response: WireResponse) -> int | None:
        """Persist one exchange; return the fixture index or ``None`` on failure."""
        key = endpoint_key(request.path)
        with self._lock:
            try:
                index = self.store.append(key, request, response)
            except (OSError, FixtureError, ValueError) as error:
                logger.error("failed to record %s %s: %s", request.method, request.path, error)
                return None

        logger.info("recorded %s %s to %s", request.method, request.path, self.store.record_path(key, index))
        return index

    def close(self) -> None:
        self.transport.close()
