"""requests-backed live transport."""

from __future__ import annotations

import requests

from fixturepack.config import FixtureSettings, load_settings
from fixturepack.core.models import WireRequest, WireResponse
from fixturepack.transport.base import Transport, TransportError


class RequestsTransport(Transport):
    """Synchronous requests.Session wrapper."""

    def __init__(self, settings: FixtureSettings | None = None, session: requests.Session | None = None):
        self.settings = settings or load_settings()
        self._session = session or requests.Session()

    def send(self, request: WireRequest) -> WireResponse:
        try:
            response = self._session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=self.settings.http_timeout,
            )
        except requests.RequestException as error:
            raise TransportError(f"{request.method} {request.url} failed: {error}") from error

        return WireResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self._session.close()
