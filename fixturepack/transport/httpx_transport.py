"""httpx-backed live transport."""

from __future__ import annotations

import httpx

from fixturepack.config import FixtureSettings, load_settings
from fixturepack.core.models import WireRequest, WireResponse
from fixturepack.transport.base import Transport, TransportError


class HttpxTransport(Transport):
    """Synchronous httpx client wrapper."""

    def __init__(self, settings: FixtureSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_settings()
        self._client = client or httpx.Client(timeout=self.settings.http_timeout)

    def send(self, request: WireRequest) -> WireResponse:
        try:
            response = self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.HTTPError as error:
            raise TransportError(f"{request.method} {request.url} failed: {error}") from error

        return WireResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self._client.close()
