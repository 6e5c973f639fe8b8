"""Live transports for FixtureKit."""

from fixturepack.config import FixtureSettings, load_settings
from fixturepack.transport.base import Transport, TransportError
from fixturepack.transport.httpx_transport import HttpxTransport
from fixturepack.transport.requests_transport import RequestsTransport


def create_default_transport(settings: FixtureSettings | None = None) -> Transport:
    """Factory for the default httpx-backed transport."""
    return HttpxTransport(settings or load_settings())


__all__ = [
    "HttpxTransport",
    "RequestsTransport",
    "Transport",
    "TransportError",
    "create_default_transport",
]
