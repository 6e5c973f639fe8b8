"""Transport protocol shared by live clients and fixture sessions."""

from __future__ import annotations

from typing import Protocol

from fixturepack.core.models import WireRequest, WireResponse


class TransportError(Exception):
    """A live transport failed before producing a response."""


class Transport(Protocol):
    """Minimal protocol for sending a wire request."""

    def send(self, request: WireRequest) -> WireResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...
