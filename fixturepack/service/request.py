"""Typed request definitions and their conversion to wire requests."""

from __future__ import annotations

import dataclasses
import json
from typing import Any
from urllib.parse import urlencode, urlsplit

from fixturepack.core.models import WireRequest
from fixturepack.core.types import HTTPMethod
from fixturepack.service.errors import InvalidURL, RequestEncodingError


class _EmptyBody:
    """Marker for requests and responses without a body."""

    _instance: "_EmptyBody | None" = None

    def __new__(cls) -> "_EmptyBody":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY_BODY"


EMPTY_BODY = _EmptyBody()


class ApiRequest:
    """Base class for a typed request.

    Subclasses set ``method`` and ``path`` and may provide ``body``,
    ``headers`` and ``queries``; override ``decode_response`` to turn the
    decoded JSON payload into a richer type.
    """

    method: HTTPMethod = HTTPMethod.GET
    path: str = ""
    body: Any = EMPTY_BODY
    headers: dict[str, str] | None = None
    queries: list[tuple[str, str]] | None = None

    def encode_body(self, encoder: type[json.JSONEncoder] | None = None) -> bytes | None:
        if self.body is EMPTY_BODY or self.body is None:
            return None
        payload = self.body
        if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
            payload = dataclasses.asdict(payload)
        try:
            return json.dumps(payload, cls=encoder).encode("utf-8")
        except (TypeError, ValueError) as error:
            raise RequestEncodingError(f"Failed to encode request body: {error}") from error

    def build_url(self, base_url: str) -> str:
        url = base_url + self.path
        if any(char.isspace() for char in url):
            raise InvalidURL(url)
        try:
            urlsplit(url)
        except ValueError as error:
            raise InvalidURL(url) from error
        if self.queries:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{urlencode(self.queries)}"
        return url

    def to_wire_request(
        self,
        base_url: str,
        *,
        access_token: str | None = None,
        default_headers: dict[str, str] | None = None,
        encoder: type[json.JSONEncoder] | None = None,
    ) -> WireRequest:
        headers = {**(default_headers or {}), **(self.headers or {})}
        if access_token is not None:
            headers["Authorization"] = f"Bearer {access_token}"
        method = self.method.value if isinstance(self.method, HTTPMethod) else str(self.method)
        return WireRequest(
            method=method,
            url=self.build_url(base_url),
            headers=headers,
            body=self.encode_body(encoder),
        )

    def decode_response(self, payload: Any) -> Any:
        return payload
