"""Core data models for wire-level requests, responses and fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union
from urllib.parse import urlsplit

JSONValue = Union[None, bool, int, float, str, list["JSONValue"], dict[str, "JSONValue"]]

PATH_SEPARATOR = "/"
KEY_SEPARATOR = ":"


def endpoint_key(path: str) -> str:
    """Return the filesystem-safe fixture key for a request path."""
    return path.replace(PATH_SEPARATOR, KEY_SEPARATOR)


@dataclass(frozen=True, slots=True)
class WireRequest:
    """A fully assembled request as handed to a transport."""

    method: str
    url: str
    headers: dict[str, str] | None = None
    body: bytes | None = None

    @property
    def path(self) -> str:
        if self.url.startswith(PATH_SEPARATOR):
            # Bare path: a leading "//" is not a network location here.
            return urlsplit(f"http://localhost{self.url}").path
        return urlsplit(self.url).path

    @property
    def body_text(self) -> str | None:
        if self.body is None:
            return None
        return self.body.decode("utf-8", errors="replace")

    def to_fixture_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "httpMethod": self.method,
            "path": self.path,
            "headers": dict(self.headers) if self.headers is not None else None,
        }
        if self.body is not None:
            payload["body"] = self.body_text
        return payload

    @classmethod
    def from_fixture_dict(cls, raw: Any) -> "WireRequest":
        if not isinstance(raw, dict):
            raise ValueError("recorded request must be a JSON object")

        method = raw.get("httpMethod")
        path = raw.get("path")
        if not isinstance(method, str) or not isinstance(path, str):
            raise ValueError("recorded request requires string 'httpMethod' and 'path'")

        headers = raw.get("headers")
        if headers is not None:
            if not isinstance(headers, dict):
                raise ValueError("recorded request 'headers' must be an object or null")
            headers = {str(key): str(value) for key, value in headers.items()}

        body = raw.get("body")
        if body is not None and not isinstance(body, str):
            raise ValueError("recorded request 'body' must be a string")

        return cls(
            method=method,
            url=path,
            headers=headers,
            body=body.encode("utf-8") if body is not None else None,
        )


@dataclass(frozen=True, slots=True)
class WireResponse:
    """Status code and raw body returned by a transport or a fixture."""

    status_code: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@dataclass(slots=True)
class Fixture:
    """A recorded request/response pair loaded from or bound for disk."""

    status: int
    response: JSONValue = field(default_factory=dict)
    request: JSONValue | None = None
    source: Path | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "status": self.status,
            "response": self.response,
        }
        if self.request is not None:
            payload["request"] = self.request
        return payload

    @classmethod
    def from_dict(cls, raw: Any, *, source: Path | None = None) -> "Fixture":
        if not isinstance(raw, dict):
            raise ValueError("fixture must be a JSON object")
        status = raw.get("status")
        if isinstance(status, bool) or not isinstance(status, int):
            raise ValueError("fixture requires an integer 'status'")
        return cls(
            status=status,
            response=raw.get("response", {}),
            request=raw.get("request"),
            source=source,
        )
