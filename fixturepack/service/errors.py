"""Errors raised while building requests or classifying responses."""

from __future__ import annotations

from typing import Any

from fixturepack.core.models import WireResponse


class ApiError(Exception):
    """Base class for service-layer errors."""


class InvalidURL(ApiError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid request URL: {url!r}")


class RequestEncodingError(ApiError):
    """The request body could not be encoded as JSON."""


class Unauthorized(ApiError):
    def __init__(self, response: WireResponse):
        self.response = response
        super().__init__("Request was rejected as unauthorized (401)")


class ResponseFailedWithoutErrorBody(ApiError):
    def __init__(self, response: WireResponse):
        self.response = response
        super().__init__(f"Request failed with status {response.status_code} and no error body")


class ResponseErrorFailedToDecode(ApiError):
    def __init__(self, response: WireResponse, cause: Exception):
        self.response = response
        self.cause = cause
        super().__init__(
            f"Request failed with status {response.status_code}; "
            f"error body could not be decoded: {cause}"
        )


class ResponseDecodingError(ApiError):
    """A successful response body could not be decoded."""


class ApiDomainError(ApiError):
    """The service answered with a decodable error body."""

    def __init__(self, error: Any, response: WireResponse):
        self.error = error
        self.response = response
        super().__init__(f"Request failed with status {response.status_code}: {error}")
