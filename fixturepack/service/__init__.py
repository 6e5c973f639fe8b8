"""Typed request layer for FixtureKit."""

from fixturepack.core.types import HTTPMethod
from fixturepack.service.client import ApiErrorResponse, ApiService
from fixturepack.service.errors import (
    ApiDomainError,
    ApiError,
    InvalidURL,
    RequestEncodingError,
    ResponseDecodingError,
    ResponseErrorFailedToDecode,
    ResponseFailedWithoutErrorBody,
    Unauthorized,
)
from fixturepack.service.request import EMPTY_BODY, ApiRequest

__all__ = [
    "EMPTY_BODY",
    "HTTPMethod",
    "ApiRequest",
    "ApiService",
    "ApiErrorResponse",
    "ApiError",
    "ApiDomainError",
    "InvalidURL",
    "RequestEncodingError",
    "ResponseDecodingError",
    "ResponseErrorFailedToDecode",
    "ResponseFailedWithoutErrorBody",
    "Unauthorized",
]
