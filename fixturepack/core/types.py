"""Type definitions for FixtureKit core models."""

from enum import Enum


class HTTPMethod(str, Enum):
    DELETE = "DELETE"
    GET = "GET"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"


HTTP_METHODS: tuple[str, ...] = tuple(method.value for method in HTTPMethod)
