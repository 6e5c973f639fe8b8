"""Core models and deterministic primitives for FixtureKit."""

from fixturepack.core.canonical import canonical_json, canonicalize
from fixturepack.core.models import (
    Fixture,
    JSONValue,
    WireRequest,
    WireResponse,
    endpoint_key,
)
from fixturepack.core.types import HTTP_METHODS, HTTPMethod

__all__ = [
    "Fixture",
    "JSONValue",
    "WireRequest",
    "WireResponse",
    "HTTP_METHODS",
    "HTTPMethod",
    "canonicalize",
    "canonical_json",
    "endpoint_key",
]
