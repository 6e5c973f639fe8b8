"""Request validation subsystem for FixtureKit."""

from fixturepack.matching.criteria import (
    ALL_CRITERIA,
    Criterion,
    MatchBody,
    MatchBodyIgnoring,
    MatchHeaders,
    MatchHeadersIgnoring,
    ValidationCriteria,
    ValidationMode,
)
from fixturepack.matching.exceptions import RequestMatchError
from fixturepack.matching.matcher import MatchResult, RequestMatcher

__all__ = [
    "ALL_CRITERIA",
    "Criterion",
    "MatchBody",
    "MatchBodyIgnoring",
    "MatchHeaders",
    "MatchHeadersIgnoring",
    "MatchResult",
    "RequestMatchError",
    "RequestMatcher",
    "ValidationCriteria",
    "ValidationMode",
]
