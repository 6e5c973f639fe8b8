"""Compare a live wire request with the request recorded in a fixture."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any

from fixturepack.core.models import WireRequest
from fixturepack.diff import ValueChange, collect_changes, structural_equal
from fixturepack.matching.criteria import ValidationCriteria
from fixturepack.matching.exceptions import RequestMatchError


@dataclass(slots=True)
class MatchResult:
    """Per-dimension verdict of a request comparison.

    ``headers`` and ``body`` are ``None`` when that dimension was not checked.
    """

    path: bool
    method: bool
    headers: bool | None = None
    body: bool | None = None
    changes: list[ValueChange] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return (
            self.path
            and self.method
            and self.headers is not False
            and self.body is not False
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "matched": self.matched,
            "path": self.path,
            "method": self.method,
            "headers": self.headers,
            "body": self.body,
            "changes": [change.to_dict() for change in self.changes],
        }


class RequestMatcher:
    """Structural request comparison driven by ``ValidationCriteria``."""

    def __init__(self, criteria: ValidationCriteria | None = None, *, max_changes: int = 32):
        self.criteria = criteria or ValidationCriteria()
        self.max_changes = max_changes

    def matches(self, live: WireRequest, recorded: WireRequest) -> bool:
        return self.explain(live, recorded).matched

    def explain(self, live: WireRequest, recorded: WireRequest) -> MatchResult:
        result = MatchResult(
            path=live.path == recorded.path,
            method=live.method == recorded.method,
        )
        if not result.path:
            result.changes.append(ValueChange(path="/path", left=recorded.path, right=live.path))
        if not result.method:
            result.changes.append(
                ValueChange(path="/httpMethod", left=recorded.method, right=live.method)
            )

        criteria = self.criteria
        if criteria.match_headers:
            recorded_headers = _filter_headers(recorded.headers, criteria.header_ignore_keys)
            live_headers = _filter_headers(live.headers, criteria.header_ignore_keys)
            result.headers = recorded_headers == live_headers
            if not result.headers:
                result.changes.extend(
                    collect_changes(
                        recorded_headers,
                        live_headers,
                        path="/headers",
                        max_changes=self.max_changes,
                    )
                )

        if criteria.match_body:
            recorded_body = _parse_body(recorded)
            live_body = _parse_body(live)
            result.body = structural_equal(recorded_body, live_body, criteria.body_ignore_keys)
            if not result.body:
                result.changes.extend(
                    collect_changes(
                        recorded_body,
                        live_body,
                        ignore_keys=criteria.body_ignore_keys,
                        path="/body",
                        max_changes=self.max_changes,
                    )
                )

        return result


def _filter_headers(headers: dict[str, str] | None, ignore_keys: frozenset[str]) -> dict[str, str]:
    return {key: value for key, value in (headers or {}).items() if key not in ignore_keys}


def _parse_body(request: WireRequest) -> Any:
    if not request.body:
        return {}
    try:
        return json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise RequestMatchError(
            f"Body of {request.method} request {request.path} is not valid JSON: {error}"
        ) from error
