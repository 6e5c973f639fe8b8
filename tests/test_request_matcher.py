import json

import pytest

from fixturepack.core.models import WireRequest
from fixturepack.matching import (
    MatchBody,
    MatchBodyIgnoring,
    MatchHeaders,
    MatchHeadersIgnoring,
    RequestMatchError,
    RequestMatcher,
    ValidationCriteria,
)


def _request(
    *,
    method: str = "POST",
    url: str = "/orders",
    headers: dict[str, str] | None = None,
    body: object = None,
) -> WireRequest:
    raw = json.dumps(body).encode("utf-8") if body is not None else None
    return WireRequest(method=method, url=url, headers=headers, body=raw)


def _matcher(*criteria: object) -> RequestMatcher:
    return RequestMatcher(ValidationCriteria.from_values(criteria))


def test_empty_criteria_ignore_body_and_headers() -> None:
    recorded = _request(headers={"A": "1"}, body={"a": 1})
    live = _request(headers={"B": "2"}, body={"a": 2})

    assert _matcher().matches(live, recorded)


def test_method_and_path_are_always_checked() -> None:
    recorded = _request(method="GET", url="/x")

    assert not _matcher().matches(_request(method="POST", url="/x"), recorded)
    assert not _matcher().matches(_request(method="GET", url="/y"), recorded)


def test_path_is_compared_without_host_or_query() -> None:
    recorded = _request(method="GET", url="/x")
    live = _request(method="GET", url="https://api.example.test/x?page=2")

    assert _matcher(MatchBody(), MatchHeaders()).matches(live, recorded)


def test_match_body_only_ignores_header_differences() -> None:
    recorded = _request(headers={"Authorization": "Bearer a"}, body={"a": 1})
    live = _request(headers={"Authorization": "Bearer b"}, body={"a": 1})

    assert _matcher(MatchBody()).matches(live, recorded)
    assert not _matcher(MatchBody()).matches(_request(body={"a": 2}), recorded)


def test_match_headers_with_ignored_keys() -> None:
    recorded = _request(headers={"Content-Type": "application/json", "Date": "Mon"})
    live = _request(headers={"Content-Type": "application/json", "Date": "Tue"})

    assert not _matcher(MatchHeaders()).matches(live, recorded)
    assert _matcher(MatchHeadersIgnoring(("Date",))).matches(live, recorded)


def test_absent_headers_equal_empty_headers() -> None:
    assert _matcher(MatchHeaders()).matches(_request(headers=None), _request(headers={}))


def test_body_ignoring_timestamp() -> None:
    recorded = _request(body={"a": 1, "timestamp": "T1"})
    live = _request(body={"a": 1, "timestamp": "T2"})

    assert not _matcher(MatchBody()).matches(live, recorded)
    assert _matcher(MatchBodyIgnoring(("timestamp",))).matches(live, recorded)


def test_absent_and_empty_bodies_are_empty_objects() -> None:
    empty = WireRequest(method="GET", url="/x", body=b"")
    absent = WireRequest(method="GET", url="/x")
    braces = WireRequest(method="GET", url="/x", body=b"{}")

    matcher = _matcher(MatchBody())
    assert matcher.matches(empty, absent)
    assert matcher.matches(braces, absent)


def test_body_key_order_is_irrelevant() -> None:
    recorded = WireRequest(method="POST", url="/x", body=b'{"a":1,"b":{"c":2,"d":3}}')
    live = WireRequest(method="POST", url="/x", body=b'{"b":{"d":3,"c":2},"a":1}')

    assert _matcher(MatchBody()).matches(live, recorded)


def test_non_json_body_is_a_matching_error() -> None:
    recorded = _request(body={"a": 1})
    live = WireRequest(method="POST", url="/orders", body=b"not json")

    with pytest.raises(RequestMatchError, match="not valid JSON"):
        _matcher(MatchBody()).matches(live, recorded)


def test_non_json_body_is_not_parsed_when_body_is_not_checked() -> None:
    recorded = _request(body={"a": 1})
    live = WireRequest(method="POST", url="/orders", body=b"not json")

    assert _matcher(MatchHeaders()).matches(live, recorded)


def test_explain_reports_each_dimension() -> None:
    recorded = _request(method="GET", headers={"A": "1"}, body={"a": 1})
    live = _request(method="POST", headers={"A": "2"}, body={"a": 1})

    result = _matcher(MatchBody(), MatchHeaders()).explain(live, recorded)

    assert result.matched is False
    assert result.path is True
    assert result.method is False
    assert result.headers is False
    assert result.body is True
    assert [change.path for change in result.changes] == ["/httpMethod", "/headers/A"]
    assert result.to_dict()["matched"] is False
