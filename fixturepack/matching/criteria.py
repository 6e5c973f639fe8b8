"""Validation mode and criteria for comparing live and recorded requests."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Literal, Union


@dataclass(frozen=True, slots=True)
class MatchBody:
    """Require the JSON bodies to be structurally equal."""


@dataclass(frozen=True, slots=True)
class MatchBodyIgnoring:
    """Require equal JSON bodies, ignoring ``keys`` at any depth."""

    keys: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", _normalize_keys(self.keys))


@dataclass(frozen=True, slots=True)
class MatchHeaders:
    """Require identical header mappings."""


@dataclass(frozen=True, slots=True)
class MatchHeadersIgnoring:
    """Require identical header mappings apart from ``keys``."""

    keys: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", _normalize_keys(self.keys))


Criterion = Union[MatchBody, MatchBodyIgnoring, MatchHeaders, MatchHeadersIgnoring]

ALL_CRITERIA: frozenset[Criterion] = frozenset({MatchBody(), MatchHeaders()})


@dataclass(frozen=True, slots=True)
class ValidationCriteria:
    """Folded view of a criteria set.

    A dimension whose flag is off is not checked at all.
    """

    match_body: bool = False
    body_ignore_keys: frozenset[str] = field(default_factory=frozenset)
    match_headers: bool = False
    header_ignore_keys: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_values(cls, criteria: Iterable[Criterion]) -> "ValidationCriteria":
        match_body = False
        match_headers = False
        body_ignore: set[str] = set()
        header_ignore: set[str] = set()

        for criterion in criteria:
            if isinstance(criterion, MatchBody):
                match_body = True
            elif isinstance(criterion, MatchBodyIgnoring):
                match_body = True
                body_ignore.update(criterion.keys)
            elif isinstance(criterion, MatchHeaders):
                match_headers = True
            elif isinstance(criterion, MatchHeadersIgnoring):
                match_headers = True
                header_ignore.update(criterion.keys)
            else:
                raise TypeError(f"Unsupported validation criterion: {criterion!r}")

        return cls(
            match_body=match_body,
            body_ignore_keys=frozenset(body_ignore),
            match_headers=match_headers,
            header_ignore_keys=frozenset(header_ignore),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "match_body": self.match_body,
            "body_ignore_keys": sorted(self.body_ignore_keys),
            "match_headers": self.match_headers,
            "header_ignore_keys": sorted(self.header_ignore_keys),
        }


@dataclass(frozen=True, slots=True)
class ValidationMode:
    """Either ``disabled`` or ``match`` with a set of criteria."""

    kind: Literal["disabled", "match"] = "disabled"
    criteria: ValidationCriteria = field(default_factory=ValidationCriteria)

    @classmethod
    def disabled(cls) -> "ValidationMode":
        return cls()

    @classmethod
    def match(cls, criteria: Iterable[Criterion] | ValidationCriteria = ALL_CRITERIA) -> "ValidationMode":
        if not isinstance(criteria, ValidationCriteria):
            criteria = ValidationCriteria.from_values(criteria)
        return cls(kind="match", criteria=criteria)

    @property
    def enabled(self) -> bool:
        return self.kind == "match"


def _normalize_keys(keys: Iterable[str] | str) -> tuple[str, ...]:
    if isinstance(keys, str):
        keys = (keys,)
    return tuple(sorted({str(key) for key in keys}))
