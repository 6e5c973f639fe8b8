"""Deterministic canonicalization helpers for FixtureKit."""

from __future__ import annotations

import json
import math
from typing import Any


def canonicalize(value: Any) -> Any:
    """Normalize a JSON-like value to a deterministic representation.

    Object keys are sorted, tuples become lists and integral floats collapse
    to ints so ``1`` and ``1.0`` compare equal.
    """
    if isinstance(value, dict):
        return {
            str(key): canonicalize(value[key])
            for key in sorted(value.keys(), key=lambda raw: str(raw))
        }

    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]

    if isinstance(value, bool) or value is None:
        return value

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError("NaN and infinity are not supported in canonical JSON")
        if value.is_integer():
            return int(value)
        return value

    return value


def canonical_json(value: Any) -> str:
    """Serialize a value to stable canonical JSON."""
    return json.dumps(
        canonicalize(value),
        ensure_ascii=True,
        separators=(",", ":"),
        sort_keys=True,
    )


def pretty_json(value: Any) -> str:
    """Serialize a value the way fixture files are written on disk."""
    return json.dumps(canonicalize(value), indent=2, ensure_ascii=False, sort_keys=True) + "\n"
