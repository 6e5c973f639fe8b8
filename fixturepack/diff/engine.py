"""Recursive structural comparison of JSON-like values with key exclusion."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from fixturepack.core.canonical import canonical_json, canonicalize
from fixturepack.diff.models import ValueChange

_MISSING = object()


def strip_keys(value: Any, ignore_keys: Iterable[str]) -> Any:
    """Return a deep copy of ``value`` without any ``ignore_keys`` entries.

    Keys are removed at every depth, including objects nested inside arrays.
    Scalars are returned unchanged.
    """
    keys = frozenset(ignore_keys)
    return _strip(value, keys)


def structural_equal(left: Any, right: Any, ignore_keys: Iterable[str] = ()) -> bool:
    """Compare two JSON-like values after removing ``ignore_keys`` from both.

    Object key order never matters; array order always does.
    """
    keys = frozenset(ignore_keys)
    return canonical_json(_strip(left, keys)) == canonical_json(_strip(right, keys))


def collect_changes(
    left: Any,
    right: Any,
    *,
    ignore_keys: Iterable[str] = (),
    path: str = "",
    max_changes: int = 32,
) -> list[ValueChange]:
    """List JSON-pointer deltas between two values, up to ``max_changes``."""
    keys = frozenset(ignore_keys)
    out: list[ValueChange] = []
    _collect_value_changes(
        canonicalize(_strip(left, keys)),
        canonicalize(_strip(right, keys)),
        path=path,
        out=out,
        max_changes=max_changes,
    )
    return out


def _strip(value: Any, keys: frozenset[str]) -> Any:
    if isinstance(value, dict):
        return {
            key: _strip(item, keys)
            for key, item in value.items()
            if key not in keys
        }
    if isinstance(value, (list, tuple)):
        return [_strip(item, keys) for item in value]
    return value


def _collect_value_changes(
    left: Any,
    right: Any,
    *,
    path: str,
    out: list[ValueChange],
    max_changes: int,
) -> bool:
    if len(out) >= max_changes:
        return True

    if left is _MISSING or right is _MISSING:
        out.append(
            ValueChange(
                path=path or "/",
                left="<MISSING>" if left is _MISSING else left,
                right="<MISSING>" if right is _MISSING else right,
            )
        )
        return len(out) >= max_changes

    if type(left) is not type(right):
        out.append(ValueChange(path=path or "/", left=left, right=right))
        return len(out) >= max_changes

    if isinstance(left, dict):
        truncated = False
        keys = sorted(set(left.keys()) | set(right.keys()), key=str)
        for key in keys:
            truncated |= _collect_value_changes(
                left.get(key, _MISSING),
                right.get(key, _MISSING),
                path=f"{path}/{_escape_json_pointer(str(key))}",
                out=out,
                max_changes=max_changes,
            )
            if len(out) >= max_changes:
                return True
        return truncated

    if isinstance(left, list):
        truncated = False
        for idx in range(max(len(left), len(right))):
            truncated |= _collect_value_changes(
                left[idx] if idx < len(left) else _MISSING,
                right[idx] if idx < len(right) else _MISSING,
                path=f"{path}/{idx}",
                out=out,
                max_changes=max_changes,
            )
            if len(out) >= max_changes:
                return True
        return truncated

    if left != right:
        out.append(ValueChange(path=path or "/", left=left, right=right))
        return len(out) >= max_changes

    return False


def _escape_json_pointer(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")
