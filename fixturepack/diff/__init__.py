"""Structural comparison subsystem for FixtureKit."""

from fixturepack.diff.engine import collect_changes, strip_keys, structural_equal
from fixturepack.diff.models import ValueChange

__all__ = [
    "ValueChange",
    "collect_changes",
    "strip_keys",
    "structural_equal",
]
