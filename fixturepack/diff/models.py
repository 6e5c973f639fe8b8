"""Data models for structural diff reporting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class ValueChange:
    """A single value delta at a JSON pointer path."""

    path: str
    left: Any
    right: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "left": self.left,
            "right": self.right,
        }
