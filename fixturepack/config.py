"""Environment-backed settings for FixtureKit.

Settings are read on every call to ``load_settings`` so a test run can point
``mock_responses`` somewhere else between requests.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

FIXTURE_ROOT_ENV_VAR = "mock_responses"
HTTP_TIMEOUT_ENV_VAR = "FIXTUREKIT_HTTP_TIMEOUT"
LOG_LEVEL_ENV_VAR = "FIXTUREKIT_LOG_LEVEL"

DEFAULT_FOLDER = "default"
RECORD_FOLDER = "-recorded"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _path_env(name: str) -> Path | None:
    value = os.getenv(name, "").strip()
    return Path(value) if value else None


@dataclass(frozen=True, slots=True)
class FixtureSettings:
    """Snapshot of the environment at the time it was loaded."""

    fixture_root: Path | None = None
    http_timeout: float = 30.0
    log_level: str = "WARNING"

    @property
    def default_directory(self) -> Path | None:
        if self.fixture_root is None:
            return None
        return self.fixture_root / DEFAULT_FOLDER

    @property
    def record_directory(self) -> Path | None:
        if self.fixture_root is None:
            return None
        return self.fixture_root / RECORD_FOLDER


def load_settings() -> FixtureSettings:
    return FixtureSettings(
        fixture_root=_path_env(FIXTURE_ROOT_ENV_VAR),
        http_timeout=_float_env(HTTP_TIMEOUT_ENV_VAR, 30.0),
        log_level=os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").strip().upper() or "WARNING",
    )
