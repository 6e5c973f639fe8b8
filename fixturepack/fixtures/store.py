"""On-disk fixture layout: per-endpoint ordered JSON files."""

from __future__ import annotations

from collections.abc import Callable
import json
import logging
import os
from pathlib import Path
import threading

from fixturepack.config import FixtureSettings, load_settings
from fixturepack.core.canonical import pretty_json
from fixturepack.core.models import Fixture, JSONValue, WireRequest, WireResponse
from fixturepack.fixtures.counter import CallCounter
from fixturepack.fixtures.exceptions import FixtureParseError, FixtureStoreConfigError

logger = logging.getLogger(__name__)

FIXTURE_SUFFIX = ".json"


class FixtureStore:
    """Reads replay fixtures and appends captured ones.

    ``directory`` holds ``{key}/{index}.json`` files for replay. The default
    and capture folders hang off the ``mock_responses`` setting, which is
    looked up again on every call.
    """

    def __init__(
        self,
        directory: str | Path | None = None,
        *,
        counter: CallCounter | None = None,
        settings_loader: Callable[[], FixtureSettings] = load_settings,
    ):
        self.directory = Path(directory) if directory is not None else None
        self.write_counter = counter or CallCounter()
        self._settings_loader = settings_loader
        self._lock = threading.RLock()

    def fixture_path(self, key: str, index: int) -> Path | None:
        if self.directory is None:
            return None
        return self.directory / key / f"{index}{FIXTURE_SUFFIX}"

    def default_fixture_path(self, key: str) -> Path | None:
        default_directory = self._settings_loader().default_directory
        if default_directory is None:
            return None
        return default_directory / f"{key}{FIXTURE_SUFFIX}"

    def record_path(self, key: str, index: int) -> Path | None:
        record_directory = self._settings_loader().record_directory
        if record_directory is None:
            return None
        return record_directory / key / f"{index}{FIXTURE_SUFFIX}"

    def resolve(self, key: str, index: int) -> Fixture | None:
        path = self.fixture_path(key, index)
        if path is None:
            return None
        return load_fixture(path)

    def resolve_default(self, key: str) -> Fixture | None:
        path = self.default_fixture_path(key)
        if path is None:
            return None
        return load_fixture(path)

    def append(self, key: str, request: WireRequest, response: WireResponse) -> int:
        """Persist a live exchange as the next fixture for ``key``."""
        with self._lock:
            index = self.write_counter.current(key) + 1
            path = self.record_path(key, index)
            if path is None:
                raise FixtureStoreConfigError(
                    "Cannot record fixtures: the mock_responses root is not set"
                )
            fixture = Fixture(
                status=response.status_code,
                response=decode_response_body(response.body),
                request=request.to_fixture_dict(),
            )
            write_fixture(path, fixture)
            # Failed writes leave the index free for the next recording.
            return self.write_counter.advance(key)

    def list_fixtures(self) -> list[tuple[str, list[int]]]:
        """Inventory of replay fixtures as ``(key, sorted indices)`` pairs."""
        if self.directory is None or not self.directory.is_dir():
            return []
        inventory: list[tuple[str, list[int]]] = []
        for entry in sorted(self.directory.iterdir(), key=lambda item: item.name):
            if not entry.is_dir():
                continue
            indices = sorted(
                int(child.stem)
                for child in entry.iterdir()
                if child.suffix == FIXTURE_SUFFIX and child.stem.isdigit()
            )
            if indices:
                inventory.append((entry.name, indices))
        return inventory


def load_fixture(path: Path) -> Fixture | None:
    """Load a fixture file, returning ``None`` when it does not exist."""
    try:
        data = path.read_bytes()
    except (FileNotFoundError, NotADirectoryError, IsADirectoryError):
        return None

    try:
        raw = json.loads(data.decode("utf-8"))
        return Fixture.from_dict(raw, source=path)
    except (UnicodeDecodeError, ValueError) as error:
        raise FixtureParseError(path, data, reason=str(error)) from error


def write_fixture(path: Path, fixture: Fixture) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(f".{path.name}.tmp")
    try:
        temp_path.write_text(pretty_json(fixture.to_dict()), encoding="utf-8")
        os.replace(temp_path, path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
    logger.debug("wrote fixture %s", path)


def decode_response_body(body: bytes) -> JSONValue:
    """Decode a live response body for storage; non-JSON bodies store ``{}``."""
    if not body:
        return {}
    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("response body is not JSON; recording an empty object instead")
        return {}
