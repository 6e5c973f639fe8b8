import json
from pathlib import Path

import pytest

from fixturepack.config import FixtureSettings
from fixturepack.core.models import Fixture, WireRequest, WireResponse, endpoint_key
from fixturepack.fixtures import (
    FixtureParseError,
    FixtureStore,
    FixtureStoreConfigError,
    decode_response_body,
    load_fixture,
    write_fixture,
)


def _write(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


def _settings_for(root: Path | None):
    return lambda: FixtureSettings(fixture_root=root)


def test_endpoint_key_replaces_every_slash() -> None:
    assert endpoint_key("/api/v1/oauth/login") == ":api:v1:oauth:login"
    assert endpoint_key("") == ""


def test_fixture_paths_follow_directory_layout(tmp_path: Path) -> None:
    store = FixtureStore(tmp_path / "mocks", settings_loader=_settings_for(tmp_path / "root"))

    assert store.fixture_path(":x", 3) == tmp_path / "mocks" / ":x" / "3.json"
    assert store.default_fixture_path(":x") == tmp_path / "root" / "default" / ":x.json"
    assert store.record_path(":x", 0) == tmp_path / "root" / "-recorded" / ":x" / "0.json"


def test_paths_are_none_without_configuration() -> None:
    store = FixtureStore(settings_loader=_settings_for(None))

    assert store.fixture_path(":x", 0) is None
    assert store.default_fixture_path(":x") is None
    assert store.record_path(":x", 0) is None
    assert store.resolve(":x", 0) is None
    assert store.resolve_default(":x") is None


def test_resolve_reads_fixture_fields(tmp_path: Path) -> None:
    path = tmp_path / ":x" / "0.json"
    _write(
        path,
        {
            "status": 201,
            "response": {"id": 7},
            "request": {"httpMethod": "POST", "path": "/x", "headers": None, "body": "{}"},
        },
    )

    fixture = FixtureStore(tmp_path).resolve(":x", 0)

    assert fixture is not None
    assert fixture.status == 201
    assert fixture.response == {"id": 7}
    assert fixture.request == {"httpMethod": "POST", "path": "/x", "headers": None, "body": "{}"}
    assert fixture.source == path


def test_missing_response_defaults_to_empty_object(tmp_path: Path) -> None:
    _write(tmp_path / ":x" / "0.json", {"status": 204})

    fixture = FixtureStore(tmp_path).resolve(":x", 0)

    assert fixture is not None
    assert fixture.response == {}
    assert fixture.request is None


def test_absent_fixture_is_none(tmp_path: Path) -> None:
    assert load_fixture(tmp_path / ":x" / "0.json") is None
    assert FixtureStore(tmp_path).resolve(":x", 0) is None


@pytest.mark.parametrize(
    "content",
    [b"{not json", b"[]", b'{"response": {}}', b'{"status": "200"}', b'{"status": true}'],
)
def test_malformed_fixture_raises_parse_error(tmp_path: Path, content: bytes) -> None:
    path = tmp_path / ":x" / "0.json"
    path.parent.mkdir(parents=True)
    path.write_bytes(content)

    with pytest.raises(FixtureParseError, match="Failed to parse mock response") as error:
        load_fixture(path)

    assert error.value.path == path
    assert error.value.data == content


def test_append_writes_sequential_recordings(tmp_path: Path) -> None:
    store = FixtureStore(settings_loader=_settings_for(tmp_path))
    request = WireRequest(
        method="POST",
        url="https://api.example.test/api/login?x=1",
        headers={"Content-Type": "application/json"},
        body=b'{"user":"a"}',
    )

    first = store.append(":api:login", request, WireResponse(status_code=200, body=b'{"token":"t"}'))
    second = store.append(":api:login", request, WireResponse(status_code=500, body=b""))

    assert (first, second) == (0, 1)
    record_dir = tmp_path / "-recorded" / ":api:login"
    assert sorted(path.name for path in record_dir.iterdir()) == ["0.json", "1.json"]

    written = json.loads((record_dir / "0.json").read_text(encoding="utf-8"))
    assert written == {
        "status": 200,
        "response": {"token": "t"},
        "request": {
            "httpMethod": "POST",
            "path": "/api/login",
            "headers": {"Content-Type": "application/json"},
            "body": '{"user":"a"}',
        },
    }
    assert json.loads((record_dir / "1.json").read_text(encoding="utf-8"))["response"] == {}


def test_append_without_root_is_a_config_error() -> None:
    store = FixtureStore(settings_loader=_settings_for(None))

    with pytest.raises(FixtureStoreConfigError):
        store.append(":x", WireRequest(method="GET", url="/x"), WireResponse(status_code=200))


def test_new_store_starts_recording_at_zero_again(tmp_path: Path) -> None:
    request = WireRequest(method="GET", url="/x")
    FixtureStore(settings_loader=_settings_for(tmp_path)).append(
        ":x", request, WireResponse(status_code=200, body=b'{"v":1}')
    )

    index = FixtureStore(settings_loader=_settings_for(tmp_path)).append(
        ":x", request, WireResponse(status_code=200, body=b'{"v":2}')
    )

    assert index == 0
    written = json.loads((tmp_path / "-recorded" / ":x" / "0.json").read_text(encoding="utf-8"))
    assert written["response"] == {"v": 2}


def test_write_fixture_leaves_no_temp_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / ":x" / "0.json"

    write_fixture(path, Fixture(status=200, response={"b": 1, "a": 2}))

    assert [item.name for item in path.parent.iterdir()] == ["0.json"]
    assert path.read_text(encoding="utf-8") == '{\n  "response": {\n    "a": 2,\n    "b": 1\n  },\n  "status": 200\n}\n'


def test_decode_response_body_falls_back_to_empty_object(caplog: pytest.LogCaptureFixture) -> None:
    assert decode_response_body(b"") == {}
    assert decode_response_body(b"[1, 2]") == [1, 2]
    with caplog.at_level("WARNING", logger="fixturepack.fixtures.store"):
        assert decode_response_body(b"<html>") == {}
    assert "not JSON" in caplog.text


def test_list_fixtures_inventories_numeric_files(tmp_path: Path) -> None:
    _write(tmp_path / ":b" / "1.json", {"status": 200})
    _write(tmp_path / ":b" / "0.json", {"status": 200})
    _write(tmp_path / ":a" / "10.json", {"status": 200})
    _write(tmp_path / ":a" / "2.json", {"status": 200})
    _write(tmp_path / ":a" / "notes.json", {"status": 200})
    (tmp_path / "README").write_text("not a fixture", encoding="utf-8")

    assert FixtureStore(tmp_path).list_fixtures() == [(":a", [2, 10]), (":b", [0, 1])]
    assert FixtureStore(tmp_path / "missing").list_fixtures() == []


def test_unconfigured_append_leaves_write_counter_untouched(tmp_path: Path) -> None:
    roots: list[Path | None] = [None]
    store = FixtureStore(settings_loader=lambda: FixtureSettings(fixture_root=roots[0]))
    request = WireRequest(method="GET", url="/x")

    with pytest.raises(FixtureStoreConfigError):
        store.append(":x", request, WireResponse(status_code=200))
    assert store.write_counter.current(":x") == -1

    roots[0] = tmp_path
    assert store.append(":x", request, WireResponse(status_code=200)) == 0


def test_failed_write_leaves_index_for_next_recording(tmp_path: Path) -> None:
    blocked_root = tmp_path / "blocked"
    blocked_root.write_text("occupied", encoding="utf-8")
    roots = [blocked_root]
    store = FixtureStore(settings_loader=lambda: FixtureSettings(fixture_root=roots[0]))
    request = WireRequest(method="GET", url="/x")

    with pytest.raises(OSError):
        store.append(":x", request, WireResponse(status_code=200))

    roots[0] = tmp_path / "root"
    assert store.append(":x", request, WireResponse(status_code=200)) == 0
    assert (tmp_path / "root" / "-recorded" / ":x" / "0.json").exists()


def test_bare_double_slash_path_is_kept() -> None:
    recorded = WireRequest.from_fixture_dict({"httpMethod": "GET", "path": "//foo/bar"})

    assert recorded.path == "//foo/bar"
    assert WireRequest(method="GET", url="/x?page=1").path == "/x"
