import json
from importlib.metadata import PackageNotFoundError, version as package_version
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from fixturepack.capture import CaptureSession
from fixturepack.config import FIXTURE_ROOT_ENV_VAR, load_settings
from fixturepack.core.models import WireRequest, endpoint_key
from fixturepack.core.types import HTTP_METHODS
from fixturepack.fixtures import FixtureError, FixtureStore, load_fixture
from fixturepack.log import setup_logging
from fixturepack.matching import (
    Criterion,
    MatchBody,
    MatchBodyIgnoring,
    MatchHeaders,
    MatchHeadersIgnoring,
    RequestMatchError,
    ValidationMode,
)
from fixturepack.replay import ReplayError, ReplaySession, ValidationFailed
from fixturepack.transport import HttpxTransport, TransportError

app = typer.Typer(help="FixtureKit CLI")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("fixturekit")
    except PackageNotFoundError:
        from fixturepack import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version())
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show FixtureKit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to FIXTUREKIT_LOG_LEVEL or WARNING).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    setup_logging(log_level)


def _echo(message: str, *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err:
        return
    typer.echo(message, err=err)


def _echo_json(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=True, sort_keys=True, separators=(",", ":")))


def _parse_headers(values: list[str] | None) -> dict[str, str] | None:
    if not values:
        return None
    headers: dict[str, str] = {}
    for raw in values:
        name, separator, value = raw.partition(":")
        if not separator or not name.strip():
            raise typer.BadParameter(f"header must look like 'Name: value', got {raw!r}")
        headers[name.strip()] = value.strip()
    return headers


def _build_request(method: str, url: str, body: str | None, header: list[str] | None) -> WireRequest:
    method = method.upper()
    if method not in HTTP_METHODS:
        raise typer.BadParameter(f"method must be one of {', '.join(HTTP_METHODS)}, got {method!r}")
    return WireRequest(
        method=method,
        url=url,
        headers=_parse_headers(header),
        body=body.encode("utf-8") if body is not None else None,
    )


def _build_validation(
    match_body: bool,
    ignore_body_key: list[str] | None,
    match_headers: bool,
    ignore_header_key: list[str] | None,
) -> ValidationMode:
    criteria: set[Criterion] = set()
    if match_body:
        criteria.add(MatchBody())
    if ignore_body_key:
        criteria.add(MatchBodyIgnoring(tuple(ignore_body_key)))
    if match_headers:
        criteria.add(MatchHeaders())
    if ignore_header_key:
        criteria.add(MatchHeadersIgnoring(tuple(ignore_header_key)))
    if not criteria:
        return ValidationMode.disabled()
    return ValidationMode.match(criteria)


@app.command()
def resolve(
    directory: Path = typer.Argument(..., help="Fixture directory to replay from."),
    path: str = typer.Option(..., "--path", help="Request path, e.g. /api/v1/login."),
    method: str = typer.Option("GET", "--method", help="HTTP method."),
    body: str | None = typer.Option(None, "--body", help="Raw request body."),
    header: list[str] | None = typer.Option(None, "--header", help="Request header 'Name: value'."),
    match_body: bool = typer.Option(False, "--match-body", help="Validate the JSON body."),
    ignore_body_key: list[str] | None = typer.Option(
        None,
        "--ignore-body-key",
        help="Body key ignored at any depth (implies --match-body).",
    ),
    match_headers: bool = typer.Option(False, "--match-headers", help="Validate headers."),
    ignore_header_key: list[str] | None = typer.Option(
        None,
        "--ignore-header-key",
        help="Header ignored during validation (implies --match-headers).",
    ),
    repeat: int = typer.Option(1, "--repeat", min=1, help="Number of identical calls to replay."),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable output."),
) -> None:
    """Replay a request against a fixture directory and print the responses."""
    request = _build_request(method, path, body, header)
    session = ReplaySession(
        directory,
        validation=_build_validation(match_body, ignore_body_key, match_headers, ignore_header_key),
    )

    responses: list[dict[str, Any]] = []
    for call in range(repeat):
        try:
            response = session.send(request)
        except (ReplayError, FixtureError, RequestMatchError) as error:
            payload: dict[str, Any] = {
                "status": "error",
                "exit_code": 1,
                "call": call,
                "error_type": error.__class__.__name__,
                "message": str(error),
            }
            if isinstance(error, ValidationFailed) and error.result is not None:
                payload["match"] = error.result.to_dict()
            if json_output:
                _echo_json({**payload, "responses": responses})
            else:
                _echo(f"resolve failed: {error}", err=True)
            raise typer.Exit(code=1) from error

        responses.append({"call": call, "status_code": response.status_code, "body": response.text})
        if not json_output:
            _echo(f"[{call}] {response.status_code} {response.text}")

    if json_output:
        _echo_json({"status": "ok", "exit_code": 0, "key": endpoint_key(request.path), "responses": responses})


@app.command()
def check(
    directory: Path = typer.Argument(..., help="Fixture directory to inspect."),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable output."),
) -> None:
    """List fixtures per endpoint and verify every file parses."""
    store = FixtureStore(directory)
    endpoints: list[dict[str, Any]] = []
    errors: list[dict[str, str]] = []

    for key, indices in store.list_fixtures():
        endpoints.append({"key": key, "indices": indices})
        for index in indices:
            fixture_path = store.fixture_path(key, index)
            try:
                load_fixture(fixture_path)
            except FixtureError as error:
                errors.append({"path": str(fixture_path), "message": str(error)})

    if json_output:
        _echo_json(
            {
                "status": "error" if errors else "ok",
                "exit_code": 1 if errors else 0,
                "endpoints": endpoints,
                "errors": errors,
            }
        )
    else:
        for endpoint in endpoints:
            indices = ", ".join(str(index) for index in endpoint["indices"])
            _echo(f"{endpoint['key']}: {indices}")
        for error in errors:
            _echo(f"invalid fixture {error['path']}: {error['message']}", err=True)
        _echo(f"{len(endpoints)} endpoint(s), {len(errors)} invalid fixture(s)")

    if errors:
        raise typer.Exit(code=1)


@app.command()
def record(
    url: str = typer.Argument(..., help="Absolute URL to request."),
    method: str = typer.Option("GET", "--method", help="HTTP method."),
    body: str | None = typer.Option(None, "--body", help="Raw request body."),
    header: list[str] | None = typer.Option(None, "--header", help="Request header 'Name: value'."),
) -> None:
    """Send one live request and record it under the mock_responses root."""
    settings = load_settings()
    if settings.fixture_root is None:
        _echo(f"record failed: set {FIXTURE_ROOT_ENV_VAR} to the fixture root", err=True)
        raise typer.Exit(code=1)

    request = _build_request(method, url, body, header)
    key = endpoint_key(request.path)
    session = CaptureSession(HttpxTransport(settings))
    previous = session.store.write_counter.current(key)
    try:
        response = session.send(request)
    except TransportError as error:
        _echo(f"record failed: {error}", err=True)
        raise typer.Exit(code=1) from error
    finally:
        session.close()

    index = session.store.write_counter.current(key)
    if index == previous:
        _echo(f"{response.status_code} received but not recorded", err=True)
        raise typer.Exit(code=1)

    _echo(f"{response.status_code} recorded to {session.store.record_path(key, index)}")


def main() -> None:
    app()
