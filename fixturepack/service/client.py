"""Send typed requests through a transport and classify the responses."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import json
import logging
import time
from typing import Any

from fixturepack.core.models import WireResponse
from fixturepack.service.errors import (
    ApiDomainError,
    ResponseDecodingError,
    ResponseErrorFailedToDecode,
    ResponseFailedWithoutErrorBody,
    Unauthorized,
)
from fixturepack.service.request import ApiRequest
from fixturepack.transport.base import Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ApiErrorResponse:
    """Default error body shape: ``{"errorMessage": ..., "errorCode": ...}``."""

    error_message: str
    error_code: str

    @classmethod
    def from_payload(cls, payload: Any) -> "ApiErrorResponse":
        if not isinstance(payload, dict):
            raise TypeError("error body must be a JSON object")
        return cls(
            error_message=str(payload["errorMessage"]),
            error_code=str(payload["errorCode"]),
        )


class ApiService:
    """Client for one base service.

    ``transport`` may be a live transport, a ``ReplaySession`` or a
    ``CaptureSession``.
    """

    def __init__(
        self,
        base_url: str,
        transport: Transport,
        *,
        error_decoder: Callable[[Any], Any] = ApiErrorResponse.from_payload,
        default_headers: dict[str, str] | None = None,
        access_token: str | None = None,
        encoder: type[json.JSONEncoder] | None = None,
        decoder: Callable[[bytes], Any] = json.loads,
    ):
        self.base_url = base_url
        self.transport = transport
        self.error_decoder = error_decoder
        self.default_headers = dict(default_headers or {})
        self.access_token = access_token
        self.encoder = encoder
        self.decoder = decoder

    def send(self, api_request: ApiRequest) -> Any:
        request = api_request.to_wire_request(
            self.base_url,
            access_token=self.access_token,
            default_headers=self.default_headers,
            encoder=self.encoder,
        )
        logger.debug("Request: %s %s, %s", request.method, request.url, request.body_text or "")

        started = time.monotonic()
        try:
            response = self.transport.send(request)
        except Exception as error:
            logger.error("Request Error: %s", error)
            raise
        logger.info(
            "Completed: %s %s, ResponseTime: %.1f ms",
            request.method,
            request.url,
            (time.monotonic() - started) * 1000,
        )

        if not response.is_success:
            error = self._classify_error(response)
            logger.error("HTTP Error: %s, %s", response.status_code, error)
            raise error

        try:
            payload = self.decoder(response.body or b"{}")
            return api_request.decode_response(payload)
        except (ValueError, TypeError, KeyError) as error:
            logger.error("Serialization Error: %s", error)
            raise ResponseDecodingError(f"Failed to decode response body: {error}") from error

    def _classify_error(self, response: WireResponse) -> Exception:
        if response.status_code == 401:
            return Unauthorized(response)
        if not response.body:
            return ResponseFailedWithoutErrorBody(response)
        try:
            error_body = self.error_decoder(self.decoder(response.body))
        except (ValueError, TypeError, KeyError) as error:
            return ResponseErrorFailedToDecode(response, error)
        return ApiDomainError(error_body, response)

    def close(self) -> None:
        self.transport.close()
