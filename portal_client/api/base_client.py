"""HTTP transport adapter for the portal backend.

One ``httpx.AsyncClient`` per backend base URL, with a request hook that
attaches the session's bearer token and a response hook left as the seam for
global handling. Every verb helper funnels its response through an envelope
extraction contract and every failure through ``handle_error``, so callers see
either an unwrapped payload or an ``ApiError``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, NoReturn

import httpx

from portal_client.api.envelope import (
    EnvelopeMismatch,
    decode_body,
    parse_array,
    parse_error,
    parse_item,
)
from portal_client.auth.session import TokenProvider
from portal_client.errors import ApiError, MalformedResponseError, NetworkError
from portal_client.models.envelope import Page

logger = logging.getLogger(__name__)


class _NoContent:
    """Sentinel type for a successful response that carried no body."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_CONTENT"


NO_CONTENT = _NoContent()


@dataclass
class FormPayload:
    """Multipart form body, used for uploads.

    ``fields`` are sent as form fields, ``files`` in any shape ``httpx``
    accepts for its ``files`` argument. The body is multipart even when
    there are no files.
    """

    fields: dict[str, Any] = field(default_factory=dict)
    files: dict[str, Any] = field(default_factory=dict)


Payload = Mapping[str, Any] | list[Any] | FormPayload | None


class BaseApiClient:
    """Configured async HTTP client with envelope unwrapping and error normalization.

    Parameters
    ----------
    base_url:
        Backend base URL (e.g. "http://localhost:8000/api").
    with_credentials:
        Send cookies with requests (default True). When False, outgoing
        requests never carry a ``Cookie`` header.
    token_provider:
        Zero-argument callable returning the current access token, or None.
    timeout:
        Request timeout in seconds. None keeps the ``httpx`` default.
    transport:
        Optional ``httpx`` transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        base_url: str,
        with_credentials: bool = True,
        token_provider: TokenProvider | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._with_credentials = with_credentials
        self._token_provider = token_provider

        client_kwargs: dict[str, Any] = {
            "base_url": base_url,
            "event_hooks": {
                "request": [self._on_request],
                "response": [self._on_response],
            },
        }
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def with_credentials(self) -> bool:
        return self._with_credentials

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> BaseApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Interceptors
    # ------------------------------------------------------------------

    async def _on_request(self, request: httpx.Request) -> None:
        token = self._token_provider() if self._token_provider is not None else None
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        if not self._with_credentials and "cookie" in request.headers:
            del request.headers["cookie"]

    async def _on_response(self, response: httpx.Response) -> None:
        # Failures pass through untouched; classification happens in handle_error
        request = response.request
        logger.debug(
            "%s %s -> %d",
            request.method,
            request.url,
            response.status_code,
            extra={
                "method": request.method,
                "url": str(request.url),
                "status_code": response.status_code,
            },
        )

    # ------------------------------------------------------------------
    # Error normalization
    # ------------------------------------------------------------------

    def handle_error(self, error: BaseException) -> NoReturn:
        """Classify a failure and raise it as an ``ApiError``. Never returns."""
        if isinstance(error, ApiError):
            raise error

        if isinstance(error, httpx.HTTPStatusError):
            response = error.response
            envelope = parse_error(decode_body(response, strict=False))
            api_error = ApiError(
                envelope.message or "An error occurred",
                response.status_code,
                envelope.errors,
            )
            logger.warning(
                "API request failed with status %d: %s",
                response.status_code,
                api_error.message,
                extra={
                    "method": error.request.method,
                    "url": str(error.request.url),
                    "status_code": response.status_code,
                    "error": api_error.to_dict(),
                },
            )
            raise api_error from error

        network_error = NetworkError()
        logger.error(
            "Network error during API request: %r",
            error,
            extra={"error": network_error.to_dict()},
        )
        raise network_error from error

    # ------------------------------------------------------------------
    # Envelope extraction
    # ------------------------------------------------------------------

    def extract_item(self, response: httpx.Response) -> Any:
        """Unwrap a single item; raises ``MalformedResponseError`` on mismatch."""
        try:
            result = parse_item(decode_body(response))
            if isinstance(result, EnvelopeMismatch):
                raise MalformedResponseError(f"Malformed response envelope: {result.reason}")
            return result.value
        except Exception as exc:
            logger.error("Error extracting item data: %s", exc)
            raise

    def extract_array(self, response: httpx.Response) -> list[Any]:
        """Unwrap a sequence; an unexpected shape degrades to an empty list."""
        result = parse_array(decode_body(response, strict=False))
        if isinstance(result, EnvelopeMismatch):
            logger.warning("Unexpected API response structure: %s", result.reason)
            return []
        return result.items

    def extract_paginated(self, response: httpx.Response) -> Page[Any]:
        """Unwrap a sequence together with its pagination descriptor."""
        result = parse_array(decode_body(response, strict=False))
        if isinstance(result, EnvelopeMismatch):
            logger.warning("Unexpected API response structure: %s", result.reason)
            return Page(data=[])
        return Page(data=result.items, pagination=result.pagination)

    # ------------------------------------------------------------------
    # Verb helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _body_kwargs(data: Payload) -> dict[str, Any]:
        if data is None:
            return {}
        if isinstance(data, FormPayload):
            if data.files:
                return {"data": data.fields, "files": data.files}
            # httpx only switches to multipart when files are present
            return {"files": {name: (None, str(value)) for name, value in data.fields.items()}}
        return {"json": data}

    async def _send(
        self, method: str, url: str, data: Payload = None, **kwargs: Any
    ) -> httpx.Response:
        response = await self._client.request(method, url, **self._body_kwargs(data), **kwargs)
        response.raise_for_status()
        return response

    async def request_body(
        self, method: str, url: str, data: Payload = None, **kwargs: Any
    ) -> Any:
        """Perform a request and return the decoded body without unwrapping it.

        Returns None for an empty or non-JSON body.
        """
        try:
            response = await self._send(method, url, data, **kwargs)
            return decode_body(response, strict=False)
        except Exception as exc:
            self.handle_error(exc)

    async def get(self, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._send("GET", url, **kwargs)
            return self.extract_item(response)
        except Exception as exc:
            self.handle_error(exc)

    async def get_list(self, url: str, **kwargs: Any) -> list[Any]:
        try:
            response = await self._send("GET", url, **kwargs)
            return self.extract_array(response)
        except Exception as exc:
            self.handle_error(exc)

    async def get_paginated(self, url: str, **kwargs: Any) -> Page[Any]:
        try:
            response = await self._send("GET", url, **kwargs)
            return self.extract_paginated(response)
        except Exception as exc:
            self.handle_error(exc)

    async def post(self, url: str, data: Payload = None, **kwargs: Any) -> Any:
        try:
            response = await self._send("POST", url, data, **kwargs)
            return self.extract_item(response)
        except Exception as exc:
            self.handle_error(exc)

    async def put(self, url: str, data: Payload = None, **kwargs: Any) -> Any:
        try:
            response = await self._send("PUT", url, data, **kwargs)
            return self.extract_item(response)
        except Exception as exc:
            self.handle_error(exc)

    async def patch(self, url: str, data: Payload = None, **kwargs: Any) -> Any:
        try:
            response = await self._send("PATCH", url, data, **kwargs)
            return self.extract_item(response)
        except Exception as exc:
            self.handle_error(exc)

    async def delete(self, url: str, **kwargs: Any) -> Any:
        """DELETE ``url``; returns ``NO_CONTENT`` when the server sent no payload."""
        try:
            response = await self._send("DELETE", url, **kwargs)
            if not response.content:
                return NO_CONTENT
            body = decode_body(response, strict=False)
            if body is None or (isinstance(body, Mapping) and body.get("data", ...) is None):
                return NO_CONTENT
            return self.extract_item(response)
        except Exception as exc:
            self.handle_error(exc)
