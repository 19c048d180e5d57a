"""Envelope parsing for backend responses.

The backend wraps payloads in several shapes depending on the endpoint:

- ``{ data: T }``
- ``{ data: { data: T, pagination? } }``
- ``{ data: { <resource_key>: [T], pagination? } }``
- a bare payload with no envelope at all

Each extraction contract has one parse function that tries the known shapes
in a fixed order and returns an ``ItemPayload``/``ListPayload`` on success or
an ``EnvelopeMismatch`` naming what went wrong. Deciding whether a mismatch is
fatal (items) or degrades to an empty list (lists) is left to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import ValidationError

from portal_client.errors import MalformedResponseError
from portal_client.models.envelope import ErrorEnvelope, FieldError, Pagination

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemPayload:
    """A single unwrapped item."""

    value: Any


@dataclass(frozen=True)
class ListPayload:
    """An unwrapped sequence of items with optional pagination."""

    items: list[Any]
    pagination: Pagination | None = None


@dataclass(frozen=True)
class EnvelopeMismatch:
    """No known envelope shape matched the response body."""

    reason: str
    body: Any = field(default=None, repr=False)


ItemResult = ItemPayload | EnvelopeMismatch
ListResult = ListPayload | EnvelopeMismatch


# ---------------------------------------------------------------------------
# Body decoding
# ---------------------------------------------------------------------------


def decode_body(response: httpx.Response, strict: bool = True) -> Any:
    """Decode a response body as JSON.

    Returns ``None`` for an empty body. A non-JSON body raises
    ``MalformedResponseError`` when ``strict``, otherwise decodes to ``None``.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        if not strict:
            logger.warning("Response body is not JSON (status %d)", response.status_code)
            return None
        raise MalformedResponseError("Response body is not valid JSON") from exc


def parse_error(body: Any) -> ErrorEnvelope:
    """Interpret the body of a failed response as an error envelope.

    Unknown shapes yield an empty envelope so the caller can fall back to
    its default message.
    """
    if not isinstance(body, Mapping):
        return ErrorEnvelope()

    message = body.get("message")
    raw_errors = body.get("errors")
    errors: list[FieldError] | None = None
    if isinstance(raw_errors, list):
        errors = []
        for raw in raw_errors:
            if not isinstance(raw, Mapping):
                continue
            try:
                errors.append(FieldError.model_validate(raw))
            except ValidationError:
                logger.debug("Skipping unparseable field error: %r", raw)

    return ErrorEnvelope(
        success=False,
        message=message if isinstance(message, str) else None,
        errors=errors,
        statusCode=body.get("statusCode") if isinstance(body.get("statusCode"), int) else None,
    )


# ---------------------------------------------------------------------------
# Item extraction
# ---------------------------------------------------------------------------


def parse_item(body: Any) -> ItemResult:
    """Locate a single item in a response body.

    Order: ``body.data.data`` -> ``body.data`` -> the raw body. A missing
    body or a ``null`` payload is a mismatch.
    """
    if body is None:
        return EnvelopeMismatch("response has no body")

    if isinstance(body, Mapping) and "data" in body:
        candidate = body["data"]
        if isinstance(candidate, Mapping) and "data" in candidate:
            candidate = candidate["data"]
        if candidate is None:
            return EnvelopeMismatch("response envelope carries a null payload", body)
        return ItemPayload(candidate)

    return ItemPayload(body)


# ---------------------------------------------------------------------------
# List extraction
# ---------------------------------------------------------------------------


def _pagination(container: Any) -> Pagination | None:
    if not isinstance(container, Mapping):
        return None
    raw = container.get("pagination")
    if not isinstance(raw, Mapping):
        return None
    try:
        return Pagination.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Ignoring invalid pagination descriptor: %s", exc)
        return None


def parse_array(body: Any) -> ListResult:
    """Locate a sequence in a response body: ``body.data.data`` then ``body.data``."""
    data = body.get("data") if isinstance(body, Mapping) else None

    if isinstance(data, Mapping) and isinstance(data.get("data"), list):
        return ListPayload(list(data["data"]), _pagination(data))
    if isinstance(data, list):
        return ListPayload(list(data), _pagination(body))

    return EnvelopeMismatch("unexpected response structure", body)


def parse_resource_list(body: Any, resource_key: str | None = None) -> ListResult:
    """Resolve a collection payload for a resource endpoint.

    The payload is the envelope's ``data`` field (or the body itself when
    there is none). Precedence: the payload is a sequence, the payload's
    ``data`` is a sequence, the payload's ``resource_key`` is a sequence.
    """
    if isinstance(body, Mapping) and "data" in body:
        payload = body["data"]
    else:
        payload = body

    if isinstance(payload, list):
        return ListPayload(list(payload), _pagination(body))

    if isinstance(payload, Mapping):
        if isinstance(payload.get("data"), list):
            return ListPayload(list(payload["data"]), _pagination(payload))
        if resource_key and isinstance(payload.get(resource_key), list):
            return ListPayload(list(payload[resource_key]), _pagination(payload))

    return EnvelopeMismatch(
        f"no sequence under 'data' or '{resource_key}'" if resource_key else "no sequence under 'data'",
        body,
    )
