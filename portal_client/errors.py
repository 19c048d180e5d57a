"""Typed error hierarchy for the portal API client.

Every failure surfaced by the client is an ``ApiError``: the backend rejected
the request (server error), the request never produced a response (network
error), or a success response carried nothing usable (malformed envelope).
Callers catch exactly one type and read ``message``, ``status_code`` and the
optional field-level ``errors``.
"""

from __future__ import annotations

from typing import Any

from portal_client.models.envelope import FieldError


class ApiError(Exception):
    """Base error for every failed portal API call."""

    status_code: int = 500
    message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        errors: list[FieldError] | None = None,
    ) -> None:
        self.message = message or self.__class__.message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Render the error as an error envelope."""
        return {
            "success": False,
            "message": self.message,
            "errors": [e.model_dump() for e in self.errors] if self.errors else None,
            "statusCode": self.status_code,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, "
            f"status_code={self.status_code}, errors={self.errors!r})"
        )


class NetworkError(ApiError):
    """The request never produced a server response (DNS, timeout, abort)."""

    status_code = 500
    message = "Network error occurred"


class MalformedResponseError(ApiError):
    """A success response did not contain an interpretable item payload."""

    status_code = 502
    message = "Malformed response envelope"


class UnknownResourceError(KeyError):
    """No resource with the requested name is registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown resource '{self.name}'"
