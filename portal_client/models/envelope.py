"""Wire models for the backend's JSON response envelope.

Success: { success: true, message, data: T | { data: T, pagination? }, statusCode }
Error:   { success: false, message, errors?: [{ path, message }], statusCode }
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class FieldError(BaseModel):
    """A single field-level validation failure reported by the backend."""

    model_config = ConfigDict(extra="ignore")

    path: str = ""
    message: str = ""

    @field_validator("path", mode="before")
    @classmethod
    def _join_path(cls, value: Any) -> Any:
        # Validators on the backend report nested paths as lists
        if isinstance(value, (list, tuple)):
            return ".".join(str(part) for part in value)
        return value


class Pagination(BaseModel):
    """Pagination descriptor attached to list responses."""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(default=1, ge=0)
    limit: int = Field(default=10, ge=0)
    total: int = Field(default=0, ge=0)
    pages: int = Field(default=0, ge=0)


class ErrorEnvelope(BaseModel):
    """Body of a failed backend response."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    success: bool = False
    message: str | None = None
    errors: list[FieldError] | None = None
    status_code: int | None = Field(default=None, alias="statusCode")


class Page(BaseModel, Generic[T]):
    """Result of a list call: the items plus optional pagination."""

    data: list[T] = Field(default_factory=list)
    pagination: Pagination | None = None
