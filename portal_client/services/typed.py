"""Typed view over a ResourceClient.

Validates every item the resource returns into a pydantic model, so entity
services work with ``Student``/``Book`` objects instead of raw dicts.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from portal_client.api.base_client import Payload
from portal_client.api.resource_client import ResourceClient
from portal_client.errors import MalformedResponseError
from portal_client.models.envelope import Page

ModelT = TypeVar("ModelT", bound=BaseModel)


class ModelResource(Generic[ModelT]):
    """CRUD operations on ``resource`` returning ``model`` instances."""

    def __init__(self, resource: ResourceClient, model: type[ModelT]) -> None:
        self.resource = resource
        self.model = model

    def parse(self, item: Any) -> ModelT:
        try:
            return self.model.model_validate(item)
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Invalid {self.model.__name__} payload from {self.resource.resource_path}: "
                f"{exc.error_count()} validation error(s)"
            ) from exc

    def parse_many(self, items: list[Any]) -> list[ModelT]:
        return [self.parse(item) for item in items]

    async def get_all(self, params: Mapping[str, Any] | None = None) -> Page[ModelT]:
        page = await self.resource.get_all(params)
        return Page(data=self.parse_many(page.data), pagination=page.pagination)

    async def get_by_id(self, item_id: str) -> ModelT:
        return self.parse(await self.resource.get_by_id(item_id))

    async def create(self, data: Payload) -> ModelT:
        return self.parse(await self.resource.create(data))

    async def update(self, item_id: str, data: Payload) -> ModelT:
        return self.parse(await self.resource.update(item_id, data))

    async def delete_item(self, item_id: str) -> Any:
        return await self.resource.delete_item(item_id)

    async def restore(self, item_id: str) -> ModelT:
        return self.parse(await self.resource.restore(item_id))

    async def get_deleted(self) -> list[ModelT]:
        return self.parse_many(await self.resource.get_deleted())

    async def delete_item_permanently(self, item_id: str) -> Any:
        return await self.resource.delete_item_permanently(item_id)
