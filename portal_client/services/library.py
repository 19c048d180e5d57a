"""Library catalogue: books (/library/books) and their copies (/library/copies).

List endpoints here nest their items under ``books``/``copies`` and
reference fields (``libraryId``, ``bookId``) may come back populated.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from portal_client.api.resource_client import ResourceClient
from portal_client.models.entities import Book, BookCopy
from portal_client.services.typed import ModelResource

BOOKS_PATH = "/library/books"
COPIES_PATH = "/library/copies"


class BookService:
    def __init__(self, resource: ResourceClient) -> None:
        self.resource = resource
        self.crud: ModelResource[Book] = ModelResource(resource, Book)

    async def get_available(self, params: Mapping[str, Any] | None = None) -> list[Book]:
        """Books with at least one copy on the shelf, optionally filtered by library/category."""
        items = await self.resource.api.get_list(
            self.resource.url("available"), params=dict(params) if params else None
        )
        return self.crud.parse_many(items)


class BookCopyService:
    def __init__(self, resource: ResourceClient) -> None:
        self.resource = resource
        self.crud: ModelResource[BookCopy] = ModelResource(resource, BookCopy)

    async def get_by_book(self, book_id: str) -> list[BookCopy]:
        items = await self.resource.api.get_list(self.resource.url("book", book_id))
        return self.crud.parse_many(items)
