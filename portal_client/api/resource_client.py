"""Generic CRUD adapter for a single REST resource path.

Wraps a ``BaseApiClient`` rather than extending it, so several resources can
share one HTTP client and entity services can hold a ``ResourceClient`` as a
field. Errors raised by the transport propagate unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from portal_client.api.base_client import BaseApiClient, Payload
from portal_client.api.envelope import EnvelopeMismatch, parse_resource_list
from portal_client.auth.session import TokenProvider
from portal_client.models.envelope import Page

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Deleted successfully"
PERMANENTLY_DELETED_MESSAGE = "Permanently deleted successfully"
UPDATE_METHODS = ("PATCH", "PUT")


def infer_resource_key(resource_path: str) -> str:
    """Derive the list key from the last path segment (``/user/students`` -> ``students``)."""
    segments = [segment for segment in resource_path.split("/") if segment]
    return segments[-1] if segments else ""


def _segment(part: object) -> str:
    encoded = quote(str(part), safe="")
    if encoded in (".", ".."):
        # dot segments would be collapsed by URL normalization
        encoded = encoded.replace(".", "%2E")
    return encoded


class ResourceClient:
    """CRUD operations against one resource path.

    Parameters
    ----------
    base_url:
        Backend base URL. Ignored when ``api`` is given.
    resource_path:
        Collection path, e.g. "/academic/departments".
    with_credentials:
        Forwarded to the transport it creates (default True).
    resource_key:
        Field under which list endpoints nest their items when they do not
        use ``data``. Defaults to the last segment of ``resource_path``.
    token_provider:
        Forwarded to the transport it creates.
    api:
        Existing transport to share instead of creating one.
    update_method:
        HTTP method ``update`` sends, "PATCH" (default) or "PUT".
    """

    def __init__(
        self,
        base_url: str,
        resource_path: str,
        with_credentials: bool = True,
        resource_key: str | None = None,
        *,
        token_provider: TokenProvider | None = None,
        api: BaseApiClient | None = None,
        update_method: str = "PATCH",
    ) -> None:
        update_method = update_method.upper()
        if update_method not in UPDATE_METHODS:
            raise ValueError(f"update_method must be one of {UPDATE_METHODS}, got {update_method!r}")
        self.update_method = update_method
        self.resource_path = "/" + resource_path.strip("/")
        self.resource_key = resource_key or infer_resource_key(self.resource_path)
        self.api = api or BaseApiClient(
            base_url,
            with_credentials=with_credentials,
            token_provider=token_provider,
        )

    def __repr__(self) -> str:
        return f"ResourceClient(resource_path={self.resource_path!r}, resource_key={self.resource_key!r})"

    def url(self, *parts: object) -> str:
        """Build a path below the resource, e.g. ``url(id, "restore")``.

        Each part is percent-encoded into exactly one path segment.
        """
        return "/".join([self.resource_path, *(_segment(part) for part in parts)])

    def _resolve_list(self, body: Any, operation: str, resource_key: str | None = None) -> Page[Any]:
        result = parse_resource_list(body, resource_key or self.resource_key)
        if isinstance(result, EnvelopeMismatch):
            logger.warning(
                "Unexpected %s response for %s: %s",
                operation,
                self.resource_path,
                result.reason,
                extra={"resource_path": self.resource_path},
            )
            return Page(data=[])
        return Page(data=result.items, pagination=result.pagination)

    @staticmethod
    def _delete_result(body: Any, default_message: str) -> Any:
        if isinstance(body, Mapping) and body.get("data"):
            return body["data"]
        if body:
            return body
        return {"message": default_message}

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get_all(self, params: Mapping[str, Any] | None = None) -> Page[Any]:
        """List the collection; ``params`` are forwarded verbatim as query parameters."""
        return await self.get_page(self.resource_path, params)

    async def get_page(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        resource_key: str | None = None,
    ) -> Page[Any]:
        """List any endpoint with the collection's shape resolution.

        Used for sub-collections such as ``url("submissions")`` whose items
        nest under their own ``resource_key``.
        """
        body = await self.api.request_body("GET", url, params=dict(params) if params else None)
        return self._resolve_list(body, "list", resource_key or self.resource_key)

    async def get_by_id(self, item_id: str) -> Any:
        return await self.api.get(self.url(item_id))

    async def create(self, data: Payload) -> Any:
        return await self.api.post(self.resource_path, data)

    async def update(self, item_id: str, data: Payload) -> Any:
        if self.update_method == "PUT":
            return await self.api.put(self.url(item_id), data)
        return await self.api.patch(self.url(item_id), data)

    async def delete_item(self, item_id: str) -> Any:
        """Soft delete. Reports success even when the backend sends no body."""
        body = await self.api.request_body("DELETE", self.url(item_id))
        return self._delete_result(body, DELETED_MESSAGE)

    async def restore(self, item_id: str) -> Any:
        return await self.api.post(self.url(item_id, "restore"))

    async def get_deleted(self) -> list[Any]:
        body = await self.api.request_body("GET", self.url("deleted"))
        return self._resolve_list(body, "deleted list").data

    async def delete_item_permanently(self, item_id: str) -> Any:
        body = await self.api.request_body("DELETE", self.url(item_id, "permanently"))
        return self._delete_result(body, PERMANENTLY_DELETED_MESSAGE)
