"""Async client for the university portal REST backend."""

from portal_client.api import NO_CONTENT, BaseApiClient, FormPayload, ResourceClient
from portal_client.auth import SessionStorage, token_provider
from portal_client.config import PortalSettings
from portal_client.errors import ApiError, MalformedResponseError, NetworkError
from portal_client.models import FieldError, Page, Pagination
from portal_client.services import ResourceRegistry

__all__ = [
    "NO_CONTENT",
    "ApiError",
    "BaseApiClient",
    "FieldError",
    "FormPayload",
    "MalformedResponseError",
    "NetworkError",
    "Page",
    "Pagination",
    "PortalSettings",
    "ResourceClient",
    "ResourceRegistry",
    "SessionStorage",
    "token_provider",
]
