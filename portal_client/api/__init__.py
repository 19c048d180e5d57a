"""HTTP transport and resource adapters."""

from portal_client.api.base_client import NO_CONTENT, BaseApiClient, FormPayload
from portal_client.api.resource_client import ResourceClient, infer_resource_key

__all__ = [
    "NO_CONTENT",
    "BaseApiClient",
    "FormPayload",
    "ResourceClient",
    "infer_resource_key",
]
