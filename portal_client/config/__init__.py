"""Configuration module: settings and resource definitions."""

from portal_client.config.resources import ResourceDefinition, load_resource_definitions
from portal_client.config.settings import PortalSettings

__all__ = [
    "PortalSettings",
    "ResourceDefinition",
    "load_resource_definitions",
]
