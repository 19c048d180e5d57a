"""Pydantic Settings for the portal client.

All environment variables use the PORTAL_ prefix.
Example: PORTAL_API_URL=https://portal.example.edu/api, PORTAL_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

_BUNDLED_RESOURCES = str(Path(__file__).with_name("resources.yaml"))


class PortalSettings(BaseSettings):
    """Client configuration validated from environment variables."""

    # Backend
    api_url: str = "http://localhost:8000/api"
    with_credentials: bool = True
    timeout_seconds: float | None = Field(default=None, gt=0)  # None keeps the httpx default

    # Session
    access_token_key: str = "accessToken"

    # Logging; applied by the application via configure_logging(settings.log_level)
    log_level: str = "INFO"

    # Resource registry
    resources_path: str = _BUNDLED_RESOURCES

    model_config = {"env_prefix": "PORTAL_"}
