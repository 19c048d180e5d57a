"""Session storage and token providers."""

from portal_client.auth.session import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    USER_STORAGE_KEY,
    SessionStorage,
    TokenProvider,
    token_provider,
)

__all__ = [
    "ACCESS_TOKEN_KEY",
    "REFRESH_TOKEN_KEY",
    "USER_STORAGE_KEY",
    "SessionStorage",
    "TokenProvider",
    "token_provider",
]
