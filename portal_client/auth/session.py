"""Client-side session storage and the token provider handed to the transport.

The storage is a plain key/value store shared by the process. The login flow
writes the tokens, logout (or a failed session check) clears them, and the
transport only ever reads the access token through a ``TokenProvider``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"
USER_STORAGE_KEY = "user"

TokenProvider = Callable[[], str | None]


class SessionStorage:
    """In-process key/value storage for session state."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def save_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        """Store the tokens issued by a successful login.

        The access token is replaced wholesale; a missing refresh token
        leaves any stored one untouched.
        """
        self.set_item(ACCESS_TOKEN_KEY, access_token)
        if refresh_token:
            self.set_item(REFRESH_TOKEN_KEY, refresh_token)
        logger.info("Session tokens stored")

    def clear_session(self) -> None:
        """Erase all session state (logout or failed session verification)."""
        for key in (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_STORAGE_KEY):
            self.remove_item(key)
        logger.info("Session cleared")


def token_provider(storage: SessionStorage, key: str = ACCESS_TOKEN_KEY) -> TokenProvider:
    """Build a ``TokenProvider`` that reads ``key`` from ``storage`` on every call."""

    def _provide() -> str | None:
        return storage.get_item(key) or None

    return _provide
