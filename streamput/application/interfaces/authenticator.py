from __future__ import annotations
from typing import Protocol

from streamput.core.pyd_schemas import Credentials


class IAuthenticator(Protocol):
    """Exchanges credentials for an opaque auth token."""

    async def login(self, base_url: str, credentials: Credentials) -> str:
        """Return the token or raise a StreamPutError subclass."""
        ...
