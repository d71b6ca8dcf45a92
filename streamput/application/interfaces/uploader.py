from __future__ import annotations
from typing import Protocol

from streamput.core.pyd_schemas import Destination


class IStreamUploader(Protocol):
    """Streams a local file to a remote path of the storage service."""

    async def upload(self, destination: Destination, token: str, local_path: str) -> str:
        """Upload the file and return the raw response text."""
        ...
