"""
Bounded, single-pass reading of a local file as async byte chunks.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Optional

import aiofiles

from streamput.core.exceptions import FileOpenError, FileReadError

logger = logging.getLogger(__name__)


class FileChunkStream:
    """Async context manager exposing a file as a lazy sequence of chunks.

    The file is opened on ``__aenter__`` so open failures surface before the
    caller starts any network work, and it is closed on ``__aexit__`` on every
    exit path. ``iter_chunks()`` may be consumed once; each chunk holds at most
    ``chunk_size`` bytes, so memory stays bounded regardless of file size.
    """

    def __init__(self, path: str, chunk_size: int = 8192) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.path = str(path)
        self.chunk_size = chunk_size
        self.bytes_read = 0
        self.chunks_read = 0
        self.max_chunk_len = 0
        self.read_error: Optional[BaseException] = None
        self._file: Any = None
        self._consumed = False

    async def __aenter__(self) -> "FileChunkStream":
        try:
            self._file = await aiofiles.open(self.path, "rb")
        except (OSError, IOError) as e:
            logger.error("Cannot open %s: %s", self.path, e)
            raise FileOpenError(
                f"Cannot open local file {self.path}: {e}", file_path=self.path
            ) from e
        logger.debug("Opened %s for streaming", self.path)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if self._file is not None:
            await self._file.close()
            self._file = None
            logger.debug(
                "Closed %s after %d bytes in %d chunks",
                self.path,
                self.bytes_read,
                self.chunks_read,
            )
        return False

    async def iter_chunks(self) -> AsyncIterator[bytes]:
        """Yield the file contents chunk by chunk; not restartable."""
        if self._file is None:
            raise RuntimeError("FileChunkStream must be entered before iterating")
        if self._consumed:
            raise RuntimeError("FileChunkStream can only be consumed once")
        self._consumed = True

        while True:
            try:
                chunk = await self._file.read(self.chunk_size)
            except (OSError, IOError) as e:
                self.read_error = e
                logger.error("Read error on %s after %d bytes: %s", self.path, self.bytes_read, e)
                raise FileReadError(
                    f"Failed reading local file {self.path}: {e}", file_path=self.path
                ) from e
            if not chunk:
                break
            self.bytes_read += len(chunk)
            self.chunks_read += 1
            self.max_chunk_len = max(self.max_chunk_len, len(chunk))
            yield chunk
