from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import aiohttp

from streamput.application.interfaces.uploader import IStreamUploader
from streamput.core.config import Settings, settings as default_settings
from streamput.core.exceptions import FileReadError, MalformedUrlError, TransportError
from streamput.core.pyd_schemas import Destination
from streamput.utils.file_stream import FileChunkStream
from streamput.utils.url_utils import join_endpoint

logger = logging.getLogger(__name__)


class StreamUploader(IStreamUploader):
    """Uploads a local file with ``PUT /api/fs/put`` using a streamed body.

    The file is opened before the request is built, read ``chunk_size``
    bytes at a time and handed to aiohttp as an async generator, so the
    request goes out with chunked transfer encoding and the whole file is
    never held in memory.
    """

    def __init__(
        self, session: aiohttp.ClientSession, config: Optional[Settings] = None
    ) -> None:
        self.session = session
        self.config = config or default_settings

    def build_headers(self, destination: Destination, token: str) -> Dict[str, str]:
        # Raw token, no "Bearer" prefix: that is what the service expects today
        return {
            "Authorization": token,
            self.config.file_path_header: destination.remote_file_path,
            "Content-Type": "application/octet-stream",
        }

    async def upload(self, destination: Destination, token: str, local_path: str) -> str:
        upload_url = join_endpoint(destination.base_url, self.config.upload_path)
        headers = self.build_headers(destination, token)

        # Opening first means a missing file never costs a network round-trip
        async with FileChunkStream(local_path, self.config.chunk_size) as stream:
            logger.info(
                "Uploading %s -> %s (%s)",
                local_path,
                destination.remote_file_path,
                upload_url,
            )
            try:
                async with self.session.put(
                    upload_url, headers=headers, data=stream.iter_chunks()
                ) as response:
                    status = response.status
                    text = await response.text(errors="replace")
            except FileReadError:
                raise
            except aiohttp.InvalidURL as e:
                raise MalformedUrlError(
                    f"Invalid upload URL {upload_url!r}: {e}", url=upload_url
                ) from e
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if stream.read_error is not None:
                    # aiohttp wraps errors raised by the body generator
                    raise FileReadError(
                        f"Failed reading local file {local_path}: {stream.read_error}",
                        file_path=local_path,
                    ) from e
                logger.error("Upload to %s failed: %s", upload_url, e)
                raise TransportError(
                    f"Failed to send upload request to {upload_url}: {e}", url=upload_url
                ) from e
            except ValueError as e:
                # e.g. a File-Path value aiohttp refuses to put in a header
                raise MalformedUrlError(
                    f"Cannot build upload request for {upload_url!r}: {e}", url=upload_url
                ) from e

            if stream.read_error is not None:
                raise FileReadError(
                    f"Failed reading local file {local_path}: {stream.read_error}",
                    file_path=local_path,
                ) from stream.read_error

            logger.info(
                "Upload finished: HTTP %s, %d bytes sent in %d chunks",
                status,
                stream.bytes_read,
                stream.chunks_read,
            )

        if status >= 400:
            logger.warning("Upload endpoint answered HTTP %s: %s", status, text[:200])
        return text
