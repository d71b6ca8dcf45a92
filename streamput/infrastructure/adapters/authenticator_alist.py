from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp
from pydantic import ValidationError

from streamput.application.interfaces.authenticator import IAuthenticator
from streamput.core.config import Settings, settings as default_settings
from streamput.core.exceptions import (
    AuthRejectedError,
    MalformedUrlError,
    ProtocolError,
    TransportError,
)
from streamput.core.pyd_schemas import Credentials, LoginRequest, LoginResponse
from streamput.utils.url_utils import join_endpoint, split_base_url

logger = logging.getLogger(__name__)

# How much of an unparseable body is kept on ProtocolError
BODY_EXCERPT_LEN = 200


class AListAuthenticator(IAuthenticator):
    """Logs in with username/password and returns the issued token.

    The JSON body decides the outcome: the service answers HTTP 200 with
    ``{"code": 400, "message": "..."}`` on bad credentials, so the status
    code is only logged.
    """

    def __init__(
        self, session: aiohttp.ClientSession, config: Optional[Settings] = None
    ) -> None:
        self.session = session
        self.config = config or default_settings

    async def login(self, base_url: str, credentials: Credentials) -> str:
        try:
            split_base_url(base_url)
        except ValueError as e:
            raise MalformedUrlError(f"Invalid base URL {base_url!r}: {e}", url=base_url) from e

        login_url = join_endpoint(base_url, self.config.login_path)
        payload = LoginRequest.from_credentials(credentials).model_dump()
        logger.info("Logging in to %s as %s", login_url, credentials.username)

        try:
            async with self.session.post(login_url, json=payload) as response:
                status = response.status
                text = await response.text(errors="replace")
        except aiohttp.InvalidURL as e:
            raise MalformedUrlError(f"Invalid login URL {login_url!r}: {e}", url=login_url) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Login request to %s failed: %s", login_url, e)
            raise TransportError(
                f"Failed to send login request to {login_url}: {e}", url=login_url
            ) from e
        except ValueError as e:
            # aiohttp rejects some header or URL values only while building the request
            raise MalformedUrlError(
                f"Cannot build login request for {login_url!r}: {e}", url=login_url
            ) from e

        logger.debug("Login response status=%s length=%d", status, len(text))

        try:
            parsed = LoginResponse.model_validate_json(text)
        except ValidationError as e:
            excerpt = text[:BODY_EXCERPT_LEN]
            logger.error("Unexpected login response (HTTP %s): %r", status, excerpt)
            raise ProtocolError(
                f"Login response from {login_url} is not a valid login JSON (HTTP {status})",
                body=excerpt,
            ) from e

        token = parsed.token
        if token is None:
            if parsed.message == "success":
                reason = "No token received in response data"
            else:
                reason = f"Login failed with message: {parsed.message}"
            logger.warning("%s (code=%s)", reason, parsed.code)
            raise AuthRejectedError(
                reason, server_code=parsed.code, server_message=parsed.message
            )

        logger.info("Login succeeded for %s", credentials.username)
        return token
