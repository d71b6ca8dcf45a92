from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, SecretStr, constr

from streamput.core.exceptions import MalformedUrlError
from streamput.utils.url_utils import split_base_url


class Credentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: constr(min_length=1)
    password: SecretStr


class LoginRequest(BaseModel):
    username: str
    password: str

    @classmethod
    def from_credentials(cls, credentials: Credentials) -> "LoginRequest":
        return cls(
            username=credentials.username,
            password=credentials.password.get_secret_value(),
        )


class LoginData(BaseModel):
    token: Optional[str] = None


class LoginResponse(BaseModel):
    code: Optional[int] = None
    message: str
    data: Optional[LoginData] = None

    @property
    def token(self) -> Optional[str]:
        """Token when the login succeeded, otherwise None."""
        if self.message != "success" or self.data is None or not self.data.token:
            return None
        return self.data.token


class Destination(BaseModel):
    """Remote target parsed from a URL like ``http://host:5244/dav/report.pdf``."""

    model_config = ConfigDict(frozen=True)

    url: str
    base_url: str
    remote_file_path: str

    @classmethod
    def from_url(cls, url: str) -> "Destination":
        try:
            base_url, remote_file_path = split_base_url(url)
        except ValueError as e:
            raise MalformedUrlError(f"Invalid URL {url!r}: {e}", url=url) from e
        return cls(url=url, base_url=base_url, remote_file_path=remote_file_path)


class UploadResult(BaseModel):
    destination: Destination
    response_text: str
