"""
Application configuration using Pydantic Settings
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings with environment variable support (prefix ``STREAMPUT_``)"""

    # Remote API Settings
    login_path: str = "/api/auth/login"
    upload_path: str = "/api/fs/put"
    file_path_header: str = "File-Path"

    # Transfer Settings
    chunk_size: int = 8192  # bytes read from disk per body chunk
    request_timeout: Optional[float] = None  # None keeps aiohttp's default

    # Logging Settings
    log_level: str = "WARNING"
    log_format: str = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    log_date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: str = ""

    @field_validator("login_path", "upload_path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        """Normalize endpoint paths so they can be appended to a base URL.

        Example:
            >>> ensure_leading_slash("api/fs/put")
            '/api/fs/put'
        """
        v = v.strip()
        if not v.startswith("/"):
            v = "/" + v
        return v

    @field_validator("chunk_size")
    @classmethod
    def positive_chunk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("chunk_size must be a positive number of bytes")
        return v

    model_config = {
        "env_prefix": "STREAMPUT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()
