"""
URL utility functions.
"""

import logging
from typing import Tuple
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")


def split_base_url(url: str) -> Tuple[str, str]:
    """
    Split a destination URL into the service base and the remote file path.

    The base is everything before the path (scheme, host and optional
    port). The remote file path is the original string with
    that prefix removed, so any percent-escapes or query text are kept as
    typed.

    Args:
        url: Full destination URL, e.g. ``http://host:5244/dav/docs/report.pdf``

    Returns:
        Tuple ``(base_url, remote_file_path)``. The path always starts with
        ``/``; a URL without a path maps to ``/``.

    Raises:
        ValueError: If the URL has no supported scheme, no host, an invalid
            port, embedded credentials or ASCII control characters.
    """
    url = url.strip()
    # urlsplit silently drops tabs and newlines, which would shift the slice below
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in url):
        raise ValueError("control character in URL")
    parts = urlsplit(url)

    if parts.scheme.lower() not in SUPPORTED_SCHEMES:
        raise ValueError(f"unsupported or missing scheme in {url!r}")
    if not parts.hostname:
        raise ValueError(f"missing host in {url!r}")
    if parts.username is not None or parts.password is not None:
        # the Authorization header carries the token; URL credentials would clash
        raise ValueError("credentials embedded in URL are not supported")
    # .port raises ValueError for non-numeric or out-of-range ports
    _ = parts.port

    # urlsplit lowercases the scheme; slice the original so the prefix matches
    base_url = url[: len(parts.scheme) + len("://") + len(parts.netloc)]
    remote_file_path = remove_prefix(url, base_url)
    if not remote_file_path.startswith("/"):
        remote_file_path = "/" + remote_file_path

    logger.debug("Split %s into base=%s path=%s", url, base_url, remote_file_path)
    return base_url, remote_file_path


def remove_prefix(text: str, prefix: str) -> str:
    """Strip ``prefix`` from the start of ``text`` (only the leading occurrence)."""
    if text.startswith(prefix):
        return text[len(prefix) :]
    return text


def join_endpoint(base_url: str, path: str) -> str:
    """Join a base URL and an API path without doubling the slash."""
    return base_url.rstrip("/") + "/" + path.lstrip("/")
