"""
Shared fixtures: fake aiohttp sessions for unit tests and a local
AList-like HTTP server for integration tests.
"""

import hashlib
import json
import logging
from contextlib import asynccontextmanager
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from streamput.core.config import Settings

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

VALID_USERNAME = "admin"
VALID_PASSWORD = "secret"
VALID_TOKEN = "T1"

# Bodies up to this size are kept verbatim by the fake server
KEEP_BODY_LIMIT = 1024 * 1024


def pytest_configure(config):  # pylint: disable=unused-argument
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("streamput").setLevel(logging.DEBUG)


# -------------------- Fake aiohttp session (unit tests) --------------------
class FakeResponse:
    def __init__(self, status: int = 200, text: str = ""):
        self.status = status
        self._text = text

    async def text(self, errors: str = "strict") -> str:
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class _RequestContext:
    """Mimics the object returned by ClientSession.post/put."""

    def __init__(self, session: "FakeSession", call: Dict[str, Any], response: FakeResponse):
        self._session = session
        self._call = call
        self._response = response

    async def __aenter__(self):
        data = self._call.get("data")
        if data is not None and hasattr(data, "__aiter__"):
            body = bytearray()
            chunk_sizes: List[int] = []
            async for chunk in data:
                chunk_sizes.append(len(chunk))
                body.extend(chunk)
            self._call["body"] = bytes(body)
            self._call["chunk_sizes"] = chunk_sizes
        return self._response

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records requests; answers with canned responses or raises ``error``."""

    def __init__(
        self,
        login_response: Optional[FakeResponse] = None,
        upload_response: Optional[FakeResponse] = None,
        error: Optional[BaseException] = None,
    ):
        self.login_response = login_response or FakeResponse(
            200,
            json.dumps({"code": 200, "message": "success", "data": {"token": VALID_TOKEN}}),
        )
        self.upload_response = upload_response or FakeResponse(
            200, json.dumps({"code": 200, "message": "success", "data": None})
        )
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def _request(self, method: str, url: str, response: FakeResponse, **kwargs):
        call = {"method": method, "url": url, **kwargs}
        self.calls.append(call)
        if self.error is not None:
            raise self.error
        return _RequestContext(self, call, response)

    def post(self, url, json=None, **kwargs):  # noqa: A002
        return self._request("POST", url, self.login_response, json=json, **kwargs)

    def put(self, url, headers=None, data=None, **kwargs):
        return self._request("PUT", url, self.upload_response, headers=headers, data=data, **kwargs)


@pytest.fixture
def fake_session():
    """Factory so each test can pick its own canned responses."""
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def client_settings() -> Settings:
    return Settings(chunk_size=4, _env_file=None)


@pytest.fixture
def make_file(tmp_path):
    def _make(name: str, content: bytes):
        path = tmp_path / name
        path.write_bytes(content)
        return path

    return _make


# -------------------- Local AList-like server (integration tests) --------------------
@asynccontextmanager
async def _run_fake_alist(login_body: Optional[str] = None, upload_status: int = 200):
    state = SimpleNamespace(login_requests=[], uploads=[])

    async def login(request: web.Request) -> web.Response:
        body = await request.json()
        state.login_requests.append(body)
        if login_body is not None:
            return web.Response(text=login_body, content_type="application/json")
        if body.get("username") == VALID_USERNAME and body.get("password") == VALID_PASSWORD:
            payload = {"code": 200, "message": "success", "data": {"token": VALID_TOKEN}}
        else:
            payload = {"code": 400, "message": "password is incorrect", "data": None}
        return web.json_response(payload)

    async def put(request: web.Request) -> web.Response:
        digest = hashlib.sha256()
        size = 0
        kept = bytearray()
        async for chunk in request.content.iter_chunked(64 * 1024):
            digest.update(chunk)
            size += len(chunk)
            if size <= KEEP_BODY_LIMIT:
                kept.extend(chunk)
        state.uploads.append(
            {
                "headers": request.headers.copy(),
                "size": size,
                "sha256": digest.hexdigest(),
                "body": bytes(kept) if size <= KEEP_BODY_LIMIT else None,
            }
        )
        if request.headers.get("Authorization") != VALID_TOKEN:
            return web.json_response(
                {"code": 401, "message": "token is invalidated", "data": None},
            )
        return web.json_response(
            {"code": 200, "message": "success", "data": None}, status=upload_status
        )

    app = web.Application()
    app.router.add_post("/api/auth/login", login)
    app.router.add_put("/api/fs/put", put)

    server = TestServer(app)
    await server.start_server()
    try:
        yield SimpleNamespace(base_url=f"http://{server.host}:{server.port}", state=state)
    finally:
        await server.close()


@pytest.fixture
def alist_server():
    """Returns an async context manager factory that runs a fake AList server."""
    return _run_fake_alist
