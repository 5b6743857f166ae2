"""Pytest configuration helpers.

This conftest ensures the ``backend`` directory is on `sys.path` so tests can
import the `vidu_tools` package regardless of how pytest is invoked, and
seeds a dummy API key so settings load without a real credential.
"""
import os
import sys

import httpx
import pytest
import pytest_asyncio


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
BACKEND = os.path.join(ROOT, "backend")
if BACKEND not in sys.path:
    sys.path.insert(0, BACKEND)

os.environ.setdefault("VIDU_API_KEY", "test-key")

from vidu_tools.services.vidu_client import ViduClient  # noqa: E402

BASE_URL = "https://api.vidu.test"


class FakeVidu:
    """Scripted stand-in for the Vidu API behind an httpx.MockTransport.

    ``routes`` maps ``(method, path)`` to a list of responses served in order;
    the last one repeats. Every request is recorded in ``requests``.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], list] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, *responses) -> None:
        self.routes.setdefault((method, path), []).extend(responses)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, text=f"no route {request.method} {request.url.path}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_vidu() -> FakeVidu:
    return FakeVidu()


@pytest_asyncio.fixture
async def vidu_client(fake_vidu):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_vidu.handler)) as http:
        yield ViduClient("test-key", BASE_URL, http_client=http)


class SleepRecorder:
    """Replacement for asyncio.sleep that records delays instead of waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def no_sleep() -> SleepRecorder:
    return SleepRecorder()
