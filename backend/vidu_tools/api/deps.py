"""FastAPI dependencies."""

from __future__ import annotations

from typing import AsyncIterator

from vidu_tools.config import get_settings
from vidu_tools.services.vidu_client import ViduClient


async def get_vidu_client() -> AsyncIterator[ViduClient]:
    """A fresh client per request; invocations share no connection state."""
    async with ViduClient.from_settings(get_settings()) as client:
        yield client
