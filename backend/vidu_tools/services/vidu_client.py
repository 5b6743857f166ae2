"""Vidu HTTP client.

Thin async wrapper over the Vidu enterprise API:
  POST /ent/v2/img2video                      → create task
  GET  /ent/v2/tasks/{id}/creations           → task status
  POST /tools/v2/files/uploads                → create upload link
  PUT  <put_url>                              → transfer bytes (presigned, no auth)
  PUT  /tools/v2/files/uploads/{id}/finish    → finalize upload

No call is retried. Non-2xx replies raise RemoteRequestError with the raw
body; network failures raise TransportError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from vidu_tools.config import Settings, get_settings
from vidu_tools.schemas.vidu import (
    FinishUploadResponse,
    StartTaskResponse,
    TaskStatus,
    UploadTarget,
)
from vidu_tools.services.errors import RemoteRequestError, TransportError

logger = logging.getLogger(__name__)


class ViduClient:
    """One client per tool invocation; nothing is shared between calls."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.vidu.com",
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        if not api_key:
            raise ValueError("Vidu API key is required")
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._own_client = http_client is None

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> "ViduClient":
        settings = settings or get_settings()
        return cls(
            settings.VIDU_API_KEY,
            settings.VIDU_API_BASE_URL,
            http_client=http_client,
            timeout=settings.VIDU_HTTP_TIMEOUT,
        )

    async def aclose(self) -> None:
        if self._own_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ViduClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Token {self._api_key}",
        }

    async def _send(
        self,
        method: str,
        url: str,
        context: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send one request; map transport and status failures to our errors."""
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.error("%s: transport failure %s %s: %s", context, method, url, e)
            raise TransportError(f"{context}: {e}") from e

        if not resp.is_success:
            body = resp.text or resp.reason_phrase
            logger.warning("%s: HTTP %d %s", context, resp.status_code, body[:200])
            raise RemoteRequestError(context, body, status_code=resp.status_code)
        return resp

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def start_generation(self, payload: dict[str, Any]) -> StartTaskResponse:
        """Create an image-to-video task. Calling this twice creates two jobs."""
        resp = await self._send(
            "POST",
            f"{self.base_url}/ent/v2/img2video",
            "Error starting video generation",
            json=payload,
            headers=self._headers(),
        )
        job = StartTaskResponse.model_validate(resp.json())
        logger.info("Vidu task created: %s (model=%s, state=%s)", job.task_id, payload.get("model"), job.state)
        return job

    async def get_task_status(self, task_id: str) -> TaskStatus:
        """Read a task's current state and creations. Side-effect free."""
        resp = await self._send(
            "GET",
            f"{self.base_url}/ent/v2/tasks/{task_id}/creations",
            "Error checking generation status",
            headers=self._headers(),
        )
        return TaskStatus.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------

    async def create_upload(self) -> UploadTarget:
        resp = await self._send(
            "POST",
            f"{self.base_url}/tools/v2/files/uploads",
            "Error creating upload link",
            json={"scene": "vidu"},
            headers=self._headers(),
        )
        return UploadTarget.model_validate(resp.json())

    async def put_object(self, put_url: str, data: bytes, content_type: str) -> str | None:
        """PUT raw bytes to a presigned URL and return the raw ETag header, if any."""
        resp = await self._send(
            "PUT",
            put_url,
            "Error uploading image",
            content=data,
            headers={"Content-Type": content_type},
        )
        return resp.headers.get("etag")

    async def finish_upload(self, resource_id: str, etag: str) -> FinishUploadResponse:
        resp = await self._send(
            "PUT",
            f"{self.base_url}/tools/v2/files/uploads/{resource_id}/finish",
            "Error finishing upload",
            json={"etag": etag},
            headers=self._headers(),
        )
        return FinishUploadResponse.model_validate(resp.json())
