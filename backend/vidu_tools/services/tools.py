"""The three Vidu tools: image-to-video, check-generation-status, upload-image.

Each tool runs to completion on its own ViduClient and always returns a
ToolResult; errors are rendered, never raised to the transport.
"""

from __future__ import annotations

import logging
from typing import Any

from vidu_tools.config import Settings, get_settings
from vidu_tools.schemas.tools import (
    CheckStatusRequest,
    ImageToVideoRequest,
    ToolInfo,
    ToolResult,
    UploadImageRequest,
)
from vidu_tools.services import formatter
from vidu_tools.services.errors import ViduError
from vidu_tools.services.model_registry import NormalizedParams, normalize_generation_params
from vidu_tools.services.polling import interpret_status, wait_for_completion
from vidu_tools.services.uploader import upload_image as run_upload
from vidu_tools.services.vidu_client import ViduClient

logger = logging.getLogger(__name__)


TOOLS: list[ToolInfo] = [
    ToolInfo(
        name="image-to-video",
        description="Generate a video from an image using Vidu API",
        input_schema=ImageToVideoRequest.model_json_schema(),
    ),
    ToolInfo(
        name="check-generation-status",
        description="Check the status of a video generation task",
        input_schema=CheckStatusRequest.model_json_schema(),
    ),
    ToolInfo(
        name="upload-image",
        description="Upload an image to use with the Vidu API",
        input_schema=UploadImageRequest.model_json_schema(),
    ),
]


def build_payload(req: ImageToVideoRequest, params: NormalizedParams) -> dict[str, Any]:
    """Assemble the img2video request body from normalized parameters."""
    payload: dict[str, Any] = {
        "model": params.model,
        "images": [req.image_url],
        "prompt": req.prompt or "",
        "duration": params.duration,
        "seed": params.seed,
        "resolution": params.resolution,
        "movement_amplitude": req.movement_amplitude,
        "bgm": params.bgm,
    }
    if req.callback_url:
        payload["callback_url"] = req.callback_url
    return payload


async def image_to_video(
    req: ImageToVideoRequest,
    client: ViduClient,
    settings: Settings | None = None,
    **poll_kwargs: Any,
) -> ToolResult:
    """Start a generation task and wait for it to finish."""
    settings = settings or get_settings()
    params = normalize_generation_params(
        req.model,
        duration=req.duration,
        resolution=req.resolution,
        bgm=req.bgm,
        seed=req.seed,
    )
    try:
        job = await client.start_generation(build_payload(req, params))
        outcome = await wait_for_completion(
            client,
            job.task_id,
            job.state,
            interval=settings.POLL_INTERVAL_SECONDS,
            max_attempts=settings.MAX_POLL_ATTEMPTS,
            **poll_kwargs,
        )
        result = formatter.format_success(
            outcome.task_id, outcome.status, headline="Video generation complete!"
        )
    except ViduError as e:
        logger.warning("image-to-video failed: %s", e)
        result = formatter.format_error(e)
    except Exception as e:
        logger.exception("Error in image-to-video tool")
        result = formatter.format_unexpected(e)
    return formatter.with_warnings(result, params.warnings)


async def check_generation_status(req: CheckStatusRequest, client: ViduClient) -> ToolResult:
    """Read a task's status once; safe to repeat."""
    try:
        status = await client.get_task_status(req.task_id)
        if interpret_status(req.task_id, status) is None:
            return formatter.format_in_progress(req.task_id, status)
        return formatter.format_success(
            req.task_id, status, headline="Generation task complete!"
        )
    except ViduError as e:
        logger.warning("check-generation-status failed: %s", e)
        return formatter.format_error(e)
    except Exception as e:
        logger.exception("Error in check-generation-status tool")
        return formatter.format_unexpected(e)


async def upload_image(
    req: UploadImageRequest,
    client: ViduClient,
    settings: Settings | None = None,
) -> ToolResult:
    """Upload a local image and return the URI usable as image_url."""
    settings = settings or get_settings()
    try:
        result = await run_upload(
            client,
            req.image_path,
            req.image_type,
            max_bytes=settings.MAX_UPLOAD_BYTES,
        )
        return formatter.format_upload(result)
    except ViduError as e:
        logger.warning("upload-image failed: %s", e)
        return formatter.format_error(e)
    except Exception as e:
        logger.exception("Error in upload-image tool")
        return formatter.format_unexpected(e)
