"""Tool endpoints: one POST route per Vidu tool.

Routes always answer 200 with a ToolResult; failures set ``is_error``.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from vidu_tools.api.deps import get_vidu_client
from vidu_tools.schemas.tools import (
    CheckStatusRequest,
    ImageToVideoRequest,
    ToolInfo,
    ToolResult,
    UploadImageRequest,
)
from vidu_tools.services import tools
from vidu_tools.services.vidu_client import ViduClient

router = APIRouter()


@router.get("", response_model=list[ToolInfo])
async def list_tools() -> list[ToolInfo]:
    """List the available tools and their argument schemas."""
    return tools.TOOLS


@router.post("/image-to-video", response_model=ToolResult)
async def image_to_video(
    body: ImageToVideoRequest,
    client: ViduClient = Depends(get_vidu_client),
) -> ToolResult:
    """Generate a video from an image and wait for the result (up to ~5 minutes)."""
    return await tools.image_to_video(body, client)


@router.post("/check-generation-status", response_model=ToolResult)
async def check_generation_status(
    body: CheckStatusRequest,
    client: ViduClient = Depends(get_vidu_client),
) -> ToolResult:
    return await tools.check_generation_status(body, client)


@router.post("/upload-image", response_model=ToolResult)
async def upload_image(
    body: UploadImageRequest,
    client: ViduClient = Depends(get_vidu_client),
) -> ToolResult:
    return await tools.upload_image(body, client)
