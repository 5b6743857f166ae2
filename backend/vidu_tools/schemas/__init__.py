"""Pydantic v2 schemas package."""

from vidu_tools.schemas.vidu import (
    Creation,
    FinishUploadResponse,
    StartTaskResponse,
    TaskStatus,
    UploadTarget,
)
from vidu_tools.schemas.tools import (
    CheckStatusRequest,
    ImageToVideoRequest,
    TextContent,
    ToolInfo,
    ToolResult,
    UploadImageRequest,
)

__all__ = [
    "Creation",
    "FinishUploadResponse",
    "StartTaskResponse",
    "TaskStatus",
    "UploadTarget",
    "CheckStatusRequest",
    "ImageToVideoRequest",
    "TextContent",
    "ToolInfo",
    "ToolResult",
    "UploadImageRequest",
]
