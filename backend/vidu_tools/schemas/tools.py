from __future__ import annotations
"""Pydantic v2 schemas for the tool request/response envelope."""

from typing import Any, Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator

ViduModel = Literal["viduq1", "vidu1.5", "vidu2.0"]
Resolution = Literal["360p", "720p", "1080p"]
MovementAmplitude = Literal["auto", "small", "medium", "large"]
ImageType = Literal["png", "webp", "jpeg", "jpg"]


class ImageToVideoRequest(BaseModel):
    """Arguments of the image-to-video tool."""

    image_url: str = Field(
        min_length=1,
        description="URL or uploaded-image URI of the image to convert to video",
    )
    prompt: str | None = Field(
        default=None,
        max_length=1500,
        description="Text prompt for video generation (max 1500 chars)",
    )
    duration: int | None = Field(
        default=None,
        description="Duration of the output video in seconds (model-specific)",
    )
    model: ViduModel = Field(default="vidu2.0", description="Model name for generation")
    resolution: Resolution | None = Field(
        default=None,
        description="Resolution of the output video (model/duration-specific)",
    )
    movement_amplitude: MovementAmplitude = Field(
        default="auto",
        description="Movement amplitude of objects in the frame",
    )
    seed: int | None = Field(default=None, description="Random seed for reproducibility")
    bgm: bool | None = Field(default=None, description="Add background music (4s videos only)")
    callback_url: str | None = Field(
        default=None,
        description="Callback URL for async notifications",
    )

    model_config = {"protected_namespaces": ()}

    @field_validator("image_url", "callback_url")
    @classmethod
    def validate_uri(cls, v: str | None) -> str | None:
        """Accept any absolute URI (https, data, ssupload, ...) and keep it verbatim."""
        if v is None:
            return v
        if not urlsplit(v).scheme:
            raise ValueError("Must be an absolute URI with a scheme")
        return v


class CheckStatusRequest(BaseModel):
    """Arguments of the check-generation-status tool."""

    task_id: str = Field(min_length=1, description="Task ID returned by the image-to-video tool")


class UploadImageRequest(BaseModel):
    """Arguments of the upload-image tool."""

    image_path: str = Field(min_length=1, description="Local path to the image file")
    image_type: ImageType = Field(description="Image file type")


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Uniform tool reply: human-readable text, flagged when it reports a failure."""

    content: list[TextContent]
    is_error: bool = False
    data: dict[str, Any] | None = None

    @classmethod
    def text(
        cls,
        text: str,
        *,
        is_error: bool = False,
        data: dict[str, Any] | None = None,
    ) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=is_error, data=data)


class ToolInfo(BaseModel):
    """Tool listing entry for GET /api/tools."""

    name: str
    description: str
    input_schema: dict
