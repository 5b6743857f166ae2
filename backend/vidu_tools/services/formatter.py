"""Render tool outcomes as ToolResult text plus a small structured payload.

Outcomes kept apart: success with output, success without output, still in
progress, failed, timed out, and each local/remote/transport error.
"""

from __future__ import annotations

from vidu_tools.schemas.tools import ToolResult
from vidu_tools.schemas.vidu import TaskStatus
from vidu_tools.services.errors import (
    PollingTimeout,
    RemoteJobFailure,
    RemoteRequestError,
    ViduError,
)
from vidu_tools.services.uploader import UploadResult

URL_VALIDITY_NOTE = "Note: These URLs are valid for one hour."

# outcome tags carried in ToolResult.data["outcome"]
SUCCEEDED = "succeeded"
SUCCEEDED_NO_OUTPUT = "succeeded_no_output"
IN_PROGRESS = "in_progress"
FAILED = "failed"
TIMED_OUT = "timed_out"
ERROR = "error"
UPLOADED = "uploaded"


def format_success(task_id: str, status: TaskStatus, *, headline: str) -> ToolResult:
    """Terminal success; only the first creation is surfaced."""
    if not status.creations:
        return format_no_output(task_id, status.state)

    creation = status.creations[0]
    credits = status.credits if status.credits else "N/A"
    return ToolResult.text(
        f"{headline}\n"
        "\n"
        f"Task ID: {task_id}\n"
        f"Status: {status.state}\n"
        f"Credits used: {credits}\n"
        f"Video URL: {creation.url}\n"
        f"Cover Image URL: {creation.cover_url}\n"
        "\n"
        f"{URL_VALIDITY_NOTE}",
        data={
            "outcome": SUCCEEDED,
            "task_id": task_id,
            "state": status.state,
            "credits": status.credits,
            "creation_id": creation.id,
            "video_url": creation.url,
            "cover_url": creation.cover_url,
        },
    )


def format_no_output(task_id: str, state: str) -> ToolResult:
    return ToolResult.text(
        "Generation task completed, but no download URLs were returned.\n"
        "\n"
        f"Task ID: {task_id}\n"
        f"Status: {state}",
        data={"outcome": SUCCEEDED_NO_OUTPUT, "task_id": task_id, "state": state},
    )


def format_in_progress(task_id: str, status: TaskStatus) -> ToolResult:
    return ToolResult.text(
        "Generation task is still in progress.\n"
        "\n"
        f"Task ID: {task_id}\n"
        f"Current Status: {status.state}\n"
        "\n"
        "You can check again later using the same task ID.",
        data={"outcome": IN_PROGRESS, "task_id": task_id, "state": status.state},
    )


def format_upload(result: UploadResult) -> ToolResult:
    return ToolResult.text(
        "Image uploaded successfully!\n"
        "\n"
        f"Resource ID: {result.resource_id}\n"
        f"URI: {result.uri}\n"
        "\n"
        "You can use this URI as the image_url parameter for the image-to-video tool.",
        data={"outcome": UPLOADED, "resource_id": result.resource_id, "uri": result.uri},
    )


def format_error(exc: ViduError) -> ToolResult:
    """Every ViduError becomes an error result; remote bodies are kept verbatim."""
    if isinstance(exc, RemoteJobFailure):
        return ToolResult.text(
            f"Video generation failed: {exc.err_code}\n\nTask ID: {exc.task_id}",
            is_error=True,
            data={"outcome": FAILED, "task_id": exc.task_id, "err_code": exc.err_code},
        )
    if isinstance(exc, PollingTimeout):
        return ToolResult.text(
            "Timed out waiting for video generation to complete. "
            f"Last state: {exc.last_state}\n"
            "\n"
            f"Task ID: {exc.task_id}\n"
            "You can check again later using the same task ID.",
            is_error=True,
            data={
                "outcome": TIMED_OUT,
                "task_id": exc.task_id,
                "state": exc.last_state,
                "attempts": exc.attempts,
            },
        )

    data = {"outcome": ERROR, "error_type": type(exc).__name__}
    if isinstance(exc, RemoteRequestError):
        data["status_code"] = exc.status_code
    return ToolResult.text(str(exc), is_error=True, data=data)


def format_unexpected(exc: Exception) -> ToolResult:
    return ToolResult.text(
        f"An unexpected error occurred: {exc}",
        is_error=True,
        data={"outcome": ERROR, "error_type": type(exc).__name__},
    )


def with_warnings(result: ToolResult, warnings: tuple[str, ...]) -> ToolResult:
    """Append normalizer overrides so the caller sees what was changed."""
    if not warnings:
        return result
    notes = "\n".join(f"- {w}" for w in warnings)
    data = dict(result.data or {})
    data["warnings"] = list(warnings)
    return ToolResult.text(
        f"{result.content[0].text}\n\nParameter adjustments:\n{notes}",
        is_error=result.is_error,
        data=data,
    )
