from __future__ import annotations
"""Pydantic v2 models for Vidu API responses."""

from pydantic import BaseModel

TERMINAL_STATES = frozenset({"success", "failed"})


class StartTaskResponse(BaseModel):
    """Reply of the img2video task creation endpoint."""

    task_id: str
    state: str
    model: str | None = None
    images: list[str] = []
    prompt: str | None = None
    duration: int | None = None
    seed: int | None = None
    resolution: str | None = None
    bgm: bool | None = None
    movement_amplitude: str | None = None
    created_at: str | None = None

    model_config = {"extra": "ignore", "protected_namespaces": ()}


class Creation(BaseModel):
    """One generated video and its cover image. URLs expire after about an hour."""

    id: str | None = None
    url: str | None = None
    cover_url: str | None = None

    model_config = {"extra": "ignore"}


class TaskStatus(BaseModel):
    """Reply of the task creations (status) endpoint."""

    state: str
    err_code: str | int | None = None
    credits: int | float | None = None
    creations: list[Creation] = []

    model_config = {"extra": "ignore"}


class UploadTarget(BaseModel):
    """Single-use upload link returned by the upload creation endpoint."""

    id: str
    put_url: str
    expires_at: str | None = None

    model_config = {"extra": "ignore"}


class FinishUploadResponse(BaseModel):
    uri: str

    model_config = {"extra": "ignore"}
