"""Model constraints API: list the duration/resolution table and preview normalization."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from vidu_tools.schemas.tools import Resolution, ViduModel
from vidu_tools.services.model_registry import list_constraints, normalize_generation_params

router = APIRouter()


@router.get("/video")
async def list_video_models() -> dict[str, Any]:
    """List supported image-to-video models with their constraints."""
    models = list_constraints()
    return {"models": models, "total": len(models)}


@router.get("/video/normalize")
async def preview_normalization(
    model: ViduModel = "vidu2.0",
    duration: int | None = None,
    resolution: Resolution | None = None,
    bgm: bool | None = None,
    seed: int | None = None,
) -> dict[str, Any]:
    """Show which parameters a generation request would actually be sent with."""
    params = normalize_generation_params(
        model,
        duration=duration,
        resolution=resolution,
        bgm=bgm,
        seed=seed,
    )
    return {
        "model": params.model,
        "duration": params.duration,
        "resolution": params.resolution,
        "bgm": params.bgm,
        "seed": params.seed,
        "warnings": list(params.warnings),
    }
