"""Declarative Vidu model constraint table and request normalizer.

Every supported image-to-video model's allowed duration × resolution
combinations and background-music support live in one table, so the
normalizer is a lookup rather than a chain of model-specific branches.

Usage:
    from vidu_tools.services.model_registry import normalize_generation_params
    params = normalize_generation_params("vidu2.0", duration=8, resolution="1080p")
    params.resolution   # "720p"
    params.warnings     # ("8s videos only support 720p resolution. ...",)
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "vidu2.0"
SEED_UPPER_BOUND = 1_000_000


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DurationResolutionMap:
    """Allowed duration × resolution combination for a model.

    The first resolution is the default for these durations.
    """
    durations: tuple[int, ...]
    resolutions: tuple[str, ...]

    @property
    def default_resolution(self) -> str:
        return self.resolutions[0]


@dataclass(frozen=True)
class ModelConstraint:
    """Constraint descriptor for a single Vidu model."""
    model: str
    duration_resolution_map: tuple[DurationResolutionMap, ...]
    default_duration: int
    bgm_durations: tuple[int, ...] = ()

    @property
    def durations(self) -> tuple[int, ...]:
        return tuple(d for m in self.duration_resolution_map for d in m.durations)

    @property
    def fixed(self) -> bool:
        """True when the model accepts exactly one duration."""
        return len(self.durations) == 1

    def map_for(self, duration: int) -> DurationResolutionMap:
        for drm in self.duration_resolution_map:
            if duration in drm.durations:
                return drm
        raise KeyError(f"{self.model} has no resolution map for {duration}s")

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "default_duration": self.default_duration,
            "duration_resolution_map": [
                {
                    "durations": list(d.durations),
                    "resolutions": list(d.resolutions),
                    "default_resolution": d.default_resolution,
                }
                for d in self.duration_resolution_map
            ],
            "bgm_durations": list(self.bgm_durations),
        }


@dataclass(frozen=True)
class NormalizedParams:
    """Fully specified, always-valid tail of a generation request."""
    model: str
    duration: int
    resolution: str
    bgm: bool
    seed: int
    warnings: tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Constraint table
# ---------------------------------------------------------------------------

_SHORT_OR_LONG = (
    DurationResolutionMap((4,), ("360p", "720p", "1080p")),
    DurationResolutionMap((8,), ("720p",)),
)

MODEL_CONSTRAINTS: dict[str, ModelConstraint] = {
    # viduq1 renders a single 5s clip at 1080p
    "viduq1": ModelConstraint(
        model="viduq1",
        duration_resolution_map=(DurationResolutionMap((5,), ("1080p",)),),
        default_duration=5,
    ),
    "vidu1.5": ModelConstraint(
        model="vidu1.5",
        duration_resolution_map=_SHORT_OR_LONG,
        default_duration=4,
        bgm_durations=(4,),
    ),
    "vidu2.0": ModelConstraint(
        model="vidu2.0",
        duration_resolution_map=_SHORT_OR_LONG,
        default_duration=4,
        bgm_durations=(4,),
    ),
}


def get_constraint(model: str) -> ModelConstraint:
    """Return the constraint row for a model, falling back to the default model."""
    return MODEL_CONSTRAINTS.get(model) or MODEL_CONSTRAINTS[DEFAULT_MODEL]


def list_constraints() -> list[dict[str, Any]]:
    """Serialize the constraint table for the models API."""
    return [c.to_dict() for c in MODEL_CONSTRAINTS.values()]


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------

def normalize_generation_params(
    model: str,
    *,
    duration: int | None = None,
    resolution: str | None = None,
    bgm: bool | None = None,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> NormalizedParams:
    """Resolve caller-supplied options into a valid combination for ``model``.

    Never raises: incompatible values are overridden and the override is
    reported in ``warnings`` (and logged).
    """
    cap = get_constraint(model)
    warnings: list[str] = []

    # Duration
    if duration in cap.durations:
        final_duration = duration
    else:
        final_duration = cap.default_duration
        if duration is not None:
            if cap.fixed:
                warnings.append(
                    f"Model {model} only supports {final_duration}s duration. "
                    f"Using {final_duration}s instead of {duration}s."
                )
            else:
                allowed = "/".join(f"{d}s" for d in cap.durations)
                warnings.append(
                    f"Model {model} only supports {allowed} durations. "
                    f"Using {final_duration}s instead of {duration}s."
                )

    # Resolution (depends on the final duration)
    drm = cap.map_for(final_duration)
    if resolution in drm.resolutions:
        final_resolution = resolution
    else:
        final_resolution = drm.default_resolution
        if resolution is not None:
            if cap.fixed:
                subject = f"Model {model}"
            else:
                subject = f"{final_duration}s videos"
            allowed = "/".join(drm.resolutions)
            warnings.append(
                f"{subject} only support{'s' if cap.fixed else ''} {allowed} resolution. "
                f"Using {final_resolution} instead of {resolution}."
            )

    # Background music
    final_bgm = bool(bgm) and final_duration in cap.bgm_durations
    if bgm and not final_bgm:
        warnings.append(
            f"BGM is only supported for 4s videos. "
            f"BGM will not be added for {final_duration}s video."
        )

    if seed is None:
        seed = (rng or random).randrange(SEED_UPPER_BOUND)

    for msg in warnings:
        logger.warning(msg)

    return NormalizedParams(
        model=model,
        duration=final_duration,
        resolution=final_resolution,
        bgm=final_bgm,
        seed=seed,
        warnings=tuple(warnings),
    )
