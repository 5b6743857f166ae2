from __future__ import annotations
"""Master API router: mounts all sub-routers."""

from fastapi import APIRouter

from vidu_tools.api.models import router as models_router
from vidu_tools.api.tools import router as tools_router

api_router = APIRouter(prefix="/api", redirect_slashes=False)

api_router.include_router(tools_router, prefix="/tools", tags=["Tools"])
api_router.include_router(models_router, prefix="/models", tags=["Models"])
