from __future__ import annotations
"""Vidu tools: FastAPI application entry point.

Mounts the tool and model routes and refuses to start without a Vidu API key.
"""

import logging
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from vidu_tools import __version__
from vidu_tools.api.router import api_router
from vidu_tools.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class MissingCredentialsError(RuntimeError):
    """VIDU_API_KEY is not configured."""


def require_api_key() -> None:
    """Fail fast when the Vidu credential is absent."""
    if not get_settings().VIDU_API_KEY:
        logger.error("Error: VIDU_API_KEY environment variable is not set")
        raise MissingCredentialsError("VIDU_API_KEY environment variable is not set")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: verify credentials on startup."""
    require_api_key()
    logger.info("%s starting up (api=%s)", settings.APP_NAME, settings.VIDU_API_BASE_URL)
    yield
    logger.info("%s shut down", settings.APP_NAME)


app = FastAPI(
    title="Vidu Video Generator",
    description="Image-to-video generation, status checks and image upload for the Vidu API",
    version=__version__,
    lifespan=lifespan,
    redirect_slashes=False,
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {
        "service": settings.APP_NAME,
        "status": "running",
        "version": __version__,
    }


@app.get("/health")
async def health():
    """Liveness check; does not call Vidu."""
    return {
        "status": "healthy",
        "api_base_url": settings.VIDU_API_BASE_URL,
        "api_key_configured": bool(settings.VIDU_API_KEY),
    }


def run() -> None:
    """Console entry point: ``vidu-tools``."""
    import uvicorn

    try:
        require_api_key()
    except MissingCredentialsError:
        sys.exit(1)

    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    logger.info("Starting server on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    run()
