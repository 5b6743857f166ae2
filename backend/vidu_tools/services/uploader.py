"""Three-step Vidu image upload.

  1. check   local file exists and fits the size limit (no network)
  2. create  request a single-use upload link {id, put_url}
  3. PUT     raw bytes to put_url, keep the ETag it returns
  4. finish  hand the ETag back, receive the resource URI

Each stage takes the session built so far and returns it enriched. The first
failing stage aborts the run; nothing is retried or rolled back, and a
session whose finish failed must not be reused.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace

from vidu_tools.config import get_settings
from vidu_tools.services.errors import IntegrityTokenMissing, ValidationError
from vidu_tools.services.vidu_client import ViduClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadSession:
    """Accumulated state of one upload run."""
    image_path: str
    image_type: str
    data: bytes = b""
    resource_id: str | None = None
    put_url: str | None = None
    etag: str | None = None
    uri: str | None = None


@dataclass(frozen=True)
class UploadResult:
    resource_id: str
    uri: str


def content_type_for(image_type: str) -> str:
    return f"image/{image_type}"


def check_file(session: UploadSession, max_bytes: int) -> UploadSession:
    """Stage 1: local preconditions. The bytes are read here, before any network call."""
    if not os.path.isfile(session.image_path):
        raise ValidationError(f"The specified image file does not exist: {session.image_path}")

    size = os.path.getsize(session.image_path)
    if size > max_bytes:
        raise ValidationError(
            f"File size exceeds the {max_bytes / (1024 * 1024):g}MB limit for image upload. "
            f"Current size: {size / (1024 * 1024):.2f}MB"
        )
    try:
        with open(session.image_path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ValidationError(f"Cannot read image file {session.image_path}: {e}") from e
    return replace(session, data=data)


async def create_link(client: ViduClient, session: UploadSession) -> UploadSession:
    """Stage 2: obtain the upload target."""
    target = await client.create_upload()
    logger.info("Upload link created: resource=%s", target.id)
    return replace(session, resource_id=target.id, put_url=target.put_url)


async def transfer(client: ViduClient, session: UploadSession) -> UploadSession:
    """Stage 3: PUT the bytes and capture the ETag with its quotes stripped."""
    raw_etag = await client.put_object(
        session.put_url,
        session.data,
        content_type_for(session.image_type),
    )
    etag = (raw_etag or "").replace('"', "")
    if not etag:
        raise IntegrityTokenMissing("Failed to get ETag from upload response")

    logger.info("Upload transferred: resource=%s bytes=%d", session.resource_id, len(session.data))
    return replace(session, etag=etag)


async def finalize(client: ViduClient, session: UploadSession) -> UploadSession:
    """Stage 4: confirm the transfer and receive the resource URI."""
    finished = await client.finish_upload(session.resource_id, session.etag)
    logger.info("Upload finished: resource=%s uri=%s", session.resource_id, finished.uri)
    return replace(session, uri=finished.uri)


async def upload_image(
    client: ViduClient,
    image_path: str,
    image_type: str,
    *,
    max_bytes: int | None = None,
) -> UploadResult:
    """Run all upload stages in order and return the resource id and URI."""
    if max_bytes is None:
        max_bytes = get_settings().MAX_UPLOAD_BYTES
    session = check_file(UploadSession(image_path=image_path, image_type=image_type), max_bytes)
    for stage in (create_link, transfer, finalize):
        session = await stage(client, session)
    return UploadResult(resource_id=session.resource_id, uri=session.uri)
