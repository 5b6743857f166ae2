"""Tests for the three tool operations, end to end against a scripted Vidu."""

import json

import httpx
import pytest

from vidu_tools.config import Settings
from vidu_tools.schemas.tools import CheckStatusRequest, ImageToVideoRequest, UploadImageRequest
from vidu_tools.services import tools

START_PATH = "/ent/v2/img2video"
STATUS_PATH = "/ent/v2/tasks/task-1/creations"
IMAGE_URL = "https://images.test/cat.png"
CREATION = {"id": "c1", "url": "https://cdn.test/v.mp4", "cover_url": "https://cdn.test/c.jpg"}


@pytest.fixture
def settings():
    return Settings(VIDU_API_KEY="test-key", MAX_POLL_ATTEMPTS=60, POLL_INTERVAL_SECONDS=5.0)


def started(state="created"):
    return httpx.Response(200, json={"task_id": "task-1", "state": state})


def sent_payload(fake_vidu):
    (req,) = fake_vidu.calls("POST", START_PATH)
    return json.loads(req.content)


class TestImageToVideo:
    @pytest.mark.asyncio
    async def test_immediate_success_end_to_end(self, fake_vidu, vidu_client, settings, no_sleep):
        fake_vidu.add("POST", START_PATH, started("success"))
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(200, json={
            "state": "success", "credits": 4, "creations": [CREATION],
        }))
        req = ImageToVideoRequest(image_url=IMAGE_URL, model="vidu2.0", duration=4, resolution="1080p")

        result = await tools.image_to_video(req, vidu_client, settings, sleep=no_sleep)

        payload = sent_payload(fake_vidu)
        assert payload["duration"] == 4
        assert payload["resolution"] == "1080p"
        assert payload["images"] == [IMAGE_URL]
        assert payload["movement_amplitude"] == "auto"
        assert payload["prompt"] == ""
        assert "callback_url" not in payload
        assert no_sleep.delays == []

        assert not result.is_error
        text = result.content[0].text
        assert CREATION["url"] in text
        assert CREATION["cover_url"] in text
        assert "Credits used: 4" in text
        assert "valid for one hour" in text
        assert result.data["outcome"] == "succeeded"

    @pytest.mark.asyncio
    async def test_polls_until_success(self, fake_vidu, vidu_client, settings, no_sleep):
        fake_vidu.add("POST", START_PATH, started("pending"))
        fake_vidu.add(
            "GET", STATUS_PATH,
            httpx.Response(200, json={"state": "processing"}),
            httpx.Response(200, json={"state": "success", "creations": [CREATION]}),
        )
        req = ImageToVideoRequest(image_url=IMAGE_URL)

        result = await tools.image_to_video(req, vidu_client, settings, sleep=no_sleep)

        assert no_sleep.delays == [5.0, 5.0]
        assert "Credits used: N/A" in result.content[0].text

    @pytest.mark.asyncio
    async def test_success_without_output(self, fake_vidu, vidu_client, settings, no_sleep):
        fake_vidu.add("POST", START_PATH, started())
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(200, json={"state": "success", "creations": []}))

        result = await tools.image_to_video(
            ImageToVideoRequest(image_url=IMAGE_URL), vidu_client, settings, sleep=no_sleep,
        )

        assert not result.is_error
        assert result.data["outcome"] == "succeeded_no_output"
        assert "no download URLs" in result.content[0].text

    @pytest.mark.asyncio
    async def test_failed_job(self, fake_vidu, vidu_client, settings, no_sleep):
        fake_vidu.add("POST", START_PATH, started("processing"))
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(200, json={"state": "failed", "err_code": "AuditSubmitIllegal"}))

        result = await tools.image_to_video(
            ImageToVideoRequest(image_url=IMAGE_URL), vidu_client, settings, sleep=no_sleep,
        )

        assert result.is_error
        assert result.data["outcome"] == "failed"
        assert result.content[0].text.startswith("Video generation failed: AuditSubmitIllegal")

    @pytest.mark.asyncio
    async def test_timeout_is_distinct_from_failure(self, fake_vidu, vidu_client, no_sleep):
        settings = Settings(VIDU_API_KEY="test-key", MAX_POLL_ATTEMPTS=3)
        fake_vidu.add("POST", START_PATH, started("queueing"))
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(200, json={"state": "processing"}))

        result = await tools.image_to_video(
            ImageToVideoRequest(image_url=IMAGE_URL), vidu_client, settings, sleep=no_sleep,
        )

        assert result.is_error
        assert result.data["outcome"] == "timed_out"
        assert result.data["attempts"] == 3
        assert "Last state: processing" in result.content[0].text
        assert len(fake_vidu.calls("GET", STATUS_PATH)) == 3

    @pytest.mark.asyncio
    async def test_start_error_is_verbatim(self, fake_vidu, vidu_client, settings, no_sleep):
        fake_vidu.add("POST", START_PATH, httpx.Response(401, text="invalid token"))

        result = await tools.image_to_video(
            ImageToVideoRequest(image_url=IMAGE_URL), vidu_client, settings, sleep=no_sleep,
        )

        assert result.is_error
        assert result.content[0].text == "Error starting video generation: invalid token"
        assert result.data["status_code"] == 401
        assert fake_vidu.calls("GET", STATUS_PATH) == []

    @pytest.mark.asyncio
    async def test_unexpected_error_is_reported(self, fake_vidu, vidu_client, settings, no_sleep):
        fake_vidu.add("POST", START_PATH, httpx.Response(200, text="<html>gateway</html>"))

        result = await tools.image_to_video(
            ImageToVideoRequest(image_url=IMAGE_URL), vidu_client, settings, sleep=no_sleep,
        )

        assert result.is_error
        assert result.content[0].text.startswith("An unexpected error occurred:")

    @pytest.mark.asyncio
    async def test_overrides_are_reported(self, fake_vidu, vidu_client, settings, no_sleep):
        fake_vidu.add("POST", START_PATH, started("success"))
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(200, json={"state": "success", "creations": [CREATION]}))
        req = ImageToVideoRequest(
            image_url=IMAGE_URL, duration=8, resolution="1080p", bgm=True, seed=123,
            callback_url="https://hooks.test/vidu",
        )

        result = await tools.image_to_video(req, vidu_client, settings, sleep=no_sleep)

        payload = sent_payload(fake_vidu)
        assert (payload["duration"], payload["resolution"], payload["bgm"]) == (8, "720p", False)
        assert payload["seed"] == 123
        assert payload["callback_url"] == "https://hooks.test/vidu"
        assert len(result.data["warnings"]) == 2
        assert "Parameter adjustments:" in result.content[0].text

    @pytest.mark.asyncio
    async def test_fixed_duration_model(self, fake_vidu, vidu_client, settings, no_sleep):
        fake_vidu.add("POST", START_PATH, started("success"))
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(200, json={"state": "success", "creations": [CREATION]}))
        req = ImageToVideoRequest(image_url=IMAGE_URL, model="viduq1", duration=4, resolution="720p", bgm=True)

        await tools.image_to_video(req, vidu_client, settings, sleep=no_sleep)

        payload = sent_payload(fake_vidu)
        assert (payload["model"], payload["duration"], payload["resolution"], payload["bgm"]) == (
            "viduq1", 5, "1080p", False,
        )


class TestCheckGenerationStatus:
    @pytest.mark.asyncio
    async def test_in_progress_is_not_an_error(self, fake_vidu, vidu_client):
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(200, json={"state": "queueing"}))

        result = await tools.check_generation_status(CheckStatusRequest(task_id="task-1"), vidu_client)

        assert not result.is_error
        assert result.data == {"outcome": "in_progress", "task_id": "task-1", "state": "queueing"}
        assert "Current Status: queueing" in result.content[0].text

    @pytest.mark.asyncio
    async def test_success(self, fake_vidu, vidu_client):
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(200, json={"state": "success", "credits": 2, "creations": [CREATION]}))

        result = await tools.check_generation_status(CheckStatusRequest(task_id="task-1"), vidu_client)

        assert result.content[0].text.startswith("Generation task complete!")
        assert result.data["video_url"] == CREATION["url"]

    @pytest.mark.asyncio
    async def test_failed_unknown_error(self, fake_vidu, vidu_client):
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(200, json={"state": "failed"}))

        result = await tools.check_generation_status(CheckStatusRequest(task_id="task-1"), vidu_client)

        assert result.is_error
        assert result.data["err_code"] == "Unknown error"

    @pytest.mark.asyncio
    async def test_remote_error(self, fake_vidu, vidu_client):
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(404, text="task not found"))

        result = await tools.check_generation_status(CheckStatusRequest(task_id="task-1"), vidu_client)

        assert result.is_error
        assert result.content[0].text == "Error checking generation status: task not found"

    @pytest.mark.asyncio
    async def test_repeated_checks_are_safe(self, fake_vidu, vidu_client):
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(200, json={"state": "processing"}))
        req = CheckStatusRequest(task_id="task-1")

        first = await tools.check_generation_status(req, vidu_client)
        second = await tools.check_generation_status(req, vidu_client)

        assert first == second
        assert [r.method for r in fake_vidu.requests] == ["GET", "GET"]


class TestUploadImage:
    @pytest.mark.asyncio
    async def test_success(self, fake_vidu, vidu_client, settings, tmp_path):
        path = tmp_path / "a.jpeg"
        path.write_bytes(b"jpeg")
        fake_vidu.add("POST", "/tools/v2/files/uploads", httpx.Response(200, json={
            "id": "res-7", "put_url": "https://storage.test/obj",
        }))
        fake_vidu.add("PUT", "/obj", httpx.Response(200, headers={"ETag": '"e7"'}))
        fake_vidu.add("PUT", "/tools/v2/files/uploads/res-7/finish", httpx.Response(200, json={"uri": "ssupload:?id=res-7"}))

        result = await tools.upload_image(
            UploadImageRequest(image_path=str(path), image_type="jpeg"), vidu_client, settings,
        )

        assert not result.is_error
        assert result.data == {"outcome": "uploaded", "resource_id": "res-7", "uri": "ssupload:?id=res-7"}
        assert "URI: ssupload:?id=res-7" in result.content[0].text
        (put,) = fake_vidu.calls("PUT", "/obj")
        assert put.headers["Content-Type"] == "image/jpeg"

    @pytest.mark.asyncio
    async def test_respects_configured_limit(self, fake_vidu, vidu_client, tmp_path):
        path = tmp_path / "a.png"
        path.write_bytes(b"x" * 11)
        settings = Settings(VIDU_API_KEY="test-key", MAX_UPLOAD_BYTES=10)

        result = await tools.upload_image(
            UploadImageRequest(image_path=str(path), image_type="png"), vidu_client, settings,
        )

        assert result.is_error
        assert result.data["error_type"] == "ValidationError"
        assert fake_vidu.requests == []

    @pytest.mark.asyncio
    async def test_missing_etag(self, fake_vidu, vidu_client, settings, tmp_path):
        path = tmp_path / "a.png"
        path.write_bytes(b"png")
        fake_vidu.add("POST", "/tools/v2/files/uploads", httpx.Response(200, json={
            "id": "res-7", "put_url": "https://storage.test/obj",
        }))
        fake_vidu.add("PUT", "/obj", httpx.Response(200))

        result = await tools.upload_image(
            UploadImageRequest(image_path=str(path), image_type="png"), vidu_client, settings,
        )

        assert result.is_error
        assert result.content[0].text == "Failed to get ETag from upload response"
        assert result.data["error_type"] == "IntegrityTokenMissing"


class TestImageSource:
    @pytest.mark.parametrize("image_url", [
        "https://images.test",
        "data:image/png;base64,iVBORw0KGgo=",
        "ssupload:?id=res-1",
    ])
    def test_uri_is_kept_verbatim(self, image_url):
        assert ImageToVideoRequest(image_url=image_url).image_url == image_url

    @pytest.mark.parametrize("image_url", ["", "cat.png", "/tmp/cat.png"])
    def test_relative_or_empty_is_rejected(self, image_url):
        with pytest.raises(ValueError):
            ImageToVideoRequest(image_url=image_url)

    @pytest.mark.asyncio
    async def test_uploaded_uri_feeds_generation(self, fake_vidu, vidu_client, settings, tmp_path, no_sleep):
        path = tmp_path / "frame.png"
        path.write_bytes(b"png")
        fake_vidu.add("POST", "/tools/v2/files/uploads", httpx.Response(200, json={
            "id": "res-1", "put_url": "https://storage.test/obj",
        }))
        fake_vidu.add("PUT", "/obj", httpx.Response(200, headers={"ETag": '"e1"'}))
        fake_vidu.add("PUT", "/tools/v2/files/uploads/res-1/finish", httpx.Response(200, json={"uri": "ssupload:?id=res-1"}))
        fake_vidu.add("POST", START_PATH, started("success"))
        fake_vidu.add("GET", STATUS_PATH, httpx.Response(200, json={"state": "success", "creations": [CREATION]}))

        uploaded = await tools.upload_image(
            UploadImageRequest(image_path=str(path), image_type="png"), vidu_client, settings,
        )
        result = await tools.image_to_video(
            ImageToVideoRequest(image_url=uploaded.data["uri"]), vidu_client, settings, sleep=no_sleep,
        )

        assert not result.is_error
        assert sent_payload(fake_vidu)["images"] == ["ssupload:?id=res-1"]
