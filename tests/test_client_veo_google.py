"""Tests for Veo video generation against a fake google-genai client."""

import asyncio
from functools import partial
from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest

from adgenius.agents.creative import client_veo_google
from adgenius.agents.creative.client_veo_google import GoogleVeoGenerator, build_video_prompt, veo_aspect_ratio
from adgenius.core.errors import VideoError, VideoRefused
from adgenius.core.models import GeneratedImage

SOURCE = GeneratedImage(data=b"seed-frame", mime_type="image/png")


def _operation(done=False, error=None, response=None):
    return SimpleNamespace(name="operations/veo-123", done=done, error=error, response=response)


def _video_response(video_bytes=b"mp4-bytes", uri=None, mime_type="video/mp4"):
    video = SimpleNamespace(video_bytes=video_bytes, uri=uri, mime_type=mime_type)
    return SimpleNamespace(
        rai_media_filtered_count=None,
        rai_media_filtered_reasons=None,
        generated_videos=[SimpleNamespace(video=video)],
    )


def _client(submitted, polled=()):
    models = SimpleNamespace(generate_videos=AsyncMock(return_value=submitted))
    operations = SimpleNamespace(get=AsyncMock(side_effect=list(polled)))
    return SimpleNamespace(aio=SimpleNamespace(models=models, operations=operations))


def _generator(client, **kwargs):
    kwargs.setdefault("poll_interval", 0)
    return GoogleVeoGenerator(client, **kwargs)


@pytest.mark.parametrize("image_ratio,expected", [
    ("1:1", "9:16"),
    ("3:4", "9:16"),
    ("9:16", "9:16"),
    ("4:3", "16:9"),
    ("16:9", "16:9"),
    ("unknown", "16:9"),
])
def test_veo_aspect_ratio(image_ratio, expected):
    assert veo_aspect_ratio(image_ratio) == expected


def test_video_prompt_carries_context():
    assert "Rooftop at sunset" in build_video_prompt("Rooftop at sunset")


def test_polls_until_done_and_reports_progress():
    client = _client(
        _operation(),
        polled=[_operation(), _operation(), _operation(done=True, response=_video_response())],
    )
    progress = []

    video = asyncio.run(_generator(client).generate_video(
        SOURCE, "City & Street Style", aspect_ratio="1:1", on_progress=progress.append,
    ))

    assert video.data == b"mp4-bytes"
    assert video.mime_type == "video/mp4"
    assert progress == [54, 58, 62]
    assert client.aio.operations.get.await_count == 3

    kwargs = client.aio.models.generate_videos.call_args.kwargs
    assert kwargs["config"].aspect_ratio == "9:16"
    assert kwargs["image"].image_bytes == b"seed-frame"
    assert "City & Street Style" in kwargs["prompt"]


def test_progress_is_capped():
    polled = [_operation() for _ in range(20)] + [_operation(done=True, response=_video_response())]
    progress = []

    asyncio.run(_generator(_client(_operation(), polled), max_polls=30).generate_video(
        SOURCE, "Studio", on_progress=progress.append,
    ))

    assert max(progress) == 98
    assert progress == sorted(progress)


def test_timeout_after_max_polls():
    client = _client(_operation(), polled=[_operation() for _ in range(3)])

    with pytest.raises(VideoError) as excinfo:
        asyncio.run(_generator(client, max_polls=3).generate_video(SOURCE, "Studio"))

    assert "timed out" in str(excinfo.value)
    assert not isinstance(excinfo.value, VideoRefused)
    assert client.aio.operations.get.await_count == 3


def test_operation_error_is_video_error():
    client = _client(_operation(done=True, error={"code": 13, "message": "internal"}))
    with pytest.raises(VideoError) as excinfo:
        asyncio.run(_generator(client).generate_video(SOURCE, "Studio"))
    assert "internal" in str(excinfo.value)


def test_rai_filter_is_video_refused():
    response = SimpleNamespace(
        rai_media_filtered_count=1,
        rai_media_filtered_reasons=["Input image contains a prominent person"],
        generated_videos=[],
    )
    client = _client(_operation(done=True, response=response))

    with pytest.raises(VideoRefused) as excinfo:
        asyncio.run(_generator(client).generate_video(SOURCE, "Studio"))
    assert excinfo.value.reasons == ["Input image contains a prominent person"]


def test_no_videos_is_video_error():
    response = SimpleNamespace(rai_media_filtered_count=0, generated_videos=[])
    client = _client(_operation(done=True, response=response))
    with pytest.raises(VideoError):
        asyncio.run(_generator(client).generate_video(SOURCE, "Studio"))


def test_submit_failure_is_video_error():
    client = _client(None)
    client.aio.models.generate_videos.side_effect = RuntimeError("quota exceeded")
    with pytest.raises(VideoError) as excinfo:
        asyncio.run(_generator(client).generate_video(SOURCE, "Studio"))
    assert "quota exceeded" in str(excinfo.value)


def test_downloads_uri_with_api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        return httpx.Response(200, content=b"downloaded-mp4")

    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        client_veo_google.httpx, "AsyncClient",
        partial(real_client, transport=httpx.MockTransport(handler)),
    )
    uri = "https://generativelanguage.googleapis.com/v1beta/files/abc:download?alt=media"
    client = _client(_operation(done=True, response=_video_response(video_bytes=None, uri=uri)))

    video = asyncio.run(_generator(client).generate_video(SOURCE, "Studio"))

    assert video.data == b"downloaded-mp4"
    assert video.uri == uri
    assert "files/abc" in seen["url"]
    assert seen["key"] == "test-key"


def test_download_failure_is_video_error(monkeypatch):
    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        client_veo_google.httpx, "AsyncClient",
        partial(real_client, transport=httpx.MockTransport(lambda request: httpx.Response(403))),
    )
    client = _client(_operation(done=True, response=_video_response(video_bytes=None, uri="https://example.com/v.mp4")))

    with pytest.raises(VideoError):
        asyncio.run(_generator(client).generate_video(SOURCE, "Studio"))
