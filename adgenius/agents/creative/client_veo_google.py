"""
Google Veo video generation using google-genai SDK
"""

import asyncio
import logging
from typing import Callable, Optional

import httpx
from google import genai
from google.genai import types
from google.genai.types import GenerateVideosConfig, Image

from ...core.config import (
    GOOGLE_VEO_CONFIG, VEO_ASPECT_RATIOS, DEFAULT_VIDEO_MODEL, PROGRESS_CONFIG, get_api_key
)
from ...core.errors import VideoError, VideoRefused
from ...core.models import GeneratedImage, GeneratedVideo
from ...prompts.video import VIDEO_PROMPT_TEMPLATE

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


def veo_aspect_ratio(image_aspect_ratio: str) -> str:
    """Map an image aspect ratio to one Veo can render (16:9 or 9:16)"""
    return VEO_ASPECT_RATIOS.get(image_aspect_ratio, "16:9")


def build_video_prompt(context_label: str) -> str:
    return VIDEO_PROMPT_TEMPLATE.format(context=context_label)


class GoogleVeoGenerator:
    """Google Veo image-to-video generation on the async google-genai client"""

    def __init__(
        self,
        client: genai.Client,
        poll_interval: float = None,
        max_polls: int = None,
        download_timeout: float = None
    ):
        self.client = client
        self.poll_interval = GOOGLE_VEO_CONFIG["poll_interval"] if poll_interval is None else poll_interval
        self.max_polls = max_polls or GOOGLE_VEO_CONFIG["max_polls"]
        self.download_timeout = download_timeout or GOOGLE_VEO_CONFIG["download_timeout"]

    async def generate_video(
        self,
        source_image: GeneratedImage,
        context_label: str,
        model: str = DEFAULT_VIDEO_MODEL,
        aspect_ratio: str = "16:9",
        on_progress: Optional[ProgressCallback] = None
    ) -> GeneratedVideo:
        """
        Animate a generated image and wait for the result

        Args:
            source_image: Seed frame (the job's generated image)
            context_label: Scene description used in the video prompt
            model: Veo model name
            aspect_ratio: Image aspect ratio; mapped to 16:9 or 9:16
            on_progress: Called with a rising percent estimate on every poll

        Returns:
            GeneratedVideo with downloaded bytes

        Raises:
            VideoRefused: Provider filtered the input (RAI media filter)
            VideoError: Submit/poll failure, operation error, timeout or missing payload
        """
        video_aspect_ratio = veo_aspect_ratio(aspect_ratio)
        prompt = build_video_prompt(context_label)

        logger.info(f"[GoogleVeo] Submitting video generation task")
        logger.info(f"[GoogleVeo] Model: {model}, Aspect ratio: {video_aspect_ratio}")

        config = GenerateVideosConfig(
            number_of_videos=GOOGLE_VEO_CONFIG["number_of_videos"],
            resolution=GOOGLE_VEO_CONFIG["resolution"],
            aspect_ratio=video_aspect_ratio
        )

        try:
            operation = await self.client.aio.models.generate_videos(
                model=model,
                prompt=prompt,
                image=Image(image_bytes=source_image.data, mime_type=source_image.mime_type),
                config=config
            )
        except Exception as e:
            raise VideoError(f"Google Veo error: {e}") from e

        logger.info(f"[GoogleVeo] Task submitted successfully: {getattr(operation, 'name', None)}")
        operation = await self._wait_for_completion(operation, on_progress)
        return await self._extract_video(operation)

    async def _wait_for_completion(self, operation, on_progress: Optional[ProgressCallback]):
        """Poll the long-running operation until done or max_polls is exceeded"""
        polls = 0
        while not operation.done:
            if polls >= self.max_polls:
                logger.error(f"[GoogleVeo] Timeout after {polls} polls waiting for {operation.name}")
                raise VideoError(f"Video generation timed out after {polls} polls")

            await asyncio.sleep(self.poll_interval)
            polls += 1

            try:
                operation = await self.client.aio.operations.get(operation)
            except Exception as e:
                raise VideoError(f"Query error: {e}") from e

            if on_progress is not None:
                estimate = PROGRESS_CONFIG["video_start"] + polls * PROGRESS_CONFIG["video_step"]
                on_progress(min(PROGRESS_CONFIG["video_cap"], estimate))

            logger.info(f"[GoogleVeo] Waiting... (poll {polls}/{self.max_polls})")

        return operation

    async def _extract_video(self, operation) -> GeneratedVideo:
        if operation.error:
            logger.error(f"[GoogleVeo] Task failed: {operation.error}")
            raise VideoError(f"Video generation failed: {operation.error}")

        response = operation.response or getattr(operation, "result", None)
        if response is None:
            raise VideoError("Video operation finished without a response")

        if getattr(response, "rai_media_filtered_count", None):
            reasons = list(getattr(response, "rai_media_filtered_reasons", None) or [])
            logger.warning(f"[GoogleVeo] Input filtered by safety policy: {reasons}")
            raise VideoRefused(
                "Video blocked by safety filters" + (f": {'; '.join(reasons)}" if reasons else ""),
                reasons=reasons
            )

        videos = getattr(response, "generated_videos", None) or []
        if not videos or videos[0].video is None:
            logger.warning(f"[GoogleVeo] Task completed but no videos in result")
            raise VideoError("No videos in result")

        video: types.Video = videos[0].video
        mime_type = video.mime_type or "video/mp4"

        if video.video_bytes:
            logger.info(f"[GoogleVeo] Task completed ({len(video.video_bytes)} bytes inline)")
            return GeneratedVideo(data=video.video_bytes, mime_type=mime_type, uri=video.uri)

        if not video.uri:
            raise VideoError("Video result has neither bytes nor a URI")

        logger.info(f"[GoogleVeo] Task completed: {video.uri}")
        data = await self._download(video.uri)
        return GeneratedVideo(data=data, mime_type=mime_type, uri=video.uri)

    async def _download(self, uri: str) -> bytes:
        """Fetch the finished video; the Gemini API file URI needs the API key header"""
        headers = {}
        api_key = get_api_key()
        if api_key:
            headers["x-goog-api-key"] = api_key

        try:
            async with httpx.AsyncClient(timeout=self.download_timeout, follow_redirects=True) as http:
                response = await http.get(uri, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise VideoError(f"Failed to download video: {e}") from e

        if not response.content:
            raise VideoError("Downloaded video is empty")
        return response.content
