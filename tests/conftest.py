"""Pytest configuration and shared fixtures."""

import inspect
from io import BytesIO

import pytest
from PIL import Image

from adgenius.core.models import (
    GeneratedImage,
    GeneratedVideo,
    ProductAnalysis,
    ReferenceImage,
    RunConfiguration,
)


def make_png(color="blue", size=(64, 64)) -> bytes:
    """Create a small PNG in memory."""
    img = Image.new("RGB", size, color=color)
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


SAMPLE_ANALYSIS = ProductAnalysis(
    product_name="Silk Wrap Dress",
    category="Women's Dress",
    primary_color="Emerald Green (Pantone 17-5641)",
    secondary_colors=["Gold"],
    material="Silk satin",
    size_estimate="Midi length",
    style="Elegant evening wear",
    features=["wrap neckline", "tie waist", "flutter sleeves"],
    target_audience="Women 25-40, urban professionals",
    ad_environment="Luxury evening venue",
    keywords=["silk", "wrap dress", "evening"],
    listing_title="Emerald Silk Wrap Midi Dress with Tie Waist",
    listing_description="A fluid silk satin wrap dress cut for evenings out.",
    listing_features=["100% silk satin", "Adjustable tie waist", "Flutter sleeves"],
)


class FakeGateway:
    """In-memory ProviderGateway with scriptable outcomes.

    image_handler(instruction) returns a GeneratedImage or raises.
    video_handler(source_image, context_label, on_progress) returns a
    GeneratedVideo or raises. Either handler may be a coroutine function.
    """

    def __init__(self, analysis=SAMPLE_ANALYSIS, analyze_error=None, image_handler=None, video_handler=None):
        self.analysis = analysis
        self.analyze_error = analyze_error
        self.image_handler = image_handler or (lambda instruction: GeneratedImage(data=make_png("red")))
        self.video_handler = video_handler or (
            lambda source_image, context_label, on_progress: GeneratedVideo(data=b"mp4-bytes")
        )
        self.analyze_calls = []
        self.image_calls = []
        self.video_calls = []

    async def analyze(self, image, mime_type):
        self.analyze_calls.append((image, mime_type))
        if self.analyze_error is not None:
            raise self.analyze_error
        return self.analysis

    async def generate_image(self, instruction, primary, secondary=None, pattern=None,
                             aspect_ratio="1:1", model="gemini-3-pro-image-preview"):
        self.image_calls.append({
            "instruction": instruction,
            "primary": primary,
            "secondary": secondary,
            "pattern": pattern,
            "aspect_ratio": aspect_ratio,
            "model": model,
        })
        result = self.image_handler(instruction)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def generate_video(self, source_image, context_label, model="veo-3.1-fast-generate-preview",
                             aspect_ratio="16:9", on_progress=None):
        self.video_calls.append({
            "source_image": source_image,
            "context_label": context_label,
            "model": model,
            "aspect_ratio": aspect_ratio,
        })
        result = self.video_handler(source_image, context_label, on_progress)
        if inspect.isawaitable(result):
            result = await result
        return result


class FakeCredentialGate:
    """Credential gate with a fixed answer; request_credential can grant one."""

    def __init__(self, available=True, grant_on_request=False):
        self.available = available
        self.grant_on_request = grant_on_request
        self.request_count = 0

    def has_credential(self):
        return self.available

    def request_credential(self):
        self.request_count += 1
        if self.grant_on_request:
            self.available = True


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def product_image(png_bytes):
    return ReferenceImage(data=png_bytes, mime_type="image/png", filename="dress.png")


@pytest.fixture
def sample_analysis():
    return SAMPLE_ANALYSIS


@pytest.fixture
def campaign_config(product_image):
    return RunConfiguration(product_image=product_image, mode="campaign", job_count=4)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def credential_gate():
    return FakeCredentialGate()
