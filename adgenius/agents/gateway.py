"""
Provider gateway and credential gate

The orchestrator only talks to providers through ProviderGateway. GeminiGateway
is the production implementation; tests substitute a fake with the same
three coroutines.
"""

import logging
from typing import Callable, Optional, Protocol

from dotenv import load_dotenv
from google import genai

from .analysis.product_analyzer import analyze_product
from .creative.client_veo_google import GoogleVeoGenerator
from .creative.tools_image import generate_ad_image
from ..core.config import API_KEY_ENV_VARS, DEFAULT_IMAGE_MODEL, DEFAULT_VIDEO_MODEL, get_api_key, use_vertex_ai
from ..core.llm import setup_gemini
from ..core.models import GeneratedImage, GeneratedVideo, ProductAnalysis, ReferenceImage

logger = logging.getLogger(__name__)


class ProviderGateway(Protocol):
    """Black-box analysis, image and video providers"""

    async def analyze(self, image: bytes, mime_type: str) -> ProductAnalysis:
        ...

    async def generate_image(
        self,
        instruction: str,
        primary: ReferenceImage,
        secondary: Optional[ReferenceImage] = None,
        pattern: Optional[ReferenceImage] = None,
        aspect_ratio: str = "1:1",
        model: str = DEFAULT_IMAGE_MODEL
    ) -> GeneratedImage:
        ...

    async def generate_video(
        self,
        source_image: GeneratedImage,
        context_label: str,
        model: str = DEFAULT_VIDEO_MODEL,
        aspect_ratio: str = "16:9",
        on_progress: Optional[Callable[[int], None]] = None
    ) -> GeneratedVideo:
        ...


class CredentialGate(Protocol):
    """Checks for a usable provider credential before a run starts"""

    def has_credential(self) -> bool:
        ...

    def request_credential(self) -> None:
        ...


class EnvCredentialGate:
    """Credential gate backed by environment variables / .env"""

    def has_credential(self) -> bool:
        return bool(get_api_key()) or use_vertex_ai()

    def request_credential(self) -> None:
        """Reload .env so a key added while the server runs is picked up"""
        load_dotenv(override=True)
        if not self.has_credential():
            logger.warning(
                f"[Credentials] No Gemini credential found. Set one of {', '.join(API_KEY_ENV_VARS)} "
                f"(or GCP_PROJECT_ID + credentials_dict for Vertex AI) and submit again."
            )


class GeminiGateway:
    """ProviderGateway on google-genai: Gemini analysis/image models and Veo"""

    def __init__(self, client: Optional[genai.Client] = None, veo: Optional[GoogleVeoGenerator] = None):
        self._client = client
        self._veo = veo

    @property
    def client(self) -> genai.Client:
        """Lazy client initialization, so credentials are read at first use"""
        if self._client is None:
            # Gemini 3 models are served from the global location on Vertex AI
            self._client = setup_gemini(location="global")
        return self._client

    @property
    def veo(self) -> GoogleVeoGenerator:
        if self._veo is None:
            # Veo on Vertex AI is regional, unlike the global Gemini 3 endpoint
            client = setup_gemini() if use_vertex_ai() else self.client
            self._veo = GoogleVeoGenerator(client)
        return self._veo

    async def analyze(self, image: bytes, mime_type: str) -> ProductAnalysis:
        return await analyze_product(self.client, image, mime_type)

    async def generate_image(
        self,
        instruction: str,
        primary: ReferenceImage,
        secondary: Optional[ReferenceImage] = None,
        pattern: Optional[ReferenceImage] = None,
        aspect_ratio: str = "1:1",
        model: str = DEFAULT_IMAGE_MODEL
    ) -> GeneratedImage:
        return await generate_ad_image(
            self.client,
            instruction,
            primary,
            secondary=secondary,
            pattern=pattern,
            aspect_ratio=aspect_ratio,
            model=model
        )

    async def generate_video(
        self,
        source_image: GeneratedImage,
        context_label: str,
        model: str = DEFAULT_VIDEO_MODEL,
        aspect_ratio: str = "16:9",
        on_progress: Optional[Callable[[int], None]] = None
    ) -> GeneratedVideo:
        return await self.veo.generate_video(
            source_image,
            context_label,
            model=model,
            aspect_ratio=aspect_ratio,
            on_progress=on_progress
        )
