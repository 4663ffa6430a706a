"""Gemini client setup shared by the analysis, image and video providers"""

import os
import logging
from typing import Optional

from google import genai
from google.genai import types

from .config import LOCATION, get_api_key, load_credentials, use_vertex_ai
from .errors import CredentialMissing

logger = logging.getLogger(__name__)


# Maximally permissive safety settings. Swimwear and underwear catalog shots
# trigger IMAGE_SAFETY at the default thresholds.
PERMISSIVE_SAFETY_SETTINGS = [
    types.SafetySetting(
        category="HARM_CATEGORY_SEXUALLY_EXPLICIT",
        threshold="BLOCK_NONE"
    ),
    types.SafetySetting(
        category="HARM_CATEGORY_HATE_SPEECH",
        threshold="BLOCK_NONE"
    ),
    types.SafetySetting(
        category="HARM_CATEGORY_HARASSMENT",
        threshold="BLOCK_NONE"
    ),
    types.SafetySetting(
        category="HARM_CATEGORY_DANGEROUS_CONTENT",
        threshold="BLOCK_NONE"
    ),
    types.SafetySetting(
        category="HARM_CATEGORY_CIVIC_INTEGRITY",
        threshold="BLOCK_NONE"
    )
]


def setup_gemini(location: Optional[str] = None) -> genai.Client:
    """Create a google-genai client from the configured credentials

    Vertex AI mode is used when a GCP project and service account are
    configured; otherwise the Gemini Developer API key is used.

    Args:
        location: Vertex AI location override (Gemini 3 models require "global")

    Returns:
        genai.Client

    Raises:
        CredentialMissing: Neither Vertex credentials nor an API key are set
    """
    if use_vertex_ai():
        logger.info(f"[Gemini] Using Vertex AI client (location={location or LOCATION})")
        return genai.Client(
            vertexai=True,
            project=os.getenv('GCP_PROJECT_ID'),
            location=location or LOCATION,
            credentials=load_credentials()
        )

    api_key = get_api_key()
    if not api_key:
        raise CredentialMissing("An API key must be selected before starting a campaign.")
    return genai.Client(api_key=api_key)
