"""
Product analyzer

Single Gemini call per run: reads the primary product photo and returns the
technical analysis plus e-commerce copy as a validated ProductAnalysis.
"""

import json
import logging
from datetime import datetime

from google import genai
from google.genai import types
from pydantic import ValidationError

from ..base import clean_json_response, format_time
from ...core.config import ANALYSIS_MODEL, ANALYSIS_TEMPERATURE
from ...core.errors import AnalysisError
from ...core.llm import PERMISSIVE_SAFETY_SETTINGS
from ...core.models import ProductAnalysis
from ...prompts.analysis import PRODUCT_ANALYSIS_PROMPT
from ...schemas import get_schema

logger = logging.getLogger(__name__)


async def analyze_product(
    client: genai.Client,
    image_data: bytes,
    mime_type: str,
    model: str = ANALYSIS_MODEL
) -> ProductAnalysis:
    """
    Analyze a product photo into a structured ProductAnalysis

    Not retried: a failure here aborts the run.

    Args:
        client: google-genai client
        image_data: Raw product image bytes
        mime_type: Image mime type
        model: Gemini analysis model

    Returns:
        Validated ProductAnalysis

    Raises:
        AnalysisError: Transport failure, empty response, invalid JSON or
            missing required fields
    """
    logger.info(f"[Product Analyzer] Starting analysis with {model}")
    start_time = datetime.now()

    try:
        response = await client.aio.models.generate_content(
            model=model,
            contents=[
                types.Part.from_bytes(data=image_data, mime_type=mime_type),
                PRODUCT_ANALYSIS_PROMPT
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=get_schema("product_analysis"),
                temperature=ANALYSIS_TEMPERATURE,
                safety_settings=PERMISSIVE_SAFETY_SETTINGS
            )
        )
    except Exception as e:
        raise AnalysisError(f"Analysis request failed: {e}") from e

    text = getattr(response, "text", None)
    if not text:
        raise AnalysisError("No response from analysis model")

    try:
        payload = json.loads(clean_json_response(text))
    except json.JSONDecodeError as e:
        raise AnalysisError(f"Analysis response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise AnalysisError(f"Analysis response must be a JSON object, got {type(payload).__name__}")

    try:
        analysis = ProductAnalysis.model_validate(payload)
    except ValidationError as e:
        raise AnalysisError(f"Analysis response failed validation: {e.error_count()} errors") from e

    elapsed = (datetime.now() - start_time).total_seconds()
    logger.info(f"[Product Analyzer] Analyzed '{analysis.product_name}' ({analysis.category}) in {format_time(elapsed)}")
    return analysis
