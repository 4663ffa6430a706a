"""
Ad image generation on the Gemini image models

Sends the composed instruction plus one to three reference images and returns
the first inline image of the response. Safety refusals are raised as
ContentRefused so the orchestrator can run its fallback; everything else is a
GenerationError.
"""

import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types

from ...core.config import (
    DEFAULT_IMAGE_MODEL, GEMINI_ASPECT_RATIOS, DEFAULT_ASPECT_RATIO, HIGH_RES_IMAGE_MODELS
)
from ...core.errors import ContentRefused, GenerationError
from ...core.llm import PERMISSIVE_SAFETY_SETTINGS
from ...core.models import GeneratedImage, ReferenceImage
from ...prompts.base import REFERENCE_IMAGES_TEMPLATE, REFERENCE_IMAGE_ROLES

logger = logging.getLogger(__name__)

# Finish / block reasons that mean the provider withheld the image on policy grounds
REFUSAL_REASONS = frozenset({
    "SAFETY",
    "IMAGE_SAFETY",
    "IMAGE_OTHER",
    "PROHIBITED_CONTENT",
    "IMAGE_PROHIBITED_CONTENT",
    "BLOCKLIST"
})


def _reason_name(reason: Any) -> Optional[str]:
    """Normalize an SDK enum or raw string reason to its upper-case name"""
    if reason is None:
        return None
    name = getattr(reason, "name", None) or str(reason)
    return name.split(".")[-1].upper()


def build_reference_instruction(
    instruction: str,
    secondary: Optional[ReferenceImage] = None,
    pattern: Optional[ReferenceImage] = None
) -> str:
    """
    Prefix the instruction with a map of the attached images

    Only applied when more than the primary product image is attached, so
    the model knows which image plays which role.
    """
    roles = ["primary"]
    if secondary is not None:
        roles.append("secondary")
    if pattern is not None:
        roles.append("pattern")

    if len(roles) == 1:
        return instruction

    image_roles = "\n".join(
        f"IMAGE {index}: {REFERENCE_IMAGE_ROLES[role]}" for index, role in enumerate(roles, start=1)
    )
    return REFERENCE_IMAGES_TEMPLATE.format(
        count=len(roles),
        image_roles=image_roles,
        instruction=instruction
    )


def build_image_contents(
    instruction: str,
    primary: ReferenceImage,
    secondary: Optional[ReferenceImage] = None,
    pattern: Optional[ReferenceImage] = None
) -> List[Any]:
    """Image parts in role order (primary, secondary, pattern) followed by the text"""
    contents = []
    for image in (primary, secondary, pattern):
        if image is not None:
            contents.append(types.Part.from_bytes(data=image.data, mime_type=image.mime_type))
    contents.append(build_reference_instruction(instruction, secondary, pattern))
    return contents


def build_image_config(aspect_ratio: str, model: str) -> types.GenerateContentConfig:
    gemini_aspect_ratio = GEMINI_ASPECT_RATIOS.get(aspect_ratio, DEFAULT_ASPECT_RATIO)
    image_config_params = {"aspect_ratio": gemini_aspect_ratio}

    # Only the pro image model accepts an explicit output size
    image_size = HIGH_RES_IMAGE_MODELS.get(model)
    if image_size:
        image_config_params["image_size"] = image_size

    return types.GenerateContentConfig(
        response_modalities=["IMAGE"],
        image_config=types.ImageConfig(**image_config_params),
        candidate_count=1,
        safety_settings=PERMISSIVE_SAFETY_SETTINGS
    )


def extract_image(response: Any) -> GeneratedImage:
    """
    Pull the first inline image out of a generate_content response

    Raises:
        ContentRefused: Prompt blocked, or candidate finished on a policy reason
        GenerationError: No candidate or no inline image for any other reason
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        prompt_feedback = getattr(response, "prompt_feedback", None)
        block_reason = _reason_name(getattr(prompt_feedback, "block_reason", None))
        if block_reason:
            raise ContentRefused(f"Prompt blocked by provider ({block_reason})", finish_reason=block_reason)
        raise GenerationError("No image candidate in response")

    candidate = candidates[0]
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) or []

    text_response = None
    for part in parts:
        # Skip reasoning/thought output from Gemini 3 Pro
        if getattr(part, "thought", None):
            continue
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and inline_data.data:
            return GeneratedImage(
                data=inline_data.data,
                mime_type=inline_data.mime_type or "image/png"
            )
        if getattr(part, "text", None):
            text_response = part.text

    finish_reason = _reason_name(getattr(candidate, "finish_reason", None))
    if finish_reason in REFUSAL_REASONS:
        raise ContentRefused(f"Image withheld by provider ({finish_reason})", finish_reason=finish_reason)

    detail = f": {text_response[:200]}" if text_response else ""
    raise GenerationError(f"No image generated in response (finish_reason={finish_reason}){detail}")


async def generate_ad_image(
    client: genai.Client,
    instruction: str,
    primary: ReferenceImage,
    secondary: Optional[ReferenceImage] = None,
    pattern: Optional[ReferenceImage] = None,
    aspect_ratio: str = DEFAULT_ASPECT_RATIO,
    model: str = DEFAULT_IMAGE_MODEL
) -> GeneratedImage:
    """
    Generate one ad image from an instruction and reference images

    Args:
        client: google-genai client
        instruction: Fully composed instruction text
        primary: Main product image (always attached first)
        secondary: Optional back view / accessory reference
        pattern: Optional pattern / texture reference
        aspect_ratio: Preset name or Gemini ratio ("1:1", "9:16", ...)
        model: Gemini image model

    Returns:
        GeneratedImage with bytes and mime type

    Raises:
        ContentRefused: Safety/policy refusal
        GenerationError: Any other failure, including transport errors
    """
    contents = build_image_contents(instruction, primary, secondary, pattern)
    config = build_image_config(aspect_ratio, model)
    logger.info(f"[Image Tools] Generating with {model} ({config.image_config.aspect_ratio}, {len(contents) - 1} reference images)")

    try:
        response = await client.aio.models.generate_content(
            model=model,
            contents=contents,
            config=config
        )
    except Exception as e:
        raise GenerationError(f"Image generation error: {e}") from e

    image = extract_image(response)
    logger.info(f"[Image Tools] Image generated ({image.mime_type}, {len(image.data)} bytes)")
    return image
