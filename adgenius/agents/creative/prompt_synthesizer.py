"""
Prompt synthesis for campaign and e-commerce image jobs

Turns one product analysis plus the run configuration into an ordered list of
GenerationJobs. Pure: no I/O, no randomness. Color variants are assigned by
position only.
"""

import re
import logging
from typing import List, Optional

from ...core.config import MODE_JOB_COUNTS
from ...core.models import GenerationJob, ProductAnalysis, RunConfiguration
from ...prompts.base import (
    BASE_INSTRUCTION_TEMPLATE,
    BRAND_INSTRUCTION_TEMPLATE,
    GENERIC_BRAND_INSTRUCTION,
    CUSTOM_INSTRUCTION_TEMPLATE,
    MODEL_PERSONAS,
    TEXT_OVERLAY_TEMPLATE,
    NO_TEXT_DIRECTIVE,
    PATTERN_TRANSFORMATION,
    COLOR_TRANSFORMATION_TEMPLATE
)
from ...prompts.campaign import CAMPAIGN_ENVIRONMENTS, CAMPAIGN_BLOCK_TEMPLATE
from ...prompts.ecommerce import ECOMMERCE_POSES, ECOMMERCE_BLOCK_TEMPLATE
from ...prompts.styles import resolve_style

logger = logging.getLogger(__name__)

PATTERN_LABEL_SUFFIX = "(Pattern)"

# Word-boundary keyword sets; "women" never matches the male "men" pattern
FEMALE_KEYWORDS = re.compile(
    r"\b(women|women's|woman|womens|female|ladies|lady|girl|girls|feminine|womenswear)\b",
    re.IGNORECASE
)
MALE_KEYWORDS = re.compile(
    r"\b(men|men's|man|mens|male|gentlemen|gentleman|boy|boys|masculine|menswear)\b",
    re.IGNORECASE
)
UNISEX_KEYWORDS = re.compile(r"\b(unisex|gender[- ]neutral|all genders)\b", re.IGNORECASE)


def clamp_job_count(mode: str, requested: Optional[int] = None) -> int:
    """
    Clamp a requested job count to the mode's bounds

    Args:
        mode: "campaign" or "ecommerce"
        requested: Requested count, None for the mode default

    Returns:
        Count within [minimum, maximum] for the mode
    """
    minimum, maximum, default = MODE_JOB_COUNTS[mode]
    if requested is None:
        return default
    return max(minimum, min(maximum, int(requested)))


def parse_color_variations(color_variations: Optional[str]) -> List[str]:
    """Split a comma-separated color list, dropping blank entries"""
    if not color_variations:
        return []
    return [color.strip() for color in color_variations.split(",") if color.strip()]


def infer_model_gender(analysis: ProductAnalysis) -> str:
    """
    Classify which model persona suits the product

    Looks at target audience, category and product name. A match on only one
    side decides; no match, a unisex marker, or matches on both sides give
    "neutral".

    Returns:
        "female", "male" or "neutral"
    """
    text = " ".join([analysis.target_audience, analysis.category, analysis.product_name])

    if UNISEX_KEYWORDS.search(text):
        return "neutral"

    is_female = bool(FEMALE_KEYWORDS.search(text))
    is_male = bool(MALE_KEYWORDS.search(text))
    if is_female and not is_male:
        return "female"
    if is_male and not is_female:
        return "male"
    return "neutral"


def _text_directive(config: RunConfiguration) -> str:
    overlay_text = (config.overlay_text or "").strip()
    if config.render_text and overlay_text:
        return TEXT_OVERLAY_TEMPLATE.format(text=overlay_text)
    return NO_TEXT_DIRECTIVE


def build_base_instruction(analysis: ProductAnalysis, config: RunConfiguration) -> str:
    """Compose the instruction block shared by every job of a run"""
    brand = (config.brand or "").strip()
    brand_instruction = BRAND_INSTRUCTION_TEMPLATE.format(brand=brand) if brand else GENERIC_BRAND_INSTRUCTION

    custom_prompt = (config.custom_prompt or "").strip()
    custom_instruction = CUSTOM_INSTRUCTION_TEMPLATE.format(custom_prompt=custom_prompt) if custom_prompt else ""

    gender = config.model_gender or infer_model_gender(analysis)
    features = ", ".join(analysis.features) if analysis.features else "the signature construction details"

    return BASE_INSTRUCTION_TEMPLATE.format(
        subject=(config.product_name or "").strip() or analysis.product_name,
        brand_instruction=brand_instruction,
        primary_color=analysis.primary_color,
        material=analysis.material,
        features=features,
        model_persona=MODEL_PERSONAS[gender],
        style=resolve_style(config.ad_style),
        text_directive=_text_directive(config),
        custom_instruction=custom_instruction
    )


def _scene_templates(config: RunConfiguration, style: str) -> List[dict]:
    """Return [{"label", "block"}] for the first K templates of the mode"""
    count = clamp_job_count(config.mode, config.job_count)

    if config.mode == "campaign":
        return [
            {"label": env["label"], "block": CAMPAIGN_BLOCK_TEMPLATE.format(**env)}
            for env in CAMPAIGN_ENVIRONMENTS[:count]
        ]

    return [
        {"label": pose["label"], "block": ECOMMERCE_BLOCK_TEMPLATE.format(pose=pose["pose"], style=style)}
        for pose in ECOMMERCE_POSES[:count]
    ]


def synthesize(analysis: ProductAnalysis, config: RunConfiguration) -> List[GenerationJob]:
    """
    Build the ordered job list for a run

    Args:
        analysis: Product analysis for the primary image
        config: Run configuration

    Returns:
        GenerationJobs with ids 1..N in template order
    """
    base_instruction = build_base_instruction(analysis, config)
    scenes = _scene_templates(config, resolve_style(config.ad_style))
    has_pattern = config.pattern_image is not None
    colors = [] if has_pattern else parse_color_variations(config.color_variations)

    jobs = []
    for index, scene in enumerate(scenes):
        label = scene["label"]
        transformation = ""

        if has_pattern:
            transformation = PATTERN_TRANSFORMATION
            label = f"{label} {PATTERN_LABEL_SUFFIX}"
        elif colors:
            color = colors[index % len(colors)]
            transformation = COLOR_TRANSFORMATION_TEMPLATE.format(color=color)
            label = f"{label} ({color})"

        jobs.append(GenerationJob(
            id=index + 1,
            label=label,
            instruction=base_instruction + transformation + scene["block"]
        ))

    logger.info(
        f"[Prompt Synthesizer] Built {len(jobs)} {config.mode} jobs "
        f"(pattern={has_pattern}, colors={len(colors)})"
    )
    return jobs
