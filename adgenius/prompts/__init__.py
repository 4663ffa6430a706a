"""Prompt templates for campaign generation

This module re-exports all prompts from their individual modules.
"""

from .analysis import PRODUCT_ANALYSIS_PROMPT
from .styles import AD_STYLE_LIBRARY, DEFAULT_STYLE_DESCRIPTOR, resolve_style
from .base import (
    BASE_INSTRUCTION_TEMPLATE,
    MODEL_PERSONAS,
    REFERENCE_IMAGES_TEMPLATE,
    REFERENCE_IMAGE_ROLES
)
from .campaign import CAMPAIGN_ENVIRONMENTS, CAMPAIGN_BLOCK_TEMPLATE
from .ecommerce import ECOMMERCE_POSES, ECOMMERCE_BLOCK_TEMPLATE
from .safety import SAFE_HUMAN_FALLBACK_TEMPLATE, build_safe_human_fallback
from .video import VIDEO_PROMPT_TEMPLATE

__all__ = [
    'PRODUCT_ANALYSIS_PROMPT',
    'AD_STYLE_LIBRARY',
    'DEFAULT_STYLE_DESCRIPTOR',
    'resolve_style',
    'BASE_INSTRUCTION_TEMPLATE',
    'MODEL_PERSONAS',
    'REFERENCE_IMAGES_TEMPLATE',
    'REFERENCE_IMAGE_ROLES',
    'CAMPAIGN_ENVIRONMENTS',
    'CAMPAIGN_BLOCK_TEMPLATE',
    'ECOMMERCE_POSES',
    'ECOMMERCE_BLOCK_TEMPLATE',
    'SAFE_HUMAN_FALLBACK_TEMPLATE',
    'build_safe_human_fallback',
    'VIDEO_PROMPT_TEMPLATE'
]
