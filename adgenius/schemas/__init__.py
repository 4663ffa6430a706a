"""
Schema registry for structured output.
"""

import importlib
from typing import Dict, Any

# Available schemas
AVAILABLE_SCHEMAS = [
    "product_analysis"
]


def get_schema(name: str) -> Dict[str, Any]:
    """
    Load the Gemini response schema registered under a name.

    Args:
        name: Schema module name (e.g., "product_analysis")

    Returns:
        Schema dictionary for GenerateContentConfig.response_schema

    Raises:
        ValueError: If name is not a registered schema
    """
    if name not in AVAILABLE_SCHEMAS:
        raise ValueError(f"Invalid schema name: {name}. Must be one of {AVAILABLE_SCHEMAS}")

    module = importlib.import_module(f"{__name__}.{name}")
    return module.GEMINI_SCHEMA
