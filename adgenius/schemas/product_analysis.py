"""
Schema definitions for the product analyzer.
Gemini structured output (OpenAPI subset, upper-case type names).
"""

GEMINI_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "product_name": {"type": "STRING"},
        "category": {"type": "STRING"},
        "primary_color": {"type": "STRING"},
        "secondary_colors": {"type": "ARRAY", "items": {"type": "STRING"}},
        "material": {"type": "STRING"},
        "size_estimate": {"type": "STRING"},
        "style": {"type": "STRING"},
        "features": {"type": "ARRAY", "items": {"type": "STRING"}},
        "target_audience": {"type": "STRING"},
        "ad_environment": {"type": "STRING"},
        "keywords": {"type": "ARRAY", "items": {"type": "STRING"}},
        "listing_title": {
            "type": "STRING",
            "description": "SEO friendly, striking product title"
        },
        "listing_description": {
            "type": "STRING",
            "description": "Persuasive marketing description paragraph"
        },
        "listing_features": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Bullet points for the product page"
        }
    },
    "required": [
        "product_name",
        "category",
        "primary_color",
        "material",
        "style",
        "listing_title",
        "listing_description",
        "listing_features"
    ]
}
