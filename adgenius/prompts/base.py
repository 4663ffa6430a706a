"""Shared instruction blocks for ad image jobs

The base block is identical for every job in a run. Transformation and
pose/environment blocks are appended after it.
"""

BASE_INSTRUCTION_TEMPLATE = """
CONTEXT: Professional Commercial Fashion Photography.
PURPOSE: High-End Retail Catalog.
SUBJECT: {subject}.

SYSTEM GUIDELINES:
- Generate a safe-for-work, professional retail image.
- USE A REALISTIC HUMAN MODEL (Fashion Model).
- NO sexually suggestive content, poses, or expressions.
- Modest, elegant, and professional posing suitable for general audiences.

TASK: {brand_instruction} Visualize the product from the reference image worn by a model.

PRODUCT PRESERVATION RULES:
1. COLOR FIDELITY: The product color MUST match **{primary_color}** exactly.
2. MATERIAL: Emphasize the {material} texture.
3. DETAILS: Keep details like {features}.
4. SILHOUETTE: Maintain the cut, fit and physical attributes of the product from the reference image.

MODEL CONSISTENCY (identical in every image of this campaign):
{model_persona}

STYLE: {style}. 8k resolution, highly detailed, sharp focus, professional lighting.

{text_directive}
{custom_instruction}
"""

BRAND_INSTRUCTION_TEMPLATE = "Brand Identity: {brand}."
GENERIC_BRAND_INSTRUCTION = "High-end Brand Identity."

CUSTOM_INSTRUCTION_TEMPLATE = "USER CUSTOM INSTRUCTIONS (PRIORITY): {custom_prompt}"

# Model persona descriptions, reused verbatim across all jobs of a run
MODEL_PERSONAS = {
    "female": (
        "The same female fashion model appears in every shot: late twenties, "
        "shoulder-length dark brown hair, natural makeup, slim athletic build, "
        "warm medium skin tone, calm confident expression."
    ),
    "male": (
        "The same male fashion model appears in every shot: early thirties, "
        "short neatly styled dark hair, light stubble, lean athletic build, "
        "warm medium skin tone, calm confident expression."
    ),
    "neutral": (
        "The same fashion model appears in every shot: late twenties, "
        "androgynous styling, short dark hair, natural makeup, slim build, "
        "warm medium skin tone, calm confident expression."
    )
}

TEXT_OVERLAY_TEMPLATE = (
    'TEXT OVERLAY: Render the literal text "{text}" integrated naturally into the scene '
    "(typography, signage or campaign layout). Spell it exactly as given."
)
NO_TEXT_DIRECTIVE = (
    "TEXT: Do NOT render any text, letters, numbers, logos, watermarks or captions in the image."
)

PATTERN_TRANSFORMATION = """
TRANSFORMATION - TEXTURE MAPPING:
Map the pattern/texture from the supplied pattern reference image onto the garment.
Preserve the garment's folds, seams, drape, lighting and material response so the
pattern reads as printed or woven into the fabric, not pasted on top."""

COLOR_TRANSFORMATION_TEMPLATE = """
TRANSFORMATION - COLOR VARIANT:
Recolor the product to **{color}**. Keep the material, texture, stitching and silhouette
unchanged; only the product color changes. Ignore the original color fidelity rule for this image."""

# Prefix used when more than the primary product image is attached
REFERENCE_IMAGES_TEMPLATE = """TASK: Use the {count} reference images provided.
{image_roles}
Instruction: Incorporate elements from the reference images naturally into the scene.
SCENE DESCRIPTION:
{instruction}"""

REFERENCE_IMAGE_ROLES = {
    "primary": "MAIN PRODUCT.",
    "secondary": "SECONDARY REFERENCE (Back view or Accessory).",
    "pattern": "PATTERN / TEXTURE REFERENCE (apply to the garment)."
}
