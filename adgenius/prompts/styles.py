"""Visual style library for ad image prompts

Each entry pairs a display label with the descriptor injected into the
STYLE line of every job instruction.
"""

DEFAULT_STYLE_DESCRIPTOR = "professional commercial photography"

AD_STYLE_LIBRARY = {
    "luxury_premium": {
        "label": "Luxury & Premium",
        "descriptor": "luxury and premium, high-end aesthetic, sophisticated, vogue style"
    },
    "minimalist_studio": {
        "label": "Minimalist Studio",
        "descriptor": "minimalist studio photography, clean lines, neutral colors, extreme simplicity, cos"
    },
    "luxury_boutique": {
        "label": "Luxury Boutique Atmosphere",
        "descriptor": "luxury boutique interior, expensive atmosphere, high-end retail"
    },
    "natural_daylight": {
        "label": "Natural Daylight",
        "descriptor": "soft natural daylight, organic sun flare, warm tones, golden hour"
    },
    "vintage_retro": {
        "label": "Vintage & Retro",
        "descriptor": "vintage 90s aesthetic, film grain, retro vibe, nostalgic"
    },
    "neon_cyberpunk": {
        "label": "Neon & Cyberpunk",
        "descriptor": "neon lighting, futuristic cyberpunk city atmosphere, blue and pink leds"
    },
    "cinematic_dramatic": {
        "label": "Cinematic & Dramatic",
        "descriptor": "cinematic dramatic lighting, moody atmosphere, shadow play, chiaroscuro"
    },
    "colorful_pop_art": {
        "label": "Colorful & Pop Art",
        "descriptor": "vivid colors, bold pop art contrast, high energy, color-blocking"
    },
    "art_deco": {
        "label": "Art Deco",
        "descriptor": "art deco style, geometric patterns, gold and black palette, opulent"
    },
    "gothic": {
        "label": "Gothic",
        "descriptor": "gothic aesthetic, dark and moody, dramatic shadows, mystical"
    },
    "science_fiction": {
        "label": "Science Fiction",
        "descriptor": "sci-fi aesthetic, high tech environment, futuristic lighting, metallic"
    },
    "retro_futurism": {
        "label": "Retro Futurism",
        "descriptor": "retro futurism, 80s sci-fi vision, synthwave colors"
    },
    "abstract": {
        "label": "Abstract",
        "descriptor": "abstract background, surreal shapes, artistic composition, modern art"
    },
    "steampunk": {
        "label": "Steampunk",
        "descriptor": "steampunk aesthetic, bronze and copper tones, gears and industrial details"
    },
    "vaporwave": {
        "label": "Vaporwave",
        "descriptor": "vaporwave aesthetic, pastel purple and pink tones, glitch effects, 90s digital art"
    },
    "bauhaus": {
        "label": "Bauhaus",
        "descriptor": "bauhaus design, geometric forms, primary colors, functional and minimalist"
    },
    "rustic_bohemian": {
        "label": "Rustic & Bohemian",
        "descriptor": "rustic and bohemian, natural textures, earth tones, ethnic patterns, warm atmosphere"
    }
}


def resolve_style(style_key: str) -> str:
    """Return the descriptor for a style key, or the generic descriptor if unknown"""
    entry = AD_STYLE_LIBRARY.get(style_key or "")
    if entry is None:
        return DEFAULT_STYLE_DESCRIPTOR
    return entry["descriptor"]
