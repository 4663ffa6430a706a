"""Campaign mode environment templates, in selection order"""

CAMPAIGN_BLOCK_TEMPLATE = """
ENVIRONMENT: {environment}
POSE: {pose}
LIGHTING: {lighting}"""

CAMPAIGN_ENVIRONMENTS = [
    {
        "label": "City & Street Style",
        "environment": "Urban street, stylish city vibe. Blurred background (bokeh).",
        "pose": "Model walking confidently or looking at camera.",
        "lighting": "Natural daylight."
    },
    {
        "label": "Cafe & Lifestyle",
        "environment": "Luxury cafe terrace or stylish interior.",
        "pose": "Model sitting comfortably, drinking coffee or reading.",
        "lighting": "Soft interior lighting."
    },
    {
        "label": "Nature & Landscape",
        "environment": "Nature, park, or beach at golden hour.",
        "pose": "Model leaning lightly, peaceful and aesthetic.",
        "lighting": "Cinematic warm and romantic sun flare."
    },
    {
        "label": "Creative Studio & Editorial",
        "environment": "Creative fashion studio. Solid color or textured artistic background.",
        "pose": "High-fashion editorial pose, dramatic and bold.",
        "lighting": "High contrast, dramatic studio lighting."
    },
    {
        "label": "Rooftop at Dusk",
        "environment": "Modern rooftop terrace overlooking a city skyline at dusk.",
        "pose": "Model leaning on a glass railing, looking over the shoulder.",
        "lighting": "Blue hour ambient light with warm practical lights in the background."
    },
    {
        "label": "Luxury Hotel Lobby",
        "environment": "Marble hotel lobby with brass details and tall windows.",
        "pose": "Model standing by a column, one hand relaxed in a pocket or on a bag strap.",
        "lighting": "Warm interior lighting with soft window fill."
    },
    {
        "label": "Art Gallery",
        "environment": "Minimal white-walled contemporary art gallery with large canvases.",
        "pose": "Model in three-quarter profile, contemplating an artwork.",
        "lighting": "Even gallery track lighting, soft shadows."
    },
    {
        "label": "Mediterranean Coast",
        "environment": "Whitewashed coastal village street with bougainvillea and sea view.",
        "pose": "Model mid-stride on stone steps, relaxed and natural.",
        "lighting": "Bright midday sun softened by a light haze."
    },
    {
        "label": "Night City Lights",
        "environment": "City avenue at night with illuminated storefronts and light trails.",
        "pose": "Model standing still while the city moves around them.",
        "lighting": "Neon and streetlight glow, cinematic contrast."
    },
    {
        "label": "Botanical Greenhouse",
        "environment": "Victorian glass greenhouse full of tropical plants.",
        "pose": "Model seated on a wrought-iron bench, gentle smile.",
        "lighting": "Diffused daylight through glass panes, soft green reflections."
    }
]
