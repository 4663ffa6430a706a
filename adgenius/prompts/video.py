"""Video generation prompt"""

# Generic enough for both human models and product-only frames
VIDEO_PROMPT_TEMPLATE = """
Cinematic commercial video of the fashion model in the image.
Strictly preserve the clothing details, colors, and subject appearance.
Action: Gentle, subtle movement. The model poses elegantly.
Environment: {context}.
High quality 4k."""
