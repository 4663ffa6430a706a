"""Product analysis prompt"""

PRODUCT_ANALYSIS_PROMPT = """Analyze the product in this image as both a **Professional E-commerce Copywriter** and a **Senior Fashion Designer**.

Your task has two stages:
1. Technical analysis for image generation: extract color, texture and cut details.
2. Sales-focused content: write the copy needed to sell this product on a major marketplace or a luxury boutique site.

**Technical Analysis Rules:**
- Describe colors with Pantone-level precision.
- Name fabric texture and cut features (slim-fit, oversize, raglan sleeve, etc.) with technical terms.
- Estimate the size/scale of the product and the advertising environment it suits best.
- Infer the target audience (gender, age range, lifestyle) from the product.

**E-commerce Copy Rules (serious, professional tone):**
- **Title (listing_title):** SEO friendly, striking title naming the brand (if visible) and the product's most compelling feature.
- **Description (listing_description):** One fluent paragraph that persuades the customer to buy.
- **Features (listing_features):** 5-7 quick-to-read, benefit-focused bullet points.

The output must be entirely JSON."""
