"""Tests for prompt synthesis."""

import pytest

from adgenius.agents.creative.prompt_synthesizer import (
    clamp_job_count,
    infer_model_gender,
    parse_color_variations,
    synthesize,
)
from adgenius.core.models import ReferenceImage, RunConfiguration
from adgenius.prompts.base import MODEL_PERSONAS, NO_TEXT_DIRECTIVE, PATTERN_TRANSFORMATION
from adgenius.prompts.campaign import CAMPAIGN_ENVIRONMENTS
from adgenius.prompts.ecommerce import ECOMMERCE_POSES
from adgenius.prompts.styles import AD_STYLE_LIBRARY, DEFAULT_STYLE_DESCRIPTOR, resolve_style

from conftest import SAMPLE_ANALYSIS, make_png


def _config(product_image, **overrides):
    return RunConfiguration(product_image=product_image, **overrides)


@pytest.mark.parametrize("mode,requested,expected", [
    ("campaign", 1, 4),
    ("campaign", 4, 4),
    ("campaign", 7, 7),
    ("campaign", 25, 10),
    ("campaign", None, 4),
    ("ecommerce", 0, 6),
    ("ecommerce", 8, 8),
    ("ecommerce", 99, 12),
    ("ecommerce", None, 8),
])
def test_clamp_job_count(mode, requested, expected):
    assert clamp_job_count(mode, requested) == expected


@pytest.mark.parametrize("mode,requested,expected", [
    ("campaign", -3, 4),
    ("campaign", 11, 10),
    ("ecommerce", 5, 6),
    ("ecommerce", 13, 12),
])
def test_synthesize_job_count_is_clamped(product_image, mode, requested, expected):
    jobs = synthesize(SAMPLE_ANALYSIS, _config(product_image, mode=mode, job_count=requested))
    assert len(jobs) == expected


def test_ids_are_contiguous_from_one(product_image):
    jobs = synthesize(SAMPLE_ANALYSIS, _config(product_image, mode="ecommerce", job_count=12))
    assert [job.id for job in jobs] == list(range(1, 13))


def test_templates_are_taken_in_order(product_image):
    campaign = synthesize(SAMPLE_ANALYSIS, _config(product_image, mode="campaign", job_count=5))
    assert [job.label for job in campaign] == [env["label"] for env in CAMPAIGN_ENVIRONMENTS[:5]]

    ecommerce = synthesize(SAMPLE_ANALYSIS, _config(product_image, mode="ecommerce", job_count=6))
    assert [job.label for job in ecommerce] == [pose["label"] for pose in ECOMMERCE_POSES[:6]]


def test_template_tables_have_expected_sizes():
    assert len(CAMPAIGN_ENVIRONMENTS) == 10
    assert len(ECOMMERCE_POSES) == 12
    assert len(AD_STYLE_LIBRARY) == 17


def test_pattern_takes_precedence_over_colors(product_image):
    pattern = ReferenceImage(data=make_png("yellow"), mime_type="image/png")
    jobs = synthesize(SAMPLE_ANALYSIS, _config(
        product_image, mode="campaign", job_count=4,
        pattern_image=pattern, color_variations="Red, Blue",
    ))

    for job in jobs:
        assert job.label.endswith("(Pattern)")
        assert "(Red)" not in job.label and "(Blue)" not in job.label
        assert PATTERN_TRANSFORMATION in job.instruction
        assert "COLOR VARIANT" not in job.instruction


def test_colors_assigned_by_index_modulo(product_image):
    jobs = synthesize(SAMPLE_ANALYSIS, _config(
        product_image, mode="ecommerce", job_count=8, color_variations="Red,Blue,Sand",
    ))
    colors = ["Red", "Blue", "Sand"]
    for index, job in enumerate(jobs):
        expected = colors[index % 3]
        assert job.label.endswith(f"({expected})")
        assert f"Recolor the product to **{expected}**" in job.instruction


@pytest.mark.parametrize("color_variations", ["", "   ", " , ,"])
def test_blank_color_list_means_no_variation(product_image, color_variations):
    jobs = synthesize(SAMPLE_ANALYSIS, _config(product_image, color_variations=color_variations))
    assert [job.label for job in jobs] == [env["label"] for env in CAMPAIGN_ENVIRONMENTS[:4]]
    assert all("TRANSFORMATION" not in job.instruction for job in jobs)


def test_parse_color_variations_strips_entries():
    assert parse_color_variations(" Red ,Blue,, Navy ") == ["Red", "Blue", "Navy"]
    assert parse_color_variations(None) == []


def test_instruction_order_base_transformation_scene(product_image):
    jobs = synthesize(SAMPLE_ANALYSIS, _config(product_image, color_variations="Red"))
    instruction = jobs[0].instruction

    base_at = instruction.index("PRODUCT PRESERVATION RULES")
    transformation_at = instruction.index("TRANSFORMATION - COLOR VARIANT")
    scene_at = instruction.index("ENVIRONMENT:")
    assert base_at < transformation_at < scene_at


def test_persona_is_identical_across_jobs(product_image):
    jobs = synthesize(SAMPLE_ANALYSIS, _config(product_image, mode="ecommerce", job_count=12))
    persona = MODEL_PERSONAS["female"]
    assert all(persona in job.instruction for job in jobs)
    assert all(MODEL_PERSONAS["male"] not in job.instruction for job in jobs)


def test_explicit_model_gender_overrides_inference(product_image):
    jobs = synthesize(SAMPLE_ANALYSIS, _config(product_image, model_gender="male"))
    assert MODEL_PERSONAS["male"] in jobs[0].instruction


@pytest.mark.parametrize("category,audience,name,expected", [
    ("Women's Dress", "", "", "female"),
    ("Menswear", "", "", "male"),
    ("Jacket", "Men 30-50", "", "male"),
    ("Sneakers", "Unisex, all ages", "", "neutral"),
    ("Tote Bag", "Urban professionals", "Canvas Tote", "neutral"),
    ("Jacket", "Women and men", "", "neutral"),
    ("Blouse", "", "Ladies silk blouse", "female"),
])
def test_infer_model_gender(category, audience, name, expected):
    analysis = SAMPLE_ANALYSIS.model_copy(update={
        "category": category, "target_audience": audience, "product_name": name,
    })
    assert infer_model_gender(analysis) == expected


def test_women_does_not_match_male_keywords():
    analysis = SAMPLE_ANALYSIS.model_copy(update={
        "category": "womenswear", "target_audience": "women", "product_name": "",
    })
    assert infer_model_gender(analysis) == "female"


def test_text_directive_requires_flag_and_text(product_image):
    with_text = synthesize(SAMPLE_ANALYSIS, _config(product_image, render_text=True, overlay_text="SUMMER SALE"))
    assert 'Render the literal text "SUMMER SALE"' in with_text[0].instruction
    assert NO_TEXT_DIRECTIVE not in with_text[0].instruction

    blank_text = synthesize(SAMPLE_ANALYSIS, _config(product_image, render_text=True, overlay_text="   "))
    assert NO_TEXT_DIRECTIVE in blank_text[0].instruction

    flag_off = synthesize(SAMPLE_ANALYSIS, _config(product_image, render_text=False, overlay_text="SUMMER SALE"))
    assert NO_TEXT_DIRECTIVE in flag_off[0].instruction
    assert "SUMMER SALE" not in flag_off[0].instruction


def test_brand_and_custom_prompt(product_image):
    branded = synthesize(SAMPLE_ANALYSIS, _config(product_image, brand="Maison Vert", custom_prompt="Add rain"))
    assert "Brand Identity: Maison Vert." in branded[0].instruction
    assert "USER CUSTOM INSTRUCTIONS (PRIORITY): Add rain" in branded[0].instruction

    generic = synthesize(SAMPLE_ANALYSIS, _config(product_image))
    assert "High-end Brand Identity." in generic[0].instruction
    assert "USER CUSTOM INSTRUCTIONS" not in generic[0].instruction


def test_product_fidelity_fields_in_instruction(product_image):
    jobs = synthesize(SAMPLE_ANALYSIS, _config(product_image, product_name="The Emerald Wrap"))
    instruction = jobs[0].instruction
    assert "SUBJECT: The Emerald Wrap." in instruction
    assert SAMPLE_ANALYSIS.primary_color in instruction
    assert SAMPLE_ANALYSIS.material in instruction
    assert "wrap neckline, tie waist, flutter sleeves" in instruction


def test_unknown_style_falls_back_to_generic_descriptor(product_image):
    assert resolve_style("does_not_exist") == DEFAULT_STYLE_DESCRIPTOR
    assert resolve_style(None) == DEFAULT_STYLE_DESCRIPTOR

    jobs = synthesize(SAMPLE_ANALYSIS, _config(product_image, ad_style="does_not_exist"))
    assert f"STYLE: {DEFAULT_STYLE_DESCRIPTOR}." in jobs[0].instruction


def test_ecommerce_block_carries_style(product_image):
    jobs = synthesize(SAMPLE_ANALYSIS, _config(product_image, mode="ecommerce", ad_style="minimalist_studio"))
    descriptor = resolve_style("minimalist_studio")
    assert f"consistent with **{descriptor}**" in jobs[0].instruction
    assert "Softbox studio lighting" in jobs[0].instruction


def test_synthesize_is_deterministic(product_image):
    config = _config(product_image, mode="ecommerce", job_count=9, color_variations="Red,Blue")
    assert synthesize(SAMPLE_ANALYSIS, config) == synthesize(SAMPLE_ANALYSIS, config)
