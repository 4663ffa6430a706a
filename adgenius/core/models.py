"""Data records shared by the analysis, prompt and generation stages"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import DEFAULT_ASPECT_RATIO, DEFAULT_IMAGE_MODEL, DEFAULT_VIDEO_MODEL

GenerationMode = Literal["campaign", "ecommerce"]
ModelGender = Literal["female", "male", "neutral"]


class ReferenceImage(BaseModel):
    """Uploaded binary image with its mime type"""
    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str = "image/png"
    filename: Optional[str] = None


class ProductAnalysis(BaseModel):
    """Structured product analysis produced once per run"""
    model_config = ConfigDict(frozen=True, extra="ignore")

    product_name: str
    category: str
    primary_color: str
    secondary_colors: List[str] = Field(default_factory=list)
    material: str
    size_estimate: str = ""
    style: str
    features: List[str] = Field(default_factory=list)
    target_audience: str = ""
    ad_environment: str = ""
    keywords: List[str] = Field(default_factory=list)
    # E-commerce copy
    listing_title: str
    listing_description: str
    listing_features: List[str]


class GenerationJob(BaseModel):
    """One planned output: a labelled, fully composed image instruction"""
    model_config = ConfigDict(frozen=True)

    id: int
    label: str
    instruction: str


class GeneratedImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str = "image/png"


class GeneratedVideo(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str = "video/mp4"
    uri: Optional[str] = None


class RunConfiguration(BaseModel):
    """User-supplied settings for one run, read-only once submitted"""
    model_config = ConfigDict(frozen=True)

    product_image: Optional[ReferenceImage] = None
    secondary_image: Optional[ReferenceImage] = None
    pattern_image: Optional[ReferenceImage] = None
    product_name: str = ""
    brand: str = ""
    custom_prompt: str = ""
    ad_style: str = "luxury_premium"
    image_model: str = DEFAULT_IMAGE_MODEL
    video_model: str = DEFAULT_VIDEO_MODEL
    mode: GenerationMode = "campaign"
    include_video: bool = False
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    job_count: Optional[int] = None  # None = mode default
    color_variations: str = ""  # comma-separated
    render_text: bool = False
    overlay_text: str = ""
    model_gender: Optional[ModelGender] = None  # None = inferred from analysis
