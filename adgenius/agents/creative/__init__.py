"""Creative content generation: prompts, images and videos"""

# Import clients
from .client_veo_google import GoogleVeoGenerator

# Import tools
from .tools_image import generate_ad_image
from .prompt_synthesizer import synthesize, clamp_job_count, infer_model_gender

# Import utilities
from .util_image import encode_image, validate_image

__all__ = [
    # Clients
    'GoogleVeoGenerator',
    # Tools
    'generate_ad_image',
    'synthesize',
    'clamp_job_count',
    'infer_model_gender',
    # Utilities
    'encode_image',
    'validate_image'
]
