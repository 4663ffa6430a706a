"""Configuration and setup for the AdGenius campaign generator"""

import os
import json
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Gemini Developer API key (AI Studio). Any of these names is accepted.
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")

# GCP Configuration (optional Vertex AI mode)
PROJECT_ID = os.getenv('GCP_PROJECT_ID')
LOCATION = os.getenv('GOOGLE_CLOUD_REGION', 'us-central1')

# Redis Configuration (optional snapshot publishing)
REDIS_URL = os.getenv('REDIS_URL', '')
SNAPSHOT_TTL_SECONDS = 86400  # 24 hours
# In-memory sessions idle this long are dropped, matching the Redis TTL
SESSION_TTL_SECONDS = SNAPSHOT_TTL_SECONDS

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

# Model Configuration
ANALYSIS_MODEL = "gemini-3-pro-preview"
ANALYSIS_TEMPERATURE = 0.4

IMAGE_MODELS = ["gemini-3-pro-image-preview", "gemini-2.5-flash-image"]
DEFAULT_IMAGE_MODEL = "gemini-3-pro-image-preview"
# Models that accept an explicit image_size in ImageConfig
HIGH_RES_IMAGE_MODELS = {"gemini-3-pro-image-preview": "2K"}

VIDEO_MODELS = ["veo-3.1-fast-generate-preview", "veo-3.1-generate-preview"]
DEFAULT_VIDEO_MODEL = "veo-3.1-fast-generate-preview"

# Gemini API Aspect Ratio Mapping
# Maps preset names to Gemini's aspect ratio format, and accepts Gemini formats directly
GEMINI_ASPECT_RATIOS = {
    # Preset names
    "vertical": "9:16",
    "horizontal": "16:9",
    "square": "1:1",
    "portrait": "3:4",
    "landscape": "4:3",
    # Gemini formats
    "9:16": "9:16",
    "16:9": "16:9",
    "1:1": "1:1",
    "3:4": "3:4",
    "4:3": "4:3"
}
DEFAULT_ASPECT_RATIO = "1:1"

# Veo only renders 16:9 or 9:16; square and portrait images become portrait video
VEO_ASPECT_RATIOS = {
    "1:1": "9:16",
    "3:4": "9:16",
    "9:16": "9:16",
    "4:3": "16:9",
    "16:9": "16:9"
}

# Google Veo Configuration
GOOGLE_VEO_CONFIG = {
    "default_model": DEFAULT_VIDEO_MODEL,
    "poll_interval": 5,   # seconds between operation polls
    "max_polls": 60,      # 60 x 5s = 5 minutes before the job is treated as failed
    "resolution": "720p",
    "number_of_videos": 1,
    "download_timeout": 120.0
}

# Generation modes: (minimum, maximum, default) job counts
MODE_JOB_COUNTS = {
    "campaign": (4, 10, 4),
    "ecommerce": (6, 12, 8)
}

# UI progress hints (no correctness impact)
PROGRESS_CONFIG = {
    "image_start": 5,
    "image_step": 2,
    "image_cap": 45,
    "tick_interval": 0.5,  # seconds
    "video_start": 50,
    "video_step": 4,
    "video_cap": 98,
    "completed": 100,
    "failed": 0
}


def get_api_key() -> Optional[str]:
    """Return the first configured Gemini API key, if any"""
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value:
            return value
    return None


def use_vertex_ai() -> bool:
    """Vertex AI mode is enabled when a project and service account are configured"""
    return bool(os.getenv('GCP_PROJECT_ID') and os.getenv('credentials_dict'))


def load_credentials():
    """Load service account credentials for Vertex AI mode

    Returns:
        google.oauth2 Credentials, or None when Vertex mode is not configured
    """
    credentials_json = os.getenv('credentials_dict')
    if not credentials_json:
        return None

    from google.oauth2 import service_account

    credentials_info = json.loads(credentials_json)
    return service_account.Credentials.from_service_account_info(
        credentials_info,
        scopes=['https://www.googleapis.com/auth/cloud-platform']
    )
