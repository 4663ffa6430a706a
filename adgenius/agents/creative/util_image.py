"""
Image utility functions for provider transport

Handles base64 encoding and upload validation
"""

import base64
import logging
from io import BytesIO

from PIL import Image as PILImage, UnidentifiedImageError

from ...core.errors import CodecError

logger = logging.getLogger(__name__)

# Pillow format name -> mime type accepted by the Gemini image models
PIL_FORMAT_MIME_TYPES = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "MPO": "image/jpeg",
    "WEBP": "image/webp",
    "HEIC": "image/heic",
    "HEIF": "image/heif",
    "GIF": "image/gif"
}


def encode_image(data: bytes) -> str:
    """
    Convert binary image data to a Base64 transport string

    Args:
        data: Raw image bytes

    Returns:
        Base64 encoded string (without data: prefix)

    Raises:
        CodecError: Input is not bytes-like or is empty
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise CodecError(f"Expected binary image data, got {type(data).__name__}")
    if len(data) == 0:
        raise CodecError("Image data is empty")
    return base64.b64encode(bytes(data)).decode('utf-8')


def validate_image(data: bytes) -> str:
    """
    Check that bytes decode as an image and return its mime type

    Args:
        data: Raw uploaded bytes

    Returns:
        Mime type detected from the image header

    Raises:
        CodecError: Bytes are not a readable image
    """
    if not data:
        raise CodecError("Image data is empty")

    try:
        with PILImage.open(BytesIO(data)) as img:
            img.verify()
            image_format = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise CodecError(f"Unreadable image: {e}") from e

    mime_type = PIL_FORMAT_MIME_TYPES.get(image_format)
    if mime_type is None:
        raise CodecError(f"Unsupported image format: {image_format}")
    return mime_type

