# ============================================================================
# src/prescription_assistant/utils/image_utils.py
# ============================================================================
"""
Image utilities for the prescription assistant.

Provides:
- Image format detection
- EXIF orientation correction (phone camera photos)
- Downscaling and JPEG re-encoding before upload to remote OCR
"""

from typing import Optional, Tuple
import logging
from io import BytesIO

from PIL import Image, ImageOps, UnidentifiedImageError

from .exceptions import ExtractionError, ExtractionErrorKind

logger = logging.getLogger(__name__)

# Largest edge sent to OCR services; phone photos are usually far larger
MAX_IMAGE_DIMENSION = 2048

DEFAULT_JPEG_QUALITY = 80


def detect_image_type(data: bytes) -> Optional[str]:
    """
    Detect image type from magic bytes.

    Returns:
        Image type string ('png', 'jpeg', 'gif', 'tiff', 'bmp', 'webp') or None
    """
    header = data[:32]

    if header.startswith(b'\x89PNG'):
        return 'png'
    if header.startswith(b'\xff\xd8\xff'):
        return 'jpeg'
    if header.startswith(b'GIF87a') or header.startswith(b'GIF89a'):
        return 'gif'
    if header.startswith(b'II*\x00') or header.startswith(b'MM\x00*'):
        return 'tiff'
    if header.startswith(b'BM'):
        return 'bmp'
    if header.startswith(b'RIFF') and header[8:12] == b'WEBP':
        return 'webp'

    return None


def open_image(data: bytes) -> Image.Image:
    """
    Decode image bytes into a PIL image with EXIF orientation applied.

    Raises:
        ExtractionError(INVALID_IMAGE) if the bytes are not a readable image
    """
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ExtractionError(
            ExtractionErrorKind.INVALID_IMAGE,
            f"Invalid image provided: {e}"
        ) from e

    # Camera photos are often stored sideways with an EXIF rotation tag
    return ImageOps.exif_transpose(image)


def image_size(data: bytes) -> Tuple[int, int]:
    """Return (width, height) of encoded image bytes."""
    return open_image(data).size


def fit_within(width: int, height: int, max_dimension: int) -> Tuple[int, int]:
    """
    Scale (width, height) down so the longer edge is at most max_dimension.

    Aspect ratio is preserved; images already small enough are unchanged.
    """
    longest = max(width, height)
    if longest <= max_dimension:
        return width, height

    scale = max_dimension / float(longest)
    return max(1, round(width * scale)), max(1, round(height * scale))


def prepare_for_upload(
    data: bytes,
    max_dimension: int = MAX_IMAGE_DIMENSION,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Tuple[bytes, int, int]:
    """
    Downscale and re-encode an image as JPEG for upload.

    Args:
        data: Encoded image bytes
        max_dimension: Longest edge after resizing
        quality: JPEG quality (1-95)

    Returns:
        (jpeg_bytes, width, height)
    """
    image = open_image(data)
    target = fit_within(image.width, image.height, max_dimension)

    if target != image.size:
        logger.debug(f"Resizing image {image.size} -> {target}")
        image = image.resize(target, Image.LANCZOS)

    if image.mode not in ("RGB", "L"):
        image = image.convert("RGB")

    buffer = BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue(), image.width, image.height
