"""
Text extraction backends.

Usage:
    from prescription_assistant.extractors import create_text_extractor

    extractor = create_text_extractor({'ocr_backend': 'tesseract'})
    result = await extractor.extract_text(image)
"""

from typing import Any, Dict, Optional

from .base import HTTPTextExtractor
from .tesseract_extractor import TesseractTextExtractor
from .google_vision_extractor import GoogleVisionTextExtractor
from .remote_ocr_extractor import RemoteOCRExtractor
from ..config import get_config
from ..core.capabilities import TextExtractionCapability
from ..utils.exceptions import ConfigurationError


EXTRACTORS = {
    "tesseract": TesseractTextExtractor,
    "google_vision": GoogleVisionTextExtractor,
    "remote": RemoteOCRExtractor,
}


def create_text_extractor(config: Optional[Dict[str, Any]] = None) -> TextExtractionCapability:
    """
    Build the configured OCR backend.

    Passed config values take precedence over environment / .env values.

    Raises:
        ConfigurationError: Unknown backend or missing credentials
    """
    config = {**get_config(), **(config or {})}
    backend = (config.get('ocr_backend') or 'tesseract').lower()

    extractor_class = EXTRACTORS.get(backend)
    if extractor_class is None:
        raise ConfigurationError(
            f"Unknown OCR backend: {backend}. Supported backends: {', '.join(EXTRACTORS)}"
        )
    return extractor_class(config)


__all__ = [
    "HTTPTextExtractor",
    "TesseractTextExtractor",
    "GoogleVisionTextExtractor",
    "RemoteOCRExtractor",
    "create_text_extractor",
]
