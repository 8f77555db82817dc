# ============================================================================
# src/prescription_assistant/config/ocr_config.py
# ============================================================================
"""
OCR Settings
- Backend selection (tesseract / google_vision / remote)
- Vendor credentials and endpoints
- Upload image limits
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OCRSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OCR_BACKEND: str = Field(
        default="tesseract",
        description="Text extraction backend: tesseract, google_vision or remote"
    )
    TESSERACT_LANG: str = Field(
        default="eng",
        description="Tesseract language pack"
    )
    GOOGLE_VISION_API_KEY: Optional[str] = Field(
        default=None,
        description="Google Cloud Vision API key"
    )
    REMOTE_OCR_URL: Optional[str] = Field(
        default=None,
        description="Full URL of a /process-image OCR endpoint"
    )
    MAX_IMAGE_DIMENSION: int = Field(
        default=2048,
        ge=64,
        description="Longest image edge sent to remote OCR"
    )
    JPEG_QUALITY: int = Field(
        default=80,
        ge=1,
        le=95,
        description="JPEG quality for uploaded images"
    )


ocr_settings = OCRSettings()
