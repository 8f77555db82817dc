# ============================================================================
# src/prescription_assistant/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the prescription assistant.

Every failure the pipeline or a conversation turn can surface is one of the
classes below. Capability errors carry a closed `kind` enum so callers can
branch without matching on message strings.
"""

from enum import Enum
from typing import Optional


class ExtractionErrorKind(str, Enum):
    """Why text extraction failed."""
    INVALID_IMAGE = "invalid_image"
    NO_TEXT_FOUND = "no_text_found"
    PROVIDER_FAILURE = "provider_failure"


class ExplanationErrorKind(str, Enum):
    """Why an explanation or answer could not be produced."""
    PROVIDER_FAILURE = "provider_failure"
    EMPTY_RESPONSE = "empty_response"


class PrescriptionAssistantError(Exception):
    """Base exception for all prescription assistant errors."""

    user_message = "Something went wrong. Please try again."


class NoImageError(PrescriptionAssistantError):
    """Pipeline was run without an image."""

    user_message = "Please select or capture an image first."

    def __init__(self, message: str = "No image provided for processing"):
        super().__init__(message)


class ExtractionError(PrescriptionAssistantError):
    """OCR capability failed."""

    user_message = (
        "Could not extract text from the image. "
        "Please ensure the prescription is clearly visible."
    )

    def __init__(self, kind: ExtractionErrorKind, message: Optional[str] = None):
        super().__init__(message or _EXTRACTION_MESSAGES[kind])
        self.kind = kind


class ExplanationError(PrescriptionAssistantError):
    """Explanation or question-answering capability failed."""

    user_message = "Could not generate explanation. Please try again."

    def __init__(self, kind: ExplanationErrorKind, message: Optional[str] = None):
        super().__init__(message or _EXPLANATION_MESSAGES[kind])
        self.kind = kind


class ConfigurationError(PrescriptionAssistantError):
    """Invalid configuration."""
    pass


_EXTRACTION_MESSAGES = {
    ExtractionErrorKind.INVALID_IMAGE: "Invalid image provided",
    ExtractionErrorKind.NO_TEXT_FOUND: "No text found in image",
    ExtractionErrorKind.PROVIDER_FAILURE: "OCR processing failed",
}

_EXPLANATION_MESSAGES = {
    ExplanationErrorKind.PROVIDER_FAILURE: "AI service request failed",
    ExplanationErrorKind.EMPTY_RESPONSE: "No response from AI service",
}
