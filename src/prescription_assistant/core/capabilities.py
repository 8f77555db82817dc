# ============================================================================
# src/prescription_assistant/core/capabilities.py
# ============================================================================
"""
Capability Interfaces

Abstract contracts for the three external services the core depends on.
The pipeline and the conversation session receive implementations at
construction; they never look one up globally.

- TextExtractionCapability: image -> OCRResult
- ExplanationCapability: extracted text -> patient-facing explanation
- QuestionAnsweringCapability: question + prescription context -> answer

Implementations are expected to apply their own timeouts and a bounded
retry policy. They signal failure with ExtractionError / ExplanationError;
any other exception is treated by the core as a provider failure.
"""

from abc import ABC, abstractmethod

from .models import ImagePayload, OCRResult


class TextExtractionCapability(ABC):
    """Turns a raw image into recognized text plus per-region confidence."""

    @abstractmethod
    async def extract_text(self, image: ImagePayload) -> OCRResult:
        """
        Recognize text in an image.

        Raises:
            ExtractionError: kind INVALID_IMAGE, NO_TEXT_FOUND or PROVIDER_FAILURE
        """
        pass


class ExplanationCapability(ABC):
    """Turns extracted prescription text into a patient-facing explanation."""

    @abstractmethod
    async def explain(self, text: str) -> str:
        """
        Raises:
            ExplanationError: kind PROVIDER_FAILURE or EMPTY_RESPONSE
        """
        pass


class QuestionAnsweringCapability(ABC):
    """Answers a free-form question using prescription context."""

    @abstractmethod
    async def answer_question(self, question: str, context: str) -> str:
        """
        Raises:
            ExplanationError: kind PROVIDER_FAILURE or EMPTY_RESPONSE
        """
        pass
