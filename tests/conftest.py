# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import asyncio
from io import BytesIO
from typing import List, Optional

import pytest
from PIL import Image, ImageDraw

from prescription_assistant.core.capabilities import (
    ExplanationCapability,
    QuestionAnsweringCapability,
    TextExtractionCapability,
)
from prescription_assistant.core.models import ImagePayload, OCRResult, Rect


class StaticExtractor(TextExtractionCapability):
    """Returns the same text every call, or raises `error`."""

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls = 0

    async def extract_text(self, image):
        self.calls += 1
        if self.error is not None:
            raise self.error
        fragments = [
            (line, Rect(0, i * 20, 100, 20), 0.9 - i * 0.1)
            for i, line in enumerate(self.text.split("\n"))
        ]
        return OCRResult.from_fragments(fragments)


class GatedExtractor(TextExtractionCapability):
    """Each call blocks until the test resolves it by index."""

    def __init__(self):
        self.pending: List[dict] = []

    async def extract_text(self, image):
        slot = {"event": asyncio.Event()}
        self.pending.append(slot)
        await slot["event"].wait()
        if "error" in slot:
            raise slot["error"]
        return OCRResult.from_fragments([(slot["text"], Rect(0, 0, 10, 10), 0.8)])

    def resolve(self, index: int, text: str = "", error: Optional[Exception] = None):
        slot = self.pending[index]
        if error is not None:
            slot["error"] = error
        slot["text"] = text
        slot["event"].set()

    async def wait_for_calls(self, count: int):
        while len(self.pending) < count:
            await asyncio.sleep(0)


class RecordingService(ExplanationCapability, QuestionAnsweringCapability):
    """Explainer / answerer that records its inputs."""

    def __init__(
        self,
        explanation: str = "Plain-language explanation",
        answer: str = "Here is an answer",
        error: Optional[Exception] = None,
    ):
        self.explanation = explanation
        self.answer = answer
        self.error = error
        self.explained: List[str] = []
        self.questions: List[tuple] = []

    async def explain(self, text):
        self.explained.append(text)
        if self.error is not None:
            raise self.error
        return self.explanation

    async def answer_question(self, question, context):
        self.questions.append((question, context))
        if self.error is not None:
            raise self.error
        return self.answer


def make_image_bytes(width: int = 200, height: int = 100, fmt: str = "PNG") -> bytes:
    """Small synthetic image with a dark bar so it is not blank."""
    image = Image.new("RGB", (width, height), "white")
    ImageDraw.Draw(image).rectangle([10, 10, width // 2, 30], fill="black")
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def sample_prescription_text():
    """Typical OCR output for a two-line prescription"""
    return (
        "Amoxicillin 500mg Twice daily take with food\n"
        "Ibuprofen 200mg Every 6 hours as needed"
    )


@pytest.fixture
def image_payload():
    """Payload that never reaches a real decoder"""
    return ImagePayload(data=b"not-decoded", width=1000, height=1000)


@pytest.fixture
def png_bytes():
    return make_image_bytes()
