"""
Prescription Assistant

Reads a photographed prescription, explains it in plain language and answers
follow-up questions about it.

    from prescription_assistant import ProcessingPipeline, ImagePayload
    from prescription_assistant.extractors import create_text_extractor
    from prescription_assistant.services import create_prescription_service

    service = create_prescription_service()
    pipeline = ProcessingPipeline(create_text_extractor(), service)
    state = await pipeline.run(ImagePayload.from_path("rx.jpg"))
"""

__version__ = "0.1.0"

from .core import (
    ChatMessage,
    Completed,
    ConversationSession,
    Failed,
    Idle,
    ImagePayload,
    Medication,
    OCRResult,
    Prescription,
    PrescriptionHistory,
    Processing,
    ProcessingPipeline,
    ProcessingState,
    parse_medications,
)

__all__ = [
    "ChatMessage",
    "Completed",
    "ConversationSession",
    "Failed",
    "Idle",
    "ImagePayload",
    "Medication",
    "OCRResult",
    "Prescription",
    "PrescriptionHistory",
    "Processing",
    "ProcessingPipeline",
    "ProcessingState",
    "parse_medications",
]
