"""
Core orchestration: data model, capability contracts, medication parser,
processing pipeline and conversation session.
"""

from .models import (
    ChatMessage,
    ImagePayload,
    Medication,
    OCRResult,
    Prescription,
    Rect,
    TextBoundingBox,
)
from .state import Completed, Failed, Idle, Processing, ProcessingState
from .capabilities import (
    ExplanationCapability,
    QuestionAnsweringCapability,
    TextExtractionCapability,
)
from .bbox_utils import normalized_to_pixel_rect, union_rects, vertices_to_rect
from .medication_parser import parse_medications, placeholder_medication
from .pipeline import ProcessingPipeline
from .conversation import ConversationSession, build_context
from .history import PrescriptionHistory

__all__ = [
    # Data model
    "ChatMessage",
    "ImagePayload",
    "Medication",
    "OCRResult",
    "Prescription",
    "Rect",
    "TextBoundingBox",
    # State
    "ProcessingState",
    "Idle",
    "Processing",
    "Completed",
    "Failed",
    # Capabilities
    "TextExtractionCapability",
    "ExplanationCapability",
    "QuestionAnsweringCapability",
    # Geometry
    "normalized_to_pixel_rect",
    "vertices_to_rect",
    "union_rects",
    # Parsing
    "parse_medications",
    "placeholder_medication",
    # Orchestration
    "ProcessingPipeline",
    "ConversationSession",
    "build_context",
    "PrescriptionHistory",
]
