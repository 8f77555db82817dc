# ============================================================================
# src/prescription_assistant/core/models.py
# ============================================================================
"""
Data Model
- Prescription: finalized result of one successful pipeline run
- Medication: one parsed medication line
- OCRResult / TextBoundingBox / Rect: text extraction output
- ImagePayload: image handed to the pipeline
- ChatMessage: one entry of a conversation history

Prescriptions and messages are frozen once created; nothing in the package
mutates them afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Tuple
import uuid

from ..utils.image_utils import detect_image_type, image_size


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Medication:
    """
    One medication parsed from prescription text.

    `id` is unique per instance and excluded from equality so two parses of
    the same text compare equal.
    """
    name: str
    dosage: str
    frequency: str
    instructions: str
    id: str = field(default_factory=_new_id, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "dosage": self.dosage,
            "frequency": self.frequency,
            "instructions": self.instructions,
        }


@dataclass(frozen=True)
class Prescription:
    """Immutable record produced once per successful pipeline run."""
    extracted_text: str
    explanation: str
    medications: Tuple[Medication, ...]
    timestamp: datetime = field(default_factory=_utcnow)
    id: str = field(default_factory=_new_id)

    def __post_init__(self):
        # Accept any iterable but always store a tuple
        if not isinstance(self.medications, tuple):
            object.__setattr__(self, "medications", tuple(self.medications))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "extracted_text": self.extracted_text,
            "explanation": self.explanation,
            "medications": [m.to_dict() for m in self.medications],
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class Rect:
    """Pixel rectangle, origin top-left."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TextBoundingBox:
    """A recognized text fragment with its location and confidence."""
    text: str
    frame: Rect
    confidence: float


@dataclass(frozen=True)
class OCRResult:
    """Result from a text extraction capability."""
    extracted_text: str
    confidence: float
    bounding_boxes: Tuple[TextBoundingBox, ...] = ()

    @classmethod
    def from_fragments(
        cls, fragments: Iterable[Tuple[str, Rect, float]]
    ) -> "OCRResult":
        """
        Build a result from (text, rect, confidence) triples in detection order.

        Text is newline-joined. Confidence is taken from the first fragment,
        not aggregated over all of them.
        """
        boxes = tuple(
            TextBoundingBox(text=text, frame=rect, confidence=float(confidence))
            for text, rect, confidence in fragments
        )
        return cls(
            extracted_text="\n".join(box.text for box in boxes),
            confidence=boxes[0].confidence if boxes else 0.0,
            bounding_boxes=boxes,
        )


@dataclass(frozen=True)
class ImagePayload:
    """Encoded image bytes plus pixel dimensions."""
    data: bytes = field(repr=False)
    width: int
    height: int
    mime_type: str = "image/jpeg"

    @classmethod
    def from_bytes(cls, data: bytes) -> "ImagePayload":
        """Read dimensions and type from encoded bytes."""
        width, height = image_size(data)
        image_type = detect_image_type(data) or "jpeg"
        return cls(data=data, width=width, height=height, mime_type=f"image/{image_type}")

    @classmethod
    def from_path(cls, path: Path) -> "ImagePayload":
        return cls.from_bytes(Path(path).read_bytes())


@dataclass(frozen=True)
class ChatMessage:
    """One message in a conversation session."""
    content: str
    is_user: bool
    timestamp: datetime = field(default_factory=_utcnow)
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "is_user": self.is_user,
            "timestamp": self.timestamp.isoformat(),
        }
