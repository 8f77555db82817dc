# ============================================================================
# src/prescription_assistant/extractors/google_vision_extractor.py
# ============================================================================
"""
Google Cloud Vision Text Extractor

Calls `images:annotate` with DOCUMENT_TEXT_DETECTION and rebuilds text lines
from the symbol-level `detectedBreak` markers. Images are downscaled before
upload; returned boxes are scaled back to the original image size.
"""

import base64
from typing import Any, Dict, List, Optional, Tuple

from .base import HTTPTextExtractor
from ..core.bbox_utils import union_rects, vertices_to_rect
from ..core.models import ImagePayload, OCRResult, Rect
from ..utils.exceptions import ConfigurationError, ExtractionError, ExtractionErrorKind
from ..utils.image_utils import prepare_for_upload


VISION_ENDPOINT = "https://vision.googleapis.com/v1/images:annotate"

# Break types that end a line / insert a space
LINE_BREAKS = {"EOL_SURE_SPACE", "LINE_BREAK", "HYPHEN"}
SPACE_BREAKS = {"SPACE", "SURE_SPACE"}


def _scale_rect(rect: Rect, sx: float, sy: float) -> Rect:
    return Rect(x=rect.x * sx, y=rect.y * sy, width=rect.width * sx, height=rect.height * sy)


def parse_annotation(
    annotation: Dict[str, Any],
    scale: Tuple[float, float] = (1.0, 1.0),
) -> List[Tuple[str, Rect, float]]:
    """
    Turn a `fullTextAnnotation` into (text, rect, confidence) line fragments.

    Args:
        annotation: The `fullTextAnnotation` object of one response
        scale: (sx, sy) factors applied to pixel coordinates

    Returns:
        Lines in reading order; rect is the union of the line's word boxes,
        confidence the mean of its word confidences
    """
    sx, sy = scale
    fragments: List[Tuple[str, Rect, float]] = []

    chars: List[str] = []
    rects: List[Rect] = []
    confs: List[float] = []

    def flush():
        text = "".join(chars).strip()
        if text:
            fragments.append((
                text,
                _scale_rect(union_rects(rects), sx, sy),
                sum(confs) / len(confs) if confs else 0.0,
            ))
        chars.clear()
        rects.clear()
        confs.clear()

    for page in annotation.get("pages", []):
        for block in page.get("blocks", []):
            for paragraph in block.get("paragraphs", []):
                for word in paragraph.get("words", []):
                    vertices = word.get("boundingBox", {}).get("vertices", [])
                    rects.append(vertices_to_rect(vertices))
                    confs.append(float(word.get("confidence", 0.0)))

                    for symbol in word.get("symbols", []):
                        chars.append(symbol.get("text", ""))
                        detected = symbol.get("property", {}).get("detectedBreak", {})
                        break_type = detected.get("type")
                        if break_type in SPACE_BREAKS:
                            chars.append(" ")
                        elif break_type == "HYPHEN":
                            chars.append("-")
                            flush()
                        elif break_type in LINE_BREAKS:
                            flush()
        # A page never continues a line from the previous one
        flush()

    return fragments


class GoogleVisionTextExtractor(HTTPTextExtractor):
    """
    Config options:
        google_vision_api_key: API key (required)
        plus the HTTPTextExtractor options
    """

    provider_name = "Google Vision"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.api_key = self.config.get('google_vision_api_key')
        if not self.api_key:
            raise ConfigurationError("GOOGLE_VISION_API_KEY is required for the google_vision OCR backend")

    async def extract_text(self, image: ImagePayload) -> OCRResult:
        upload, width, height = prepare_for_upload(
            image.data, self.max_image_dimension, self.jpeg_quality
        )

        body = {
            "requests": [{
                "image": {"content": base64.b64encode(upload).decode("utf-8")},
                "features": [{"type": "DOCUMENT_TEXT_DETECTION"}],
            }]
        }

        payload = await self._post(VISION_ENDPOINT, params={"key": self.api_key}, json=body)

        responses = payload.get("responses") or [{}]
        response = responses[0]
        if "error" in response:
            message = response["error"].get("message", "unknown error")
            raise ExtractionError(
                ExtractionErrorKind.PROVIDER_FAILURE,
                f"Google Vision error: {message}"
            )

        annotation = response.get("fullTextAnnotation")
        if not annotation:
            raise ExtractionError(ExtractionErrorKind.NO_TEXT_FOUND)

        scale = (image.width / float(width), image.height / float(height))
        fragments = parse_annotation(annotation, scale)
        if not fragments:
            raise ExtractionError(ExtractionErrorKind.NO_TEXT_FOUND)

        self.logger.info(f"Google Vision found {len(fragments)} line(s)")
        return OCRResult.from_fragments(fragments)
