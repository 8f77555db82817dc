# ============================================================================
# src/prescription_assistant/extractors/remote_ocr_extractor.py
# ============================================================================
"""
Remote OCR Extractor

Uploads the image as multipart form data (field "image", file
"prescription.jpg") to a self-hosted `/process-image` endpoint.

Expected response:

    {
        "observations": [
            {
                "text": "Amoxicillin 500mg",
                "confidence": 0.93,
                "bounding_box": {"x": 0.1, "y": 0.2, "width": 0.3, "height": 0.1}
            }
        ]
    }

Boxes are normalized (0-1) with a bottom-left origin, the convention of
on-device text recognizers; they are converted to top-left pixels of the
original image.
"""

from typing import Any, Dict, List, Optional, Tuple

import aiohttp

from .base import HTTPTextExtractor
from ..core.bbox_utils import normalized_to_pixel_rect
from ..core.models import ImagePayload, OCRResult, Rect
from ..utils.exceptions import ConfigurationError, ExtractionError, ExtractionErrorKind
from ..utils.image_utils import prepare_for_upload


def parse_observations(
    payload: Dict[str, Any],
    image_width: float,
    image_height: float,
) -> List[Tuple[str, Rect, float]]:
    """(text, rect, confidence) for every non-blank observation, in response order."""
    fragments: List[Tuple[str, Rect, float]] = []

    for observation in payload.get("observations") or []:
        text = (observation.get("text") or "").strip()
        if not text:
            continue

        box = observation.get("bounding_box") or {}
        rect = normalized_to_pixel_rect(
            float(box.get("x", 0.0)),
            float(box.get("y", 0.0)),
            float(box.get("width", 0.0)),
            float(box.get("height", 0.0)),
            image_width,
            image_height,
        )
        fragments.append((text, rect, float(observation.get("confidence", 0.0))))

    return fragments


class RemoteOCRExtractor(HTTPTextExtractor):
    """
    Config options:
        remote_ocr_url: Full URL of the endpoint (required)
        plus the HTTPTextExtractor options
    """

    provider_name = "Remote OCR"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.url = self.config.get('remote_ocr_url')
        if not self.url:
            raise ConfigurationError("REMOTE_OCR_URL is required for the remote OCR backend")

    async def extract_text(self, image: ImagePayload) -> OCRResult:
        upload, _, _ = prepare_for_upload(
            image.data, self.max_image_dimension, self.jpeg_quality
        )

        def build_form() -> aiohttp.FormData:
            form = aiohttp.FormData()
            form.add_field(
                "image",
                upload,
                filename="prescription.jpg",
                content_type="image/jpeg",
            )
            return form

        payload = await self._post(self.url, data=build_form)

        fragments = parse_observations(payload, image.width, image.height)
        if not fragments:
            raise ExtractionError(ExtractionErrorKind.NO_TEXT_FOUND)

        self.logger.info(f"Remote OCR returned {len(fragments)} observation(s)")
        return OCRResult.from_fragments(fragments)
