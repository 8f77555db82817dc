# ============================================================================
# src/prescription_assistant/extractors/tesseract_extractor.py
# ============================================================================
"""
Tesseract Text Extractor

Local OCR through pytesseract. Word-level results are grouped into lines
(block / paragraph / line), each line becoming one bounding box with the
mean confidence of its words.

Requires the tesseract binary on PATH.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pytesseract

from ..core.bbox_utils import union_rects
from ..core.capabilities import TextExtractionCapability
from ..core.models import ImagePayload, OCRResult, Rect
from ..utils.exceptions import ExtractionError, ExtractionErrorKind
from ..utils.image_utils import open_image


def group_lines(data: Dict[str, List[Any]]) -> List[Tuple[str, Rect, float]]:
    """
    Collapse pytesseract `image_to_data` output into line fragments.

    Words with negative confidence (layout rows) or blank text are skipped.

    Returns:
        (text, rect, confidence) per line in reading order; confidence 0-1
    """
    lines: Dict[Tuple[int, int, int], Dict[str, list]] = {}

    for i, raw_text in enumerate(data.get('text', [])):
        text = str(raw_text).strip()
        conf = float(data['conf'][i])
        if not text or conf < 0:
            continue

        key = (int(data['block_num'][i]), int(data['par_num'][i]), int(data['line_num'][i]))
        line = lines.setdefault(key, {"words": [], "rects": [], "confs": []})
        line["words"].append(text)
        line["rects"].append(Rect(
            x=float(data['left'][i]),
            y=float(data['top'][i]),
            width=float(data['width'][i]),
            height=float(data['height'][i]),
        ))
        line["confs"].append(conf / 100.0)

    return [
        (
            " ".join(line["words"]),
            union_rects(line["rects"]),
            sum(line["confs"]) / len(line["confs"]),
        )
        for line in lines.values()
    ]


class TesseractTextExtractor(TextExtractionCapability):
    """
    Config options:
        tesseract_lang: Language pack(s), e.g. "eng" or "eng+fra" (default: eng)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.lang = self.config.get('tesseract_lang', 'eng')
        self.logger = logging.getLogger(__name__)

    async def extract_text(self, image: ImagePayload) -> OCRResult:
        start_time = datetime.now()

        data = await asyncio.to_thread(self._run_tesseract, image.data)
        fragments = group_lines(data)
        if not fragments:
            raise ExtractionError(ExtractionErrorKind.NO_TEXT_FOUND)

        duration = (datetime.now() - start_time).total_seconds()
        self.logger.info(f"Tesseract found {len(fragments)} line(s) in {duration:.2f}s")
        return OCRResult.from_fragments(fragments)

    def _run_tesseract(self, data: bytes) -> Dict[str, List[Any]]:
        pil_image = open_image(data)
        try:
            return pytesseract.image_to_data(
                pil_image,
                lang=self.lang,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
            raise ExtractionError(
                ExtractionErrorKind.PROVIDER_FAILURE,
                f"Tesseract failed: {e}"
            ) from e
