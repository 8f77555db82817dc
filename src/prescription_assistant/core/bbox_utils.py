# ============================================================================
# src/prescription_assistant/core/bbox_utils.py
# ============================================================================
"""
Bounding box utilities.

OCR vendors disagree on coordinate systems. Everything stored in an
OCRResult uses image pixels with the origin at the top-left corner; the
helpers below convert vendor formats into that form.

Supported inputs:
- Axis-normalized boxes with a bottom-left origin (on-device recognizers)
- Pixel polygons given as vertex lists (Google Vision)
- Tesseract's left/top/width/height tuples (already top-left pixels)
"""

from typing import Any, Dict, Iterable, List

from .models import Rect


def normalized_to_pixel_rect(
    x: float,
    y: float,
    width: float,
    height: float,
    image_width: float,
    image_height: float,
) -> Rect:
    """
    Convert a normalized bottom-left-origin box to top-left pixel coordinates.

    Args:
        x, y: Normalized origin of the box (0-1, y measured from the bottom)
        width, height: Normalized box size (0-1)
        image_width, image_height: Image size in pixels

    Returns:
        Rect in pixels with top-left origin. A box at (0.1, 0.2) sized
        0.3 x 0.1 on a 1000x1000 image maps to roughly (100, 700, 300, 100).
    """
    return Rect(
        x=x * image_width,
        y=(1 - y - height) * image_height,
        width=width * image_width,
        height=height * image_height,
    )


def vertices_to_rect(vertices: Iterable[Dict[str, Any]]) -> Rect:
    """
    Axis-aligned bounding rect of a pixel polygon.

    Vertices missing an "x" or "y" key count as 0 (Google Vision omits
    zero-valued coordinates from its JSON).
    """
    xs: List[float] = []
    ys: List[float] = []
    for vertex in vertices:
        xs.append(float(vertex.get("x", 0)))
        ys.append(float(vertex.get("y", 0)))

    if not xs:
        return Rect(0.0, 0.0, 0.0, 0.0)

    left, top = min(xs), min(ys)
    return Rect(x=left, y=top, width=max(xs) - left, height=max(ys) - top)


def union_rects(rects: Iterable[Rect]) -> Rect:
    """Smallest rect covering all given rects (empty input -> zero rect)."""
    rects = list(rects)
    if not rects:
        return Rect(0.0, 0.0, 0.0, 0.0)

    left = min(r.x for r in rects)
    top = min(r.y for r in rects)
    right = max(r.x + r.width for r in rects)
    bottom = max(r.y + r.height for r in rects)
    return Rect(x=left, y=top, width=right - left, height=bottom - top)
