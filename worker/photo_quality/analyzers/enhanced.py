from __future__ import annotations
import logging
from typing import List, Tuple

import cv2
import numpy as np

from ..decoder import decode, DEFAULT_MAX_PIXELS
from ..models import PixelBuffer
from ..schemas import EnhancedQuality
from ..utils import round_half_up, clamp

LOG = logging.getLogger("photo_quality.enhanced")

EDGE_KERNEL = np.array([[-1, -1, -1],
                        [-1,  8, -1],
                        [-1, -1, -1]], dtype=np.float32)

PASS_MIN_SCORE = 60

FALLBACK = EnhancedQuality(
    quality_score=50,
    brightness_level=50,
    contrast_score=50,
    sharpness_rating=50,
    status="pass",
    feedback="Quality analysis unavailable",
    recommendations=[],
)

def _rgb_planes(native: PixelBuffer) -> List[np.ndarray]:
    arr = native.as_array().astype(np.float64)
    r = arr[:, :, 0]
    g = arr[:, :, 1] if native.channels > 1 else r
    b = arr[:, :, 2] if native.channels > 2 else r
    return [r, g, b]

def _sample_std(plane: np.ndarray) -> float:
    return float(np.std(plane, ddof=1)) if plane.size > 1 else 0.0

def brightness_level(native: PixelBuffer) -> int:
    planes = _rgb_planes(native)
    return round_half_up(sum(float(p.mean()) for p in planes) / 3 / 255 * 100)

def contrast_score(native: PixelBuffer) -> int:
    planes = _rgb_planes(native)
    return round_half_up(sum(_sample_std(p) for p in planes) / 3 / 128 * 100)

def sharpness_rating(gray: PixelBuffer) -> int:
    img = gray.as_array()[:, :, 0]
    # uint8 in, uint8 out: responses saturate to 0..255
    edges = cv2.filter2D(img, -1, EDGE_KERNEL, borderType=cv2.BORDER_REPLICATE)
    std = _sample_std(edges.astype(np.float64))
    return int(clamp(round_half_up(std / 50 * 100), 0, 100))

def generate_feedback(quality_score: int, brightness: int, contrast: int, sharpness: int) -> Tuple[str, str, List[str]]:
    recommendations = []

    if brightness < 30:
        recommendations.append("Move to brighter lighting or use flash")
    elif brightness > 85:
        recommendations.append("Reduce lighting or move away from direct light")

    if contrast < 25:
        recommendations.append("Improve lighting contrast for better detail")

    if sharpness < 40:
        recommendations.append("Hold camera steady and ensure proper focus")

    status = "pass" if quality_score >= PASS_MIN_SCORE else "fail"

    if quality_score >= 80:
        feedback = "Excellent photo quality"
    elif quality_score >= 60:
        feedback = "Good photo quality"
    elif quality_score >= 40:
        feedback = "Fair quality - consider retaking"
    else:
        feedback = "Poor quality - retake recommended"

    return status, feedback, recommendations

def analyze_buffers(gray: PixelBuffer, native: PixelBuffer) -> EnhancedQuality:
    brightness = brightness_level(native)
    contrast = contrast_score(native)
    sharpness = sharpness_rating(gray)
    quality_score = round_half_up(brightness * 0.3 + contrast * 0.3 + sharpness * 0.4)

    status, feedback, recommendations = generate_feedback(quality_score, brightness, contrast, sharpness)
    return EnhancedQuality(
        quality_score=quality_score,
        brightness_level=brightness,
        contrast_score=contrast,
        sharpness_rating=sharpness,
        status=status,
        feedback=feedback,
        recommendations=recommendations,
    )

def analyze_enhanced(encoded: bytes, max_pixels: int = DEFAULT_MAX_PIXELS) -> EnhancedQuality:
    """
    Continuous brightness / contrast / edge-sharpness ratings for the capture
    dashboard. Fails open: any error yields the neutral FALLBACK report.
    """
    try:
        gray, native = decode(encoded, max_pixels=max_pixels)
        return analyze_buffers(gray, native)
    except Exception:
        LOG.exception("enhanced quality analysis failed")
        return FALLBACK.model_copy(deep=True)
