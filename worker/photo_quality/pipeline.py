from __future__ import annotations
import logging
from typing import Optional

from .config import QualityThresholds
from .decoder import decode, DEFAULT_MAX_PIXELS
from .models import QualityMetrics
from .analyzers.focus import score_focus
from .analyzers.exposure import score_exposure
from .quality_gate import assess
from .schemas import QualityReport

LOG = logging.getLogger("photo_quality.pipeline")


def check_image_quality(encoded: bytes,
                        thresholds: Optional[QualityThresholds] = None,
                        max_pixels: int = DEFAULT_MAX_PIXELS) -> QualityMetrics:
    """Decode, then score focus on the grayscale buffer and exposure on the native one."""
    t = thresholds or QualityThresholds()
    gray, native = decode(encoded, max_pixels=max_pixels)

    focus = score_focus(gray, threshold=t.blur_threshold)
    exposure = score_exposure(
        native,
        under_luminance=t.under_luminance,
        over_luminance=t.over_luminance,
        ratio_threshold=t.exposure_ratio,
    )
    metrics = QualityMetrics.combine(focus, exposure)

    LOG.debug("assessed %dx%dx%d image: %s", native.width, native.height, native.channels, metrics.to_dict())
    return metrics


def evaluate_image(encoded: bytes,
                   thresholds: Optional[QualityThresholds] = None,
                   max_pixels: int = DEFAULT_MAX_PIXELS) -> QualityReport:
    return assess(check_image_quality(encoded, thresholds=thresholds, max_pixels=max_pixels))
