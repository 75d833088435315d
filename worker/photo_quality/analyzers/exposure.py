from __future__ import annotations

import numpy as np

from ..models import PixelBuffer, ExposureResult, VALID_CHANNELS

UNDER_LUMINANCE = 10.0
OVER_LUMINANCE = 245.0
EXPOSURE_RATIO = 0.01

def luminance(buffer: PixelBuffer) -> np.ndarray:
    """BT.601 luma per pixel; missing G/B channels fall back to channel 0."""
    if buffer.channels not in VALID_CHANNELS:
        raise ValueError(f"unsupported channel count: {buffer.channels}")
    arr = buffer.as_array().astype(np.float64)
    r = arr[:, :, 0]
    g = arr[:, :, 1] if buffer.channels > 1 else r
    b = arr[:, :, 2] if buffer.channels > 2 else r
    return 0.299 * r + 0.587 * g + 0.114 * b

def exposure_ratios(buffer: PixelBuffer,
                    under_luminance: float = UNDER_LUMINANCE,
                    over_luminance: float = OVER_LUMINANCE) -> tuple[float, float]:
    """(under_ratio, over_ratio); boundary luminance values count in neither bucket."""
    total = buffer.width * buffer.height
    if total == 0:
        return 0.0, 0.0
    lum = luminance(buffer)
    under = int(np.count_nonzero(lum < under_luminance))
    over = int(np.count_nonzero(lum > over_luminance))
    return under / total, over / total

def score_exposure(buffer: PixelBuffer,
                   under_luminance: float = UNDER_LUMINANCE,
                   over_luminance: float = OVER_LUMINANCE,
                   ratio_threshold: float = EXPOSURE_RATIO) -> ExposureResult:
    under_ratio, over_ratio = exposure_ratios(buffer, under_luminance, over_luminance)
    return ExposureResult(
        is_over_exposed=over_ratio > ratio_threshold,
        is_under_exposed=under_ratio > ratio_threshold,
    )
