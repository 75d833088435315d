from __future__ import annotations

import numpy as np

from ..models import PixelBuffer, FocusResult

BLUR_THRESHOLD = 100.0

def focus_score(buffer: PixelBuffer) -> float:
    """
    Forward-difference edge energy:
        sum over interior pixels of (|I - I_right| + |I - I_below| - mean)^2
    divided by the full image area. ``mean`` is the intensity mean of the
    whole image, not the gradient mean; the blur threshold is calibrated
    against exactly this quantity.
    """
    if buffer.channels != 1:
        raise ValueError(f"focus scoring needs a single-channel buffer, got {buffer.channels}")

    w, h = buffer.width, buffer.height
    total = w * h
    if w < 3 or h < 3:
        return 0.0

    img = buffer.as_array()[:, :, 0].astype(np.int64)
    mean = float(img.sum()) / total

    center = img[1:h-1, 1:w-1]
    right = img[1:h-1, 2:w]
    below = img[2:h, 1:w-1]
    gradient = np.abs(center - right) + np.abs(center - below)

    dev = gradient.astype(np.float64) - mean
    return float(np.sum(dev * dev)) / total

def score_focus(buffer: PixelBuffer, threshold: float = BLUR_THRESHOLD) -> FocusResult:
    score = focus_score(buffer)
    return FocusResult(focus_score=score, is_blurry=score < threshold)
