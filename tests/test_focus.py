"""Tests for the focus scorer."""

import numpy as np
import pytest

from photo_quality.analyzers.focus import focus_score, score_focus
from photo_quality.models import PixelBuffer

from conftest import checkerboard, uniform


def _reference_score(arr: np.ndarray) -> float:
    h, w = arr.shape
    total = w * h
    mean = float(arr.sum()) / total
    acc = 0.0
    for y in range(1, h - 1):
        for x in range(1, w - 1):
            cur = int(arr[y, x])
            g = abs(cur - int(arr[y, x + 1])) + abs(cur - int(arr[y + 1, x]))
            acc += (g - mean) ** 2
    return acc / total


class TestFocusScore:
    def test_matches_pixel_loop(self):
        rng = np.random.default_rng(7)
        arr = rng.integers(0, 256, size=(13, 17), dtype=np.uint8)
        assert focus_score(PixelBuffer.from_array(arr)) == pytest.approx(_reference_score(arr), rel=1e-12)

    def test_uses_intensity_mean(self):
        # 3x3, single interior pixel with zero gradient; deviation is purely the intensity mean
        arr = uniform(3, 3, 30)
        # mean 30, gradient 0 -> (0 - 30)^2 / 9 = 100
        assert focus_score(PixelBuffer.from_array(arr)) == pytest.approx(100.0)

    def test_checkerboard_is_sharp(self):
        result = score_focus(PixelBuffer.from_array(checkerboard(4)))
        # mean 127.5, every interior gradient 510: 4 * 382.5^2 / 16
        assert result.focus_score == pytest.approx(36576.5625)
        assert result.is_blurry is False

    @pytest.mark.parametrize("w,h", [(1, 1), (2, 50), (50, 2), (2, 2)])
    def test_degenerate_sizes_fail_safe(self, w, h):
        result = score_focus(PixelBuffer.from_array(uniform(w, h, 200)))
        assert result.focus_score == 0.0
        assert result.is_blurry is True

    def test_uniform_black_is_blurry(self):
        result = score_focus(PixelBuffer.from_array(uniform(20, 20, 0)))
        assert result.focus_score == 0.0
        assert result.is_blurry is True

    def test_uniform_white_scores_against_intensity_mean(self):
        # zero gradient everywhere, but each interior pixel deviates 255 from the mean
        result = score_focus(PixelBuffer.from_array(uniform(20, 20, 255)))
        assert result.focus_score == pytest.approx(255.0 ** 2 * 18 * 18 / 400)
        assert result.is_blurry is False

    def test_threshold_is_strict(self):
        buf = PixelBuffer.from_array(uniform(3, 3, 30))  # score exactly 100
        assert score_focus(buf).is_blurry is False
        assert score_focus(buf, threshold=100.5).is_blurry is True

    def test_rejects_multichannel(self):
        with pytest.raises(ValueError):
            focus_score(PixelBuffer.from_array(uniform(5, 5, 0, channels=3)))
