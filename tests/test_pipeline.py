"""End-to-end tests for decode -> score -> report."""

from photo_quality.config import QualityThresholds
from photo_quality.pipeline import check_image_quality, evaluate_image

from conftest import encode_png, checkerboard, uniform


class TestPipeline:
    def test_clean_image_passes(self, clean_png):
        report = evaluate_image(clean_png)
        assert report.status == "PASS"
        assert report.quality_score == 85
        assert report.metrics.contrast == 75
        assert report.metrics.sharpness == 80

    def test_dark_blurry_image(self, dark_png):
        report = evaluate_image(dark_png)
        assert report.status == "FAIL"
        assert report.quality_score == 45
        assert report.metrics.brightness == 25
        assert report.metrics.sharpness == 30
        assert report.recommendations == [
            "Hold camera steady and ensure proper focus",
            "Move to brighter lighting or use flash",
        ]

    def test_uniform_extremes(self, bright_png):
        black = check_image_quality(encode_png(uniform(16, 16, 0)))
        assert (black.is_under_exposed, black.is_over_exposed, black.is_blurry) == (True, False, True)

        white = check_image_quality(bright_png)
        assert (white.is_over_exposed, white.is_under_exposed) == (True, False)
        # flat white deviates 255 from the intensity mean at every interior pixel
        assert white.is_blurry is False

    def test_black_white_checkerboard(self):
        metrics = check_image_quality(encode_png(checkerboard(8)))
        assert metrics.focus_score >= 100
        assert metrics.is_blurry is False

    def test_rgb_checkerboard_matches_grayscale(self):
        gray = checkerboard(16, low=60, high=190)
        rgb = gray[:, :, None].repeat(3, axis=2)
        assert check_image_quality(encode_png(gray)) == check_image_quality(encode_png(rgb))

    def test_tiny_image_is_blurry(self):
        metrics = check_image_quality(encode_png(uniform(2, 40, 128)))
        assert metrics.focus_score == 0.0
        assert metrics.is_blurry is True

    def test_custom_thresholds(self, clean_png):
        strict = QualityThresholds(blur_threshold=1e12)
        assert check_image_quality(clean_png, thresholds=strict).is_blurry is True

    def test_deterministic(self, clean_png, dark_png):
        for data in (clean_png, dark_png):
            assert evaluate_image(data).model_dump_json(by_alias=True) == evaluate_image(data).model_dump_json(by_alias=True)
