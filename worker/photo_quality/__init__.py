from .decoder import decode, DecodeError
from .models import PixelBuffer, QualityMetrics
from .analyzers.focus import score_focus
from .analyzers.exposure import score_exposure
from .analyzers.enhanced import analyze_enhanced
from .quality_gate import assess
from .pipeline import check_image_quality, evaluate_image

__all__ = [
    "decode", "DecodeError", "PixelBuffer", "QualityMetrics",
    "score_focus", "score_exposure", "analyze_enhanced",
    "assess", "check_image_quality", "evaluate_image",
]
