from typing import List, Tuple

from .models import QualityMetrics
from .schemas import QualityReport, ReportMetrics, RawMetrics

PASS_SCORE = 85
FAIL_SCORE = 45
ACCEPTABLE_REASON = "Image quality is acceptable"
ISSUES_PREFIX = "Image quality issues detected: "

# (flag attribute, issue name, recommendation), in reporting order
ISSUE_RULES: List[Tuple[str, str, str]] = [
    ("is_blurry", "blurry", "Hold camera steady and ensure proper focus"),
    ("is_over_exposed", "overexposed", "Reduce lighting or move away from direct light"),
    ("is_under_exposed", "underexposed", "Move to brighter lighting or use flash"),
]


def bucket_metrics(metrics: QualityMetrics) -> ReportMetrics:
    """
    Representative buckets, not measurements. Contrast is a constant.
    Under-exposure wins over over-exposure for brightness.
    """
    if metrics.is_under_exposed:
        brightness = 25
    elif metrics.is_over_exposed:
        brightness = 95
    else:
        brightness = 70

    return ReportMetrics(
        brightness=brightness,
        contrast=75,
        sharpness=30 if metrics.is_blurry else 80,
    )


def assess(metrics: QualityMetrics) -> QualityReport:
    """
    Turn raw quality flags into the caller-facing report.
    Returns:
        QualityReport with PASS/85 when no flag is set, otherwise FAIL/45
        and one recommendation per issue.
    """
    status, score, reason = "PASS", PASS_SCORE, ACCEPTABLE_REASON
    recommendations = []

    if metrics.has_issues:
        issues = []
        for attr, issue, tip in ISSUE_RULES:
            if getattr(metrics, attr):
                issues.append(issue)
                recommendations.append(tip)
        status, score = "FAIL", FAIL_SCORE
        reason = ISSUES_PREFIX + ", ".join(issues)

    return QualityReport(
        status=status,
        reason=reason,
        quality_score=score,
        metrics=bucket_metrics(metrics),
        recommendations=recommendations,
        raw=RawMetrics(
            is_blurry=metrics.is_blurry,
            focus_score=metrics.focus_score,
            is_over_exposed=metrics.is_over_exposed,
            is_under_exposed=metrics.is_under_exposed,
        ),
    )
