from __future__ import annotations
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RawMetrics(_CamelModel):
    is_blurry: bool
    focus_score: float
    is_over_exposed: bool
    is_under_exposed: bool


class ReportMetrics(_CamelModel):
    brightness: int = Field(ge=0, le=100)
    contrast: int = Field(ge=0, le=100)
    sharpness: int = Field(ge=0, le=100)


class QualityReport(_CamelModel):
    status: Literal["PASS", "FAIL"]
    reason: str
    quality_score: int = Field(ge=0, le=100)
    metrics: ReportMetrics
    recommendations: List[str] = Field(default_factory=list)
    # continuous measurements; serialized under "data"
    raw: RawMetrics = Field(alias="data")


class EnhancedQuality(_CamelModel):
    quality_score: int
    brightness_level: int
    contrast_score: int
    sharpness_rating: int
    status: Literal["pass", "fail"]
    feedback: str
    recommendations: List[str] = Field(default_factory=list)


def envelope(payload: BaseModel) -> dict:
    return {"success": True, "data": payload.model_dump(by_alias=True)}


def error_body(message: str) -> dict:
    return {"success": False, "error": message}
