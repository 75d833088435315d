from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Any

import numpy as np

VALID_CHANNELS = (1, 3, 4)

@dataclass(frozen=True)
class PixelBuffer:
    """Row-major interleaved 8-bit pixels."""
    data: bytes
    width: int
    height: int
    channels: int

    def __post_init__(self):
        if self.channels not in VALID_CHANNELS:
            raise ValueError(f"unsupported channel count: {self.channels}")
        expected = self.width * self.height * self.channels
        if len(self.data) != expected:
            raise ValueError(f"buffer holds {len(self.data)} bytes, expected {expected}")

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "PixelBuffer":
        arr = np.ascontiguousarray(arr, dtype=np.uint8)
        if arr.ndim == 2:
            arr = arr[:, :, None]
        h, w, c = arr.shape
        return cls(data=arr.tobytes(), width=int(w), height=int(h), channels=int(c))

    def as_array(self) -> np.ndarray:
        """(height, width, channels) read-only view over ``data``."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, self.channels)

@dataclass(frozen=True)
class FocusResult:
    focus_score: float
    is_blurry: bool

@dataclass(frozen=True)
class ExposureResult:
    is_over_exposed: bool
    is_under_exposed: bool

@dataclass(frozen=True)
class QualityMetrics:
    focus_score: float
    is_blurry: bool
    is_over_exposed: bool
    is_under_exposed: bool

    @classmethod
    def combine(cls, focus: FocusResult, exposure: ExposureResult) -> "QualityMetrics":
        return cls(
            focus_score=focus.focus_score,
            is_blurry=focus.is_blurry,
            is_over_exposed=exposure.is_over_exposed,
            is_under_exposed=exposure.is_under_exposed,
        )

    @property
    def has_issues(self) -> bool:
        return self.is_blurry or self.is_over_exposed or self.is_under_exposed

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
