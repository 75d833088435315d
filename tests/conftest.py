import io

import numpy as np
import pytest
from PIL import Image


def encode_png(arr: np.ndarray, mode: str | None = None) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(np.asarray(arr, dtype=np.uint8), mode=mode).save(buf, format="PNG")
    return buf.getvalue()


def checkerboard(size: int, low: int = 0, high: int = 255) -> np.ndarray:
    yy, xx = np.indices((size, size))
    return np.where((xx + yy) % 2 == 0, low, high).astype(np.uint8)


def uniform(width: int, height: int, value: int, channels: int = 1) -> np.ndarray:
    shape = (height, width) if channels == 1 else (height, width, channels)
    return np.full(shape, value, dtype=np.uint8)


@pytest.fixture
def clean_png() -> bytes:
    """Sharp, well-lit checkerboard: mid-tones only, large edges everywhere."""
    return encode_png(checkerboard(32, low=60, high=190))


@pytest.fixture
def dark_png() -> bytes:
    return encode_png(uniform(32, 32, 5))


@pytest.fixture
def bright_png() -> bytes:
    return encode_png(uniform(32, 32, 255))
