from __future__ import annotations
from io import BytesIO
from typing import Tuple

import numpy as np
from PIL import Image

from .models import PixelBuffer

DEFAULT_MAX_PIXELS = 40_000_000

_GRAY_MODES = {"1", "L", "I", "I;16", "I;16B", "I;16L", "I;16N", "F"}
_WIDE_GRAY_MODES = {"I", "I;16", "I;16B", "I;16L", "I;16N", "F"}
_ALPHA_MODES = {"LA", "La", "PA", "RGBA", "RGBa"}


class DecodeError(ValueError):
    pass


def _native_mode(im: Image.Image) -> str:
    if im.mode in _GRAY_MODES:
        return "L"
    if im.mode in _ALPHA_MODES or (im.mode == "P" and "transparency" in im.info):
        return "RGBA"
    return "RGB"


def _scale_to_8bit(im: Image.Image) -> Image.Image:
    """
    Rescale high bit depth grayscale to 8 bit instead of letting convert("L") clip:
      - I;16*: top byte
      - I: 16-bit range unless every value already fits in 8 bits
      - F: 0..1 stretched to 0..255, otherwise clipped
    """
    arr = np.asarray(im)
    if im.mode == "F":
        arr = arr.astype(np.float64)
        if arr.size and arr.min() >= 0.0 and arr.max() <= 1.0:
            arr = arr * 255.0
        out = np.clip(np.rint(arr), 0, 255)
    else:
        arr = arr.astype(np.int64)
        if im.mode == "I" and (arr.size == 0 or (arr.min() >= 0 and arr.max() <= 255)):
            out = arr
        else:
            out = np.clip(arr, 0, 65535) >> 8
    return Image.fromarray(out.astype(np.uint8))


def _to_buffer(im: Image.Image) -> PixelBuffer:
    return PixelBuffer.from_array(np.asarray(im, dtype=np.uint8))


def decode(encoded: bytes, max_pixels: int = DEFAULT_MAX_PIXELS) -> Tuple[PixelBuffer, PixelBuffer]:
    """
    Decode an encoded raster image into two pixel buffers:
      - grayscale (1 channel), BT.601 luma via Pillow's "L" conversion
      - native (1, 3 or 4 channels) for exposure analysis
    No resizing, no orientation fix-ups.
    """
    if not encoded:
        raise DecodeError("empty image payload")

    try:
        im = Image.open(BytesIO(encoded))
        w, h = im.size
        if w * h > max_pixels:
            raise DecodeError(f"image too large: {w}x{h} exceeds {max_pixels} pixels")
        im.load()
    except DecodeError:
        raise
    except Exception as e:
        raise DecodeError(f"could not decode image: {e}") from e

    mode = _native_mode(im)
    try:
        if im.mode in _WIDE_GRAY_MODES:
            im = _scale_to_8bit(im)
        native = im if im.mode == mode else im.convert(mode)
        gray = native if mode == "L" else native.convert("L")
    except Exception as e:
        raise DecodeError(f"unsupported image mode {im.mode}: {e}") from e

    return _to_buffer(gray), _to_buffer(native)
