from __future__ import annotations
import hashlib
import math

def sha256_bytes(data: bytes) -> str:
    h = hashlib.sha256()
    h.update(data)
    return h.hexdigest()

def round_half_up(x: float) -> int:
    # JS Math.round semantics; Python's round() is banker's rounding
    return int(math.floor(x + 0.5))

def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))
