from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

from linkograph.errors import LengthMismatch


def _as_vector(values: Sequence[float] | np.ndarray) -> np.ndarray:
    return np.asarray(values, dtype=np.float64).reshape(-1)


def dot(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """
    Sum of element-wise products. Both sides must have the same length.
    """
    va = _as_vector(a)
    vb = _as_vector(b)
    if va.shape != vb.shape:
        raise LengthMismatch(va.shape[0], vb.shape[0])
    return float(np.dot(va, vb))


def magnitude(v: Sequence[float] | np.ndarray) -> float:
    return math.sqrt(dot(v, v))


def cosine_similarity(
    a: Sequence[float] | np.ndarray,
    b: Sequence[float] | np.ndarray,
) -> float:
    """
    Cosine similarity with numerical safety.

    Returns 0.0 when either vector has zero magnitude.
    """
    denom = magnitude(a) * magnitude(b)
    if denom == 0.0:
        return 0.0
    return dot(a, b) / denom


def rescale(
    value: float,
    old_range: Tuple[float, float],
    new_range: Tuple[float, float],
) -> float:
    """
    Linearly remap ``value`` from ``old_range`` onto ``new_range``.

    A degenerate source range maps everything to the floor of the
    target range.
    """
    old_min, old_max = old_range
    new_min, new_max = new_range
    old_span = old_max - old_min
    if old_span == 0:
        return new_min
    return ((value - old_min) / old_span) * (new_max - new_min) + new_min


def binary_entropy(p_on: float, p_off: float) -> float:
    """
    Shannon entropy (bits) of a two-outcome distribution.
    Non-positive probabilities contribute nothing.
    """
    on_part = -(p_on * math.log2(p_on)) if p_on > 0 else 0.0
    off_part = -(p_off * math.log2(p_off)) if p_off > 0 else 0.0
    return on_part + off_part


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))
