# core/distance.py
import math
import sys
from dataclasses import dataclass
from typing import Final, Sequence
import numpy as np

# Incomparable vectors (length mismatch, overflow) are treated as maximally dissimilar
MAX_DISTANCE: Final[float] = sys.float_info.max
MAX_COSINE_DISTANCE: Final[float] = 2.0


def squared_euclidean(a: np.ndarray, b: np.ndarray) -> float:
    if a.shape != b.shape:
        return MAX_DISTANCE
    diff = a - b
    with np.errstate(over="ignore", invalid="ignore"):
        d = float(np.dot(diff, diff))
    if not math.isfinite(d):
        return MAX_DISTANCE
    return d


def cosine(a: np.ndarray, b: np.ndarray) -> float:
    """
    1 - cos(a, b), clamped to [0, 2].
    Zero-norm vectors have no direction; they are as far as anything can be.
    """
    if a.shape != b.shape:
        return MAX_COSINE_DISTANCE
    with np.errstate(over="ignore", invalid="ignore"):
        na = float(np.linalg.norm(a))
        nb = float(np.linalg.norm(b))
        if na == 0.0 or nb == 0.0:
            return MAX_COSINE_DISTANCE
        d = 1.0 - float(np.dot(a, b)) / (na * nb)
    if not math.isfinite(d):
        return MAX_COSINE_DISTANCE
    return min(MAX_COSINE_DISTANCE, max(0.0, d))


def distance(a: np.ndarray, b: np.ndarray, use_squared_euclidean: bool) -> float:
    """Distance selector: squared-Euclidean when True, cosine distance when False."""
    if use_squared_euclidean:
        return squared_euclidean(a, b)
    return cosine(a, b)


@dataclass(frozen=True, eq=False)
class IndexedPoint:
    """
    One clustering-axis value. `index` is 1-based: evidence i becomes point i + 1,
    and consensus ids map back with `index - 1`.
    """

    index: int
    vector: np.ndarray  # (d,) float64

    @classmethod
    def of(cls, index: int, values: Sequence[float]) -> "IndexedPoint":
        return cls(index=index, vector=np.asarray(values, dtype=np.float64).ravel())

    def distance_to(self, other: "IndexedPoint", use_squared_euclidean: bool) -> float:
        return distance(self.vector, other.vector, use_squared_euclidean)

    def identity(self) -> str:
        return str(self.index)
