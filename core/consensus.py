# core/consensus.py
from typing import List, Sequence
import numpy as np
from sklearn.cluster import DBSCAN
from core.distance import IndexedPoint
import logging

logger = logging.getLogger(__name__)

NOISE_LABEL = -1


def distance_matrix(
    points: Sequence[IndexedPoint], use_squared_euclidean: bool
) -> np.ndarray:
    """
    Symmetric (n, n) matrix of point distances; the diagonal stays 0.
    """
    n = len(points)
    out = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            d = points[i].distance_to(points[j], use_squared_euclidean)
            out[i, j] = d
            out[j, i] = d
    return out


def cluster(
    min_points: int,
    epsilon: float,
    use_squared_euclidean: bool,
    points: Sequence[IndexedPoint],
) -> List[List[IndexedPoint]]:
    """
    Density clustering over `points` with the point adapter's metric.

    Groups come back ordered by DBSCAN label, so group 0 is the cluster grown
    from the lowest-positioned core point. Members keep input order; noise is dropped.
    """
    if not points:
        return []
    dist = distance_matrix(points, use_squared_euclidean)
    labels = DBSCAN(
        eps=epsilon, min_samples=min_points, metric="precomputed"
    ).fit_predict(dist)

    groups: List[List[IndexedPoint]] = []
    for label in sorted(set(int(x) for x in labels) - {NOISE_LABEL}):
        groups.append([p for p, lbl in zip(points, labels) if int(lbl) == label])
    logger.debug(
        "cluster.done n=%d groups=%d sizes=%s",
        len(points),
        len(groups),
        [len(g) for g in groups],
    )
    return groups


def canonical_group(groups: Sequence[Sequence[IndexedPoint]]) -> List[IndexedPoint]:
    """The first group is taken as the axis consensus; no groups means none."""
    return list(groups[0]) if groups else []


def intersect(evidence_count: int, *axis_groups: Sequence[IndexedPoint]) -> List[int]:
    """
    0-based evidence indices whose 1-based id appears in every supplied group,
    ascending. With no groups supplied every index qualifies.
    """
    want = len(axis_groups)
    ids: List[int] = []
    for i in range(1, evidence_count + 1):
        hits = sum(1 for group in axis_groups if any(p.index == i for p in group))
        if hits == want:
            ids.append(i - 1)
    return ids
