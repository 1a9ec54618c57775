"""
Tests for the consensus engine: clustering adapter and axis intersection.
"""

from core.consensus import canonical_group, cluster, distance_matrix, intersect
from core.distance import MAX_DISTANCE, IndexedPoint


def points(vectors):
    return [IndexedPoint.of(i + 1, v) for i, v in enumerate(vectors)]


def ids(group):
    return [p.index for p in group]


# =============================================================================
# CLUSTERING
# =============================================================================

def test_feature_scenario_groups_near_identical_vectors():
    groups = cluster(2, 0.00001, False, points([[1, 0], [1, 0.001], [0, 1]]))
    assert ids(canonical_group(groups)) == [1, 2]


def test_position_axis_uses_squared_euclidean():
    groups = cluster(2, 0.0015, True, points([[0, 188], [0, 188], [0, 376]]))
    assert len(groups) == 1
    assert ids(groups[0]) == [1, 2]


def test_no_dense_region_gives_no_groups():
    groups = cluster(2, 0.00001, False, points([[1, 0], [0, 1], [-1, 0]]))
    assert groups == []
    assert canonical_group(groups) == []


def test_groups_ordered_by_lowest_member():
    pts = points([[5, 5], [0, 0], [5, 5], [0, 0], [9, 9]])
    groups = cluster(2, 0.0015, True, pts)
    assert [ids(g) for g in groups] == [[1, 3], [2, 4]]


def test_clustering_is_deterministic():
    pts = points([[1, 0], [1, 0.001], [0, 1], [0, 1.0000001]])
    first = [ids(g) for g in cluster(2, 0.00001, False, pts)]
    for _ in range(5):
        assert [ids(g) for g in cluster(2, 0.00001, False, pts)] == first


def test_mismatched_dimensions_never_join():
    groups = cluster(2, 0.0015, True, points([[0, 188], [0, 188, 376]]))
    assert groups == []


def test_single_and_empty_inputs():
    assert cluster(2, 0.0015, True, []) == []
    assert cluster(2, 0.0015, True, points([[0, 188]])) == []


def test_distance_matrix_is_symmetric():
    m = distance_matrix(points([[0, 0], [3, 4], [0]]), True)
    assert m[0, 1] == m[1, 0] == 25.0
    assert m[0, 2] == MAX_DISTANCE
    assert m[2, 2] == 0.0


# =============================================================================
# INTERSECTION
# =============================================================================

def test_intersect_total_overlap():
    g = points([[0], [0], [0]])
    assert intersect(3, g, g) == [0, 1, 2]


def test_intersect_partial_overlap():
    a = [IndexedPoint.of(1, [0]), IndexedPoint.of(2, [0]), IndexedPoint.of(4, [0])]
    b = [IndexedPoint.of(4, [0]), IndexedPoint.of(2, [0])]
    assert intersect(4, a, b) == [1, 3]


def test_intersect_no_overlap():
    a = [IndexedPoint.of(1, [0]), IndexedPoint.of(2, [0])]
    b = [IndexedPoint.of(3, [0]), IndexedPoint.of(4, [0])]
    assert intersect(4, a, b) == []


def test_intersect_single_axis_maps_back_to_zero_based():
    a = [IndexedPoint.of(3, [0]), IndexedPoint.of(2, [0])]
    assert intersect(3, a) == [1, 2]


def test_intersect_without_axes_is_full_range():
    assert intersect(3) == [0, 1, 2]


def test_intersect_ignores_ids_beyond_count():
    a = [IndexedPoint.of(5, [0]), IndexedPoint.of(1, [0])]
    assert intersect(2, a) == [0]
