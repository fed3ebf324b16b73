import math

import numpy
import pytest

from strokefit import knots
from strokefit.curve import geometry

def test_remove_close_points():
    positions = [[0, 0], [0.5, 0], [2, 0], [2, 0.1], [4, 0]]
    widths = [1, 2, 3, 4, 5]
    kept_positions, kept_widths, distances = knots.remove_close_points(positions, widths, 1.0)
    numpy.testing.assert_array_equal(kept_positions, [[0, 0], [2, 0], [4, 0]])
    numpy.testing.assert_array_equal(kept_widths, [1, 3, 5])
    numpy.testing.assert_allclose(distances, [2, 2])

def test_merge_three_knots_untouched():
    kept = knots.merge_micro_corners([0, 1, 0], [10, 0.1])
    numpy.testing.assert_array_equal(kept, [0, 1, 2])

def test_merge_two_and_one_knots():
    numpy.testing.assert_array_equal(knots.merge_micro_corners([0, 0], [3]), [0, 1])
    numpy.testing.assert_array_equal(knots.merge_micro_corners([0], []), [0])

def test_merge_four_knots():
    # B and C are close together between far-apart A and D: keep the one
    # with the smaller angle
    kept = knots.merge_micro_corners([0, 0.5, 1.0, 0], [10, 1, 10])
    numpy.testing.assert_array_equal(kept, [0, 1, 3])
    kept = knots.merge_micro_corners([0, 1.0, 0.5, 0], [10, 1, 10])
    numpy.testing.assert_array_equal(kept, [0, 2, 3])

def test_merge_tie_keeps_first():
    kept = knots.merge_micro_corners([0, 0.7, 0.7, 0], [10, 1, 10])
    numpy.testing.assert_array_equal(kept, [0, 1, 3])

def test_merge_four_knots_not_triggered():
    numpy.testing.assert_array_equal(knots.merge_micro_corners([0, 1, 1, 0], [1, 1, 1]), [0, 1, 2, 3])
    # ratio * BC must be strictly smaller than both AB and CD
    numpy.testing.assert_array_equal(knots.merge_micro_corners([0, 1, 1, 0], [4, 1, 10]), [0, 1, 2, 3])

def test_merge_five_knots():
    kept = knots.merge_micro_corners([0, 1.0, 0.5, 0.2, 0], [10, 1, 10, 10])
    numpy.testing.assert_array_equal(kept, [0, 2, 3, 4])
    kept = knots.merge_micro_corners([0, 0.2, 1.0, 0.5, 0], [10, 10, 1, 10])
    numpy.testing.assert_array_equal(kept, [0, 1, 3, 4])

def test_merge_uses_unmerged_distances():
    # after merging (1, 2), the next window starts at knot 3, with AB = d[2]
    kept = knots.merge_micro_corners([0, 1, 0.5, 0.1, 0.9, 0.2, 0], [10, 1, 10, 0.5, 10, 10])
    numpy.testing.assert_array_equal(kept, [0, 2, 3, 5, 6])

def test_merge_never_creates_duplicates():
    rng = numpy.random.RandomState(1)
    num_merged = 0
    for _ in range(200):
        m = rng.randint(3, 30)
        steps = numpy.where(rng.rand(m-1) < 0.4, rng.uniform(0.05, 0.3, m-1), rng.uniform(1, 5, m-1))
        directions = rng.uniform(0, 2*math.pi, m-1)
        offsets = numpy.column_stack([numpy.cos(directions), numpy.sin(directions)]) * steps[:, numpy.newaxis]
        positions = numpy.concatenate([[[0, 0]], numpy.cumsum(offsets, axis=0)])
        distances = geometry.segment_lengths(positions)
        angles = geometry.supplementary_angles(positions)
        kept = knots.merge_micro_corners(angles, distances)
        assert kept[0] == 0 and kept[-1] == m - 1
        assert numpy.all(numpy.diff(kept) > 0)
        num_merged += m - len(kept)
        new_distances = geometry.segment_lengths(positions[kept])
        # no spacing ever shrinks, which implies the (ratio - 2) * min spacing bound
        assert new_distances.min() >= distances.min()
    assert num_merged > 0

def test_classify_corners():
    is_corner = knots.classify_corners([0, 0.1, 1.0, 0.5, 0], 0.5)
    numpy.testing.assert_array_equal(is_corner, [True, False, True, False, True])
    numpy.testing.assert_array_equal(knots.classify_corners([0], 0.5), [True])

def test_extract_knots_collinear():
    result = knots.extract_knots([[0, 0], [5, 0], [10, 0]], [2, 2, 2], 1.0, math.pi/4)
    assert len(result.positions) == 3
    numpy.testing.assert_array_equal(result.is_corner, [True, False, True])
    numpy.testing.assert_allclose(result.angles, 0, atol=1e-12)

def test_extract_knots_right_angle():
    result = knots.extract_knots([[0, 0], [10, 0], [10, 10]], [1, 1, 1], 1.0, math.pi/4)
    numpy.testing.assert_array_equal(result.is_corner, [True, True, True])
    assert result.angles[1] == pytest.approx(math.pi/2)

def test_extract_knots_removes_duplicates():
    positions = [[0, 0], [0.2, 0], [3, 0], [3, 0.5], [6, 0], [6, 0], [6.5, 0.1]]
    result = knots.extract_knots(positions, numpy.ones(7), 1.0, math.pi/4)
    numpy.testing.assert_array_equal(result.positions, [[0, 0], [3, 0], [6, 0]])
    assert numpy.all(geometry.segment_lengths(result.positions) > 1.0)

def test_extract_knots_single():
    result = knots.extract_knots([[1, 2], [1, 2]], [3, 4], 1.0, math.pi/4)
    numpy.testing.assert_array_equal(result.positions, [[1, 2]])
    numpy.testing.assert_array_equal(result.widths, [3])
    numpy.testing.assert_array_equal(result.is_corner, [True])
    numpy.testing.assert_array_equal(result.angles, [0])
