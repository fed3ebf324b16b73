import collections
import logging
import math

import numpy

from .curve import geometry
from .curve import interpolate

logger = logging.getLogger(__name__)

SUBDIVISION_STEPS = 3

SampleResult = collections.namedtuple('SampleResult', ('positions', 'widths', 'tangents', 'normals', 'arclengths'))

def neighbor_indices(i, is_corner):
    """Return the indices of the knots (A, B, C, D, E, F) used to subdivide the
    segment between knots C = i and D = i+1.

    B and A are the two knots before C, and E and F the two knots after D, except
    that neighbors are never taken across a corner knot: a corner knot is used
    as its own neighbor instead."""
    c = i
    d = i + 1
    b = c if is_corner[c] else c - 1
    a = b if is_corner[b] else b - 1
    e = d if is_corner[d] else d + 1
    f = e if is_corner[e] else e + 1
    return a, b, c, d, e, f

def subdivide_segment(positions, widths, is_corner, i, steps=SUBDIVISION_STEPS, tension=interpolate.TENSION):
    """Subdivide the curve between knots i and i+1.

    Returns: array of shape (2**steps + 1, 3), whose rows are (x, y, width)
        from knot i to knot i+1 inclusive."""
    indices = list(neighbor_indices(i, is_corner))
    values = numpy.column_stack([positions[indices], widths[indices]])
    refined = interpolate.subdivide(values, steps, tension)
    # knot C stays at index 2; knot D ends at index 2 + 2**steps
    return refined[2:3 + 2**steps]

def _remove_duplicate_rows(rows):
    """Keep the first row, then each row whose position is more than EPSILON
    away from the previous kept one. If this leaves a single row, the last row
    is forced in as the second, so that at least two rows are returned."""
    indices, distances = geometry.filter_close_points(rows[:, :2], geometry.EPSILON)
    if len(indices) == 1:
        logger.debug('Degenerate segment: forcing its end point as second sample')
        indices = numpy.array([0, len(rows) - 1])
    return rows[indices]

def sample_knots(positions, widths, is_corner, max_sample_angle, steps=SUBDIVISION_STEPS, tension=interpolate.TENSION):
    """Compute densely-spaced samples along a curve through the given knots.

    Between each pair of consecutive knots, samples are generated with 4-point
    subdivision of the knot positions and widths. At each interior corner knot,
    extra samples are inserted at the position of the knot, with tangents
    fanning from the incoming to the outgoing direction in steps of at most
    max_sample_angle, to make a round join.

    Parameters:
        positions: array of shape (n, 2) of knot positions, n >= 1
        widths: array of shape (n,) of knot widths
        is_corner: boolean array of shape (n,); is_corner[0] and is_corner[-1]
            must be True.
        max_sample_angle: maximum angle between the tangents of two consecutive
            samples of a corner fan.
        steps, tension: parameters for the 4-point subdivision.

    Returns: SampleResult(positions, widths, tangents, normals, arclengths)
    """
    positions = numpy.asarray(positions, dtype=float)
    widths = numpy.asarray(widths, dtype=float)
    n = len(positions)
    assert n > 0
    assert is_corner[0] and is_corner[-1]

    # emitted (x, y, width) rows and their tangents
    rows = []
    tangents = []
    for i in range(n - 1):
        segment = _remove_duplicate_rows(subdivide_segment(positions, widths, is_corner, i, steps, tension))
        assert len(segment) >= 2
        points = segment[:, :2]

        # tangent of the first sample: a corner knot only looks forward
        if is_corner[i]:
            first_tangent = points[1] - points[0]
        else:
            first_tangent = points[1] - rows[-1][:2]
        segment_tangents = numpy.concatenate([[first_tangent], points[2:] - points[:-2]])
        segment_tangents = geometry.unit_vectors(segment_tangents)

        if is_corner[i] and i > 0:
            # round join: fan of zero-length samples at the corner
            a1 = geometry.direction_angle(rows[-1][:2], points[0])
            a2 = geometry.direction_angle(points[0], points[1])
            if a2 > a1 + math.pi:
                a2 -= 2 * math.pi
            elif a2 < a1 - math.pi:
                a2 += 2 * math.pi
            # a turn that is a multiple of max_sample_angle up to rounding gets the full fan
            fan_size = int(math.floor(abs(a2 - a1) / max_sample_angle + geometry.EPSILON))
            for k in range(fan_size):
                a = a1 + (k / fan_size) * (a2 - a1)
                rows.append(segment[0])
                tangents.append((math.cos(a), math.sin(a)))

        # the end of the segment is emitted as the start of the next one
        rows.extend(segment[:-1])
        tangents.extend(segment_tangents)

    last = numpy.array([positions[-1, 0], positions[-1, 1], widths[-1]])
    if rows:
        last_tangent = geometry.unit_vectors([last[:2] - rows[-1][:2]])[0]
    else:
        last_tangent = numpy.array([1.0, 0.0])
    rows.append(last)
    tangents.append(last_tangent)

    rows = numpy.array(rows, dtype=float)
    tangents = numpy.array(tangents, dtype=float)
    sample_positions = rows[:, :2]
    arclengths = geometry.cumulative_distances(sample_positions, unit=False)
    return SampleResult(sample_positions, rows[:, 2], tangents, geometry.find_normals(tangents), arclengths)
