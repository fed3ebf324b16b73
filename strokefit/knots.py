"""Reduce a smoothed polyline to the knots of a curve.

Knots are extracted in three passes:
 1. remove_close_points: drop points too close to the previous kept point, so
    that the angle at every remaining point is well defined.
 2. merge_micro_corners: replace two very close knots (B, C) lying between two
    far-apart ones (A, D) with a single knot, so that what looks like a corner
    is represented as one:

                 B     C                 B or C
                  o---o                   o
                 /    |                  /|
                /     |          =>     / |
               /      |                /  |
            A o       o D           A o   o D

 3. classify_corners: flag the knots where the curve turns sharply.
"""

import collections
import logging

import numpy

from .curve import geometry

logger = logging.getLogger(__name__)

MERGE_RATIO = 4 # must be > 2 for merging to never create duplicate knots

KnotResult = collections.namedtuple('KnotResult', ('positions', 'widths', 'angles', 'is_corner'))

def remove_close_points(positions, widths, resolution):
    """Keep only the points farther than resolution from the previously kept point.

    Returns: positions, widths, distances
        where distances[i] is the distance between kept points i and i+1."""
    indices, distances = geometry.filter_close_points(positions, resolution)
    return numpy.asarray(positions, dtype=float)[indices], numpy.asarray(widths, dtype=float)[indices], distances

def merge_micro_corners(angles, distances, ratio=MERGE_RATIO):
    """Find which knots to keep after merging pairs of knots that form a
    spurious "micro-corner".

    Consecutive knots A, B, C, D are considered, with AB, BC and CD the
    distances between the knots before any merge. If
        ratio * BC < AB  and  ratio * BC < CD
    then B and C are merged into whichever of them has the smaller angle (B if
    the angles are equal), and the scan continues after C.

    With ratio > 2, in the worst case the minimum distance between consecutive
    knots becomes min((ratio-2) * d_min, d_min), so no duplicate knots can
    be produced.

    Parameters:
        angles: array of shape (m,) of supplementary angles at each knot
        distances: array of shape (m-1,) of distances between consecutive knots

    Returns: array of the indices of the knots to keep, in order. The first and
        last knots are always kept.
    """
    m = len(angles)
    assert m > 0
    assert len(distances) == m - 1
    # Knots are written to "kept" at the write cursor, which never gets ahead of
    # the read cursor: positions at or after the read cursor are untouched.
    kept = numpy.arange(m)
    read = 0
    write = 0
    while read + 3 < m:
        # read is B; read-1, read+1 and read+2 are A, C and D
        read += 1
        write += 1
        ab, bc, cd = distances[read-1:read+2]
        if ratio * bc < ab and ratio * bc < cd:
            b, c = read, read + 1
            kept[write] = c if angles[c] < angles[b] else b
            logger.debug('Merged knots %d and %d into knot %d', b, c, kept[write])
            read += 1
        else:
            kept[write] = read
    # copy the last knot, or the last two knots if the last window was not merged
    while read + 1 < m:
        read += 1
        write += 1
        kept[write] = read
    return kept[:write+1]

def classify_corners(angles, max_smooth_angle):
    """Flag each knot as a corner (True) or smooth (False).

    The end knots are always corners; an interior knot is a corner if its
    angle is larger than max_smooth_angle."""
    is_corner = numpy.asarray(angles) > max_smooth_angle
    is_corner[[0, -1]] = True
    return is_corner

def extract_knots(positions, widths, resolution, max_smooth_angle, ratio=MERGE_RATIO):
    """Compute the knots of a curve from smoothed positions and widths.

    Parameters:
        positions: array of shape (n, 2), n >= 1; may contain near-duplicates.
        widths: array of shape (n,)
        resolution: points closer than this to the previous knot are dropped.
        max_smooth_angle: interior knots with a larger angle are corners.
        ratio: merge criterion for merge_micro_corners.

    Returns: KnotResult(positions, widths, angles, is_corner), with at least
        one knot, end knots flagged as corners, and consecutive knots more than
        geometry.EPSILON apart.
    """
    assert len(positions) == len(widths) > 0
    positions, widths, distances = remove_close_points(positions, widths, resolution)
    angles = geometry.supplementary_angles(positions)
    kept = merge_micro_corners(angles, distances, ratio)
    positions = positions[kept]
    widths = widths[kept]
    angles = geometry.supplementary_angles(positions)
    is_corner = classify_corners(angles, max_smooth_angle)
    return KnotResult(positions, widths, angles, is_corner)
