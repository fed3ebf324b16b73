import numpy

EPSILON = 1e-10 # numerical precision for "zero-length" tests

def segment_lengths(points):
    """Return the lengths of the n-1 segments of a polyline of shape (n, m)."""
    points = numpy.asarray(points, dtype=float)
    return numpy.sqrt(((points[1:] - points[:-1])**2).sum(axis=1))

def cumulative_distances(points, unit=True):
    """Return cumulative distances along a polyline.

    Parameters:
    points: array of shape (n,m) consisting of n points in m dimensions
    unit: if True, return distances divided by total length of the curve,
          if False, return actual arc lengths."""
    points = numpy.asarray(points, dtype=float)
    distances = numpy.concatenate([[0], numpy.add.accumulate(segment_lengths(points))])
    if unit:
        distances /= distances[-1]
    return distances

def filter_close_points(points, min_distance):
    """Walk along a polyline and keep only the points farther than min_distance
    from the last point kept. The first point is always kept.

    Returns: indices, distances
        indices: array of the indices of the kept points
        distances: array of len(indices)-1 distances between consecutive kept
            points, each > min_distance."""
    points = numpy.asarray(points, dtype=float)
    indices = [0]
    distances = []
    last = points[0]
    for i in range(1, len(points)):
        ds = numpy.sqrt(((points[i] - last)**2).sum())
        if ds > min_distance:
            indices.append(i)
            distances.append(ds)
            last = points[i]
    return numpy.array(indices, dtype=int), numpy.array(distances, dtype=float)

def angle_between_vectors(v_from, v_to):
    """Calculate the signed angle in radians between two arrays of 2d vectors."""
    v_from = numpy.asarray(v_from, dtype=float)
    v_to = numpy.asarray(v_to, dtype=float)
    return numpy.arctan2(v_from[...,0]*v_to[...,1]-v_from[...,1]*v_to[...,0], (v_from * v_to).sum(axis=-1))

def supplementary_angle(p0, p1, p2):
    """Return the supplementary angle formed at p1 by three consecutive 2d points:
    0 if they are aligned (p0 -> p1 -> p2 going straight on), pi if the curve
    turns back on itself."""
    p0, p1, p2 = (numpy.asarray(p, dtype=float) for p in (p0, p1, p2))
    return float(abs(angle_between_vectors(p1 - p0, p2 - p1)))

def supplementary_angles(points):
    """Return the supplementary angle at each vertex of a polyline of shape (n, 2).
    By convention, the angle is 0 at both end points."""
    points = numpy.asarray(points, dtype=float)
    angles = numpy.zeros(len(points), dtype=float)
    if len(points) > 2:
        d = points[1:] - points[:-1]
        angles[1:-1] = numpy.absolute(angle_between_vectors(d[:-1], d[1:]))
    return angles

def unit_vectors(vectors, default=(1.0, 0.0)):
    """Normalize an array of vectors of shape (n, m). Vectors not longer than
    EPSILON are replaced by the given default direction."""
    vectors = numpy.array(vectors, dtype=float)
    lengths = numpy.sqrt((vectors**2).sum(axis=-1))
    degenerate = lengths <= EPSILON
    lengths[degenerate] = 1
    vectors /= lengths[...,numpy.newaxis]
    vectors[degenerate] = default
    return vectors

def direction_angle(p0, p1):
    """Angle in radians of the direction from p0 to p1."""
    return numpy.arctan2(p1[1] - p0[1], p1[0] - p0[0])

def find_normals(tangents):
    """Return the normals of an array of 2d tangents of shape (n, 2), pointing to
    the right of the direction of travel in a y-down coordinate frame:
    normal = (-tangent.y, tangent.x)"""
    tangents = numpy.asarray(tangents, dtype=float)
    normals = numpy.empty_like(tangents)
    normals[...,0] = -tangents[...,1]
    normals[...,1] = tangents[...,0]
    return normals
