import numpy
from numpy.polynomial import polynomial
from scipy import linalg

from . import smoothing

WINDOW_SIZE = 5 # number of input samples per fit; must be >= 3

class QuadraticFit:
    """A parametric polynomial curve of degree <= 2, defined over u in [0, 1].

    Attributes:
        coefficients: array of shape (degree+1, d), in increasing order of
            degree, for a curve in d dimensions.
    """
    def __init__(self, coefficients):
        self.coefficients = numpy.asarray(coefficients, dtype=float)

    @property
    def degree(self):
        return len(self.coefficients) - 1

    def pos(self, u):
        """Evaluate the curve at parameter u (a scalar, or an array of shape (n,)).
        Returns an array of shape (d,) or (n, d) respectively."""
        return numpy.moveaxis(polynomial.polyval(u, self.coefficients), 0, -1)

    def __repr__(self):
        return 'QuadraticFit({})'.format(self.coefficients.tolist())


def fit_quadratic(points):
    """Least-squares fit of a quadratic curve to an ordered sequence of points.

    The points are assigned uniformly-spaced parameter values u_j = j/(k-1)
    over [0, 1]. If there are fewer than 3 points, the degree of the curve is
    reduced to k-1 (so that one point gives a constant curve and two points
    give a line through both).

    Parameters:
        points: array of shape (k, d), k >= 1

    Returns: QuadraticFit instance."""
    points = numpy.asarray(points, dtype=float)
    k = len(points)
    assert k > 0
    degree = min(2, k - 1)
    u = numpy.linspace(0, 1, k)
    vander = polynomial.polyvander(u, degree)
    coefficients, residues, rank, singular_values = linalg.lstsq(vander, points)
    return QuadraticFit(coefficients)


def fit_windows(points, window=WINDOW_SIZE):
    """Fit quadratic curves over every run of consecutive points.

    Parameters:
        points: array of shape (n, d), n >= 1
        window: maximum number of points per fit. If there are fewer than
            window points, a single fit covers all of them.

    Returns: list of n-k+1 QuadraticFit instances, where k = min(window, n)
        and fit i covers points[i:i+k].

    Example values:
        n    k    number of fits
        1    1    1
        3    3    1
        5    5    1
        6    5    2
        9    5    5
    """
    points = numpy.asarray(points, dtype=float)
    n = len(points)
    assert n > 0
    k = min(window, n)
    return [fit_quadratic(points[i:i+k]) for i in range(n - k + 1)]


def blend_fits(points, fits):
    """Average overlapping fits into one smoothed position per input point.

    Each interior point is replaced with the weighted mean of the positions
    given by every fit that covers it, each evaluated at the parameter value
    of that point within the fit (u = j/(k-1) for the j-th point of the fit's
    window) and weighted by smoothing.bell_weight(u). The fits' end points have
    zero weight, so each interior point only collects the fits in which it is
    itself interior. The first and last points are copied unchanged.

    Parameters:
        points: array of shape (n, d) used to produce the fits with fit_windows()
        fits: list of fits, as returned by fit_windows()

    Returns: array of shape (n, d)
    """
    points = numpy.asarray(points, dtype=float)
    n = len(points)
    num_fits = len(fits)
    k = n - num_fits + 1 # points per fit
    assert 0 < num_fits <= n
    assert k >= 3 or n <= 2
    blended = points.copy()
    if n <= 2:
        return blended
    # only the interior of each fit has non-zero weight
    u = numpy.arange(1, k - 1) / (k - 1)
    weights = smoothing.bell_weight(u)
    fit_positions = [fit.pos(u) for fit in fits]
    for i in range(1, n - 1):
        positions = []
        position_weights = []
        for j in range(1, k - 1):
            f = i - j # index of the fit whose j-th point is points[i]
            if 0 <= f < num_fits:
                positions.append(fit_positions[f][j - 1])
                position_weights.append(weights[j - 1])
        blended[i] = smoothing.weighted_mean(positions, position_weights)
    return blended


def smooth_positions(points, window=WINDOW_SIZE):
    """Smooth a noisy polyline by blending overlapping local quadratic fits.

    Returns: smoothed points, list of fits."""
    fits = fit_windows(points, window)
    return blend_fits(points, fits), fits
