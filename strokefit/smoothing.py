import numpy

def weighted_mean(x, w):
    """Return the mean of the data points x along their first axis, weighted
    by the weights in w (which do not need to sum to 1).

    x may be of shape (n,) or (n, d), e.g. for averaging n points in d dimensions."""
    w = numpy.array(w, dtype=float)
    w /= w.sum()
    x = numpy.asarray(x, dtype=float)
    w = w.reshape(w.shape + (1,)*(x.ndim - 1))
    return (w*x).sum(axis=0)

def bell_weight(u):
    """Non-normalized bell-shaped function on [0, 1], centered at 0.5:
        at u=0   : w=0 and w'=0
        at u=0.5 : w>0 and w'=0
        at u=1   : w=0 and w'=0
    Weighting overlapping fits by this function makes their blend smooth
    across the boundaries of each fit."""
    u = numpy.asarray(u, dtype=float)
    return u**2 * (1 - u)**2

def smooth_widths(widths):
    """Smooth a sequence of stroke widths with a 3-tap kernel.

    Interior values are smoothed with the (0.25, 0.5, 0.25) kernel. End values
    are smoothed as 0.67 * own + 0.33 * neighbor (or left alone if there is
    only one value).

    Returns: array of the same length as the input."""
    widths = numpy.asarray(widths, dtype=float)
    n = len(widths)
    assert n > 0
    smoothed = widths.copy()
    if n > 1:
        smoothed[0] = 0.67 * widths[0] + 0.33 * widths[1]
        smoothed[-1] = 0.67 * widths[-1] + 0.33 * widths[-2]
    smoothed[1:-1] = 0.25 * widths[:-2] + 0.5 * widths[1:-1] + 0.25 * widths[2:]
    return smoothed
