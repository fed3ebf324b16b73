import numpy

TENSION = 1 / 16

def four_point(p0, p1, p2, p3, tension=TENSION):
    """Return the value inserted between p1 and p2 by the 4-point
    (Dyn-Levin-Gregory) interpolating subdivision stencil.

    The p values may be scalars or arrays of any (matching) shape. For
    0 < tension < 1/8, the limit curve of the subdivision scheme is continuous
    with a continuous tangent; tension = 1/16 reproduces cubic polynomials."""
    return (0.5 + tension) * (p1 + p2) - tension * (p0 + p3)

def subdivide_once(values, tension=TENSION):
    """Apply one step of 4-point subdivision to a sequence of values.

    A value is inserted in each gap that has two neighbors on both sides;
    the first and last values, which have no such gap beside them, are then
    discarded. So an input of length L yields an output of length 2L-5:

        input:   v0  v1      v2      v3  ...  v(L-2)  v(L-1)
        output:      v1  m0  v2  m1  v3  ...  v(L-2)

    Parameters:
        values: array of shape (L,) or (L, d), L >= 4
        tension: tension parameter of the stencil.

    Returns: new array of shape (2L-5,) or (2L-5, d)
    """
    values = numpy.asarray(values, dtype=float)
    assert len(values) >= 4
    mids = four_point(values[:-3], values[1:-2], values[2:-1], values[3:], tension)
    refined = numpy.empty((2*len(values) - 5,) + values.shape[1:], dtype=float)
    refined[::2] = values[1:-1]
    refined[1::2] = mids
    return refined

def subdivide(values, steps, tension=TENSION):
    """Apply several steps of 4-point subdivision to the values, each step
    producing a new array.

    Value at index 2 of the input (the third) stays at index 2 in every output,
    and the value at index 3 ends up at index 2 + 2**steps; in between are the
    2**steps - 1 values generated between them."""
    for _ in range(steps):
        values = subdivide_once(values, tension)
    return values
