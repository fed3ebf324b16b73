'''
# strokefit

Fit clean curves to freehand stroke input, as captured from a mouse or a
pen tablet.

Stroke
------
 - stroke: the Stroke object, which takes raw input samples (position, width,
   device resolution) one at a time and maintains the fitted curve: a set of
   knots, each smooth or corner, and a dense sequence of samples with
   position, width, tangent, normal and arclength.
 - regress: smooth noisy input positions by blending overlapping local
   quadratic fits.
 - smoothing: weighted means, the blending kernel, and stroke width smoothing.
 - knots: reduce smoothed positions to a minimal set of classified knots.
 - sampling: densely sample the curve through the knots with 4-point
   subdivision, with round joins at corner knots.

Curve
-----
Functions for computations over plane curves, approximated as series of points (polylines).
 - curve.geometry: basic algorithms for polyline curves.
 - curve.interpolate: 4-point interpolating subdivision of polylines.

'''
