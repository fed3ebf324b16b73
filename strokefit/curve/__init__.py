'''
Curve
-----
Functions for computations over plane curves, approximated as series of points (polylines).
 - curve.geometry: basic algorithms for polyline curves.
 - curve.interpolate: 4-point interpolating subdivision of polylines.
 '''
