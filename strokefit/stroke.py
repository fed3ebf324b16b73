import collections
import logging
import math

import numpy

from .curve import geometry
from . import knots
from . import regress
from . import sampling
from . import smoothing

logger = logging.getLogger(__name__)

MIN_SPACING = 0.1 # input samples closer than MIN_SPACING * resolution are discarded

InputSample = collections.namedtuple('InputSample', ('position', 'width', 'resolution'))
Knot = collections.namedtuple('Knot', ('position', 'width', 'angle', 'is_corner'))
Sample = collections.namedtuple('Sample', ('position', 'width', 'tangent', 'normal', 'arclength'))
Params = collections.namedtuple('Params', ('max_smooth_knot_angle', 'max_sample_angle'))

DEFAULT_PARAMS = Params(max_smooth_knot_angle=math.pi/4, max_sample_angle=math.pi/16)

class Stroke:
    """Fit a curve to freehand input, one input sample at a time.

    Each accepted input sample triggers a full recomputation from the whole
    input history:
        input positions -> overlapping quadratic fits -> smoothed positions
        input widths -> smoothed widths
        smoothed positions and widths -> knots (each smooth or corner)
        knots -> dense samples with width, tangent, normal and arclength

    Example:
        stroke = Stroke(max_sample_angle=math.pi/8)
        stroke.begin_stroke()
        for x, y, pressure in pen_events:
            stroke.append_sample(InputSample((x, y), width=2*pressure, resolution=1))
        stroke.end_stroke()
        outline = [s.position + s.normal * s.width / 2 for s in stroke.samples()]

    The object is not thread-safe: calls must come from a single thread.
    """
    def __init__(self, max_smooth_knot_angle=DEFAULT_PARAMS.max_smooth_knot_angle,
            max_sample_angle=DEFAULT_PARAMS.max_sample_angle):
        """Parameters:
            max_smooth_knot_angle: interior knots where the curve turns by a
                larger angle (in radians) are corner knots.
            max_sample_angle: maximum angle (in radians) between the tangents of
                consecutive samples in the round join at a corner knot.
        """
        if not max_sample_angle > 0:
            raise ValueError(f'max_sample_angle must be positive, not {max_sample_angle}.')
        if not max_smooth_knot_angle >= 0:
            raise ValueError(f'max_smooth_knot_angle must be non-negative, not {max_smooth_knot_angle}.')
        self.params = Params(max_smooth_knot_angle, max_sample_angle)
        self.reset()

    def reset(self):
        """Discard all input samples and everything computed from them."""
        self._inputs = []
        self._fits = []
        self._smoothed_positions = numpy.empty((0, 2))
        self._smoothed_widths = numpy.empty(0)
        self._knots = knots.KnotResult(numpy.empty((0, 2)), numpy.empty(0), numpy.empty(0), numpy.empty(0, dtype=bool))
        self._samples = sampling.SampleResult(numpy.empty((0, 2)), numpy.empty(0), numpy.empty((0, 2)), numpy.empty((0, 2)), numpy.empty(0))

    def begin_stroke(self):
        """Start fitting a new stroke."""
        self.reset()

    def append_sample(self, sample):
        """Feed an InputSample to the curve and recompute the curve.

        The sample is ignored if it is within MIN_SPACING * sample.resolution
        of the last accepted sample."""
        assert sample.resolution > 0
        sample = InputSample(numpy.array(sample.position, dtype=float), float(sample.width), float(sample.resolution))
        if self._inputs:
            last = self._inputs[-1]
            ds = numpy.sqrt(((sample.position - last.position)**2).sum())
            if not ds > MIN_SPACING * sample.resolution:
                logger.debug('Discarded input sample at %s: %g from previous sample', sample.position, ds)
                return
        self._inputs.append(sample)
        self._update()

    def end_stroke(self):
        """Finish fitting the stroke. The curve is already up to date."""
        pass

    def _update(self):
        positions = numpy.array([s.position for s in self._inputs])
        widths = numpy.array([s.width for s in self._inputs])
        self._smoothed_positions, self._fits = regress.smooth_positions(positions)
        self._smoothed_widths = smoothing.smooth_widths(widths)
        resolution = max(10 * geometry.EPSILON, self._inputs[0].resolution)
        self._knots = knots.extract_knots(self._smoothed_positions, self._smoothed_widths,
            resolution, self.params.max_smooth_knot_angle)
        self._samples = sampling.sample_knots(self._knots.positions, self._knots.widths,
            self._knots.is_corner, self.params.max_sample_angle)
        logger.debug('Fitted %d input samples: %d knots, %d samples', len(self._inputs),
            self.knot_count(), self.sample_count())

    def input_count(self):
        return len(self._inputs)

    def inputs(self):
        return [InputSample(s.position.copy(), s.width, s.resolution) for s in self._inputs]

    def fits(self):
        """List of the quadratic fits over the current input samples."""
        return list(self._fits)

    def smoothed_positions(self):
        """Array of shape (input_count(), 2) of regression-smoothed positions."""
        return self._smoothed_positions.copy()

    def smoothed_widths(self):
        return self._smoothed_widths.copy()

    def knot_count(self):
        return len(self._knots.positions)

    def knot(self, i):
        """Return the i-th Knot. Raises IndexError unless 0 <= i < knot_count()."""
        _check_index(i, self.knot_count(), 'knot')
        k = self._knots
        return Knot(k.positions[i].copy(), float(k.widths[i]), float(k.angles[i]), bool(k.is_corner[i]))

    def knots(self):
        return [self.knot(i) for i in range(self.knot_count())]

    def knot_arrays(self):
        """Return the knots as a KnotResult of arrays (positions, widths, angles, is_corner)."""
        return knots.KnotResult(*(a.copy() for a in self._knots))

    def sample_count(self):
        return len(self._samples.positions)

    def sample(self, i):
        """Return the i-th Sample. Raises IndexError unless 0 <= i < sample_count()."""
        _check_index(i, self.sample_count(), 'sample')
        s = self._samples
        return Sample(s.positions[i].copy(), float(s.widths[i]), s.tangents[i].copy(),
            s.normals[i].copy(), float(s.arclengths[i]))

    def samples(self):
        return [self.sample(i) for i in range(self.sample_count())]

    def sample_arrays(self):
        """Return the samples as a SampleResult of arrays
        (positions, widths, tangents, normals, arclengths)."""
        return sampling.SampleResult(*(a.copy() for a in self._samples))

    def length(self):
        """Total arclength of the curve: 0 if there are no samples."""
        if self.sample_count() == 0:
            return 0.0
        return float(self._samples.arclengths[-1])

def _check_index(i, count, name):
    if not 0 <= i < count:
        raise IndexError(f'{name} index {i} out of range for {count} {name}s')
