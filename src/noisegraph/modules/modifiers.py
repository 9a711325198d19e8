"""
Modifier modules.

Modifiers take one source and reshape its output value:
- Abs, Invert, Clamp, ScaleBias, Exponent: pointwise arithmetic
- Curve, Terrace: piecewise mappings through a list of control points
- Discrete: quantization into equal steps
"""

import bisect
import math
from typing import List, Sequence, Tuple

from ..errors import ConfigurationError
from ..noise_math import cubic_interp, linear_interp
from .base import Module, SourceSlot


class Abs(Module):
    """Absolute value of the source."""

    source_count = 1
    source0 = SourceSlot(0)

    def get_value(self, x, y, z):
        return abs(self._source_value(0, x, y, z))


class Invert(Module):
    """Negated source value."""

    source_count = 1
    source0 = SourceSlot(0)

    def get_value(self, x, y, z):
        return -self._source_value(0, x, y, z)


class Clamp(Module):
    """Clamps the source value onto ``[lower_bound, upper_bound]``."""

    DEFAULT_LOWER_BOUND = -1.0
    DEFAULT_UPPER_BOUND = 1.0

    source_count = 1
    source0 = SourceSlot(0)

    parameters = {"lower_bound": "float", "upper_bound": "float"}

    def __init__(self, **kwargs):
        self._lower_bound = self.DEFAULT_LOWER_BOUND
        self._upper_bound = self.DEFAULT_UPPER_BOUND
        super().__init__(**kwargs)

    @property
    def lower_bound(self) -> float:
        return self._lower_bound

    @lower_bound.setter
    def lower_bound(self, value: float) -> None:
        self.set_bounds(value, self._upper_bound)

    @property
    def upper_bound(self) -> float:
        return self._upper_bound

    @upper_bound.setter
    def upper_bound(self, value: float) -> None:
        self.set_bounds(self._lower_bound, value)

    def set_bounds(self, lower: float, upper: float) -> None:
        """
        Set both clamping bounds at once.

        Raises:
            ConfigurationError: If lower > upper
        """
        if lower > upper:
            raise ConfigurationError(
                f"Clamp lower bound {lower} is greater than upper bound {upper}"
            )
        self._lower_bound = lower
        self._upper_bound = upper

    def configure(self, **kwargs):
        lower = kwargs.pop("lower_bound", self._lower_bound)
        upper = kwargs.pop("upper_bound", self._upper_bound)
        self.set_bounds(lower, upper)
        return super().configure(**kwargs)

    def get_value(self, x, y, z):
        value = self._source_value(0, x, y, z)
        if value < self._lower_bound:
            return self._lower_bound
        if value > self._upper_bound:
            return self._upper_bound
        return value


class ScaleBias(Module):
    """Source value multiplied by ``scale`` then offset by ``bias``."""

    DEFAULT_SCALE = 1.0
    DEFAULT_BIAS = 0.0

    source_count = 1
    source0 = SourceSlot(0)

    parameters = {"scale": "float", "bias": "float"}

    def __init__(self, **kwargs):
        self.scale = self.DEFAULT_SCALE
        self.bias = self.DEFAULT_BIAS
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        return self._source_value(0, x, y, z) * self.scale + self.bias


class Exponent(Module):
    """
    Applies an exponential curve to the source value.

    The source is assumed to lie in [-1, 1]; it is mapped to [0, 1], raised
    to ``exponent`` and mapped back.
    """

    DEFAULT_EXPONENT = 1.0

    source_count = 1
    source0 = SourceSlot(0)

    parameters = {"exponent": "float"}

    def __init__(self, **kwargs):
        self.exponent = self.DEFAULT_EXPONENT
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        value = self._source_value(0, x, y, z)
        return math.pow(abs((value + 1.0) / 2.0), self.exponent) * 2.0 - 1.0


class Curve(Module):
    """
    Maps the source value through a cubic spline of control points.

    Control points are (input, output) pairs kept sorted by input; inputs
    must be unique. At least four points are required to evaluate. Source
    values outside the control range take the nearest endpoint's output.
    """

    MIN_CONTROL_POINTS = 4

    source_count = 1
    source0 = SourceSlot(0)

    parameters = {"control_points": "point_list"}

    def __init__(self, **kwargs):
        self._inputs: List[float] = []
        self._outputs: List[float] = []
        super().__init__(**kwargs)

    @property
    def control_points(self) -> Tuple[Tuple[float, float], ...]:
        return tuple(zip(self._inputs, self._outputs))

    @control_points.setter
    def control_points(self, points: Sequence[Tuple[float, float]]) -> None:
        """
        Replace every control point at once.

        Raises:
            ConfigurationError: If two points share an input; the old points are kept
        """
        ordered = sorted((float(i), float(o)) for i, o in points)
        for previous, current in zip(ordered, ordered[1:]):
            if previous[0] == current[0]:
                raise ConfigurationError(
                    f"Curve control points repeat the input {current[0]}"
                )
        self._inputs = [i for i, _ in ordered]
        self._outputs = [o for _, o in ordered]

    @property
    def control_point_count(self) -> int:
        return len(self._inputs)

    def add_control_point(self, input_value: float, output_value: float) -> None:
        """
        Insert a control point, keeping the list sorted by input.

        Raises:
            ConfigurationError: If a point with the same input already exists
        """
        index = bisect.bisect_left(self._inputs, input_value)
        if index < len(self._inputs) and self._inputs[index] == input_value:
            raise ConfigurationError(
                f"Curve already has a control point with input {input_value}"
            )
        self._inputs.insert(index, float(input_value))
        self._outputs.insert(index, float(output_value))

    def clear_control_points(self) -> None:
        self._inputs = []
        self._outputs = []

    def get_value(self, x, y, z):
        count = len(self._inputs)
        if count < self.MIN_CONTROL_POINTS:
            raise ConfigurationError(
                f"Curve needs at least {self.MIN_CONTROL_POINTS} control points, has {count}"
            )

        source_value = self._source_value(0, x, y, z)

        # First control point whose input exceeds the source value
        index_pos = bisect.bisect_right(self._inputs, source_value)

        last = count - 1
        index0 = min(max(index_pos - 2, 0), last)
        index1 = min(max(index_pos - 1, 0), last)
        index2 = min(max(index_pos, 0), last)
        index3 = min(max(index_pos + 1, 0), last)

        # Outside the control range: use the endpoint output
        if index1 == index2:
            return self._outputs[index1]

        input0 = self._inputs[index1]
        input1 = self._inputs[index2]
        alpha = (source_value - input0) / (input1 - input0)

        return cubic_interp(
            self._outputs[index0],
            self._outputs[index1],
            self._outputs[index2],
            self._outputs[index3],
            alpha,
        )


class Terrace(Module):
    """
    Maps the source value onto a terrace-forming curve.

    Between two neighbouring control points the output rises along a
    squared ramp, giving flat shelves with steep edges. ``invert_terraces``
    flips the ramp so the steep part sits at the bottom of each step.
    """

    MIN_CONTROL_POINTS = 2
    DEFAULT_INVERT_TERRACES = False

    source_count = 1
    source0 = SourceSlot(0)

    parameters = {"control_points": "float_list", "invert_terraces": "bool"}

    def __init__(self, **kwargs):
        self._points: List[float] = []
        self.invert_terraces = self.DEFAULT_INVERT_TERRACES
        super().__init__(**kwargs)

    @property
    def control_points(self) -> Tuple[float, ...]:
        return tuple(self._points)

    @control_points.setter
    def control_points(self, points: Sequence[float]) -> None:
        ordered = sorted(float(value) for value in points)
        for previous, current in zip(ordered, ordered[1:]):
            if previous == current:
                raise ConfigurationError(f"Terrace control points repeat the value {current}")
        self._points = ordered

    @property
    def control_point_count(self) -> int:
        return len(self._points)

    def add_control_point(self, value: float) -> None:
        """
        Insert a control point, keeping the list sorted.

        Raises:
            ConfigurationError: If the value is already a control point
        """
        index = bisect.bisect_left(self._points, value)
        if index < len(self._points) and self._points[index] == value:
            raise ConfigurationError(f"Terrace already has a control point at {value}")
        self._points.insert(index, float(value))

    def clear_control_points(self) -> None:
        self._points = []

    def make_control_points(self, count: int) -> None:
        """
        Replace the control points with ``count`` points spread evenly over [-1, 1].

        Args:
            count: Number of terraces; must be at least 2
        """
        if count < self.MIN_CONTROL_POINTS:
            raise ConfigurationError(
                f"Terrace needs at least {self.MIN_CONTROL_POINTS} control points, got {count}"
            )
        self.clear_control_points()
        step = 2.0 / (count - 1.0)
        for i in range(count):
            self.add_control_point(-1.0 + i * step)

    def get_value(self, x, y, z):
        count = len(self._points)
        if count < self.MIN_CONTROL_POINTS:
            raise ConfigurationError(
                f"Terrace needs at least {self.MIN_CONTROL_POINTS} control points, has {count}"
            )

        source_value = self._source_value(0, x, y, z)
        index_pos = bisect.bisect_right(self._points, source_value)

        last = count - 1
        index0 = min(max(index_pos - 1, 0), last)
        index1 = min(max(index_pos, 0), last)

        if index0 == index1:
            return self._points[index1]

        value0 = self._points[index0]
        value1 = self._points[index1]
        alpha = (source_value - value0) / (value1 - value0)
        if self.invert_terraces:
            alpha = 1.0 - alpha
            value0, value1 = value1, value0

        alpha *= alpha
        return linear_interp(value0, value1, alpha)


class Discrete(Module):
    """
    Quantizes the source value into ``values`` equal steps over [0, 1).

    Source values at or below zero, or at or above one, map to 0.
    """

    DEFAULT_VALUES = 0

    source_count = 1
    source0 = SourceSlot(0)

    parameters = {"values": "int"}

    def __init__(self, **kwargs):
        self.values = self.DEFAULT_VALUES
        super().__init__(**kwargs)

    @property
    def values(self) -> int:
        return self._values

    @values.setter
    def values(self, count: int) -> None:
        if count < 0:
            raise ConfigurationError(f"Discrete value count must be non-negative, got {count}")
        self._values = int(count)

    def get_value(self, x, y, z):
        value = self._source_value(0, x, y, z)
        if value <= 0.0:
            return 0.0

        steps = self._values
        for i in range(steps):
            if i / steps <= value < (i + 1) / steps:
                return i / steps
        return 0.0
