"""
Combiner modules.

Combiners evaluate two or more sources at the same point and merge the
results. Select, Blend and Displace also take a control or displacement
source that decides how the merge happens.
"""

import math

from ..errors import ConfigurationError
from ..noise_math import linear_interp, s_curve3
from .base import Module, SourceSlot


class Add(Module):
    """Sum of two sources."""

    source_count = 2
    source0 = SourceSlot(0)
    source1 = SourceSlot(1)

    def get_value(self, x, y, z):
        return self._source_value(0, x, y, z) + self._source_value(1, x, y, z)


class Multiply(Module):
    """Product of two sources."""

    source_count = 2
    source0 = SourceSlot(0)
    source1 = SourceSlot(1)

    def get_value(self, x, y, z):
        return self._source_value(0, x, y, z) * self._source_value(1, x, y, z)


class Max(Module):
    """Larger of two sources."""

    source_count = 2
    source0 = SourceSlot(0)
    source1 = SourceSlot(1)

    def get_value(self, x, y, z):
        return max(self._source_value(0, x, y, z), self._source_value(1, x, y, z))


class Min(Module):
    """Smaller of two sources."""

    source_count = 2
    source0 = SourceSlot(0)
    source1 = SourceSlot(1)

    def get_value(self, x, y, z):
        return min(self._source_value(0, x, y, z), self._source_value(1, x, y, z))


class Power(Module):
    """source0 raised to the power of source1."""

    source_count = 2
    source0 = SourceSlot(0)
    source1 = SourceSlot(1)

    def get_value(self, x, y, z):
        return math.pow(self._source_value(0, x, y, z), self._source_value(1, x, y, z))


class Blend(Module):
    """
    Linear blend of source0 and source1 weighted by the control source.

    A control value of -1 yields source0, +1 yields source1.
    """

    source_count = 3
    source0 = SourceSlot(0)
    source1 = SourceSlot(1)
    control = SourceSlot(2)

    def get_value(self, x, y, z):
        v0 = self._source_value(0, x, y, z)
        v1 = self._source_value(1, x, y, z)
        alpha = (self._source_value(2, x, y, z) + 1.0) / 2.0
        return linear_interp(v0, v1, alpha)


class Select(Module):
    """
    Chooses between source0 and source1 by the control value.

    Inside ``[lower_bound, upper_bound]`` the output is source1, outside it
    source0. With a non-zero ``edge_falloff`` the two sources are blended
    with an S-curve across a band of that half-width around each bound.
    """

    DEFAULT_LOWER_BOUND = -1.0
    DEFAULT_UPPER_BOUND = 1.0
    DEFAULT_EDGE_FALLOFF = 0.0

    source_count = 3
    source0 = SourceSlot(0)
    source1 = SourceSlot(1)
    control = SourceSlot(2)

    parameters = {
        "lower_bound": "float",
        "upper_bound": "float",
        "edge_falloff": "float",
    }

    def __init__(self, **kwargs):
        self._lower_bound = self.DEFAULT_LOWER_BOUND
        self._upper_bound = self.DEFAULT_UPPER_BOUND
        self._edge_falloff = self.DEFAULT_EDGE_FALLOFF
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

    @property
    def edge_falloff(self) -> float:
        return self._edge_falloff

    @edge_falloff.setter
    def edge_falloff(self, value: float) -> None:
        # Keep the two transition bands from overlapping
        bound_size = self._upper_bound - self._lower_bound
        self._edge_falloff = bound_size / 2.0 if value > bound_size / 2.0 else value

    def set_bounds(self, lower: float, upper: float) -> None:
        """
        Set both selection bounds at once.

        Raises:
            ConfigurationError: If lower > upper
        """
        if lower > upper:
            raise ConfigurationError(
                f"Select lower bound {lower} is greater than upper bound {upper}"
            )
        self._lower_bound = lower
        self._upper_bound = upper
        self.edge_falloff = self._edge_falloff

    def configure(self, **kwargs):
        # Bounds first, so the falloff is clamped against the final span
        lower = kwargs.pop("lower_bound", self._lower_bound)
        upper = kwargs.pop("upper_bound", self._upper_bound)
        self.set_bounds(lower, upper)
        return super().configure(**kwargs)

    def get_value(self, x, y, z):
        control_value = self._source_value(2, x, y, z)
        lower = self._lower_bound
        upper = self._upper_bound
        falloff = self._edge_falloff

        if falloff > 0.0:
            if control_value < lower - falloff:
                return self._source_value(0, x, y, z)

            if control_value < lower + falloff:
                # Lower transition band
                lower_curve = lower - falloff
                upper_curve = lower + falloff
                alpha = s_curve3((control_value - lower_curve) / (upper_curve - lower_curve))
                return linear_interp(
                    self._source_value(0, x, y, z),
                    self._source_value(1, x, y, z),
                    alpha,
                )

            if control_value < upper - falloff:
                return self._source_value(1, x, y, z)

            if control_value < upper + falloff:
                # Upper transition band
                lower_curve = upper - falloff
                upper_curve = upper + falloff
                alpha = s_curve3((control_value - lower_curve) / (upper_curve - lower_curve))
                return linear_interp(
                    self._source_value(1, x, y, z),
                    self._source_value(0, x, y, z),
                    alpha,
                )

            return self._source_value(0, x, y, z)

        if control_value < lower or control_value > upper:
            return self._source_value(0, x, y, z)
        return self._source_value(1, x, y, z)


class Displace(Module):
    """
    Evaluates source0 at a point offset by three displacement sources.

    The displacement sources are evaluated at the original point and their
    outputs are added to x, y and z respectively.
    """

    source_count = 4
    source0 = SourceSlot(0)
    x_displace = SourceSlot(1)
    y_displace = SourceSlot(2)
    z_displace = SourceSlot(3)

    def set_displacement_modules(self, x_module: Module, y_module: Module, z_module: Module) -> None:
        """Bind all three displacement sources at once."""
        self.set_source(1, x_module)
        self.set_source(2, y_module)
        self.set_source(3, z_module)

    def get_value(self, x, y, z):
        dx = x + self._source_value(1, x, y, z)
        dy = y + self._source_value(2, x, y, z)
        dz = z + self._source_value(3, x, y, z)
        return self._source_value(0, dx, dy, dz)
