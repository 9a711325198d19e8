"""
Planar noise map builder, with optional seamless tiling.
"""

import numpy as np

from ..models import Plane
from ..noise_math import linear_interp
from .base import NoiseMapBuilder, axis_coordinates, check_bounds


class PlaneNoiseMapBuilder(NoiseMapBuilder):
    """
    Builds a noise map from the y = 0 plane of the source module.

    Map columns run along x and rows along z. With ``enable_seamless`` set,
    each cell blends the four samples one extent apart so that opposite
    edges of the map match and the map tiles.
    """

    def __init__(self, *args, enable_seamless: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.enable_seamless = enable_seamless
        self.lower_x_bound = 0.0
        self.upper_x_bound = 0.0
        self.lower_z_bound = 0.0
        self.upper_z_bound = 0.0

    def set_bounds(self, lower_x: float, upper_x: float, lower_z: float, upper_z: float) -> None:
        """
        Set the area of the plane to sample.

        Raises:
            ConfigurationError: If a lower bound is not less than its upper bound
        """
        check_bounds("x", lower_x, upper_x)
        check_bounds("z", lower_z, upper_z)
        self.lower_x_bound = lower_x
        self.upper_x_bound = upper_x
        self.lower_z_bound = lower_z
        self.upper_z_bound = upper_z

    def _check_bounds(self) -> None:
        check_bounds("x", self.lower_x_bound, self.upper_x_bound)
        check_bounds("z", self.lower_z_bound, self.upper_z_bound)

    def _describe(self) -> str:
        return (
            f"plane x=[{self.lower_x_bound}, {self.upper_x_bound}) "
            f"z=[{self.lower_z_bound}, {self.upper_z_bound}) "
            f"size={self.dest_width}x{self.dest_height} seamless={self.enable_seamless}"
        )

    def _sample_cell(self, model: Plane, x_cur: float, z_cur: float) -> float:
        if not self.enable_seamless:
            return model.get_value(x_cur, z_cur)

        x_extent = self.upper_x_bound - self.lower_x_bound
        z_extent = self.upper_z_bound - self.lower_z_bound

        sw_value = model.get_value(x_cur, z_cur)
        se_value = model.get_value(x_cur + x_extent, z_cur)
        nw_value = model.get_value(x_cur, z_cur + z_extent)
        ne_value = model.get_value(x_cur + x_extent, z_cur + z_extent)

        x_blend = 1.0 - ((x_cur - self.lower_x_bound) / x_extent)
        z_blend = 1.0 - ((z_cur - self.lower_z_bound) / z_extent)

        z0 = linear_interp(sw_value, se_value, x_blend)
        z1 = linear_interp(nw_value, ne_value, x_blend)
        return linear_interp(z0, z1, z_blend)

    def _compute_row(self, row: int) -> np.ndarray:
        model = Plane(self.source_module)
        z_delta = (self.upper_z_bound - self.lower_z_bound) / self.dest_height
        z_cur = self.lower_z_bound + row * z_delta

        xs = axis_coordinates(self.lower_x_bound, self.upper_x_bound, self.dest_width)
        values = np.empty(self.dest_width, dtype=np.float32)
        for x, x_cur in enumerate(xs):
            values[x] = self._sample_cell(model, x_cur, z_cur)
        return values
