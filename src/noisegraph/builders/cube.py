"""
Linear noise cube builder.
"""

import numpy as np

from .base import NoiseCubeBuilder, axis_coordinates, check_bounds


class LinearNoiseCubeBuilder(NoiseCubeBuilder):
    """
    Builds a noise cube by sampling the source module directly over an
    axis-aligned box; parallel builds partition the work by depth (z) slice.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lower_x_bound = 0.0
        self.upper_x_bound = 0.0
        self.lower_y_bound = 0.0
        self.upper_y_bound = 0.0
        self.lower_z_bound = 0.0
        self.upper_z_bound = 0.0

    def set_bounds(
        self,
        lower_x: float, upper_x: float,
        lower_y: float, upper_y: float,
        lower_z: float, upper_z: float
    ) -> None:
        """
        Set the box to sample.

        Raises:
            ConfigurationError: If a lower bound is not less than its upper bound
        """
        check_bounds("x", lower_x, upper_x)
        check_bounds("y", lower_y, upper_y)
        check_bounds("z", lower_z, upper_z)
        self.lower_x_bound = lower_x
        self.upper_x_bound = upper_x
        self.lower_y_bound = lower_y
        self.upper_y_bound = upper_y
        self.lower_z_bound = lower_z
        self.upper_z_bound = upper_z

    def _check_bounds(self) -> None:
        check_bounds("x", self.lower_x_bound, self.upper_x_bound)
        check_bounds("y", self.lower_y_bound, self.upper_y_bound)
        check_bounds("z", self.lower_z_bound, self.upper_z_bound)

    def _describe(self) -> str:
        return (
            f"box x=[{self.lower_x_bound}, {self.upper_x_bound}) "
            f"y=[{self.lower_y_bound}, {self.upper_y_bound}) "
            f"z=[{self.lower_z_bound}, {self.upper_z_bound}) "
            f"size={self._dest_width}x{self._dest_height}x{self._dest_depth}"
        )

    def _compute_unit(self, index: int) -> np.ndarray:
        source = self.source_module
        z_delta = (self.upper_z_bound - self.lower_z_bound) / self._dest_depth
        z_cur = self.lower_z_bound + index * z_delta

        xs = axis_coordinates(self.lower_x_bound, self.upper_x_bound, self._dest_width)
        ys = axis_coordinates(self.lower_y_bound, self.upper_y_bound, self._dest_height)

        values = np.empty((self._dest_height, self._dest_width), dtype=np.float32)
        for y, y_cur in enumerate(ys):
            for x, x_cur in enumerate(xs):
                values[y, x] = source.get_value(x_cur, y_cur, z_cur)
        return values
