"""
Cylindrical noise map builder.
"""

import numpy as np

from ..models import Cylinder
from .base import NoiseMapBuilder, axis_coordinates, check_bounds


class CylinderNoiseMapBuilder(NoiseMapBuilder):
    """
    Builds a noise map from the surface of a unit-radius cylinder.

    Map columns run along the angle (degrees) and rows along the height.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lower_angle_bound = 0.0
        self.upper_angle_bound = 0.0
        self.lower_height_bound = 0.0
        self.upper_height_bound = 0.0

    def set_bounds(
        self,
        lower_angle: float, upper_angle: float,
        lower_height: float, upper_height: float
    ) -> None:
        """
        Set the angle and height range to sample.

        Raises:
            ConfigurationError: If a lower bound is not less than its upper bound
        """
        check_bounds("angle", lower_angle, upper_angle)
        check_bounds("height", lower_height, upper_height)
        self.lower_angle_bound = lower_angle
        self.upper_angle_bound = upper_angle
        self.lower_height_bound = lower_height
        self.upper_height_bound = upper_height

    def _check_bounds(self) -> None:
        check_bounds("angle", self.lower_angle_bound, self.upper_angle_bound)
        check_bounds("height", self.lower_height_bound, self.upper_height_bound)

    def _describe(self) -> str:
        return (
            f"cylinder angle=[{self.lower_angle_bound}, {self.upper_angle_bound}) "
            f"height=[{self.lower_height_bound}, {self.upper_height_bound}) "
            f"size={self.dest_width}x{self.dest_height}"
        )

    def _compute_row(self, row: int) -> np.ndarray:
        model = Cylinder(self.source_module)
        height_delta = (self.upper_height_bound - self.lower_height_bound) / self.dest_height
        cur_height = self.lower_height_bound + row * height_delta

        angles = axis_coordinates(self.lower_angle_bound, self.upper_angle_bound, self.dest_width)
        values = np.empty(self.dest_width, dtype=np.float32)
        for x, cur_angle in enumerate(angles):
            values[x] = model.get_value(cur_angle, cur_height)
        return values
