"""
Spherical noise map builder.
"""

import numpy as np

from ..models import Sphere
from .base import NoiseMapBuilder, axis_coordinates, check_bounds


class SphereNoiseMapBuilder(NoiseMapBuilder):
    """
    Builds a noise map from the surface of a unit sphere.

    Map columns run west to east in longitude and rows south to north in
    latitude, both in degrees.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.south_lat_bound = 0.0
        self.north_lat_bound = 0.0
        self.west_lon_bound = 0.0
        self.east_lon_bound = 0.0

    def set_bounds(self, south_lat: float, north_lat: float, west_lon: float, east_lon: float) -> None:
        """
        Set the latitude and longitude range to sample, in degrees.

        Raises:
            ConfigurationError: If south >= north or west >= east
        """
        check_bounds("latitude", south_lat, north_lat)
        check_bounds("longitude", west_lon, east_lon)
        self.south_lat_bound = south_lat
        self.north_lat_bound = north_lat
        self.west_lon_bound = west_lon
        self.east_lon_bound = east_lon

    def _check_bounds(self) -> None:
        check_bounds("latitude", self.south_lat_bound, self.north_lat_bound)
        check_bounds("longitude", self.west_lon_bound, self.east_lon_bound)

    def _describe(self) -> str:
        return (
            f"sphere lat=[{self.south_lat_bound}, {self.north_lat_bound}) "
            f"lon=[{self.west_lon_bound}, {self.east_lon_bound}) "
            f"size={self.dest_width}x{self.dest_height}"
        )

    def _compute_row(self, row: int) -> np.ndarray:
        model = Sphere(self.source_module)
        lat_delta = (self.north_lat_bound - self.south_lat_bound) / self.dest_height
        cur_lat = self.south_lat_bound + row * lat_delta

        lons = axis_coordinates(self.west_lon_bound, self.east_lon_bound, self.dest_width)
        values = np.empty(self.dest_width, dtype=np.float32)
        for x, cur_lon in enumerate(lons):
            values[x] = model.get_value(cur_lat, cur_lon)
        return values
