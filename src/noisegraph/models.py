"""
Coordinate models.

A model maps a domain-specific coordinate onto the (x, y, z) input of a
module graph:
- Plane: (x, z) on the y = 0 plane
- Sphere: (latitude, longitude) on the unit sphere
- Cylinder: (angle, height) on the unit-radius cylinder around the y axis
- Line: position p in [0, 1] along a segment
"""

import math
from typing import Optional, Tuple

from .errors import MissingSourceError
from .modules.base import Module
from .noise_math import DEG_TO_RAD, lat_lon_to_xyz


class Model:
    """Base class holding the module a model samples."""

    def __init__(self, source: Optional[Module] = None):
        self.source = source

    def _require_source(self) -> Module:
        if self.source is None:
            raise MissingSourceError(type(self).__name__, 0)
        return self.source


class Plane(Model):
    """Samples the module on the y = 0 plane."""

    def get_value(self, x: float, z: float) -> float:
        return self._require_source().get_value(x, 0.0, z)


class Sphere(Model):
    """Samples the module on the surface of a unit sphere centred on the origin."""

    def get_value(self, lat: float, lon: float) -> float:
        """
        Args:
            lat: Latitude in degrees, -90 to +90
            lon: Longitude in degrees, -180 to +180
        """
        x, y, z = lat_lon_to_xyz(lat, lon)
        return self._require_source().get_value(x, y, z)


class Cylinder(Model):
    """Samples the module on a unit-radius cylinder whose axis is the y axis."""

    def get_value(self, angle: float, height: float) -> float:
        """
        Args:
            angle: Angle around the cylinder's centre, in degrees
            height: Height along the y axis
        """
        x = math.cos(angle * DEG_TO_RAD)
        z = math.sin(angle * DEG_TO_RAD)
        return self._require_source().get_value(x, height, z)


class Line(Model):
    """
    Samples the module along a line segment.

    With ``attenuate`` set, the output fades to zero towards both ends of
    the segment (scaled by ``4p(1 - p)``).
    """

    def __init__(self, source: Optional[Module] = None, attenuate: bool = False):
        super().__init__(source)
        self.attenuate = attenuate
        self.start_point: Tuple[float, float, float] = (0.0, 0.0, 0.0)
        self.end_point: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    def set_start_point(self, x: float, y: float, z: float) -> None:
        self.start_point = (x, y, z)

    def set_end_point(self, x: float, y: float, z: float) -> None:
        self.end_point = (x, y, z)

    def get_value(self, p: float) -> float:
        x0, y0, z0 = self.start_point
        x1, y1, z1 = self.end_point
        x = (x1 - x0) * p + x0
        y = (y1 - y0) * p + y0
        z = (z1 - z0) * p + z0
        value = self._require_source().get_value(x, y, z)

        if self.attenuate:
            return p * (1.0 - p) * 4.0 * value
        return value
