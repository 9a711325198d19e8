"""
Interpolation and small math helpers shared by the noise kernel and the nodes.
"""

import math
from typing import Tuple

SQRT_3 = 1.7320508075688772935
DEG_TO_RAD = math.pi / 180.0


def linear_interp(n0: float, n1: float, a: float) -> float:
    """Linear interpolation: returns n0 at a=0 and n1 at a=1."""
    return ((1.0 - a) * n0) + (a * n1)


def cubic_interp(n0: float, n1: float, n2: float, n3: float, a: float) -> float:
    """
    Cubic interpolation between n1 and n2.

    Args:
        n0: The value before n1
        n1: The first value
        n2: The second value
        n3: The value after n2
        a: Alpha in [0, 1]; 0 returns n1, 1 returns n2

    Returns:
        The interpolated value
    """
    p = (n3 - n2) - (n0 - n1)
    q = (n0 - n1) - p
    r = n2 - n0
    s = n1
    return p * a * a * a + q * a * a + r * a + s


def s_curve3(a: float) -> float:
    """Cubic S-curve (3a² - 2a³); first derivative is zero at 0 and 1."""
    return a * a * (3.0 - 2.0 * a)


def s_curve5(a: float) -> float:
    """Quintic S-curve (6a⁵ - 15a⁴ + 10a³); first and second derivatives are zero at 0 and 1."""
    a3 = a * a * a
    a4 = a3 * a
    a5 = a4 * a
    return (6.0 * a5) - (15.0 * a4) + (10.0 * a3)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value onto [lower, upper]."""
    if value > upper:
        return upper
    if value < lower:
        return lower
    return value


def lat_lon_to_xyz(lat: float, lon: float) -> Tuple[float, float, float]:
    """
    Convert latitude/longitude on a unit sphere to Cartesian coordinates.

    Args:
        lat: Latitude in degrees, -90 to +90
        lon: Longitude in degrees, -180 to +180

    Returns:
        Tuple of (x, y, z)
    """
    r = math.cos(DEG_TO_RAD * lat)
    x = r * math.cos(DEG_TO_RAD * lon)
    y = math.sin(DEG_TO_RAD * lat)
    z = r * math.sin(DEG_TO_RAD * lon)
    return x, y, z
