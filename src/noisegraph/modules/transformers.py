"""
Transformer modules.

Transformers evaluate their source at a different point than the one they
were asked for: scaled, translated, rotated or randomly perturbed.
"""

import math

from ..errors import ConfigurationError
from ..noise_math import DEG_TO_RAD
from .base import Module, SourceSlot
from .generators import Perlin


class ScalePoint(Module):
    """Multiplies each input coordinate by a per-axis scale before sampling the source."""

    DEFAULT_SCALE = 1.0

    source_count = 1
    source0 = SourceSlot(0)

    parameters = {"x_scale": "float", "y_scale": "float", "z_scale": "float"}

    def __init__(self, **kwargs):
        self.x_scale = self.DEFAULT_SCALE
        self.y_scale = self.DEFAULT_SCALE
        self.z_scale = self.DEFAULT_SCALE
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        return self._source_value(0, x * self.x_scale, y * self.y_scale, z * self.z_scale)


class TranslatePoint(Module):
    """Adds a per-axis offset to each input coordinate before sampling the source."""

    DEFAULT_TRANSLATION = 0.0

    source_count = 1
    source0 = SourceSlot(0)

    parameters = {
        "x_translation": "float",
        "y_translation": "float",
        "z_translation": "float",
    }

    def __init__(self, **kwargs):
        self.x_translation = self.DEFAULT_TRANSLATION
        self.y_translation = self.DEFAULT_TRANSLATION
        self.z_translation = self.DEFAULT_TRANSLATION
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        return self._source_value(
            0,
            x + self.x_translation,
            y + self.y_translation,
            z + self.z_translation,
        )


class RotatePoint(Module):
    """
    Rotates the input point around the origin before sampling the source.

    Angles are in degrees. The rotation matrix is recomputed whenever an
    angle changes, not per sample.
    """

    DEFAULT_ROTATION = 0.0

    source_count = 1
    source0 = SourceSlot(0)

    parameters = {"x_angle": "float", "y_angle": "float", "z_angle": "float"}

    def __init__(self, **kwargs):
        self.set_angles(self.DEFAULT_ROTATION, self.DEFAULT_ROTATION, self.DEFAULT_ROTATION)
        super().__init__(**kwargs)

    @property
    def x_angle(self) -> float:
        return self._x_angle

    @x_angle.setter
    def x_angle(self, value: float) -> None:
        self.set_angles(value, self._y_angle, self._z_angle)

    @property
    def y_angle(self) -> float:
        return self._y_angle

    @y_angle.setter
    def y_angle(self, value: float) -> None:
        self.set_angles(self._x_angle, value, self._z_angle)

    @property
    def z_angle(self) -> float:
        return self._z_angle

    @z_angle.setter
    def z_angle(self, value: float) -> None:
        self.set_angles(self._x_angle, self._y_angle, value)

    def set_angles(self, x_angle: float, y_angle: float, z_angle: float) -> None:
        """
        Set all three rotation angles.

        Args:
            x_angle: Rotation around the x axis, in degrees
            y_angle: Rotation around the y axis, in degrees
            z_angle: Rotation around the z axis, in degrees

        Raises:
            ConfigurationError: If an angle is infinite or NaN
        """
        if not all(math.isfinite(angle) for angle in (x_angle, y_angle, z_angle)):
            raise ConfigurationError(
                f"Rotation angles must be finite, got ({x_angle}, {y_angle}, {z_angle})"
            )
        x_cos = math.cos(x_angle * DEG_TO_RAD)
        y_cos = math.cos(y_angle * DEG_TO_RAD)
        z_cos = math.cos(z_angle * DEG_TO_RAD)
        x_sin = math.sin(x_angle * DEG_TO_RAD)
        y_sin = math.sin(y_angle * DEG_TO_RAD)
        z_sin = math.sin(z_angle * DEG_TO_RAD)

        self._m00 = y_sin * x_sin * z_sin + y_cos * z_cos
        self._m10 = x_cos * z_sin
        self._m20 = y_sin * z_cos - y_cos * x_sin * z_sin
        self._m01 = y_sin * x_sin * z_cos - y_cos * z_sin
        self._m11 = x_cos * z_cos
        self._m21 = -y_cos * x_sin * z_cos - y_sin * z_sin
        self._m02 = -y_sin * x_cos
        self._m12 = x_sin
        self._m22 = y_cos * x_cos

        self._x_angle = x_angle
        self._y_angle = y_angle
        self._z_angle = z_angle

    def get_value(self, x, y, z):
        nx = self._m00 * x + self._m10 * y + self._m20 * z
        ny = self._m01 * x + self._m11 * y + self._m21 * z
        nz = self._m02 * x + self._m12 * y + self._m22 * z
        return self._source_value(0, nx, ny, nz)


# Fractional offsets keep the distortion samples away from integer lattice
# points, where gradient noise is always zero.
_X_OFFSETS = (12414.0 / 65536.0, 65124.0 / 65536.0, 31337.0 / 65536.0)
_Y_OFFSETS = (26519.0 / 65536.0, 18128.0 / 65536.0, 60493.0 / 65536.0)
_Z_OFFSETS = (53820.0 / 65536.0, 11213.0 / 65536.0, 44845.0 / 65536.0)


class Turbulence(Module):
    """
    Randomly displaces the input point before sampling the source.

    Three internal Perlin generators (seeded ``seed``, ``seed + 1`` and
    ``seed + 2``) produce the x, y and z displacements, each scaled by
    ``power``. ``roughness`` is their octave count.
    """

    DEFAULT_FREQUENCY = Perlin.DEFAULT_FREQUENCY
    DEFAULT_POWER = 1.0
    DEFAULT_ROUGHNESS = 3
    DEFAULT_SEED = Perlin.DEFAULT_SEED

    source_count = 1
    source0 = SourceSlot(0)

    parameters = {
        "frequency": "float",
        "power": "float",
        "roughness": "int",
        "seed": "int",
    }

    def __init__(self, **kwargs):
        self._x_distort = Perlin()
        self._y_distort = Perlin()
        self._z_distort = Perlin()
        self.power = self.DEFAULT_POWER
        self.frequency = self.DEFAULT_FREQUENCY
        self.roughness = self.DEFAULT_ROUGHNESS
        self.seed = self.DEFAULT_SEED
        super().__init__(**kwargs)

    @property
    def frequency(self) -> float:
        return self._x_distort.frequency

    @frequency.setter
    def frequency(self, value: float) -> None:
        self._x_distort.frequency = value
        self._y_distort.frequency = value
        self._z_distort.frequency = value

    @property
    def roughness(self) -> int:
        return self._x_distort.octave_count

    @roughness.setter
    def roughness(self, value: int) -> None:
        self._x_distort.octave_count = value
        self._y_distort.octave_count = value
        self._z_distort.octave_count = value

    @property
    def seed(self) -> int:
        return self._x_distort.seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._x_distort.seed = value
        self._y_distort.seed = value + 1
        self._z_distort.seed = value + 2

    def get_value(self, x, y, z):
        x_distorted = x + self._x_distort.get_value(
            x + _X_OFFSETS[0], y + _X_OFFSETS[1], z + _X_OFFSETS[2]
        ) * self.power
        y_distorted = y + self._y_distort.get_value(
            x + _Y_OFFSETS[0], y + _Y_OFFSETS[1], z + _Y_OFFSETS[2]
        ) * self.power
        z_distorted = z + self._z_distort.get_value(
            x + _Z_OFFSETS[0], y + _Z_OFFSETS[1], z + _Z_OFFSETS[2]
        ) * self.power

        return self._source_value(0, x_distorted, y_distorted, z_distorted)
