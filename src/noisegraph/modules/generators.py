"""
Generator modules.

Generators have no sources; they produce values from the input point alone:
- Constant, Checkerboard, Spheres, Cylinders: simple analytic patterns
- Perlin, Billow, RidgedMulti, Simplex: fractal sums of coherent noise
- Voronoi, White: cellular and uncorrelated value noise
"""

import math
from typing import List

import numpy as np

from ..errors import ConfigurationError
from ..noise import (
    NoiseQuality,
    gradient_coherent_noise_3d,
    value_noise_3d,
)
from ..noise_math import SQRT_3
from .base import Module

MAX_OCTAVES = 30


class Constant(Module):
    """Outputs a constant value."""

    DEFAULT_VALUE = 0.0

    parameters = {"value": "float"}

    def __init__(self, **kwargs):
        self.value = self.DEFAULT_VALUE
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        return self.value


class Checkerboard(Module):
    """Outputs 1.0 and -1.0 in alternating unit cubes."""

    def get_value(self, x, y, z):
        ix = math.floor(x)
        iy = math.floor(y)
        iz = math.floor(z)
        return -1.0 if (ix & 1) ^ (iy & 1) ^ (iz & 1) else 1.0


class Spheres(Module):
    """
    Concentric spheres centred on the origin.

    Each sphere surface outputs 1.0, and the value falls to -1.0 halfway
    between neighbouring spheres. Frequency sets how many spheres fit in a
    unit distance.
    """

    DEFAULT_FREQUENCY = 1.0

    parameters = {"frequency": "float"}

    def __init__(self, **kwargs):
        self.frequency = self.DEFAULT_FREQUENCY
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency

        dist_from_center = math.sqrt(x * x + y * y + z * z)
        dist_from_smaller = dist_from_center - math.floor(dist_from_center)
        dist_from_larger = 1.0 - dist_from_smaller
        nearest = min(dist_from_smaller, dist_from_larger)
        return 1.0 - (nearest * 4.0)


class Cylinders(Module):
    """Concentric cylinders around the y axis; same value profile as Spheres."""

    DEFAULT_FREQUENCY = 1.0

    parameters = {"frequency": "float"}

    def __init__(self, **kwargs):
        self.frequency = self.DEFAULT_FREQUENCY
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        x *= self.frequency
        z *= self.frequency

        dist_from_center = math.sqrt(x * x + z * z)
        dist_from_smaller = dist_from_center - math.floor(dist_from_center)
        dist_from_larger = 1.0 - dist_from_smaller
        nearest = min(dist_from_smaller, dist_from_larger)
        return 1.0 - (nearest * 4.0)


class Perlin(Module):
    """
    Fractal sum of gradient coherent noise.

    Each octave samples at ``lacunarity`` times the previous frequency and
    contributes ``persistence`` times the previous amplitude. Octave ``i``
    uses seed ``seed + i``.
    """

    DEFAULT_FREQUENCY = 1.0
    DEFAULT_LACUNARITY = 2.0
    DEFAULT_OCTAVE_COUNT = 6
    DEFAULT_PERSISTENCE = 0.5
    DEFAULT_QUALITY = NoiseQuality.STANDARD
    DEFAULT_SEED = 0

    parameters = {
        "frequency": "float",
        "lacunarity": "float",
        "octave_count": "int",
        "persistence": "float",
        "quality": "quality",
        "seed": "int",
    }

    def __init__(self, **kwargs):
        self.frequency = self.DEFAULT_FREQUENCY
        self.lacunarity = self.DEFAULT_LACUNARITY
        self.octave_count = self.DEFAULT_OCTAVE_COUNT
        self.persistence = self.DEFAULT_PERSISTENCE
        self.quality = self.DEFAULT_QUALITY
        self.seed = self.DEFAULT_SEED
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        value = 0.0
        current_persistence = 1.0
        lacunarity = self.lacunarity

        x *= self.frequency
        y *= self.frequency
        z *= self.frequency

        for octave in range(self.octave_count):
            seed = (self.seed + octave) & 0x7FFFFFFF
            signal = gradient_coherent_noise_3d(x, y, z, seed, self.quality)
            value += signal * current_persistence

            x *= lacunarity
            y *= lacunarity
            z *= lacunarity
            current_persistence *= self.persistence

        return value


class Billow(Module):
    """
    Perlin-like fractal sum built from ``2|signal| - 1``, giving billowy,
    cloud-like lumps.
    """

    DEFAULT_FREQUENCY = 1.0
    DEFAULT_LACUNARITY = 2.0
    DEFAULT_OCTAVE_COUNT = 6
    DEFAULT_PERSISTENCE = 0.5
    DEFAULT_QUALITY = NoiseQuality.STANDARD
    DEFAULT_SEED = 0

    parameters = {
        "frequency": "float",
        "lacunarity": "float",
        "octave_count": "int",
        "persistence": "float",
        "quality": "quality",
        "seed": "int",
    }

    def __init__(self, **kwargs):
        self.frequency = self.DEFAULT_FREQUENCY
        self.lacunarity = self.DEFAULT_LACUNARITY
        self.octave_count = self.DEFAULT_OCTAVE_COUNT
        self.persistence = self.DEFAULT_PERSISTENCE
        self.quality = self.DEFAULT_QUALITY
        self.seed = self.DEFAULT_SEED
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        value = 0.0
        current_persistence = 1.0
        lacunarity = self.lacunarity

        x *= self.frequency
        y *= self.frequency
        z *= self.frequency

        for octave in range(self.octave_count):
            seed = (self.seed + octave) & 0x7FFFFFFF
            signal = gradient_coherent_noise_3d(x, y, z, seed, self.quality)
            signal = 2.0 * abs(signal) - 1.0
            value += signal * current_persistence

            x *= lacunarity
            y *= lacunarity
            z *= lacunarity
            current_persistence *= self.persistence

        return value + 0.5


class RidgedMulti(Module):
    """
    Ridged multifractal noise (F. Kenton Musgrave).

    Each octave's ``(1 - |signal|)²`` is weighted by the previous octave's
    signal, producing sharp ridges. Per-octave spectral weights are
    ``frequency ** -1`` and are recomputed whenever lacunarity changes.
    """

    DEFAULT_FREQUENCY = 1.0
    DEFAULT_LACUNARITY = 2.0
    DEFAULT_OCTAVE_COUNT = 6
    DEFAULT_QUALITY = NoiseQuality.STANDARD
    DEFAULT_SEED = 0
    MAX_OCTAVES = MAX_OCTAVES

    # Spectral exponent, offset and gain of the multifractal
    _H = 1.0
    _OFFSET = 1.0
    _GAIN = 2.0

    parameters = {
        "frequency": "float",
        "lacunarity": "float",
        "octave_count": "int",
        "quality": "quality",
        "seed": "int",
    }

    def __init__(self, **kwargs):
        self.frequency = self.DEFAULT_FREQUENCY
        self._spectral_weights: List[float] = []
        self.lacunarity = self.DEFAULT_LACUNARITY
        self.octave_count = self.DEFAULT_OCTAVE_COUNT
        self.quality = self.DEFAULT_QUALITY
        self.seed = self.DEFAULT_SEED
        super().__init__(**kwargs)

    @property
    def lacunarity(self) -> float:
        return self._lacunarity

    @lacunarity.setter
    def lacunarity(self, value: float) -> None:
        self._lacunarity = value
        self._calc_spectral_weights()

    @property
    def octave_count(self) -> int:
        return self._octave_count

    @octave_count.setter
    def octave_count(self, value: int) -> None:
        if not 0 <= value <= self.MAX_OCTAVES:
            raise ConfigurationError(
                f"octave_count must be between 0 and {self.MAX_OCTAVES}, got {value}"
            )
        self._octave_count = value

    def _calc_spectral_weights(self) -> None:
        weights = []
        frequency = 1.0
        for _ in range(self.MAX_OCTAVES):
            weights.append(frequency ** -self._H)
            frequency *= self._lacunarity
        self._spectral_weights = weights

    def get_value(self, x, y, z):
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency

        value = 0.0
        weight = 1.0
        lacunarity = self._lacunarity
        weights = self._spectral_weights

        for octave in range(self._octave_count):
            seed = (self.seed + octave) & 0x7FFFFFFF
            signal = gradient_coherent_noise_3d(x, y, z, seed, self.quality)

            # Make the ridges, then sharpen them
            signal = self._OFFSET - abs(signal)
            signal *= signal

            # Weight by the previous octave so ridges get sharp peaks
            signal *= weight
            weight = signal * self._GAIN
            if weight > 1.0:
                weight = 1.0
            elif weight < 0.0:
                weight = 0.0

            value += signal * weights[octave]

            x *= lacunarity
            y *= lacunarity
            z *= lacunarity

        return (value * 1.25) - 1.0


class Voronoi(Module):
    """
    Voronoi cells.

    One pseudo-random seed point sits in every unit cube. The output is the
    displacement of the nearest seed point's cell, plus (when
    ``enable_distance``) a term growing with the distance to that point.
    """

    DEFAULT_DISPLACEMENT = 1.0
    DEFAULT_FREQUENCY = 1.0
    DEFAULT_ENABLE_DISTANCE = False
    DEFAULT_SEED = 0

    parameters = {
        "displacement": "float",
        "enable_distance": "bool",
        "frequency": "float",
        "seed": "int",
    }

    def __init__(self, **kwargs):
        self.displacement = self.DEFAULT_DISPLACEMENT
        self.enable_distance = self.DEFAULT_ENABLE_DISTANCE
        self.frequency = self.DEFAULT_FREQUENCY
        self.seed = self.DEFAULT_SEED
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        x *= self.frequency
        y *= self.frequency
        z *= self.frequency

        xint = int(x) if x > 0.0 else int(x) - 1
        yint = int(y) if y > 0.0 else int(y) - 1
        zint = int(z) if z > 0.0 else int(z) - 1

        seed = self.seed
        min_dist = math.inf
        x_cand = y_cand = z_cand = 0.0

        # Search the 5x5x5 block of cubes around the point for the nearest seed point
        for z_cur in range(zint - 2, zint + 3):
            for y_cur in range(yint - 2, yint + 3):
                for x_cur in range(xint - 2, xint + 3):
                    x_pos = x_cur + value_noise_3d(x_cur, y_cur, z_cur, seed)
                    y_pos = y_cur + value_noise_3d(x_cur, y_cur, z_cur, seed + 1)
                    z_pos = z_cur + value_noise_3d(x_cur, y_cur, z_cur, seed + 2)
                    x_dist = x_pos - x
                    y_dist = y_pos - y
                    z_dist = z_pos - z
                    dist = x_dist * x_dist + y_dist * y_dist + z_dist * z_dist

                    if dist < min_dist:
                        min_dist = dist
                        x_cand = x_pos
                        y_cand = y_pos
                        z_cand = z_pos

        value = 0.0
        if self.enable_distance:
            x_dist = x_cand - x
            y_dist = y_cand - y
            z_dist = z_cand - z
            value = math.sqrt(x_dist * x_dist + y_dist * y_dist + z_dist * z_dist) * SQRT_3 - 1.0

        return value + self.displacement * value_noise_3d(
            math.floor(x_cand),
            math.floor(y_cand),
            math.floor(z_cand),
        )


class White(Module):
    """
    Uncorrelated value noise.

    Input coordinates are multiplied by ``scale`` and truncated, so the
    output changes every ``1 / scale`` units.
    """

    DEFAULT_SCALE = 256
    DEFAULT_SEED = 0

    parameters = {"scale": "int", "seed": "int"}

    def __init__(self, **kwargs):
        self.scale = self.DEFAULT_SCALE
        self.seed = self.DEFAULT_SEED
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        return value_noise_3d(
            int(x * self.scale),
            int(y * self.scale),
            int(z * self.scale),
            self.seed,
        )


# Simplex gradient directions: midpoints of the edges of a cube
_GRAD3 = (
    (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
    (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
    (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
)
_F3 = 1.0 / 3.0
_G3 = 1.0 / 6.0


class Simplex(Module):
    """
    Fractal sum of 3D simplex noise.

    The permutation table is derived from ``seed`` with numpy's PCG64
    generator and rebuilt whenever the seed changes.
    """

    DEFAULT_FREQUENCY = 1.0
    DEFAULT_LACUNARITY = 2.0
    DEFAULT_OCTAVE_COUNT = 6
    DEFAULT_PERSISTENCE = 0.5
    DEFAULT_SEED = 0

    parameters = {
        "frequency": "float",
        "lacunarity": "float",
        "octave_count": "int",
        "persistence": "float",
        "seed": "int",
    }

    def __init__(self, **kwargs):
        self.frequency = self.DEFAULT_FREQUENCY
        self.lacunarity = self.DEFAULT_LACUNARITY
        self.octave_count = self.DEFAULT_OCTAVE_COUNT
        self.persistence = self.DEFAULT_PERSISTENCE
        self.seed = self.DEFAULT_SEED
        super().__init__(**kwargs)

    @property
    def seed(self) -> int:
        return self._seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._seed = value
        rng = np.random.default_rng(value & 0x7FFFFFFF)
        p = [int(v) for v in rng.permutation(256)]
        self._perm = tuple(p + p)
        self._perm_mod12 = tuple(v % 12 for v in self._perm)

    def _simplex_3d(self, xin: float, yin: float, zin: float) -> float:
        perm = self._perm
        perm_mod12 = self._perm_mod12

        # Skew the input space to find the containing simplex cell
        s = (xin + yin + zin) * _F3
        i = math.floor(xin + s)
        j = math.floor(yin + s)
        k = math.floor(zin + s)
        t = (i + j + k) * _G3
        x0 = xin - (i - t)
        y0 = yin - (j - t)
        z0 = zin - (k - t)

        # Which of the six tetrahedra we are in
        if x0 >= y0:
            if y0 >= z0:
                i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 1, 0
            elif x0 >= z0:
                i1, j1, k1, i2, j2, k2 = 1, 0, 0, 1, 0, 1
            else:
                i1, j1, k1, i2, j2, k2 = 0, 0, 1, 1, 0, 1
        else:
            if y0 < z0:
                i1, j1, k1, i2, j2, k2 = 0, 0, 1, 0, 1, 1
            elif x0 < z0:
                i1, j1, k1, i2, j2, k2 = 0, 1, 0, 0, 1, 1
            else:
                i1, j1, k1, i2, j2, k2 = 0, 1, 0, 1, 1, 0

        offsets = (
            (x0, y0, z0),
            (x0 - i1 + _G3, y0 - j1 + _G3, z0 - k1 + _G3),
            (x0 - i2 + 2.0 * _G3, y0 - j2 + 2.0 * _G3, z0 - k2 + 2.0 * _G3),
            (x0 - 1.0 + 3.0 * _G3, y0 - 1.0 + 3.0 * _G3, z0 - 1.0 + 3.0 * _G3),
        )

        ii = i & 255
        jj = j & 255
        kk = k & 255
        gradients = (
            perm_mod12[ii + perm[jj + perm[kk]]],
            perm_mod12[ii + i1 + perm[jj + j1 + perm[kk + k1]]],
            perm_mod12[ii + i2 + perm[jj + j2 + perm[kk + k2]]],
            perm_mod12[ii + 1 + perm[jj + 1 + perm[kk + 1]]],
        )

        total = 0.0
        for (dx, dy, dz), gi in zip(offsets, gradients):
            t = 0.6 - dx * dx - dy * dy - dz * dz
            if t > 0.0:
                gx, gy, gz = _GRAD3[gi]
                t *= t
                total += t * t * (gx * dx + gy * dy + gz * dz)

        # Scaled to stay just inside [-1, 1]
        return 32.0 * total

    def get_value(self, x, y, z):
        value = 0.0
        current_persistence = 1.0
        lacunarity = self.lacunarity

        x *= self.frequency
        y *= self.frequency
        z *= self.frequency

        for _ in range(self.octave_count):
            value += self._simplex_3d(x, y, z) * current_persistence
            x *= lacunarity
            y *= lacunarity
            z *= lacunarity
            current_persistence *= self.persistence

        return value
