"""
Coherent-noise kernel.

Deterministic lattice noise functions that every generator node samples through:
- Gradient noise: dot product of a hashed unit vector with the corner offset
- Value noise: a hashed integer mapped onto [-1, 1]
- Coherent variants: trilinear blend of the eight lattice corners, warped by
  the S-curve selected through NoiseQuality

The 256-entry gradient table is built once from a fixed seed. Any other
GradientTable can be passed explicitly to the functions in this module.
"""

import enum
import functools
from typing import Optional, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError
from .noise_math import linear_interp, s_curve3, s_curve5

# Hash constants. All are primes and must remain prime.
X_NOISE_GEN = 1619
Y_NOISE_GEN = 31337
Z_NOISE_GEN = 6971
SEED_NOISE_GEN = 1013
SHIFT_NOISE_GEN = 8

GRADIENT_TABLE_SIZE = 256
DEFAULT_GRADIENT_SEED = 0x5EED

# Scales a gradient dot product onto roughly [-1, 1]
_GRADIENT_SCALE = 2.12


class NoiseQuality(enum.Enum):
    """
    Interpolant used between lattice points.

    FAST is linear (creasing at integer boundaries), STANDARD is a cubic
    S-curve and BEST is a quintic S-curve with continuous first and second
    derivatives.
    """

    FAST = 0
    STANDARD = 1
    BEST = 2


class GradientTable:
    """
    Immutable table of 256 gradient vectors indexed by the lattice hash.

    Swapping the table changes every derived noise value, so a table is
    built once and never mutated.
    """

    def __init__(self, vectors: Sequence[Sequence[float]]):
        arr = np.asarray(vectors, dtype=np.float64)
        if arr.shape != (GRADIENT_TABLE_SIZE, 3):
            raise ConfigurationError(
                f"Gradient table must have shape ({GRADIENT_TABLE_SIZE}, 3), got {arr.shape}"
            )
        if not np.all(np.isfinite(arr)):
            raise ConfigurationError("Gradient table contains non-finite values")

        # Plain tuples keep per-sample lookups cheap
        self._vectors: Tuple[Tuple[float, float, float], ...] = tuple(
            (float(row[0]), float(row[1]), float(row[2])) for row in arr
        )

    @classmethod
    def from_seed(cls, seed: int) -> "GradientTable":
        """
        Generate a table of unit vectors uniformly distributed on the sphere.

        Args:
            seed: Seed for numpy's PCG64 generator

        Returns:
            GradientTable
        """
        rng = np.random.default_rng(seed)
        vectors = rng.standard_normal((GRADIENT_TABLE_SIZE, 3))
        vectors /= np.linalg.norm(vectors, axis=1, keepdims=True)
        return cls(vectors)

    def __getitem__(self, index: int) -> Tuple[float, float, float]:
        return self._vectors[index]

    def __len__(self) -> int:
        return len(self._vectors)

    def as_array(self) -> np.ndarray:
        """Return a copy of the table as a (256, 3) array."""
        return np.array(self._vectors, dtype=np.float64)


@functools.lru_cache(maxsize=None)
def default_gradient_table() -> GradientTable:
    """The process-wide table, created on first use from DEFAULT_GRADIENT_SEED."""
    return GradientTable.from_seed(DEFAULT_GRADIENT_SEED)


def _lattice_floor(v: float) -> int:
    # Lower corner of the unit cube; zero and negative integers map to the cube below
    return int(v) if v > 0.0 else int(v) - 1


def _warp(t: float, quality: NoiseQuality) -> float:
    if quality is NoiseQuality.FAST:
        return t
    if quality is NoiseQuality.STANDARD:
        return s_curve3(t)
    return s_curve5(t)


def gradient_noise_3d(
    fx: float, fy: float, fz: float,
    ix: int, iy: int, iz: int,
    seed: int = 0,
    table: Optional[GradientTable] = None
) -> float:
    """
    Gradient noise contributed by one lattice point.

    Args:
        fx, fy, fz: Sample point
        ix, iy, iz: Integer lattice point
        seed: Noise seed
        table: Gradient table (defaults to the process-wide table)

    Returns:
        Dot product of the hashed gradient with the offset to the sample point
    """
    if table is None:
        table = default_gradient_table()

    index = (
        X_NOISE_GEN * ix
        + Y_NOISE_GEN * iy
        + Z_NOISE_GEN * iz
        + SEED_NOISE_GEN * seed
    ) & 0xFFFFFFFF
    index ^= index >> SHIFT_NOISE_GEN
    index &= 0xFF

    gx, gy, gz = table[index]
    return (
        gx * (fx - ix)
        + gy * (fy - iy)
        + gz * (fz - iz)
    ) * _GRADIENT_SCALE


def gradient_coherent_noise_3d(
    x: float, y: float, z: float,
    seed: int = 0,
    quality: NoiseQuality = NoiseQuality.STANDARD,
    table: Optional[GradientTable] = None
) -> float:
    """
    Coherent gradient noise at (x, y, z).

    Args:
        x, y, z: Sample point
        seed: Noise seed
        quality: Interpolant shape between lattice points
        table: Gradient table (defaults to the process-wide table)

    Returns:
        Noise value in [-1, 1]
    """
    if table is None:
        table = default_gradient_table()

    x0 = _lattice_floor(x)
    x1 = x0 + 1
    y0 = _lattice_floor(y)
    y1 = y0 + 1
    z0 = _lattice_floor(z)
    z1 = z0 + 1

    xs = _warp(x - x0, quality)
    ys = _warp(y - y0, quality)
    zs = _warp(z - z0, quality)

    # Trilinear blend of the eight corner values
    n0 = gradient_noise_3d(x, y, z, x0, y0, z0, seed, table)
    n1 = gradient_noise_3d(x, y, z, x1, y0, z0, seed, table)
    ix0 = linear_interp(n0, n1, xs)
    n0 = gradient_noise_3d(x, y, z, x0, y1, z0, seed, table)
    n1 = gradient_noise_3d(x, y, z, x1, y1, z0, seed, table)
    ix1 = linear_interp(n0, n1, xs)
    iy0 = linear_interp(ix0, ix1, ys)
    n0 = gradient_noise_3d(x, y, z, x0, y0, z1, seed, table)
    n1 = gradient_noise_3d(x, y, z, x1, y0, z1, seed, table)
    ix0 = linear_interp(n0, n1, xs)
    n0 = gradient_noise_3d(x, y, z, x0, y1, z1, seed, table)
    n1 = gradient_noise_3d(x, y, z, x1, y1, z1, seed, table)
    ix1 = linear_interp(n0, n1, xs)
    iy1 = linear_interp(ix0, ix1, ys)

    value = linear_interp(iy0, iy1, zs)
    if value > 1.0:
        return 1.0
    if value < -1.0:
        return -1.0
    return value


def int_value_noise_3d(x: int, y: int, z: int, seed: int = 0) -> int:
    """Hash an integer lattice point to an integer in [0, 2^31)."""
    n = (
        X_NOISE_GEN * x
        + Y_NOISE_GEN * y
        + Z_NOISE_GEN * z
        + SEED_NOISE_GEN * seed
    ) & 0x7FFFFFFF
    n = (n >> 13) ^ n
    return (n * (n * n * 60493 + 19990303) + 1376312589) & 0x7FFFFFFF


def value_noise_3d(x: int, y: int, z: int, seed: int = 0) -> float:
    """Hash an integer lattice point to a float in [-1, 1]."""
    return 1.0 - (int_value_noise_3d(x, y, z, seed) / 1073741824.0)


def value_coherent_noise_3d(
    x: float, y: float, z: float,
    seed: int = 0,
    quality: NoiseQuality = NoiseQuality.STANDARD
) -> float:
    """Coherent value noise at (x, y, z), in [-1, 1]."""
    x0 = _lattice_floor(x)
    x1 = x0 + 1
    y0 = _lattice_floor(y)
    y1 = y0 + 1
    z0 = _lattice_floor(z)
    z1 = z0 + 1

    xs = _warp(x - x0, quality)
    ys = _warp(y - y0, quality)
    zs = _warp(z - z0, quality)

    n0 = value_noise_3d(x0, y0, z0, seed)
    n1 = value_noise_3d(x1, y0, z0, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = value_noise_3d(x0, y1, z0, seed)
    n1 = value_noise_3d(x1, y1, z0, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy0 = linear_interp(ix0, ix1, ys)
    n0 = value_noise_3d(x0, y0, z1, seed)
    n1 = value_noise_3d(x1, y0, z1, seed)
    ix0 = linear_interp(n0, n1, xs)
    n0 = value_noise_3d(x0, y1, z1, seed)
    n1 = value_noise_3d(x1, y1, z1, seed)
    ix1 = linear_interp(n0, n1, xs)
    iy1 = linear_interp(ix0, ix1, ys)

    return linear_interp(iy0, iy1, zs)
