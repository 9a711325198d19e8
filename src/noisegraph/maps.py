"""
Dense grids of noise values.

NoiseMap is a 2D grid (rows of width cells) and NoiseCube its 3D
counterpart. Both store float32 in a numpy array and return a border value
for any out-of-range read; out-of-range writes are ignored.
"""

from typing import Iterator, Optional

import numpy as np

from .errors import ConfigurationError


class NoiseMap:
    """
    2D grid of float32 noise values.

    The cell at (x, y) is column x of row y; the backing array has shape
    ``(height, width)``. Resizing discards the previous contents.
    """

    def __init__(self, width: int = 0, height: int = 0, border_value: float = 0.0):
        self.border_value = border_value
        self._values: Optional[np.ndarray] = None
        self.width = 0
        self.height = 0
        self.set_size(width, height)

    def set_size(self, width: int, height: int) -> None:
        """
        Allocate a zero-filled grid of the given size.

        A zero width or height leaves the map empty.

        Raises:
            ConfigurationError: If width or height is negative
        """
        if width < 0 or height < 0:
            raise ConfigurationError(
                f"Map size cannot be negative, got {width}x{height}"
            )
        if width == 0 or height == 0:
            self._values = None
            self.width = 0
            self.height = 0
        else:
            self._values = np.zeros((height, width), dtype=np.float32)
            self.width = width
            self.height = height

    @property
    def is_empty(self) -> bool:
        return self._values is None

    @property
    def values(self) -> np.ndarray:
        """The backing array, shape ``(height, width)``; empty maps return a (0, 0) array."""
        if self._values is None:
            return np.zeros((0, 0), dtype=np.float32)
        return self._values

    def get_value(self, x: int, y: int) -> float:
        if self._values is not None and 0 <= x < self.width and 0 <= y < self.height:
            return float(self._values[y, x])
        return self.border_value

    def set_value(self, x: int, y: int, value: float) -> None:
        if self._values is not None and 0 <= x < self.width and 0 <= y < self.height:
            self._values[y, x] = value

    def set_row(self, y: int, row_values) -> None:
        """Write a complete row; the row must be ``width`` values long."""
        if self._values is None or not 0 <= y < self.height:
            return
        self._values[y, :] = row_values

    def get_row(self, y: int) -> np.ndarray:
        """
        Read-only view of one row.

        Raises:
            IndexError: If the row is outside the map
        """
        if self._values is None or not 0 <= y < self.height:
            raise IndexError(f"Row {y} is outside a map of height {self.height}")
        row = self._values[y]
        view = row.view()
        view.flags.writeable = False
        return view

    def iter_rows(self) -> Iterator[np.ndarray]:
        """Yield read-only views of each row, bottom (y = 0) first."""
        for y in range(self.height):
            yield self.get_row(y)

    def clear(self, value: float = 0.0) -> None:
        """Set every cell to value."""
        if self._values is not None:
            self._values.fill(value)

    def copy(self) -> "NoiseMap":
        other = NoiseMap(border_value=self.border_value)
        if self._values is not None:
            other._values = self._values.copy()
            other.width = self.width
            other.height = self.height
        return other

    def __getitem__(self, key) -> float:
        x, y = key
        return self.get_value(x, y)

    def __setitem__(self, key, value: float) -> None:
        x, y = key
        self.set_value(x, y, value)

    def __repr__(self) -> str:
        return f"NoiseMap(width={self.width}, height={self.height})"


class NoiseCube:
    """
    3D grid of float32 noise values.

    The cell at (x, y, z) lives at ``values[z, y, x]``, so each depth slice
    is a contiguous ``(height, width)`` block.
    """

    def __init__(self, width: int = 0, height: int = 0, depth: int = 0, border_value: float = 0.0):
        self.border_value = border_value
        self._values: Optional[np.ndarray] = None
        self.width = 0
        self.height = 0
        self.depth = 0
        self.set_size(width, height, depth)

    def set_size(self, width: int, height: int, depth: int) -> None:
        """
        Allocate a zero-filled cube; any zero dimension leaves it empty.

        Raises:
            ConfigurationError: If any dimension is negative
        """
        if width < 0 or height < 0 or depth < 0:
            raise ConfigurationError(
                f"Cube size cannot be negative, got {width}x{height}x{depth}"
            )
        if width == 0 or height == 0 or depth == 0:
            self._values = None
            self.width = self.height = self.depth = 0
        else:
            self._values = np.zeros((depth, height, width), dtype=np.float32)
            self.width = width
            self.height = height
            self.depth = depth

    @property
    def is_empty(self) -> bool:
        return self._values is None

    @property
    def values(self) -> np.ndarray:
        if self._values is None:
            return np.zeros((0, 0, 0), dtype=np.float32)
        return self._values

    def _in_range(self, x: int, y: int, z: int) -> bool:
        return (
            self._values is not None
            and 0 <= x < self.width
            and 0 <= y < self.height
            and 0 <= z < self.depth
        )

    def get_value(self, x: int, y: int, z: int) -> float:
        if self._in_range(x, y, z):
            return float(self._values[z, y, x])
        return self.border_value

    def set_value(self, x: int, y: int, z: int, value: float) -> None:
        if self._in_range(x, y, z):
            self._values[z, y, x] = value

    def set_slice(self, z: int, slice_values) -> None:
        """Write a complete ``(height, width)`` depth slice."""
        if self._values is None or not 0 <= z < self.depth:
            return
        self._values[z, :, :] = slice_values

    def clear(self, value: float = 0.0) -> None:
        if self._values is not None:
            self._values.fill(value)

    def copy(self) -> "NoiseCube":
        other = NoiseCube(border_value=self.border_value)
        if self._values is not None:
            other._values = self._values.copy()
            other.width = self.width
            other.height = self.height
            other.depth = self.depth
        return other

    def __getitem__(self, key) -> float:
        x, y, z = key
        return self.get_value(x, y, z)

    def __setitem__(self, key, value: float) -> None:
        x, y, z = key
        self.set_value(x, y, z, value)

    def __repr__(self) -> str:
        return f"NoiseCube(width={self.width}, height={self.height}, depth={self.depth})"
