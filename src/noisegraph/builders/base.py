"""
Base classes for map builders.

A builder divides its bounds evenly across a destination grid and samples
its source once per cell. Work is partitioned into units (rows of a noise
map, depth slices of a noise cube) that share no state, so sequential and
parallel builds produce identical grids.

Parallel builds read the source graph from several threads at once. The
graph must not be rewired or reconfigured while a build is running.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional

import numpy as np
from tqdm import tqdm

from ..config import BuildSettings
from ..errors import BuildCancelledError, ConfigurationError, MissingSourceError
from ..maps import NoiseCube, NoiseMap
from ..modules.base import Module

logger = logging.getLogger(__name__)

UnitCallback = Callable[[int, np.ndarray], None]


def check_bounds(name: str, lower: float, upper: float) -> None:
    """Raise ConfigurationError unless lower < upper (NaN bounds never pass)."""
    if not lower < upper:
        raise ConfigurationError(
            f"Lower {name} bound {lower} must be less than upper bound {upper}"
        )


class GridBuilder(ABC):
    """
    Shared build loop for noise maps and noise cubes.

    Subclasses describe how many units the destination has, how to compute
    one unit and where to store it; this class runs the units sequentially
    or on a thread pool, reports progress and honours cancellation.
    """

    unit_name = "row"

    def __init__(self, source_module: Optional[Module] = None, settings: Optional[BuildSettings] = None):
        self.source_module = source_module
        self.settings = settings if settings is not None else BuildSettings()

    # Subclass hooks

    @abstractmethod
    def _validate(self) -> None:
        """Check bounds and sizes; raise ConfigurationError when unusable."""
        pass

    @abstractmethod
    def _allocate(self) -> None:
        """Resize the destination grid."""
        pass

    @abstractmethod
    def _unit_count(self) -> int:
        pass

    @abstractmethod
    def _compute_unit(self, index: int) -> np.ndarray:
        """Compute one unit of float32 values; must depend only on index."""
        pass

    @abstractmethod
    def _store_unit(self, index: int, values: np.ndarray) -> None:
        pass

    @abstractmethod
    def _describe(self) -> str:
        """One-line description of the build geometry for logging."""
        pass

    # Build loop

    def _prepare(self) -> int:
        if self.source_module is None:
            raise MissingSourceError(type(self).__name__, 0)
        self._validate()
        self._allocate()
        return self._unit_count()

    def _progress(self, total: int):
        return tqdm(
            total=total,
            desc=f"Building {type(self).__name__}",
            unit=self.unit_name,
            disable=not self.settings.show_progress,
        )

    def build(
        self,
        cancel_event: Optional[threading.Event] = None,
        callback: Optional[UnitCallback] = None
    ) -> None:
        """
        Fill the destination grid on the calling thread.

        Args:
            cancel_event: Checked before each unit; when set, the build stops
            callback: Called as ``callback(index, values)`` after each unit is stored

        Raises:
            ConfigurationError: If bounds or size are invalid (before any work)
            BuildCancelledError: If cancel_event was set before the last unit
        """
        total = self._prepare()
        logger.debug(f"Sequential build: {self._describe()}")
        start = time.perf_counter()

        with self._progress(total) as pbar:
            for index in range(total):
                if cancel_event is not None and cancel_event.is_set():
                    logger.warning(f"Build cancelled after {index} of {total} {self.unit_name}s")
                    raise BuildCancelledError(index, total)

                values = self._compute_unit(index)
                self._store_unit(index, values)
                if callback is not None:
                    callback(index, values)
                pbar.update(1)

        logger.info(f"Built {total} {self.unit_name}s in {time.perf_counter() - start:.3f}s")

    def build_parallel(self, cancel_event: Optional[threading.Event] = None) -> None:
        """
        Fill the destination grid using a fixed-size thread pool.

        Units are handed out in batches of ``settings.rows_per_batch``; the
        cancellation event is checked before each batch starts.

        Raises:
            ConfigurationError: If bounds or size are invalid (before any work)
            BuildCancelledError: If cancel_event stopped one or more batches
            Exception: The first error raised while computing a unit; batches not
                yet started are skipped
        """
        total = self._prepare()
        workers = self.settings.workers
        batch_size = self.settings.rows_per_batch
        logger.debug(
            f"Parallel build: {self._describe()}, workers={workers}, batch={batch_size}"
        )
        start = time.perf_counter()

        # Set by the first failing batch; later batches skip their work
        failed = threading.Event()

        def run_batch(first: int, last: int) -> int:
            if failed.is_set() or (cancel_event is not None and cancel_event.is_set()):
                return 0
            try:
                for index in range(first, last):
                    self._store_unit(index, self._compute_unit(index))
            except Exception:
                failed.set()
                raise
            return last - first

        completed = 0
        with self._progress(total) as pbar, ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(run_batch, first, min(first + batch_size, total))
                for first in range(0, total, batch_size)
            ]
            for future in as_completed(futures):
                try:
                    done = future.result()
                except Exception:
                    for pending in futures:
                        pending.cancel()
                    raise
                completed += done
                pbar.update(done)

        if completed < total:
            logger.warning(f"Build cancelled after {completed} of {total} {self.unit_name}s")
            raise BuildCancelledError(completed, total)

        logger.info(
            f"Built {total} {self.unit_name}s on {workers} workers in "
            f"{time.perf_counter() - start:.3f}s"
        )


class NoiseMapBuilder(GridBuilder):
    """Base class for builders that fill a 2D NoiseMap row by row."""

    unit_name = "row"

    def __init__(
        self,
        source_module: Optional[Module] = None,
        dest_noise_map: Optional[NoiseMap] = None,
        settings: Optional[BuildSettings] = None
    ):
        super().__init__(source_module, settings)
        self.dest_noise_map = dest_noise_map if dest_noise_map is not None else NoiseMap()
        self._dest_width = 0
        self._dest_height = 0

    @property
    def dest_width(self) -> int:
        return self._dest_width

    @property
    def dest_height(self) -> int:
        return self._dest_height

    def set_dest_size(self, width: int, height: int) -> None:
        """
        Set the size of the map to build.

        Raises:
            ConfigurationError: If width or height is not positive
        """
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"Destination size must be positive, got {width}x{height}"
            )
        self._dest_width = width
        self._dest_height = height

    def _validate(self) -> None:
        if self._dest_width <= 0 or self._dest_height <= 0:
            raise ConfigurationError("Destination size has not been set")
        self._check_bounds()

    @abstractmethod
    def _check_bounds(self) -> None:
        pass

    def _allocate(self) -> None:
        self.dest_noise_map.set_size(self._dest_width, self._dest_height)

    def _unit_count(self) -> int:
        return self._dest_height

    def _compute_unit(self, index: int) -> np.ndarray:
        return self._compute_row(index)

    @abstractmethod
    def _compute_row(self, row: int) -> np.ndarray:
        pass

    def _store_unit(self, index: int, values: np.ndarray) -> None:
        self.dest_noise_map.set_row(index, values)


class NoiseCubeBuilder(GridBuilder):
    """Base class for builders that fill a 3D NoiseCube one depth slice at a time."""

    unit_name = "slice"

    def __init__(
        self,
        source_module: Optional[Module] = None,
        dest_noise_cube: Optional[NoiseCube] = None,
        settings: Optional[BuildSettings] = None
    ):
        super().__init__(source_module, settings)
        self.dest_noise_cube = dest_noise_cube if dest_noise_cube is not None else NoiseCube()
        self._dest_width = 0
        self._dest_height = 0
        self._dest_depth = 0

    def set_dest_size(self, width: int, height: int, depth: int) -> None:
        """
        Set the size of the cube to build.

        Raises:
            ConfigurationError: If any dimension is not positive
        """
        if width <= 0 or height <= 0 or depth <= 0:
            raise ConfigurationError(
                f"Destination size must be positive, got {width}x{height}x{depth}"
            )
        self._dest_width = width
        self._dest_height = height
        self._dest_depth = depth

    def _validate(self) -> None:
        if self._dest_width <= 0 or self._dest_height <= 0 or self._dest_depth <= 0:
            raise ConfigurationError("Destination size has not been set")
        self._check_bounds()

    @abstractmethod
    def _check_bounds(self) -> None:
        pass

    def _allocate(self) -> None:
        self.dest_noise_cube.set_size(self._dest_width, self._dest_height, self._dest_depth)

    def _unit_count(self) -> int:
        return self._dest_depth

    def _store_unit(self, index: int, values: np.ndarray) -> None:
        self.dest_noise_cube.set_slice(index, values)


def axis_coordinates(lower: float, upper: float, count: int) -> List[float]:
    """
    Sample coordinates along one axis: ``lower + i * (upper - lower) / count``.

    Computed by index, not by accumulation, so every caller sees identical values.
    """
    delta = (upper - lower) / count
    return [lower + i * delta for i in range(count)]
