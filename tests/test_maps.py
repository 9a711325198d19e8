"""
Tests for NoiseMap and NoiseCube.
"""

import numpy as np
import pytest

from noisegraph.errors import ConfigurationError
from noisegraph.maps import NoiseCube, NoiseMap


def test_noise_map_storage():
    noise_map = NoiseMap(4, 3)
    assert noise_map.values.shape == (3, 4)
    assert noise_map.values.dtype == np.float32
    assert not noise_map.is_empty

    noise_map[3, 2] = 0.5
    assert noise_map.get_value(3, 2) == 0.5
    assert noise_map.values[2, 3] == 0.5


def test_noise_map_border_value():
    noise_map = NoiseMap(2, 2, border_value=-9.0)
    assert noise_map.get_value(2, 0) == -9.0
    assert noise_map.get_value(0, -1) == -9.0

    noise_map.set_value(5, 5, 1.0)
    assert not noise_map.values.any()


def test_noise_map_resize_discards_contents():
    noise_map = NoiseMap(2, 2)
    noise_map.clear(1.0)
    noise_map.set_size(3, 2)
    assert noise_map.values.shape == (2, 3)
    assert not noise_map.values.any()


def test_noise_map_empty_and_negative_sizes():
    noise_map = NoiseMap(0, 5)
    assert noise_map.is_empty
    assert noise_map.width == 0 and noise_map.height == 0
    assert noise_map.get_value(0, 0) == noise_map.border_value
    with pytest.raises(ConfigurationError):
        NoiseMap(-1, 2)


def test_noise_map_rows_are_read_only():
    noise_map = NoiseMap(3, 2)
    noise_map.set_row(1, [1.0, 2.0, 3.0])
    rows = list(noise_map.iter_rows())
    assert len(rows) == 2
    assert list(rows[1]) == [1.0, 2.0, 3.0]
    with pytest.raises(ValueError):
        rows[1][0] = 5.0
    with pytest.raises(IndexError):
        noise_map.get_row(2)


def test_noise_map_copy_is_independent():
    noise_map = NoiseMap(2, 2, border_value=3.0)
    noise_map[0, 0] = 1.0
    other = noise_map.copy()
    other[0, 0] = 2.0
    assert noise_map[0, 0] == 1.0
    assert other.border_value == 3.0


def test_noise_cube():
    cube = NoiseCube(2, 3, 4, border_value=7.0)
    assert cube.values.shape == (4, 3, 2)
    cube[1, 2, 3] = 0.25
    assert cube.get_value(1, 2, 3) == 0.25
    assert cube.get_value(2, 0, 0) == 7.0

    cube.set_value(0, 0, 9, 1.0)
    assert cube.values.sum() == pytest.approx(0.25)

    copy = cube.copy()
    cube.clear()
    assert copy[1, 2, 3] == 0.25
    assert cube[1, 2, 3] == 0.0


def test_noise_cube_empty_and_negative_sizes():
    assert NoiseCube(1, 0, 1).is_empty
    with pytest.raises(ConfigurationError):
        NoiseCube(1, 1, -1)
