"""
Pytest configuration and shared fixtures for noisegraph tests.

This file provides:
1. Small probe modules (coordinate echo, call counter) used across tests
2. A registry that knows the probe kinds
3. A representative terrain graph

Usage:
    pytest tests/ -v
"""

import threading

import pytest

from noisegraph.grammar import default_registry
from noisegraph.modules import (
    Add,
    Billow,
    Cache,
    Clamp,
    Constant,
    Curve,
    Perlin,
    RidgedMulti,
    ScaleBias,
    Select,
    Terrace,
    Turbulence,
)
from noisegraph.modules.base import Module, SourceSlot


# =============================================================================
# PROBE MODULES
# =============================================================================

class AxisEcho(Module):
    """Outputs one of its input coordinates unchanged."""

    parameters = {"axis": "int"}

    def __init__(self, **kwargs):
        self.axis = 0
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        return (x, y, z)[self.axis]


class CountingConstant(Module):
    """Constant that counts how often it is evaluated."""

    parameters = {"value": "float"}

    def __init__(self, **kwargs):
        self.value = 0.0
        self.calls = 0
        self._lock = threading.Lock()
        super().__init__(**kwargs)

    def get_value(self, x, y, z):
        with self._lock:
            self.calls += 1
        return self.value


class PassThrough(Module):
    """Single-source module returning its source unchanged."""

    source_count = 1
    source0 = SourceSlot(0)

    def get_value(self, x, y, z):
        return self._source_value(0, x, y, z)


@pytest.fixture
def x_echo():
    return AxisEcho(axis=0)


@pytest.fixture
def y_echo():
    return AxisEcho(axis=1)


@pytest.fixture
def z_echo():
    return AxisEcho(axis=2)


@pytest.fixture
def counter():
    return CountingConstant(value=1.5)


@pytest.fixture
def probe_registry():
    """Built-in kinds plus the probe kinds."""
    registry = default_registry()
    registry.register("AxisEcho", AxisEcho)
    registry.register("CountingConstant", CountingConstant)
    registry.register("PassThrough", PassThrough)
    return registry


@pytest.fixture
def terrain_graph():
    """
    Mountains and plains selected by a low-frequency Perlin control,
    terraced and clamped, with a shared cached base.
    """
    base = Cache(source0=Perlin(frequency=0.5, octave_count=4, seed=3))

    mountains = ScaleBias(scale=0.75, bias=0.25)
    mountains.source0 = RidgedMulti(frequency=1.5, octave_count=5, seed=7)

    plains = ScaleBias(scale=0.125, bias=-0.5)
    plains.source0 = Billow(frequency=2.0, octave_count=3, seed=11)

    selector = Select(lower_bound=0.0, upper_bound=1000.0, edge_falloff=0.125)
    selector.source0 = plains
    selector.source1 = mountains
    selector.control = base

    curve = Curve(control_points=[(-2.0, -1.5), (-1.0, -1.0), (0.0, 0.1), (1.0, 0.9), (2.0, 1.0)])
    curve.source0 = Add(source0=selector, source1=base)

    terrace = Terrace(invert_terraces=True)
    terrace.make_control_points(5)
    terrace.source0 = Turbulence(source0=curve, frequency=2.0, power=0.125, roughness=2, seed=5)

    return Clamp(source0=terrace, lower_bound=-1.0, upper_bound=1.0)


@pytest.fixture
def simple_sum():
    return Add(source0=Constant(value=1.0), source1=Constant(value=2.0))
