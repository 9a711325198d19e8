"""
Tests for the coordinate models.
"""

import pytest

from noisegraph.errors import MissingSourceError
from noisegraph.models import Cylinder, Line, Plane, Sphere


def test_plane(x_echo, y_echo, z_echo):
    assert Plane(x_echo).get_value(3.0, 4.0) == 3.0
    assert Plane(y_echo).get_value(3.0, 4.0) == 0.0
    assert Plane(z_echo).get_value(3.0, 4.0) == 4.0


def test_sphere(y_echo, x_echo):
    assert Sphere(y_echo).get_value(90.0, 0.0) == pytest.approx(1.0)
    assert Sphere(x_echo).get_value(0.0, 0.0) == pytest.approx(1.0)
    assert Sphere(x_echo).get_value(0.0, 180.0) == pytest.approx(-1.0)


def test_cylinder(x_echo, y_echo, z_echo):
    assert Cylinder(x_echo).get_value(0.0, 5.0) == pytest.approx(1.0)
    assert Cylinder(y_echo).get_value(0.0, 5.0) == 5.0
    assert Cylinder(z_echo).get_value(90.0, 5.0) == pytest.approx(1.0)


def test_line(x_echo):
    line = Line(x_echo)
    line.set_start_point(0.0, 0.0, 0.0)
    line.set_end_point(2.0, 0.0, 0.0)
    assert line.get_value(0.5) == 1.0
    assert line.get_value(1.0) == 2.0


def test_line_attenuation(x_echo):
    line = Line(x_echo, attenuate=True)
    line.set_start_point(0.0, 0.0, 0.0)
    line.set_end_point(2.0, 0.0, 0.0)
    assert line.get_value(0.0) == 0.0
    assert line.get_value(1.0) == 0.0
    assert line.get_value(0.5) == pytest.approx(1.0)
    assert line.get_value(0.25) == pytest.approx(0.75 * 0.5)


def test_unbound_model_raises():
    with pytest.raises(MissingSourceError):
        Plane().get_value(0.0, 0.0)
    with pytest.raises(MissingSourceError):
        Line().get_value(0.5)
