"""
Noise modules: the nodes of an evaluation graph.

- generators: Constant, Checkerboard, Spheres, Cylinders, Perlin, Billow,
  RidgedMulti, Voronoi, White, Simplex
- combiners: Add, Multiply, Max, Min, Power, Blend, Select, Displace
- modifiers: Abs, Invert, Clamp, ScaleBias, Exponent, Curve, Terrace, Discrete
- transformers: ScalePoint, TranslatePoint, RotatePoint, Turbulence
- cache: Cache
"""

from .base import Module, SourceSlot
from .cache import Cache
from .combiners import Add, Blend, Displace, Max, Min, Multiply, Power, Select
from .generators import (
    Billow,
    Checkerboard,
    Constant,
    Cylinders,
    Perlin,
    RidgedMulti,
    Simplex,
    Spheres,
    Voronoi,
    White,
)
from .modifiers import Abs, Clamp, Curve, Discrete, Exponent, Invert, ScaleBias, Terrace
from .transformers import RotatePoint, ScalePoint, TranslatePoint, Turbulence

# Every built-in kind, in registration order
BUILTIN_MODULES = (
    Constant, Checkerboard, Spheres, Cylinders,
    Perlin, Billow, RidgedMulti, Voronoi, White, Simplex,
    Add, Multiply, Max, Min, Power, Blend, Select, Displace,
    Abs, Invert, Clamp, ScaleBias, Exponent, Curve, Terrace, Discrete,
    ScalePoint, TranslatePoint, RotatePoint, Turbulence,
    Cache,
)

__all__ = [
    "Module", "SourceSlot", "BUILTIN_MODULES",
    "Constant", "Checkerboard", "Spheres", "Cylinders",
    "Perlin", "Billow", "RidgedMulti", "Voronoi", "White", "Simplex",
    "Add", "Multiply", "Max", "Min", "Power", "Blend", "Select", "Displace",
    "Abs", "Invert", "Clamp", "ScaleBias", "Exponent", "Curve", "Terrace", "Discrete",
    "ScalePoint", "TranslatePoint", "RotatePoint", "Turbulence",
    "Cache",
]
