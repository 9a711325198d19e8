"""
Map builders: fill noise maps and cubes by sampling a module graph.
"""

from .base import GridBuilder, NoiseCubeBuilder, NoiseMapBuilder
from .cube import LinearNoiseCubeBuilder
from .cylinder import CylinderNoiseMapBuilder
from .plane import PlaneNoiseMapBuilder
from .sphere import SphereNoiseMapBuilder

__all__ = [
    "GridBuilder",
    "NoiseMapBuilder",
    "NoiseCubeBuilder",
    "PlaneNoiseMapBuilder",
    "SphereNoiseMapBuilder",
    "CylinderNoiseMapBuilder",
    "LinearNoiseCubeBuilder",
]
