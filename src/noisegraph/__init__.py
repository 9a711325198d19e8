"""
noisegraph: coherent noise from composable module graphs.

- noise: the coherent-noise kernel
- modules: node kinds (generators, combiners, modifiers, transformers, cache)
- models: plane, sphere, cylinder and line coordinate mappings
- maps / builders: dense grids and the builders that fill them
- grammar / serialization: kind registry and graph save/restore
"""

from .config import BuildSettings
from .errors import (
    BuildCancelledError,
    ConfigurationError,
    CycleError,
    DanglingEdgeError,
    DocumentFormatError,
    GraphError,
    GraphIOError,
    MissingSourceError,
    NoiseGraphError,
    SlotOutOfRangeError,
    UnknownKindError,
)
from .grammar import ModuleRegistry, ParameterSpec, default_registry
from .maps import NoiseCube, NoiseMap
from .noise import NoiseQuality
from .serialization import GraphDocument, GraphSerializer

__version__ = "0.1.0"

__all__ = [
    "BuildSettings",
    "BuildCancelledError",
    "ConfigurationError",
    "CycleError",
    "DanglingEdgeError",
    "DocumentFormatError",
    "GraphError",
    "GraphIOError",
    "MissingSourceError",
    "NoiseGraphError",
    "SlotOutOfRangeError",
    "UnknownKindError",
    "ModuleRegistry",
    "ParameterSpec",
    "default_registry",
    "NoiseCube",
    "NoiseMap",
    "NoiseQuality",
    "GraphDocument",
    "GraphSerializer",
]
