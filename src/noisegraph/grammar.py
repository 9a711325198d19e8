"""
Module registry and parameter specification for graph serialization.

This module defines:
- ParameterSpec: Typed parameters of a node kind and their text codecs
- ModuleRegistry: Registration and lookup of node kinds by name
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import ConfigurationError, DocumentFormatError, UnknownKindError
from .modules import BUILTIN_MODULES
from .modules.base import Module
from .noise import NoiseQuality

logger = logging.getLogger(__name__)


def _encode_float(value: Any) -> str:
    return repr(float(value))


def _encode_int(value: Any) -> str:
    return str(int(value))


def _encode_bool(value: Any) -> str:
    return "true" if value else "false"


def _decode_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"expected 'true' or 'false', got {text!r}")


def _encode_quality(value: Any) -> str:
    return NoiseQuality(value).name


def _decode_quality(text: str) -> NoiseQuality:
    try:
        return NoiseQuality[text.strip().upper()]
    except KeyError:
        raise ValueError(f"unknown noise quality {text!r}") from None


def _encode_float_list(values: Any) -> str:
    return ",".join(repr(float(v)) for v in values)


def _decode_float_list(text: str) -> List[float]:
    if not text.strip():
        return []
    return [float(part) for part in text.split(",")]


def _encode_point_list(points: Any) -> str:
    return ";".join(f"{float(i)!r}:{float(o)!r}" for i, o in points)


def _decode_point_list(text: str) -> List[Tuple[float, float]]:
    if not text.strip():
        return []
    points = []
    for part in text.split(";"):
        input_text, output_text = part.split(":")
        points.append((float(input_text), float(output_text)))
    return points


# Parameter type name -> (encode, decode)
PARAMETER_CODECS: Dict[str, Tuple[Callable[[Any], str], Callable[[str], Any]]] = {
    "float": (_encode_float, float),
    "int": (_encode_int, int),
    "bool": (_encode_bool, _decode_bool),
    "quality": (_encode_quality, _decode_quality),
    "float_list": (_encode_float_list, _decode_float_list),
    "point_list": (_encode_point_list, _decode_point_list),
}


class ParameterSpec:
    """
    Specification of a node kind's serializable parameters.

    Each parameter has a type name (one of PARAMETER_CODECS) that decides
    how its value is written as text and parsed back.
    """

    def __init__(self, params: Dict[str, str]):
        """
        Initialize parameter specification.

        Args:
            params: Dict mapping param_name -> type name

        Raises:
            ConfigurationError: If a type name is not a known parameter type
        """
        for name, type_name in params.items():
            if type_name not in PARAMETER_CODECS:
                raise ConfigurationError(
                    f"Parameter {name!r} has unknown type {type_name!r}; "
                    f"known types are {sorted(PARAMETER_CODECS)}"
                )
        self.params = dict(params)

    def encode(self, module: Module) -> Dict[str, str]:
        """Read every parameter off a module and return its text form."""
        result = {}
        for name, type_name in self.params.items():
            encode, _ = PARAMETER_CODECS[type_name]
            result[name] = encode(getattr(module, name))
        return result

    def decode(self, texts: Dict[str, str]) -> Dict[str, Any]:
        """
        Parse text parameter values back into typed values.

        Raises:
            DocumentFormatError: If a name is not a parameter or its text does not parse
        """
        result = {}
        for name, text in texts.items():
            if name not in self.params:
                raise DocumentFormatError(f"Unknown parameter {name!r}")
            _, decode = PARAMETER_CODECS[self.params[name]]
            try:
                result[name] = decode(text)
            except (TypeError, ValueError) as e:
                raise DocumentFormatError(
                    f"Cannot parse parameter {name!r} as {self.params[name]}: {e}"
                ) from e
        return result


class ModuleRegistry:
    """
    Registry of node kinds.

    Maps each kind name to a factory (usually the Module subclass itself),
    the class its instances have, and its ParameterSpec.
    """

    def __init__(self):
        self.factories: Dict[str, Callable[[], Module]] = {}
        self.param_specs: Dict[str, ParameterSpec] = {}
        self._type_to_name: Dict[type, str] = {}

    def register(
        self,
        name: str,
        factory: Callable[[], Module],
        param_spec: Optional[ParameterSpec] = None,
        module_type: Optional[type] = None
    ) -> None:
        """
        Register a node kind.

        Args:
            name: Kind name written to documents
            factory: Zero-argument callable returning a new node
            param_spec: Parameters to serialize; defaults to the class's ``parameters``
            module_type: Class of the nodes the factory builds; defaults to factory
                when it is a class

        Raises:
            ConfigurationError: If the name or class is already registered
        """
        if module_type is None:
            if not isinstance(factory, type):
                raise ConfigurationError(
                    f"Kind {name!r} is registered with a factory function; pass module_type"
                )
            module_type = factory
        if not issubclass(module_type, Module):
            raise ConfigurationError(f"Kind {name!r} does not produce Module instances")
        if name in self.factories:
            raise ConfigurationError(f"Kind {name!r} is already registered")
        if module_type in self._type_to_name:
            raise ConfigurationError(
                f"{module_type.__name__} is already registered as {self._type_to_name[module_type]!r}"
            )
        if param_spec is None:
            param_spec = ParameterSpec(module_type.parameters)

        self.factories[name] = factory
        self.param_specs[name] = param_spec
        self._type_to_name[module_type] = name
        logger.debug(f"Registered kind {name!r} ({module_type.__name__})")

    def kind_of(self, module: Module) -> str:
        """
        Kind name of a node instance, by exact class.

        Raises:
            UnknownKindError: If the node's class is not registered
        """
        try:
            return self._type_to_name[type(module)]
        except KeyError:
            raise UnknownKindError(type(module).__name__) from None

    def create(self, name: str) -> Module:
        """
        Construct a new node of the named kind.

        Raises:
            UnknownKindError: If the kind is not registered
        """
        if name not in self.factories:
            raise UnknownKindError(name)
        return self.factories[name]()

    def get_parameter_spec(self, name: str) -> ParameterSpec:
        """Get parameter specification by kind name."""
        if name not in self.param_specs:
            raise UnknownKindError(name)
        return self.param_specs[name]

    def list_modules(self) -> List[str]:
        """List all registered kind names in registration order."""
        return list(self.factories)


def default_registry() -> ModuleRegistry:
    """
    Create a registry holding every built-in node kind under its class name.

    Each call returns a new registry, so registering custom kinds on it does
    not affect other callers.
    """
    registry = ModuleRegistry()
    for module_class in BUILTIN_MODULES:
        registry.register(module_class.__name__, module_class)
    return registry
