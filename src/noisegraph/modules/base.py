"""
Base class for all noise modules and the source-slot descriptor.

A module is a node in the evaluation graph: a pure function of (x, y, z)
and of the modules bound to its source slots. Modules may be shared by
several parents; identity, not value equality, decides whether two
references are the same node.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from ..errors import MissingSourceError, SlotOutOfRangeError


class SourceSlot:
    """
    Exposes one source slot under a readable name (``source0``, ``control``...).

    Reading an unbound slot returns None; evaluation is where a missing
    source becomes an error.
    """

    def __init__(self, index: int):
        self.index = index
        self.name = None

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance._sources[self.index]

    def __set__(self, instance, value):
        instance.set_source(self.index, value)


class Module(ABC):
    """
    Base class for all modules.

    Subclasses declare ``source_count`` (0-4) and a ``parameters`` mapping of
    public attribute name to parameter type; that mapping is what the
    serializer reads back and restores.
    """

    source_count: ClassVar[int] = 0
    parameters: ClassVar[Dict[str, str]] = {}

    def __init__(self, **kwargs: Any):
        self._sources: List[Optional["Module"]] = [None] * self.source_count
        if kwargs:
            self.configure(**kwargs)

    @property
    def kind_name(self) -> str:
        return type(self).__name__

    def arity(self) -> int:
        """Number of source slots this module has."""
        return self.source_count

    @property
    def sources(self) -> Tuple[Optional["Module"], ...]:
        """Snapshot of the source slots; unbound slots are None."""
        return tuple(self._sources)

    def get_source(self, index: int) -> "Module":
        """
        Return the module bound to a slot.

        Raises:
            SlotOutOfRangeError: If index is outside [0, arity)
            MissingSourceError: If the slot is unbound
        """
        self._check_index(index)
        source = self._sources[index]
        if source is None:
            raise MissingSourceError(self.kind_name, index)
        return source

    def set_source(self, index: int, module: Optional["Module"]) -> None:
        """Bind (or unbind, with None) a source slot."""
        self._check_index(index)
        if module is not None and not isinstance(module, Module):
            raise TypeError(
                f"Source of {self.kind_name} must be a Module, got {type(module).__name__}"
            )
        self._sources[index] = module

    def configure(self, **kwargs: Any) -> "Module":
        """
        Set public attributes by name.

        Subclasses with interdependent attributes (bounds, falloff) override
        this to apply them in a safe order.
        """
        for name, value in kwargs.items():
            if name.startswith("_") or not hasattr(self, name):
                raise TypeError(f"{self.kind_name} has no attribute {name!r}")
            setattr(self, name, value)
        return self

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.source_count:
            raise SlotOutOfRangeError(self.kind_name, index, self.source_count)

    def _source_value(self, index: int, x: float, y: float, z: float) -> float:
        source = self._sources[index]
        if source is None:
            raise MissingSourceError(self.kind_name, index)
        return source.get_value(x, y, z)

    @abstractmethod
    def get_value(self, x: float, y: float, z: float) -> float:
        """Evaluate this module at (x, y, z)."""
        pass

    def __repr__(self) -> str:
        params = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.parameters)
        return f"{self.kind_name}({params})"
