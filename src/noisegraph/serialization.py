"""
Graph serialization.

A module graph is flattened into a GraphDocument: one NodeRecord per
distinct node object (shared nodes appear once), one EdgeRecord per bound
source slot, and the id of the root. Restoring rebuilds the nodes through a
ModuleRegistry and rewires the edges, so shared nodes are shared again.

Cycles are rejected in both directions. Save and restore either return a
complete result or raise; nothing is written for a graph that fails.
"""

import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import (
    ConfigurationError,
    CycleError,
    DanglingEdgeError,
    DocumentFormatError,
    GraphIOError,
)
from .grammar import ModuleRegistry, default_registry
from .modules.base import Module

logger = logging.getLogger(__name__)

DOCUMENT_FORMAT = "noisegraph.graph"
DOCUMENT_VERSION = "1"

# DFS colors
_WHITE, _GRAY, _BLACK = 0, 1, 2
_DONE = object()


class NodeRecord(BaseModel):
    """One node: its id, kind name and parameters in text form."""
    id: str
    kind: str
    params: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class EdgeRecord(BaseModel):
    """Binding of source node ``source`` to slot ``slot`` of node ``consumer``."""
    consumer: str
    source: str
    slot: int = Field(ge=0)

    model_config = ConfigDict(extra="forbid")


class GraphDocument(BaseModel):
    """Serialized module graph."""
    format: str = DOCUMENT_FORMAT
    version: str = DOCUMENT_VERSION
    root: str
    nodes: List[NodeRecord]
    edges: List[EdgeRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


def check_acyclic(root: Module) -> None:
    """
    Raise CycleError if any node reachable from root is its own ancestor.

    Uses an explicit stack, so deep chains do not hit the recursion limit.
    """
    colors: Dict[int, int] = {}
    stack = [(root, iter(root.sources))]
    colors[id(root)] = _GRAY

    while stack:
        node, children = stack[-1]
        child = next(children, _DONE)
        if child is _DONE:
            colors[id(node)] = _BLACK
            stack.pop()
            continue
        if child is None:
            continue

        color = colors.get(id(child), _WHITE)
        if color == _GRAY:
            raise CycleError(
                f"{child.kind_name} is reachable from itself",
                kind=child.kind_name,
            )
        if color == _WHITE:
            colors[id(child)] = _GRAY
            stack.append((child, iter(child.sources)))


class GraphSerializer:
    """
    Saves module graphs to GraphDocuments and restores them.

    Args:
        registry: Node kinds known to the serializer; defaults to the built-ins
    """

    def __init__(self, registry: Optional[ModuleRegistry] = None):
        self.registry = registry if registry is not None else default_registry()

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, root: Module) -> GraphDocument:
        """
        Flatten the graph reachable from root.

        Node ids are ``n0``, ``n1``, ... in depth-first pre-order, so the
        root is always ``n0``.

        Raises:
            CycleError: If a node is its own ancestor
            UnknownKindError: If a node's class is not registered
        """
        check_acyclic(root)

        ids: Dict[int, str] = {}
        nodes: List[NodeRecord] = []
        edges: List[EdgeRecord] = []

        # Acyclic from here on, so a visited check is all that is needed
        stack = [root]
        order: List[Module] = []
        while stack:
            node = stack.pop()
            if id(node) in ids:
                continue
            ids[id(node)] = f"n{len(order)}"
            order.append(node)
            # Push in reverse so slot 0 is visited first
            for source in reversed(node.sources):
                if source is not None and id(source) not in ids:
                    stack.append(source)

        for node in order:
            kind = self.registry.kind_of(node)
            spec = self.registry.get_parameter_spec(kind)
            nodes.append(NodeRecord(id=ids[id(node)], kind=kind, params=spec.encode(node)))
            for slot, source in enumerate(node.sources):
                if source is not None:
                    edges.append(
                        EdgeRecord(consumer=ids[id(node)], source=ids[id(source)], slot=slot)
                    )

        logger.debug(f"Saved graph: {len(nodes)} nodes, {len(edges)} edges")
        return GraphDocument(root=ids[id(root)], nodes=nodes, edges=edges)

    def dumps(self, root: Module, indent: Optional[int] = 2) -> str:
        """Save the graph and return the document as JSON text."""
        return self.save(root).model_dump_json(indent=indent)

    def save_file(self, root: Module, path: str) -> None:
        """
        Save the graph to a JSON file.

        The document is fully built before the file is opened, so a graph
        that cannot be saved leaves no file behind.

        Raises:
            GraphIOError: If the file cannot be written
        """
        text = self.dumps(root)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise GraphIOError("write", str(path), str(e)) from e
        logger.info(f"Wrote graph document to {path}")

    # ------------------------------------------------------------------
    # Restore
    # ------------------------------------------------------------------

    def restore(self, document: GraphDocument) -> Module:
        """
        Rebuild a graph from a document and return its root.

        Raises:
            DocumentFormatError: Unsupported version, duplicate ids, bad
                parameters or slot indices
            UnknownKindError: If a record names an unregistered kind
            DanglingEdgeError: If the root or an edge refers to a missing id
            CycleError: If the edges form a cycle
        """
        if document.format != DOCUMENT_FORMAT or document.version != DOCUMENT_VERSION:
            raise DocumentFormatError(
                f"Unsupported document {document.format!r} version {document.version!r}"
            )

        modules: Dict[str, Module] = {}
        for record in document.nodes:
            if record.id in modules:
                raise DocumentFormatError(f"Duplicate node id {record.id!r}")
            modules[record.id] = self._create_node(record)

        if document.root not in modules:
            raise DanglingEdgeError(
                f"Root id {document.root!r} is not a node in the document",
                node_id=document.root,
            )

        bound = set()
        for edge in document.edges:
            for node_id in (edge.consumer, edge.source):
                if node_id not in modules:
                    raise DanglingEdgeError(
                        f"Edge {edge.consumer}[{edge.slot}] <- {edge.source} refers to "
                        f"missing node {node_id!r}",
                        node_id=node_id,
                    )
            consumer = modules[edge.consumer]
            if edge.slot >= consumer.arity():
                raise DocumentFormatError(
                    f"Slot {edge.slot} is out of range for {edge.consumer} "
                    f"({consumer.kind_name} has {consumer.arity()} slot(s))"
                )
            if (edge.consumer, edge.slot) in bound:
                raise DocumentFormatError(
                    f"Slot {edge.slot} of {edge.consumer} is bound more than once"
                )
            bound.add((edge.consumer, edge.slot))
            consumer.set_source(edge.slot, modules[edge.source])

        for module in modules.values():
            check_acyclic(module)

        logger.debug(
            f"Restored graph: {len(document.nodes)} nodes, {len(document.edges)} edges"
        )
        return modules[document.root]

    def _create_node(self, record: NodeRecord) -> Module:
        spec = self.registry.get_parameter_spec(record.kind)
        module = self.registry.create(record.kind)
        params = spec.decode(record.params)
        try:
            module.configure(**params)
        except (ConfigurationError, TypeError, ValueError) as e:
            raise DocumentFormatError(
                f"Node {record.id!r} ({record.kind}) has invalid parameters: {e}"
            ) from e
        return module

    def loads(self, text: str) -> Module:
        """
        Restore a graph from JSON text.

        Raises:
            DocumentFormatError: If the text is not a valid graph document
        """
        try:
            document = GraphDocument.model_validate_json(text)
        except ValidationError as e:
            raise DocumentFormatError(f"Invalid graph document: {e}") from e
        return self.restore(document)

    def restore_file(self, path: str) -> Module:
        """
        Restore a graph from a JSON file.

        Raises:
            GraphIOError: If the file cannot be read
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise GraphIOError("read", str(path), str(e)) from e
        logger.info(f"Read graph document from {path}")
        return self.loads(text)
