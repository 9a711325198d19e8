"""
Tests for the kind registry and graph save/restore.
"""

import json

import pytest

from noisegraph.errors import (
    ConfigurationError,
    CycleError,
    DanglingEdgeError,
    DocumentFormatError,
    GraphIOError,
    UnknownKindError,
)
from noisegraph.grammar import ModuleRegistry, ParameterSpec, default_registry
from noisegraph.modules import (
    BUILTIN_MODULES,
    Add,
    Constant,
    Curve,
    Perlin,
    RotatePoint,
    Select,
    Terrace,
)
from noisegraph.noise import NoiseQuality
from noisegraph.serialization import EdgeRecord, GraphDocument, GraphSerializer, NodeRecord

SAMPLE_POINTS = [(0.0, 0.0, 0.0), (0.31, -1.7, 2.9), (10.5, 3.25, -7.125)]


@pytest.fixture
def serializer():
    return GraphSerializer()


# =============================================================================
# Registry and parameter specs
# =============================================================================

def test_default_registry_has_every_builtin():
    registry = default_registry()
    assert registry.list_modules() == [cls.__name__ for cls in BUILTIN_MODULES]
    assert registry.kind_of(Perlin()) == "Perlin"
    assert isinstance(registry.create("Select"), Select)


def test_registry_rejects_duplicates():
    registry = default_registry()
    with pytest.raises(ConfigurationError):
        registry.register("Perlin", Perlin)
    with pytest.raises(ConfigurationError):
        registry.register("OtherPerlin", Perlin)


def test_registry_factory_needs_module_type():
    registry = ModuleRegistry()
    with pytest.raises(ConfigurationError):
        registry.register("Five", lambda: Constant(value=5.0))


def test_registry_unknown_kind():
    registry = ModuleRegistry()
    with pytest.raises(UnknownKindError):
        registry.create("Nope")
    with pytest.raises(UnknownKindError):
        registry.kind_of(Constant())


def test_parameter_spec_rejects_unknown_types():
    with pytest.raises(ConfigurationError):
        ParameterSpec({"size": "complex"})


def test_parameter_spec_codecs():
    spec = ParameterSpec({"frequency": "float", "quality": "quality", "seed": "int"})
    encoded = spec.encode(Perlin(frequency=0.1, quality=NoiseQuality.BEST, seed=-4))
    assert encoded == {"frequency": "0.1", "quality": "BEST", "seed": "-4"}
    assert spec.decode(encoded) == {"frequency": 0.1, "quality": NoiseQuality.BEST, "seed": -4}

    with pytest.raises(DocumentFormatError):
        spec.decode({"frequency": "fast"})
    with pytest.raises(DocumentFormatError):
        spec.decode({"octaves": "3"})


# =============================================================================
# Round trips
# =============================================================================

def test_round_trip_simple_sum(serializer, simple_sum):
    restored = serializer.restore(serializer.save(simple_sum))
    assert isinstance(restored, Add)
    assert restored.get_value(0, 0, 0) == simple_sum.get_value(0, 0, 0) == 3.0
    assert restored.source0.get_value(0, 0, 0) == 1.0
    assert restored.source1.get_value(0, 0, 0) == 2.0


def test_round_trip_preserves_sharing(serializer, simple_sum):
    root = Add(source0=simple_sum, source1=simple_sum)
    document = serializer.save(root)
    assert len(document.nodes) == 4

    restored = serializer.restore(document)
    assert restored.source0 is restored.source1
    assert restored.get_value(0, 0, 0) == root.get_value(0, 0, 0) == 6.0


def test_ids_are_preorder(serializer, simple_sum):
    document = serializer.save(simple_sum)
    assert document.root == "n0"
    assert [(n.id, n.kind) for n in document.nodes] == [
        ("n0", "Add"), ("n1", "Constant"), ("n2", "Constant"),
    ]
    assert [(e.consumer, e.source, e.slot) for e in document.edges] == [
        ("n0", "n1", 0), ("n0", "n2", 1),
    ]


def test_round_trip_terrain_graph(serializer, terrain_graph):
    restored = serializer.loads(serializer.dumps(terrain_graph))
    for point in SAMPLE_POINTS:
        assert restored.get_value(*point) == terrain_graph.get_value(*point)


def test_round_trip_control_points(serializer):
    curve = Curve(control_points=[(-1.0, 0.5), (0.0, -0.25), (0.5, 0.125), (1.0, 1.0)])
    curve.source0 = Perlin(seed=8)
    terrace = Terrace(source0=curve, invert_terraces=True)
    terrace.make_control_points(4)

    restored = serializer.restore(serializer.save(terrace))
    assert restored.invert_terraces is True
    assert restored.control_points == terrace.control_points
    assert restored.source0.control_points == curve.control_points
    for point in SAMPLE_POINTS:
        assert restored.get_value(*point) == terrace.get_value(*point)


def test_round_trip_every_builtin_kind(serializer):
    for cls in BUILTIN_MODULES:
        node = cls()
        for slot in range(node.arity()):
            node.set_source(slot, Constant(value=0.25 * (slot + 1)))
        if isinstance(node, Curve):
            node.control_points = [(-1.0, -1.0), (0.0, 0.5), (0.5, 0.0), (1.0, 1.0)]
        if isinstance(node, Terrace):
            node.make_control_points(3)

        restored = serializer.loads(serializer.dumps(node))
        assert type(restored) is cls
        assert serializer.save(restored) == serializer.save(node)
        assert restored.get_value(0.3, 0.6, 0.9) == node.get_value(0.3, 0.6, 0.9)


def test_unbound_slots_round_trip(serializer):
    restored = serializer.restore(serializer.save(Add(source1=Constant(value=2.0))))
    assert restored.source0 is None
    assert restored.source1.value == 2.0


def test_custom_kind_round_trip(probe_registry, x_echo):
    serializer = GraphSerializer(probe_registry)
    root = Add(source0=x_echo, source1=Constant(value=1.0))
    restored = serializer.loads(serializer.dumps(root))
    assert restored.get_value(4.0, 0.0, 0.0) == 5.0


def test_custom_kind_needs_registration(serializer, x_echo):
    with pytest.raises(UnknownKindError):
        serializer.save(Add(source0=x_echo, source1=x_echo))


# =============================================================================
# Rejections
# =============================================================================

def test_self_loop_is_rejected_before_writing(serializer, tmp_path):
    add = Add(source1=Constant(value=1.0))
    add.source0 = add
    with pytest.raises(CycleError):
        serializer.save(add)

    path = tmp_path / "loop.json"
    with pytest.raises(CycleError):
        serializer.save_file(add, str(path))
    assert not path.exists()


def test_indirect_cycle_is_rejected(serializer):
    a = Add()
    b = Add(source0=a, source1=Constant(value=1.0))
    a.source0 = b
    a.source1 = Constant(value=2.0)
    with pytest.raises(CycleError):
        serializer.save(a)


def test_restore_rejects_cycles(serializer):
    document = GraphDocument(
        root="n0",
        nodes=[NodeRecord(id="n0", kind="Abs")],
        edges=[EdgeRecord(consumer="n0", source="n0", slot=0)],
    )
    with pytest.raises(CycleError):
        serializer.restore(document)


def test_restore_rejects_unknown_kind(serializer):
    document = GraphDocument(root="n0", nodes=[NodeRecord(id="n0", kind="Mystery")])
    with pytest.raises(UnknownKindError):
        serializer.restore(document)


def test_restore_rejects_dangling_edges(serializer):
    document = GraphDocument(
        root="n0",
        nodes=[NodeRecord(id="n0", kind="Abs")],
        edges=[EdgeRecord(consumer="n0", source="n9", slot=0)],
    )
    with pytest.raises(DanglingEdgeError) as excinfo:
        serializer.restore(document)
    assert excinfo.value.node_id == "n9"

    with pytest.raises(DanglingEdgeError):
        serializer.restore(GraphDocument(root="n1", nodes=[NodeRecord(id="n0", kind="Constant")]))


def test_restore_rejects_malformed_documents(serializer):
    constant = NodeRecord(id="n1", kind="Constant")
    bad_slot = GraphDocument(
        root="n0",
        nodes=[NodeRecord(id="n0", kind="Abs"), constant],
        edges=[EdgeRecord(consumer="n0", source="n1", slot=1)],
    )
    with pytest.raises(DocumentFormatError):
        serializer.restore(bad_slot)

    duplicate_ids = GraphDocument(root="n1", nodes=[constant, constant])
    with pytest.raises(DocumentFormatError):
        serializer.restore(duplicate_ids)

    bad_params = GraphDocument(
        root="n0",
        nodes=[NodeRecord(id="n0", kind="Clamp", params={"lower_bound": "2.0", "upper_bound": "1.0"})],
    )
    with pytest.raises(DocumentFormatError):
        serializer.restore(bad_params)

    infinite_angle = serializer.save(RotatePoint(source0=Constant()))
    infinite_angle.nodes[0].params["x_angle"] = "inf"
    with pytest.raises(DocumentFormatError):
        serializer.restore(infinite_angle)

    with pytest.raises(DocumentFormatError):
        serializer.loads("{not json")
    with pytest.raises(DocumentFormatError):
        serializer.loads(json.dumps({"root": "n0", "nodes": [], "extra": 1}))
    with pytest.raises(DocumentFormatError):
        serializer.loads(json.dumps({"version": "99", "root": "n0", "nodes": []}))


# =============================================================================
# Files
# =============================================================================

def test_file_round_trip(serializer, terrain_graph, tmp_path):
    path = tmp_path / "terrain.json"
    serializer.save_file(terrain_graph, str(path))
    assert json.loads(path.read_text())["root"] == "n0"

    restored = serializer.restore_file(str(path))
    assert restored.get_value(0.5, 0.0, 0.5) == terrain_graph.get_value(0.5, 0.0, 0.5)


def test_file_errors_are_wrapped(serializer, simple_sum, tmp_path):
    missing = tmp_path / "missing.json"
    with pytest.raises(GraphIOError) as excinfo:
        serializer.restore_file(str(missing))
    assert excinfo.value.operation == "read"
    assert excinfo.value.path == str(missing)
    assert isinstance(excinfo.value.__cause__, OSError)

    unwritable = tmp_path / "no_such_dir" / "graph.json"
    with pytest.raises(GraphIOError) as excinfo:
        serializer.save_file(simple_sum, str(unwritable))
    assert excinfo.value.operation == "write"
