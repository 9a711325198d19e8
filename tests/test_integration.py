"""
End-to-end test: build a terrain map, save the graph, restore it and
rebuild, in both build modes.
"""

import logging

import numpy as np

from noisegraph import BuildSettings, GraphSerializer
from noisegraph.builders import PlaneNoiseMapBuilder, SphereNoiseMapBuilder


def build_plane(source, parallel):
    builder = PlaneNoiseMapBuilder(
        source,
        settings=BuildSettings(workers=4, rows_per_batch=3),
        enable_seamless=True,
    )
    builder.set_bounds(-1.0, 1.0, -1.0, 1.0)
    builder.set_dest_size(24, 16)
    if parallel:
        builder.build_parallel()
    else:
        builder.build()
    return builder.dest_noise_map


def test_terrain_survives_save_and_restore(terrain_graph, tmp_path, caplog):
    original = build_plane(terrain_graph, parallel=False)

    serializer = GraphSerializer()
    path = tmp_path / "terrain.json"
    with caplog.at_level(logging.INFO, logger="noisegraph"):
        serializer.save_file(terrain_graph, str(path))
        restored = serializer.restore_file(str(path))
    assert any("Wrote graph document" in message for message in caplog.messages)

    rebuilt = build_plane(restored, parallel=True)

    assert np.array_equal(original.values, rebuilt.values)
    assert np.all(original.values >= -1.0)
    assert np.all(original.values <= 1.0)


def test_planet_map_from_restored_graph(terrain_graph):
    serializer = GraphSerializer()
    restored = serializer.loads(serializer.dumps(terrain_graph))

    maps = []
    for source in (terrain_graph, restored):
        builder = SphereNoiseMapBuilder(source, settings=BuildSettings(workers=2))
        builder.set_bounds(-60.0, 60.0, -90.0, 90.0)
        builder.set_dest_size(12, 6)
        builder.build_parallel()
        maps.append(builder.dest_noise_map.values)

    assert np.array_equal(maps[0], maps[1])
