"""Tests for handling of cached derived quantities."""

import torch
from tensordict import TensorDict

from reuleauxmesh import mesh_reuleaux_tetrahedron
from reuleauxmesh.utilities import is_cached_key, strip_cached


def test_is_cached_key():
    assert is_cached_key("_normals")
    assert not is_cached_key("face_index")


def test_strip_cached():
    data = TensorDict(
        {"_areas": torch.ones(3), "label": torch.arange(3)},
        batch_size=[3],
    )
    stripped = strip_cached(data)
    assert set(stripped.keys()) == {"label"}
    # The input keeps its cache
    assert "_areas" in data.keys()


def test_transformed_mesh_recomputes():
    mesh = mesh_reuleaux_tetrahedron(n_steps=2)
    areas = mesh.cell_areas.clone()
    scaled = mesh.scale(2.0)
    assert "_areas" not in scaled.cell_data.keys()
    torch.testing.assert_close(scaled.cell_areas, 4 * areas)
