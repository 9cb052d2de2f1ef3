"""Tests for reuleauxmesh.io module."""

import numpy as np
import pyvista as pv
import pytest
import torch

from conftest import ATOL, assert_mesh_valid
from reuleauxmesh import mesh_reuleaux_tetrahedron
from reuleauxmesh.io import from_pyvista, save_mesh, to_pyvista
from reuleauxmesh.mesh import Mesh


@pytest.fixture
def mesh():
    return mesh_reuleaux_tetrahedron(n_steps=4)


class TestToPyvista:
    def test_points_and_faces(self, mesh):
        pv_mesh = to_pyvista(mesh)
        assert isinstance(pv_mesh, pv.PolyData)
        assert pv_mesh.n_points == mesh.n_points
        assert pv_mesh.n_cells == mesh.n_cells
        np.testing.assert_allclose(pv_mesh.points, mesh.points.numpy(), atol=ATOL)
        faces = np.asarray(pv_mesh.faces).reshape(-1, 4)
        assert np.all(faces[:, 0] == 3)
        np.testing.assert_array_equal(faces[:, 1:], mesh.cells.numpy())

    def test_copies_data_without_cache(self, mesh):
        _ = mesh.cell_normals
        pv_mesh = to_pyvista(mesh)
        assert "face_index" in pv_mesh.cell_data
        assert "_normals" not in pv_mesh.cell_data
        np.testing.assert_array_equal(
            pv_mesh.cell_data["face_index"], mesh.cell_data["face_index"].numpy()
        )

    def test_rejects_non_surface(self):
        edges = Mesh(
            points=torch.zeros(3, 3),
            cells=torch.tensor([[0, 1], [1, 2]]),
        )
        with pytest.raises(ValueError, match="triangle"):
            to_pyvista(edges)


class TestFromPyvista:
    def test_round_trip(self, mesh):
        back = from_pyvista(to_pyvista(mesh))
        assert_mesh_valid(back)
        torch.testing.assert_close(back.points, mesh.points, atol=ATOL, rtol=0)
        assert torch.equal(back.cells, mesh.cells)
        assert torch.equal(back.cell_data["face_index"], mesh.cell_data["face_index"])

    def test_triangulates_quads(self):
        plane = pv.Plane(i_resolution=2, j_resolution=3)
        mesh = from_pyvista(plane, dtype=torch.float32)
        assert mesh.points.dtype == torch.float32
        assert mesh.cells.shape == (2 * 2 * 3, 3)
        assert_mesh_valid(mesh)

    def test_extracts_surface_of_volume(self):
        grid = pv.ImageData(dimensions=(3, 3, 3))
        mesh = from_pyvista(grid)
        assert mesh.n_manifold_dims == 2
        assert mesh.n_spatial_dims == 3
        # Six faces of 2 x 2 quads, two triangles each
        assert mesh.n_cells == 6 * 4 * 2


class TestSaveMesh:
    @pytest.mark.parametrize("suffix", [".vtp", ".stl", ".ply"])
    def test_writes_file(self, mesh, tmp_path, suffix):
        path = save_mesh(mesh, tmp_path / f"reuleaux{suffix}")
        assert path.exists()
        assert path.stat().st_size > 0

    def test_vtp_keeps_data(self, mesh, tmp_path):
        path = mesh.save(tmp_path / "reuleaux.vtp")
        loaded = from_pyvista(pv.read(path))
        assert loaded.n_points == mesh.n_points
        assert torch.equal(loaded.cells, mesh.cells)
        assert torch.equal(
            loaded.cell_data["face_index"].long(), mesh.cell_data["face_index"]
        )

    def test_accepts_str_path(self, mesh, tmp_path):
        path = save_mesh(mesh, str(tmp_path / "reuleaux.stl"))
        assert path.suffix == ".stl"
        assert path.exists()
