"""Tests for carrying the curved base face onto the four faces."""

import math

import pytest
import torch

from conftest import ATOL, assert_mesh_valid
from reuleauxmesh.errors import DegenerateTopologyError
from reuleauxmesh.mesh import Mesh
from reuleauxmesh.replication import N_FACES, face_rotations, replicate_faces
from reuleauxmesh.reuleaux_tetrahedron import curved_base_face, reference_vertices
from reuleauxmesh.transformations import rotation_matrix_z


class TestFaceRotations:
    def test_are_rotations(self):
        for R in face_rotations():
            torch.testing.assert_close(
                R @ R.T, torch.eye(3, dtype=torch.float64), atol=ATOL, rtol=0
            )
            assert torch.linalg.det(R).item() == pytest.approx(1.0, abs=ATOL)

    def test_reference_vertices_follow_face_order(self, vertices):
        """The faces are centered on V4, V2, V3 and V1 in that order."""
        torch.testing.assert_close(
            reference_vertices(), vertices[[3, 1, 2, 0]], atol=ATOL, rtol=0
        )

    def test_tilt_permutes_vertices(self, vertices):
        """The last rotation maps face 3 (V1, V4, V2) onto face 4 (V2, V4, V3)."""
        tilt = face_rotations()[-1]
        mapped = vertices[[0, 3, 1]] @ tilt.T
        torch.testing.assert_close(mapped, vertices[[1, 3, 2]], atol=ATOL, rtol=0)


class TestReplicateFaces:
    """Tests for replicate_faces on a small curved face."""

    @pytest.fixture
    def face(self):
        return curved_base_face(n_steps=4)

    def test_counts(self, face):
        mesh = replicate_faces(face)
        assert mesh.n_points == N_FACES * face.n_points
        assert mesh.n_cells == N_FACES * face.n_cells
        assert_mesh_valid(mesh)

    def test_cell_offsets(self, face):
        """Cells of face k are the base cells shifted by k * face.n_points."""
        mesh = replicate_faces(face)
        for k in range(N_FACES):
            block = mesh.cells[k * face.n_cells : (k + 1) * face.n_cells]
            assert torch.equal(block, face.cells + k * face.n_points)

    def test_face_index(self, face):
        mesh = replicate_faces(face)
        face_index = mesh.cell_data["face_index"]
        assert face_index.dtype == torch.int64
        assert torch.bincount(face_index).tolist() == [face.n_cells] * N_FACES
        assert torch.equal(
            face_index,
            torch.arange(N_FACES).repeat_interleave(face.n_cells),
        )

    def test_second_face_is_rotated_first(self, face):
        mesh = replicate_faces(face)
        first = mesh.points[: face.n_points]
        second = mesh.points[face.n_points : 2 * face.n_points]
        torch.testing.assert_close(
            second, first @ rotation_matrix_z(2 * math.pi / 3).T, atol=ATOL, rtol=0
        )

    def test_every_face_on_its_sphere(self, face, edge_length):
        mesh = replicate_faces(face)
        references = reference_vertices()
        for k in range(N_FACES):
            points = mesh.points[k * face.n_points : (k + 1) * face.n_points]
            distances = torch.linalg.norm(points - references[k], dim=-1)
            torch.testing.assert_close(
                distances, torch.full_like(distances, edge_length), atol=ATOL, rtol=0
            )

    def test_input_not_modified(self, face):
        _ = face.cell_areas
        replicate_faces(face)
        assert "face_index" not in face.cell_data
        assert face.n_points == 15

    def test_no_cells(self):
        empty = Mesh(
            points=torch.zeros(3, 3, dtype=torch.float64),
            cells=torch.zeros((0, 3), dtype=torch.int64),
        )
        with pytest.raises(DegenerateTopologyError):
            replicate_faces(empty)

    def test_needs_3d(self):
        flat = Mesh(
            points=torch.tensor([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]),
            cells=torch.tensor([[0, 1, 2]]),
        )
        with pytest.raises(ValueError, match="3D"):
            replicate_faces(flat)
