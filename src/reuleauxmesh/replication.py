"""Replication of one curved face into the four faces of the Reuleaux tetrahedron.

The base face (V1, V2, V3), inflated from V4, is carried onto the other three
faces by rotations that permute the tetrahedron vertices:

    face 2 = Rz(2 pi / 3) face 1                (V1, V3, V4), reference V2
    face 3 = Rz(2 pi / 3) face 2                (V1, V4, V2), reference V3
    face 4 = Ry(acos(-1/3)) Rz(pi / 3) face 3   (V2, V4, V3), reference V1

Rz(2 pi / 3) turns about the axis through V1. For the last face, Rz(pi / 3)
moves the reference vertex V3 of face 3 into the xz-plane, then the tilt about y
swings V1 down onto V2 and that reference up onto V1.
"""

import logging
import math

import torch

from reuleauxmesh.errors import DegenerateTopologyError
from reuleauxmesh.mesh import Mesh
from reuleauxmesh.transformations import rotation_matrix_y, rotation_matrix_z, transform
from reuleauxmesh.utilities import strip_cached

logger = logging.getLogger(__name__)

N_FACES = 4


def face_rotations(
    dtype: torch.dtype = torch.float64,
    device: torch.device | str = "cpu",
) -> list[torch.Tensor]:
    """Rotations taking face k to face k + 1, for k = 1, 2, 3.

    Returns:
        List of three (3, 3) rotation matrices, applied in sequence.
    """
    third_turn = rotation_matrix_z(2 * math.pi / 3, dtype=dtype, device=device)
    tilt = rotation_matrix_y(math.acos(-1 / 3), dtype=dtype, device=device) @ (
        rotation_matrix_z(math.pi / 3, dtype=dtype, device=device)
    )
    return [third_turn, third_turn, tilt]


def replicate_faces(face: Mesh) -> Mesh:
    """Assemble the closed four-face mesh from the curved base face.

    Each face keeps its own copy of the shared rim points, so the result has
    4 * face.n_points points and 4 * face.n_cells cells. Points of face k
    (0-based) occupy rows k * face.n_points up to (k + 1) * face.n_points, and
    its cells are the base cells offset by k * face.n_points. Every cell is
    tagged with its face in ``cell_data["face_index"]``.

    Args:
        face: The curved base face, a triangle mesh in 3D.

    Returns:
        Merged Mesh of the four faces in face order.

    Raises:
        DegenerateTopologyError: If the face has no cells.
    """
    if face.n_cells == 0:
        raise DegenerateTopologyError(
            f"Cannot replicate a face without cells, got {face.n_cells=}."
        )
    if face.n_spatial_dims != 3:
        raise ValueError(
            f"Face replication needs 3D points, but got {face.n_spatial_dims=}."
        )

    faces = [face]
    for rotation in face_rotations(dtype=face.points.dtype, device=face.points.device):
        faces.append(transform(faces[-1], rotation))

    tagged = []
    for i, f in enumerate(faces):
        cell_data = strip_cached(f.cell_data).copy()
        cell_data["face_index"] = torch.full(
            (f.n_cells,), i, dtype=torch.int64, device=f.cells.device
        )
        tagged.append(
            Mesh(
                points=f.points,
                cells=f.cells,
                point_data=strip_cached(f.point_data),
                cell_data=cell_data,
            )
        )

    logger.debug(
        "Replicated face with %d points and %d cells onto %d faces",
        face.n_points,
        face.n_cells,
        N_FACES,
    )
    return Mesh.merge(tagged)
