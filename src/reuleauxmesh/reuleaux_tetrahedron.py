"""Reuleaux tetrahedron surface in 3D space.

Dimensional: 2D manifold in 3D space, closed but with each of the four
curved faces carrying its own copy of the shared rim points.

The solid is built on the regular tetrahedron inscribed in the unit sphere.
One face is sampled on a warped barycentric lattice, pushed radially out onto
the sphere centered at the opposite vertex with radius equal to the edge
length, and rotated onto the other three faces.
"""

import logging

import torch

from reuleauxmesh.constants import (
    BASE_FACE,
    BASE_FACE_REFERENCE,
    DEFAULT_N_STEPS,
    DEFAULT_WARP,
    edge_length,
    tetrahedron_vertices,
)
from reuleauxmesh.inflation import inflate_mesh
from reuleauxmesh.mesh import Mesh
from reuleauxmesh.orientation import orient_cells_outward
from reuleauxmesh.replication import face_rotations, replicate_faces
from reuleauxmesh.sampling import sample_triangle
from reuleauxmesh.validation import validate_n_steps, validate_warp

logger = logging.getLogger(__name__)


def curved_base_face(
    n_steps: int = DEFAULT_N_STEPS,
    warp: float = DEFAULT_WARP,
    dtype: torch.dtype = torch.float64,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Sample the base face (V1, V2, V3) and inflate it from V4.

    Every point of the result lies at distance `edge_length()` from V4.

    Returns:
        Mesh with (n_steps + 1)(n_steps + 2) / 2 points and n_steps ** 2 cells.
    """
    n_steps = validate_n_steps(n_steps)
    vertices = tetrahedron_vertices(dtype=dtype, device=device)

    flat = sample_triangle(vertices[list(BASE_FACE)], n_steps=n_steps, warp=warp)
    return inflate_mesh(flat, reference=vertices[BASE_FACE_REFERENCE], radius=edge_length())


def reference_vertices(
    dtype: torch.dtype = torch.float64, device: torch.device | str = "cpu"
) -> torch.Tensor:
    """Center of the sphere carrying each face, in face order.

    These are V4, V2, V3, V1: the base face reference carried along by the
    same rotations that place the faces.

    Returns:
        Tensor of shape (4, 3).
    """
    reference = tetrahedron_vertices(dtype=dtype, device=device)[BASE_FACE_REFERENCE]
    references = [reference]
    for rotation in face_rotations(dtype=dtype, device=device):
        references.append(rotation @ references[-1])
    return torch.stack(references)


def mesh_reuleaux_tetrahedron(
    n_steps: int = DEFAULT_N_STEPS,
    warp: float = DEFAULT_WARP,
    orient_outward: bool = True,
    dtype: torch.dtype = torch.float64,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Create a Reuleaux tetrahedron surface inscribed in the unit sphere.

    Args:
        n_steps: Number of samples along each edge of a face. Powers of two
            are conventional; any positive integer works.
        warp: Warp exponent of the barycentric sampling; values below 1
            push samples away from the tetrahedron vertices.
        orient_outward: If True, wind every cell counterclockwise as seen
            from outside the solid. If False, cells keep the sorted index order
            produced by the sampler.
        dtype: Floating point dtype of the points.
        device: Compute device ('cpu' or 'cuda').

    Returns:
        Mesh with n_manifold_dims=2, n_spatial_dims=3,
        4 * (n_steps + 1)(n_steps + 2) / 2 points and 4 * n_steps ** 2 cells.
        ``cell_data["face_index"]`` tells which face (0 to 3) each cell is on.

    Raises:
        InvalidSampleStepError: If n_steps is not a positive integer.
        InvalidWarpError: If warp is not a positive number.
        GeometricInfeasibilityError: If a sample point cannot be inflated.

    Example:
        >>> mesh = mesh_reuleaux_tetrahedron(n_steps=8)
        >>> mesh.n_points, mesh.n_cells
        (180, 256)
        >>> # Same solid with a circumradius of 9
        >>> big = mesh.scale(9.0)
    """
    n_steps = validate_n_steps(n_steps)
    warp = validate_warp(warp)

    face = curved_base_face(n_steps=n_steps, warp=warp, dtype=dtype, device=device)
    mesh = replicate_faces(face)
    if orient_outward:
        mesh = orient_cells_outward(
            mesh, center=torch.zeros(3, dtype=dtype, device=device)
        )

    logger.info(
        "Built Reuleaux tetrahedron mesh with n_steps=%d: %d points, %d cells",
        n_steps,
        mesh.n_points,
        mesh.n_cells,
    )
    return mesh
