"""Rigid and linear transformations of meshes.

Rotation matrices are built by pure functions of an angle, following the
right-handed convention: a positive angle turns counterclockwise when looking
down the rotation axis toward the origin. Points are stored as rows, so a
matrix R acts on a point set P as P @ R.T.

Every transformation returns a new Mesh with the same cells. Cached derived
quantities (normals, areas, centroids) are dropped; user data is kept.
"""

import math

import torch

from reuleauxmesh.mesh import Mesh
from reuleauxmesh.utilities import strip_cached


def rotation_matrix_z(
    angle: float,
    dtype: torch.dtype = torch.float64,
    device: torch.device | str = "cpu",
) -> torch.Tensor:
    """3x3 rotation by ``angle`` radians about the z axis."""
    c, s = math.cos(angle), math.sin(angle)
    return torch.tensor(
        [
            [c, -s, 0.0],
            [s, c, 0.0],
            [0.0, 0.0, 1.0],
        ],
        dtype=dtype,
        device=device,
    )


def rotation_matrix_y(
    angle: float,
    dtype: torch.dtype = torch.float64,
    device: torch.device | str = "cpu",
) -> torch.Tensor:
    """3x3 rotation by ``angle`` radians about the y axis (z toward x)."""
    c, s = math.cos(angle), math.sin(angle)
    return torch.tensor(
        [
            [c, 0.0, s],
            [0.0, 1.0, 0.0],
            [-s, 0.0, c],
        ],
        dtype=dtype,
        device=device,
    )


def rotation_matrix(
    axis: torch.Tensor | list | tuple,
    angle: float,
    dtype: torch.dtype = torch.float64,
    device: torch.device | str = "cpu",
) -> torch.Tensor:
    """3x3 rotation by ``angle`` radians about an arbitrary axis (Rodrigues' formula).

        R = I + sin(angle) K + (1 - cos(angle)) K^2

    where K is the cross-product matrix of the unit axis.

    Raises:
        ValueError: If the axis is not a nonzero 3-vector.
    """
    axis = torch.as_tensor(axis, dtype=dtype, device=device)
    if axis.shape != (3,):
        raise ValueError(f"`axis` must be a 3-vector, but got {axis.shape=}.")
    norm = axis.norm()
    if norm == 0:
        raise ValueError("`axis` must be nonzero.")
    x, y, z = (axis / norm).tolist()

    K = torch.tensor(
        [
            [0.0, -z, y],
            [z, 0.0, -x],
            [-y, x, 0.0],
        ],
        dtype=dtype,
        device=device,
    )
    eye = torch.eye(3, dtype=dtype, device=device)
    return eye + math.sin(angle) * K + (1 - math.cos(angle)) * (K @ K)


def _with_points(mesh: Mesh, points: torch.Tensor) -> Mesh:
    return Mesh(
        points=points,
        cells=mesh.cells,
        point_data=strip_cached(mesh.point_data),
        cell_data=strip_cached(mesh.cell_data),
    )


def _as_vector(value, mesh: Mesh) -> torch.Tensor:
    return torch.as_tensor(value, dtype=mesh.points.dtype, device=mesh.points.device)


def transform(mesh: Mesh, matrix: torch.Tensor) -> Mesh:
    """Apply a linear map to every point of the mesh.

    Args:
        mesh: Input mesh.
        matrix: Square matrix of shape (n_spatial_dims, n_spatial_dims).

    Returns:
        New Mesh with points ``mesh.points @ matrix.T``.
    """
    matrix = _as_vector(matrix, mesh)
    if matrix.shape != (mesh.n_spatial_dims, mesh.n_spatial_dims):
        raise ValueError(
            f"`matrix` must have shape ({mesh.n_spatial_dims}, {mesh.n_spatial_dims}), "
            f"but got {matrix.shape=}."
        )
    return _with_points(mesh, mesh.points @ matrix.T)


def translate(mesh: Mesh, offset: torch.Tensor | list | tuple) -> Mesh:
    """Shift every point of the mesh by ``offset``."""
    return _with_points(mesh, mesh.points + _as_vector(offset, mesh))


def rotate(
    mesh: Mesh,
    axis: torch.Tensor | list | tuple,
    angle: float,
    center: torch.Tensor | list | tuple | None = None,
) -> Mesh:
    """Rotate a 3D mesh about ``axis`` through ``center`` (the origin by default)."""
    if mesh.n_spatial_dims != 3:
        raise ValueError(
            f"Axis-angle rotation needs 3D points, but got {mesh.n_spatial_dims=}."
        )
    R = rotation_matrix(axis, angle, dtype=mesh.points.dtype, device=mesh.points.device)
    if center is None:
        return transform(mesh, R)
    center = _as_vector(center, mesh)
    return _with_points(mesh, (mesh.points - center) @ R.T + center)


def scale(
    mesh: Mesh,
    factor: float | torch.Tensor | list | tuple,
    center: torch.Tensor | list | tuple | None = None,
) -> Mesh:
    """Scale the mesh uniformly (scalar factor) or per axis about ``center``.

    A uniform factor k multiplies every distance in the mesh by |k| and leaves
    the cells untouched.
    """
    factor = _as_vector(factor, mesh)
    if center is None:
        return _with_points(mesh, mesh.points * factor)
    center = _as_vector(center, mesh)
    return _with_points(mesh, (mesh.points - center) * factor + center)
