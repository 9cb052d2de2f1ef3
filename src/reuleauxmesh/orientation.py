"""Consistent outward winding for surfaces that are star-shaped about a point.

The sampler stores each triangle with its indices sorted, which loses the
winding. For a surface that every ray from some interior ``center`` crosses
exactly once (any convex solid, in particular the Reuleaux tetrahedron about
its center), a cell faces outward exactly when its normal points away from
``center``. Cells failing that test get two of their indices swapped.
"""

import logging

import torch

from reuleauxmesh.mesh import Mesh
from reuleauxmesh.utilities import strip_cached

logger = logging.getLogger(__name__)


def inward_facing_cells(
    mesh: Mesh, center: torch.Tensor | list | tuple | None = None
) -> torch.Tensor:
    """Boolean mask of the cells whose normal points toward ``center``.

    Args:
        mesh: Triangle surface in 3D.
        center: Interior point; defaults to the mean of the mesh points.

    Returns:
        Boolean tensor of shape (n_cells,).
    """
    if center is None:
        center = mesh.points.mean(dim=0)
    center = torch.as_tensor(center, dtype=mesh.points.dtype, device=mesh.points.device)
    outward = mesh.cell_centroids - center
    return (mesh.cell_normals * outward).sum(dim=-1) < 0


def orient_cells_outward(
    mesh: Mesh, center: torch.Tensor | list | tuple | None = None
) -> Mesh:
    """Return a copy of ``mesh`` whose cells all wind counterclockwise seen from outside.

    Points, point data and cell data are kept; only the order of the indices
    within inward-facing cells changes.

    Example:
        >>> oriented = orient_cells_outward(mesh)
        >>> assert oriented.volume() > 0
    """
    flip = inward_facing_cells(mesh, center)
    cells = mesh.cells.clone()
    cells[flip] = cells[flip][:, [0, 2, 1]]

    logger.debug("Flipped %d of %d cells to face outward", int(flip.sum()), mesh.n_cells)
    return Mesh(
        points=mesh.points,
        cells=cells,
        point_data=strip_cached(mesh.point_data),
        cell_data=strip_cached(mesh.cell_data),
    )
