"""PyVista interoperability.

A triangle Mesh maps onto a `pyvista.PolyData` surface. PolyData stores its
faces as a flat array of [3, i, j, k] records; point and cell data arrays are
copied alongside, except the cached entries whose keys start with "_".
"""

import logging
from pathlib import Path

import numpy as np
import pyvista as pv
import torch

from reuleauxmesh.mesh import Mesh
from reuleauxmesh.utilities import is_cached_key

logger = logging.getLogger(__name__)


def _check_triangle_surface(mesh: Mesh) -> None:
    if mesh.n_manifold_dims != 2 or mesh.n_spatial_dims != 3:
        raise ValueError(
            f"Only triangle surfaces in 3D can be converted to PyVista.\n"
            f"Got {mesh.n_manifold_dims=} and {mesh.n_spatial_dims=}."
        )


def to_pyvista(mesh: Mesh) -> pv.PolyData:
    """Convert a triangle Mesh in 3D to a PyVista PolyData surface.

    Args:
        mesh: Triangle surface in 3D.

    Returns:
        PolyData with the same points, triangles and non-cached data arrays.
    """
    _check_triangle_surface(mesh)

    points = mesh.points.detach().cpu().numpy()
    cells = mesh.cells.detach().cpu().numpy()
    faces = np.hstack(
        [np.full((len(cells), 1), 3, dtype=cells.dtype), cells]
    ).ravel()
    pv_mesh = pv.PolyData(points, faces=faces)

    for key, value in mesh.point_data.items():
        if not is_cached_key(key) and isinstance(value, torch.Tensor):
            pv_mesh.point_data[key] = value.detach().cpu().numpy()
    for key, value in mesh.cell_data.items():
        if not is_cached_key(key) and isinstance(value, torch.Tensor):
            pv_mesh.cell_data[key] = value.detach().cpu().numpy()

    return pv_mesh


def from_pyvista(
    pv_mesh: pv.DataSet,
    dtype: torch.dtype = torch.float64,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Convert a PyVista surface to a triangle Mesh.

    Polygonal faces are triangulated first. Point and cell data arrays are
    copied as tensors.

    Args:
        pv_mesh: Any PyVista dataset that extracts to a polygonal surface.
        dtype: Floating point dtype of the points.
        device: Compute device.
    """
    surface = pv_mesh.extract_surface() if not isinstance(pv_mesh, pv.PolyData) else pv_mesh
    surface = surface.triangulate()

    points = torch.as_tensor(np.asarray(surface.points), dtype=dtype, device=device)
    cells = torch.as_tensor(
        np.asarray(surface.faces).reshape(-1, 4)[:, 1:], dtype=torch.int64, device=device
    )

    point_data = {
        key: torch.as_tensor(np.asarray(surface.point_data[key]), device=device)
        for key in surface.point_data.keys()
    }
    cell_data = {
        key: torch.as_tensor(np.asarray(surface.cell_data[key]), device=device)
        for key in surface.cell_data.keys()
    }
    return Mesh(points=points, cells=cells, point_data=point_data, cell_data=cell_data)


def save_mesh(mesh: Mesh, path: str | Path) -> Path:
    """Write a triangle Mesh to disk in any surface format PyVista supports.

    The format follows the file extension (.stl, .ply, .vtp, .vtk, .obj, ...).
    STL files carry no data arrays.

    Returns:
        The path written to.
    """
    path = Path(path)
    to_pyvista(mesh).save(path)
    logger.info("Saved mesh with %d points and %d cells to %s", mesh.n_points, mesh.n_cells, path)
    return path
