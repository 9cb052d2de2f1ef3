"""Boundary detection for triangle meshes.

An edge is on the boundary if it belongs to exactly one cell. A closed surface
whose faces share their rim points by index has no boundary; the Reuleaux
tetrahedron mesh, whose faces carry separate copies of their rims, has the
rim of every face as boundary.
"""

from typing import TYPE_CHECKING

import torch

if TYPE_CHECKING:
    from reuleauxmesh.mesh import Mesh

# Local vertex pairs forming the three edges of a triangle
_TRIANGLE_EDGES = torch.tensor([[0, 1], [1, 2], [0, 2]])


def extract_edges(mesh: "Mesh") -> tuple[torch.Tensor, torch.Tensor]:
    """Extract the unique edges of a triangle mesh and how many cells use each.

    Args:
        mesh: Triangle mesh.

    Returns:
        Tuple of (unique_edges, edge_cell_count):
        - unique_edges: shape (n_edges, 2), each row sorted ascending
        - edge_cell_count: shape (n_edges,), number of cells containing the edge
    """
    if mesh.n_manifold_dims != 2:
        raise ValueError(
            f"Edge extraction is implemented for triangle meshes, got {mesh.n_manifold_dims=}."
        )
    device = mesh.cells.device

    ### Handle empty mesh
    if mesh.n_cells == 0:
        return (
            torch.zeros((0, 2), dtype=torch.int64, device=device),
            torch.zeros(0, dtype=torch.int64, device=device),
        )

    # Shape: (n_cells * 3, 2), with duplicates for edges shared by two cells
    candidate_edges = mesh.cells[:, _TRIANGLE_EDGES.to(device)].reshape(-1, 2)
    candidate_edges = torch.sort(candidate_edges, dim=1).values

    unique_edges, edge_cell_count = torch.unique(
        candidate_edges,
        dim=0,
        return_counts=True,
    )
    return unique_edges, edge_cell_count


def get_boundary_edges(mesh: "Mesh") -> torch.Tensor:
    """Get edges that lie on the mesh boundary.

    Args:
        mesh: Triangle mesh.

    Returns:
        Tensor of shape (n_boundary_edges, 2) containing boundary edge connectivity.
        Returns empty tensor of shape (0, 2) for watertight meshes.

    Example:
        >>> # One flat face sampled with 8 steps per edge
        >>> face = sample_triangle(vertices, n_steps=8)
        >>> assert len(get_boundary_edges(face)) == 3 * 8
    """
    edges, edge_cell_count = extract_edges(mesh)
    return edges[edge_cell_count == 1]


def get_boundary_vertices(mesh: "Mesh") -> torch.Tensor:
    """Identify vertices that lie on the mesh boundary.

    A vertex is on the boundary if it is incident to at least one boundary edge.

    Args:
        mesh: Triangle mesh.

    Returns:
        Boolean tensor of shape (n_points,) where True indicates boundary vertices.

    Note:
        For closed manifolds (watertight meshes), returns all False.
    """
    boundary_edges = get_boundary_edges(mesh)

    is_boundary_vertex = torch.zeros(
        mesh.n_points, dtype=torch.bool, device=mesh.cells.device
    )
    if len(boundary_edges) > 0:
        is_boundary_vertex[boundary_edges.flatten()] = True

    return is_boundary_vertex
