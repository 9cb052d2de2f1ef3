"""Boundary detection for triangle meshes.

Used to pull out the rim of each curved face, where it must meet its
neighbours without a crack.
"""

from reuleauxmesh.boundaries._detection import (
    extract_edges,
    get_boundary_edges,
    get_boundary_vertices,
)

__all__ = [
    "extract_edges",
    "get_boundary_edges",
    "get_boundary_vertices",
]
