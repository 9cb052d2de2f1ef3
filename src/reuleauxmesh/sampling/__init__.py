"""Barycentric sampling of flat triangles.

This module provides:
1. The warped barycentric lattice over a triangle
2. The triangle-index topology connecting the lattice points
"""

from reuleauxmesh.sampling._triangle import (
    lattice_indices,
    barycentric_lattice,
    lattice_cells,
    sample_triangle,
)

__all__ = [
    "lattice_indices",
    "barycentric_lattice",
    "lattice_cells",
    "sample_triangle",
]
