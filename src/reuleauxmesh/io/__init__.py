"""Conversion to and from PyVista, and writing meshes to disk."""

from reuleauxmesh.io.io_pyvista import from_pyvista, save_mesh, to_pyvista

__all__ = [
    "from_pyvista",
    "save_mesh",
    "to_pyvista",
]
