"""Display of triangle surfaces with PyVista or matplotlib.

PyVista gives an interactive VTK window; matplotlib's mplot3d is slower but
works anywhere matplotlib does, including headless ``Agg`` rendering.
"""

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from reuleauxmesh.mesh import Mesh

# Camera of the reference renderings: azimuth -52 deg, elevation 16 deg
VIEW_AZIMUTH = -52.0
VIEW_ELEVATION = 16.0


def draw_mesh(
    mesh: "Mesh",
    backend: Literal["matplotlib", "pyvista", "auto"] = "auto",
    show: bool = True,
    color: str = "blue",
    show_edges: bool = True,
    ax=None,
    **kwargs,
):
    """Draw a triangle surface in 3D.

    Args:
        mesh: Triangle surface in 3D.
        backend: "pyvista", "matplotlib", or "auto" (PyVista).
        show: Whether to display the plot immediately. If False, the
            plotter/axes is returned for further customization.
        color: Face color.
        show_edges: Whether to draw cell edges.
        ax: (matplotlib only) Existing 3D axes to draw into.
        **kwargs: Passed to ``pyvista.Plotter.add_mesh`` or to the matplotlib
            ``Poly3DCollection``.

    Returns:
        - matplotlib backend: matplotlib.axes.Axes object
        - PyVista backend: pyvista.Plotter object

    Raises:
        ValueError: If the mesh is not a triangle surface in 3D, or the
            backend is unknown.
    """
    if mesh.n_manifold_dims != 2 or mesh.n_spatial_dims != 3:
        raise ValueError(
            f"Only triangle surfaces in 3D can be drawn.\n"
            f"Got {mesh.n_manifold_dims=} and {mesh.n_spatial_dims=}."
        )
    if backend == "auto":
        backend = "pyvista"

    if backend == "pyvista":
        return _draw_pyvista(mesh, show=show, color=color, show_edges=show_edges, **kwargs)
    elif backend == "matplotlib":
        if not show_edges:
            kwargs.setdefault("linewidths", 0)
        return _draw_matplotlib(mesh, show=show, color=color, ax=ax, **kwargs)
    else:
        raise ValueError(
            f"Invalid {backend=}. Must be one of: 'auto', 'pyvista', 'matplotlib'"
        )


def _draw_pyvista(mesh: "Mesh", show: bool, color: str, show_edges: bool, **kwargs):
    import pyvista as pv

    from reuleauxmesh.io import to_pyvista

    plotter = pv.Plotter(off_screen=not show)
    plotter.add_mesh(to_pyvista(mesh), color=color, show_edges=show_edges, **kwargs)
    plotter.camera_position = "xz"
    plotter.camera.azimuth = VIEW_AZIMUTH
    plotter.camera.elevation = VIEW_ELEVATION
    if show:
        plotter.show()
    return plotter


def _draw_matplotlib(mesh: "Mesh", show: bool, color: str, ax, **kwargs):
    import matplotlib.pyplot as plt
    from mpl_toolkits.mplot3d.art3d import Poly3DCollection

    if ax is None:
        fig = plt.figure()
        ax = fig.add_subplot(projection="3d")

    points = mesh.points.detach().cpu().numpy()
    triangles = points[mesh.cells.detach().cpu().numpy()]  # (n_cells, 3, 3)

    kwargs.setdefault("edgecolors", "k")
    kwargs.setdefault("linewidths", 0.2)
    ax.add_collection3d(Poly3DCollection(triangles, facecolors=color, **kwargs))

    ### Equal aspect ratio around the bounding box
    lo, hi = points.min(axis=0), points.max(axis=0)
    center, half = (lo + hi) / 2, (hi - lo).max() / 2
    ax.set_xlim(center[0] - half, center[0] + half)
    ax.set_ylim(center[1] - half, center[1] + half)
    ax.set_zlim(center[2] - half, center[2] + half)
    ax.set_box_aspect((1, 1, 1))
    ax.view_init(elev=VIEW_ELEVATION, azim=VIEW_AZIMUTH)

    if show:
        plt.show()
    return ax
