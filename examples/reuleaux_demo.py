"""Demonstration of the Reuleaux tetrahedron mesh."""

import math

import torch

from reuleauxmesh import mesh_reuleaux_tetrahedron

### Example 1: Resolution and mesh size


def demo_resolutions():
    """Print point and cell counts for a few resolutions."""
    print("Demo 1: mesh size per resolution")
    for n_steps in [1, 2, 4, 8, 16, 32]:
        mesh = mesh_reuleaux_tetrahedron(n_steps=n_steps)
        print(f"  {n_steps=:>3}: {mesh.n_points:>5} points, {mesh.n_cells:>5} cells")
    print()


### Example 2: Convergence of the enclosed volume


def demo_volume():
    """Compare the enclosed volume against the closed form."""
    print("Demo 2: enclosed volume")
    width = 2 * math.sqrt(6) / 3
    exact = width**3 * (3 * math.sqrt(2) - 49 * math.pi + 162 * math.atan(math.sqrt(2))) / 12
    for n_steps in [4, 16, 64]:
        volume = mesh_reuleaux_tetrahedron(n_steps=n_steps).volume().item()
        print(f"  {n_steps=:>3}: {volume:.6f} (relative error {abs(volume - exact) / exact:.2e})")
    print()


### Example 3: Scaled copy written to disk and displayed


def demo_scaled(show: bool = True):
    """Mesh with a circumradius of 9, colored by face."""
    print("Demo 3: scaled mesh")
    mesh = mesh_reuleaux_tetrahedron(n_steps=16).scale(9.0)
    print(f"  max radius: {torch.linalg.norm(mesh.points, dim=-1).max().item():.3f}")

    path = mesh.save("reuleaux_tetrahedron.vtp")
    print(f"  ✓ Saved to {path}")

    mesh.draw(
        show=show, color=None, scalars="face_index", cmap="tab10", show_scalar_bar=False
    )


if __name__ == "__main__":
    demo_resolutions()
    demo_volume()
    demo_scaled()
