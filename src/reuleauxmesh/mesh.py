from pathlib import Path
from typing import Sequence, Literal

import torch
import torch.nn.functional as F
from tensordict import TensorDict, tensorclass


@tensorclass
class Mesh:
    points: torch.Tensor  # shape: (n_points, n_spatial_dimensions)
    cells: torch.Tensor  # shape: (n_cells, n_manifold_dimensions + 1)
    point_data: TensorDict = None  # accepts dict/None, converted to TensorDict in __post_init__  # ty: ignore
    cell_data: TensorDict = None  # accepts dict/None, converted to TensorDict in __post_init__  # ty: ignore

    def __post_init__(self):
        ### Validate shapes
        if self.points.ndim != 2:
            raise ValueError(
                f"`points` must have shape (n_points, n_spatial_dimensions), but got {self.points.shape=}."
            )
        if self.cells.ndim != 2:
            raise ValueError(
                f"`cells` must have shape (n_cells, n_manifold_dimensions + 1), but got {self.cells.shape=}."
            )
        if self.n_manifold_dims > self.n_spatial_dims:
            raise ValueError(
                f"`n_manifold_dims` must be <= `n_spatial_dims`, but got {self.n_manifold_dims=} > {self.n_spatial_dims=}."
            )

        ### Validate dtypes
        if torch.is_floating_point(self.cells):
            raise TypeError(
                f"`cells` must have an int-like dtype, but got {self.cells.dtype=}."
            )

        ### Wrap per-point and per-cell data so that slicing and concatenation follow the mesh
        if not isinstance(self.point_data, TensorDict):
            self.point_data = TensorDict(
                dict(self.point_data or {}),
                batch_size=torch.Size([self.n_points]),
                device=self.points.device,
            )
        if not isinstance(self.cell_data, TensorDict):
            self.cell_data = TensorDict(
                dict(self.cell_data or {}),
                batch_size=torch.Size([self.n_cells]),
                device=self.points.device,
            )

    @property
    def n_spatial_dims(self) -> int:
        return self.points.shape[-1]

    @property
    def n_manifold_dims(self) -> int:
        return self.cells.shape[-1] - 1

    @property
    def codimension(self) -> int:
        """Difference between the spatial and the manifold dimension.

        Triangles in 3D have codimension 1, which is what `cell_normals` needs.
        """
        return self.n_spatial_dims - self.n_manifold_dims

    @property
    def n_points(self) -> int:
        return self.points.shape[0]

    @property
    def n_cells(self) -> int:
        return self.cells.shape[0]

    @property
    def cell_centroids(self) -> torch.Tensor:
        """Arithmetic mean of the vertices of each cell.

        The result is cached in cell_data["_centroids"].

        Returns:
            Tensor of shape (n_cells, n_spatial_dims).
        """
        if "_centroids" not in self.cell_data:
            self.cell_data["_centroids"] = self.points[self.cells].mean(dim=1)
        return self.cell_data["_centroids"]

    @property
    def cell_areas(self) -> torch.Tensor:
        """Compute areas of triangular cells in 3D.

        Half the norm of the cross product of two edge vectors. The result is
        cached in cell_data["_areas"].

        Returns:
            Tensor of shape (n_cells,) containing the area of each cell.
        """
        if "_areas" not in self.cell_data:
            self.cell_data["_areas"] = 0.5 * self._cell_cross_products().norm(dim=-1)
        return self.cell_data["_areas"]

    @property
    def cell_normals(self) -> torch.Tensor:
        """Compute unit normal vectors of triangular cells in 3D.

        The normal follows the right-hand rule on the vertex order of each
        cell, so flipping two indices of a cell flips its normal. The result is
        cached in cell_data["_normals"].

        Returns:
            Tensor of shape (n_cells, 3) containing unit normal vectors.

        Raises:
            ValueError: If the mesh is not a triangle mesh in 3D space.
        """
        if "_normals" not in self.cell_data:
            self.cell_data["_normals"] = F.normalize(
                self._cell_cross_products(), dim=-1, eps=1e-30
            )
        return self.cell_data["_normals"]

    def _cell_cross_products(self) -> torch.Tensor:
        if self.codimension != 1 or self.n_spatial_dims != 3:
            raise ValueError(
                f"Cell normals and areas are only implemented for triangles in 3D.\n"
                f"Got {self.n_manifold_dims=} and {self.n_spatial_dims=}."
            )
        vertices = self.points[self.cells]  # (n_cells, 3, 3)
        return torch.linalg.cross(
            vertices[:, 1] - vertices[:, 0],
            vertices[:, 2] - vertices[:, 0],
            dim=-1,
        )

    def volume(self) -> torch.Tensor:
        """Signed volume enclosed by a closed, consistently oriented triangle surface.

        Sums the signed volumes of the tetrahedra spanned by the origin and
        each cell (divergence theorem). Positive when the cells wind outward.
        Meshes whose faces meet at duplicated, coincident points are fine; the
        sum only needs the surface to be geometrically closed.

        Returns:
            Scalar tensor.
        """
        if self.codimension != 1 or self.n_spatial_dims != 3:
            raise ValueError(
                f"Enclosed volume is only defined for triangle surfaces in 3D.\n"
                f"Got {self.n_manifold_dims=} and {self.n_spatial_dims=}."
            )
        vertices = self.points[self.cells]
        # det([p0; p1; p2]) = p0 . (p1 x p2)
        return torch.linalg.det(vertices).sum() / 6

    @classmethod
    def merge(cls, meshes: Sequence["Mesh"]) -> "Mesh":
        """Concatenate meshes into one, re-indexing cells into the joint point list.

        Points are concatenated in the given order; the cells of the i-th mesh
        are offset by the total number of points of the meshes before it.
        """
        ### Validate inputs
        if len(meshes) == 0:
            raise ValueError("At least one Mesh must be provided to merge.")
        elif len(meshes) == 1:  # Short-circuit for speed in this case
            return meshes[0]
        if not all(isinstance(m, Mesh) for m in meshes):
            raise TypeError(
                f"All objects must be Mesh types. Got:\n"
                f"{[type(m) for m in meshes]=}"
            )
        validations = {
            "spatial dimensions": [m.n_spatial_dims for m in meshes],
            "manifold dimensions": [m.n_manifold_dims for m in meshes],
        }
        for name, values in validations.items():
            if not all(v == values[0] for v in values):
                raise ValueError(
                    f"All meshes must have the same {name}. Got:\n{values=}"
                )
        if not all(
            set(m.cell_data.keys()) == set(meshes[0].cell_data.keys()) for m in meshes
        ):
            raise ValueError("All meshes must have the same cell_data keys.")
        if not all(
            set(m.point_data.keys()) == set(meshes[0].point_data.keys()) for m in meshes
        ):
            raise ValueError("All meshes must have the same point_data keys.")

        ### Merge the meshes

        # Cells of each mesh are shifted by the number of points that precede it.
        n_points_for_meshes = torch.tensor(
            [m.n_points for m in meshes],
            device=meshes[0].points.device,
        )
        cumsum_n_points = torch.cumsum(n_points_for_meshes, dim=0)
        cell_index_offsets = cumsum_n_points.roll(1)
        cell_index_offsets[0] = 0

        return cls(
            points=torch.cat([m.points for m in meshes], dim=0),
            cells=torch.cat(
                [m.cells + offset for m, offset in zip(meshes, cell_index_offsets)],
                dim=0,
            ),
            point_data=TensorDict.cat([m.point_data for m in meshes], dim=0),
            cell_data=TensorDict.cat([m.cell_data for m in meshes], dim=0),
        )

    def slice_cells(self, indices: int | slice | torch.Tensor) -> "Mesh":
        """Returns a new Mesh with a subset of the cells.

        Points are left untouched, so the cell indices stay valid.

        Args:
            indices: Indices or mask to select cells.
        """
        new_cell_data: TensorDict = self.cell_data[indices]  # type: ignore
        return Mesh(
            points=self.points,
            cells=self.cells[indices],
            point_data=self.point_data,
            cell_data=new_cell_data,
        )

    def draw(
        self,
        backend: Literal["matplotlib", "pyvista", "auto"] = "auto",
        show: bool = True,
        color: str = "blue",
        show_edges: bool = True,
        ax=None,
        **kwargs,
    ):
        """Draw the mesh using matplotlib or PyVista backend.

        Convenience wrapper for reuleauxmesh.visualization.draw_mesh().

        Returns:
            - matplotlib backend: matplotlib.axes.Axes object
            - PyVista backend: pyvista.Plotter object

        Example:
            >>> mesh.draw(backend="matplotlib", show=False)
        """
        from reuleauxmesh.visualization import draw_mesh

        return draw_mesh(
            mesh=self,
            backend=backend,
            show=show,
            color=color,
            show_edges=show_edges,
            ax=ax,
            **kwargs,
        )

    def save(self, path: str | Path) -> Path:
        """Write the mesh to any surface format PyVista can write (.stl, .ply, .vtp, ...).

        Convenience wrapper for reuleauxmesh.io.save_mesh().
        """
        from reuleauxmesh.io import save_mesh

        return save_mesh(self, path)

    def translate(self, offset: torch.Tensor | list | tuple) -> "Mesh":
        """Apply a translation to the mesh.

        Convenience wrapper for reuleauxmesh.transformations.translate().

        Example:
            >>> translated = mesh.translate([1.0, 2.0, 3.0])
        """
        from reuleauxmesh.transformations import translate

        return translate(self, offset)

    def rotate(
        self,
        axis: torch.Tensor | list | tuple,
        angle: float,
        center: torch.Tensor | list | tuple | None = None,
    ) -> "Mesh":
        """Rotate the mesh about an axis by a specified angle.

        Convenience wrapper for reuleauxmesh.transformations.rotate().

        Args:
            axis: Rotation axis vector
            angle: Rotation angle in radians, counterclockwise about `axis`
            center: Center point for rotation (optional, defaults to origin)

        Example:
            >>> # Rotate a third of a turn about z-axis
            >>> import math
            >>> rotated = mesh.rotate([0, 0, 1], 2 * math.pi / 3)
        """
        from reuleauxmesh.transformations import rotate

        return rotate(self, axis, angle, center)

    def scale(
        self,
        factor: float | torch.Tensor | list | tuple,
        center: torch.Tensor | list | tuple | None = None,
    ) -> "Mesh":
        """Scale the mesh by specified factor(s).

        Convenience wrapper for reuleauxmesh.transformations.scale().

        Example:
            >>> # Reuleaux tetrahedron with a circumradius of 9
            >>> big = mesh.scale(9.0)
        """
        from reuleauxmesh.transformations import scale

        return scale(self, factor, center)

    def transform(self, matrix: torch.Tensor) -> "Mesh":
        """Apply a linear transformation to the mesh.

        Convenience wrapper for reuleauxmesh.transformations.transform().

        Args:
            matrix: Transformation matrix, shape (n_spatial_dims, n_spatial_dims)
        """
        from reuleauxmesh.transformations import transform

        return transform(self, matrix)


if __name__ == "__main__":
    from reuleauxmesh.reuleaux_tetrahedron import mesh_reuleaux_tetrahedron

    mesh = mesh_reuleaux_tetrahedron(n_steps=8)
    print(mesh.n_points, mesh.n_cells)
    print(mesh.cell_areas.sum())
    print(mesh.volume())
