"""Warped barycentric sampling of a flat triangle.

A triangle (V0, V1, V2) is sampled on the lattice of barycentric coordinates
(m, n, n_steps - m - n) / n_steps, with m, n >= 0 and m + n <= n_steps. Points
are laid out row by row: row m holds the n_steps + 1 - m points with that m,
ordered by increasing n. The linear index of lattice point (m, n) is therefore

    index(m, n) = m * (n_steps + 1) - m * (m - 1) / 2 + n
"""

import logging

import torch

from reuleauxmesh.constants import DEFAULT_WARP
from reuleauxmesh.errors import DegenerateTopologyError
from reuleauxmesh.mesh import Mesh
from reuleauxmesh.validation import validate_warp

logger = logging.getLogger(__name__)


def _check_n_steps(n_steps: int) -> None:
    if n_steps < 1:
        raise DegenerateTopologyError(
            f"A triangle sampled with fewer than one step per edge has no cells, got {n_steps=}."
        )


def _linear_index(m: torch.Tensor, n: torch.Tensor, n_steps: int) -> torch.Tensor:
    return m * (n_steps + 1) - m * (m - 1) // 2 + n


def lattice_indices(
    n_steps: int, device: torch.device | str = "cpu"
) -> tuple[torch.Tensor, torch.Tensor]:
    """Enumerate the integer lattice pairs (m, n) with m + n <= n_steps.

    Pairs come out with m as the outer loop and n as the inner loop, which is
    the order the sample points are stored in.

    Returns:
        Tuple (m, n) of int64 tensors, each of shape ((n_steps + 1)(n_steps + 2) / 2,).
    """
    steps = torch.arange(n_steps + 1, device=device)
    m, n = torch.meshgrid(steps, steps, indexing="ij")
    inside = (m + n) <= n_steps
    # Boolean masking flattens row-major, so m stays the outer loop
    return m[inside], n[inside]


def barycentric_lattice(
    n_steps: int,
    warp: float = DEFAULT_WARP,
    dtype: torch.dtype = torch.float64,
    device: torch.device | str = "cpu",
) -> torch.Tensor:
    """Compute warped barycentric coordinates of every lattice point.

    Starting from the linear coordinates l = (m, n, n_steps - m - n) / n_steps,
    each coordinate is raised to the power ``warp`` and the excess of the sum
    over 1 is taken back proportionally to l:

        b_i = l_i ** warp - (sum_j l_j ** warp - 1) * l_i

    Since sum_i l_i = 1 the result sums to 1 again. ``warp < 1`` pushes the
    samples next to a corner away from it, ``warp > 1`` crowds them toward
    the corners, and ``warp == 1`` returns the linear coordinates unchanged.

    Args:
        n_steps: Number of lattice steps along each triangle edge.
        warp: Positive warp exponent.
        dtype: Floating point dtype of the result.
        device: Compute device.

    Returns:
        Tensor of shape (n_points, 3) with columns (b1, b2, b3), where b1 weighs
        V1, b2 weighs V2 and b3 weighs V0.

    Raises:
        DegenerateTopologyError: If n_steps < 1.
        InvalidWarpError: If warp is not a positive number.
    """
    _check_n_steps(n_steps)
    warp = validate_warp(warp)

    m, n = lattice_indices(n_steps, device=device)
    linear = torch.stack([m, n, n_steps - m - n], dim=-1).to(dtype) / n_steps

    warped = linear.pow(warp)
    excess = warped.sum(dim=-1, keepdim=True) - 1
    return warped - excess * linear


def lattice_cells(n_steps: int, device: torch.device | str = "cpu") -> torch.Tensor:
    """Build the triangle topology over the sample lattice.

    Every pair of adjacent rows (m, m + 1) is stitched with one "upward"
    triangle per position of the shorter row,

        (m, n), (m, n + 1), (m + 1, n)

    and, from the second row on, one upside-down triangle per interior
    position, reaching back into the row above,

        (m, n), (m - 1, n + 1), (m, n + 1)

    Each triangle's indices are then sorted ascending and duplicate rows are
    dropped, so the result is in lexicographic order with no repeated triple.

    Returns:
        int64 tensor of shape (n_steps ** 2, 3).

    Raises:
        DegenerateTopologyError: If n_steps < 1.
    """
    _check_n_steps(n_steps)

    # Lower-left corners of the upward triangles: every point off the last diagonal
    m, n = lattice_indices(n_steps - 1, device=device)
    upward = torch.stack(
        [
            _linear_index(m, n, n_steps),
            _linear_index(m, n + 1, n_steps),
            _linear_index(m + 1, n, n_steps),
        ],
        dim=1,
    )

    below_first_row = m >= 1
    m, n = m[below_first_row], n[below_first_row]
    downward = torch.stack(
        [
            _linear_index(m, n, n_steps),
            _linear_index(m - 1, n + 1, n_steps),
            _linear_index(m, n + 1, n_steps),
        ],
        dim=1,
    )

    cells = torch.cat([upward, downward], dim=0)
    return torch.unique(torch.sort(cells, dim=1).values, dim=0)


def sample_triangle(
    vertices: torch.Tensor,
    n_steps: int,
    warp: float = DEFAULT_WARP,
) -> Mesh:
    """Sample a flat triangle on a warped barycentric lattice.

    Args:
        vertices: Triangle corners (V0, V1, V2), shape (3, n_spatial_dims).
            The sample inherits their dtype and device; pass float64 for
            tolerances around 1e-9.
        n_steps: Number of lattice steps along each edge.
        warp: Positive warp exponent applied to the barycentric coordinates.

    Returns:
        Mesh with (n_steps + 1)(n_steps + 2) / 2 points and n_steps ** 2 cells.
        Point (m, n) lies at V0 + b1 (V1 - V0) + b2 (V2 - V0).

    Raises:
        DegenerateTopologyError: If n_steps < 1.

    Example:
        >>> flat = sample_triangle(torch.eye(3, dtype=torch.float64), n_steps=8)
        >>> flat.n_points, flat.n_cells
        (45, 64)
    """
    vertices = torch.as_tensor(vertices)
    if not torch.is_floating_point(vertices):
        vertices = vertices.to(torch.get_default_dtype())
    if vertices.ndim != 2 or vertices.shape[0] != 3:
        raise ValueError(
            f"`vertices` must have shape (3, n_spatial_dims), but got {vertices.shape=}."
        )

    weights = barycentric_lattice(
        n_steps, warp=warp, dtype=vertices.dtype, device=vertices.device
    )
    v0, v1, v2 = vertices
    points = v0 + weights[:, [0]] * (v1 - v0) + weights[:, [1]] * (v2 - v0)
    cells = lattice_cells(n_steps, device=vertices.device)

    logger.debug(
        "Sampled triangle with n_steps=%d: %d points, %d cells",
        n_steps,
        len(points),
        len(cells),
    )
    return Mesh(points=points, cells=cells)
