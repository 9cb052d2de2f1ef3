"""Fixed geometry of the Reuleaux tetrahedron construction.

The base regular tetrahedron is inscribed in the unit sphere S(O, 1), with one
vertex at the north pole and the other three arranged symmetrically in the
plane z = -1/3.
"""

import math

import torch

TETRAHEDRON_VERTICES: tuple[tuple[float, float, float], ...] = (
    (0.0, 0.0, 1.0),
    (2 * math.sqrt(2) / 3, 0.0, -1 / 3),
    (-math.sqrt(2) / 3, math.sqrt(6) / 3, -1 / 3),
    (-math.sqrt(2) / 3, -math.sqrt(6) / 3, -1 / 3),
)

# The face that gets sampled and curved; the other three are rotated copies.
BASE_FACE: tuple[int, int, int] = (0, 1, 2)
# Center of the sphere the base face is inflated onto.
BASE_FACE_REFERENCE: int = 3

DEFAULT_WARP: float = 0.85
DEFAULT_N_STEPS: int = 32


def tetrahedron_vertices(
    dtype: torch.dtype = torch.float64, device: torch.device | str = "cpu"
) -> torch.Tensor:
    """Returns the four tetrahedron vertices as a (4, 3) tensor."""
    return torch.tensor(TETRAHEDRON_VERTICES, dtype=dtype, device=device)


def edge_length() -> float:
    """Edge length of the base tetrahedron, 2 * sqrt(6) / 3."""
    return math.dist(TETRAHEDRON_VERTICES[0], TETRAHEDRON_VERTICES[1])
