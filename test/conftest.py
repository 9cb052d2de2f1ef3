"""Pytest configuration and shared fixtures for reuleauxmesh tests.

This module provides the device parametrization, the base tetrahedron geometry,
and assertion helpers shared by the test files.
"""

import pytest
import torch

from reuleauxmesh.constants import tetrahedron_vertices

# Tolerance for float64 geometry
ATOL = 1e-9


### Pytest Hooks ###


def pytest_collection_modifyitems(config, items):
    """Skip tests marked with 'cuda' if CUDA is not available."""
    if torch.cuda.is_available():
        return  # CUDA available, run all tests

    skip_cuda = pytest.mark.skip(reason="CUDA not available")
    for item in items:
        if "cuda" in item.keywords:
            item.add_marker(skip_cuda)


### Assertion Helpers ###


def assert_mesh_valid(mesh) -> None:
    """Assert that a triangle mesh is well-formed: indices in range, distinct within each cell."""
    assert mesh.n_points > 0, "Mesh must have at least one point"
    assert mesh.points.ndim == 2, f"Points must be 2D tensor, got {mesh.points.ndim=}"
    assert mesh.cells.shape[1] == 3, f"Cells must be triangles, got {mesh.cells.shape=}"
    assert mesh.cells.dtype == torch.int64, (
        f"Cells must be int64, got {mesh.cells.dtype=}"
    )
    assert torch.all(mesh.cells >= 0), "Cell indices must be non-negative"
    assert torch.all(mesh.cells < mesh.n_points), (
        f"Cell indices out of bounds: max={mesh.cells.max()}, n_points={mesh.n_points}"
    )
    c = mesh.cells
    assert torch.all((c[:, 0] != c[:, 1]) & (c[:, 1] != c[:, 2]) & (c[:, 0] != c[:, 2])), (
        "Some cell repeats a vertex index"
    )
    assert mesh.points.device == mesh.cells.device, (
        f"Device mismatch: {mesh.points.device=} != {mesh.cells.device=}"
    )


def pairwise_distances(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Euclidean distances between every row of `a` and every row of `b`.

    Computed from the differences directly; the matrix-product expansion that
    `torch.cdist` switches to on larger inputs loses about 1e-8 in float64.
    """
    return torch.cdist(a, b, compute_mode="donot_use_mm_for_euclid_dist")


def count_matching_points(a: torch.Tensor, b: torch.Tensor, atol: float = ATOL) -> int:
    """Number of points of `a` that coincide with some point of `b`."""
    return int((pairwise_distances(a, b).min(dim=1).values < atol).sum())


### Pytest Fixtures ###


@pytest.fixture(
    params=[
        "cpu",
        pytest.param("cuda", marks=pytest.mark.cuda),
    ]
)
def device(request):
    """Parametrize tests over all available devices (CPU, CUDA)."""
    return request.param


@pytest.fixture
def vertices():
    """The four tetrahedron vertices on the unit sphere, float64."""
    return tetrahedron_vertices(dtype=torch.float64)


@pytest.fixture
def edge_length(vertices):
    return torch.linalg.norm(vertices[0] - vertices[1]).item()
