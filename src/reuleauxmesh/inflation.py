"""Radial inflation of a point sample onto a sphere.

Each point U is moved along the ray from the origin through U to the point
t * U whose distance to a reference vertex X equals a target radius rho.
Solving ||t U - X||^2 = rho^2 for t gives

    ||U||^2 t^2 - 2 (U . X) t + (||X||^2 - rho^2) = 0

and the larger root is kept, which selects the intersection on the far side of
the sphere centered at X: the flat sample bulges away from X.
"""

import logging

import torch

from reuleauxmesh.errors import GeometricInfeasibilityError
from reuleauxmesh.mesh import Mesh
from reuleauxmesh.utilities import strip_cached

logger = logging.getLogger(__name__)

_MAX_REPORTED_POINTS = 5


def inflation_factors(
    points: torch.Tensor,
    reference: torch.Tensor,
    radius: float,
) -> torch.Tensor:
    """Compute the scale factor t of every point.

    With the reduced coefficients a = ||U||^2, p = U . X and c = ||X||^2 - rho^2,
    the roots are (p +/- sqrt(p^2 - a c)) / a. When p >= 0 the larger root is
    evaluated directly; when p < 0 the sum p + sqrt(D) cancels, so the product
    of the roots (c / a) is used instead: t = c / (p - sqrt(D)).

    Args:
        points: Points U, shape (n_points, n_spatial_dims).
        reference: Reference vertex X, shape (n_spatial_dims,).
        radius: Target distance rho between t * U and X.

    Returns:
        Tensor of shape (n_points,).

    Raises:
        GeometricInfeasibilityError: If the ray of some point never reaches the
            sphere of radius ``radius`` around ``reference`` (negative
            discriminant), or if some point sits at the origin.
    """
    reference = torch.as_tensor(reference, dtype=points.dtype, device=points.device)

    a = (points * points).sum(dim=-1)
    p = (points * reference).sum(dim=-1)
    c = (reference * reference).sum() - radius**2
    discriminant = p * p - a * c

    ### Fail fast on rays that cannot reach the target sphere
    at_origin = a == 0
    if at_origin.any():
        bad = torch.nonzero(at_origin).flatten().tolist()
        raise GeometricInfeasibilityError(
            f"Cannot inflate points lying at the origin: no ray through them exists.\n"
            f"Offending point indices (first {_MAX_REPORTED_POINTS}): {bad[:_MAX_REPORTED_POINTS]}",
            point_indices=bad,
        )
    unreachable = discriminant < 0
    if unreachable.any():
        bad = torch.nonzero(unreachable).flatten().tolist()
        raise GeometricInfeasibilityError(
            f"Target radius {radius=} is unreachable from the reference vertex for "
            f"{len(bad)} of {len(points)} points (negative discriminant).\n"
            f"Offending point indices (first {_MAX_REPORTED_POINTS}): {bad[:_MAX_REPORTED_POINTS]}",
            point_indices=bad,
        )

    sqrt_discriminant = discriminant.sqrt()
    # Division by zero only happens on the unused branch, torch.where discards it
    direct = (p + sqrt_discriminant) / a
    via_product = c / (p - sqrt_discriminant)
    return torch.where(p >= 0, direct, via_product)


def inflate_from_vertex(
    points: torch.Tensor,
    reference: torch.Tensor,
    radius: float,
) -> torch.Tensor:
    """Project points radially onto the sphere of ``radius`` centered at ``reference``.

    Args:
        points: Points U, shape (n_points, n_spatial_dims).
        reference: Reference vertex X, shape (n_spatial_dims,).
        radius: Target distance between every output point and X.

    Returns:
        Tensor of shape (n_points, n_spatial_dims) with rows t * U.
    """
    t = inflation_factors(points, reference, radius)
    return t.unsqueeze(-1) * points


def inflate_mesh(mesh: Mesh, reference: torch.Tensor, radius: float) -> Mesh:
    """Inflate the points of a mesh, keeping its cells and non-cached data.

    Example:
        >>> curved = inflate_mesh(flat_face, reference=vertices[3], radius=edge_length())
    """
    logger.debug(
        "Inflating %d points onto sphere of radius %.6g", mesh.n_points, radius
    )
    return Mesh(
        points=inflate_from_vertex(mesh.points, reference, radius),
        cells=mesh.cells,
        point_data=strip_cached(mesh.point_data),
        cell_data=strip_cached(mesh.cell_data),
    )
