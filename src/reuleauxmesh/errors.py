"""Exceptions raised while building a Reuleaux tetrahedron mesh.

All of them subclass ``ValueError`` so callers that already guard numeric
input with ``except ValueError`` keep working.
"""

from typing import Sequence


class ReuleauxMeshError(Exception):
    """Base class for every error raised by reuleauxmesh."""


class InvalidSampleStepError(ReuleauxMeshError, ValueError):
    """The sampling resolution is not a positive integer."""


class DegenerateTopologyError(ReuleauxMeshError, ValueError):
    """The requested resolution cannot produce a single triangle."""


class GeometricInfeasibilityError(ReuleauxMeshError, ValueError):
    """The target radius cannot be reached along the ray of some sample point.

    Attributes:
        point_indices: Row indices of the offending sample points.
    """

    def __init__(self, message: str, point_indices: Sequence[int] = ()):
        super().__init__(message)
        self.point_indices = list(point_indices)


class InvalidWarpError(ReuleauxMeshError, ValueError):
    """The warp exponent of the barycentric sampling is not a positive number."""
