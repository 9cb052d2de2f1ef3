"""Validation of user-facing arguments, run before any geometry is computed."""

import math
import numbers

from reuleauxmesh.errors import InvalidSampleStepError, InvalidWarpError


def validate_n_steps(n_steps) -> int:
    """Check that ``n_steps`` is a positive integer and return it as an ``int``.

    Powers of two are the conventional choice, but any positive integer
    produces a valid mesh.

    Raises:
        InvalidSampleStepError: If ``n_steps`` is not an integer (bools are
            rejected too) or is not positive.
    """
    if isinstance(n_steps, bool) or not isinstance(n_steps, numbers.Integral):
        raise InvalidSampleStepError(
            f"`n_steps` must be a positive integer, but got {n_steps=!r} of type {type(n_steps).__name__}."
        )
    if n_steps <= 0:
        raise InvalidSampleStepError(
            f"`n_steps` must be a positive integer, but got {n_steps=}."
        )
    return int(n_steps)


def validate_warp(warp) -> float:
    """Check that ``warp`` is a positive, finite real number and return it as a ``float``.

    Raises:
        InvalidWarpError: If ``warp`` is not a real number (bools are rejected
            too), is not finite, or is not positive.
    """
    if isinstance(warp, bool) or not isinstance(warp, numbers.Real):
        raise InvalidWarpError(
            f"`warp` must be a positive number, but got {warp=!r} of type {type(warp).__name__}."
        )
    if not math.isfinite(warp) or warp <= 0:
        raise InvalidWarpError(f"`warp` must be a positive number, but got {warp=}.")
    return float(warp)
