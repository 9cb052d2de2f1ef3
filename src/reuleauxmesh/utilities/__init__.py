"""Utility functions for reuleauxmesh."""

from reuleauxmesh.utilities._cache import is_cached_key, strip_cached

__all__ = [
    "is_cached_key",
    "strip_cached",
]
