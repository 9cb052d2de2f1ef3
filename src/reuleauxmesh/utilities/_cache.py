"""Handling of derived quantities cached inside mesh data.

Mesh properties such as `cell_normals` store their results in `cell_data` /
`point_data` under keys starting with an underscore. Any operation that moves
points or reorders cells must drop those entries instead of carrying them over.
"""

from tensordict import TensorDict


def is_cached_key(key: str) -> bool:
    return key.startswith("_")


def strip_cached(data: TensorDict) -> TensorDict:
    """Return a copy of `data` without the cached (underscore-prefixed) entries."""
    return data.exclude(*[k for k in data.keys() if is_cached_key(k)])
