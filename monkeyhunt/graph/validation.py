"""Structural validation of generated forests.

Checks the CSR-style invariants of a Forest (cheapest first) and returns
human-readable error strings instead of raising, so callers can log or
assert on the whole list.
"""

import logging

import numpy as np
from scipy.sparse.csgraph import connected_components

from monkeyhunt.graph.forest import Forest

log = logging.getLogger(__name__)


def validate_forest(forest: Forest) -> list[str]:
    """Validate a forest against its structural invariants.

    Checks:
    1. Forest is non-empty
    2. Array lengths: degrees (n), strides (n+1), neighbors (strides[n])
    3. strides[0] == 0 and strides[t+1] - strides[t] == degrees[t]
    4. Every degree >= 1
    5. Neighbor indices in [0, n), no self-loops, no duplicates
    6. Symmetry: u lists v iff v lists u

    Args:
        forest: Forest to check.

    Returns:
        List of error strings (empty = valid forest).
    """
    if not forest:
        return ["Forest is empty"]

    errors: list[str] = []
    n = forest.size
    degrees, strides, neighbors = forest.degrees, forest.strides, forest.neighbors

    # 2. Array lengths
    if degrees.size != n:
        errors.append(f"degrees has length {degrees.size}, expected {n}")
    if strides.size != n + 1:
        errors.append(f"strides has length {strides.size}, expected {n + 1}")
    if errors:
        return errors
    if neighbors.size != strides[n]:
        errors.append(
            f"neighbors has length {neighbors.size}, strides[n] = {strides[n]}"
        )
        return errors

    # 3. Strides are the prefix sums of degrees
    if strides[0] != 0:
        errors.append(f"strides[0] = {strides[0]}, expected 0")
    if not np.array_equal(np.diff(strides), degrees):
        errors.append("strides are not the prefix sums of degrees")
    if strides[n] % 2 != 0:
        errors.append(f"strides[n] = {strides[n]} is odd")

    # 4. No isolated trees
    isolated = np.flatnonzero(degrees < 1)
    if isolated.size:
        errors.append(f"Trees with degree 0: {isolated.tolist()}")

    # 5. Neighbor range, self-loops, duplicates
    if neighbors.size and (neighbors.min() < 0 or neighbors.max() >= n):
        errors.append("Neighbor index out of range")
        return errors
    adjacency = set()
    for tree in range(n):
        slice_ = neighbors[strides[tree] : strides[tree + 1]].tolist()
        if tree in slice_:
            errors.append(f"Self-loop on tree {tree}")
        if len(set(slice_)) != len(slice_):
            errors.append(f"Duplicate neighbors for tree {tree}")
        adjacency.update((tree, other) for other in slice_)

    # 6. Symmetry
    asymmetric = sorted((u, v) for u, v in adjacency if (v, u) not in adjacency)
    if asymmetric:
        errors.append(f"Asymmetric links: {asymmetric[:5]}")

    return errors


def count_components(forest: Forest) -> int:
    """Number of connected components of a non-empty forest."""
    if not forest:
        raise ValueError("Forest is empty")
    n_components, _ = connected_components(forest.to_csr(), directed=False)
    log.debug("Forest with %d trees has %d components", forest.size, n_components)
    return int(n_components)
