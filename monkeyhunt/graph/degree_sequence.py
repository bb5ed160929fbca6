"""Random graphic degree sequences.

A candidate sequence draws every degree uniformly from {1, ..., n-1} and
is kept only when it passes the Erdős–Gallai characterization:

    Erdős, P. and Gallai, T. "Graphs with Prescribed Degrees of Vertices"
    Mat. Lapok. 11, 264-274, 1960
"""

import logging

import numpy as np

from monkeyhunt.graph.errors import DegreeSequenceError

log = logging.getLogger(__name__)


def generate_degree_sequence(n: int, rng: np.random.Generator) -> np.ndarray:
    """Sample n degrees independently and uniformly from {1, ..., n-1}.

    Args:
        n: Number of nodes (>= 2).
        rng: Random source.

    Returns:
        int64 array of shape (n,).
    """
    if n < 2:
        raise ValueError(f"Degree sequences need at least 2 nodes, got {n}")
    return rng.integers(1, n, size=n, dtype=np.int64)


def graphic_sequence_test(degrees: np.ndarray | list[int]) -> bool:
    """Test whether a degree sequence is realizable by a simple graph.

    With d sorted in non-increasing order, d is graphic iff sum(d) is even
    and for every r in 1..n:

        d_1 + ... + d_r <= r(r-1) + sum_{k>r} min(r, d_k)

    Args:
        degrees: Sequence of non-negative integers, length >= 2.

    Returns:
        True if the sequence is graphic.
    """
    d = np.sort(np.asarray(degrees, dtype=np.int64))[::-1]
    n = d.size
    if n < 2 or d[-1] < 0:
        return False
    if int(d.sum()) % 2 == 1:
        return False

    prefix = np.cumsum(d)
    for r in range(1, n + 1):
        tail = int(np.minimum(d[r:], r).sum())
        if prefix[r - 1] > r * (r - 1) + tail:
            return False
    return True


def generate_graphic_sequence(
    n: int, rng: np.random.Generator, max_attempts: int = 10_000
) -> np.ndarray:
    """Draw degree sequences until one is graphic.

    Args:
        n: Number of nodes (>= 2).
        rng: Random source.
        max_attempts: Draws allowed before giving up.

    Returns:
        The first graphic sequence drawn, in its random (unsorted) order.

    Raises:
        DegreeSequenceError: If no draw passes within max_attempts.
    """
    for attempt in range(max_attempts):
        d = generate_degree_sequence(n, rng)
        if graphic_sequence_test(d):
            log.debug("Graphic sequence found on draw %d: %s", attempt, d.tolist())
            return d

    raise DegreeSequenceError(
        f"No graphic degree sequence for n={n} after {max_attempts} draws"
    )
