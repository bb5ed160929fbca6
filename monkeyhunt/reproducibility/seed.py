"""Centralized seed management for reproducible benchmarks.

Every random draw in the game (degree sequences, SIS edge selection,
target placement and jumps) goes through an explicitly passed
``numpy.random.Generator``. This module builds those generators from a
single master seed and seeds the global RNGs for any library code that
still relies on them.
"""

import random

import numpy as np


def set_seed(seed: int) -> None:
    """Seed the global RNG sources.

    Seeds are set in this order:

    1. Python random module
    2. NumPy legacy global RNG

    Args:
        seed: Master seed value (e.g., 42).
    """
    random.seed(seed)
    np.random.seed(seed)


def make_rng(seed: int | None) -> np.random.Generator:
    """Create the random source shared by one benchmark run.

    Args:
        seed: Master seed. None draws fresh OS entropy (not reproducible).

    Returns:
        A new PCG64-backed numpy Generator.
    """
    return np.random.default_rng(seed)


def derive_seed(seed: int, offset: int) -> int:
    """Derive a stable child seed, e.g. one per sweep point.

    Args:
        seed: Master seed.
        offset: Distinguishing offset (such as the node count).

    Returns:
        Integer seed in [0, 2**32).
    """
    return int(np.random.SeedSequence([seed, offset]).generate_state(1)[0])


def verify_seed_determinism(seed: int) -> bool:
    """Verify that seeding produces identical sequences.

    Draws 10 values from random, the numpy global RNG and a fresh
    Generator, re-seeds, draws again and compares. This is the self-test
    that proves seed control works.

    Args:
        seed: Seed value to test.

    Returns:
        True if all RNG sources produce identical sequences after re-seeding.
    """
    set_seed(seed)
    r1 = [random.random() for _ in range(10)]
    n1 = np.random.rand(10).tolist()
    g1 = make_rng(seed).integers(0, 1 << 30, size=10).tolist()

    set_seed(seed)
    r2 = [random.random() for _ in range(10)]
    n2 = np.random.rand(10).tolist()
    g2 = make_rng(seed).integers(0, 1 << 30, size=10).tolist()

    return r1 == r2 and n1 == n2 and g1 == g2
