"""Reproducibility infrastructure: seed management and code provenance tracking."""

from monkeyhunt.reproducibility.seed import (
    derive_seed,
    make_rng,
    set_seed,
    verify_seed_determinism,
)
from monkeyhunt.reproducibility.git_hash import get_git_hash

__all__ = [
    "set_seed",
    "make_rng",
    "derive_seed",
    "verify_seed_determinism",
    "get_git_hash",
]
