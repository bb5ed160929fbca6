"""Benchmark identity hashes.

A benchmark is identified by the SHA-256 of its config serialized as
sorted, compact JSON. The full hash covers every field. The game hash
drops the run labels (seed, description, tags) and so names the forest
size, strategy parameters and benchmark counts alone: repeated runs of the
same game share it in result.json metadata.
"""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from monkeyhunt.config.experiment import ExperimentConfig

# Run labels that do not change which game is played
RUN_LABEL_FIELDS = ("seed", "description", "tags")

HASH_LENGTH = 16


def _drop_field(d: dict[str, Any], field_path: str) -> None:
    """Drop a dotted path such as "benchmark.record_timing" if present."""
    *parents, leaf = field_path.split(".")
    for part in parents:
        d = d.get(part)
        if not isinstance(d, dict):
            return
    d.pop(leaf, None)


def _canonical_json(d: dict[str, Any]) -> str:
    return json.dumps(d, sort_keys=True, ensure_ascii=True, separators=(",", ":"))


def config_hash(config: Any, exclude_fields: list[str] | None = None) -> str:
    """Hash a config dataclass (or any of its sections).

    Args:
        config: ExperimentConfig or a section such as GraphConfig.
        exclude_fields: Dotted field paths left out of the hash.

    Returns:
        First HASH_LENGTH hex characters of the SHA-256 digest.
    """
    d = asdict(config)
    for field_path in exclude_fields or ():
        _drop_field(d, field_path)
    digest = hashlib.sha256(_canonical_json(d).encode("utf-8")).hexdigest()
    return digest[:HASH_LENGTH]


def full_config_hash(config: ExperimentConfig) -> str:
    """Hash for full benchmark identity, seed included."""
    return config_hash(config)


def game_config_hash(config: ExperimentConfig) -> str:
    """Hash of the game parameters only (run labels excluded)."""
    return config_hash(config, exclude_fields=list(RUN_LABEL_FIELDS))
