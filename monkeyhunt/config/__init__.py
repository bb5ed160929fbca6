"""Benchmark configuration system with frozen, hashable, serializable dataclasses."""

from monkeyhunt.config.experiment import (
    MAX_PLANNER_NODES,
    BenchmarkConfig,
    ExperimentConfig,
    GraphConfig,
    PlannerConfig,
    SweepConfig,
    TrackerConfig,
)
from monkeyhunt.config.defaults import ANCHOR_CONFIG, SWEEP_CONFIG
from monkeyhunt.config.hashing import config_hash, full_config_hash, game_config_hash
from monkeyhunt.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "MAX_PLANNER_NODES",
    "ExperimentConfig",
    "GraphConfig",
    "TrackerConfig",
    "PlannerConfig",
    "BenchmarkConfig",
    "SweepConfig",
    "ANCHOR_CONFIG",
    "SWEEP_CONFIG",
    "config_hash",
    "full_config_hash",
    "game_config_hash",
    "config_to_json",
    "config_from_json",
    "config_to_dict",
    "config_from_dict",
]
