"""Anchor configuration: the single source of truth for default benchmark parameters."""

from monkeyhunt.config.experiment import ExperimentConfig, SweepConfig

# Anchor config with all default values: n=6, 36 instances, 6 trials,
# epsilon=1e-10, planner bound 21, seed=42.
ANCHOR_CONFIG = ExperimentConfig()

# Full sweep over forest sizes 6..21 with n^2 instances and n trials each.
SWEEP_CONFIG = ExperimentConfig(sweep=SweepConfig())
