"""Experiment ID generation with scannable parameter slug format."""

from datetime import datetime, timezone

from monkeyhunt.config.experiment import ExperimentConfig


def generate_experiment_id(config: ExperimentConfig) -> str:
    """Generate a scannable experiment ID from config parameters.

    Format: n{n}_i{instances}_t{trials}_s{seed}_{YYYYMMDD}_{HHMMSS}
    Example: n6_i36_t6_s42_20261019_143012

    Sweeps use the node range instead: n6-21_sweep_s42_{YYYYMMDD}_{HHMMSS}.
    """
    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    if config.sweep is not None:
        n_values = config.sweep.n_values
        return f"n{min(n_values)}-{max(n_values)}_sweep_s{config.seed}_{ts}"
    return (
        f"n{config.graph.n}"
        f"_i{config.benchmark.n_instances}"
        f"_t{config.benchmark.n_trials}"
        f"_s{config.seed}"
        f"_{ts}"
    )
