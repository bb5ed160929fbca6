"""Benchmarks over a range of forest sizes."""

import logging
from dataclasses import replace

from monkeyhunt.benchmark.runner import BenchmarkResult, run_benchmark
from monkeyhunt.config.experiment import ExperimentConfig, SweepConfig
from monkeyhunt.reproducibility.seed import derive_seed, make_rng

log = logging.getLogger(__name__)


def sweep_points(sweep: SweepConfig) -> list[tuple[int, int, int]]:
    """(n_trees, n_instances, n_trials) for every node count of a sweep."""
    return [
        (n, n**sweep.instance_exponent, n**sweep.trial_exponent)
        for n in sweep.n_values
    ]


def point_config(
    config: ExperimentConfig, n: int, n_instances: int, n_trials: int
) -> ExperimentConfig:
    """Config of a single sweep point (sweep section removed)."""
    return replace(
        config,
        graph=replace(config.graph, n=n),
        benchmark=replace(
            config.benchmark, n_instances=n_instances, n_trials=n_trials
        ),
        sweep=None,
    )


def run_sweep(config: ExperimentConfig) -> list[BenchmarkResult]:
    """Run one benchmark per node count of config.sweep.

    Every point draws from its own generator seeded from (seed, n), so a
    single point can be reproduced without running the ones before it.

    Raises:
        ValueError: If config.sweep is None.
    """
    if config.sweep is None:
        raise ValueError("Config has no sweep section")

    results = []
    for n, n_instances, n_trials in sweep_points(config.sweep):
        log.info(
            "Starting benchmark with %d trees (%d instances, %d trials)",
            n,
            n_instances,
            n_trials,
        )
        rng = make_rng(derive_seed(config.seed, n))
        results.append(
            run_benchmark(point_config(config, n, n_instances, n_trials), rng)
        )
    return results
