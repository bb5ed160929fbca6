"""Benchmark of hunter strategies: the monkey instance, the runner and statistics."""

from monkeyhunt.benchmark.instance import TargetInstance
from monkeyhunt.benchmark.runner import Benchmark, BenchmarkResult, run_benchmark
from monkeyhunt.benchmark.statistics import ResultStatistics, compute_statistics
from monkeyhunt.benchmark.sweep import point_config, run_sweep, sweep_points

__all__ = [
    "Benchmark",
    "BenchmarkResult",
    "ResultStatistics",
    "TargetInstance",
    "compute_statistics",
    "point_config",
    "run_benchmark",
    "run_sweep",
    "sweep_points",
]
