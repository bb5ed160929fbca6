#!/usr/bin/env python3
"""Entry point for benchmarking hunter strategies on random forests.

Runs the exact planner and the probabilistic tracker against the same
jumping monkey, either for a single forest size or for a sweep of sizes,
then prints the statistics, writes result.json and plots the comparison.

Usage:
    python run_benchmark.py
    python run_benchmark.py --n 10 --instances 100 --trials 10 --seed 7
    python run_benchmark.py --sweep
    python run_benchmark.py --config config.json --dry-run
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Generator

from monkeyhunt.config import (
    ANCHOR_CONFIG,
    ExperimentConfig,
    SweepConfig,
    config_from_json,
    full_config_hash,
)
from monkeyhunt.results import generate_experiment_id

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_pipeline(
    config: ExperimentConfig, results_dir: str = "results", plot: bool = True
) -> Path:
    """Run the benchmark(s) described by config and write all outputs.

    Args:
        config: Benchmark configuration.
        results_dir: Base directory for results output.
        plot: Whether to render the comparison figure.

    Returns:
        Path to the output directory.
    """
    # Lazy imports to keep --dry-run fast
    from monkeyhunt.benchmark import run_benchmark, run_sweep
    from monkeyhunt.reporting import build_reproduction_block, format_report
    from monkeyhunt.reproducibility import make_rng, set_seed
    from monkeyhunt.results import build_result, write_result
    from monkeyhunt.visualization import render_sweep

    experiment_id = generate_experiment_id(config)

    with stage_timer("Reproducibility Seeding"):
        set_seed(config.seed)
        log.info("Seed set: %d", config.seed)

    with stage_timer("Benchmark"):
        if config.sweep is not None:
            results = run_sweep(config)
        else:
            results = [run_benchmark(config, make_rng(config.seed))]

    with stage_timer("Write Result JSON"):
        result = build_result(config, results, experiment_id=experiment_id)
        result_path = write_result(result, results_dir)
        output_dir = result_path.parent

    figures: tuple[Path, ...] = ()
    if plot:
        with stage_timer("Visualization"):
            figures = render_sweep(results, output_dir)
            log.info("Generated %d figure files", len(figures))

    print()
    print(
        format_report(
            results,
            experiment_id=experiment_id,
            reproduction=build_reproduction_block(result),
        )
    )
    print(f"Result:  {result_path}")
    if figures:
        print(f"Figures: {', '.join(str(p) for p in figures)}")
    return output_dir


def build_config(args: argparse.Namespace) -> ExperimentConfig:
    """Start from --config (or the anchor config) and apply CLI overrides."""
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        config = config_from_json(config_path.read_text())
    else:
        config = ANCHOR_CONFIG

    graph = config.graph
    benchmark = config.benchmark
    if args.n is not None:
        graph = replace(graph, n=args.n)
    if args.instances is not None:
        benchmark = replace(benchmark, n_instances=args.instances)
    if args.trials is not None:
        benchmark = replace(benchmark, n_trials=args.trials)

    sweep = config.sweep
    if args.sweep and sweep is None:
        sweep = SweepConfig()

    return replace(
        config,
        graph=graph,
        benchmark=benchmark,
        sweep=sweep,
        seed=args.seed if args.seed is not None else config.seed,
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Benchmark hunter strategies against a jumping monkey"
    )
    parser.add_argument("--config", type=str, help="Path to config JSON file")
    parser.add_argument("--n", type=int, help="Number of trees")
    parser.add_argument("--instances", type=int, help="Forests per benchmark")
    parser.add_argument("--trials", type=int, help="Hunts per forest")
    parser.add_argument("--seed", type=int, help="Master seed")
    parser.add_argument(
        "--sweep",
        action="store_true",
        help="Sweep forest sizes 6..21 with n^2 instances and n trials",
    )
    parser.add_argument(
        "--results-dir", type=str, default="results", help="Base output directory"
    )
    parser.add_argument(
        "--no-plot", action="store_true", help="Skip the comparison figure"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the benchmark plan without running it",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable DEBUG-level logging"
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
    except ValueError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        sys.exit(1)

    experiment_id = generate_experiment_id(config)
    print(f"Experiment ID: {experiment_id}")
    print(f"Config hash:   {full_config_hash(config)}")
    print()
    if config.sweep is not None:
        print(f"Sweep:     n={list(config.sweep.n_values)}, "
              f"instances=n^{config.sweep.instance_exponent}, "
              f"trials=n^{config.sweep.trial_exponent}")
    else:
        print(f"Forest:    n={config.graph.n}")
        print(f"Benchmark: instances={config.benchmark.n_instances}, "
              f"trials={config.benchmark.n_trials}")
    print(f"Tracker:   epsilon={config.tracker.epsilon}")
    print(f"Planner:   max_nodes={config.planner.max_nodes}")
    print(f"Seed:      {config.seed}")

    if args.dry_run:
        print(f"\nBenchmark plan for experiment {experiment_id}:")
        print(f"  1. Set seed: {config.seed}")
        print("  2. Generate forests and run planner vs tracker")
        print("  3. Write result.json")
        if not args.no_plot:
            print("  4. Plot strategy comparison to figures/")
        print(f"\nOutput: {args.results_dir}/{experiment_id}/")
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(config, args.results_dir, plot=not args.no_plot)
    except Exception:
        log.exception("Benchmark failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
