"""Where the hunters compete to shoot the monkey.

A benchmark uses a fixed number of trees. For each instance a new random
forest is generated; the monkey is then placed at a random tree n_trials
times, and every hunter chases the same monkey: each turn, every hunter
still in the game fires once, then the monkey jumps.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from monkeyhunt.benchmark.instance import TargetInstance
from monkeyhunt.benchmark.statistics import ResultStatistics, compute_statistics
from monkeyhunt.config.experiment import ExperimentConfig, GraphConfig
from monkeyhunt.strategy import STRATEGY_NAMES, create_strategy
from monkeyhunt.strategy.base import GIVE_UP, PursuitStrategy

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Outcomes and statistics of one benchmark, keyed by strategy name."""

    n_trees: int
    n_instances: int
    n_trials: int
    outcomes: dict[str, np.ndarray]  # int array of length n_instances * n_trials
    statistics: dict[str, ResultStatistics]
    bind_failures: dict[str, int] = field(default_factory=dict)
    elapsed_seconds: float = 0.0

    def to_dict(self) -> dict:
        return {
            "n_trees": self.n_trees,
            "n_instances": self.n_instances,
            "n_trials": self.n_trials,
            "elapsed_seconds": self.elapsed_seconds,
            "bind_failures": dict(self.bind_failures),
            "statistics": {k: s.to_dict() for k, s in self.statistics.items()},
        }


class Benchmark:
    """Runs registered hunters against the same monkey on random forests."""

    def __init__(self) -> None:
        self.clear()

    def clear(self) -> None:
        self.graph = GraphConfig()
        self.n_instances = 0
        self.n_trials = 0
        self.max_turns = 100_000
        self.record_timing = True
        self.hunters: list[PursuitStrategy] = []
        self.instance = TargetInstance()
        self._counts: dict[str, list[int]] = {}
        self._times: dict[str, list[float]] = {}
        self._bind_failures: dict[str, int] = {}

    def __bool__(self) -> bool:
        return bool(self.hunters) and self.n_instances * self.n_trials > 0

    def setup(
        self,
        graph: GraphConfig,
        n_instances: int,
        n_trials: int,
        max_turns: int = 100_000,
        record_timing: bool = True,
    ) -> None:
        """Set the forest parameters and the instance/trial counts."""
        if n_instances < 1 or n_trials < 1:
            raise ValueError(
                f"Need at least one instance and one trial, got "
                f"{n_instances} and {n_trials}"
            )
        self.graph = graph
        self.n_instances = n_instances
        self.n_trials = n_trials
        self.max_turns = max_turns
        self.record_timing = record_timing
        log.info(
            "Benchmark setup: trees=%d, instances=%d, trials=%d",
            graph.n,
            n_instances,
            n_trials,
        )

    def set_hunters(self, *hunters: PursuitStrategy) -> None:
        """Register the competing strategies (names must be unique)."""
        names = [h.name for h in hunters]
        if len(set(names)) != len(names):
            raise ValueError(f"Hunter names must be unique, got {names}")
        self.hunters = list(hunters)

    def run(self, rng: np.random.Generator) -> BenchmarkResult:
        """Run every instance and summarize the outcomes.

        Raises:
            RuntimeError: If setup() or set_hunters() has not been called.
            GraphGenerationError: If a forest cannot be generated.
        """
        if not self:
            raise RuntimeError("Benchmark is not ready; call setup() and set_hunters()")

        names = [h.name for h in self.hunters]
        self._counts = {name: [] for name in names}
        self._times = {name: [] for name in names}
        self._bind_failures = {name: 0 for name in names}

        t0 = time.monotonic()
        for i in range(self.n_instances):
            forest = self.instance.setup(self.graph, rng)
            for hunter in self.hunters:
                if not hunter.bind(forest):
                    self._bind_failures[hunter.name] += 1
            log.debug("Instance %d: %d links", i, forest.n_links)
            self._run_instance(rng)
        elapsed = time.monotonic() - t0

        outcomes = {
            name: np.asarray(counts, dtype=np.int64)
            for name, counts in self._counts.items()
        }
        statistics = {
            name: compute_statistics(
                outcomes[name], self._times[name] if self.record_timing else None
            )
            for name in names
        }
        log.info(
            "Benchmark with %d trees finished in %.1fs (%s)",
            self.graph.n,
            elapsed,
            ", ".join(
                f"{name}: {s.success_ratio:.2%}" for name, s in statistics.items()
            ),
        )
        return BenchmarkResult(
            n_trees=self.graph.n,
            n_instances=self.n_instances,
            n_trials=self.n_trials,
            outcomes=outcomes,
            statistics=statistics,
            bind_failures=dict(self._bind_failures),
            elapsed_seconds=elapsed,
        )

    def _run_instance(self, rng: np.random.Generator) -> None:
        """Run all trials on the current forest."""
        for _ in range(self.n_trials):
            monkey = self.instance.restart(rng)
            counts = {}
            done = {}
            for hunter in self.hunters:
                hunter.restart()
                counts[hunter.name] = 0
                done[hunter.name] = False

            turns = 0
            while not all(done.values()):
                if turns >= self.max_turns:
                    for name in done:
                        if not done[name]:
                            log.warning(
                                "%s still hunting after %d turns; recorded as give-up",
                                name,
                                turns,
                            )
                            counts[name] = GIVE_UP
                            done[name] = True
                    break

                for hunter in self.hunters:
                    if not done[hunter.name]:
                        counts[hunter.name], done[hunter.name] = self._run_shooting(
                            hunter, monkey, counts[hunter.name]
                        )
                monkey = self.instance.jump(rng)
                turns += 1

            for name, count in counts.items():
                self._counts[name].append(count)

    def _run_shooting(
        self, hunter: PursuitStrategy, monkey: int, count: int
    ) -> tuple[int, bool]:
        """Let one hunter fire once.

        Returns:
            (updated shot count, whether the hunter is out of the game).
        """
        t0 = time.perf_counter()
        shot = hunter.shoot()
        if self.record_timing:
            self._times[hunter.name].append(time.perf_counter() - t0)

        if shot == GIVE_UP:
            return GIVE_UP, True
        if not 0 <= shot < self.instance.forest.size:
            raise ValueError(f"{hunter.name} shot tree {shot} outside the forest")
        return count + 1, shot == monkey


def run_benchmark(
    config: ExperimentConfig,
    rng: np.random.Generator,
    hunters: Sequence[PursuitStrategy] | None = None,
) -> BenchmarkResult:
    """Run one benchmark as described by the configuration.

    Args:
        config: Experiment configuration (graph and benchmark sections).
        rng: Random source shared by forest generation and the monkey.
        hunters: Strategies to compare. Defaults to every strategy in
            STRATEGY_NAMES built from the config.

    Returns:
        BenchmarkResult with per-strategy outcomes and statistics.
    """
    if hunters is None:
        hunters = [create_strategy(name, config) for name in STRATEGY_NAMES]

    benchmark = Benchmark()
    benchmark.setup(
        config.graph,
        config.benchmark.n_instances,
        config.benchmark.n_trials,
        max_turns=config.benchmark.max_turns,
        record_timing=config.benchmark.record_timing,
    )
    benchmark.set_hunters(*hunters)
    return benchmark.run(rng)
