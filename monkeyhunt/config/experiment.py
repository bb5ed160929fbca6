"""Benchmark configuration dataclasses, all frozen and slotted."""

from dataclasses import dataclass, field

# Bitmask state space of the exact planner: one bit per node, 2**21 states.
MAX_PLANNER_NODES = 21


@dataclass(frozen=True, slots=True)
class GraphConfig:
    """Random forest generation parameters."""

    n: int = 6  # number of trees (nodes)
    max_sequence_attempts: int = 10_000  # degree sequence draws per forest attempt
    max_generation_attempts: int = 1_000  # full pipeline restarts
    require_connected: bool = False  # extra guard on top of degree >= 1


@dataclass(frozen=True, slots=True)
class TrackerConfig:
    """Probabilistic tracker parameters."""

    epsilon: float = 1e-10  # belief rescaling threshold


@dataclass(frozen=True, slots=True)
class PlannerConfig:
    """Exact planner parameters."""

    max_nodes: int = MAX_PLANNER_NODES
    max_states: int | None = None  # cap on visited location sets


@dataclass(frozen=True, slots=True)
class BenchmarkConfig:
    """Benchmark loop parameters."""

    n_instances: int = 36  # forests generated per benchmark
    n_trials: int = 6  # target placements per forest
    max_turns: int = 100_000  # safety cap per trial
    record_timing: bool = True


@dataclass(frozen=True, slots=True)
class SweepConfig:
    """Node-count sweep schedule: n**instance_exponent instances, n**trial_exponent trials."""

    n_values: tuple[int, ...] = tuple(range(6, 22))
    instance_exponent: int = 2
    trial_exponent: int = 1


@dataclass(frozen=True, slots=True)
class ExperimentConfig:
    """Top-level configuration composing all sub-configs.

    All fields are frozen and typed. Cross-parameter validation runs
    in __post_init__ to reject invalid configurations early.
    """

    graph: GraphConfig = field(default_factory=GraphConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)
    sweep: SweepConfig | None = None
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Cross-parameter validation."""
        if self.graph.n < 2:
            raise ValueError(f"graph.n must be >= 2, got {self.graph.n}")
        if self.graph.max_sequence_attempts < 1:
            raise ValueError("graph.max_sequence_attempts must be >= 1")
        if self.graph.max_generation_attempts < 1:
            raise ValueError("graph.max_generation_attempts must be >= 1")
        if not 0.0 < self.tracker.epsilon < 1.0:
            raise ValueError(
                f"tracker.epsilon must be in (0, 1), got {self.tracker.epsilon}"
            )
        if not 2 <= self.planner.max_nodes <= MAX_PLANNER_NODES:
            raise ValueError(
                f"planner.max_nodes must be in [2, {MAX_PLANNER_NODES}], "
                f"got {self.planner.max_nodes}"
            )
        if self.planner.max_states is not None and self.planner.max_states < 1:
            raise ValueError("planner.max_states must be >= 1 when set")
        if self.benchmark.n_instances < 1 or self.benchmark.n_trials < 1:
            raise ValueError(
                f"benchmark needs at least one instance and one trial, got "
                f"n_instances={self.benchmark.n_instances}, "
                f"n_trials={self.benchmark.n_trials}"
            )
        if self.benchmark.max_turns < 1:
            raise ValueError("benchmark.max_turns must be >= 1")
        if self.sweep is not None:
            if not self.sweep.n_values:
                raise ValueError("sweep.n_values must not be empty")
            if min(self.sweep.n_values) < 2:
                raise ValueError(
                    f"sweep.n_values must all be >= 2, got {self.sweep.n_values}"
                )
            if self.sweep.instance_exponent < 0 or self.sweep.trial_exponent < 0:
                raise ValueError("sweep exponents must be >= 0")
