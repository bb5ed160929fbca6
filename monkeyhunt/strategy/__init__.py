"""Hunter strategies: the probabilistic tracker and the exact planner."""

from monkeyhunt.config.experiment import ExperimentConfig
from monkeyhunt.strategy.base import GIVE_UP, PursuitStrategy, StrategyNotBoundError
from monkeyhunt.strategy.planner import (
    ExactPlanner,
    jump_set,
    plan_shot_sequence,
    verify_shot_sequence,
)
from monkeyhunt.strategy.tracker import ProbabilisticTracker

STRATEGY_NAMES: tuple[str, ...] = ("planner", "tracker")


def create_strategy(name: str, config: ExperimentConfig) -> PursuitStrategy:
    """Build a strategy by name from the experiment configuration.

    Args:
        name: One of STRATEGY_NAMES.
        config: Experiment configuration.

    Returns:
        An unbound strategy.
    """
    if name == "tracker":
        return ProbabilisticTracker(epsilon=config.tracker.epsilon)
    if name == "planner":
        return ExactPlanner(
            max_nodes=config.planner.max_nodes,
            max_states=config.planner.max_states,
        )
    raise ValueError(f"Unknown strategy {name!r}, expected one of {STRATEGY_NAMES}")


__all__ = [
    "GIVE_UP",
    "STRATEGY_NAMES",
    "ExactPlanner",
    "ProbabilisticTracker",
    "PursuitStrategy",
    "StrategyNotBoundError",
    "create_strategy",
    "jump_set",
    "plan_shot_sequence",
    "verify_shot_sequence",
]
