"""Common interface of the hunter strategies.

A strategy is introduced to a forest once (bind), prepares for every hunt
(restart) and then proposes one tree per turn (shoot). Giving up is a
normal outcome of the game and is signalled with GIVE_UP, never with an
exception.
"""

from abc import ABC, abstractmethod

from monkeyhunt.graph.forest import Forest

GIVE_UP = -1


class StrategyNotBoundError(RuntimeError):
    """Raised when a strategy is bound to an empty forest or used before binding."""


class PursuitStrategy(ABC):
    """Abstract base class for hunter strategies."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier for the strategy (e.g., 'tracker', 'planner')."""
        ...

    @property
    @abstractmethod
    def is_bound(self) -> bool:
        """Whether bind() has been called with a generated forest."""
        ...

    @abstractmethod
    def bind(self, forest: Forest) -> bool:
        """Read the forest structure and prepare for hunting on it.

        Args:
            forest: A generated (non-empty) forest.

        Returns:
            False when the strategy cannot hunt on this forest and will
            only give up; True otherwise.

        Raises:
            StrategyNotBoundError: If the forest is empty.
        """
        ...

    @abstractmethod
    def restart(self) -> None:
        """Reset per-hunt state. The forest is unchanged."""
        ...

    @abstractmethod
    def shoot(self) -> int:
        """Return the tree shot this turn, or GIVE_UP."""
        ...

    def _require_bound(self) -> None:
        if not self.is_bound:
            raise StrategyNotBoundError(
                f"{self.name} strategy is not bound to a forest"
            )

    @staticmethod
    def _require_forest(forest: Forest) -> None:
        if not forest:
            raise StrategyNotBoundError("Cannot bind a strategy to an empty forest")
