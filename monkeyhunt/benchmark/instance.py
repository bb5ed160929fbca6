"""The monkey and its forest."""

import numpy as np

from monkeyhunt.config.experiment import GraphConfig
from monkeyhunt.graph.forest import Forest, generate_forest


class TargetInstance:
    """A generated forest plus the monkey's current tree."""

    def __init__(self) -> None:
        self.forest = Forest()
        self.position = -1

    def __bool__(self) -> bool:
        return bool(self.forest)

    def clear(self) -> None:
        self.forest.clear()
        self.position = -1

    def setup(self, config: GraphConfig, rng: np.random.Generator) -> Forest:
        """Generate a new forest and put the monkey somewhere in it."""
        self.forest = generate_forest(config, rng)
        self.restart(rng)
        return self.forest

    def restart(self, rng: np.random.Generator) -> int:
        """Put the monkey on a uniformly random tree."""
        if not self.forest:
            raise RuntimeError("No forest; call setup() first")
        self.position = int(rng.integers(0, self.forest.size))
        return self.position

    def jump(self, rng: np.random.Generator) -> int:
        """Move the monkey to a random neighbor of its tree."""
        self.position = self.forest.random_neighbor(self.position, rng)
        return self.position

    def describe(self) -> str:
        return f"{self.forest.describe()}\nCurrent tree is: {self.position}"
