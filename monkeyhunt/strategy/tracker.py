"""Most-likely-location hunter.

Keeps a belief distribution over the monkey's tree and always shoots the
most likely tree. After each shot the belief is pushed one jump forward
through the forest:

    pi_new[t] = sum over neighbors u of t, u != shot, of pi_old[u] / deg(u)

The shot tree sends no mass forward: if the monkey had been there, it
would be dead. The belief is never renormalized; when its maximum falls
below epsilon both buffers are divided by epsilon instead.
"""

import logging

import numpy as np

from monkeyhunt.graph.forest import Forest
from monkeyhunt.strategy.base import PursuitStrategy

log = logging.getLogger(__name__)


class ProbabilisticTracker(PursuitStrategy):
    """Belief-propagation hunter with double-buffered belief vectors.

    Two owned buffers alternate between the roles "current" and
    "previous"; ``_current`` holds the index (0 or 1) of the current one.
    Each shot flips the role and recomputes the new current buffer from
    scratch out of the previous one.
    """

    def __init__(self, epsilon: float = 1e-10) -> None:
        if not 0.0 < epsilon < 1.0:
            raise ValueError(f"epsilon must be in (0, 1), got {epsilon}")
        self.epsilon = epsilon
        self._buffers: tuple[np.ndarray, np.ndarray] | None = None
        self._current = 0
        self._degrees = np.zeros(0)
        self._neighbors = np.zeros(0, dtype=np.int64)
        self._starts = np.zeros(0, dtype=np.int64)
        self.n_nodes = 0
        self.next_shot = 0
        self.shot_count = 0

    @property
    def name(self) -> str:
        return "tracker"

    @property
    def is_bound(self) -> bool:
        return self._buffers is not None

    @property
    def current(self) -> np.ndarray:
        """Belief after the latest shot."""
        self._require_bound()
        return self._buffers[self._current]

    @property
    def previous(self) -> np.ndarray:
        """Belief before the latest shot."""
        self._require_bound()
        return self._buffers[1 - self._current]

    def bind(self, forest: Forest) -> bool:
        self._require_forest(forest)
        self.n_nodes = forest.size
        self._degrees = forest.degrees.astype(np.float64)
        self._neighbors = forest.neighbors.copy()
        self._starts = forest.strides[:-1].copy()
        self._buffers = (np.empty(self.n_nodes), np.empty(self.n_nodes))
        self.restart()
        return True

    def restart(self) -> None:
        """Reset both buffers to the uniform distribution."""
        self._require_bound()
        for buffer in self._buffers:
            buffer.fill(1.0 / self.n_nodes)
        self._current = 0
        self.next_shot = 0
        self.shot_count = 0

    def swap(self) -> None:
        """Flip the current/previous roles without copying."""
        self._current = 1 - self._current

    def shoot(self) -> int:
        self._require_bound()
        tree = self.next_shot
        self.shot_count += 1

        self.swap()
        previous = self._buffers[1 - self._current]
        current = self._buffers[self._current]

        # Outgoing mass per tree; the shot tree contributes nothing
        outflow = previous / self._degrees
        outflow[tree] = 0.0
        current[:] = np.add.reduceat(outflow[self._neighbors], self._starts)

        # First maximum wins, matching a strict ">" scan from tree 0
        best = int(np.argmax(current))
        pi_max = float(current[best])
        if pi_max > 0.0:
            self.next_shot = best

        if pi_max <= self.epsilon:
            log.debug(
                "Rescaling beliefs after shot %d (max=%g)", self.shot_count, pi_max
            )
            for buffer in self._buffers:
                buffer /= self.epsilon

        return tree
