"""Connected, undirected, random (CUR) graphs by sequential importance sampling.

Implements procedure A of:

    Bayati, M. and Kim, J.H. and Saberi, A. "A Sequential Algorithm for
    Generating Random Graphs", Algorithmica 58(4), 860-910, 2010

Edges are drawn one at a time. Pair (i, j) is selected with probability
proportional to

    w(i, j) = d_i * d_j * (1 - D_i * D_j / (4m))

where d are the remaining degrees, D the prescribed degrees and m the
prescribed number of edges. Pairs already chosen are never drawn again.
"""

import logging

import numpy as np

from monkeyhunt.graph.errors import PrecisionLossError
from monkeyhunt.graph.indexer import SymmetricPairIndexer

log = logging.getLogger(__name__)


class CURGraphBuilder:
    """Sequential importance sampling of one simple graph.

    The probability table and the adjacency table share the symmetric
    column storage of SymmetricPairIndexer. Diagonal entries stay at zero
    so self-loops are never selected.
    """

    def __init__(self, degrees: np.ndarray | list[int]) -> None:
        d = np.asarray(degrees, dtype=np.int64)
        if d.size < 2:
            raise ValueError(f"Need at least 2 degrees, got {d.size}")
        if (d < 0).any():
            raise ValueError("Degrees must be non-negative")

        self.n = int(d.size)
        self.indexer = SymmetricPairIndexer(self.n)
        self._rows, self._cols = self.indexer.pair_arrays()

        self.degrees = d.copy()
        self.remaining_edges = int(d.sum()) // 2
        self.edges = np.zeros(self.indexer.size, dtype=bool)

        # p(i,j) is fixed by the prescribed degrees
        four_m = 4.0 * self.remaining_edges
        if four_m > 0:
            p = 1.0 - (d[self._rows] * d[self._cols]) / four_m
        else:
            p = np.zeros(self.indexer.size)
        p[self._rows == self._cols] = 0.0
        self.probabilities = np.clip(p, 0.0, 1.0)

        if self.sum_probabilities() == 0.0:
            self.remaining_edges = 0

    def weights(self) -> np.ndarray:
        """Current selection weight of every stored pair."""
        w = (
            self.degrees[self._rows]
            * self.degrees[self._cols]
            * self.probabilities
        )
        w[self.edges] = 0.0
        return w

    def sum_probabilities(self) -> float:
        """Recompute and store the sum of the current weights."""
        self.p_sum = float(self.weights().sum())
        return self.p_sum

    def sis_select(self, rng: np.random.Generator) -> int:
        """Draw one pair with probability proportional to its weight.

        Returns:
            Flat index of the selected pair.

        Raises:
            PrecisionLossError: If the cumulative weights never reach the
                sampled level.
        """
        level = self.p_sum * rng.random()
        cdf = np.cumsum(self.weights())
        edge = int(np.searchsorted(cdf, level, side="right"))
        if edge >= cdf.size:
            raise PrecisionLossError(
                f"SIS cursor ran off the pair table (level={level!r}, "
                f"cdf_max={cdf[-1]!r})"
            )
        return edge

    def update(self, edge: int) -> None:
        """Consume a selected pair: mark it, decrement degrees and counters."""
        i, j = self.indexer.ind2sub(edge)
        self.degrees[i] -= 1
        self.degrees[j] -= 1
        self.edges[edge] = True

        # A zero sum means no pair can be scored any more
        if self.sum_probabilities() == 0.0:
            self.remaining_edges = 0
        else:
            self.remaining_edges -= 1

    def generate(self, rng: np.random.Generator) -> np.ndarray:
        """Select edges until none remain.

        Returns:
            Boolean adjacency table of length n(n+1)/2 in symmetric
            column storage.
        """
        while self.remaining_edges > 0:
            self.update(self.sis_select(rng))
        log.debug(
            "CUR graph: n=%d, edges=%d, unmatched degree=%d",
            self.n,
            int(self.edges.sum()),
            int(self.degrees.sum()),
        )
        return self.edges


def generate_cur_graph(
    degrees: np.ndarray | list[int], rng: np.random.Generator
) -> np.ndarray:
    """Generate a CUR graph for prescribed degrees.

    Args:
        degrees: Prescribed degree sequence, length >= 2.
        rng: Random source.

    Returns:
        Boolean adjacency table in symmetric column storage.

    Raises:
        PrecisionLossError: On irrecoverable loss of precision.
    """
    return CURGraphBuilder(degrees).generate(rng)
