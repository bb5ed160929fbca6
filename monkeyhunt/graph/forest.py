"""The forest: a random undirected graph whose nodes are trees.

The adjacency is stored like a CSR matrix: the neighbors of tree t are
``neighbors[strides[t]:strides[t + 1]]`` and ``degrees[t]`` is the length
of that slice. This layout makes the monkey's jump (a uniformly random
neighbor) a single integer draw plus one lookup.
"""

import logging

import numpy as np
import scipy.sparse
from scipy.sparse.csgraph import connected_components

from monkeyhunt.config.experiment import GraphConfig
from monkeyhunt.graph.degree_sequence import generate_graphic_sequence
from monkeyhunt.graph.errors import GraphGenerationError, PrecisionLossError
from monkeyhunt.graph.indexer import SymmetricPairIndexer
from monkeyhunt.graph.sis import generate_cur_graph

log = logging.getLogger(__name__)


def _frozen(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


class Forest:
    """A random forest of n trees with every tree degree >= 1.

    A Forest is empty until generate() succeeds. Each generation fully
    replaces the previous adjacency.
    """

    def __init__(self) -> None:
        self.clear()

    def clear(self) -> None:
        """Reset to the empty state."""
        self.n_trees = 0
        self.degrees = _frozen(np.zeros(0, dtype=np.int64))
        self.strides = _frozen(np.zeros(1, dtype=np.int64))
        self.neighbors = _frozen(np.zeros(0, dtype=np.int64))
        self.sequence: np.ndarray | None = None  # prescribed degrees of the last build
        self.attempts = 0

    def __bool__(self) -> bool:
        return self.n_trees > 0

    def __len__(self) -> int:
        return self.n_trees

    @property
    def size(self) -> int:
        """Number of trees."""
        return self.n_trees

    @property
    def n_links(self) -> int:
        """Number of undirected edges."""
        return int(self.strides[-1]) // 2

    def generate(
        self,
        n: int,
        rng: np.random.Generator,
        max_attempts: int = 1_000,
        max_sequence_attempts: int = 10_000,
        require_connected: bool = False,
    ) -> "Forest":
        """Generate a new random forest with n trees.

        Each attempt draws a fresh graphic degree sequence, realizes it by
        sequential importance sampling, and is accepted only when every
        tree ends up with at least one neighbor. Any other outcome,
        including a loss of precision during sampling, discards the whole
        attempt.

        Args:
            n: Number of trees (>= 2).
            rng: Random source.
            max_attempts: Full pipeline attempts before giving up.
            max_sequence_attempts: Degree sequence draws per attempt.
            require_connected: Also reject attempts with more than one
                connected component.

        Returns:
            self, for chaining.

        Raises:
            ValueError: If n < 2.
            GraphGenerationError: If no attempt is accepted. The forest
                is left empty.
        """
        if n < 2:
            raise ValueError(f"A forest needs at least 2 trees, got {n}")

        self.clear()
        indexer = SymmetricPairIndexer(n)

        for attempt in range(max_attempts):
            sequence = generate_graphic_sequence(n, rng, max_sequence_attempts)
            try:
                table = generate_cur_graph(sequence, rng)
            except PrecisionLossError as exc:
                log.warning("Forest attempt %d discarded: %s", attempt, exc)
                continue

            adjacency = self._table_to_csr(table, indexer)
            degrees = np.diff(adjacency.indptr).astype(np.int64)
            if (degrees == 0).any():
                log.debug(
                    "Forest attempt %d discarded: %d isolated trees",
                    attempt,
                    int((degrees == 0).sum()),
                )
                continue

            if require_connected:
                n_components, _ = connected_components(adjacency, directed=False)
                if n_components != 1:
                    log.debug(
                        "Forest attempt %d discarded: %d components",
                        attempt,
                        n_components,
                    )
                    continue

            self._set_adjacency(adjacency)
            self.sequence = _frozen(sequence.copy())
            self.attempts = attempt + 1
            log.debug(
                "Forest generated on attempt %d (n=%d, links=%d)",
                attempt,
                n,
                self.n_links,
            )
            return self

        raise GraphGenerationError(
            f"Failed to generate a forest with {n} trees after "
            f"{max_attempts} attempts"
        )

    @classmethod
    def from_edges(cls, n: int, edges: list[tuple[int, int]]) -> "Forest":
        """Build a forest from an explicit edge list (the export_edges format).

        Raises:
            ValueError: On self-loops, out of range trees, or trees left
                without neighbors.
        """
        if n < 2:
            raise ValueError(f"A forest needs at least 2 trees, got {n}")
        indexer = SymmetricPairIndexer(n)
        table = np.zeros(indexer.size, dtype=bool)
        for a, b in edges:
            if a == b:
                raise ValueError(f"Self-loop on tree {a}")
            if not (0 <= a < n and 0 <= b < n):
                raise ValueError(f"Edge ({a}, {b}) out of range [0, {n})")
            table[indexer.sub2ind(a, b)] = True

        adjacency = cls._table_to_csr(table, indexer)
        degrees = np.diff(adjacency.indptr)
        if (degrees == 0).any():
            raise ValueError(
                f"Trees without neighbors: {np.flatnonzero(degrees == 0).tolist()}"
            )

        forest = cls()
        forest._set_adjacency(adjacency)
        return forest

    def _set_adjacency(self, adjacency: scipy.sparse.csr_matrix) -> None:
        self.n_trees = adjacency.shape[0]
        self.degrees = _frozen(np.diff(adjacency.indptr).astype(np.int64))
        self.strides = _frozen(adjacency.indptr.astype(np.int64))
        self.neighbors = _frozen(adjacency.indices.astype(np.int64))

    @staticmethod
    def _table_to_csr(
        table: np.ndarray, indexer: SymmetricPairIndexer
    ) -> scipy.sparse.csr_matrix:
        """Expand a column-storage edge table into a symmetric CSR matrix."""
        rows, cols = indexer.pair_arrays()
        r, c = rows[table], cols[table]
        n = indexer.n
        data = np.ones(2 * r.size, dtype=np.int8)
        adjacency = scipy.sparse.csr_matrix(
            (data, (np.concatenate([r, c]), np.concatenate([c, r]))),
            shape=(n, n),
        )
        adjacency.sort_indices()
        return adjacency

    def neighbors_of(self, tree: int) -> np.ndarray:
        """Neighbors of a tree, in ascending order."""
        self._check_tree(tree)
        return self.neighbors[self.strides[tree] : self.strides[tree + 1]]

    def random_neighbor(self, tree: int, rng: np.random.Generator) -> int:
        """Simulate a jump: return a uniformly random neighbor of tree."""
        self._check_tree(tree)
        offset = int(rng.integers(0, self.degrees[tree]))
        return int(self.neighbors[self.strides[tree] + offset])

    def _check_tree(self, tree: int) -> None:
        if not self:
            raise RuntimeError("Forest is empty; call generate() first")
        if not 0 <= tree < self.n_trees:
            raise ValueError(f"Tree {tree} out of range [0, {self.n_trees})")

    def export_edges(self) -> tuple[tuple[int, int], list[tuple[int, int]]]:
        """Export as ((n_trees, n_links), [(a, b), ...]) with a < b.

        Each undirected edge is listed once, ordered by its first tree.
        """
        edges: list[tuple[int, int]] = []
        for tree in range(self.n_trees):
            for other in self.neighbors[self.strides[tree] : self.strides[tree + 1]]:
                if other > tree:
                    edges.append((tree, int(other)))
        return (self.n_trees, len(edges)), edges

    def adjacency_masks(self) -> list[int]:
        """Neighbor bitmask of every tree (bit k set when k is a neighbor)."""
        masks = []
        for tree in range(self.n_trees):
            mask = 0
            for other in self.neighbors[self.strides[tree] : self.strides[tree + 1]]:
                mask |= 1 << int(other)
            masks.append(mask)
        return masks

    def to_csr(self) -> scipy.sparse.csr_matrix:
        """Symmetric 0/1 adjacency matrix."""
        data = np.ones(self.neighbors.size, dtype=np.int8)
        return scipy.sparse.csr_matrix(
            (data, self.neighbors.copy(), self.strides.copy()),
            shape=(self.n_trees, self.n_trees),
        )

    def describe(self) -> str:
        """Multi-line dump of degrees, strides, neighbors and edges."""
        lines = [
            f"degrees({self.degrees.size}) = {self.degrees.tolist()}",
            f"strides({self.strides.size}) = {self.strides.tolist()}",
            f"neighbors({self.neighbors.size}) = {self.neighbors.tolist()}",
        ]
        _, edges = self.export_edges()
        lines.extend(f"{a} {b}" for a, b in edges)
        return "\n".join(lines)


def generate_forest(config: GraphConfig, rng: np.random.Generator) -> Forest:
    """Generate a forest from a GraphConfig."""
    return Forest().generate(
        config.n,
        rng,
        max_attempts=config.max_generation_attempts,
        max_sequence_attempts=config.max_sequence_attempts,
        require_connected=config.require_connected,
    )
