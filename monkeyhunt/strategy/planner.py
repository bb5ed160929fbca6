"""Worst-case optimal hunter for small forests.

The hunter tracks the set S of trees the monkey could be in. Shooting
tree i and missing leaves S \\ {i}; the monkey then jumps, so the next
set is the union of the neighborhoods of S \\ {i}. A breadth-first
search over these sets, starting from the set of all trees, finds the
shortest shot sequence that drives S to the empty set. Following that
sequence kills the monkey whatever its start and whatever its jumps.

Sets are bitmasks over tree indices, and the search keeps its parent
links in flat arrays indexed by bitmask. This bounds the planner to
MAX_PLANNER_NODES trees (2**21 states).
"""

import logging
from collections import deque

import numpy as np

from monkeyhunt.config.experiment import MAX_PLANNER_NODES
from monkeyhunt.graph.forest import Forest
from monkeyhunt.strategy.base import GIVE_UP, PursuitStrategy

log = logging.getLogger(__name__)


def jump_set(masks: list[int], locations: int) -> int:
    """Union of the neighborhoods of every tree in a location set."""
    reachable = 0
    tree = 0
    while locations:
        if locations & 1:
            reachable |= masks[tree]
        locations >>= 1
        tree += 1
    return reachable


def plan_shot_sequence(
    masks: list[int], max_states: int | None = None
) -> list[int] | None:
    """Breadth-first search for the shortest guaranteed-capture sequence.

    Args:
        masks: Neighbor bitmask of every tree (see Forest.adjacency_masks).
        max_states: Optional cap on the number of location sets visited.

    Returns:
        Trees to shoot, in order, or None if no sequence exists or the
        state cap was hit.

    Raises:
        ValueError: If there are more than MAX_PLANNER_NODES trees.
    """
    n = len(masks)
    if n > MAX_PLANNER_NODES:
        raise ValueError(
            f"Planner is bounded to {MAX_PLANNER_NODES} trees, got {n}"
        )
    if n == 0:
        return None

    everywhere = (1 << n) - 1
    parent = np.full(1 << n, -1, dtype=np.int32)
    target = np.full(1 << n, -1, dtype=np.int8)
    parent[everywhere] = everywhere

    queue = deque([everywhere])
    visited = 1
    found = False

    while queue and not found:
        locations = queue.popleft()
        trees = [k for k in range(n) if locations >> k & 1]

        # suffix[k] = jump set of trees[k:], so each "all but one" union
        # costs a single OR with the running prefix
        suffix = [0] * (len(trees) + 1)
        for k in range(len(trees) - 1, -1, -1):
            suffix[k] = suffix[k + 1] | masks[trees[k]]

        prefix = 0
        for k, tree in enumerate(trees):
            survivors = prefix | suffix[k + 1]
            prefix |= masks[tree]
            if parent[survivors] != -1:
                continue

            parent[survivors] = locations
            target[survivors] = tree
            if survivors == 0:
                found = True
                break

            visited += 1
            if max_states is not None and visited > max_states:
                log.warning(
                    "Planner state cap reached (%d states, n=%d)", max_states, n
                )
                return None
            queue.append(survivors)

    if not found:
        log.debug("No winning shot sequence (n=%d, states=%d)", n, visited)
        return None

    # Walk back from the empty set to the set of all trees
    sequence: list[int] = []
    locations = 0
    while locations != everywhere:
        sequence.append(int(target[locations]))
        locations = int(parent[locations])
    sequence.reverse()
    log.debug(
        "Winning sequence of %d shots (n=%d, states=%d)", len(sequence), n, visited
    )
    return sequence


def verify_shot_sequence(masks: list[int], sequence: list[int]) -> bool:
    """Check that a sequence empties the location set from every start."""
    locations = (1 << len(masks)) - 1
    for tree in sequence:
        locations = jump_set(masks, locations & ~(1 << tree))
    return locations == 0


class ExactPlanner(PursuitStrategy):
    """Replays a precomputed worst-case optimal shot sequence.

    Planning happens once per forest in bind(). When the forest is too
    large or no winning sequence exists, every shot is GIVE_UP.
    """

    def __init__(
        self, max_nodes: int = MAX_PLANNER_NODES, max_states: int | None = None
    ) -> None:
        if not 1 <= max_nodes <= MAX_PLANNER_NODES:
            raise ValueError(
                f"max_nodes must be in [1, {MAX_PLANNER_NODES}], got {max_nodes}"
            )
        self.max_nodes = max_nodes
        self.max_states = max_states
        self.shot_sequence: list[int] = []
        self.impossible = True
        self.current_shot = 0
        self._bound = False

    @property
    def name(self) -> str:
        return "planner"

    @property
    def is_bound(self) -> bool:
        return self._bound

    def bind(self, forest: Forest) -> bool:
        self._require_forest(forest)
        self._bound = True
        self.shot_sequence = []
        self.impossible = True
        self.current_shot = 0

        if forest.size > self.max_nodes:
            log.warning(
                "Planner refused: %d trees exceeds the %d tree bound",
                forest.size,
                self.max_nodes,
            )
            return False

        sequence = plan_shot_sequence(forest.adjacency_masks(), self.max_states)
        if sequence is None:
            log.warning(
                "Planner found no winning sequence for a %d tree forest",
                forest.size,
            )
            return False

        self.shot_sequence = sequence
        self.impossible = False
        return True

    def restart(self) -> None:
        """Rewind to the first shot of the sequence."""
        self._require_bound()
        self.current_shot = 0

    def shoot(self) -> int:
        self._require_bound()
        if self.impossible or self.current_shot >= len(self.shot_sequence):
            return GIVE_UP
        tree = self.shot_sequence[self.current_shot]
        self.current_shot += 1
        return tree
