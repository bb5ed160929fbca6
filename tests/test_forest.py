"""Tests for Forest generation, jumps, exports and validation."""

from unittest.mock import patch

import numpy as np
import pytest

from monkeyhunt.config import GraphConfig
from monkeyhunt.graph import (
    Forest,
    GraphGenerationError,
    PrecisionLossError,
    count_components,
    generate_forest,
    validate_forest,
)
from monkeyhunt.graph.indexer import SymmetricPairIndexer
from monkeyhunt.graph.sis import generate_cur_graph


def _path_forest(k: int) -> Forest:
    return Forest.from_edges(k, [(i, i + 1) for i in range(k - 1)])


class TestForestGeneration:
    """Generated forests satisfy the CSR invariants."""

    @pytest.mark.parametrize("n", [2, 3, 6, 10, 21])
    def test_generated_forest_is_valid(self, n):
        forest = Forest().generate(n, np.random.default_rng(n))
        assert forest
        assert forest.size == n
        assert validate_forest(forest) == []
        assert (forest.degrees >= 1).all()
        assert forest.strides[n] == 2 * forest.n_links
        assert forest.neighbors.size == forest.strides[n]

    def test_neighbor_relation_symmetric(self):
        forest = Forest().generate(12, np.random.default_rng(5))
        for u in range(forest.size):
            for v in forest.neighbors_of(u):
                assert u in forest.neighbors_of(int(v))

    def test_empty_before_generation(self):
        forest = Forest()
        assert not forest
        assert forest.size == 0
        assert validate_forest(forest) == ["Forest is empty"]

    def test_clear_then_generate_twice(self):
        rng = np.random.default_rng(99)
        forest = Forest()
        for _ in range(2):
            forest.clear()
            forest.generate(8, rng)
            assert validate_forest(forest) == []

    def test_same_seed_same_forest(self):
        f1 = Forest().generate(9, np.random.default_rng(123))
        f2 = Forest().generate(9, np.random.default_rng(123))
        np.testing.assert_array_equal(f1.neighbors, f2.neighbors)
        np.testing.assert_array_equal(f1.strides, f2.strides)

    def test_arrays_read_only(self):
        forest = Forest().generate(5, np.random.default_rng(0))
        with pytest.raises(ValueError):
            forest.neighbors[0] = 0

    def test_rejects_single_tree(self):
        with pytest.raises(ValueError):
            Forest().generate(1, np.random.default_rng(0))

    def test_require_connected(self):
        rng = np.random.default_rng(17)
        for _ in range(5):
            forest = Forest().generate(10, rng, require_connected=True)
            assert count_components(forest) == 1

    def test_generate_forest_from_config(self):
        forest = generate_forest(GraphConfig(n=7), np.random.default_rng(1))
        assert forest.size == 7
        assert forest.attempts >= 1
        assert forest.sequence is not None


class TestGenerationRetry:
    """Degenerate attempts are discarded and the pipeline restarts."""

    def test_isolated_tree_triggers_retry(self):
        calls = 0

        def fake_cur(degrees, rng):
            nonlocal calls
            calls += 1
            if calls <= 2:
                # Nothing selected: every tree is isolated
                return np.zeros(SymmetricPairIndexer(len(degrees)).size, dtype=bool)
            return generate_cur_graph(degrees, rng)

        with patch("monkeyhunt.graph.forest.generate_cur_graph", side_effect=fake_cur):
            forest = Forest().generate(6, np.random.default_rng(0))

        assert calls == 3
        assert forest.attempts == 3
        assert validate_forest(forest) == []

    def test_precision_loss_triggers_retry(self):
        calls = 0

        def fake_cur(degrees, rng):
            nonlocal calls
            calls += 1
            if calls == 1:
                raise PrecisionLossError("simulated")
            return generate_cur_graph(degrees, rng)

        with patch("monkeyhunt.graph.forest.generate_cur_graph", side_effect=fake_cur):
            forest = Forest().generate(6, np.random.default_rng(0))

        assert forest.attempts == 2

    def test_exhausted_attempts_leave_forest_empty(self):
        empty = np.zeros(SymmetricPairIndexer(4).size, dtype=bool)
        forest = Forest().generate(4, np.random.default_rng(0))
        with patch("monkeyhunt.graph.forest.generate_cur_graph", return_value=empty):
            with pytest.raises(GraphGenerationError, match="after 3 attempts"):
                forest.generate(4, np.random.default_rng(0), max_attempts=3)
        assert not forest


class TestRandomNeighbor:
    def test_returns_actual_neighbor(self):
        rng = np.random.default_rng(8)
        forest = Forest().generate(10, rng)
        for tree in range(forest.size):
            for _ in range(20):
                jump = forest.random_neighbor(tree, rng)
                assert 0 <= jump < forest.size
                assert jump in forest.neighbors_of(tree)

    def test_covers_all_neighbors(self):
        forest = Forest.from_edges(4, [(0, 1), (0, 2), (0, 3)])
        rng = np.random.default_rng(0)
        seen = {forest.random_neighbor(0, rng) for _ in range(200)}
        assert seen == {1, 2, 3}

    def test_leaf_always_jumps_to_center(self):
        forest = Forest.from_edges(4, [(0, 1), (0, 2), (0, 3)])
        rng = np.random.default_rng(0)
        assert all(forest.random_neighbor(2, rng) == 0 for _ in range(20))

    def test_out_of_range(self):
        forest = _path_forest(3)
        with pytest.raises(ValueError):
            forest.random_neighbor(3, np.random.default_rng(0))

    def test_empty_forest(self):
        with pytest.raises(RuntimeError):
            Forest().random_neighbor(0, np.random.default_rng(0))


class TestForestExport:
    def test_from_edges_layout(self):
        forest = _path_forest(4)
        assert forest.degrees.tolist() == [1, 2, 2, 1]
        assert forest.strides.tolist() == [0, 1, 3, 5, 6]
        assert forest.neighbors.tolist() == [1, 0, 2, 1, 3, 2]

    def test_export_edges(self):
        forest = Forest.from_edges(4, [(2, 1), (0, 1), (3, 0)])
        cfg, edges = forest.export_edges()
        assert cfg == (4, 3)
        assert edges == [(0, 1), (0, 3), (1, 2)]

    def test_export_matches_generated_links(self):
        forest = Forest().generate(11, np.random.default_rng(4))
        (n_trees, n_links), edges = forest.export_edges()
        assert n_trees == 11
        assert n_links == forest.n_links == len(edges)
        assert all(a < b for a, b in edges)
        rebuilt = Forest.from_edges(n_trees, edges)
        np.testing.assert_array_equal(rebuilt.neighbors, forest.neighbors)

    def test_adjacency_masks(self):
        masks = _path_forest(3).adjacency_masks()
        assert masks == [0b010, 0b101, 0b010]

    def test_to_csr_symmetric(self):
        forest = Forest().generate(9, np.random.default_rng(6))
        adj = forest.to_csr()
        assert adj.shape == (9, 9)
        assert (adj != adj.T).nnz == 0
        assert adj.diagonal().sum() == 0

    def test_describe(self):
        text = _path_forest(3).describe()
        assert "degrees(3) = [1, 2, 1]" in text
        assert "0 1" in text and "1 2" in text

    def test_from_edges_rejects_isolated(self):
        with pytest.raises(ValueError, match="without neighbors"):
            Forest.from_edges(3, [(0, 1)])

    def test_from_edges_rejects_self_loop(self):
        with pytest.raises(ValueError, match="Self-loop"):
            Forest.from_edges(2, [(1, 1)])


class TestValidation:
    def test_count_components(self):
        forest = Forest.from_edges(4, [(0, 1), (2, 3)])
        assert count_components(forest) == 2
        assert validate_forest(forest) == []

    def test_detects_asymmetry(self):
        forest = _path_forest(3)
        forest.neighbors = np.array([1, 0, 2, 0])
        errors = validate_forest(forest)
        assert any("Asymmetric" in e for e in errors)

    def test_detects_bad_strides(self):
        forest = _path_forest(3)
        forest.strides = np.array([0, 1, 2, 4])
        errors = validate_forest(forest)
        assert any("prefix sums" in e for e in errors)
