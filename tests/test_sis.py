"""Tests for the symmetric pair indexer and SIS graph sampling."""

from unittest.mock import patch

import numpy as np
import pytest

from monkeyhunt.graph.errors import PrecisionLossError
from monkeyhunt.graph.indexer import SymmetricPairIndexer
from monkeyhunt.graph.sis import CURGraphBuilder, generate_cur_graph


def _edge_degrees(table: np.ndarray, n: int) -> np.ndarray:
    rows, cols = SymmetricPairIndexer(n).pair_arrays()
    degrees = np.zeros(n, dtype=np.int64)
    np.add.at(degrees, rows[table], 1)
    np.add.at(degrees, cols[table], 1)
    return degrees


class TestSymmetricPairIndexer:
    def test_size(self):
        assert SymmetricPairIndexer(5).size == 15

    def test_column_storage_order(self):
        indexer = SymmetricPairIndexer(3)
        # column 0: (0,0) (1,0) (2,0); column 1: (1,1) (2,1); column 2: (2,2)
        assert indexer.sub2ind(0, 0) == 0
        assert indexer.sub2ind(2, 0) == 2
        assert indexer.sub2ind(1, 1) == 3
        assert indexer.sub2ind(2, 1) == 4
        assert indexer.sub2ind(2, 2) == 5

    def test_symmetric(self):
        indexer = SymmetricPairIndexer(7)
        assert indexer.sub2ind(2, 5) == indexer.sub2ind(5, 2)

    def test_ind2sub_inverts_sub2ind(self):
        for n in (1, 2, 6, 21):
            indexer = SymmetricPairIndexer(n)
            for index in range(indexer.size):
                i, j = indexer.ind2sub(index)
                assert i >= j
                assert indexer.sub2ind(i, j) == index

    def test_pair_arrays_match_indexer(self):
        indexer = SymmetricPairIndexer(6)
        rows, cols = indexer.pair_arrays()
        for index in range(indexer.size):
            assert (rows[index], cols[index]) == indexer.ind2sub(index)

    def test_out_of_range(self):
        with pytest.raises(IndexError):
            SymmetricPairIndexer(4).ind2sub(10)


class TestCURGraphBuilder:
    def test_single_edge(self):
        table = generate_cur_graph([1, 1], np.random.default_rng(0))
        indexer = SymmetricPairIndexer(2)
        assert table.sum() == 1
        assert table[indexer.sub2ind(1, 0)]

    def test_no_self_loops(self):
        rng = np.random.default_rng(1)
        indexer = SymmetricPairIndexer(10)
        diagonal = [indexer.sub2ind(k, k) for k in range(10)]
        for _ in range(20):
            table = generate_cur_graph([3, 3, 2, 2, 4, 1, 1, 2, 3, 3], rng)
            assert not table[diagonal].any()

    def test_degrees_never_exceed_prescription(self):
        rng = np.random.default_rng(7)
        prescribed = np.array([5, 4, 4, 3, 3, 2, 2, 1])
        for _ in range(20):
            table = generate_cur_graph(prescribed, rng)
            assert (_edge_degrees(table, 8) <= prescribed).all()

    def test_complete_graph_realized(self):
        table = generate_cur_graph([4, 4, 4, 4, 4], np.random.default_rng(3))
        np.testing.assert_array_equal(_edge_degrees(table, 5), [4] * 5)

    def test_remaining_degrees_decrease(self):
        builder = CURGraphBuilder([2, 2, 2])
        builder.generate(np.random.default_rng(0))
        assert builder.remaining_edges == 0
        assert (builder.degrees >= 0).all()

    def test_stops_when_no_pair_can_be_scored(self):
        # Drawing (1, 2) first leaves tree 0 with degree 2 and no partner
        stopped_early = 0
        for seed in range(50):
            builder = CURGraphBuilder([2, 1, 1])
            table = builder.generate(np.random.default_rng(seed))
            assert builder.remaining_edges == 0
            if table.sum() == 1:
                stopped_early += 1
                assert table[builder.indexer.sub2ind(1, 2)]
                assert builder.p_sum == 0.0
                assert builder.degrees.tolist() == [2, 0, 0]
            else:
                assert table.sum() == 2
                np.testing.assert_array_equal(_edge_degrees(table, 3), [2, 1, 1])
        assert stopped_early > 0

    def test_zero_degrees_produce_no_edges(self):
        builder = CURGraphBuilder([0, 0, 0])
        assert builder.remaining_edges == 0
        assert not builder.generate(np.random.default_rng(0)).any()

    def test_probabilities_clipped(self):
        builder = CURGraphBuilder([9, 9, 2, 2, 2, 2, 2, 2, 2, 2])
        assert builder.probabilities.min() >= 0.0
        assert builder.probabilities.max() <= 1.0

    def test_precision_loss_raises(self):
        builder = CURGraphBuilder([2, 2, 2])

        class _OverOne:
            def random(self):
                return 1.5

        with pytest.raises(PrecisionLossError):
            builder.sis_select(_OverOne())

    def test_rejects_single_degree(self):
        with pytest.raises(ValueError):
            CURGraphBuilder([1])

    def test_same_seed_same_graph(self):
        d = [3, 3, 2, 2, 2, 2]
        t1 = generate_cur_graph(d, np.random.default_rng(11))
        t2 = generate_cur_graph(d, np.random.default_rng(11))
        np.testing.assert_array_equal(t1, t2)
