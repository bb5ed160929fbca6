"""Tests for the probabilistic tracker's belief propagation."""

import numpy as np
import pytest

from monkeyhunt.graph import Forest
from monkeyhunt.strategy import ProbabilisticTracker, StrategyNotBoundError


@pytest.fixture
def path3():
    """Path 0 - 1 - 2 (degrees 1, 2, 1)."""
    return Forest.from_edges(3, [(0, 1), (1, 2)])


@pytest.fixture
def tracker(path3):
    t = ProbabilisticTracker(epsilon=1e-10)
    assert t.bind(path3)
    return t


class TestBinding:
    def test_unbound_shoot_raises(self):
        with pytest.raises(StrategyNotBoundError):
            ProbabilisticTracker().shoot()

    def test_unbound_restart_raises(self):
        with pytest.raises(StrategyNotBoundError):
            ProbabilisticTracker().restart()

    def test_bind_empty_forest_raises(self):
        with pytest.raises(StrategyNotBoundError):
            ProbabilisticTracker().bind(Forest())

    def test_bind_sets_size(self, tracker):
        assert tracker.is_bound
        assert tracker.n_nodes == 3
        assert tracker.name == "tracker"


class TestRestart:
    def test_uniform_after_restart(self, tracker):
        np.testing.assert_allclose(tracker.current, [1 / 3] * 3)
        assert tracker.current.sum() == pytest.approx(1.0)

    def test_restart_resets_state(self, tracker):
        for _ in range(3):
            tracker.shoot()
        tracker.restart()
        assert tracker.next_shot == 0
        assert tracker.shot_count == 0
        np.testing.assert_allclose(tracker.current, [1 / 3] * 3)
        np.testing.assert_allclose(tracker.previous, [1 / 3] * 3)

    def test_restart_on_generated_forest(self):
        forest = Forest().generate(15, np.random.default_rng(2))
        t = ProbabilisticTracker()
        t.bind(forest)
        for _ in range(5):
            t.shoot()
        t.restart()
        assert t.current.sum() == pytest.approx(1.0)


class TestPropagation:
    def test_first_shot_is_tree_zero(self, tracker):
        assert tracker.shoot() == 0

    def test_hand_computed_step(self, tracker):
        tracker.shoot()
        # Tree 0 is shot: its 1/3 is lost, tree 1 splits 1/3 between 0 and 2,
        # and tree 2 sends its 1/3 to tree 1
        np.testing.assert_allclose(tracker.current, [1 / 6, 1 / 3, 1 / 6])
        assert tracker.next_shot == 1

    def test_second_step(self, tracker):
        tracker.shoot()
        assert tracker.shoot() == 1
        np.testing.assert_allclose(tracker.current, [0.0, 1 / 3, 0.0])

    def test_swap_roles(self, tracker):
        before = tracker.current
        tracker.shoot()
        assert tracker.previous is before
        np.testing.assert_allclose(tracker.previous, [1 / 3] * 3)

    def test_manual_swap(self, tracker):
        a, b = tracker.current, tracker.previous
        tracker.swap()
        assert tracker.current is b
        assert tracker.previous is a

    def test_zero_belief_keeps_previous_target(self, tracker):
        for _ in range(3):
            tracker.shoot()
        # Shooting tree 1 twice clears a path of three trees
        np.testing.assert_array_equal(tracker.current, [0.0, 0.0, 0.0])
        assert tracker.next_shot == 1

    def test_mass_never_increases(self):
        forest = Forest().generate(12, np.random.default_rng(31))
        t = ProbabilisticTracker(epsilon=1e-300)
        t.bind(forest)
        total = t.current.sum()
        for _ in range(20):
            t.shoot()
            assert t.current.sum() <= total + 1e-12
            total = t.current.sum()

    def test_shots_in_range(self):
        forest = Forest().generate(10, np.random.default_rng(4))
        t = ProbabilisticTracker()
        t.bind(forest)
        for _ in range(50):
            assert 0 <= t.shoot() < forest.size
        assert t.shot_count == 50


class TestRescaling:
    def test_rescale_when_max_below_epsilon(self, path3):
        t = ProbabilisticTracker(epsilon=0.5)
        t.bind(path3)
        t.shoot()
        np.testing.assert_allclose(t.current, [1 / 3, 2 / 3, 1 / 3])
        np.testing.assert_allclose(t.previous, [2 / 3] * 3)

    def test_no_rescale_above_epsilon(self, path3):
        t = ProbabilisticTracker(epsilon=0.1)
        t.bind(path3)
        t.shoot()
        np.testing.assert_allclose(t.current, [1 / 6, 1 / 3, 1 / 6])

    def test_argmax_unaffected_by_rescale(self):
        forest = Forest().generate(10, np.random.default_rng(12))
        plain = ProbabilisticTracker(epsilon=2.0**-1000)
        scaled = ProbabilisticTracker(epsilon=0.0625)
        plain.bind(forest)
        scaled.bind(forest)
        for _ in range(30):
            assert plain.shoot() == scaled.shoot()

    def test_invalid_epsilon(self):
        with pytest.raises(ValueError, match="epsilon"):
            ProbabilisticTracker(epsilon=0.0)
