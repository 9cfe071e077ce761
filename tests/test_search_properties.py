"""
Property checks on seeded random trees.

The instrumented engine must agree with the direct oracle evaluation, and
alpha-beta must agree with minimax at the root.
"""

import random

import pytest

from gametree.core.oracle import evaluate
from gametree.core.playback.reconstructor import reconstruct
from gametree.core.playback.session import PlaybackSession
from gametree.core.search import Algorithm, StepKind, TraversalOrder, run_search
from gametree.core.tree.generator import generate_random_tree

SEEDS = range(25)
ORDERS = [TraversalOrder.LEFT_TO_RIGHT, TraversalOrder.RIGHT_TO_LEFT]


def _tree(seed):
    depth = 2 + seed % 3
    branching = 2 + seed % 2
    return generate_random_tree(depth, branching, seed=seed)


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("order", ORDERS)
class TestEngineMatchesOracle:
    """Engine and oracle agree on every tree."""

    def test_root_values(self, seed, order):
        tree = _tree(seed)
        for algorithm in Algorithm:
            result = run_search(tree, algorithm, traversal=order)
            oracle = evaluate(tree, algorithm, traversal=order)
            assert result.root_value == oracle.root_value
            assert result.steps[-1].current_value == oracle.root_value

    def test_alpha_beta_equals_minimax(self, seed, order):
        tree = _tree(seed)
        minimax_result = run_search(tree, Algorithm.MINIMAX, traversal=order)
        alpha_beta_result = run_search(tree, Algorithm.ALPHA_BETA, traversal=order)
        assert alpha_beta_result.root_value == minimax_result.root_value

    def test_backtrack_values(self, seed, order):
        tree = _tree(seed)
        for algorithm in Algorithm:
            result = run_search(tree, algorithm, traversal=order)
            oracle = evaluate(tree, algorithm, traversal=order)
            assert result.backtrack_values() == oracle.values

    def test_pruned_set_is_unvisited_set(self, seed, order):
        tree = _tree(seed)
        result = run_search(tree, Algorithm.ALPHA_BETA, traversal=order)
        oracle = evaluate(tree, Algorithm.ALPHA_BETA, traversal=order)
        assert oracle.pruned_ids == set(tree.node_ids()) - result.visited_ids()

    def test_minimax_visits_everything(self, seed, order):
        tree = _tree(seed)
        result = run_search(tree, Algorithm.MINIMAX, traversal=order)
        assert result.visited_ids() == set(tree.node_ids())
        assert result.stats.evaluated == tree.leaf_count()

    def test_one_update_per_visited_child(self, seed, order):
        tree = _tree(seed)
        result = run_search(tree, Algorithm.ALPHA_BETA, traversal=order)
        visits = [step for step in result.steps if step.kind == StepKind.VISIT]
        updates = [step for step in result.steps if step.kind == StepKind.UPDATE_BOUNDS]
        assert len(updates) == len(visits) - 1


@pytest.mark.parametrize("seed", SEEDS)
class TestPlaybackProperties:
    """Reconstruction does not depend on how an index was reached."""

    def test_final_pruned_set_matches_oracle(self, seed):
        tree = _tree(seed)
        result = run_search(tree, Algorithm.ALPHA_BETA)
        snapshot = reconstruct(tree, result.steps, len(result.steps) - 1)
        assert set(snapshot.pruned_ids) == evaluate(tree, Algorithm.ALPHA_BETA).pruned_ids

    def test_seek_equals_stepping(self, seed):
        tree = _tree(seed)
        result = run_search(tree, Algorithm.ALPHA_BETA)
        rng = random.Random(seed)
        target = rng.randrange(-1, len(result.steps))

        stepped = PlaybackSession(tree, result)
        for _ in range(target + 1):
            stepped.next()

        jumped = PlaybackSession(tree, result)
        jumped.seek(len(result.steps) - 1)
        jumped.seek(rng.randrange(-1, len(result.steps)))

        assert jumped.seek(target) == stepped.snapshot()

    def test_visited_set_grows_monotonically(self, seed):
        tree = _tree(seed)
        result = run_search(tree, Algorithm.ALPHA_BETA)
        previous = set()
        for index in range(len(result.steps)):
            current = set(reconstruct(tree, result.steps, index).visited_ids)
            assert previous <= current
            previous = current
