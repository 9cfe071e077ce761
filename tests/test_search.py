"""
Tests for the instrumented search engine.

Tests cover:
- Minimax and alpha-beta step sequences on small hand-built trees
- Pruning (PRUNE events, skipped subtrees produce no events)
- Leaves without values, depth limits, traversal order, declared roles
"""

import math

import pytest

from gametree.core.search import Algorithm, StepKind, TraversalOrder, iter_steps, run_search
from gametree.core.tree.models import leaf

MINIMAX_BASIC_IDS = [
    "visit-root",
    "visit-A",
    "visit-L1",
    "eval-L1",
    "update-A-L1",
    "visit-L2",
    "eval-L2",
    "update-A-L2",
    "backtrack-A",
    "update-root-A",
    "visit-B",
    "visit-L3",
    "eval-L3",
    "update-B-L3",
    "visit-L4",
    "eval-L4",
    "update-B-L4",
    "backtrack-B",
    "update-root-B",
    "backtrack-root",
]


class TestMinimax:
    """Tests for the minimax step log."""

    def test_basic_value(self, basic_tree):
        result = run_search(basic_tree, Algorithm.MINIMAX)
        assert result.root_value == 3
        assert result.steps[-1].kind == StepKind.BACKTRACK
        assert result.steps[-1].current_value == 3

    def test_step_sequence(self, basic_tree):
        result = run_search(basic_tree, "minimax")
        assert [step.id for step in result.steps] == MINIMAX_BASIC_IDS

    def test_step_ids_unique(self, basic_tree):
        ids = [step.id for step in run_search(basic_tree).steps]
        assert len(ids) == len(set(ids))

    def test_one_update_per_child(self, basic_tree):
        """Every child produces an UPDATE_BOUNDS even when the value does not change."""
        result = run_search(basic_tree)
        updates = [step for step in result.steps if step.kind == StepKind.UPDATE_BOUNDS and step.node_id == "A"]
        assert [step.current_value for step in updates] == [3, 3]

    def test_no_bounds_in_minimax(self, basic_tree):
        result = run_search(basic_tree)
        assert all(not step.has_bounds for step in result.steps)

    def test_paths(self, basic_tree):
        steps = {step.id: step for step in run_search(basic_tree).steps}
        assert steps["visit-L3"].visited_ids == ("root", "B", "L3")
        assert steps["visit-L3"].active_path == ("root", "B", "L3")
        assert steps["backtrack-B"].visited_ids == ("root", "B")
        assert steps["backtrack-B"].active_path == ("root",)
        assert steps["backtrack-root"].active_path == ()

    def test_visits_every_node(self, cutoff_tree):
        result = run_search(cutoff_tree, Algorithm.MINIMAX)
        assert result.root_value == 5
        assert "L4" in result.visited_ids()

    def test_descriptions_are_markdown(self, basic_tree):
        result = run_search(basic_tree)
        assert result.steps[0].description == "Visit MAX node **root**"
        assert result.steps[3].description == "Leaf evaluate **L1** = 3"


class TestAlphaBeta:
    """Tests for the alpha-beta step log."""

    def test_cutoff_skips_leaf(self, cutoff_tree):
        result = run_search(cutoff_tree, Algorithm.ALPHA_BETA)

        assert result.root_value == 5
        assert "L4" not in result.visited_ids()
        assert not any(step.node_id == "L4" for step in result.steps)

    def test_prune_event(self, basic_tree):
        result = run_search(basic_tree, Algorithm.ALPHA_BETA)
        prunes = [step for step in result.steps if step.kind == StepKind.PRUNE]

        assert len(prunes) == 1
        prune = prunes[0]
        assert prune.id == "prune-B"
        assert prune.node_id == "B"
        assert prune.remaining_siblings == 1
        assert prune.alpha == 3
        assert prune.beta == 2

    def test_step_sequence(self, basic_tree):
        result = run_search(basic_tree, Algorithm.ALPHA_BETA)
        assert [step.id for step in result.steps] == [
            "visit-root",
            "visit-A",
            "visit-L1",
            "eval-L1",
            "update-A-L1",
            "visit-L2",
            "eval-L2",
            "update-A-L2",
            "backtrack-A",
            "update-root-A",
            "visit-B",
            "visit-L3",
            "eval-L3",
            "update-B-L3",
            "prune-B",
            "backtrack-B",
            "update-root-B",
            "backtrack-root",
        ]

    def test_bounds_on_every_step(self, basic_tree):
        result = run_search(basic_tree, Algorithm.ALPHA_BETA)
        assert all(step.has_bounds for step in result.steps)

        first = result.steps[0]
        assert first.alpha == -math.inf
        assert first.beta == math.inf

        steps = {step.id: step for step in result.steps}
        assert steps["visit-B"].alpha == 3
        assert steps["update-root-A"].alpha == 3
        assert steps["update-A-L1"].beta == 3

    def test_stats(self, basic_tree):
        stats = run_search(basic_tree, Algorithm.ALPHA_BETA).stats
        assert stats.visited == 6
        assert stats.evaluated == 3
        assert stats.prunes == 1
        assert stats.skipped_children == 1

    def test_custom_initial_window(self, basic_tree):
        """With alpha already at 10 both MIN nodes cut off after their first leaf."""
        result = run_search(basic_tree, Algorithm.ALPHA_BETA, alpha=10, beta=20)
        prunes = [step.node_id for step in result.steps if step.kind == StepKind.PRUNE]
        assert prunes == ["A", "B"]
        assert result.visited_ids() == {"root", "A", "L1", "B", "L3"}
        assert result.root_value == 3


class TestEdgeCases:
    """Missing values, depth limits, traversal order and roles."""

    def test_missing_leaf_value_evaluates_to_zero(self, missing_value_tree):
        for algorithm in Algorithm:
            result = run_search(missing_value_tree, algorithm)
            evaluation = next(step for step in result.steps if step.id == "eval-X")
            assert evaluation.current_value == 0
            assert result.root_value == 0

    def test_reversed_traversal(self, basic_tree):
        forward = run_search(basic_tree, Algorithm.MINIMAX)
        backward = run_search(basic_tree, Algorithm.MINIMAX, traversal=TraversalOrder.RIGHT_TO_LEFT)

        assert backward.root_value == 3
        assert [step.id for step in backward.steps] != [step.id for step in forward.steps]
        assert [step.id for step in backward.steps[:4]] == ["visit-root", "visit-B", "visit-L4", "eval-L4"]
        again = run_search(basic_tree, Algorithm.MINIMAX, traversal="rtl")
        assert again.steps == backward.steps

    def test_reversed_alpha_beta_no_prune(self, basic_tree):
        """Right-to-left, A sees 5 then 3 while alpha is 2: no cutoff."""
        result = run_search(basic_tree, Algorithm.ALPHA_BETA, traversal=TraversalOrder.RIGHT_TO_LEFT)
        assert result.root_value == 3
        assert result.stats.prunes == 0

    def test_depth_limit_evaluates_internal_nodes(self, basic_tree):
        result = run_search(basic_tree, depth_limit=1)

        assert [step.id for step in result.steps] == [
            "visit-root",
            "visit-A",
            "eval-A",
            "update-root-A",
            "visit-B",
            "eval-B",
            "update-root-B",
            "backtrack-root",
        ]
        assert result.steps[2].description.startswith("Depth limit reached")
        assert result.root_value == 0

    def test_depth_limit_zero(self, basic_tree):
        result = run_search(basic_tree, depth_limit=0)
        assert [step.kind for step in result.steps] == [StepKind.VISIT, StepKind.EVALUATE]

    def test_negative_depth_limit(self, basic_tree):
        with pytest.raises(ValueError):
            run_search(basic_tree, depth_limit=-1)
        with pytest.raises(ValueError):
            iter_steps(basic_tree, depth_limit=-1)

    def test_unknown_algorithm(self, basic_tree):
        with pytest.raises(ValueError):
            run_search(basic_tree, "negamax")

    def test_single_leaf_root(self):
        result = run_search(leaf("only", 12), Algorithm.ALPHA_BETA)
        assert result.root_value == 12
        assert [step.id for step in result.steps] == ["visit-only", "eval-only"]

    def test_declared_roles_are_authoritative(self, non_alternating_tree):
        """C is declared MAX under a MAX root, so it takes 7, not 1."""
        for algorithm in Algorithm:
            result = run_search(non_alternating_tree, algorithm)
            assert result.backtrack_values()["C"] == 7
            assert result.root_value == 7

    def test_maximizing_override(self, basic_tree):
        """The caller may play the root as MIN; descendants keep their roles."""
        result = run_search(basic_tree, maximizing=False)
        assert result.root_value == 2
        assert result.steps[0].description == "Visit MIN node **root**"

    def test_ties_keep_first_value(self, tree_factory):
        tree = tree_factory(4, 4, 4, 4)
        result = run_search(tree)
        assert result.root_value == 4


class TestIterSteps:
    def test_generator_returns_root_value(self, basic_tree):
        generator = iter_steps(basic_tree, Algorithm.ALPHA_BETA)
        steps = []
        with pytest.raises(StopIteration) as stop:
            while True:
                steps.append(next(generator))
        assert stop.value.value == 3
        assert len(steps) == 18

    def test_describe(self, basic_tree):
        result = run_search(basic_tree, Algorithm.ALPHA_BETA)
        assert result.describe() == "Alpha-Beta (ltr) on root: value 3 in 18 steps"
        assert len(result) == 18
