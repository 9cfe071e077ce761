"""
Tests for SimulationService orchestration.

Tests cover:
- Initial tree generation from config
- Reruns on edits and setting changes
- Rejected edits leave every artifact untouched
- Playback index carry-over between runs
"""

import logging

import pytest

from gametree.config import GeneratorSettings, SimulatorConfig
from gametree.core.search import Algorithm, TraversalOrder
from gametree.core.tree.editor import EditRejection
from gametree.services import SimulationService


@pytest.fixture
def service(basic_tree):
    return SimulationService(tree=basic_tree)


class TestInitialization:
    def test_uses_given_tree(self, service, basic_tree):
        assert service.tree is basic_tree
        assert service.result.root_value == 3
        assert service.session.index == -1
        assert service.layout.position("root").x == 212.5

    def test_generates_from_config(self):
        config = SimulatorConfig(generator=GeneratorSettings(depth=2, branching_factor=3, seed=5))
        first = SimulationService(config)
        second = SimulationService(config)

        assert first.tree == second.tree
        assert first.tree.height() == 2
        assert first.result.root_id == "node-0"


class TestTreeReplacement:
    def test_generate_tree(self, service):
        tree = service.generate_tree(2, 2)
        assert service.tree is tree
        assert service.result.root_id == tree.id
        assert service.layout.nodes[-1].id == tree.id

    def test_create_empty_tree(self, service):
        service.create_empty_tree(3, 3)
        assert service.tree.leaf_count() == 9
        assert service.result.root_value == 0

    def test_set_tree_resets_playback(self, service, cutoff_tree):
        service.session.seek(5)
        service.set_tree(cutoff_tree)
        assert service.session.index == -1
        assert service.result.root_value == 5


class TestEditing:
    def test_edit_reruns(self, service):
        result = service.edit_leaf_value("L3", 10)

        assert result.ok
        assert service.tree.find("L3").value == 10
        assert service.result.root_value == 9

    def test_add_child_updates_layout(self, service):
        result = service.add_child("B", 1)

        assert result.ok
        assert service.layout.position(result.node_id) is not None
        assert service.result.root_value == 3

    def test_rejected_edit_changes_nothing(self, service, basic_tree):
        before_result = service.result
        before_layout = service.layout

        result = service.delete_node("root")

        assert result.reason == EditRejection.ROOT_DELETE
        assert service.tree is basic_tree
        assert service.result is before_result
        assert service.layout is before_layout

    def test_delete_node(self, service):
        assert service.delete_node("A").ok
        assert service.result.root_value == 2


class TestRunSettings:
    def test_set_algorithm(self, service):
        result = service.set_algorithm("alphabeta")
        assert result.algorithm == Algorithm.ALPHA_BETA
        assert service.config.algorithm == Algorithm.ALPHA_BETA
        assert service.result.stats.prunes == 1

    def test_set_traversal_keeps_index(self, service):
        service.session.seek(7)
        service.set_traversal(TraversalOrder.RIGHT_TO_LEFT)
        assert service.result.traversal == TraversalOrder.RIGHT_TO_LEFT
        assert service.session.index == 7

    def test_index_reset_when_out_of_range(self, service):
        service.session.seek(19)
        service.set_algorithm(Algorithm.ALPHA_BETA)
        assert len(service.result.steps) == 18
        assert service.session.index == -1

    def test_set_depth_limit(self, service):
        service.set_depth_limit(1)
        assert service.result.depth_limit == 1
        assert service.result.root_value == 0

    def test_negative_depth_limit(self, service):
        with pytest.raises(ValueError):
            service.set_depth_limit(-1)
        assert service.config.depth_limit == 10

    def test_layout_survives_setting_changes(self, service):
        layout = service.layout
        service.set_algorithm("alphabeta")
        assert service.layout is layout

    def test_rerun_logged(self, service, caplog):
        with caplog.at_level(logging.INFO, logger="gametree.services.simulation_service"):
            service.set_algorithm("alphabeta")
        assert "Ran alphabeta (ltr) on root: 18 steps, root value 3" in caplog.text


class TestOracle:
    def test_oracle_follows_settings(self, service):
        service.set_algorithm("alphabeta")
        assert service.oracle().pruned_ids == {"L4"}

    def test_grade(self, service):
        service.set_algorithm(Algorithm.ALPHA_BETA)
        report = service.grade({"root": 3, "A": 3, "B": 2}, pruned=["L4"])
        assert report.passed
