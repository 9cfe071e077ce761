"""
Tests for tree editing operations.

Tests cover:
- add_child / delete_node / edit_leaf_value success paths
- Rejections with reason codes and an untouched tree
- Deep-copy isolation of the input tree
"""

from gametree.core.tree.editor import (
    EditRejection,
    add_child,
    delete_node,
    edit_leaf_value,
    next_node_id,
)
from gametree.core.tree.generator import generate_random_tree
from gametree.core.tree.models import internal, leaf


class TestNextNodeId:
    def test_no_numbered_ids(self, basic_tree):
        assert next_node_id(basic_tree) == "node-0"

    def test_one_past_highest(self):
        tree = generate_random_tree(2, 2, seed=4)
        assert next_node_id(tree) == f"node-{tree.size()}"


class TestAddChild:
    """Tests for add_child."""

    def test_adds_leaf_with_opposite_role(self, basic_tree):
        result = add_child(basic_tree, "A", 8)

        assert result.ok
        assert result.node_id == "node-0"
        parent = result.tree.find("A")
        assert [child.id for child in parent.children] == ["L1", "L2", "node-0"]
        child = result.tree.find("node-0")
        assert child.value == 8
        assert child.is_max_node is True

    def test_leaf_becomes_internal(self, basic_tree):
        result = add_child(basic_tree, "L1")

        parent = result.tree.find("L1")
        assert parent.value is None
        assert not parent.is_leaf
        assert parent.children[0].value == 0
        assert parent.children[0].is_max_node is False

    def test_input_tree_untouched(self, basic_tree):
        add_child(basic_tree, "A", 8)
        assert basic_tree.size() == 7

    def test_unknown_parent_rejected(self, basic_tree):
        result = add_child(basic_tree, "nope")

        assert not result.ok
        assert result.status == "rejected"
        assert result.reason == EditRejection.NODE_NOT_FOUND
        assert result.tree is basic_tree


class TestDeleteNode:
    """Tests for delete_node."""

    def test_removes_subtree(self, basic_tree):
        result = delete_node(basic_tree, "B")

        assert result.ok
        assert result.tree.node_ids() == ["root", "A", "L1", "L2"]
        assert basic_tree.size() == 7

    def test_root_rejected(self, basic_tree):
        result = delete_node(basic_tree, "root")

        assert result.reason == EditRejection.ROOT_DELETE
        assert result.tree is basic_tree
        assert result.message

    def test_unknown_rejected(self, basic_tree):
        result = delete_node(basic_tree, "nope")
        assert result.reason == EditRejection.NODE_NOT_FOUND

    def test_deleting_last_child_makes_leaf(self):
        tree = internal("r", [internal("a", [leaf("b", 1)], False)], True)
        result = delete_node(tree, "b")
        assert result.tree.find("a").is_leaf


class TestEditLeafValue:
    """Tests for edit_leaf_value."""

    def test_sets_value(self, basic_tree):
        result = edit_leaf_value(basic_tree, "L4", -7.5)

        assert result.ok
        assert result.node_id == "L4"
        assert result.tree.find("L4").value == -7.5
        assert basic_tree.find("L4").value == 9

    def test_internal_node_rejected(self, basic_tree):
        result = edit_leaf_value(basic_tree, "A", 1)

        assert result.reason == EditRejection.NOT_A_LEAF
        assert result.tree is basic_tree

    def test_unknown_rejected(self, basic_tree):
        result = edit_leaf_value(basic_tree, "nope", 1)
        assert result.reason == EditRejection.NODE_NOT_FOUND
