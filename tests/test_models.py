"""
Tests for the game tree data model.

Tests cover:
- Traversal helpers (pre-order iteration, find, path_to)
- Statistics (height, leaf count, size)
- Serialization round trip through model_dump/model_validate
"""

from gametree.core.tree.models import GameTreeNode, TreeEdge, internal, leaf


class TestTraversal:
    """Tests for GameTreeNode traversal helpers."""

    def test_iter_nodes_is_pre_order(self, basic_tree):
        """Parents come before their children, children in stored order."""
        assert basic_tree.node_ids() == ["root", "A", "L1", "L2", "B", "L3", "L4"]

    def test_find_existing_and_missing(self, basic_tree):
        assert basic_tree.find("L3").value == 2
        assert basic_tree.find("nope") is None

    def test_find_parent(self, basic_tree):
        assert basic_tree.find_parent("L3").id == "B"
        assert basic_tree.find_parent("root") is None
        assert basic_tree.find_parent("nope") is None

    def test_path_to(self, basic_tree):
        assert basic_tree.path_to("L3") == ["root", "B", "L3"]
        assert basic_tree.path_to("root") == ["root"]
        assert basic_tree.path_to("nope") == []

    def test_leaves_left_to_right(self, basic_tree):
        assert [n.id for n in basic_tree.leaves()] == ["L1", "L2", "L3", "L4"]

    def test_edges(self, basic_tree):
        edges = basic_tree.edges()
        assert len(edges) == 6
        assert edges[0] == TreeEdge(source="root", target="A")
        assert edges[0].id == "root-A"


class TestStatistics:
    """Tests for tree statistics."""

    def test_single_leaf(self):
        node = leaf("x", 4)
        assert node.is_leaf
        assert node.height() == 0
        assert node.leaf_count() == 1
        assert node.size() == 1

    def test_basic_tree_statistics(self, basic_tree):
        stats = basic_tree.get_statistics()
        assert stats == {
            "total_nodes": 7,
            "leaf_nodes": 4,
            "height": 2,
            "max_nodes": 1,
            "min_nodes": 2,
        }

    def test_uneven_height(self):
        tree = internal("r", [leaf("a", 1), internal("b", [internal("c", [leaf("d", 2)], True)], False)], True)
        assert tree.height() == 3
        assert tree.leaf_count() == 2

    def test_role_and_describe(self, basic_tree):
        assert basic_tree.role == "MAX"
        assert basic_tree.find("A").role == "MIN"
        assert basic_tree.describe() == "[root] MAX (2 children)"
        assert basic_tree.find("L1").describe() == "[L1] leaf = 3"
        assert leaf("z", None).describe() == "[z] leaf = ?"


class TestSerialization:
    """Tests for plain-data conversion."""

    def test_round_trip(self, basic_tree):
        data = basic_tree.model_dump()
        assert data["children"][0]["children"][0] == {
            "id": "L1",
            "value": 3.0,
            "children": [],
            "is_max_node": True,
        }
        assert GameTreeNode.model_validate(data) == basic_tree

    def test_defaults(self):
        node = GameTreeNode.model_validate({"id": "n"})
        assert node.value is None
        assert node.children == []
        assert node.is_max_node is True

    def test_deep_copy_is_independent(self, basic_tree):
        clone = basic_tree.model_copy(deep=True)
        clone.find("L1").value = 100
        assert basic_tree.find("L1").value == 3
