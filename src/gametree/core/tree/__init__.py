"""
Game tree module.

Provides the input data structure for the search engine and the operations
that produce or replace trees.

Components:
- GameTreeNode: Node in the game tree (MAX/MIN role, leaf value, ordered children)
- TreeEdge: Parent -> child connection
- generate_random_tree / generate_empty_tree: Tree generators
- add_child / delete_node / edit_leaf_value: Copy-on-edit operations
- validate_tree: Structural checks

Example:
    from gametree.core.tree import generate_random_tree, edit_leaf_value

    root = generate_random_tree(depth=3, branching_factor=2, seed=7)
    result = edit_leaf_value(root, root.leaves()[0].id, 42)
    if result.ok:
        root = result.tree
"""

from gametree.core.tree.editor import (
    EditRejection,
    EditResult,
    add_child,
    delete_node,
    edit_leaf_value,
    next_node_id,
)
from gametree.core.tree.generator import generate_empty_tree, generate_random_tree
from gametree.core.tree.models import GameTreeNode, TreeEdge, internal, leaf
from gametree.core.tree.validation import TreeValidationReport, non_alternating_nodes, validate_tree

__all__ = [
    "GameTreeNode",
    "TreeEdge",
    "internal",
    "leaf",
    "generate_random_tree",
    "generate_empty_tree",
    "EditRejection",
    "EditResult",
    "add_child",
    "delete_node",
    "edit_leaf_value",
    "next_node_id",
    "TreeValidationReport",
    "non_alternating_nodes",
    "validate_tree",
]
