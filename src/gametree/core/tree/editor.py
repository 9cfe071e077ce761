"""
Tree editing operations.

Every operation works on a deep copy of the input tree and returns an
EditResult. Invalid operations are rejected with a reason code and the
original tree is handed back untouched.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from gametree.core.tree.models import GameTreeNode

logger = logging.getLogger(__name__)

_NODE_ID_PATTERN = re.compile(r"^node-(\d+)$")


class EditRejection(str, Enum):
    """Why an edit was rejected."""

    NODE_NOT_FOUND = "node_not_found"
    ROOT_DELETE = "root_delete"
    NOT_A_LEAF = "not_a_leaf"


class EditResult(BaseModel):
    tree: GameTreeNode
    status: str  # ok or rejected
    reason: Optional[EditRejection] = None
    message: Optional[str] = None
    node_id: Optional[str] = None  # Node created or edited

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def rejected(cls, reason: EditRejection, tree: GameTreeNode, message: str) -> "EditResult":
        logger.info("Edit rejected (%s): %s", reason.value, message)
        return cls(tree=tree, status="rejected", reason=reason, message=message)

    @classmethod
    def success(cls, tree: GameTreeNode, node_id: str) -> "EditResult":
        return cls(tree=tree, status="ok", node_id=node_id)


def next_node_id(root: GameTreeNode) -> str:
    """Return node-<n> with n one past the highest numeric suffix in the tree."""
    highest = -1
    for node in root.iter_nodes():
        match = _NODE_ID_PATTERN.match(node.id)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"node-{highest + 1}"


def add_child(root: GameTreeNode, parent_id: str, value: Optional[float] = 0) -> EditResult:
    """
    Append a new leaf under a node.

    The child takes the opposite role of its parent. The parent becomes (or
    stays) internal, so its stored value is cleared.
    """
    clone = root.model_copy(deep=True)
    parent = clone.find(parent_id)
    if parent is None:
        return EditResult.rejected(EditRejection.NODE_NOT_FOUND, root, f"Node not found: {parent_id}")

    child = GameTreeNode(id=next_node_id(clone), value=value, is_max_node=not parent.is_max_node)
    parent.children.append(child)
    parent.value = None
    return EditResult.success(clone, child.id)


def delete_node(root: GameTreeNode, node_id: str) -> EditResult:
    """Remove a node and its whole subtree. The root cannot be deleted."""
    if node_id == root.id:
        return EditResult.rejected(EditRejection.ROOT_DELETE, root, "The root node cannot be deleted")

    clone = root.model_copy(deep=True)
    parent = clone.find_parent(node_id)
    if parent is None:
        return EditResult.rejected(EditRejection.NODE_NOT_FOUND, root, f"Node not found: {node_id}")

    parent.children = [child for child in parent.children if child.id != node_id]
    return EditResult.success(clone, node_id)


def edit_leaf_value(root: GameTreeNode, node_id: str, value: float) -> EditResult:
    """Set the value of a leaf. Internal node values are derived and cannot be edited."""
    clone = root.model_copy(deep=True)
    node = clone.find(node_id)
    if node is None:
        return EditResult.rejected(EditRejection.NODE_NOT_FOUND, root, f"Node not found: {node_id}")
    if not node.is_leaf:
        return EditResult.rejected(
            EditRejection.NOT_A_LEAF,
            root,
            f"Only leaf values can be edited; {node_id} has {len(node.children)} children",
        )

    node.value = value
    return EditResult.success(clone, node_id)


__all__ = [
    "EditRejection",
    "EditResult",
    "add_child",
    "delete_node",
    "edit_leaf_value",
    "next_node_id",
]
