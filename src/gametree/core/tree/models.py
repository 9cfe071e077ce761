"""
Game tree data models.

These models represent the input structure searched by the engine:
- GameTreeNode: A node in the game tree (MAX or MIN role, leaf value)
- TreeEdge: A parent -> child connection, used by renderers

Tree Structure:
    root (MAX)
    ├── A (MIN)
    │   ├── L1 = 3
    │   └── L2 = 5
    └── B (MIN)
        ├── L3 = 2
        └── L4 = 9

Children order is the traversal order. Only leaves carry an authoritative
value; internal node values are derived by the search and never read back.
The role of each node is whatever it declares: alternation between parent and
child is not enforced.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from pydantic import BaseModel, Field


class GameTreeNode(BaseModel):
    """
    A node in the game tree.

    Trees are owned top-down: no shared subtrees and no parent references.
    Edits work on a deep copy (see ``gametree.core.tree.editor``) so that a
    tree already handed to playback is never mutated.
    """

    id: str
    value: Optional[float] = None
    children: List["GameTreeNode"] = Field(default_factory=list)
    is_max_node: bool = True

    @property
    def is_leaf(self) -> bool:
        """Check if this is a leaf node (no children)."""
        return len(self.children) == 0

    @property
    def role(self) -> str:
        """Display role: MAX or MIN."""
        return "MAX" if self.is_max_node else "MIN"

    # =========================================================================
    # Tree Traversal
    # =========================================================================

    def iter_nodes(self) -> Iterator["GameTreeNode"]:
        """Iterate over all nodes in pre-order (node before its children)."""
        stack: List[GameTreeNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, node_id: str) -> Optional["GameTreeNode"]:
        """Find a node by ID, or None."""
        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None

    def find_parent(self, node_id: str) -> Optional["GameTreeNode"]:
        """Find the parent of a node by ID (None for the root or unknown ids)."""
        for node in self.iter_nodes():
            if any(child.id == node_id for child in node.children):
                return node
        return None

    def path_to(self, node_id: str) -> List[str]:
        """
        Get the list of node IDs from the root to a node (inclusive).

        Returns an empty list if the node is not in the tree.
        """

        def _walk(node: GameTreeNode, prefix: List[str]) -> Optional[List[str]]:
            path = prefix + [node.id]
            if node.id == node_id:
                return path
            for child in node.children:
                found = _walk(child, path)
                if found is not None:
                    return found
            return None

        return _walk(self, []) or []

    def node_ids(self) -> List[str]:
        """All node IDs in pre-order."""
        return [node.id for node in self.iter_nodes()]

    def leaves(self) -> List["GameTreeNode"]:
        """Leaves in left-to-right order."""
        return [node for node in self.iter_nodes() if node.is_leaf]

    # =========================================================================
    # Statistics
    # =========================================================================

    def height(self) -> int:
        """Number of edges on the longest root-to-leaf path (0 for a single leaf)."""
        if self.is_leaf:
            return 0
        return 1 + max(child.height() for child in self.children)

    def leaf_count(self) -> int:
        """Number of leaves below (and including) this node."""
        if self.is_leaf:
            return 1
        return sum(child.leaf_count() for child in self.children)

    def size(self) -> int:
        """Total number of nodes."""
        return sum(1 for _ in self.iter_nodes())

    def get_statistics(self) -> Dict[str, int]:
        """Get summary statistics about the tree."""
        return {
            "total_nodes": self.size(),
            "leaf_nodes": self.leaf_count(),
            "height": self.height(),
            "max_nodes": sum(1 for n in self.iter_nodes() if n.is_max_node and not n.is_leaf),
            "min_nodes": sum(1 for n in self.iter_nodes() if not n.is_max_node and not n.is_leaf),
        }

    def describe(self) -> str:
        """Human-readable description of this node."""
        if self.is_leaf:
            value = "?" if self.value is None else f"{self.value:g}"
            return f"[{self.id}] leaf = {value}"
        return f"[{self.id}] {self.role} ({len(self.children)} children)"

    def edges(self) -> List["TreeEdge"]:
        """All parent -> child edges in pre-order."""
        return [TreeEdge(source=node.id, target=child.id) for node in self.iter_nodes() for child in node.children]


class TreeEdge(BaseModel):
    """A parent -> child edge."""

    source: str
    target: str

    @property
    def id(self) -> str:
        return f"{self.source}-{self.target}"


def leaf(node_id: str, value: Optional[float], is_max_node: bool = False) -> GameTreeNode:
    """Build a leaf node."""
    return GameTreeNode(id=node_id, value=value, is_max_node=is_max_node)


def internal(node_id: str, children: List[GameTreeNode], is_max_node: bool) -> GameTreeNode:
    """Build an internal node."""
    return GameTreeNode(id=node_id, value=None, children=children, is_max_node=is_max_node)


__all__ = [
    "GameTreeNode",
    "TreeEdge",
    "internal",
    "leaf",
]
