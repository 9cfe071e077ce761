"""
Tree layout.

Positions nodes for display:
- Leaves get sequential, evenly spaced x in traversal order (left to right)
- Internal nodes sit at the midpoint of their children's extreme x values
- y depends on depth only

Layout reads topology (ids, child order, depth) and nothing else, so it is
independent of node values and of any search run.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from gametree.core.tree.models import GameTreeNode, TreeEdge


class LayoutNode(BaseModel):
    """A tree node with its display position."""

    id: str
    value: Optional[float] = None
    is_max_node: bool = True
    children_ids: List[str] = Field(default_factory=list)
    depth: int = 0
    x: float
    y: float
    width: float
    height: float

    @property
    def is_leaf(self) -> bool:
        return not self.children_ids


class TreeLayout(BaseModel):
    """Positions for every node plus the edges between them."""

    nodes: List[LayoutNode] = Field(default_factory=list)  # Post-order
    edges: List[TreeEdge] = Field(default_factory=list)
    width: float = 0
    height: float = 0

    def position(self, node_id: str) -> Optional[LayoutNode]:
        """Get a node's layout entry by ID."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def positions(self) -> Dict[str, tuple[float, float]]:
        """Map node ID -> (x, y)."""
        return {node.id: (node.x, node.y) for node in self.nodes}


def compute_layout(
    root: GameTreeNode,
    node_size: float = 50,
    level_height: float = 120,
    leaf_spacing: float = 2.5,
    top_margin: float = 50,
) -> TreeLayout:
    """
    Compute display positions for a tree.

    Args:
        root: Tree to lay out
        node_size: Width and height of each node
        level_height: Vertical distance between depths
        leaf_spacing: Horizontal distance between leaves, in node sizes
        top_margin: y of the root

    Returns:
        TreeLayout with nodes in post-order (children before parents)
    """
    nodes: List[LayoutNode] = []
    leaf_index = 0
    max_depth = 0

    def _place(node: GameTreeNode, depth: int) -> float:
        nonlocal leaf_index, max_depth
        max_depth = max(max_depth, depth)

        if node.is_leaf:
            x = leaf_index * (node_size * leaf_spacing) + node_size / 2
            leaf_index += 1
        else:
            children_x = [_place(child, depth + 1) for child in node.children]
            x = (min(children_x) + max(children_x)) / 2

        nodes.append(
            LayoutNode(
                id=node.id,
                value=node.value,
                is_max_node=node.is_max_node,
                children_ids=[child.id for child in node.children],
                depth=depth,
                x=x,
                y=depth * level_height + top_margin,
                width=node_size,
                height=node_size,
            )
        )
        return x

    _place(root, 0)

    return TreeLayout(
        nodes=nodes,
        edges=root.edges(),
        width=(leaf_index - 1) * node_size * leaf_spacing + node_size,
        height=(max_depth + 1) * level_height,
    )


__all__ = ["LayoutNode", "TreeLayout", "compute_layout"]
