"""Structural checks for game trees loaded from files or edited by hand."""

from __future__ import annotations

import math
from typing import Iterator, List, Set, Tuple

from pydantic import BaseModel, Field

from gametree.core.tree.models import GameTreeNode


class TreeValidationReport(BaseModel):
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class TreeValidator:
    def __init__(self, root: GameTreeNode):
        self.root = root

    def validate_all(self) -> TreeValidationReport:
        """Return all errors and warnings for the tree."""
        report = TreeValidationReport()
        structural = self._validate_structure()
        report.errors.extend(structural)
        if structural:
            # Value and role checks walk the tree and would not terminate on a cycle
            return report
        report.errors.extend(self._validate_leaf_values())
        report.warnings.extend(self._validate_missing_values())
        report.warnings.extend(self._validate_roles())
        return report

    def _validate_structure(self) -> List[str]:
        """Detect duplicate ids and shared or cyclic node references."""
        errors: List[str] = []
        seen_ids: Set[str] = set()
        seen_objects: Set[int] = set()
        stack = [self.root]
        while stack:
            node = stack.pop()
            if id(node) in seen_objects:
                errors.append(f"Node {node.id} is reachable more than once (shared subtree or cycle)")
                continue
            seen_objects.add(id(node))
            if node.id in seen_ids:
                errors.append(f"Duplicate node id: {node.id}")
            seen_ids.add(node.id)
            stack.extend(node.children)
        return errors

    def _validate_leaf_values(self) -> List[str]:
        errors: List[str] = []
        for node in self.root.iter_nodes():
            if node.is_leaf and node.value is not None and not math.isfinite(node.value):
                errors.append(f"Leaf {node.id} has a non-finite value: {node.value}")
        return errors

    def _validate_missing_values(self) -> List[str]:
        warnings: List[str] = []
        for node in self.root.iter_nodes():
            if node.is_leaf and node.value is None:
                warnings.append(f"Leaf {node.id} has no value (evaluates to 0)")
            elif not node.is_leaf and node.value is not None:
                warnings.append(f"Internal node {node.id} carries a stored value that will be ignored")
        return warnings

    def _validate_roles(self) -> List[str]:
        return [
            f"{child.id} has the same role as its parent {parent.id} ({parent.role})"
            for parent, child in _same_role_pairs(self.root)
        ]


def validate_tree(root: GameTreeNode) -> TreeValidationReport:
    return TreeValidator(root).validate_all()


def _same_role_pairs(root: GameTreeNode) -> Iterator[Tuple[GameTreeNode, GameTreeNode]]:
    """(parent, child) pairs where an internal child repeats its parent's role."""
    for node in root.iter_nodes():
        for child in node.children:
            if not child.is_leaf and child.is_max_node == node.is_max_node:
                yield node, child


def non_alternating_nodes(root: GameTreeNode) -> List[str]:
    """IDs of internal nodes whose role matches their parent's role."""
    return [child.id for _, child in _same_role_pairs(root)]


__all__ = [
    "TreeValidationReport",
    "TreeValidator",
    "non_alternating_nodes",
    "validate_tree",
]
