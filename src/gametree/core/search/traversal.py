"""Helpers shared by the instrumented search algorithms."""

from __future__ import annotations

import math
from typing import Generator, List

from gametree.core.search.steps import SimulationStep
from gametree.core.tree.models import GameTreeNode

# A search generator yields steps and returns the node's value
StepGenerator = Generator[SimulationStep, None, float]


def ordered_children(node: GameTreeNode, reverse: bool) -> List[GameTreeNode]:
    """Children in visiting order."""
    return list(reversed(node.children)) if reverse else list(node.children)


def is_terminal(node: GameTreeNode, depth: int) -> bool:
    """Leaves and nodes at the depth limit are evaluated instead of expanded."""
    return depth == 0 or node.is_leaf


def static_value(node: GameTreeNode) -> float:
    """Stored value of a node; absent values evaluate to 0."""
    return node.value if node.value is not None else 0


def initial_value(is_max: bool) -> float:
    return -math.inf if is_max else math.inf


def check_depth(depth: int) -> None:
    if depth < 0:
        raise ValueError(f"depth limit must be >= 0, got {depth}")


__all__ = [
    "StepGenerator",
    "check_depth",
    "initial_value",
    "is_terminal",
    "ordered_children",
    "static_value",
]
