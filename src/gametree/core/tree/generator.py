"""
Tree generation.

Produces random trees for exploration and empty structures for users to fill
in. Node IDs are sequential (node-0, node-1, ...) in pre-order.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from gametree.core.tree.models import GameTreeNode

logger = logging.getLogger(__name__)


class _IdCounter:
    """Sequential node ID source (node-0, node-1, ...)."""

    def __init__(self) -> None:
        self._next = 0

    def __call__(self) -> str:
        node_id = f"node-{self._next}"
        self._next += 1
        return node_id


def generate_random_tree(
    depth: int,
    branching_factor: int,
    *,
    root_is_max: bool = True,
    min_value: int = -50,
    max_value: int = 49,
    drop_probability: float = 0.1,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> GameTreeNode:
    """
    Generate a random game tree.

    Leaves sit at exactly ``depth`` edges from the root and get integer values
    in ``[min_value, max_value]``. Roles alternate from ``root_is_max``. Each of
    the ``branching_factor`` child slots is dropped with ``drop_probability``,
    but every internal node keeps at least one child.

    Args:
        depth: Number of edges from root to leaves (0 gives a single leaf)
        branching_factor: Maximum children per internal node
        root_is_max: Role of the root
        min_value: Lowest leaf value (inclusive)
        max_value: Highest leaf value (inclusive)
        drop_probability: Chance that a child slot is left empty
        seed: Seed for a private random generator (ignored when ``rng`` is given)
        rng: Random generator to draw from

    Returns:
        Root of the generated tree

    Raises:
        ValueError: If depth is negative, branching_factor < 1 or the value range is empty
    """
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")
    if branching_factor < 1:
        raise ValueError(f"branching_factor must be >= 1, got {branching_factor}")
    if min_value > max_value:
        raise ValueError(f"min_value ({min_value}) must be <= max_value ({max_value})")

    rng = rng or random.Random(seed)
    next_id = _IdCounter()

    def _create(current_depth: int, is_max: bool) -> GameTreeNode:
        node = GameTreeNode(id=next_id(), value=None, is_max_node=is_max)

        if current_depth == depth:
            node.value = rng.randint(min_value, max_value)
            return node

        for _ in range(branching_factor):
            if rng.random() >= drop_probability:
                node.children.append(_create(current_depth + 1, not is_max))

        if not node.children:
            node.children.append(_create(current_depth + 1, not is_max))

        return node

    root = _create(0, root_is_max)
    logger.debug("Generated random tree depth=%d branching=%d nodes=%d", depth, branching_factor, root.size())
    return root


def generate_empty_tree(levels: int, branching_factor: int, *, root_is_max: bool = True) -> GameTreeNode:
    """
    Generate a full tree structure whose leaves all hold 0.

    Args:
        levels: Number of levels including the root (1 gives a single leaf)
        branching_factor: Children per internal node
        root_is_max: Role of the root

    Raises:
        ValueError: If levels < 1 or branching_factor < 1
    """
    if levels < 1:
        raise ValueError(f"levels must be >= 1, got {levels}")
    if branching_factor < 1:
        raise ValueError(f"branching_factor must be >= 1, got {branching_factor}")

    next_id = _IdCounter()

    def _create(remaining: int, is_max: bool) -> GameTreeNode:
        node = GameTreeNode(id=next_id(), value=0 if remaining == 1 else None, is_max_node=is_max)
        if remaining > 1:
            node.children = [_create(remaining - 1, not is_max) for _ in range(branching_factor)]
        return node

    return _create(levels, root_is_max)


__all__ = ["generate_empty_tree", "generate_random_tree"]
