"""
Shared fixtures for game-tree tests.

Node IDs in the hand-built trees are short (root, A, B, L1...) so expected
step sequences stay readable.
"""

import pytest

from gametree.core.tree.models import GameTreeNode, internal, leaf


def two_level_tree(a1: float, a2: float, b1: float, b2: float) -> GameTreeNode:
    """Max(Min(a1, a2), Min(b1, b2)) with ids root, A, B, L1..L4."""
    return internal(
        "root",
        [
            internal("A", [leaf("L1", a1, True), leaf("L2", a2, True)], False),
            internal("B", [leaf("L3", b1, True), leaf("L4", b2, True)], False),
        ],
        True,
    )


@pytest.fixture
def basic_tree() -> GameTreeNode:
    """Max(Min(3, 5), Min(2, 9)): minimax value 3, alpha-beta prunes L4."""
    return two_level_tree(3, 5, 2, 9)


@pytest.fixture
def cutoff_tree() -> GameTreeNode:
    """Max(Min(5, 6), Min(4, 100)): alpha-beta never reaches the 100 leaf."""
    return two_level_tree(5, 6, 4, 100)


@pytest.fixture
def missing_value_tree() -> GameTreeNode:
    """Max(leaf without value, -5): the missing value counts as 0."""
    return internal("root", [leaf("X", None, False), leaf("Y", -5, False)], True)


@pytest.fixture
def non_alternating_tree() -> GameTreeNode:
    """MAX root with a MAX child C(1, 7) and a MIN child D(4, 8): value 7."""
    return internal(
        "root",
        [
            internal("C", [leaf("C1", 1), leaf("C2", 7)], True),
            internal("D", [leaf("D1", 4), leaf("D2", 8)], False),
        ],
        True,
    )


@pytest.fixture
def tree_factory():
    """Build Max(Min(a1, a2), Min(b1, b2)) trees with custom leaf values."""
    return two_level_tree
