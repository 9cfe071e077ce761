"""
Instrumented minimax.

Exhaustive depth-first, post-order evaluation. Every child of every node
within the depth limit is visited; no bounds are tracked.
"""

from __future__ import annotations

from typing import Sequence

from gametree.core.search.steps import SimulationStep, StepKind
from gametree.core.search.traversal import (
    StepGenerator,
    initial_value,
    is_terminal,
    ordered_children,
    static_value,
)
from gametree.core.tree.models import GameTreeNode
from gametree.utils.formatting import format_value


def minimax(
    node: GameTreeNode,
    depth: int,
    is_max: bool,
    path: Sequence[str] = (),
    reverse: bool = False,
) -> StepGenerator:
    """
    Yield the minimax steps for ``node`` and return its value.

    Args:
        node: Node to evaluate
        depth: Remaining depth budget (0 evaluates ``node`` statically)
        is_max: Role used for ``node``; children use their own declared role
        path: Node IDs from the root to the parent of ``node``
        reverse: Visit children right-to-left
    """
    current_path = [*path, node.id]
    role = "MAX" if is_max else "MIN"

    yield SimulationStep(
        id=f"visit-{node.id}",
        kind=StepKind.VISIT,
        node_id=node.id,
        description=f"Visit {role} node **{node.id}**",
        visited_ids=current_path,
        active_path=current_path,
    )

    if is_terminal(node, depth):
        value = static_value(node)
        reason = "Leaf" if node.is_leaf else "Depth limit reached,"
        yield SimulationStep(
            id=f"eval-{node.id}",
            kind=StepKind.EVALUATE,
            node_id=node.id,
            description=f"{reason} evaluate **{node.id}** = {format_value(value)}",
            current_value=value,
            visited_ids=current_path,
            active_path=current_path,
        )
        return value

    best = initial_value(is_max)
    for child in ordered_children(node, reverse):
        child_value = yield from minimax(child, depth - 1, child.is_max_node, current_path, reverse)
        best = max(best, child_value) if is_max else min(best, child_value)

        yield SimulationStep(
            id=f"update-{node.id}-{child.id}",
            kind=StepKind.UPDATE_BOUNDS,
            node_id=node.id,
            description=(
                f"{role} node **{node.id}** takes {child.id} = {format_value(child_value)}; "
                f"value is now {format_value(best)}"
            ),
            current_value=best,
            visited_ids=current_path,
            active_path=current_path,
        )

    yield SimulationStep(
        id=f"backtrack-{node.id}",
        kind=StepKind.BACKTRACK,
        node_id=node.id,
        description=f"Done with **{node.id}**, final value {format_value(best)}",
        current_value=best,
        visited_ids=current_path,
        active_path=current_path[:-1],
    )
    return best


__all__ = ["minimax"]
