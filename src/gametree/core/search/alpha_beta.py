"""
Instrumented alpha-beta pruning.

Same traversal shape as minimax, plus (alpha, beta) bounds inherited from the
parent. After each child the node tightens its own bound and, once
alpha >= beta, emits a PRUNE and stops: skipped children produce no events at
all.
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
from gametree.utils.formatting import describe_bounds, format_value


def alpha_beta(
    node: GameTreeNode,
    depth: int,
    alpha: float,
    beta: float,
    is_max: bool,
    path: Sequence[str] = (),
    reverse: bool = False,
) -> StepGenerator:
    """
    Yield the alpha-beta steps for ``node`` and return its value.

    Args:
        node: Node to evaluate
        depth: Remaining depth budget (0 evaluates ``node`` statically)
        alpha: Best value the maximizer is already guaranteed
        beta: Best value the minimizer is already guaranteed
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
        description=f"Visit {role} node **{node.id}** with {describe_bounds(alpha, beta)}",
        alpha=alpha,
        beta=beta,
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
            alpha=alpha,
            beta=beta,
            visited_ids=current_path,
            active_path=current_path,
        )
        return value

    value = initial_value(is_max)
    children = ordered_children(node, reverse)
    for index, child in enumerate(children):
        child_value = yield from alpha_beta(
            child, depth - 1, alpha, beta, child.is_max_node, current_path, reverse
        )

        if is_max:
            value = max(value, child_value)
            alpha = max(alpha, value)
        else:
            value = min(value, child_value)
            beta = min(beta, value)

        yield SimulationStep(
            id=f"update-{node.id}-{child.id}",
            kind=StepKind.UPDATE_BOUNDS,
            node_id=node.id,
            description=(
                f"{role} node **{node.id}** takes {child.id} = {format_value(child_value)}; "
                f"value={format_value(value)}, {describe_bounds(alpha, beta)}"
            ),
            current_value=value,
            alpha=alpha,
            beta=beta,
            visited_ids=current_path,
            active_path=current_path,
        )

        if alpha >= beta:
            remaining = len(children) - (index + 1)
            yield SimulationStep(
                id=f"prune-{node.id}",
                kind=StepKind.PRUNE,
                node_id=node.id,
                description=(
                    f"**Prune** at {node.id}: α ({format_value(alpha)}) >= β ({format_value(beta)}), "
                    f"skipping {remaining} remaining child(ren)"
                ),
                alpha=alpha,
                beta=beta,
                remaining_siblings=remaining,
                visited_ids=current_path,
                active_path=current_path,
            )
            break

    yield SimulationStep(
        id=f"backtrack-{node.id}",
        kind=StepKind.BACKTRACK,
        node_id=node.id,
        description=f"Backtrack from **{node.id}**, final value {format_value(value)}",
        current_value=value,
        alpha=alpha,
        beta=beta,
        visited_ids=current_path,
        active_path=current_path[:-1],
    )
    return value


__all__ = ["alpha_beta"]
