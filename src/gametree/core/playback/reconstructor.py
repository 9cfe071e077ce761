"""
Playback reconstruction.

Folds a prefix of a step log into the state a renderer needs at that point:
which node is active, which nodes have been visited or pruned, the latest
value per node and the current alpha/beta bounds.

Reconstruction is a pure function of (tree, steps, index). Nothing is cached
between calls, so jumping to any index gives exactly the same snapshot as
stepping there one event at a time.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field

from gametree.core.search.steps import SimulationStep, StepKind
from gametree.core.tree.models import GameTreeNode

BEFORE_START = -1


class PlaybackSnapshot(BaseModel):
    """
    Renderable state after ``steps[0..index]``.

    ``index == -1`` is the state before the first event: nothing active,
    visited or pruned.
    """

    model_config = ConfigDict(frozen=True)

    index: int = BEFORE_START
    total_steps: int = 0
    step: Optional[SimulationStep] = None
    active_id: Optional[str] = None
    active_path: Tuple[str, ...] = ()
    visited_ids: Tuple[str, ...] = ()  # First-visit order
    pruned_ids: Tuple[str, ...] = ()
    current_values: Dict[str, float] = Field(default_factory=dict)
    alpha_values: Dict[str, float] = Field(default_factory=dict)
    beta_values: Dict[str, float] = Field(default_factory=dict)
    explanation: Optional[str] = None

    @property
    def is_before_start(self) -> bool:
        return self.index == BEFORE_START

    @property
    def is_finished(self) -> bool:
        return self.total_steps > 0 and self.index == self.total_steps - 1

    def is_visited(self, node_id: str) -> bool:
        return node_id in self.visited_ids

    def is_pruned(self, node_id: str) -> bool:
        return node_id in self.pruned_ids


def check_index(steps: Sequence[SimulationStep], index: int) -> None:
    """
    Raises:
        IndexError: If index is not in [-1, len(steps) - 1]
    """
    if index < BEFORE_START or index >= len(steps):
        raise IndexError(f"step index {index} out of range [-1, {len(steps) - 1}]")


def collect_pruned_ids(root: GameTreeNode, steps: Sequence[SimulationStep], index: int) -> List[str]:
    """
    Node IDs cut off by PRUNE events in ``steps[0..index]``.

    For each PRUNE, the pruned node's children that were not visited before
    that event are marked, together with their subtrees. Recursion stops at
    nodes that were visited, so an earlier prune can never hide a node that
    the search actually reached.
    """
    check_index(steps, index)
    pruned: List[str] = []
    pruned_set: Set[str] = set()
    visited: Set[str] = set()

    def _mark(node: GameTreeNode) -> None:
        if node.id in visited:
            return
        if node.id not in pruned_set:
            pruned_set.add(node.id)
            pruned.append(node.id)
        for child in node.children:
            _mark(child)

    for step in steps[: index + 1]:
        visited.update(step.visited_ids)
        if step.kind != StepKind.PRUNE:
            continue
        node = root.find(step.node_id)
        if node is None:
            continue
        for child in node.children:
            _mark(child)

    return pruned


def reconstruct(root: GameTreeNode, steps: Sequence[SimulationStep], index: int) -> PlaybackSnapshot:
    """
    Build the playback snapshot after ``steps[0..index]``.

    Args:
        root: Tree the steps were produced from
        steps: Complete step log of one run
        index: Last applied step, or -1 for "before the first step"

    Returns:
        PlaybackSnapshot

    Raises:
        IndexError: If index is not in [-1, len(steps) - 1]
    """
    check_index(steps, index)
    if index == BEFORE_START:
        return PlaybackSnapshot(total_steps=len(steps))

    visited: List[str] = []
    seen: Set[str] = set()
    current_values: Dict[str, float] = {}
    alpha_values: Dict[str, float] = {}
    beta_values: Dict[str, float] = {}

    for step in steps[: index + 1]:
        for node_id in step.visited_ids:
            if node_id not in seen:
                seen.add(node_id)
                visited.append(node_id)
        if step.current_value is not None:
            current_values[step.node_id] = step.current_value
        if step.alpha is not None:
            alpha_values[step.node_id] = step.alpha
        if step.beta is not None:
            beta_values[step.node_id] = step.beta

    step = steps[index]
    return PlaybackSnapshot(
        index=index,
        total_steps=len(steps),
        step=step,
        active_id=step.node_id,
        active_path=step.active_path,
        visited_ids=tuple(visited),
        pruned_ids=tuple(collect_pruned_ids(root, steps, index)),
        current_values=current_values,
        alpha_values=alpha_values,
        beta_values=beta_values,
        explanation=step.description,
    )


__all__ = [
    "BEFORE_START",
    "PlaybackSnapshot",
    "check_index",
    "collect_pruned_ids",
    "reconstruct",
]
