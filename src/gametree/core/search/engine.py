"""
Search engine entry point.

Runs one of the instrumented algorithms to completion and materializes the
full step log. The log is immutable once returned; a new run produces a new
SearchResult rather than touching an old one.
"""

from __future__ import annotations

import logging
import math
from typing import Generator, List, Optional, Sequence, Set, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from gametree.core.search.alpha_beta import alpha_beta
from gametree.core.search.minimax import minimax
from gametree.core.search.steps import Algorithm, SimulationStep, StepKind, TraversalOrder
from gametree.core.search.traversal import StepGenerator, check_depth
from gametree.core.tree.models import GameTreeNode
from gametree.utils.formatting import format_value

logger = logging.getLogger(__name__)

DEFAULT_DEPTH_LIMIT = 10


class SearchStats(BaseModel):
    """Counters derived from a step log."""

    visited: int = 0  # VISIT events
    evaluated: int = 0  # EVALUATE events
    prunes: int = 0  # PRUNE events
    skipped_children: int = 0  # Children cut off by PRUNE events

    @classmethod
    def from_steps(cls, steps: Sequence[SimulationStep]) -> "SearchStats":
        stats = cls()
        for step in steps:
            if step.kind == StepKind.VISIT:
                stats.visited += 1
            elif step.kind == StepKind.EVALUATE:
                stats.evaluated += 1
            elif step.kind == StepKind.PRUNE:
                stats.prunes += 1
                stats.skipped_children += step.remaining_siblings or 0
        return stats


class SearchResult(BaseModel):
    """Complete outcome of one search run."""

    model_config = ConfigDict(frozen=True)

    algorithm: Algorithm
    traversal: TraversalOrder
    depth_limit: int
    root_id: str
    root_value: float
    steps: Tuple[SimulationStep, ...] = ()
    stats: SearchStats = Field(default_factory=SearchStats)

    def __len__(self) -> int:
        return len(self.steps)

    def visited_ids(self) -> Set[str]:
        """IDs of every node that received a VISIT event."""
        return {step.node_id for step in self.steps if step.kind == StepKind.VISIT}

    def backtrack_values(self) -> dict[str, float]:
        """Final value of every node that was backtracked from."""
        return {step.node_id: step.current_value for step in self.steps if step.kind == StepKind.BACKTRACK}

    def describe(self) -> str:
        return (
            f"{self.algorithm.label} ({self.traversal.value}) on {self.root_id}: "
            f"value {format_value(self.root_value)} in {len(self.steps)} steps"
        )


def iter_steps(
    root: GameTreeNode,
    algorithm: Union[Algorithm, str] = Algorithm.MINIMAX,
    *,
    depth_limit: int = DEFAULT_DEPTH_LIMIT,
    traversal: Union[TraversalOrder, str] = TraversalOrder.LEFT_TO_RIGHT,
    maximizing: Optional[bool] = None,
    alpha: float = -math.inf,
    beta: float = math.inf,
) -> StepGenerator:
    """
    Create the step generator for a run without draining it.

    The generator's return value (``StopIteration.value``) is the root value.

    Raises:
        ValueError: If depth_limit is negative or the algorithm is unknown
    """
    check_depth(depth_limit)
    algorithm = Algorithm(algorithm)
    traversal = TraversalOrder(traversal)
    is_max = root.is_max_node if maximizing is None else maximizing

    if algorithm is Algorithm.MINIMAX:
        return minimax(root, depth_limit, is_max, reverse=traversal.reverse)
    return alpha_beta(root, depth_limit, alpha, beta, is_max, reverse=traversal.reverse)


def drain(generator: Generator[SimulationStep, None, float]) -> Tuple[List[SimulationStep], float]:
    """Consume a step generator, returning (steps, return value)."""
    steps: List[SimulationStep] = []
    while True:
        try:
            steps.append(next(generator))
        except StopIteration as stop:
            return steps, stop.value


def run_search(
    root: GameTreeNode,
    algorithm: Union[Algorithm, str] = Algorithm.MINIMAX,
    *,
    depth_limit: int = DEFAULT_DEPTH_LIMIT,
    traversal: Union[TraversalOrder, str] = TraversalOrder.LEFT_TO_RIGHT,
    maximizing: Optional[bool] = None,
    alpha: float = -math.inf,
    beta: float = math.inf,
) -> SearchResult:
    """
    Run a search to completion and return the full step log.

    Args:
        root: Root of the tree to search
        algorithm: minimax or alphabeta
        depth_limit: Depth budget; nodes at this depth are evaluated statically
        traversal: ltr (children as stored) or rtl (reversed)
        maximizing: Role of the root; defaults to ``root.is_max_node``
        alpha: Initial alpha bound (alpha-beta only)
        beta: Initial beta bound (alpha-beta only)

    Returns:
        SearchResult with the ordered steps and the root value

    Raises:
        ValueError: If depth_limit is negative or the algorithm is unknown
    """
    algorithm = Algorithm(algorithm)
    traversal = TraversalOrder(traversal)
    generator = iter_steps(
        root,
        algorithm,
        depth_limit=depth_limit,
        traversal=traversal,
        maximizing=maximizing,
        alpha=alpha,
        beta=beta,
    )
    steps, root_value = drain(generator)

    result = SearchResult(
        algorithm=algorithm,
        traversal=traversal,
        depth_limit=depth_limit,
        root_id=root.id,
        root_value=root_value,
        steps=steps,
        stats=SearchStats.from_steps(steps),
    )
    logger.debug("Search finished: %s", result.describe())
    return result


__all__ = [
    "DEFAULT_DEPTH_LIMIT",
    "SearchResult",
    "SearchStats",
    "drain",
    "iter_steps",
    "run_search",
]
