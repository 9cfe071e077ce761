"""
Search event models.

A run of the search engine produces an ordered, append-only list of
SimulationStep events. Each step describes one discrete algorithm action on
one node; playback reconstructs everything it displays from these alone.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class StepKind(str, Enum):
    """Kind of algorithm event."""

    VISIT = "VISIT"  # Entered a node
    EVALUATE = "EVALUATE"  # Read a leaf (or depth-limited) value
    UPDATE_BOUNDS = "UPDATE_BOUNDS"  # Folded a child's value into the node
    PRUNE = "PRUNE"  # alpha >= beta, remaining children skipped
    BACKTRACK = "BACKTRACK"  # Left a node with its final value


class Algorithm(str, Enum):
    MINIMAX = "minimax"
    ALPHA_BETA = "alphabeta"

    @property
    def label(self) -> str:
        return "Minimax" if self is Algorithm.MINIMAX else "Alpha-Beta"


class TraversalOrder(str, Enum):
    """Child visiting order."""

    LEFT_TO_RIGHT = "ltr"  # As stored
    RIGHT_TO_LEFT = "rtl"  # Reversed

    @property
    def reverse(self) -> bool:
        return self is TraversalOrder.RIGHT_TO_LEFT


class SimulationStep(BaseModel):
    """
    One algorithm event.

    Values and bounds are floats; -inf/+inf are legitimate bounds and survive
    as floats here. Formatting for display goes through
    ``gametree.utils.formatting.format_value``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    kind: StepKind
    node_id: str
    description: str
    current_value: Optional[float] = None
    alpha: Optional[float] = None
    beta: Optional[float] = None
    remaining_siblings: Optional[int] = None  # PRUNE only
    visited_ids: Tuple[str, ...] = ()  # Root -> node path
    active_path: Tuple[str, ...] = ()  # Highlighted path

    @property
    def has_bounds(self) -> bool:
        return self.alpha is not None or self.beta is not None


__all__ = ["Algorithm", "SimulationStep", "StepKind", "TraversalOrder"]
