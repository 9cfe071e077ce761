"""
Instrumented game-tree search.

Components:
- SimulationStep / StepKind: Events emitted by the algorithms
- minimax / alpha_beta: Step generators (yield steps, return node value)
- run_search: Drain a generator into a SearchResult

Example:
    from gametree.core.search import run_search

    result = run_search(root, "alphabeta", traversal="rtl")
    print(result.root_value, len(result.steps))
"""

from gametree.core.search.alpha_beta import alpha_beta
from gametree.core.search.engine import (
    DEFAULT_DEPTH_LIMIT,
    SearchResult,
    SearchStats,
    drain,
    iter_steps,
    run_search,
)
from gametree.core.search.minimax import minimax
from gametree.core.search.steps import Algorithm, SimulationStep, StepKind, TraversalOrder

__all__ = [
    "Algorithm",
    "DEFAULT_DEPTH_LIMIT",
    "SearchResult",
    "SearchStats",
    "SimulationStep",
    "StepKind",
    "TraversalOrder",
    "alpha_beta",
    "drain",
    "iter_steps",
    "minimax",
    "run_search",
]
