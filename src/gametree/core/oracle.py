"""
Correctness oracle.

Evaluates a tree directly, without emitting steps. Serves two purposes:
- Grading: the expected answers for Learn Mode (node values and, for
  alpha-beta, which nodes are never visited)
- Reference: the instrumented engine must agree with it on every backed-up
  value and on the pruned set
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Mapping, Optional, Set, Union

from pydantic import BaseModel, Field

from gametree.core.search.engine import DEFAULT_DEPTH_LIMIT
from gametree.core.search.steps import Algorithm, TraversalOrder
from gametree.core.search.traversal import (
    check_depth,
    initial_value,
    is_terminal,
    ordered_children,
    static_value,
)
from gametree.core.tree.models import GameTreeNode

logger = logging.getLogger(__name__)


class OracleResult(BaseModel):
    algorithm: Algorithm
    root_value: float
    values: Dict[str, float] = Field(default_factory=dict)  # Internal nodes reached
    pruned_ids: Set[str] = Field(default_factory=set)  # Alpha-beta only


def evaluate(
    root: GameTreeNode,
    algorithm: Union[Algorithm, str] = Algorithm.MINIMAX,
    *,
    depth_limit: int = DEFAULT_DEPTH_LIMIT,
    traversal: Union[TraversalOrder, str] = TraversalOrder.LEFT_TO_RIGHT,
    maximizing: Optional[bool] = None,
    alpha: float = -math.inf,
    beta: float = math.inf,
) -> OracleResult:
    """
    Compute the value of every internal node a correct run backs up.

    For alpha-beta the values are the ones alpha-beta itself returns, which
    for cut-off nodes are bounds rather than exact minimax values. Pruned
    ids are the skipped children of every cut-off, with their whole subtrees.

    Raises:
        ValueError: If depth_limit is negative or the algorithm is unknown
    """
    check_depth(depth_limit)
    algorithm = Algorithm(algorithm)
    reverse = TraversalOrder(traversal).reverse
    is_max = root.is_max_node if maximizing is None else maximizing

    values: Dict[str, float] = {}
    pruned: Set[str] = set()

    def _minimax(node: GameTreeNode, depth: int, node_is_max: bool) -> float:
        if is_terminal(node, depth):
            return static_value(node)
        best = initial_value(node_is_max)
        for child in ordered_children(node, reverse):
            child_value = _minimax(child, depth - 1, child.is_max_node)
            best = max(best, child_value) if node_is_max else min(best, child_value)
        values[node.id] = best
        return best

    def _alpha_beta(node: GameTreeNode, depth: int, a: float, b: float, node_is_max: bool) -> float:
        if is_terminal(node, depth):
            return static_value(node)
        value = initial_value(node_is_max)
        children = ordered_children(node, reverse)
        for index, child in enumerate(children):
            child_value = _alpha_beta(child, depth - 1, a, b, child.is_max_node)
            if node_is_max:
                value = max(value, child_value)
                a = max(a, value)
            else:
                value = min(value, child_value)
                b = min(b, value)
            if a >= b:
                for skipped in children[index + 1 :]:
                    pruned.update(skipped.node_ids())
                break
        values[node.id] = value
        return value

    if algorithm is Algorithm.MINIMAX:
        root_value = _minimax(root, depth_limit, is_max)
    else:
        root_value = _alpha_beta(root, depth_limit, alpha, beta, is_max)

    return OracleResult(algorithm=algorithm, root_value=root_value, values=values, pruned_ids=pruned)


# =============================================================================
# Grading
# =============================================================================


class NodeGrade(BaseModel):
    node_id: str
    expected: float
    given: Optional[float] = None

    @property
    def answered(self) -> bool:
        return self.given is not None

    @property
    def correct(self) -> bool:
        if self.given is None:
            return False
        if math.isinf(self.expected) or math.isinf(self.given):
            return self.expected == self.given
        return math.isclose(self.expected, self.given, rel_tol=1e-9, abs_tol=1e-9)


class GradeReport(BaseModel):
    algorithm: Algorithm
    grades: List[NodeGrade] = Field(default_factory=list)
    unexpected: List[str] = Field(default_factory=list)  # Answers for nodes that need none
    missed_pruned: List[str] = Field(default_factory=list)  # Pruned but not claimed
    wrongly_pruned: List[str] = Field(default_factory=list)  # Claimed but not pruned

    @property
    def correct(self) -> List[NodeGrade]:
        return [g for g in self.grades if g.correct]

    @property
    def incorrect(self) -> List[NodeGrade]:
        return [g for g in self.grades if g.answered and not g.correct]

    @property
    def missing(self) -> List[NodeGrade]:
        return [g for g in self.grades if not g.answered]

    @property
    def score(self) -> float:
        """Fraction of expected node values answered correctly."""
        if not self.grades:
            return 1.0
        return len(self.correct) / len(self.grades)

    @property
    def passed(self) -> bool:
        return (
            len(self.correct) == len(self.grades)
            and not self.missed_pruned
            and not self.wrongly_pruned
        )


def grade_answers(
    root: GameTreeNode,
    answers: Mapping[str, Optional[float]],
    algorithm: Union[Algorithm, str] = Algorithm.MINIMAX,
    *,
    pruned: Optional[Iterable[str]] = None,
    depth_limit: int = DEFAULT_DEPTH_LIMIT,
    traversal: Union[TraversalOrder, str] = TraversalOrder.LEFT_TO_RIGHT,
) -> GradeReport:
    """
    Grade user answers against the oracle.

    Args:
        root: Tree being studied
        answers: Node ID -> value entered by the user (None = left blank)
        algorithm: Algorithm whose values are expected
        pruned: Node IDs the user marked as pruned (checked for alpha-beta only)
        depth_limit: Depth budget of the run being graded
        traversal: Child order of the run being graded

    Returns:
        GradeReport with one NodeGrade per expected internal node
    """
    oracle = evaluate(root, algorithm, depth_limit=depth_limit, traversal=traversal)

    grades = [
        NodeGrade(node_id=node_id, expected=expected, given=answers.get(node_id))
        for node_id, expected in oracle.values.items()
    ]
    grades.sort(key=lambda g: g.node_id)
    unexpected = sorted(node_id for node_id in answers if node_id not in oracle.values)

    missed: List[str] = []
    wrong: List[str] = []
    if pruned is not None and oracle.algorithm is Algorithm.ALPHA_BETA:
        claimed = set(pruned)
        missed = sorted(oracle.pruned_ids - claimed)
        wrong = sorted(claimed - oracle.pruned_ids)

    report = GradeReport(
        algorithm=oracle.algorithm,
        grades=grades,
        unexpected=unexpected,
        missed_pruned=missed,
        wrongly_pruned=wrong,
    )
    logger.info(
        "Graded %d answers for %s: %d correct, %d incorrect, %d missing",
        len(answers),
        oracle.algorithm.value,
        len(report.correct),
        len(report.incorrect),
        len(report.missing),
    )
    return report


__all__ = [
    "GradeReport",
    "NodeGrade",
    "OracleResult",
    "evaluate",
    "grade_answers",
]
