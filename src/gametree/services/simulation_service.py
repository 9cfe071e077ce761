"""Simulation Service: Orchestrates tree editing, search runs, layout and playback."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Mapping, Optional, Union

from gametree.config import SimulatorConfig
from gametree.core.layout import TreeLayout, compute_layout
from gametree.core.oracle import GradeReport, OracleResult, evaluate, grade_answers
from gametree.core.playback.reconstructor import BEFORE_START
from gametree.core.playback.session import PlaybackSession
from gametree.core.search.engine import SearchResult, run_search
from gametree.core.search.steps import Algorithm, TraversalOrder
from gametree.core.tree.editor import EditResult, add_child, delete_node, edit_leaf_value
from gametree.core.tree.generator import generate_empty_tree, generate_random_tree
from gametree.core.tree.models import GameTreeNode
from gametree.utils.formatting import format_value
from gametree.utils.logging import log_calls

logger = logging.getLogger(__name__)


class SimulationService:
    """
    High-level service for the simulator.

    Holds the current tree and configuration, and keeps three derived
    artifacts in sync with them: the search result, the layout and the
    playback session. Derived artifacts are replaced wholesale whenever the
    tree or the run settings change; they are never patched in place.
    """

    def __init__(self, config: Optional[SimulatorConfig] = None, tree: Optional[GameTreeNode] = None):
        """
        Initialize simulation service.

        Args:
            config: Simulator configuration (defaults if None)
            tree: Initial tree (a random tree from the generator settings if None)
        """
        self.config = config or SimulatorConfig()
        self._rng = random.Random(self.config.generator.seed)
        self._tree: GameTreeNode = tree if tree is not None else self._generate(
            self.config.generator.depth, self.config.generator.branching_factor
        )
        self._result: Optional[SearchResult] = None
        self._layout: Optional[TreeLayout] = None
        self._session: Optional[PlaybackSession] = None
        self._refresh(layout_changed=True)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def tree(self) -> GameTreeNode:
        return self._tree

    @property
    def result(self) -> SearchResult:
        assert self._result is not None
        return self._result

    @property
    def layout(self) -> TreeLayout:
        assert self._layout is not None
        return self._layout

    @property
    def session(self) -> PlaybackSession:
        assert self._session is not None
        return self._session

    # =========================================================================
    # Tree Replacement
    # =========================================================================

    @log_calls()
    def generate_tree(self, depth: Optional[int] = None, branching_factor: Optional[int] = None) -> GameTreeNode:
        """Replace the tree with a random one (generator settings fill in missing arguments)."""
        settings = self.config.generator
        tree = self._generate(
            settings.depth if depth is None else depth,
            settings.branching_factor if branching_factor is None else branching_factor,
        )
        self.set_tree(tree)
        return tree

    @log_calls()
    def create_empty_tree(self, levels: int, branching_factor: int) -> GameTreeNode:
        """Replace the tree with a full structure whose leaves hold 0."""
        tree = generate_empty_tree(levels, branching_factor)
        self.set_tree(tree)
        return tree

    def set_tree(self, tree: GameTreeNode) -> None:
        """Replace the tree; playback restarts from the beginning."""
        self._tree = tree
        self._session = None
        self._refresh(layout_changed=True)

    # =========================================================================
    # Editing
    # =========================================================================

    @log_calls()
    def add_child(self, parent_id: str, value: Optional[float] = 0) -> EditResult:
        return self._apply_edit(add_child(self._tree, parent_id, value))

    @log_calls()
    def delete_node(self, node_id: str) -> EditResult:
        return self._apply_edit(delete_node(self._tree, node_id))

    @log_calls()
    def edit_leaf_value(self, node_id: str, value: float) -> EditResult:
        return self._apply_edit(edit_leaf_value(self._tree, node_id, value))

    def _apply_edit(self, edit: EditResult) -> EditResult:
        if edit.ok:
            self._tree = edit.tree
            self._refresh(layout_changed=True)
        return edit

    # =========================================================================
    # Run Settings
    # =========================================================================

    @log_calls()
    def set_algorithm(self, algorithm: Union[Algorithm, str]) -> SearchResult:
        self.config = self.config.model_copy(update={"algorithm": Algorithm(algorithm)})
        self._refresh()
        return self.result

    @log_calls()
    def set_traversal(self, traversal: Union[TraversalOrder, str]) -> SearchResult:
        self.config = self.config.model_copy(update={"traversal": TraversalOrder(traversal)})
        self._refresh()
        return self.result

    @log_calls()
    def set_depth_limit(self, depth_limit: int) -> SearchResult:
        if depth_limit < 0:
            raise ValueError(f"depth limit must be >= 0, got {depth_limit}")
        self.config = self.config.model_copy(update={"depth_limit": depth_limit})
        self._refresh()
        return self.result

    # =========================================================================
    # Oracle
    # =========================================================================

    def oracle(self) -> OracleResult:
        """Direct evaluation of the current tree with the current settings."""
        return evaluate(
            self._tree,
            self.config.algorithm,
            depth_limit=self.config.depth_limit,
            traversal=self.config.traversal,
        )

    @log_calls()
    def grade(self, answers: Mapping[str, Optional[float]], pruned: Optional[Iterable[str]] = None) -> GradeReport:
        """Grade Learn Mode answers for the current tree and settings."""
        return grade_answers(
            self._tree,
            answers,
            self.config.algorithm,
            pruned=pruned,
            depth_limit=self.config.depth_limit,
            traversal=self.config.traversal,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _generate(self, depth: int, branching_factor: int) -> GameTreeNode:
        settings = self.config.generator
        return generate_random_tree(
            depth,
            branching_factor,
            min_value=settings.min_value,
            max_value=settings.max_value,
            drop_probability=settings.drop_probability,
            rng=self._rng,
        )

    def _refresh(self, layout_changed: bool = False) -> None:
        """Rerun the search and rebuild derived artifacts."""
        self._result = run_search(
            self._tree,
            self.config.algorithm,
            depth_limit=self.config.depth_limit,
            traversal=self.config.traversal,
        )
        if layout_changed or self._layout is None:
            settings = self.config.layout
            self._layout = compute_layout(
                self._tree,
                node_size=settings.node_size,
                level_height=settings.level_height,
                leaf_spacing=settings.leaf_spacing,
                top_margin=settings.top_margin,
            )

        # Keep the scrub position when it still exists in the new log
        index = BEFORE_START
        if self._session is not None and self._session.index < len(self._result.steps):
            index = self._session.index
        self._session = PlaybackSession(self._tree, self._result, index)

        logger.info(
            "Ran %s (%s) on %s: %d steps, root value %s",
            self._result.algorithm.value,
            self._result.traversal.value,
            self._tree.id,
            len(self._result.steps),
            format_value(self._result.root_value),
        )


__all__ = ["SimulationService"]
