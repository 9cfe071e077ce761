"""Playback cursor over one immutable step log."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from gametree.core.playback.reconstructor import BEFORE_START, PlaybackSnapshot, check_index, reconstruct
from gametree.core.search.engine import SearchResult
from gametree.core.search.steps import SimulationStep, StepKind
from gametree.core.tree.models import GameTreeNode

logger = logging.getLogger(__name__)


class PlaybackSession:
    """
    Step through a search run.

    The cursor index is the only state held here; every snapshot is rebuilt
    from scratch by ``reconstruct``. Moving past either end is a no-op.
    """

    def __init__(self, root: GameTreeNode, result: SearchResult, index: int = BEFORE_START):
        self.root = root
        self.result = result
        check_index(result.steps, index)
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    @property
    def total_steps(self) -> int:
        return len(self.result.steps)

    @property
    def at_start(self) -> bool:
        return self._index == BEFORE_START

    @property
    def at_end(self) -> bool:
        return self._index == self.total_steps - 1

    @property
    def current_step(self) -> Optional[SimulationStep]:
        if self.at_start:
            return None
        return self.result.steps[self._index]

    def snapshot(self) -> PlaybackSnapshot:
        """Snapshot at the current index."""
        return reconstruct(self.root, self.result.steps, self._index)

    def next(self) -> PlaybackSnapshot:
        """Advance one step (no-op at the end)."""
        if not self.at_end:
            self._index += 1
        return self.snapshot()

    def previous(self) -> PlaybackSnapshot:
        """Go back one step (no-op before the first step)."""
        if not self.at_start:
            self._index -= 1
        return self.snapshot()

    def seek(self, index: int) -> PlaybackSnapshot:
        """
        Jump to any index in [-1, total_steps - 1].

        Raises:
            IndexError: If index is out of range
        """
        check_index(self.result.steps, index)
        self._index = index
        return self.snapshot()

    def play(self) -> Iterator[PlaybackSnapshot]:
        """
        Advance one step at a time until the end, yielding each snapshot.

        Starts after the current index; yields nothing when already at the end.
        Pacing is left to the caller.
        """
        while not self.at_end:
            yield self.next()

    def reset(self) -> PlaybackSnapshot:
        """Return to the state before the first step."""
        self._index = BEFORE_START
        return self.snapshot()

    def prune_notice(self) -> Optional[str]:
        """Explanation to surface when the current step is a PRUNE, else None."""
        step = self.current_step
        if step is None or step.kind != StepKind.PRUNE:
            return None
        skipped = step.remaining_siblings or 0
        logger.debug("Prune notice at step %d (%s)", self._index, step.node_id)
        return (
            f"Pruning at {step.node_id}: without pruning the search would still explore "
            f"{skipped} more branch(es), but none of them can change the final decision "
            f"because an ancestor already has a better option."
        )


__all__ = ["PlaybackSession"]
