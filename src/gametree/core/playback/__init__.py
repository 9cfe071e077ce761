"""
Playback of search runs.

Components:
- reconstruct: Pure (tree, steps, index) -> PlaybackSnapshot
- collect_pruned_ids: Pruned-node set for a log prefix
- PlaybackSession: next/previous/seek/reset/play cursor over one run
"""

from gametree.core.playback.reconstructor import (
    BEFORE_START,
    PlaybackSnapshot,
    collect_pruned_ids,
    reconstruct,
)
from gametree.core.playback.session import PlaybackSession

__all__ = [
    "BEFORE_START",
    "PlaybackSession",
    "PlaybackSnapshot",
    "collect_pruned_ids",
    "reconstruct",
]
