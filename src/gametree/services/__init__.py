"""Service Layer: Orchestration of tree, search, layout and playback."""

from __future__ import annotations

from .simulation_service import SimulationService

__all__ = [
    "SimulationService",
]
