"""
Simulator configuration.

Defaults mirror the interactive tool: a depth-3, binary random tree, minimax,
left-to-right traversal, a depth limit of 10 and one step per second of
playback. Configuration can be stored as YAML:

    algorithm: alphabeta
    traversal: rtl
    depth_limit: 10
    generator:
      depth: 4
      branching_factor: 3
      seed: 7
    layout:
      level_height: 100
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from gametree.core.search.steps import Algorithm, TraversalOrder
from gametree.io.errors import LoaderError


class GeneratorSettings(BaseModel):
    """Random tree generation parameters."""

    depth: int = 3
    branching_factor: int = 2
    min_value: int = -50
    max_value: int = 49
    drop_probability: float = 0.1
    seed: Optional[int] = None

    @field_validator("depth")
    @classmethod
    def validate_depth(cls, v: int) -> int:
        if v < 0:
            raise ValueError("depth must be >= 0")
        return v

    @field_validator("branching_factor")
    @classmethod
    def validate_branching(cls, v: int) -> int:
        if v < 1:
            raise ValueError("branching_factor must be >= 1")
        return v

    @field_validator("drop_probability")
    @classmethod
    def validate_probability(cls, v: float) -> float:
        if not 0 <= v < 1:
            raise ValueError("drop_probability must be in [0, 1)")
        return v

    @model_validator(mode="after")
    def validate_range(self) -> "GeneratorSettings":
        if self.min_value > self.max_value:
            raise ValueError(f"min_value ({self.min_value}) must be <= max_value ({self.max_value})")
        return self


class LayoutSettings(BaseModel):
    node_size: float = 50
    level_height: float = 120
    leaf_spacing: float = 2.5
    top_margin: float = 50


class SimulatorConfig(BaseModel):
    algorithm: Algorithm = Algorithm.MINIMAX
    traversal: TraversalOrder = TraversalOrder.LEFT_TO_RIGHT
    depth_limit: int = 10
    playback_speed_ms: int = 1000
    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)

    @field_validator("depth_limit")
    @classmethod
    def validate_depth_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError("depth_limit must be >= 0")
        return v

    @field_validator("playback_speed_ms")
    @classmethod
    def validate_speed(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("playback_speed_ms must be positive")
        return v


def load_config(path: str | Path) -> SimulatorConfig:
    """
    Load configuration from a YAML file.

    A missing file yields the defaults.

    Raises:
        LoaderError: If the file cannot be parsed or fails validation
    """
    p = Path(path)
    if not p.exists():
        return SimulatorConfig()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise LoaderError(str(p), "Invalid YAML in config", cause=exc) from exc
    try:
        return SimulatorConfig.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(str(p), "Invalid simulator config", cause=exc) from exc


def save_config(config: SimulatorConfig, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, indent=2, sort_keys=False)


__all__ = [
    "GeneratorSettings",
    "LayoutSettings",
    "SimulatorConfig",
    "load_config",
    "save_config",
]
