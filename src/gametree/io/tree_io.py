"""
YAML persistence for trees and search runs.

Tree format:

    id: node-0
    is_max_node: true
    children:
      - id: node-1
        is_max_node: false
        children:
          - {id: node-2, value: 3, is_max_node: true}

Run format stores the step log; infinite bounds are written as the strings
"∞" / "-∞" and parsed back on load.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from gametree.core.search.engine import SearchResult
from gametree.core.tree.models import GameTreeNode
from gametree.io.errors import LoaderError
from gametree.utils.formatting import format_value, parse_value

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = ("root_value", "current_value", "alpha", "beta")


def _read_yaml_file(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except OSError as exc:
        raise LoaderError(path, "Cannot read file", cause=exc) from exc
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Invalid YAML", cause=exc) from exc


def _write_yaml_file(path: str | Path, data: Any) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, indent=2, sort_keys=False, allow_unicode=True)


def _tree_to_dict(node: GameTreeNode) -> Dict[str, Any]:
    data: Dict[str, Any] = {"id": node.id, "is_max_node": node.is_max_node}
    if node.value is not None:
        data["value"] = node.value
    if node.children:
        data["children"] = [_tree_to_dict(child) for child in node.children]
    return data


def load_tree(path: str | Path) -> GameTreeNode:
    """
    Load a tree from YAML.

    Raises:
        LoaderError: If the file is missing, not YAML, or not a valid tree
    """
    fp = str(path)
    data = _read_yaml_file(fp)
    if not isinstance(data, dict):
        raise LoaderError(fp, "Tree file must contain a mapping at the top level")
    try:
        root = GameTreeNode.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(fp, "Invalid tree definition", cause=exc, data=data) from exc
    logger.debug("Loaded tree %s (%d nodes) from %s", root.id, root.size(), fp)
    return root


def save_tree(root: GameTreeNode, path: str | Path) -> None:
    """Save a tree to YAML (absent values are omitted)."""
    _write_yaml_file(path, _tree_to_dict(root))


def _encode_numbers(data: Dict[str, Any]) -> Dict[str, Any]:
    encoded = {key: list(value) if isinstance(value, tuple) else value for key, value in data.items()}
    for key in _NUMERIC_FIELDS:
        value = encoded.get(key)
        if isinstance(value, float) and math.isinf(value):
            encoded[key] = format_value(value)
    return encoded


def _decode_numbers(data: Dict[str, Any]) -> Dict[str, Any]:
    decoded = dict(data)
    for key in _NUMERIC_FIELDS:
        value = decoded.get(key)
        if isinstance(value, str):
            decoded[key] = parse_value(value)
    return decoded


def run_to_dict(result: SearchResult) -> Dict[str, Any]:
    """Convert a run to plain data with infinities spelled as symbols."""
    data = result.model_dump(mode="python", exclude={"steps"})
    data["algorithm"] = result.algorithm.value
    data["traversal"] = result.traversal.value
    data = _encode_numbers(data)
    data["steps"] = [
        _encode_numbers({**step.model_dump(exclude_none=True), "kind": step.kind.value}) for step in result.steps
    ]
    return data


def save_run(result: SearchResult, path: str | Path) -> None:
    """Export a run's step log to YAML."""
    _write_yaml_file(path, run_to_dict(result))


def load_run(path: str | Path) -> SearchResult:
    """
    Load a run exported by ``save_run``.

    Raises:
        LoaderError: If the file is missing, not YAML, or not a valid run
    """
    fp = str(path)
    data = _read_yaml_file(fp)
    if not isinstance(data, dict):
        raise LoaderError(fp, "Run file must contain a mapping at the top level")
    try:
        payload = _decode_numbers(data)
        payload["steps"] = [_decode_numbers(step) for step in data.get("steps") or []]
        return SearchResult.model_validate(payload)
    except (ValidationError, ValueError, TypeError) as exc:
        raise LoaderError(fp, "Invalid run definition", cause=exc, data=data) from exc


class LearnAnswers(BaseModel):
    """User answers for one Learn Mode exercise."""

    values: Dict[str, Optional[float]] = Field(default_factory=dict)
    pruned: Optional[List[str]] = None


def load_answers(path: str | Path) -> LearnAnswers:
    """
    Load Learn Mode answers.

    Format::

        values:
          node-0: 3
          node-1: "-∞"
          node-4: null     # left blank
        pruned: [node-6]   # optional, alpha-beta only

    Raises:
        LoaderError: If the file is missing, not YAML, or malformed
    """
    fp = str(path)
    data = _read_yaml_file(fp)
    if not isinstance(data, dict):
        raise LoaderError(fp, "Answers file must contain a mapping at the top level")
    try:
        values = {
            str(node_id): parse_value(raw) if isinstance(raw, str) else raw
            for node_id, raw in (data.get("values") or {}).items()
        }
        return LearnAnswers.model_validate({"values": values, "pruned": data.get("pruned")})
    except (ValidationError, ValueError, AttributeError) as exc:
        raise LoaderError(fp, "Invalid answers definition", cause=exc) from exc


__all__ = [
    "LearnAnswers",
    "load_answers",
    "load_run",
    "load_tree",
    "run_to_dict",
    "save_run",
    "save_tree",
]
