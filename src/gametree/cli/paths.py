from __future__ import annotations

"""Utilities for resolving tree and run output paths."""

from pathlib import Path


def outputs_dir() -> Path:
    return Path.cwd() / "outputs"


def trees_dir() -> Path:
    return outputs_dir() / "trees"


def runs_dir() -> Path:
    return outputs_dir() / "runs"


def ensure_output_dirs() -> None:
    trees_dir().mkdir(parents=True, exist_ok=True)
    runs_dir().mkdir(parents=True, exist_ok=True)


def _yaml_name(name: str) -> str:
    base = Path(name).name
    if not base.endswith(".yaml"):
        base = f"{base}.yaml"
    return base


def resolve_tree_path(name: str) -> str:
    """Resolve a tree filename under outputs/trees (adds .yaml if missing)."""
    ensure_output_dirs()
    return str(trees_dir() / _yaml_name(name))


def resolve_run_path(name: str) -> str:
    """Resolve a run export filename under outputs/runs (adds .yaml if missing)."""
    ensure_output_dirs()
    return str(runs_dir() / _yaml_name(name))


def find_tree_file(name_or_path: str) -> str:
    """
    Find a tree file with smart resolution.

    1. If path exists as-is, use it
    2. If path exists with .yaml extension, use it
    3. Otherwise, look in outputs/trees/

    Raises:
        FileNotFoundError: If file cannot be found
    """
    p = Path(name_or_path)
    if p.exists():
        return str(p)

    if not str(name_or_path).endswith(".yaml"):
        p_with_yaml = Path(f"{name_or_path}.yaml")
        if p_with_yaml.exists():
            return str(p_with_yaml)

    tree_file = trees_dir() / _yaml_name(name_or_path)
    if tree_file.exists():
        return str(tree_file)

    raise FileNotFoundError(f"Tree file not found: '{name_or_path}'\nLooked in:\n  - {name_or_path}\n  - {tree_file}")


__all__ = [
    "ensure_output_dirs",
    "find_tree_file",
    "outputs_dir",
    "resolve_run_path",
    "resolve_tree_path",
    "runs_dir",
    "trees_dir",
]
