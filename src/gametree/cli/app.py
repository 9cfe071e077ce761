"""
Game-tree CLI: generate, validate, search, play back and grade trees.

- Trees are YAML files; bare names resolve to outputs/trees/<name>.yaml
- Every run is computed eagerly, then printed as rich tables
- Configuration comes from gametree.yaml in the working directory (or --config)
"""

from __future__ import annotations

import time
from pathlib import Path

import typer
from rich.console import Console
from rich.live import Live
from rich.markup import escape

from gametree.cli.formatters import (
    build_grade_table,
    build_layout_table,
    build_snapshot_table,
    build_stats_table,
    build_steps_table,
    format_validation_report,
    markdown_to_markup,
)
from gametree.cli.load_helpers import load_or_exit
from gametree.cli.paths import find_tree_file, resolve_run_path, resolve_tree_path
from gametree.config import SimulatorConfig, load_config
from gametree.core.playback.reconstructor import BEFORE_START, PlaybackSnapshot
from gametree.core.search.steps import Algorithm, TraversalOrder
from gametree.core.tree.models import GameTreeNode
from gametree.core.tree.validation import validate_tree
from gametree.io.tree_io import load_answers, load_tree, save_run, save_tree
from gametree.services.simulation_service import SimulationService
from gametree.utils.formatting import format_value
from gametree.utils.logging import configure_logging

DEFAULT_CONFIG_FILE = "gametree.yaml"

app = typer.Typer(help="Game-tree CLI: step through minimax and alpha-beta search on small trees.")
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: str | None = typer.Option(None, "--config", "-c", help="Simulator config YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Load configuration shared by all commands."""
    configure_logging(verbose)
    if config_path:
        ctx.obj = load_or_exit(load_config, config_path, console=console, verbose_errors=verbose)
    else:
        ctx.obj = load_or_exit(load_config, Path.cwd() / DEFAULT_CONFIG_FILE, console=console)


def _config(ctx: typer.Context) -> SimulatorConfig:
    return ctx.obj if isinstance(ctx.obj, SimulatorConfig) else SimulatorConfig()


def _load_tree(tree: str) -> GameTreeNode:
    try:
        resolved = find_tree_file(tree)
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    return load_or_exit(load_tree, resolved, console=console)


def _service(
    ctx: typer.Context,
    root: GameTreeNode,
    algo: Algorithm | None = None,
    order: TraversalOrder | None = None,
    depth_limit: int | None = None,
) -> SimulationService:
    config = _config(ctx)
    updates = {}
    if algo is not None:
        updates["algorithm"] = algo
    if order is not None:
        updates["traversal"] = order
    if depth_limit is not None:
        if depth_limit < 0:
            console.print(f"[red]Bad --depth-limit[/red]: must be >= 0, got {depth_limit}")
            raise typer.Exit(code=2)
        updates["depth_limit"] = depth_limit
    if updates:
        config = config.model_copy(update=updates)
    return SimulationService(config, tree=root)


@app.command()
def generate(
    ctx: typer.Context,
    depth: int | None = typer.Option(None, "--depth", "-d", help="Tree depth (levels for --empty)"),
    branching: int | None = typer.Option(None, "--branching", "-b", help="Children per internal node"),
    seed: int | None = typer.Option(None, "--seed", help="Random seed for reproducible trees"),
    empty: bool = typer.Option(False, "--empty", help="Full structure with every leaf set to 0"),
    name: str = typer.Option("tree", "--name", help="Output name under outputs/trees/"),
) -> None:
    """Generate a random (or empty) tree and save it as YAML."""
    config = _config(ctx)
    settings = config.generator
    depth = settings.depth if depth is None else depth
    branching = settings.branching_factor if branching is None else branching
    if seed is not None:
        config = config.model_copy(update={"generator": settings.model_copy(update={"seed": seed})})

    try:
        service = SimulationService(config)
        if empty:
            root = service.create_empty_tree(depth, branching)
        else:
            root = service.generate_tree(depth, branching)
    except ValueError as exc:
        console.print(f"[red]Cannot generate tree[/red]: {exc}")
        raise typer.Exit(code=2)

    path = resolve_tree_path(name)
    save_tree(root, path)

    stats = root.get_statistics()
    console.print("\n[bold]Tree Generated[/bold]")
    console.print(f"Root: {root.id} ({root.role})")
    console.print(f"Nodes: {stats['total_nodes']}, Leaves: {stats['leaf_nodes']}, Height: {stats['height']}")
    console.print(f"Saved: {path}")


@app.command()
def validate(
    tree: str = typer.Argument(..., help="Tree name or path"),
) -> None:
    """Validate a tree file."""
    root = _load_tree(tree)
    report = validate_tree(root)

    for line in format_validation_report(report):
        console.print(f" - {line}")
    if not report.ok:
        console.print(f"[red]Validation failed with {len(report.errors)} error(s)[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]OK[/green] {root.size()} node(s), {len(report.warnings)} warning(s)")


@app.command()
def run(
    ctx: typer.Context,
    tree: str = typer.Argument(..., help="Tree name or path"),
    algo: Algorithm | None = typer.Option(None, "--algo", "-a", help="minimax or alphabeta"),
    order: TraversalOrder | None = typer.Option(None, "--order", "-o", help="ltr or rtl"),
    depth_limit: int | None = typer.Option(None, "--depth-limit", help="Depth budget for the search"),
    export: str | None = typer.Option(None, "--export", help="Save the step log under outputs/runs/"),
) -> None:
    """Run a search and print every step."""
    service = _service(ctx, _load_tree(tree), algo, order, depth_limit)
    result = service.result

    console.print(build_steps_table(result))
    console.print(build_stats_table(result))

    if export:
        path = resolve_run_path(export)
        save_run(result, path)
        console.print(f"Saved: {path}")


def _print_snapshot_notes(service: SimulationService, snapshot: PlaybackSnapshot) -> None:
    if snapshot.explanation:
        console.print(f"\n{markdown_to_markup(snapshot.explanation)}")
    notice = service.session.prune_notice()
    if notice:
        console.print(f"[red]{notice}[/red]")
    if snapshot.is_finished:
        console.print(f"\n[bold]Final value:[/bold] {format_value(service.result.root_value)}")


@app.command()
def playback(
    ctx: typer.Context,
    tree: str = typer.Argument(..., help="Tree name or path"),
    step: int | None = typer.Option(None, "--step", "-s", help="Step index (-1 = before the first step)"),
    play: bool = typer.Option(False, "--play", help="Animate every step from --step (or the start) to the end"),
    speed: int | None = typer.Option(None, "--speed", help="Milliseconds between steps (defaults to config)"),
    algo: Algorithm | None = typer.Option(None, "--algo", "-a", help="minimax or alphabeta"),
    order: TraversalOrder | None = typer.Option(None, "--order", "-o", help="ltr or rtl"),
) -> None:
    """Show the playback state after a given step, or auto-play the run."""
    if step is None and not play:
        console.print("[red]Give --step or --play[/red]")
        raise typer.Exit(code=2)
    if speed is not None and speed <= 0:
        console.print(f"[red]Bad --speed[/red]: must be positive, got {speed}")
        raise typer.Exit(code=2)

    root = _load_tree(tree)
    service = _service(ctx, root, algo, order)

    try:
        snapshot = service.session.seek(BEFORE_START if step is None else step)
    except IndexError as exc:
        console.print(f"[red]Bad --step[/red]: {escape(str(exc))}")
        raise typer.Exit(code=2)

    if not play:
        console.print(build_snapshot_table(root, snapshot))
        _print_snapshot_notes(service, snapshot)
        return

    delay = (speed if speed is not None else _config(ctx).playback_speed_ms) / 1000
    with Live(build_snapshot_table(root, snapshot), console=console, auto_refresh=False) as live:
        for snapshot in service.session.play():
            time.sleep(delay)
            live.update(build_snapshot_table(root, snapshot), refresh=True)
    _print_snapshot_notes(service, snapshot)


@app.command()
def layout(
    ctx: typer.Context,
    tree: str = typer.Argument(..., help="Tree name or path"),
) -> None:
    """Print node positions for rendering."""
    service = _service(ctx, _load_tree(tree))
    console.print(build_layout_table(service.layout))


@app.command()
def grade(
    ctx: typer.Context,
    tree: str = typer.Argument(..., help="Tree name or path"),
    answers: str = typer.Argument(..., help="Answers YAML (values per internal node, optional pruned list)"),
    algo: Algorithm | None = typer.Option(None, "--algo", "-a", help="minimax or alphabeta"),
) -> None:
    """Grade Learn Mode answers against the correct values."""
    service = _service(ctx, _load_tree(tree), algo)
    learn = load_or_exit(load_answers, answers, console=console)
    report = service.grade(learn.values, learn.pruned)

    console.print(build_grade_table(report))
    if report.unexpected:
        console.print(f"[yellow]No value expected for:[/yellow] {', '.join(report.unexpected)}")
    if report.missed_pruned:
        console.print(f"[red]Pruned but not marked:[/red] {', '.join(report.missed_pruned)}")
    if report.wrongly_pruned:
        console.print(f"[red]Marked but not pruned:[/red] {', '.join(report.wrongly_pruned)}")

    console.print(f"\n[bold]Score:[/bold] {len(report.correct)}/{len(report.grades)} ({report.score:.0%})")
    if not report.passed:
        raise typer.Exit(code=1)
    console.print("[green]All answers correct[/green]")


__all__ = ["app"]
