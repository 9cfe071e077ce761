"""Formatting helpers for CLI presentation."""

from __future__ import annotations

import re

from rich.markup import escape
from rich.table import Table

from gametree.core.layout import TreeLayout
from gametree.core.oracle import GradeReport
from gametree.core.playback.reconstructor import PlaybackSnapshot
from gametree.core.search.engine import SearchResult
from gametree.core.search.steps import Algorithm, StepKind
from gametree.core.tree.models import GameTreeNode
from gametree.core.tree.validation import TreeValidationReport
from gametree.utils.formatting import format_value

_BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")

_KIND_STYLES = {
    StepKind.VISIT: "cyan",
    StepKind.EVALUATE: "green",
    StepKind.UPDATE_BOUNDS: "yellow",
    StepKind.PRUNE: "red",
    StepKind.BACKTRACK: "magenta",
}


def markdown_to_markup(text: str) -> str:
    """Turn the **bold** markers used in step descriptions into rich markup."""
    return _BOLD_PATTERN.sub(r"[bold]\1[/bold]", escape(text))


def build_steps_table(result: SearchResult) -> Table:
    table = Table(title=f"{result.algorithm.label} steps ({result.traversal.value})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind")
    table.add_column("Node", style="cyan")
    table.add_column("Value", justify="right")
    if result.algorithm is Algorithm.ALPHA_BETA:
        table.add_column("α", justify="right")
        table.add_column("β", justify="right")
    table.add_column("Description")

    for index, step in enumerate(result.steps):
        style = _KIND_STYLES.get(step.kind, "white")
        row = [str(index), f"[{style}]{step.kind.value}[/{style}]", step.node_id, format_value(step.current_value)]
        if result.algorithm is Algorithm.ALPHA_BETA:
            row.extend([format_value(step.alpha), format_value(step.beta)])
        row.append(markdown_to_markup(step.description))
        table.add_row(*row)
    return table


def build_stats_table(result: SearchResult) -> Table:
    table = Table(title="Summary", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Root value", format_value(result.root_value))
    table.add_row("Steps", str(len(result.steps)))
    table.add_row("Nodes visited", str(result.stats.visited))
    table.add_row("Leaves evaluated", str(result.stats.evaluated))
    table.add_row("Prunes", str(result.stats.prunes))
    table.add_row("Children skipped", str(result.stats.skipped_children))
    return table


def build_snapshot_table(root: GameTreeNode, snapshot: PlaybackSnapshot) -> Table:
    title = "Before first step" if snapshot.is_before_start else f"Step {snapshot.index + 1}/{snapshot.total_steps}"
    table = Table(title=title)
    table.add_column("Node", style="cyan")
    table.add_column("Role")
    table.add_column("State")
    table.add_column("Value", justify="right")
    table.add_column("α", justify="right")
    table.add_column("β", justify="right")

    active_path = set(snapshot.active_path)
    for node in root.iter_nodes():
        if node.id == snapshot.active_id:
            state = "[bold green]active[/bold green]"
        elif snapshot.is_pruned(node.id):
            state = "[red]pruned[/red]"
        elif node.id in active_path:
            state = "[green]on path[/green]"
        elif snapshot.is_visited(node.id):
            state = "visited"
        else:
            state = "[dim]unvisited[/dim]"
        table.add_row(
            node.id,
            node.role,
            state,
            format_value(snapshot.current_values.get(node.id)),
            format_value(snapshot.alpha_values.get(node.id)),
            format_value(snapshot.beta_values.get(node.id)),
        )
    return table


def build_layout_table(layout: TreeLayout) -> Table:
    table = Table(title=f"Layout ({format_value(layout.width)} x {format_value(layout.height)})")
    table.add_column("Node", style="cyan")
    table.add_column("Depth", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("Children", style="dim")
    for node in layout.nodes:
        table.add_row(
            node.id,
            str(node.depth),
            format_value(node.x),
            format_value(node.y),
            ", ".join(node.children_ids),
        )
    return table


def build_grade_table(report: GradeReport) -> Table:
    table = Table(title=f"Learn Mode: {report.algorithm.label}")
    table.add_column("Node", style="cyan")
    table.add_column("Expected", justify="right")
    table.add_column("Given", justify="right")
    table.add_column("Result")
    for grade in report.grades:
        if not grade.answered:
            verdict = "[yellow]missing[/yellow]"
        elif grade.correct:
            verdict = "[green]correct[/green]"
        else:
            verdict = "[red]wrong[/red]"
        table.add_row(grade.node_id, format_value(grade.expected), format_value(grade.given), verdict)
    return table


def format_validation_report(report: TreeValidationReport) -> list[str]:
    lines = [f"[red]error[/red] {escape(error)}" for error in report.errors]
    lines.extend(f"[yellow]warning[/yellow] {escape(warning)}" for warning in report.warnings)
    return lines


__all__ = [
    "build_grade_table",
    "build_layout_table",
    "build_snapshot_table",
    "build_stats_table",
    "build_steps_table",
    "format_validation_report",
    "markdown_to_markup",
]
