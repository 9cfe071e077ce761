#!/usr/bin/env python3
"""Cross-check the instrumented search engine against the direct oracle.

Generates seeded random trees, runs both algorithms in both traversal orders,
and checks that:

- the root value matches the oracle, and alpha-beta matches minimax
- every backtracked node value matches the oracle
- the alpha-beta unvisited set equals the oracle's pruned set

Example usage:

    python scripts/verify_algorithms.py --trees 200 --max-depth 5 --max-branching 4

Trees that fail a check are written to ``outputs/verify/`` (or ``--output``)
so they can be replayed with ``gametree run``.
"""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path
from typing import List

from gametree.core.oracle import evaluate
from gametree.core.search import Algorithm, TraversalOrder, run_search
from gametree.core.tree.generator import generate_random_tree
from gametree.core.tree.models import GameTreeNode
from gametree.io import save_tree


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Verify minimax and alpha-beta against the oracle")
    parser.add_argument("--trees", type=int, default=100, help="Number of random trees to check")
    parser.add_argument("--seed", type=int, default=0, help="Base seed (tree i uses seed + i)")
    parser.add_argument("--max-depth", type=int, default=4, help="Largest tree depth to generate")
    parser.add_argument("--max-branching", type=int, default=3, help="Largest branching factor to generate")
    parser.add_argument(
        "--output",
        type=Path,
        help="Directory for failing trees (defaults to outputs/verify)",
    )
    return parser


def check_tree(tree: GameTreeNode) -> List[str]:
    """Return a description of every disagreement found for one tree."""
    problems: List[str] = []
    for order in TraversalOrder:
        results = {}
        for algorithm in Algorithm:
            result = run_search(tree, algorithm, traversal=order)
            oracle = evaluate(tree, algorithm, traversal=order)
            results[algorithm] = result

            if result.root_value != oracle.root_value:
                problems.append(
                    f"{algorithm.value}/{order.value}: root {result.root_value} != oracle {oracle.root_value}"
                )
            if result.backtrack_values() != oracle.values:
                problems.append(f"{algorithm.value}/{order.value}: backtracked values differ from oracle")
            if algorithm is Algorithm.ALPHA_BETA:
                unvisited = set(tree.node_ids()) - result.visited_ids()
                if unvisited != oracle.pruned_ids:
                    problems.append(
                        f"{order.value}: unvisited {sorted(unvisited)} != pruned {sorted(oracle.pruned_ids)}"
                    )

        if results[Algorithm.ALPHA_BETA].root_value != results[Algorithm.MINIMAX].root_value:
            problems.append(f"{order.value}: alpha-beta and minimax disagree at the root")
    return problems


def main() -> None:
    parser = _build_arg_parser()
    args = parser.parse_args()

    if args.trees < 1:
        raise SystemExit("--trees must be at least 1")
    if args.max_depth < 0 or args.max_branching < 1:
        raise SystemExit("--max-depth must be >= 0 and --max-branching >= 1")

    output_dir = args.output or Path("outputs") / "verify"
    failures = 0
    pruned_total = 0

    for i in range(args.trees):
        seed = args.seed + i
        rng = random.Random(seed)
        depth = rng.randint(0, args.max_depth)
        branching = rng.randint(1, args.max_branching)
        tree = generate_random_tree(depth, branching, rng=rng)

        pruned_total += run_search(tree, Algorithm.ALPHA_BETA).stats.skipped_children
        problems = check_tree(tree)
        if not problems:
            continue

        failures += 1
        path = output_dir / f"seed_{seed}.yaml"
        save_tree(tree, path)
        print(f"FAIL seed={seed} depth={depth} branching={branching} (saved {path})")
        for problem in problems:
            print(f"  - {problem}")

    passed = args.trees - failures
    print(f"{passed}/{args.trees} trees passed; alpha-beta skipped {pruned_total} children in total")
    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
