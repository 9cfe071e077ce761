"""
Game-tree search simulator.

Instrumented minimax and alpha-beta search over small, fully materialized
game trees, with step-by-step playback, node layout and Learn Mode grading.
"""

__version__ = "0.1.0"
