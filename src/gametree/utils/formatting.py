"""Shared value formatting utilities."""

from __future__ import annotations

import math
from typing import Optional, Tuple

INFINITY_SYMBOL = "∞"
NEGATIVE_INFINITY_SYMBOL = "-∞"

# Greek letters used in step descriptions
ALPHA_SYMBOL = "α"
BETA_SYMBOL = "β"


def format_value(value: Optional[float], missing: str = "-") -> str:
    """
    Format a search value for display.

    Infinities are rendered as symbols so they can never be mistaken for (or
    parsed back as) ordinary numbers. Integral floats drop their ".0".

    Args:
        value: Value to format (None renders as ``missing``)
        missing: Placeholder for absent values

    Returns:
        Display string like "3", "2.5", "∞" or "-∞"
    """
    if value is None:
        return missing
    if math.isinf(value):
        return INFINITY_SYMBOL if value > 0 else NEGATIVE_INFINITY_SYMBOL
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_bounds(alpha: Optional[float], beta: Optional[float]) -> Tuple[str, str]:
    """Format an (alpha, beta) pair."""
    return format_value(alpha), format_value(beta)


def describe_bounds(alpha: Optional[float], beta: Optional[float]) -> str:
    """Format bounds as "α=-∞, β=∞"."""
    a_str, b_str = format_bounds(alpha, beta)
    return f"{ALPHA_SYMBOL}={a_str}, {BETA_SYMBOL}={b_str}"


def parse_value(text: str) -> float:
    """
    Parse a value written by ``format_value`` back into a float.

    Accepts the infinity symbols as well as plain numbers. Used when reading
    exported step logs and user answers.

    Raises:
        ValueError: If the text is not a number or infinity symbol
    """
    stripped = text.strip()
    if stripped in (INFINITY_SYMBOL, "+" + INFINITY_SYMBOL):
        return math.inf
    if stripped in (NEGATIVE_INFINITY_SYMBOL, "−" + INFINITY_SYMBOL):
        return -math.inf
    return float(stripped)


__all__ = [
    "ALPHA_SYMBOL",
    "BETA_SYMBOL",
    "INFINITY_SYMBOL",
    "NEGATIVE_INFINITY_SYMBOL",
    "describe_bounds",
    "format_bounds",
    "format_value",
    "parse_value",
]
