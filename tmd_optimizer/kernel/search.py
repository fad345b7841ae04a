# tmd_optimizer/kernel/search.py
"""Derivative-free 1D minimization (golden-section search)."""

import math
from typing import Callable

# 1/φ = (√5 - 1) / 2 ≈ 0.618
INV_GOLDEN_RATIO = (math.sqrt(5.0) - 1.0) / 2.0


def golden_section_search(
    objective: Callable[[float], float],
    lower: float,
    upper: float,
    tolerance: float,
    max_iterations: int = 200,
) -> float:
    """
    Minimize a unimodal scalar function on [lower, upper].

    Keeps a bracket [a, b] with two interior probes at the golden-ratio
    positions. Each iteration drops the sub-interval that cannot hold the
    minimizer, keeps one probe (and its value) and evaluates the objective
    exactly once more. No derivatives are needed, which matters here: the
    peak-amplitude objective has kinks wherever the arg-max sample switches.

    Unimodality is assumed, not checked. On a multimodal function the
    search still terminates and returns a point in [lower, upper], just not
    necessarily the global minimizer.

    Args:
        objective: Function to minimize
        lower: Bracket start
        upper: Bracket end
        tolerance: Stop when the bracket width is <= tolerance
        max_iterations: Hard cap on bracket reductions (guards tolerance <= 0)

    Returns:
        Midpoint of the final bracket (always within [lower, upper])
    """
    a, b = lower, upper

    x1 = b - INV_GOLDEN_RATIO * (b - a)
    x2 = a + INV_GOLDEN_RATIO * (b - a)
    f1 = objective(x1)
    f2 = objective(x2)

    for _ in range(max_iterations):
        if abs(b - a) <= tolerance:
            break
        if f1 < f2:
            # Minimizer is in [a, x2]
            b = x2
            x2, f2 = x1, f1
            x1 = b - INV_GOLDEN_RATIO * (b - a)
            f1 = objective(x1)
        else:
            # Minimizer is in [x1, b]
            a = x1
            x1, f1 = x2, f2
            x2 = a + INV_GOLDEN_RATIO * (b - a)
            f2 = objective(x2)

    return (a + b) / 2.0
