# File: tests/test_search.py
"""
Test golden-section search (kernel/search.py).

The search is the building block of the optimizer, so it is tested on
functions with known minima, against scipy, and for its evaluation budget.
"""

import math

import pytest
from scipy.optimize import minimize_scalar

from tmd_optimizer.kernel.search import golden_section_search, INV_GOLDEN_RATIO


def test_golden_ratio_constant():
    assert INV_GOLDEN_RATIO == pytest.approx(0.6180339887)
    # 1/φ satisfies x² + x - 1 = 0
    assert INV_GOLDEN_RATIO ** 2 + INV_GOLDEN_RATIO - 1.0 == pytest.approx(0.0, abs=1e-15)


@pytest.mark.parametrize("x0", [0.1, 0.3, 0.5, 0.77, 0.95])
def test_parabola_minimum_within_tolerance(x0):
    """Convex parabola with an interior minimum: answer within tolerance of x0."""
    tol = 1e-6
    x = golden_section_search(lambda x: (x - x0) ** 2, 0.0, 1.0, tol)

    assert abs(x - x0) <= tol
    assert 0.0 <= x <= 1.0


def test_minimum_at_bound_stays_inside_bracket():
    """Monotone objective: the result hugs the bound but never leaves [lower, upper]."""
    tol = 1e-4

    x = golden_section_search(lambda x: (x - 2.0) ** 2, 0.0, 1.0, tol)
    assert 1.0 - tol <= x <= 1.0

    x = golden_section_search(lambda x: x, 0.5, 1.5, tol)
    assert 0.5 <= x <= 0.5 + tol


def test_one_evaluation_per_iteration():
    """
    Two initial probes, then exactly one evaluation per bracket reduction.

    Width 1 -> 1e-4 needs ceil(log(1e-4) / log(0.618)) = 20 reductions.
    """
    calls = []

    def objective(x):
        calls.append(x)
        return (x - 0.4) ** 2

    golden_section_search(objective, 0.0, 1.0, 1e-4)

    expected_reductions = math.ceil(math.log(1e-4) / math.log(INV_GOLDEN_RATIO))
    assert expected_reductions == 20
    assert len(calls) == 2 + expected_reductions


def test_agrees_with_scipy():
    """Cross-check against scipy's bounded scalar minimizer on a non-quadratic function."""
    x = golden_section_search(math.cos, 2.0, 4.0, 1e-6)
    ref = minimize_scalar(math.cos, bounds=(2.0, 4.0), method="bounded",
                          options={"xatol": 1e-8})

    assert x == pytest.approx(math.pi, abs=1e-5)
    assert x == pytest.approx(ref.x, abs=1e-5)


def test_multimodal_objective_still_terminates_in_bounds():
    """Unimodality is assumed, not checked: a wavy function gives SOME point in range."""
    x = golden_section_search(lambda x: math.sin(20 * x), 0.0, 3.0, 1e-4)
    assert 0.0 <= x <= 3.0


def test_non_positive_tolerance_terminates():
    """tolerance <= 0 can never be met; the iteration cap ends the search."""
    x = golden_section_search(lambda x: (x - 0.25) ** 2, 0.0, 1.0, 0.0)
    assert x == pytest.approx(0.25, abs=1e-8)
