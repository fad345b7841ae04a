# tmd_optimizer/kernel/optimize.py
"""Minimax tuning of the absorber by coordinate descent over (f, ζ2)."""

import logging
import math
from typing import Optional

from ..config import OptimizerConfig, DEFAULT_CONFIG
from ..model import SystemSpec, TuningCandidate, OptimizationResult
from .peak import find_peak_amplitude
from .search import golden_section_search

logger = logging.getLogger(__name__)


def den_hartog_tuning(mu: float) -> TuningCandidate:
    """
    Classical optimum for an undamped primary system (Den Hartog).

        f  = 1 / (1 + μ)
        ζ2 = sqrt(3μ / (8 (1 + μ)))

    Used as the warm start of optimize_tmd. Requires μ > -1; μ <= 0 is
    outside the physical domain and gives ζ2 = 0.
    """
    f0 = 1.0 / (1.0 + mu)
    zeta2_0 = math.sqrt(max(0.0, (3.0 * mu) / (8.0 * (1.0 + mu))))
    return TuningCandidate(tuning_ratio=f0, damping_ratio=zeta2_0)


def optimize_tmd(
    mu: float,
    zeta1: float,
    config: Optional[OptimizerConfig] = None,
) -> OptimizationResult:
    """
    Find the absorber tuning (f, ζ2) that minimizes the peak primary amplitude.

    Minimax problem: min over (f, ζ2) of max over g of A(g, f, ζ2, μ, ζ1).

    ALGORITHM:
    ----------
    Start from the Den Hartog tuning, then alternate:
        1. golden-section search over f  (ζ2 held fixed)
        2. golden-section search over ζ2 (f held fixed)
        3. stop when the peak changes by less than config.tolerance
    for at most config.max_iterations rounds.

    The descent is local and greedy; a global optimum is not guaranteed for
    pathological inputs. The optimizer never fails: when the iteration
    budget runs out it returns the best tuning seen with converged=False.
    The returned peak is never worse than the warm start's.

    Args:
        mu: Mass ratio m2 / m1
        zeta1: Primary damping ratio
        config: Brackets, tolerance, iteration budget (DEFAULT_CONFIG if None)

    Returns:
        OptimizationResult (deterministic for fixed inputs)
    """
    config = config or DEFAULT_CONFIG

    def peak(f: float, zeta2: float) -> float:
        return find_peak_amplitude(f, zeta2, mu, zeta1, config)

    start = den_hartog_tuning(mu)
    f, zeta2 = start.tuning_ratio, start.damping_ratio

    best = TuningCandidate(f, zeta2)
    best_peak = peak(f, zeta2)

    prev_peak = math.inf
    converged = False
    iterations = 0

    for iteration in range(config.max_iterations):
        iterations = iteration + 1

        fixed_zeta2 = zeta2
        f = golden_section_search(
            lambda trial_f: peak(trial_f, fixed_zeta2),
            *config.tuning_bounds,
            config.tolerance,
        )

        fixed_f = f
        zeta2 = golden_section_search(
            lambda trial_zeta2: peak(fixed_f, trial_zeta2),
            *config.damping_bounds,
            config.tolerance,
        )

        current_peak = peak(f, zeta2)
        logger.debug(
            f"iteration {iterations}: f={f:.5f} zeta2={zeta2:.5f} peak={current_peak:.5f}"
        )

        if current_peak < best_peak:
            best, best_peak = TuningCandidate(f, zeta2), current_peak

        if abs(prev_peak - current_peak) < config.tolerance:
            converged = True
            break
        prev_peak = current_peak

    if not converged:
        logger.warning(
            f"Coordinate descent did not converge in {config.max_iterations} iterations "
            f"(mu={mu}, zeta1={zeta1}); returning best tuning found"
        )

    return OptimizationResult(
        tuning_ratio=best.tuning_ratio,
        damping_ratio=best.damping_ratio,
        peak_amplitude=best_peak,
        iterations=iterations,
        converged=converged,
    )


def optimize_system(
    spec: SystemSpec,
    config: Optional[OptimizerConfig] = None,
) -> OptimizationResult:
    """optimize_tmd for a validated SystemSpec."""
    return optimize_tmd(spec.mass_ratio, spec.primary_damping, config)
