# tmd_optimizer/explore.py
"""
EXPLORE: BATCH STUDIES AROUND THE OPTIMIZER
===========================================

PURPOSE:
--------
The kernel answers one question: "what is the best absorber for THIS
system?" Design decisions need a few more:

1. **How much absorber mass is worth it?** sweep_mass_ratio() optimizes
   the absorber for a range of mass ratios. The peak amplitude falls
   quickly at first and then flattens; the knee of that curve is usually
   the economical choice.

2. **How much does the absorber help?** frequency_response() tabulates the
   primary response with and without the optimal absorber, and
   amplitude_reduction() condenses that into one number.

3. **How robust is the tuning?** sensitivity_table() re-evaluates the peak
   with the damping ratio and the frequency ratio off-design. Real
   absorbers drift (temperature, mass changes, damper wear), and a
   tuning that degrades gracefully is preferable.

Every function returns a pandas DataFrame (or plain dict) so that results
can be exported to CSV or handed to any charting layer.
"""

import logging
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from tqdm import tqdm

from .config import OptimizerConfig, DEFAULT_CONFIG
from .model import DomainError, SystemSpec, OptimizationResult
from .kernel.amplitude import with_absorber_amplitude, without_absorber_amplitude
from .kernel.peak import excitation_grid, find_peak_amplitude
from .kernel.optimize import optimize_tmd

logger = logging.getLogger(__name__)

# Scale factors applied to the optimal parameters in sensitivity_table()
DAMPING_SCALES = (0.5, 0.8, 1.2, 1.5)
TUNING_SCALES = (0.98, 0.99, 1.01, 1.02)

# Mass ratio grids are rounded to this many decimals; a smaller step would
# merge neighbouring points
MASS_RATIO_DECIMALS = 6
MIN_MASS_RATIO_STEP = 1e-6

# Largest grid mass_ratio_range() will build unless told otherwise
MAX_MASS_RATIO_POINTS = 100_000


def mass_ratio_range(
    mu_min: float,
    mu_max: float,
    mu_step: float,
    max_points: int = MAX_MASS_RATIO_POINTS,
) -> np.ndarray:
    """
    Inclusive grid mu_min, mu_min + mu_step, ..., <= mu_max.

    The point count is checked against max_points before anything is
    allocated. Values are rounded to MASS_RATIO_DECIMALS places.

    Raises:
        DomainError: If mu_min <= 0, mu_max < mu_min, mu_step is below
            MIN_MASS_RATIO_STEP or the grid would exceed max_points
    """
    if not (np.isfinite(mu_min) and np.isfinite(mu_max) and np.isfinite(mu_step)):
        raise DomainError("Mass ratio range must be finite")
    if mu_min <= 0:
        raise DomainError(f"Mass ratios must be positive, got mu_min={mu_min}")
    if mu_max < mu_min:
        raise DomainError(f"mu_max ({mu_max}) must be >= mu_min ({mu_min})")
    if mu_step < MIN_MASS_RATIO_STEP:
        raise DomainError(f"mu_step must be >= {MIN_MASS_RATIO_STEP}, got {mu_step}")

    n_points = np.floor((mu_max - mu_min) / mu_step + 1e-9) + 1
    if not np.isfinite(n_points) or n_points > max_points:
        raise DomainError(
            f"Mass ratio range has too many points; at most {max_points} allowed. "
            f"Increase mu_step or narrow the range."
        )

    n = int(n_points)
    return np.round(mu_min + mu_step * np.arange(n), MASS_RATIO_DECIMALS)


def default_mass_ratios() -> np.ndarray:
    """μ = 0.01, 0.015, ..., 1.0 (199 values)."""
    return mass_ratio_range(0.01, 1.0, 0.005)


def sweep_mass_ratio(
    zeta1: float,
    mass_ratios: Optional[Iterable[float]] = None,
    config: Optional[OptimizerConfig] = None,
    n_jobs: int = 1,
    show_progress: bool = False,
) -> pd.DataFrame:
    """
    Optimize the absorber for each mass ratio at a fixed primary damping.

    Each optimize_tmd call is independent, so the sweep parallelizes with
    no coordination beyond collecting results (n_jobs > 1 or -1 for all
    cores). Results are returned in input order.

    Parameters:
    -----------
    zeta1 : float
        Primary damping ratio
    mass_ratios : iterable of float, optional
        Mass ratios to evaluate (default: default_mass_ratios())
    config : OptimizerConfig, optional
        Passed through to optimize_tmd
    n_jobs : int
        joblib worker count
    show_progress : bool
        Whether to show a progress bar

    Returns:
    --------
    pd.DataFrame
        Columns: mu, peak_amp, f_opt, zeta2_opt, iterations, converged
    """
    if mass_ratios is None:
        mass_ratios = default_mass_ratios()
    mass_ratios = [float(mu) for mu in mass_ratios]

    iterator = tqdm(mass_ratios, desc="Optimizing") if show_progress else mass_ratios
    results = Parallel(n_jobs=n_jobs)(
        delayed(optimize_tmd)(mu, zeta1, config) for mu in iterator
    )

    rows = [
        {
            'mu': mu,
            'peak_amp': result.peak_amplitude,
            'f_opt': result.tuning_ratio,
            'zeta2_opt': result.damping_ratio,
            'iterations': result.iterations,
            'converged': result.converged,
        }
        for mu, result in zip(mass_ratios, results)
    ]

    df = pd.DataFrame(
        rows, columns=['mu', 'peak_amp', 'f_opt', 'zeta2_opt', 'iterations', 'converged']
    )
    n_failed = int((~df['converged']).sum()) if len(df) else 0
    logger.info(
        f"Mass ratio sweep: {len(df)} points at zeta1={zeta1}, "
        f"{n_failed} hit the iteration budget"
    )
    return df


def frequency_response(
    spec: SystemSpec,
    result: OptimizationResult,
    g_values: Optional[Iterable[float]] = None,
) -> pd.DataFrame:
    """
    Primary amplitude vs excitation ratio, bare and with the optimal absorber.

    Default grid: g = 0.5, 0.515, ..., 2.0 (101 points).

    Returns:
    --------
    pd.DataFrame
        Columns: g, original_amp, optimized_amp
    """
    if g_values is None:
        g = np.linspace(0.5, 2.0, 101)
    else:
        g = np.asarray(list(g_values), dtype=float)

    mu, zeta1 = spec.mass_ratio, spec.primary_damping
    return pd.DataFrame({
        'g': g,
        'original_amp': without_absorber_amplitude(g, zeta1),
        'optimized_amp': with_absorber_amplitude(
            g, result.tuning_ratio, result.damping_ratio, mu, zeta1
        ),
    })


def amplitude_reduction(
    spec: SystemSpec,
    result: OptimizationResult,
    config: Optional[OptimizerConfig] = None,
) -> Dict[str, float]:
    """
    Peak amplitude of the bare primary vs the optimized system.

    Both peaks are taken on the same excitation grid as the optimizer. For
    an undamped primary the bare peak is the sentinel amplitude (the grid
    hits g = 1 exactly).

    Returns:
    --------
    dict with original_peak, optimized_peak, reduction_pct
    """
    config = config or DEFAULT_CONFIG
    original = without_absorber_amplitude(
        excitation_grid(config), spec.primary_damping, sentinel=config.sentinel_amplitude
    )
    original_peak = float(np.max(original))
    optimized_peak = result.peak_amplitude
    return {
        'original_peak': original_peak,
        'optimized_peak': optimized_peak,
        'reduction_pct': 100.0 * (1.0 - optimized_peak / original_peak),
    }


def sensitivity_table(
    spec: SystemSpec,
    result: OptimizationResult,
    config: Optional[OptimizerConfig] = None,
) -> pd.DataFrame:
    """
    Peak amplitude when the absorber is off its optimal tuning.

    Scales ζ2 by DAMPING_SCALES (f held at optimum) and f by TUNING_SCALES
    (ζ2 held at optimum). Frequency detuning typically hurts far more than
    damping error: a 2% tuning error costs more than a 20% damping error.

    Returns:
    --------
    pd.DataFrame
        Columns: parameter ('damping' or 'tuning'), scale, tuning_ratio,
        damping_ratio, peak_amp, increase_pct (relative to the optimum)
    """
    mu, zeta1 = spec.mass_ratio, spec.primary_damping
    f_opt, zeta2_opt = result.tuning_ratio, result.damping_ratio

    variants = [('damping', s, f_opt, zeta2_opt * s) for s in DAMPING_SCALES]
    variants += [('tuning', s, f_opt * s, zeta2_opt) for s in TUNING_SCALES]

    rows = []
    for parameter, scale, f, zeta2 in variants:
        peak = find_peak_amplitude(f, zeta2, mu, zeta1, config)
        rows.append({
            'parameter': parameter,
            'scale': scale,
            'tuning_ratio': f,
            'damping_ratio': zeta2,
            'peak_amp': peak,
            'increase_pct': 100.0 * (peak / result.peak_amplitude - 1.0),
        })

    return pd.DataFrame(rows)
