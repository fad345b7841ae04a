# tmd_optimizer/kernel/amplitude.py
"""Closed-form steady-state amplitude of the primary mass, with and without an absorber."""

import numpy as np

from ..config import SENTINEL_AMPLITUDE


def _finish(num, den, sentinel):
    # Exact-zero denominator is a true singularity; report the sentinel instead of inf/nan
    with np.errstate(divide="ignore", invalid="ignore"):
        amp = np.where(den == 0, sentinel, num / np.where(den == 0, 1.0, den))
    if amp.ndim == 0:
        return float(amp)
    return amp


def with_absorber_amplitude(g, f, zeta2, mu, zeta1, sentinel: float = SENTINEL_AMPLITUDE):
    """
    Dimensionless amplitude of a damped primary mass carrying a damped absorber.

    Frequency-response magnitude of the 2-DOF system under unit harmonic
    forcing on the primary mass:

        |X1| k1 / F = sqrt[(f² - g²)² + (2ζ2 f g)²] / sqrt[D1² + D2²]

        D1 = (1 - g²)(f² - g²) - μ f² g² - 4 ζ1 ζ2 f g²
        D2 = 2 ζ2 f g (1 - g² - μ g²) + 2 ζ1 g (f² - g²)

    Args:
        g: Excitation ratio ω / ω1 (scalar or array)
        f: Tuning ratio ω2 / ω1
        zeta2: Absorber damping ratio
        mu: Mass ratio m2 / m1
        zeta1: Primary damping ratio
        sentinel: Value returned where the denominator is exactly zero

    Returns:
        Amplitude as float for scalar inputs, ndarray otherwise (broadcast).
    """
    g = np.asarray(g, dtype=float)
    g2 = g * g
    f2 = f * f

    detune = f2 - g2
    absorber_loss = 2.0 * zeta2 * f * g
    num = np.sqrt(detune * detune + absorber_loss * absorber_loss)

    d1 = (1.0 - g2) * detune - mu * f2 * g2 - 4.0 * zeta1 * zeta2 * f * g2
    d2 = absorber_loss * (1.0 - g2 - mu * g2) + 2.0 * zeta1 * g * detune
    den = np.sqrt(d1 * d1 + d2 * d2)

    return _finish(num, den, sentinel)


def without_absorber_amplitude(g, zeta1, sentinel: float = SENTINEL_AMPLITUDE):
    """
    Dimensionless amplitude of the bare primary system (no absorber).

        1 / sqrt[(1 - g²)² + (2 ζ1 g)²]

    Same sentinel rule and scalar/array behaviour as with_absorber_amplitude.
    """
    g = np.asarray(g, dtype=float)
    g2 = g * g
    den = np.sqrt((1.0 - g2) ** 2 + (2.0 * zeta1 * g) ** 2)
    return _finish(np.ones_like(den), den, sentinel)
