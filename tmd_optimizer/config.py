# tmd_optimizer/config.py
"""
Optimizer configuration and defaults.

The scan window, brackets and tolerances define exactly what the optimizer
is approximating. A wider scan window is NOT automatically more correct,
and results obtained with non-default values are not comparable with
baselines produced by the defaults.
"""

import math
from dataclasses import dataclass
from typing import Tuple


# Finite stand-in for an unbounded (resonant) response
SENTINEL_AMPLITUDE = 100.0


@dataclass(frozen=True)
class OptimizerConfig:
    """Constants for the peak finder and the coordinate-descent optimizer."""

    # Excitation frequency band scanned by the peak finder (g = ω / ω1);
    # g_step must divide the window evenly
    g_min: float = 0.5
    g_max: float = 2.0
    g_step: float = 0.005

    # Amplitude reported when a response denominator is exactly zero
    sentinel_amplitude: float = SENTINEL_AMPLITUDE

    # Search brackets for the two design variables
    tuning_bounds: Tuple[float, float] = (0.5, 1.5)
    damping_bounds: Tuple[float, float] = (0.01, 0.5)

    # Bracket width for golden-section search AND peak-improvement threshold
    tolerance: float = 1e-4
    max_iterations: int = 20

    def __post_init__(self):
        for name in ("g_min", "g_max", "g_step", "sentinel_amplitude", "tolerance"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite, got {getattr(self, name)}")
        if self.g_min < 0 or self.g_min >= self.g_max:
            raise ValueError(
                f"Scan window must satisfy 0 <= g_min < g_max, got [{self.g_min}, {self.g_max}]"
            )
        if self.g_step <= 0:
            raise ValueError(f"g_step must be positive, got {self.g_step}")
        intervals = (self.g_max - self.g_min) / self.g_step
        if abs(intervals - round(intervals)) > 1e-6:
            raise ValueError(
                f"g_step ({self.g_step}) must divide the scan window "
                f"[{self.g_min}, {self.g_max}] into whole intervals"
            )
        for name in ("tuning_bounds", "damping_bounds"):
            lower, upper = getattr(self, name)
            if not lower < upper:
                raise ValueError(f"{name} must have lower < upper, got ({lower}, {upper})")
        if self.tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")

    @property
    def n_samples(self) -> int:
        """Number of points on the inclusive excitation grid."""
        return int(round((self.g_max - self.g_min) / self.g_step)) + 1


# Global config instance
DEFAULT_CONFIG = OptimizerConfig()
