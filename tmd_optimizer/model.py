# tmd_optimizer/model.py
"""
Value types for the two-mass (primary + absorber) system.

All types are frozen dataclasses: every optimizer call builds new records
instead of mutating shared state, so results can be cached, compared and
passed between threads or processes freely.

Dimensionless quantities:
    mu      absorber mass / primary mass
    zeta1   primary damping ratio
    f       absorber natural frequency / primary natural frequency
    zeta2   absorber damping ratio
    g       excitation frequency / primary natural frequency
"""

import math
from dataclasses import dataclass


class DomainError(ValueError):
    """Raised when system parameters fall outside the physical domain of the model."""
    pass


def _require_finite(**values):
    for name, value in values.items():
        if not math.isfinite(value):
            raise DomainError(f"{name} must be finite, got {value}")


@dataclass(frozen=True)
class SystemSpec:
    """
    Dimensionless description of the primary structure and the absorber mass.

    Parameters:
    -----------
    mass_ratio : float
        μ = m2 / m1, must be > 0
    primary_damping : float
        ζ1, must satisfy 0 <= ζ1 < 1 (practical range 0 - 0.5)

    Raises:
    -------
    DomainError
        If either value is non-finite or out of range. This is the only
        place where inputs are rejected; the numerical kernel accepts
        anything and never raises.
    """
    mass_ratio: float
    primary_damping: float

    def __post_init__(self):
        _require_finite(mass_ratio=self.mass_ratio, primary_damping=self.primary_damping)
        if self.mass_ratio <= 0:
            raise DomainError(f"Mass ratio must be positive, got {self.mass_ratio}")
        if not 0 <= self.primary_damping < 1:
            raise DomainError(
                f"Primary damping ratio must be in [0, 1), got {self.primary_damping}"
            )


@dataclass(frozen=True)
class TuningCandidate:
    """A point in the (tuning ratio, absorber damping ratio) search space."""
    tuning_ratio: float
    damping_ratio: float


@dataclass(frozen=True)
class AmplitudeSample:
    """Dimensionless primary amplitude at one excitation ratio."""
    excitation_ratio: float
    amplitude: float


@dataclass(frozen=True)
class OptimizationResult:
    """
    Best absorber tuning found by the optimizer.

    peak_amplitude is the minimax value: the largest primary amplitude over
    the scanned excitation band, for the returned tuning. `converged` is
    False when the iteration budget ran out first; the tuning is still the
    best one found and is safe to use.
    """
    tuning_ratio: float
    damping_ratio: float
    peak_amplitude: float
    iterations: int = 0
    converged: bool = True

    @property
    def candidate(self) -> TuningCandidate:
        return TuningCandidate(self.tuning_ratio, self.damping_ratio)


@dataclass(frozen=True)
class SystemParams:
    """
    Physical inputs for a primary structure fitted with a tuned mass damper.

    Parameters:
    -----------
    m1 : float
        Primary mass (kg)
    f1 : float
        Primary natural frequency (Hz)
    zeta1 : float
        Primary damping ratio
        - Steel/concrete buildings: ~0.01 - 0.05
    m2 : float
        Absorber (TMD) mass (kg)
        - Typical: 1 - 10% of m1
    """
    m1: float
    f1: float
    zeta1: float
    m2: float

    def __post_init__(self):
        _require_finite(m1=self.m1, f1=self.f1, zeta1=self.zeta1, m2=self.m2)
        if self.m1 <= 0:
            raise DomainError(f"Primary mass must be positive, got {self.m1}")
        if self.m2 <= 0:
            raise DomainError(f"Absorber mass must be positive, got {self.m2}")
        if self.f1 <= 0:
            raise DomainError(f"Primary natural frequency must be positive, got {self.f1}")
        # zeta1 range is checked by SystemSpec
        self.spec()

    @property
    def mass_ratio(self) -> float:
        return self.m2 / self.m1

    def spec(self) -> SystemSpec:
        return SystemSpec(mass_ratio=self.mass_ratio, primary_damping=self.zeta1)


@dataclass(frozen=True)
class AbsorberDesign:
    """
    Physical absorber realizing an OptimizationResult.

    frequency_hz : float
        Absorber natural frequency f2 = f_opt * f1 (Hz)
    stiffness : float
        Spring stiffness k2 = m2 * ω2² (N/m)
    damping_coefficient : float
        Viscous damping c2 = 2 * ζ2 * m2 * ω2 (N·s/m)
    """
    mass: float
    frequency_hz: float
    stiffness: float
    damping_coefficient: float


def design_absorber(params: SystemParams, result: OptimizationResult) -> AbsorberDesign:
    """Convert a dimensionless optimum into spring and dashpot values for the given system."""
    frequency_hz = result.tuning_ratio * params.f1
    omega2 = 2.0 * math.pi * frequency_hz
    return AbsorberDesign(
        mass=params.m2,
        frequency_hz=frequency_hz,
        stiffness=params.m2 * omega2 ** 2,
        damping_coefficient=2.0 * result.damping_ratio * params.m2 * omega2,
    )
