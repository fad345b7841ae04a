# tmd_optimizer - Tuned mass damper optimization
"""
TMD-OPTIMIZER: Minimax Tuning of a Tuned Mass Damper
====================================================

This package provides:
- Closed-form frequency response of a damped primary structure with a damped absorber
- Peak (worst-case) amplitude over the excitation band
- Optimal absorber tuning (frequency ratio, damping ratio) by coordinate descent
- Batch sweeps over mass ratio and detuning sensitivity tables

ARCHITECTURE:
-------------
    kernel/         Pure numerical core (amplitude, peak finder, search, optimizer)
    model.py        Value types (SystemSpec, OptimizationResult, SystemParams, ...)
    config.py       Scan window, brackets, tolerances
    explore.py      Batch drivers returning DataFrames
    api.py          REST API (FastAPI)
    cli.py          Command line
"""

from .config import OptimizerConfig, DEFAULT_CONFIG
from .model import (
    DomainError,
    SystemSpec,
    TuningCandidate,
    AmplitudeSample,
    OptimizationResult,
    SystemParams,
    AbsorberDesign,
    design_absorber,
)
from .kernel import (
    with_absorber_amplitude,
    without_absorber_amplitude,
    find_peak_amplitude,
    golden_section_search,
    optimize_tmd,
    optimize_system,
)

__version__ = "0.1.0"
