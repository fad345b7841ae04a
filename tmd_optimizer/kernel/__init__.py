# tmd_optimizer/kernel - Pure numerical core
"""
KERNEL: THE NUMERICAL CORE
==========================

Three layers, leaf-first, each a pure function of its arguments:

    amplitude.py    Closed-form amplitude of the primary mass (with / without absorber)
    peak.py         Worst-case amplitude over the excitation band (scan of amplitude.py)
    search.py       Golden-section search (1D, derivative-free)
    optimize.py     Coordinate descent over (f, ζ2) minimizing peak.py

Nothing here raises for real-valued input or keeps state between calls,
so every function is safe to call from threads or worker processes.
"""

from .amplitude import with_absorber_amplitude, without_absorber_amplitude
from .peak import excitation_grid, find_peak_amplitude, find_peak_sample, refine_peak
from .search import golden_section_search
from .optimize import den_hartog_tuning, optimize_tmd, optimize_system

__all__ = [
    'with_absorber_amplitude',
    'without_absorber_amplitude',
    'excitation_grid',
    'find_peak_amplitude',
    'find_peak_sample',
    'refine_peak',
    'golden_section_search',
    'den_hartog_tuning',
    'optimize_tmd',
    'optimize_system',
]
