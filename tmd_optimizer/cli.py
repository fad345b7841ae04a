# tmd_optimizer/cli.py
"""
Command line interface.

    tmd-optimizer optimize --m1 1000 --f1 5 --zeta1 0.05 --m2 50
    tmd-optimizer sweep --zeta1 0.05 --mu-max 0.5 --jobs -1 --out sweep.csv
"""

import argparse
import logging
import sys
from typing import List, Optional

from .model import DomainError, SystemParams, SystemSpec, design_absorber
from .kernel.optimize import optimize_system
from .explore import (
    amplitude_reduction,
    mass_ratio_range,
    sensitivity_table,
    sweep_mass_ratio,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tmd-optimizer",
        description="Minimax tuning of a tuned mass damper on a damped primary structure",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    opt = sub.add_parser("optimize", help="Optimal tuning for one system")
    opt.add_argument("--m1", type=float, default=1000.0, help="Primary mass in kg (default: 1000)")
    opt.add_argument("--f1", type=float, default=5.0, help="Primary natural frequency in Hz (default: 5)")
    opt.add_argument("--zeta1", type=float, default=0.05, help="Primary damping ratio (default: 0.05)")
    opt.add_argument("--m2", type=float, default=50.0, help="TMD mass in kg (default: 50)")
    opt.add_argument("--sensitivity", action="store_true", help="Also print the detuning sensitivity table")

    sweep = sub.add_parser("sweep", help="Optimal tuning across mass ratios")
    sweep.add_argument("--zeta1", type=float, default=0.05, help="Primary damping ratio (default: 0.05)")
    sweep.add_argument("--mu-min", type=float, default=0.01, help="First mass ratio (default: 0.01)")
    sweep.add_argument("--mu-max", type=float, default=1.0, help="Last mass ratio (default: 1.0)")
    sweep.add_argument("--mu-step", type=float, default=0.005, help="Mass ratio increment (default: 0.005)")
    sweep.add_argument("--jobs", type=int, default=1, help="Parallel workers, -1 for all cores (default: 1)")
    sweep.add_argument("--out", default=None, help="Write CSV here instead of printing")
    sweep.add_argument("--progress", action="store_true", help="Show a progress bar")

    return parser


def run_optimize(args) -> int:
    system = SystemParams(m1=args.m1, f1=args.f1, zeta1=args.zeta1, m2=args.m2)
    spec = system.spec()
    result = optimize_system(spec)
    reduction = amplitude_reduction(spec, result)
    absorber = design_absorber(system, result)

    status = "converged" if result.converged else "iteration budget exhausted"
    print(f"Mass ratio (mu):        {spec.mass_ratio:.4f}")
    print(f"Tuning ratio (f_opt):   {result.tuning_ratio:.4f}")
    print(f"TMD damping (zeta2):    {result.damping_ratio:.4f}")
    print(f"Min-max peak amplitude: {result.peak_amplitude:.3f}")
    print(f"Without TMD:            {reduction['original_peak']:.3f} "
          f"({reduction['reduction_pct']:.1f}% reduction)")
    print(f"Iterations:             {result.iterations} ({status})")
    print()
    print(f"TMD frequency:          {absorber.frequency_hz:.4f} Hz")
    print(f"TMD stiffness:          {absorber.stiffness:.1f} N/m")
    print(f"TMD damping:            {absorber.damping_coefficient:.2f} N·s/m")

    if args.sensitivity:
        print()
        print(sensitivity_table(spec, result).to_string(index=False, float_format="%.4f"))
    return 0


def run_sweep(args) -> int:
    mass_ratios = mass_ratio_range(args.mu_min, args.mu_max, args.mu_step)
    # Rejects an out-of-range zeta1 before any work is done
    SystemSpec(mass_ratio=float(mass_ratios[0]), primary_damping=args.zeta1)

    df = sweep_mass_ratio(
        args.zeta1, mass_ratios, n_jobs=args.jobs, show_progress=args.progress
    )

    if args.out:
        df.to_csv(args.out, index=False)
        print(f"Wrote {len(df)} rows to {args.out}")
    else:
        print(df.to_string(index=False, float_format="%.4f"))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handlers = {"optimize": run_optimize, "sweep": run_sweep}
    try:
        return handlers[args.command](args)
    except DomainError as e:
        logger.debug("Rejected input", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
