# tmd_optimizer/api.py
"""
FastAPI backend - exposes the TMD optimizer as a REST API.

Run with:
    uvicorn tmd_optimizer.api:app --reload
or
    python -m tmd_optimizer.api
"""

import io
import logging
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from . import __version__
from .model import DomainError, SystemParams, design_absorber
from .kernel.optimize import optimize_system
from .explore import amplitude_reduction, mass_ratio_range, sweep_mass_ratio

logger = logging.getLogger(__name__)

# Upper bound on sweep size per request
MAX_SWEEP_POINTS = 1000


app = FastAPI(
    title="TMD Optimizer API",
    description="Minimax tuning of tuned mass dampers",
    version=__version__,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class SystemParamsIn(BaseModel):
    """Physical system description."""
    m1: float = Field(1000.0, gt=0, description="Primary mass (kg)")
    f1: float = Field(5.0, gt=0, description="Primary natural frequency (Hz)")
    zeta1: float = Field(0.05, ge=0, lt=1, description="Primary damping ratio")
    m2: float = Field(50.0, gt=0, description="TMD mass (kg)")


class AbsorberData(BaseModel):
    """Physical absorber realizing the optimum."""
    mass: float
    frequency_hz: float
    stiffness: float
    damping_coefficient: float


class OptimizeResult(BaseModel):
    """Optimal tuning for one system."""
    mu: float
    f_opt: float
    zeta2_opt: float
    min_peak_amp: float
    iterations: int
    converged: bool
    original_peak: float
    reduction_pct: float
    absorber: AbsorberData


class SweepParams(BaseModel):
    """Mass ratio sweep at fixed primary damping."""
    zeta1: float = Field(0.05, ge=0, lt=1, description="Primary damping ratio")
    mu_min: float = Field(0.01, gt=0, description="First mass ratio")
    mu_max: float = Field(1.0, gt=0, description="Last mass ratio")
    mu_step: float = Field(0.005, gt=0, description="Mass ratio increment")


class MassRatioPoint(BaseModel):
    """One row of a mass ratio sweep."""
    mu: float
    peak_amp: float
    f_opt: float
    zeta2_opt: float
    iterations: int
    converged: bool


class SweepResult(BaseModel):
    """Complete sweep."""
    zeta1: float
    points: List[MassRatioPoint]


# =============================================================================
# Helpers
# =============================================================================

def run_optimization(params: SystemParamsIn) -> OptimizeResult:
    """Validate, optimize and package a single system. Raises DomainError on bad input."""
    system = SystemParams(m1=params.m1, f1=params.f1, zeta1=params.zeta1, m2=params.m2)
    spec = system.spec()
    result = optimize_system(spec)
    reduction = amplitude_reduction(spec, result)
    absorber = design_absorber(system, result)

    return OptimizeResult(
        mu=spec.mass_ratio,
        f_opt=result.tuning_ratio,
        zeta2_opt=result.damping_ratio,
        min_peak_amp=result.peak_amplitude,
        iterations=result.iterations,
        converged=result.converged,
        original_peak=reduction['original_peak'],
        reduction_pct=reduction['reduction_pct'],
        absorber=AbsorberData(
            mass=absorber.mass,
            frequency_hz=absorber.frequency_hz,
            stiffness=absorber.stiffness,
            damping_coefficient=absorber.damping_coefficient,
        ),
    )


def run_sweep(params: SweepParams):
    """Mass ratio sweep as a DataFrame. Raises DomainError on bad range."""
    mass_ratios = mass_ratio_range(
        params.mu_min, params.mu_max, params.mu_step, max_points=MAX_SWEEP_POINTS
    )
    return sweep_mass_ratio(params.zeta1, mass_ratios)


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "TMD Optimizer API", "version": __version__}


@app.post("/api/optimize", response_model=OptimizeResult)
async def optimize(params: SystemParamsIn):
    """Optimal TMD tuning for a primary system."""
    try:
        return run_optimization(params)
    except DomainError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/api/sweep", response_model=SweepResult)
async def sweep(params: SweepParams):
    """Optimal tuning and peak amplitude across mass ratios."""
    try:
        df = run_sweep(params)
    except DomainError as e:
        raise HTTPException(status_code=400, detail=str(e))

    points = [MassRatioPoint(**row) for row in df.to_dict(orient="records")]
    logger.info(f"Served sweep with {len(points)} points")
    return SweepResult(zeta1=params.zeta1, points=points)


@app.post("/api/export/csv")
async def export_csv(params: SweepParams):
    """Export a mass ratio sweep as CSV."""
    try:
        df = run_sweep(params)
    except DomainError as e:
        raise HTTPException(status_code=400, detail=str(e))

    output = io.StringIO()
    df.to_csv(output, index=False)
    output.seek(0)

    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=tmd_mass_ratio_sweep.csv"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
