# File: tests/test_api.py
"""
Test the REST API (api.py) with FastAPI's TestClient.
"""

import io

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from tmd_optimizer.api import app, MAX_SWEEP_POINTS

client = TestClient(app)


def test_health_check():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_optimize_defaults():
    """Default request: m1 = 1000 kg, f1 = 5 Hz, ζ1 = 0.05, m2 = 50 kg."""
    response = client.post("/api/optimize", json={})
    assert response.status_code == 200

    data = response.json()
    assert data["mu"] == pytest.approx(0.05)
    assert data["f_opt"] == pytest.approx(0.9356, abs=0.003)
    assert data["zeta2_opt"] == pytest.approx(0.136, abs=0.003)
    assert data["min_peak_amp"] == pytest.approx(4.149, abs=0.005)
    assert data["converged"] is True
    assert data["reduction_pct"] > 50.0

    absorber = data["absorber"]
    assert absorber["mass"] == 50.0
    assert absorber["frequency_hz"] == pytest.approx(data["f_opt"] * 5.0)
    assert absorber["stiffness"] > 0
    assert absorber["damping_coefficient"] > 0


@pytest.mark.parametrize("payload", [
    {"zeta1": 1.5},
    {"zeta1": -0.1},
    {"m2": 0.0},
    {"m1": -10.0},
    {"f1": "fast"},
])
def test_optimize_rejects_invalid_input(payload):
    response = client.post("/api/optimize", json=payload)
    assert response.status_code == 422


def test_sweep():
    response = client.post(
        "/api/sweep", json={"zeta1": 0.05, "mu_min": 0.05, "mu_max": 0.1, "mu_step": 0.05}
    )
    assert response.status_code == 200

    data = response.json()
    assert data["zeta1"] == 0.05
    assert [p["mu"] for p in data["points"]] == [0.05, 0.1]
    assert data["points"][0]["peak_amp"] > data["points"][1]["peak_amp"]


def test_sweep_rejects_inverted_range():
    response = client.post("/api/sweep", json={"mu_min": 0.5, "mu_max": 0.1})
    assert response.status_code == 400
    assert "mu_max" in response.json()["detail"]


def test_sweep_rejects_too_many_points():
    response = client.post("/api/sweep", json={"mu_min": 0.01, "mu_max": 1.0, "mu_step": 1e-4})
    assert response.status_code == 400
    assert str(MAX_SWEEP_POINTS) in response.json()["detail"]


@pytest.mark.parametrize("payload", [
    {"mu_min": 0.01, "mu_max": 1e9, "mu_step": 1e-9},
    {"mu_max": 1e308, "mu_step": 1e-300},
    {"mu_min": 0.01, "mu_max": 1e308, "mu_step": 1e-5},
    {"mu_min": 0.01, "mu_max": 1e9, "mu_step": 1e-3},
])
def test_sweep_rejects_huge_ranges_as_bad_request(payload):
    """Oversized or overflowing point counts are a 400, never a server error."""
    response = client.post("/api/sweep", json=payload)
    assert response.status_code == 400

    response = client.post("/api/export/csv", json=payload)
    assert response.status_code == 400


def test_export_csv():
    response = client.post(
        "/api/export/csv", json={"zeta1": 0.02, "mu_min": 0.02, "mu_max": 0.06, "mu_step": 0.02}
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]

    df = pd.read_csv(io.StringIO(response.text))
    assert list(df.columns) == ['mu', 'peak_amp', 'f_opt', 'zeta2_opt', 'iterations', 'converged']
    assert len(df) == 3
