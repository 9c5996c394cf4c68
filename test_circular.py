#!/usr/bin/env python3
"""
Circular patch design / analysis checks.
"""
import math

import numpy as np
import pytest

from patch_designer import circular
from patch_designer.circular import (
    analyze_circular_patch,
    bracket_design_parameter,
    design_circular_patch,
)
from patch_designer.models import CircularPatchResult, DesignFailure, FailureKind, ReverseSolution
from patch_designer.physics import (
    CHI_11,
    CIRCULAR_MODE_CONSTANT,
    c0,
    design_parameter,
    effective_radius,
    physical_radius,
)


def test_fr4_2g4_design():
    res = design_circular_patch(2.4e9, 4.4, 1.6e-3)
    assert isinstance(res, CircularPatchResult)
    assert res.F == pytest.approx(CIRCULAR_MODE_CONSTANT / (2.4e9 * math.sqrt(4.4)))
    assert 16.5e-3 < res.a < 17.6e-3
    assert res.a < res.F
    assert res.a_e > res.a
    assert res.has_directivity
    assert res.directivity > 3.0
    assert res.directivity_dbi < 10.0


def test_mode_constant_close_to_derived_value():
    assert CIRCULAR_MODE_CONSTANT == pytest.approx(CHI_11 * c0 / (2 * math.pi), rel=1e-3)


@pytest.mark.parametrize("eps_r", [1.0, 2.2, 4.4, 10.0])
@pytest.mark.parametrize("h_m", [0.2e-3, 1.6e-3, 3e-3])
def test_effective_radius_not_smaller(eps_r, h_m):
    for fr in (1e9, 5e9, 10e9):
        a = physical_radius(design_parameter(fr, eps_r), h_m, eps_r)
        assert effective_radius(a, h_m, eps_r) >= a


@pytest.mark.parametrize("eps_r", [1.0, 2.2, 4.4, 10.0])
@pytest.mark.parametrize("h_m", [0.2e-3, 1.6e-3, 3e-3])
def test_physical_radius_monotonic_in_F(eps_r, h_m):
    F = np.logspace(-7.5, math.log10(0.8), 400)
    a = np.array([physical_radius(f, h_m, eps_r) for f in F])
    assert np.all(np.diff(a) > 0)


@pytest.mark.parametrize(
    "fr_hz, eps_r, h_m",
    [(1e9, 2.2, 0.2e-3), (2.4e9, 4.4, 1.6e-3), (5.8e9, 3.38, 0.8e-3), (10e9, 10.0, 3e-3)],
)
def test_reverse_recovers_frequency(fr_hz, eps_r, h_m):
    fwd = design_circular_patch(fr_hz, eps_r, h_m)
    out = analyze_circular_patch(fwd.a, eps_r, h_m)
    assert isinstance(out, ReverseSolution)
    assert abs(out.fr_hz - fr_hz) / fr_hz < 1e-6
    assert out.result.a == pytest.approx(fwd.a, rel=1e-6)


def test_air_substrate():
    res = design_circular_patch(2.4e9, 1.0, 1.6e-3)
    assert isinstance(res, CircularPatchResult)
    out = analyze_circular_patch(res.a, 1.0, 1.6e-3)
    assert out.fr_hz == pytest.approx(2.4e9, rel=1e-6)


def test_unbracketed_radius_fails():
    for radius in (10.0, 1e-12):
        out = analyze_circular_patch(radius, 4.4, 1.6e-3)
        assert isinstance(out, DesignFailure)
        assert out.kind == FailureKind.UNBRACKETED_ROOT
    assert bracket_design_parameter(10.0, 4.4, 1.6e-3) is None


def test_bracket_contains_target():
    F_low, F_high = bracket_design_parameter(17e-3, 4.4, 1.6e-3)
    assert physical_radius(F_low, 1.6e-3, 4.4) < 17e-3 < physical_radius(F_high, 1.6e-3, 4.4)


def test_iteration_cap_returns_best_effort(monkeypatch):
    monkeypatch.setattr(circular, "MAX_BISECTIONS", 3)
    out = analyze_circular_patch(17e-3, 4.4, 1.6e-3)
    assert isinstance(out, ReverseSolution)
    assert out.fr_hz > 0


@pytest.mark.parametrize(
    "args",
    [(0.0, 4.4, 1.6e-3), (2.4e9, 0.99, 1.6e-3), (2.4e9, 4.4, -1e-3), (2.4e9, float("inf"), 1.6e-3)],
)
def test_forward_rejects_invalid_input(args):
    out = design_circular_patch(*args)
    assert isinstance(out, DesignFailure)
    assert out.kind == FailureKind.INVALID_INPUT


def test_reverse_rejects_invalid_input():
    out = analyze_circular_patch(0.0, 4.4, 1.6e-3)
    assert isinstance(out, DesignFailure)
    assert out.kind == FailureKind.INVALID_INPUT

def test_non_numeric_input_is_rejected():
    for out in (design_circular_patch(None, 4.4, 1.6e-3), analyze_circular_patch(17e-3, 4.4, None)):
        assert isinstance(out, DesignFailure)
        assert out.kind == FailureKind.INVALID_INPUT
        assert "real number" in out.reason


def test_nan_conductance_keeps_radius(monkeypatch):
    monkeypatch.setattr(circular, "radiation_conductance", lambda *a: float("nan"))
    res = design_circular_patch(2.4e9, 4.4, 1.6e-3)
    assert isinstance(res, CircularPatchResult)
    assert math.isnan(res.directivity) and math.isnan(res.directivity_dbi)
    assert res.a_e >= res.a > 0
