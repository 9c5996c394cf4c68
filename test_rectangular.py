#!/usr/bin/env python3
"""
Rectangular patch design / analysis checks.
"""
import math

import pytest

from patch_designer import rectangular
from patch_designer.models import DesignFailure, FailureKind, RectangularPatchResult, ReverseSolution
from patch_designer.physics import c0, delta_L, effective_eps
from patch_designer.rectangular import (
    analyze_rectangular_patch,
    design_rectangular_patch,
    feed_inset,
    slot_factor,
)


def test_fr4_2g4_design():
    res = design_rectangular_patch(2.4e9, 4.4, 1.6e-3)
    assert isinstance(res, RectangularPatchResult)
    assert res.W == pytest.approx(38.04e-3, rel=2e-3)
    assert 29.0e-3 < res.L < 29.8e-3
    assert 100.0 < res.R_in_edge < 1000.0
    assert res.R_in_edge == pytest.approx(1.0 / (2.0 * (res.G1 + res.G12)))
    assert res.y0_50ohm is not None
    assert 0.0 < res.y0_50ohm < res.L / 2.0
    assert res.has_directivity
    assert 4.0 < res.directivity_dbi < 9.0
    assert res.directivity_dbi == pytest.approx(10.0 * math.log10(res.directivity))
    assert res.lambda0 == pytest.approx(c0 / 2.4e9)


def test_inset_gives_50_ohm():
    res = design_rectangular_patch(2.4e9, 4.4, 1.6e-3)
    r_inset = res.R_in_edge * math.cos(math.pi * res.y0_50ohm / res.L) ** 2
    assert r_inset == pytest.approx(50.0)


def test_effective_length_includes_fringing():
    res = design_rectangular_patch(5.8e9, 2.2, 0.8e-3)
    assert res.L_eff > res.L
    assert res.L_eff == pytest.approx(res.L + 2.0 * res.delta_L)


@pytest.mark.parametrize("eps_r", [1.0, 2.2, 4.4, 10.2])
@pytest.mark.parametrize("h_over_w", [1e-4, 0.05, 0.5, 5.0])
def test_effective_permittivity_bounds(eps_r, h_over_w):
    W = 0.03
    eps_eff = effective_eps(eps_r, h_over_w * W, W)
    assert 1.0 <= eps_eff <= eps_r
    assert eps_eff < eps_r or eps_r == 1.0


def test_effective_permittivity_thin_substrate_limit():
    assert effective_eps(4.4, 1e-12, 1.0) == pytest.approx(4.4, rel=1e-5)


def test_air_substrate():
    res = design_rectangular_patch(2.4e9, 1.0, 1.6e-3)
    assert isinstance(res, RectangularPatchResult)
    assert res.eps_eff == pytest.approx(1.0)
    assert res.W == pytest.approx(c0 / (2 * 2.4e9))


@pytest.mark.parametrize(
    "fr_hz, eps_r, h_m",
    [(1e9, 2.2, 0.2e-3), (2.4e9, 4.4, 1.6e-3), (5.8e9, 3.38, 0.8e-3), (10e9, 10.0, 3e-3)],
)
def test_reverse_recovers_frequency(fr_hz, eps_r, h_m):
    fwd = design_rectangular_patch(fr_hz, eps_r, h_m)
    out = analyze_rectangular_patch(fwd.W, fwd.L, eps_r, h_m)
    assert isinstance(out, ReverseSolution)
    assert abs(out.fr_hz - fr_hz) / fr_hz < 1e-9
    assert out.result.W == pytest.approx(fwd.W, rel=1e-9)


def test_reverse_arbitrary_dimensions():
    out = analyze_rectangular_patch(30e-3, 24e-3, 4.4, 1.6e-3)
    assert 2.8e9 < out.fr_hz < 3.1e9
    eps_eff = effective_eps(4.4, 1.6e-3, 30e-3)
    dL = delta_L(eps_eff, 1.6e-3, 30e-3)
    assert out.fr_hz == pytest.approx(c0 / (2 * math.sqrt(eps_eff) * (24e-3 + 2 * dL)))


@pytest.mark.parametrize(
    "args",
    [(0.0, 4.4, 1.6e-3), (-1e9, 4.4, 1.6e-3), (float("nan"), 4.4, 1.6e-3), (2.4e9, 0.9, 1.6e-3), (2.4e9, 4.4, 0.0)],
)
def test_forward_rejects_invalid_input(args):
    out = design_rectangular_patch(*args)
    assert isinstance(out, DesignFailure)
    assert out.kind == FailureKind.INVALID_INPUT


def test_reverse_rejects_invalid_input():
    for args in [(0.0, 24e-3, 4.4, 1.6e-3), (30e-3, -1.0, 4.4, 1.6e-3), (30e-3, 24e-3, 0.5, 1.6e-3)]:
        out = analyze_rectangular_patch(*args)
        assert isinstance(out, DesignFailure)
        assert out.kind == FailureKind.INVALID_INPUT

@pytest.mark.parametrize(
    "args",
    [(None, 4.4, 1.6e-3), (2.4e9, None, 1.6e-3), (2.4e9, 4.4, "1.6e-3"), (2.4e9, True, 1.6e-3)],
)
def test_forward_rejects_non_numeric_input(args):
    out = design_rectangular_patch(*args)
    assert isinstance(out, DesignFailure)
    assert out.kind == FailureKind.INVALID_INPUT
    assert "real number" in out.reason


def test_reverse_rejects_non_numeric_input():
    out = analyze_rectangular_patch(30e-3, None, 4.4, 1.6e-3)
    assert isinstance(out, DesignFailure)
    assert out.kind == FailureKind.INVALID_INPUT
    assert out.reason.startswith("length_m")


def test_thick_substrate_has_no_inset_feed():
    res = design_rectangular_patch(10e9, 1.0, 20e-3)
    assert isinstance(res, RectangularPatchResult)
    assert res.L < 0
    assert res.y0_50ohm is None
    assert res.summary()["y0_50ohm_mm"] is None


def test_feed_inset_needs_positive_length():
    assert feed_inset(-3.9e-3, 200.0) is None
    assert feed_inset(0.0, 200.0) is None



def test_slot_factor_singular_point_uses_limit():
    theta = math.pi / 2.0
    assert float(slot_factor(2.0, theta)) == pytest.approx(1.0)
    # continuous across the singularity
    assert float(slot_factor(2.0, theta + 1e-6)) == pytest.approx(1.0, rel=1e-6)


def test_feed_inset_only_above_50_ohm():
    assert feed_inset(0.03, 49.9) is None
    assert feed_inset(0.03, 50.0) == pytest.approx(0.0)
    assert feed_inset(0.03, 1e12) is None
    assert feed_inset(0.03, 200.0) == pytest.approx(0.03 / math.pi * math.acos(0.5))


def test_nan_directivity_keeps_dimensions(monkeypatch):
    monkeypatch.setattr(rectangular, "directivity_integral", lambda *a: float("nan"))
    res = design_rectangular_patch(2.4e9, 4.4, 1.6e-3)
    assert isinstance(res, RectangularPatchResult)
    assert not res.has_directivity
    assert math.isnan(res.directivity_dbi)
    assert res.W > 0 and res.L > 0 and res.R_in_edge > 0


def test_non_positive_conductance_fails(monkeypatch):
    monkeypatch.setattr(rectangular, "slot_conductance", lambda *a: -1.0)
    out = design_rectangular_patch(2.4e9, 4.4, 1.6e-3)
    assert isinstance(out, DesignFailure)
    assert out.kind == FailureKind.NON_CONVERGENCE


def test_result_is_immutable():
    res = design_rectangular_patch(2.4e9, 4.4, 1.6e-3)
    with pytest.raises(Exception):
        res.W = 1.0
