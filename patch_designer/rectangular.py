"""
Rectangular microstrip patch (TM010) design equations.

Transmission-line model with two radiating slots of width W separated by the
resonant length. Slot conductances follow from the far field of each slot;
directivity from the two-slot array pattern.
"""
from __future__ import annotations

import math
from typing import Optional, Union

import numpy as np
from loguru import logger

from .bessel import bessel_j0
from .models import (
    DEFAULT_SETTINGS,
    DesignFailure,
    FailureKind,
    input_problem,
    QuadratureSettings,
    RectangularPatchResult,
    ReverseSolution,
)
from .physics import (
    delta_L,
    design_patch_for_frequency,
    resonant_frequency,
    wavelength,
    wavenumber,
)
from .quadrature import integrate_1d, integrate_2d

# |cos(theta)| below this is treated as the removable singularity of the slot factor
SINGULAR_COS = 1e-12
Z_FEED = 50.0
MAX_EDGE_RESISTANCE = 1e10


def slot_factor(k0W: float, theta: np.ndarray) -> np.ndarray:
    """[sin((k0W/2)cos(theta))/cos(theta)]^2, with its limit (k0W/2)^2 where cos(theta) = 0."""
    cos_t = np.cos(theta)
    half = k0W / 2.0
    singular = np.abs(cos_t) < SINGULAR_COS
    safe_cos = np.where(singular, 1.0, cos_t)
    return np.where(singular, half * half, (np.sin(half * cos_t) / safe_cos) ** 2)


def slot_conductance(k0: float, W: float, n: int) -> float:
    """Conductance G1 of a single radiating slot."""
    def integrand(theta):
        return slot_factor(k0 * W, theta) * np.sin(theta) ** 3

    return integrate_1d(integrand, 0.0, math.pi, n) / (120.0 * math.pi ** 2)


def mutual_conductance(k0: float, W: float, L: float, n: int) -> float:
    """Mutual conductance G12 between the two slots separated by L."""
    def integrand(theta):
        sin_t = np.sin(theta)
        return slot_factor(k0 * W, theta) * bessel_j0(k0 * L * sin_t) * sin_t ** 3

    return integrate_1d(integrand, 0.0, math.pi, n) / (120.0 * math.pi ** 2)


def directivity_integral(k0: float, W: float, L_eff: float, n_theta: int, n_phi: int) -> float:
    """I1 = double integral of the two-slot pattern over theta, phi in [0, pi]."""
    def integrand(theta, phi):
        sin_t = math.sin(theta)
        factor = float(slot_factor(k0 * W, theta)) * sin_t ** 3
        return factor * np.cos(k0 * L_eff / 2.0 * sin_t * np.sin(phi)) ** 2

    return integrate_2d(integrand, 0.0, math.pi, 0.0, math.pi, n_theta, n_phi)


def feed_inset(L: float, R_in_edge: float) -> Optional[float]:
    """Inset y0 at which R_in_edge*cos^2(pi*y0/L) equals 50 ohm, if one exists."""
    if not L > 0:
        return None
    if not (Z_FEED <= R_in_edge < MAX_EDGE_RESISTANCE):
        return None
    ratio = Z_FEED / R_in_edge
    if not 0.0 <= ratio <= 1.0:
        return None
    return L / math.pi * math.acos(math.sqrt(ratio))


def design_rectangular_patch(
    fr_hz: float,
    eps_r: float,
    h_m: float,
    settings: QuadratureSettings = DEFAULT_SETTINGS,
) -> Union[RectangularPatchResult, DesignFailure]:
    """Design a rectangular patch resonant at fr_hz.

    Args:
        fr_hz: Resonant frequency (Hz)
        eps_r: Substrate relative permittivity (>= 1)
        h_m: Substrate height (m)
        settings: Quadrature subdivision counts

    Returns:
        RectangularPatchResult, or DesignFailure for invalid input or when the
        slot conductances do not give a positive edge conductance. A result
        whose directivity integral failed carries NaN directivity.
    """
    problem = input_problem(fr_hz=fr_hz, eps_r=eps_r, h_m=h_m)
    if problem:
        logger.warning(f"Rectangular design rejected: {problem}")
        return DesignFailure(kind=FailureKind.INVALID_INPUT, reason=problem)

    lambda0 = wavelength(fr_hz)
    k0 = wavenumber(fr_hz)

    L, W, eps_eff, L_eff = design_patch_for_frequency(fr_hz, eps_r, h_m)
    dL = delta_L(eps_eff, h_m, W)

    G1 = slot_conductance(k0, W, settings.n_conductance)
    G12 = mutual_conductance(k0, W, L, settings.n_conductance)
    G_sum = G1 + G12
    if not (math.isfinite(G1) and math.isfinite(G12)) or G_sum <= 0:
        reason = f"edge conductance not positive (G1={G1}, G12={G12})"
        logger.warning(f"Rectangular design failed: {reason}")
        return DesignFailure(kind=FailureKind.NON_CONVERGENCE, reason=reason)

    R_in_edge = 1.0 / (2.0 * G_sum)
    y0 = feed_inset(L, R_in_edge)
    if L <= 0:
        logger.warning(f"Substrate too thick for {fr_hz / 1e9:.4f} GHz: fringing leaves L={L * 1e3:.3f} mm, no inset feed")

    I1 = directivity_integral(k0, W, L_eff, settings.n_directivity_theta, settings.n_directivity_phi)
    if math.isfinite(I1) and I1 > 0:
        D = (2.0 * math.pi * W / lambda0) ** 2 * (math.pi / I1)
        D_dbi = 10.0 * math.log10(D)
    else:
        logger.warning(f"Directivity integral did not converge (I1={I1}); reporting NaN directivity")
        D = D_dbi = float("nan")

    logger.debug(f"Rectangular patch @ {fr_hz / 1e9:.4f} GHz: W={W * 1e3:.3f} mm, L={L * 1e3:.3f} mm, Rin={R_in_edge:.1f} ohm")
    return RectangularPatchResult(
        fr_hz=fr_hz,
        W=W,
        L=L,
        L_eff=L_eff,
        delta_L=dL,
        eps_eff=eps_eff,
        G1=G1,
        G12=G12,
        R_in_edge=R_in_edge,
        y0_50ohm=y0,
        directivity=D,
        directivity_dbi=D_dbi,
        lambda0=lambda0,
    )


def analyze_rectangular_patch(
    width_m: float,
    length_m: float,
    eps_r: float,
    h_m: float,
    settings: QuadratureSettings = DEFAULT_SETTINGS,
) -> Union[ReverseSolution, DesignFailure]:
    """Resonant frequency of a W x L patch, plus the forward design at that frequency.

    The length equation is inverted algebraically:
    fr = c0 / (2*sqrt(eps_eff)*(L + 2*dL)), with eps_eff and dL depending only
    on W, h and eps_r.
    """
    problem = input_problem(width_m=width_m, length_m=length_m, eps_r=eps_r, h_m=h_m)
    if problem:
        logger.warning(f"Rectangular analysis rejected: {problem}")
        return DesignFailure(kind=FailureKind.INVALID_INPUT, reason=problem)

    fr_hz = resonant_frequency(width_m, length_m, eps_r, h_m)
    if not (math.isfinite(fr_hz) and fr_hz > 0):
        return DesignFailure(kind=FailureKind.NON_CONVERGENCE, reason=f"recovered frequency is not positive ({fr_hz})")

    forward = design_rectangular_patch(fr_hz, eps_r, h_m, settings)
    if isinstance(forward, DesignFailure):
        return forward
    return ReverseSolution(fr_hz=fr_hz, result=forward)
