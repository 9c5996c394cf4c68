"""
Circular microstrip patch (TM110) design equations.

The physical radius follows from the design parameter F through a fringing
correction; since that relation cannot be inverted in closed form, the
reverse problem (radius -> frequency) is solved by bisection on F.
"""
from __future__ import annotations

import math
from typing import Optional, Tuple, Union

import numpy as np
from loguru import logger

from .bessel import bessel_j0, bessel_j2
from .models import (
    DEFAULT_SETTINGS,
    CircularPatchResult,
    DesignFailure,
    FailureKind,
    input_problem,
    QuadratureSettings,
    ReverseSolution,
)
from .physics import (
    design_parameter,
    effective_radius,
    frequency_from_design_parameter,
    physical_radius,
    wavelength,
    wavenumber,
)
from .quadrature import integrate_1d

# Bracket search limits for F (metres)
F_LOW_START = 1e-5
F_HIGH_START = 0.1
F_LOW_FLOOR = 1e-7
F_HIGH_CEILING = 0.5
MAX_BISECTIONS = 80
RADIUS_REL_TOL = 1e-12


def radiation_conductance(k0: float, a_e: float, n: int) -> float:
    """G_rad = (k0*a_e)^2/480 * int_0^(pi/2) ([J0-J2]^2 + cos^2(theta)[J0+J2]^2) sin(theta) dtheta."""
    k0a = k0 * a_e

    def integrand(theta):
        sin_t = np.sin(theta)
        cos_t = np.cos(theta)
        x = k0a * sin_t
        j0 = bessel_j0(x)
        j2 = bessel_j2(x)
        return ((j0 - j2) ** 2 + cos_t ** 2 * (j0 + j2) ** 2) * sin_t

    return k0a ** 2 / 480.0 * integrate_1d(integrand, 0.0, math.pi / 2.0, n)


def design_circular_patch(
    fr_hz: float,
    eps_r: float,
    h_m: float,
    settings: QuadratureSettings = DEFAULT_SETTINGS,
) -> Union[CircularPatchResult, DesignFailure]:
    """Design a circular patch resonant at fr_hz.

    Args:
        fr_hz: Resonant frequency (Hz)
        eps_r: Substrate relative permittivity (>= 1)
        h_m: Substrate height (m)
        settings: Quadrature subdivision counts

    Returns:
        CircularPatchResult (NaN directivity if G_rad is not positive), or
        DesignFailure for invalid input.
    """
    problem = input_problem(fr_hz=fr_hz, eps_r=eps_r, h_m=h_m)
    if problem:
        logger.warning(f"Circular design rejected: {problem}")
        return DesignFailure(kind=FailureKind.INVALID_INPUT, reason=problem)

    lambda0 = wavelength(fr_hz)
    k0 = wavenumber(fr_hz)

    F = design_parameter(fr_hz, eps_r)
    a = physical_radius(F, h_m, eps_r)
    a_e = effective_radius(a, h_m, eps_r)

    G_rad = radiation_conductance(k0, a_e, settings.n_conductance)
    if math.isfinite(G_rad) and G_rad > 0:
        D0 = (k0 * a_e) ** 2 / (120.0 * G_rad)
        D0_dbi = 10.0 * math.log10(D0)
    else:
        logger.warning(f"Radiation conductance did not converge (G_rad={G_rad}); reporting NaN directivity")
        D0 = D0_dbi = float("nan")

    logger.debug(f"Circular patch @ {fr_hz / 1e9:.4f} GHz: a={a * 1e3:.3f} mm, a_e={a_e * 1e3:.3f} mm")
    return CircularPatchResult(
        fr_hz=fr_hz,
        F=F,
        a=a,
        a_e=a_e,
        G_rad=G_rad,
        directivity=D0,
        directivity_dbi=D0_dbi,
        lambda0=lambda0,
    )


def bracket_design_parameter(radius_m: float, eps_r: float, h_m: float) -> Optional[Tuple[float, float]]:
    """Find F_low < F_high with physical_radius(F_low) <= radius_m <= physical_radius(F_high).

    Relies on physical_radius increasing monotonically in F. Returns None when
    no bracket exists within the search limits.
    """
    F_low, F_high = F_LOW_START, F_HIGH_START
    while physical_radius(F_low, h_m, eps_r) >= radius_m and F_low > F_LOW_FLOOR:
        F_low *= 0.5
    while physical_radius(F_high, h_m, eps_r) <= radius_m and F_high < F_HIGH_CEILING:
        F_high *= 2.0

    a_low = physical_radius(F_low, h_m, eps_r)
    a_high = physical_radius(F_high, h_m, eps_r)
    if a_low > radius_m or a_high < radius_m:
        return None
    if not a_low < a_high:
        # endpoints out of order would mean the radius relation is not increasing here
        logger.warning(f"Non-monotonic radius relation: a({F_low})={a_low}, a({F_high})={a_high}")
        return None
    return F_low, F_high


def solve_design_parameter(radius_m: float, eps_r: float, h_m: float) -> Optional[float]:
    """Bisect for F such that physical_radius(F) == radius_m.

    Stops once the radius is within RADIUS_REL_TOL of the target. After
    MAX_BISECTIONS the last midpoint is returned as a best-effort answer.
    """
    bracket = bracket_design_parameter(radius_m, eps_r, h_m)
    if bracket is None:
        return None
    F_low, F_high = bracket

    for i in range(MAX_BISECTIONS):
        F_mid = (F_low + F_high) / 2.0
        a_mid = physical_radius(F_mid, h_m, eps_r)
        if abs(a_mid - radius_m) < RADIUS_REL_TOL * radius_m:
            logger.debug(f"Bisection converged after {i + 1} iterations (F={F_mid:.6e} m)")
            return F_mid
        if a_mid < radius_m:
            F_low = F_mid
        else:
            F_high = F_mid

    F_mid = (F_low + F_high) / 2.0
    logger.debug(f"Bisection hit {MAX_BISECTIONS} iterations; using midpoint F={F_mid:.6e} m")
    return F_mid


def analyze_circular_patch(
    radius_m: float,
    eps_r: float,
    h_m: float,
    settings: QuadratureSettings = DEFAULT_SETTINGS,
) -> Union[ReverseSolution, DesignFailure]:
    """Resonant frequency of a circular patch of physical radius radius_m."""
    problem = input_problem(radius_m=radius_m, eps_r=eps_r, h_m=h_m)
    if problem:
        logger.warning(f"Circular analysis rejected: {problem}")
        return DesignFailure(kind=FailureKind.INVALID_INPUT, reason=problem)

    F = solve_design_parameter(radius_m, eps_r, h_m)
    if F is None:
        reason = f"no bracket for radius {radius_m} m within F in [{F_LOW_FLOOR}, {F_HIGH_CEILING}] m"
        logger.warning(f"Circular analysis failed: {reason}")
        return DesignFailure(kind=FailureKind.UNBRACKETED_ROOT, reason=reason)

    fr_hz = frequency_from_design_parameter(F, eps_r)
    forward = design_circular_patch(fr_hz, eps_r, h_m, settings)
    if isinstance(forward, DesignFailure):
        return forward
    return ReverseSolution(fr_hz=fr_hz, result=forward)
