from __future__ import annotations

import math
from typing import Tuple

# Physical constants
c0 = 299_792_458.0

# chi_11 * c0 / (2*pi) for the TM110 mode of a circular patch, chi_11 ~ 1.841.
# Kept as the rounded design-equation literal rather than derived at runtime.
CIRCULAR_MODE_CONSTANT = 8.791e7
CHI_11 = 1.8412


def wavelength(f_hz: float) -> float:
    """Free-space wavelength in metres."""
    return c0 / f_hz


def wavenumber(f_hz: float) -> float:
    """Free-space wavenumber k0 = 2*pi/lambda0 in 1/m."""
    return 2.0 * math.pi * f_hz / c0


# ---- Rectangular patch (TM010) ----

def effective_eps(eps_r: float, h_m: float, W_m: float) -> float:
    """Effective permittivity of a patch of width W on a substrate of height h."""
    return (eps_r + 1.0) / 2.0 + (eps_r - 1.0) / 2.0 / math.sqrt(1.0 + 12.0 * h_m / W_m)


def delta_L(eps_eff: float, h_m: float, W_m: float) -> float:
    """Fringing length extension of one radiating edge (Hammerstad)."""
    w_h = W_m / h_m
    a = (eps_eff + 0.3) * (w_h + 0.264)
    b = (eps_eff - 0.258) * (w_h + 0.8)
    return 0.412 * h_m * (a / b)


def patch_width(f_hz: float, eps_r: float) -> float:
    """Width giving efficient radiation at f_hz."""
    return c0 / (2.0 * f_hz) * math.sqrt(2.0 / (eps_r + 1.0))


def design_patch_for_frequency(f_hz: float, eps_r: float, h_m: float) -> Tuple[float, float, float, float]:
    """Return (L_m, W_m, eps_eff, L_eff_m) designed for TM010 resonance at f_hz.

    L_eff is the half-wave resonant length; the physical length is shorter by
    the fringing extension at both radiating edges.
    """
    W = patch_width(f_hz, eps_r)
    eps_eff = effective_eps(eps_r, h_m, W)
    L_eff = c0 / (2.0 * f_hz * math.sqrt(eps_eff))
    L = L_eff - 2.0 * delta_L(eps_eff, h_m, W)
    return L, W, eps_eff, L_eff


def resonant_frequency(W_m: float, L_m: float, eps_r: float, h_m: float) -> float:
    """Invert the length equation: fr = c0 / (2*sqrt(eps_eff)*(L + 2*dL))."""
    eps_eff = effective_eps(eps_r, h_m, W_m)
    dL = delta_L(eps_eff, h_m, W_m)
    return c0 / (2.0 * math.sqrt(eps_eff) * (L_m + 2.0 * dL))


# ---- Circular patch (TM110) ----

def design_parameter(f_hz: float, eps_r: float) -> float:
    """F = K / (fr*sqrt(eps_r)), the unloaded radius estimate in metres."""
    return CIRCULAR_MODE_CONSTANT / (f_hz * math.sqrt(eps_r))


def frequency_from_design_parameter(F_m: float, eps_r: float) -> float:
    return CIRCULAR_MODE_CONSTANT / (F_m * math.sqrt(eps_r))


def physical_radius(F_m: float, h_m: float, eps_r: float) -> float:
    """Physical radius a (m) for design parameter F."""
    ln_arg = math.pi * F_m / (2.0 * h_m) + 1.7726
    den = 1.0 + 2.0 * h_m / (math.pi * eps_r * F_m) * math.log(ln_arg)
    return F_m / math.sqrt(den)


def effective_radius(a_m: float, h_m: float, eps_r: float) -> float:
    """Effective radius a_e (m); fringing makes it larger than a."""
    ln_arg = math.pi * a_m / (2.0 * h_m) + 1.7726
    factor = 1.0 + 2.0 * h_m / (math.pi * a_m * eps_r) * math.log(ln_arg)
    return a_m * math.sqrt(factor)
