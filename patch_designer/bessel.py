"""Normalised Bessel functions of the first kind for integer order.

``bessel_j(n, x)`` returns ``J_n(x) / n!``. Small and moderate arguments use
the power series

    J_n(x) / n! = sum_k (-1)^k / (n! k! (n+k)!) * (x/2)^(n+2k)

started from ``(x/2)^n / (n!)^2``. Order 0 and 1 are therefore the ordinary
``J_0`` and ``J_1``; order 2 is ``J_2 / 2``, the scaling the circular-patch
radiation conductance is calibrated against. The series loses accuracy to
cancellation as |x| grows, so past ``SERIES_ARG_LIMIT`` the Hankel asymptotic
expansion is used and divided by ``n!`` to stay on the same scale.
"""
from __future__ import annotations

import math
from typing import Union

import numpy as np
from loguru import logger

ArrayLike = Union[float, np.ndarray]

MAX_TERMS = 120
REL_TOL = 1e-16
SERIES_ARG_LIMIT = 20.0
ASYMPTOTIC_TERMS = 12


def _initial_term(order: int, half_x: np.ndarray) -> np.ndarray:
    # (x/2)^n / (n!)^2 built as a product so large orders underflow instead of overflowing
    term = np.ones_like(half_x)
    for i in range(1, order + 1):
        term = term * half_x / (i * i)
    return term


def _series(order: int, x: np.ndarray) -> np.ndarray:
    half_x = x / 2.0
    term = _initial_term(order, half_x)
    if not np.all(np.isfinite(term)):
        term = np.where(np.isfinite(term), term, 0.0)
    total = np.zeros_like(x)
    factor = -(half_x * half_x)
    for k in range(MAX_TERMS):
        total = total + term
        term = term * factor / ((k + 1) * (order + k + 1))
        if np.all((np.abs(term) < REL_TOL * np.abs(total)) | (term == 0.0)):
            break
    return total


def _asymptotic(order: int, x: np.ndarray) -> np.ndarray:
    """Hankel expansion, valid for |x| >> order."""
    ax = np.abs(x)
    mu = 4.0 * order * order
    p = np.zeros_like(ax)
    q = np.zeros_like(ax)
    coeff = 1.0
    inv = 1.0 / ax
    power = np.ones_like(ax)
    for k in range(ASYMPTOTIC_TERMS):
        if k > 0:
            coeff *= (mu - (2 * k - 1) ** 2) / (k * 8.0)
            power = power * inv
        contrib = coeff * power
        if k % 2 == 0:
            p = p + (-1) ** (k // 2) * contrib
        else:
            q = q + (-1) ** ((k - 1) // 2) * contrib
    omega = ax - order * math.pi / 2.0 - math.pi / 4.0
    out = np.sqrt(2.0 / (math.pi * ax)) * (p * np.cos(omega) - q * np.sin(omega))
    # J_n(-x) = (-1)^n J_n(x)
    if order % 2 == 1:
        out = np.where(x < 0, -out, out)
    return out


def bessel_j(order, x: ArrayLike) -> ArrayLike:
    """Bessel function of the first kind scaled by 1/order!, J_order(x) / order!.

    Args:
        order: Non-negative integer order. Anything else yields NaN.
        x: Scalar or numpy array argument.

    Returns:
        A float for scalar input, otherwise an array of the same shape.
        Non-finite arguments map to NaN.
    """
    scalar = np.ndim(x) == 0
    xs = np.atleast_1d(np.asarray(x, dtype=float))

    try:
        valid_order = float(order) >= 0 and float(order) == math.floor(order)
    except (TypeError, ValueError, OverflowError):
        valid_order = False
    if not valid_order:
        out = np.full_like(xs, np.nan)
        return float(out[0]) if scalar else out.reshape(np.shape(x))
    n = int(order)

    out = np.full_like(xs, np.nan)
    finite = np.isfinite(xs)
    small = finite & (np.abs(xs) <= SERIES_ARG_LIMIT)
    large = finite & ~small

    if np.any(small):
        out[small] = _series(n, xs[small])
    if np.any(large):
        logger.debug(f"J_{n}: {int(np.count_nonzero(large))} argument(s) beyond |x|={SERIES_ARG_LIMIT}, using asymptotic expansion")
        out[large] = _asymptotic(n, xs[large]) / math.factorial(n)

    if scalar:
        return float(out[0])
    return out.reshape(np.shape(x))


def bessel_j0(x: ArrayLike) -> ArrayLike:
    return bessel_j(0, x)


def bessel_j2(x: ArrayLike) -> ArrayLike:
    return bessel_j(2, x)
