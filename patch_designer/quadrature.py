from __future__ import annotations

from typing import Callable

import numpy as np


def simpson_weights(n: int) -> np.ndarray:
    """Composite Simpson weights 1, 4, 2, ..., 2, 4, 1 for n (even) subintervals."""
    w = np.full(n + 1, 2.0)
    w[1::2] = 4.0
    w[0] = w[-1] = 1.0
    return w


def _even(n: int) -> int:
    if n < 1:
        raise ValueError(f"number of subintervals must be positive, got {n}")
    return n + 1 if n % 2 else n


def integrate_1d(f: Callable[[np.ndarray], np.ndarray], a: float, b: float, n: int) -> float:
    """Composite Simpson's rule for the integral of f over [a, b].

    f is evaluated once on the array of n+1 sample points. An odd n is
    rounded up to the next even value.
    """
    n = _even(n)
    h = (b - a) / n
    x = a + h * np.arange(n + 1)
    return float(h / 3.0 * np.sum(simpson_weights(n) * f(x)))


def integrate_2d(
    f: Callable[[float, np.ndarray], np.ndarray],
    ax: float,
    bx: float,
    ay: float,
    by: float,
    nx: int,
    ny: int,
) -> float:
    """Nested Simpson integral of f(x, y) over [ax, bx] x [ay, by].

    The outer variable x is sampled with Simpson weights; at each outer sample
    the inner integral over y is taken with integrate_1d.
    """
    nx = _even(nx)
    h_outer = (bx - ax) / nx
    weights = simpson_weights(nx)
    total = 0.0
    for i in range(nx + 1):
        x = ax + i * h_outer
        total += weights[i] * integrate_1d(lambda y: f(x, y), ay, by, ny)
    return h_outer / 3.0 * total
