"""Fixed-iteration Newton-Raphson root finding."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from springease.core.spring.defaults import ROOT_ITERATIONS


def approximate_root(
    f: Callable[[float], float],
    f_derivative: Callable[[float], float],
    initial_guess: float,
    iterations: int = ROOT_ITERATIONS,
) -> float:
    """Approximate a root of ``f`` with a fixed number of Newton steps.

    There is no convergence test, so identical inputs always produce a
    bit-identical result. A zero derivative or a diverging iteration is not
    detected: the result is NaN or inf, never an exception. Callers treat
    NaN as a failed resolution.

    Args:
        f: Function whose root is sought.
        f_derivative: Derivative of ``f``.
        initial_guess: Starting point.
        iterations: Number of updates ``x -= f(x) / f'(x)``.

    Returns:
        The final iterate as a float (possibly NaN or inf).

    Example:
        >>> round(approximate_root(lambda x: x * x - 2, lambda x: 2 * x, 1.0), 12)
        1.414213562373
    """
    result = np.float64(initial_guess)
    with np.errstate(all="ignore"):
        for _ in range(iterations):
            result = result - np.float64(f(result)) / np.float64(f_derivative(result))
    return float(result)
