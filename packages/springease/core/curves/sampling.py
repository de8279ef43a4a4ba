"""Curve sampling infrastructure.

This module provides the normalized sampling grid used for easing curves
and linear interpolation between sampled points.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from springease.core.utils.math import lerp

if TYPE_CHECKING:
    from springease.core.curves.models import CurvePoint


def sample_inclusive_grid(n: int) -> list[float]:
    """Generate N evenly-spaced samples in [0, 1], both ends included.

    Returns N samples: [0.0, 1/(N-1), 2/(N-1), ..., 1.0]

    Args:
        n: Number of samples to generate. Must be >= 2.

    Returns:
        List of N evenly-spaced float values in [0, 1].

    Raises:
        ValueError: If n < 2.

    Example:
        >>> sample_inclusive_grid(5)
        [0.0, 0.25, 0.5, 0.75, 1.0]
    """
    if n < 2:
        raise ValueError("n must be >= 2")
    return [i / (n - 1) for i in range(n)]


def interpolate_linear(points: list[CurvePoint], t: float) -> float:
    """Linearly interpolate value at time t.

    Given a list of curve points with non-decreasing t values,
    find the value at the specified time using linear interpolation.

    If t is before the first point, returns the first point's value.
    If t is after the last point, returns the last point's value.

    Args:
        points: List of CurvePoints with non-decreasing t values.
        t: Time value in [0, 1] at which to interpolate.

    Returns:
        Interpolated value at time t.

    Raises:
        ValueError: If points is empty or t is outside [0, 1].
    """
    if not points:
        raise ValueError("points cannot be empty")
    if not (0.0 <= t <= 1.0):
        raise ValueError(f"t must be in [0, 1], got {t}")

    if t <= points[0].t:
        return points[0].v
    if t >= points[-1].t:
        return points[-1].v

    for i in range(len(points) - 1):
        if points[i].t <= t <= points[i + 1].t:
            t0, v0 = points[i].t, points[i].v
            t1, v1 = points[i + 1].t, points[i + 1].v
            if t1 > t0:
                return lerp(v0, v1, (t - t0) / (t1 - t0))
            # Degenerate case: same t values
            return v0

    return points[-1].v
