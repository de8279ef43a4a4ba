"""Linear easing generation from a continuous position function."""

from __future__ import annotations

from collections.abc import Callable

from springease.core.curves.models import CurvePoint, LinearEasing
from springease.core.curves.sampling import sample_inclusive_grid


def generate_linear_easing(
    position: Callable[[float], float],
    duration_ms: float,
    resolution: int = 30,
    precision: int | None = None,
) -> LinearEasing:
    """Sample ``position`` at ``resolution`` evenly spaced progress values.

    Sample ``i`` is ``position(duration_ms * i / (resolution - 1))``, so the
    first sample is taken at 0 and the last at ``duration_ms``.

    Args:
        position: Function of time in ms.
        duration_ms: Window covered by the samples.
        resolution: Number of samples (must be >= 2).
        precision: Optional rounding applied when rendering.

    Returns:
        LinearEasing holding exactly ``resolution`` points.

    Raises:
        ValueError: If resolution < 2.

    Example:
        >>> easing = generate_linear_easing(lambda t: t / 100, 100.0, resolution=3)
        >>> easing.to_css()
        'linear(0, 0.5, 1)'
    """
    grid = sample_inclusive_grid(resolution)
    points = [CurvePoint(t=p, v=float(position(duration_ms * p))) for p in grid]
    return LinearEasing(points=points, duration_ms=duration_ms, precision=precision)
