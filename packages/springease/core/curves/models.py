"""Curve schema models for sampled easing curves.

This module defines the primitives the sampler emits:
- CurvePoint: A single sample (t, v), t normalized to [0, 1]
- LinearEasing: An ordered sample sequence with monotonic time, renderable
  as a CSS ``linear()`` easing function

Values are not clamped: spring curves overshoot their target.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from springease.core.curves.sampling import interpolate_linear
from springease.core.utils.formatting import format_decimal


class CurvePoint(BaseModel):
    """A single point on a sampled curve.

    This model is immutable (frozen=True).

    Attributes:
        t: Normalized progress in range [0, 1].
        v: Curve value at that progress.

    Example:
        >>> point = CurvePoint(t=0.5, v=1.07)
        >>> point.v
        1.07
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    t: float = Field(..., ge=0.0, le=1.0, description="Normalized progress [0,1]")
    v: float = Field(..., description="Sampled value")


class LinearEasing(BaseModel):
    """Piecewise-linear easing curve built from ordered samples.

    Points must have non-decreasing t values (monotonic time).
    A minimum of 2 points is required to define a valid curve.

    Attributes:
        points: Samples with non-decreasing t values.
        duration_ms: Time span the samples cover.
        precision: Optional rounding for rendered values.

    Example:
        >>> easing = LinearEasing(points=[
        ...     CurvePoint(t=0.0, v=0.0),
        ...     CurvePoint(t=1.0, v=1.0),
        ... ])
        >>> easing.to_css()
        'linear(0, 1)'
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    points: list[CurvePoint] = Field(..., min_length=2)
    duration_ms: float = Field(default=0.0, ge=0.0)
    precision: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _validate_monotonic_t(self) -> "LinearEasing":
        """Validate that points have non-decreasing t values."""
        last_t = -1.0
        for p in self.points:
            if p.t < last_t:
                raise ValueError("LinearEasing.points must have non-decreasing t")
            last_t = p.t
        return self

    @property
    def values(self) -> list[float]:
        return [p.v for p in self.points]

    def value_at(self, progress: float) -> float:
        """Evaluate the piecewise-linear curve at ``progress`` in [0, 1]."""
        return interpolate_linear(self.points, progress)

    def to_css(self, precision: int | None = None) -> str:
        """Render as ``linear(v0, v1, ..., vN)``."""
        digits = self.precision if precision is None else precision
        return f"linear({', '.join(format_decimal(v, digits) for v in self.values)})"

    def to_css_declaration(self, precision: int | None = None) -> str:
        return f"animation-timing-function: {self.to_css(precision)};"

    def __str__(self) -> str:
        return self.to_css()
