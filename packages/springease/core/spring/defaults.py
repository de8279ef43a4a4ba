"""Default physical constants and bounds for spring resolution.

Kept in one immutable model so callers can pass a modified copy by value
(``DEFAULT_SPRING.model_copy(update={...})``) instead of patching globals.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SpringDefaults(BaseModel):
    """Immutable table of spring defaults and clamping bounds.

    Durations are milliseconds unless the field name says otherwise.

    Example:
        >>> DEFAULT_SPRING.stiffness
        100.0
        >>> DEFAULT_SPRING.rest_speed_granular
        0.01
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    stiffness: float = Field(default=100.0, gt=0.0)
    damping: float = Field(default=10.0, ge=0.0)
    mass: float = Field(default=1.0, gt=0.0)
    velocity: float = 0.0

    duration: float = Field(default=800.0, gt=0.0, description="Duration in ms")
    bounce: float = 0.3
    visual_duration: float = Field(default=0.3, gt=0.0, description="Visual duration in seconds")

    rest_speed_granular: float = Field(default=0.01, ge=0.0)
    rest_speed_default: float = Field(default=2.0, ge=0.0)
    rest_delta_granular: float = Field(default=0.005, ge=0.0)
    rest_delta_default: float = Field(default=0.5, ge=0.0)
    granular_scale_limit: float = Field(
        default=5.0, gt=0.0, description="Keyframe deltas below this use the granular thresholds"
    )

    min_duration_s: float = Field(default=0.01, gt=0.0)
    max_duration_s: float = Field(default=10.0, gt=0.0)
    min_damping_ratio: float = Field(default=0.05, gt=0.0)
    max_damping_ratio: float = Field(default=1.0, gt=0.0)


DEFAULT_SPRING = SpringDefaults()

# Newton-Raphson and duration-search bounds
ROOT_ITERATIONS = 12
SAFE_MIN = 0.001
VELOCITY_LOOKBACK_MS = 5.0
DURATION_STEP_MS = 50.0
MAX_DURATION_MS = 10_000.0
MAX_HYPERBOLIC_ARG = 300.0
FRAME_STEP_MS = 16.666
DEFAULT_RESOLUTION = 30
