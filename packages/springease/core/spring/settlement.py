"""Settlement checks for velocity-settled springs."""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

from springease.core.spring.defaults import DEFAULT_SPRING, VELOCITY_LOOKBACK_MS, SpringDefaults
from springease.core.spring.models import DampingRegime


class SettleThresholds(BaseModel):
    """Speed and displacement under which a spring counts as at rest.

    Example:
        >>> SettleThresholds.for_delta(1.0)
        SettleThresholds(rest_speed=0.01, rest_delta=0.005)
        >>> SettleThresholds.for_delta(100.0, rest_delta=1.0)
        SettleThresholds(rest_speed=2.0, rest_delta=1.0)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    rest_speed: float = Field(..., ge=0.0)
    rest_delta: float = Field(..., ge=0.0)

    @classmethod
    def for_delta(
        cls,
        delta: float,
        defaults: SpringDefaults = DEFAULT_SPRING,
        rest_speed: float | None = None,
        rest_delta: float | None = None,
    ) -> SettleThresholds:
        """Pick granular or default thresholds from the keyframe delta.

        Explicit values, including 0, override the selected pair.
        """
        granular = abs(delta) < defaults.granular_scale_limit
        if rest_speed is None:
            rest_speed = defaults.rest_speed_granular if granular else defaults.rest_speed_default
        if rest_delta is None:
            rest_delta = defaults.rest_delta_granular if granular else defaults.rest_delta_default
        return cls(rest_speed=rest_speed, rest_delta=rest_delta)


def estimate_velocity(
    position: Callable[[float], float],
    t: float,
    current: float,
    regime: DampingRegime,
    initial_velocity: float,
    lookback_ms: float = VELOCITY_LOOKBACK_MS,
) -> float:
    """Estimate velocity at ``t`` (ms) for the rest check.

    Underdamped springs use a backward difference over ``lookback_ms``,
    giving units per ms. At t=0 the underdamped estimate is the initial
    velocity in units per second, while the other regimes report it per ms
    and treat every later instant as stationary; their approach is
    monotonic, so displacement alone decides settling.

    Args:
        position: Position function of time in ms.
        t: Query time in ms.
        current: ``position(t)``, already computed by the caller.
        regime: Damping regime of the spring.
        initial_velocity: Initial velocity in units per second.
        lookback_ms: Backward-difference window.
    """
    if regime is not DampingRegime.UNDERDAMPED:
        return initial_velocity / 1000 if t == 0 else 0.0
    if t == 0:
        return initial_velocity
    prev_t = max(t - lookback_ms, 0.0)
    return (current - position(prev_t)) / (t - prev_t)


def is_at_rest(value: float, velocity: float, target: float, thresholds: SettleThresholds) -> bool:
    return (
        abs(velocity) <= thresholds.rest_speed
        and abs(target - value) <= thresholds.rest_delta
    )
