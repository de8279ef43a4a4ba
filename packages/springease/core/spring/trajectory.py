"""Closed-form spring trajectories.

The damped oscillator has one closed-form solution per damping regime. The
physics runs in seconds while the public API speaks milliseconds, so every
position function converts ``t_ms`` on entry. Position functions accept a
scalar or a numpy array of times.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import cached_property
import logging

import numpy as np
import numpy.typing as npt

from springease.core.curves.generator import generate_linear_easing
from springease.core.curves.models import LinearEasing
from springease.core.spring.defaults import (
    DEFAULT_RESOLUTION,
    DEFAULT_SPRING,
    DURATION_STEP_MS,
    MAX_DURATION_MS,
    MAX_HYPERBOLIC_ARG,
    SpringDefaults,
)
from springease.core.spring.duration import estimate_settling_duration
from springease.core.spring.models import (
    DampingRegime,
    Keyframes,
    ResolvedSpring,
    SpringOptions,
    TrajectoryState,
)
from springease.core.spring.resolver import calc_angular_freq, resolve_spring
from springease.core.spring.settlement import SettleThresholds, estimate_velocity, is_at_rest
from springease.core.utils.math import ms_to_seconds

logger = logging.getLogger(__name__)

TimeLike = float | npt.NDArray[np.float64]
PositionFn = Callable[[TimeLike], TimeLike]


def build_position_function(spring: ResolvedSpring, keyframes: Keyframes) -> PositionFn:
    """Return the closed-form position function for ``spring``.

    Each branch is written as ``origin + (delta - decay_term)`` so that the
    decay term equals ``delta`` at t=0 and ``position(0) == origin`` exactly.

    Args:
        spring: Resolved physical constants.
        keyframes: Origin and target of the motion.

    Returns:
        Function mapping time in ms to position.
    """
    origin = keyframes.origin
    initial_delta = keyframes.delta
    # The closed forms use the negated velocity, in units per second
    initial_velocity = -spring.velocity
    damping_ratio = spring.damping_ratio
    undamped_freq = spring.undamped_angular_freq
    regime = DampingRegime.from_ratio(damping_ratio)

    if regime is DampingRegime.UNDERDAMPED:
        angular_freq = calc_angular_freq(undamped_freq, damping_ratio)
        sin_coeff = (initial_velocity + damping_ratio * undamped_freq * initial_delta) / angular_freq

        def resolve(t: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
            envelope = np.exp(-damping_ratio * undamped_freq * t)
            return envelope * (
                sin_coeff * np.sin(angular_freq * t) + initial_delta * np.cos(angular_freq * t)
            )

    elif regime is DampingRegime.CRITICALLY_DAMPED:
        linear_coeff = initial_velocity + undamped_freq * initial_delta

        def resolve(t: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
            return np.exp(-undamped_freq * t) * (initial_delta + linear_coeff * t)

    else:
        damped_freq = undamped_freq * np.sqrt(damping_ratio * damping_ratio - 1)
        sinh_coeff = (initial_velocity + damping_ratio * undamped_freq * initial_delta) / damped_freq

        def resolve(t: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
            envelope = np.exp(-damping_ratio * undamped_freq * t)
            # sinh/cosh overflow past ~710; the envelope has long vanished by then
            freq_for_t = np.minimum(damped_freq * t, MAX_HYPERBOLIC_ARG)
            return envelope * (
                sinh_coeff * np.sinh(freq_for_t) + initial_delta * np.cosh(freq_for_t)
            )

    def position(t_ms: TimeLike) -> TimeLike:
        t = ms_to_seconds(np.asarray(t_ms, dtype=np.float64))
        with np.errstate(all="ignore"):
            result = origin + (initial_delta - resolve(t))
        return float(result) if np.ndim(result) == 0 else result

    return position


class SpringTrajectory:
    """Immutable, queryable trajectory of a resolved spring.

    Every query is a pure function of ``t`` (ms); there is no ordering
    dependency between calls. The inputs are read-only properties and
    derived values are computed lazily from them.

    ``done`` is monotonic in ``t``:
    - duration-resolved springs are done once ``t >= duration``;
    - other springs are done from the first probe of the settling search at
      which velocity and displacement are both under the thresholds, and
      never if no probe within the ceiling is at rest.

    Example:
        >>> trajectory = SpringTrajectory(resolve_spring(SpringOptions(duration=800, bounce=0.3)))
        >>> trajectory.evaluate(800).done
        True
    """

    def __init__(
        self,
        spring: ResolvedSpring,
        keyframes: Keyframes | None = None,
        thresholds: SettleThresholds | None = None,
        defaults: SpringDefaults = DEFAULT_SPRING,
        step_ms: float = DURATION_STEP_MS,
        max_duration_ms: float = MAX_DURATION_MS,
    ) -> None:
        self._spring = spring
        self._keyframes = keyframes or Keyframes()
        self._thresholds = thresholds or SettleThresholds.for_delta(
            self._keyframes.delta, defaults
        )
        self._step_ms = step_ms
        self._max_duration_ms = max_duration_ms
        self._position = build_position_function(spring, self._keyframes)

    @property
    def spring(self) -> ResolvedSpring:
        return self._spring

    @property
    def keyframes(self) -> Keyframes:
        return self._keyframes

    @property
    def thresholds(self) -> SettleThresholds:
        return self._thresholds

    @property
    def step_ms(self) -> float:
        return self._step_ms

    @property
    def max_duration_ms(self) -> float:
        return self._max_duration_ms

    def __repr__(self) -> str:
        return (
            f"SpringTrajectory(stiffness={self.spring.stiffness:.6g}, "
            f"damping={self.spring.damping:.6g}, mass={self.spring.mass:.6g}, "
            f"regime={self.regime.value}, keyframes=[{self.keyframes.origin}, "
            f"{self.keyframes.target}])"
        )

    @property
    def regime(self) -> DampingRegime:
        return self.spring.regime

    @property
    def is_resolved_from_duration(self) -> bool:
        return self.spring.is_resolved_from_duration

    def position(self, t: TimeLike) -> TimeLike:
        """Raw closed-form position at ``t`` ms (no snapping to target)."""
        return self._position(t)

    def velocity(self, t: float) -> float:
        """Velocity estimate used by the rest check."""
        return estimate_velocity(
            self._position, t, self._position(t), self.regime, self.spring.velocity
        )

    def is_at_rest(self, t: float) -> bool:
        """Instantaneous rest check at ``t`` ms."""
        current = self._position(t)
        velocity = estimate_velocity(
            self._position, t, current, self.regime, self.spring.velocity
        )
        return is_at_rest(current, velocity, self.keyframes.target, self.thresholds)

    @cached_property
    def _rest_time(self) -> float | None:
        if self.is_resolved_from_duration:
            return None
        settled_at = estimate_settling_duration(self.is_at_rest, self.step_ms, self.max_duration_ms)
        if settled_at >= self.max_duration_ms:
            return None
        return settled_at

    @cached_property
    def settling_duration(self) -> float:
        """Time window (ms) over which the curve is sampled."""
        if self.is_resolved_from_duration and self.spring.duration is not None:
            return min(self.spring.duration, self.max_duration_ms)
        rest_time = self._rest_time
        return self.max_duration_ms if rest_time is None else rest_time

    def is_done(self, t: float) -> bool:
        """Whether the spring has settled by ``t`` ms.

        Velocity-settled springs switch to done on the settling-search grid,
        so a ``t`` between grid points can be at rest and still not done.
        """
        if self.is_resolved_from_duration and self.spring.duration is not None:
            return t >= self.spring.duration
        rest_time = self._rest_time
        return rest_time is not None and t >= rest_time

    def evaluate(self, t: float) -> TrajectoryState:
        """Position and settlement at ``t`` ms; settled values snap to target."""
        done = self.is_done(t)
        value = self.keyframes.target if done else self._position(t)
        return TrajectoryState(t=t, value=value, done=done)

    def sample(self, resolution: int = DEFAULT_RESOLUTION) -> list[float]:
        return self.to_easing(resolution).values

    def to_easing(
        self, resolution: int = DEFAULT_RESOLUTION, precision: int | None = None
    ) -> LinearEasing:
        """Sample the trajectory over its settling duration."""
        duration = min(self.settling_duration, self.max_duration_ms)
        return generate_linear_easing(
            lambda t: self.evaluate(t).value, duration, resolution, precision
        )

    def __str__(self) -> str:
        return self.to_easing().to_css()


def spring(
    options_or_visual_duration: SpringOptions | dict | float,
    bounce: float | None = None,
    defaults: SpringDefaults = DEFAULT_SPRING,
    step_ms: float = DURATION_STEP_MS,
    max_duration_ms: float = MAX_DURATION_MS,
) -> SpringTrajectory:
    """Build a trajectory from options, or from a visual duration and bounce.

    Args:
        options_or_visual_duration: SpringOptions, a raw option mapping
            (snake_case or camelCase keys), or a visual duration in seconds.
        bounce: Bounce used with the visual-duration shorthand.
        defaults: Defaults and bounds passed by value.
        step_ms: Settling-search step.
        max_duration_ms: Settling-search ceiling.

    Returns:
        SpringTrajectory over the option keyframes (default [0, 1]).

    Example:
        >>> str(spring(0.3, 0.3)).startswith("linear(0, ")
        True
    """
    if isinstance(options_or_visual_duration, SpringOptions):
        options = options_or_visual_duration
    elif isinstance(options_or_visual_duration, dict):
        options = SpringOptions.model_validate(options_or_visual_duration)
    else:
        options = SpringOptions(
            visual_duration=float(options_or_visual_duration),
            bounce=bounce,
            keyframes=[0.0, 1.0],
        )

    resolved = resolve_spring(options, defaults)
    keyframes = Keyframes.from_values(options.keyframes)
    thresholds = SettleThresholds.for_delta(
        keyframes.delta, defaults, rest_speed=options.rest_speed, rest_delta=options.rest_delta
    )
    logger.debug("Built %r", resolved)
    return SpringTrajectory(
        resolved,
        keyframes,
        thresholds,
        defaults=defaults,
        step_ms=step_ms,
        max_duration_ms=max_duration_ms,
    )
