"""Spring parameter resolution.

Maps the three input families onto physical constants:
- Physics input passes through unchanged.
- Visual-duration input uses a closed-form shortcut.
- Duration input is inverted numerically with Newton-Raphson, because no
  closed form links an arbitrary (duration, bounce) pair to stiffness and
  damping.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import math

import numpy as np

from springease.core.spring.defaults import DEFAULT_SPRING, SAFE_MIN, SpringDefaults
from springease.core.spring.errors import SpringResolutionError
from springease.core.spring.models import (
    DurationInput,
    PhysicsInput,
    ResolvedSpring,
    SpringInput,
    SpringOptions,
    VisualDurationInput,
)
from springease.core.spring.root_finding import approximate_root
from springease.core.utils.math import clamp, ms_to_seconds, seconds_to_ms

logger = logging.getLogger(__name__)

EnvelopeFn = Callable[[float], float]


def calc_angular_freq(undamped_freq: float, damping_ratio: float) -> float:
    """Damped angular frequency for an underdamped spring."""
    return undamped_freq * np.sqrt(1 - damping_ratio * damping_ratio)


def build_envelope_functions(
    duration: float,
    damping_ratio: float,
    velocity: float = 0.0,
    safe_min: float = SAFE_MIN,
) -> tuple[EnvelopeFn, EnvelopeFn]:
    """Build the envelope/derivative pair solved by ``find_spring``.

    Both functions take an undamped angular frequency guess and measure how
    far the spring is from sitting ``safe_min`` away from rest at exactly
    ``duration`` seconds.

    Args:
        duration: Target duration in seconds.
        damping_ratio: Clamped damping ratio. Below 1 selects the
            oscillatory pair, otherwise the critically damped pair.
        velocity: Initial velocity, negated and divided by 1000 from the
            caller's units per second.
        safe_min: Residual displacement accepted at ``duration``.

    Returns:
        Tuple of (envelope, derivative).
    """
    if damping_ratio < 1:

        def envelope(undamped_freq: float) -> float:
            exponential_decay = undamped_freq * damping_ratio
            delta = exponential_decay * duration
            a = exponential_decay - velocity
            b = calc_angular_freq(undamped_freq, damping_ratio)
            c = np.exp(-delta)
            return safe_min - (a / b) * c

        def derivative(undamped_freq: float) -> float:
            exponential_decay = undamped_freq * damping_ratio
            delta = exponential_decay * duration
            d = delta * velocity + velocity
            e = damping_ratio**2 * undamped_freq**2 * duration
            f = np.exp(-delta)
            g = calc_angular_freq(undamped_freq**2, damping_ratio)
            # Sign follows which side of safe_min the envelope sits on
            factor = -1 if -envelope(undamped_freq) + safe_min > 0 else 1
            return (factor * ((d - e) * f)) / g

    else:

        def envelope(undamped_freq: float) -> float:
            a = np.exp(-undamped_freq * duration)
            b = (undamped_freq - velocity) * duration + 1
            return -safe_min + a * b

        def derivative(undamped_freq: float) -> float:
            a = np.exp(-undamped_freq * duration)
            b = (velocity - undamped_freq) * (duration * duration)
            return a * b

    return envelope, derivative


def find_spring(
    duration: float = DEFAULT_SPRING.duration,
    bounce: float = DEFAULT_SPRING.bounce,
    velocity: float = DEFAULT_SPRING.velocity,
    mass: float = DEFAULT_SPRING.mass,
    defaults: SpringDefaults = DEFAULT_SPRING,
) -> ResolvedSpring:
    """Solve stiffness and damping for a duration (ms) and bounce.

    Args:
        duration: Requested duration in ms, clamped to the defaults' bounds.
        bounce: Bounce amount; the damping ratio is ``1 - bounce`` clamped
            to [min_damping_ratio, max_damping_ratio].
        velocity: Initial velocity in units per second.
        mass: Mass used to scale the solved stiffness.
        defaults: Bounds and fallback constants.

    Returns:
        ResolvedSpring with ``is_resolved_from_duration=True``. When the
        root finder fails (NaN) the default stiffness and damping are used
        and the clamped duration is still reported.

    Example:
        >>> spring = find_spring(duration=800, bounce=0.3)
        >>> spring.duration
        800.0
    """
    damping_ratio = clamp(1 - bounce, defaults.min_damping_ratio, defaults.max_damping_ratio)
    duration_s = clamp(ms_to_seconds(duration), defaults.min_duration_s, defaults.max_duration_s)

    envelope, derivative = build_envelope_functions(
        duration_s, damping_ratio, -ms_to_seconds(velocity)
    )
    undamped_freq = approximate_root(envelope, derivative, 5 / duration_s)

    duration_ms = seconds_to_ms(duration_s)

    if math.isnan(undamped_freq):
        logger.debug(
            "Root finding failed for duration=%sms bounce=%s; using default constants",
            duration_ms,
            bounce,
        )
        return ResolvedSpring(
            stiffness=defaults.stiffness,
            damping=defaults.damping,
            mass=mass,
            velocity=velocity,
            is_resolved_from_duration=True,
            duration=duration_ms,
        )

    stiffness = undamped_freq**2 * mass
    return ResolvedSpring(
        stiffness=stiffness,
        damping=damping_ratio * 2 * math.sqrt(mass * stiffness),
        mass=mass,
        velocity=velocity,
        is_resolved_from_duration=True,
        duration=duration_ms,
    )


def resolve_visual_duration(
    visual_duration: float,
    bounce: float = 0.0,
    velocity: float = DEFAULT_SPRING.velocity,
    defaults: SpringDefaults = DEFAULT_SPRING,
) -> ResolvedSpring:
    """Closed-form constants for a perceived duration in seconds.

    The result settles by velocity and displacement, not by elapsed time.

    Example:
        >>> spring = resolve_visual_duration(0.3, bounce=0.3)
        >>> round(spring.stiffness, 1), round(spring.damping, 1)
        (304.6, 24.4)
    """
    root = (2 * math.pi) / (visual_duration * 1.2)
    stiffness = root * root
    damping_ratio = clamp(1 - bounce, defaults.min_damping_ratio, defaults.max_damping_ratio)
    return ResolvedSpring(
        stiffness=stiffness,
        damping=2 * damping_ratio * math.sqrt(stiffness),
        mass=defaults.mass,
        velocity=velocity,
        is_resolved_from_duration=False,
    )


def resolve_spring(
    spec: SpringInput | SpringOptions,
    defaults: SpringDefaults = DEFAULT_SPRING,
) -> ResolvedSpring:
    """Resolve any spring input into physical constants.

    Args:
        spec: One of the input families, or an option bag to classify.
        defaults: Defaults and bounds passed by value.

    Returns:
        Validated ResolvedSpring.

    Raises:
        SpringResolutionError: If the constants are non-finite, or if
            stiffness or mass is not positive, or damping is negative.
    """
    if isinstance(spec, SpringOptions):
        spec = spec.to_input(defaults)

    if isinstance(spec, PhysicsInput):
        resolved = ResolvedSpring(
            stiffness=spec.stiffness,
            damping=spec.damping,
            mass=spec.mass,
            velocity=spec.velocity,
        )
    elif isinstance(spec, VisualDurationInput):
        resolved = resolve_visual_duration(
            spec.visual_duration, spec.bounce, spec.velocity, defaults=defaults
        )
    elif isinstance(spec, DurationInput):
        resolved = find_spring(
            duration=spec.duration,
            bounce=spec.bounce,
            velocity=spec.velocity,
            mass=spec.mass,
            defaults=defaults,
        )
    else:
        raise TypeError(f"Unsupported spring input: {type(spec).__name__}")

    _validate_resolved(resolved)
    logger.debug(
        "Resolved %s spring: stiffness=%.6g damping=%.6g mass=%.6g duration=%s",
        spec.family,
        resolved.stiffness,
        resolved.damping,
        resolved.mass,
        resolved.duration,
    )
    return resolved


def _validate_resolved(spring: ResolvedSpring) -> None:
    values = (spring.stiffness, spring.damping, spring.mass, spring.velocity)
    if not all(math.isfinite(v) for v in values):
        reason = "Spring constants are not finite"
    elif spring.stiffness <= 0:
        reason = "Stiffness must be > 0"
    elif spring.mass <= 0:
        reason = "Mass must be > 0"
    elif spring.damping < 0:
        reason = "Damping must be >= 0"
    else:
        return
    raise SpringResolutionError(
        reason, stiffness=spring.stiffness, damping=spring.damping, mass=spring.mass
    )
