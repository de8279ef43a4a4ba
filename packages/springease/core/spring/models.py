"""Spring input and resolution models.

This module defines the data passed between the spring components:
- SpringOptions: the loose option bag accepted by the public API
- PhysicsInput / DurationInput / VisualDurationInput: the three input families
- ResolvedSpring: physical constants produced by the resolver
- Keyframes: the interpolated range
- TrajectoryState: the value returned when a trajectory is evaluated

All pydantic models are frozen and validate on construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from springease.core.spring.defaults import DEFAULT_SPRING, SpringDefaults


class DampingRegime(str, Enum):
    """Closed-form family selected by the damping ratio."""

    UNDERDAMPED = "underdamped"
    CRITICALLY_DAMPED = "critically_damped"
    OVERDAMPED = "overdamped"

    @classmethod
    def from_ratio(cls, damping_ratio: float) -> DampingRegime:
        if damping_ratio < 1:
            return cls.UNDERDAMPED
        if damping_ratio == 1:
            return cls.CRITICALLY_DAMPED
        return cls.OVERDAMPED


class PhysicsInput(BaseModel):
    """Spring given directly by its physical constants.

    Attributes:
        stiffness: Spring constant k.
        damping: Damping coefficient c.
        mass: Mass of the moving object.
        velocity: Initial velocity in units per second.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    family: Literal["physics"] = "physics"
    stiffness: float = DEFAULT_SPRING.stiffness
    damping: float = DEFAULT_SPRING.damping
    mass: float = DEFAULT_SPRING.mass
    velocity: float = DEFAULT_SPRING.velocity


class DurationInput(BaseModel):
    """Spring given by a settling duration (ms) and a bounce amount.

    Duration is clamped to [10, 10000] ms and bounce is effectively clamped
    through the damping-ratio bounds during resolution.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    family: Literal["duration"] = "duration"
    duration: float = Field(default=DEFAULT_SPRING.duration, description="Duration in ms")
    bounce: float = DEFAULT_SPRING.bounce
    velocity: float = DEFAULT_SPRING.velocity
    mass: float = DEFAULT_SPRING.mass


class VisualDurationInput(BaseModel):
    """Spring given by a perceived duration (seconds) and a bounce amount."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    family: Literal["visual_duration"] = "visual_duration"
    visual_duration: float = Field(..., gt=0.0, description="Visual duration in seconds")
    bounce: float = 0.0
    velocity: float = DEFAULT_SPRING.velocity


SpringInput = PhysicsInput | DurationInput | VisualDurationInput


class SpringOptions(BaseModel):
    """Option bag accepted by ``spring()`` and the option-file loader.

    Any combination of keys may be given; ``to_input`` picks the family.
    Physics keys win over duration keys, and ``visual_duration`` wins over
    a plain ``duration``. camelCase names are accepted as aliases.

    Example:
        >>> SpringOptions(duration=800, bounce=0.3).to_input().family
        'duration'
        >>> SpringOptions.model_validate({"visualDuration": 0.3}).to_input().family
        'visual_duration'
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    stiffness: float | None = None
    damping: float | None = None
    mass: float | None = None
    velocity: float | None = Field(default=None, description="Initial velocity, units per second")
    duration: float | None = Field(default=None, description="Duration in ms")
    bounce: float | None = None
    visual_duration: float | None = Field(default=None, description="Visual duration in seconds")
    rest_speed: float | None = Field(default=None, ge=0.0)
    rest_delta: float | None = Field(default=None, ge=0.0)
    keyframes: list[float] = Field(default_factory=lambda: [0.0, 1.0], min_length=2)

    def has_physics_keys(self) -> bool:
        return any(v is not None for v in (self.stiffness, self.damping, self.mass))

    def has_duration_keys(self) -> bool:
        return self.duration is not None or self.bounce is not None

    def to_input(self, defaults: SpringDefaults = DEFAULT_SPRING) -> SpringInput:
        """Classify the option bag into exactly one input family.

        Args:
            defaults: Defaults for any value the bag leaves unset.

        Returns:
            PhysicsInput, VisualDurationInput or DurationInput.
        """
        velocity = self.velocity if self.velocity is not None else defaults.velocity

        if self.has_physics_keys():
            return PhysicsInput(
                stiffness=_or_default(self.stiffness, defaults.stiffness),
                damping=_or_default(self.damping, defaults.damping),
                mass=_or_default(self.mass, defaults.mass),
                velocity=velocity,
            )

        if self.visual_duration is not None:
            return VisualDurationInput(
                visual_duration=self.visual_duration,
                bounce=_or_default(self.bounce, 0.0),
                velocity=velocity,
            )

        if self.has_duration_keys():
            return DurationInput(
                duration=_or_default(self.duration, defaults.duration),
                bounce=_or_default(self.bounce, defaults.bounce),
                velocity=velocity,
                mass=defaults.mass,
            )

        return PhysicsInput(
            stiffness=defaults.stiffness,
            damping=defaults.damping,
            mass=defaults.mass,
            velocity=velocity,
        )

    def merged(self, **overrides: Any) -> SpringOptions:
        """Return a validated copy with every non-None override applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return SpringOptions.model_validate({**self.model_dump(exclude_none=True), **updates})


def _or_default(value: float | None, default: float) -> float:
    return default if value is None else value


class ResolvedSpring(BaseModel):
    """Physical constants ready for the trajectory solver.

    Attributes:
        stiffness: Spring constant k (> 0).
        damping: Damping coefficient c (>= 0).
        mass: Mass (> 0).
        velocity: Initial velocity in units per second.
        is_resolved_from_duration: True when the constants were solved from
            an explicit duration, which switches settlement to elapsed time.
        duration: Requested duration in ms (duration family only).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    stiffness: float
    damping: float
    mass: float
    velocity: float = 0.0
    is_resolved_from_duration: bool = False
    duration: float | None = None

    @property
    def damping_ratio(self) -> float:
        return self.damping / (2 * math.sqrt(self.stiffness * self.mass))

    @property
    def undamped_angular_freq(self) -> float:
        """Undamped angular frequency in radians per second."""
        return math.sqrt(self.stiffness / self.mass)

    @property
    def regime(self) -> DampingRegime:
        return DampingRegime.from_ratio(self.damping_ratio)


class Keyframes(BaseModel):
    """Origin and target of the interpolated range."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    origin: float = 0.0
    target: float = 1.0

    @classmethod
    def from_values(cls, values: list[float]) -> Keyframes:
        """Build from a keyframe list, using its first and last entries."""
        if len(values) < 2:
            raise ValueError("keyframes must contain at least 2 values")
        return cls(origin=values[0], target=values[-1])

    @property
    def delta(self) -> float:
        return self.target - self.origin


@dataclass(frozen=True)
class TrajectoryState:
    """Value of a trajectory at time ``t`` (ms)."""

    t: float
    value: float
    done: bool
