"""Spring resolution and trajectory generation."""

from springease.core.spring.defaults import DEFAULT_SPRING, SpringDefaults
from springease.core.spring.duration import estimate_settling_duration
from springease.core.spring.errors import SpringResolutionError
from springease.core.spring.models import (
    DampingRegime,
    DurationInput,
    Keyframes,
    PhysicsInput,
    ResolvedSpring,
    SpringInput,
    SpringOptions,
    TrajectoryState,
    VisualDurationInput,
)
from springease.core.spring.resolver import find_spring, resolve_spring, resolve_visual_duration
from springease.core.spring.root_finding import approximate_root
from springease.core.spring.settlement import SettleThresholds
from springease.core.spring.simulation import integrate_euler, simulate_frames
from springease.core.spring.trajectory import SpringTrajectory, build_position_function, spring

__all__ = [
    "DEFAULT_SPRING",
    "DampingRegime",
    "DurationInput",
    "Keyframes",
    "PhysicsInput",
    "ResolvedSpring",
    "SettleThresholds",
    "SpringDefaults",
    "SpringInput",
    "SpringOptions",
    "SpringResolutionError",
    "SpringTrajectory",
    "TrajectoryState",
    "VisualDurationInput",
    "approximate_root",
    "build_position_function",
    "estimate_settling_duration",
    "find_spring",
    "integrate_euler",
    "resolve_spring",
    "resolve_visual_duration",
    "simulate_frames",
    "spring",
]
