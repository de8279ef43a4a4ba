"""Frame-by-frame playback and a numerical cross-check for trajectories.

``simulate_frames`` replays a trajectory at a display frame rate, the way an
animation loop would consume it. ``integrate_euler`` integrates the
oscillator ODE numerically; it is less precise than the closed forms and
exists as a test oracle for them.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from springease.core.spring.defaults import FRAME_STEP_MS, MAX_DURATION_MS
from springease.core.spring.models import Keyframes, ResolvedSpring
from springease.core.spring.trajectory import SpringTrajectory
from springease.core.utils.math import ms_to_seconds


def simulate_frames(
    trajectory: SpringTrajectory,
    step_ms: float = FRAME_STEP_MS,
    max_duration_ms: float = MAX_DURATION_MS,
) -> list[float]:
    """Evaluate the trajectory every ``step_ms`` until it is done.

    The frame at which ``done`` first holds is included (its value is the
    target). Playback stops after ``max_duration_ms`` for springs that
    never settle.

    Raises:
        ValueError: If step_ms is not positive.
    """
    if step_ms <= 0:
        raise ValueError("step_ms must be > 0")

    frames: list[float] = []
    t = 0.0
    while True:
        state = trajectory.evaluate(t)
        frames.append(state.value)
        if state.done or t >= max_duration_ms:
            break
        t += step_ms
    return frames


def integrate_euler(
    spring: ResolvedSpring,
    keyframes: Keyframes | None = None,
    step_ms: float = 0.1,
    duration_ms: float = 1000.0,
) -> npt.NDArray[np.float64]:
    """Integrate ``m x'' = -k (x - target) - c x'`` with semi-implicit Euler.

    Args:
        spring: Resolved physical constants.
        keyframes: Origin and target (default [0, 1]).
        step_ms: Integration step.
        duration_ms: Integration window.

    Returns:
        Positions at t = 0, step_ms, 2*step_ms, ... up to ``duration_ms``.
    """
    keyframes = keyframes or Keyframes()
    n_steps = int(round(duration_ms / step_ms))
    dt = ms_to_seconds(step_ms)

    positions = np.empty(n_steps + 1, dtype=np.float64)
    x = keyframes.origin
    v = spring.velocity
    positions[0] = x
    for i in range(1, n_steps + 1):
        acceleration = (-spring.stiffness * (x - keyframes.target) - spring.damping * v) / spring.mass
        v += acceleration * dt
        x += v * dt
        positions[i] = x
    return positions
