"""Settling-duration search for springs without an explicit duration."""

from __future__ import annotations

from collections.abc import Callable
import logging

from springease.core.spring.defaults import DURATION_STEP_MS, MAX_DURATION_MS
from springease.core.utils.logging import log_performance

logger = logging.getLogger(__name__)


@log_performance
def estimate_settling_duration(
    is_done: Callable[[float], bool],
    step_ms: float = DURATION_STEP_MS,
    max_duration_ms: float = MAX_DURATION_MS,
) -> float:
    """Step forward in fixed increments until ``is_done`` holds.

    The search is deliberately coarse: the result is the first grid point
    at which the predicate holds, or ``max_duration_ms`` if none does.
    Hitting the ceiling is not an error.

    Args:
        is_done: Predicate over time in ms.
        step_ms: Fixed step between probes.
        max_duration_ms: Hard ceiling; never probed itself.

    Returns:
        Estimated settling time in ms.

    Raises:
        ValueError: If step_ms is not positive.

    Example:
        >>> estimate_settling_duration(lambda t: t >= 120)
        150.0
    """
    if step_ms <= 0:
        raise ValueError("step_ms must be > 0")

    t = 0.0
    while t < max_duration_ms:
        if is_done(t):
            return t
        t += step_ms

    logger.debug("Spring did not settle within %sms", max_duration_ms)
    return float(max_duration_ms)
