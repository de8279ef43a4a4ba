"""Shared utilities for springease."""

from springease.core.utils.formatting import format_decimal
from springease.core.utils.math import clamp, lerp, ms_to_seconds, seconds_to_ms

__all__ = [
    "clamp",
    "format_decimal",
    "lerp",
    "ms_to_seconds",
    "seconds_to_ms",
]
