"""Curve utilities and models."""

from springease.core.curves.generator import generate_linear_easing
from springease.core.curves.models import CurvePoint, LinearEasing
from springease.core.curves.sampling import interpolate_linear, sample_inclusive_grid

__all__ = [
    "CurvePoint",
    "LinearEasing",
    "generate_linear_easing",
    "interpolate_linear",
    "sample_inclusive_grid",
]
