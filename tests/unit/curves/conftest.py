"""Shared pytest fixtures for curve tests."""

from __future__ import annotations

import pytest

from springease.core.curves.models import CurvePoint


@pytest.fixture
def ramp_up_points() -> list[CurvePoint]:
    """Create ascending ramp points."""
    return [
        CurvePoint(t=0.0, v=0.0),
        CurvePoint(t=1.0, v=1.0),
    ]


@pytest.fixture
def ramp_down_points() -> list[CurvePoint]:
    """Create descending ramp points."""
    return [
        CurvePoint(t=0.0, v=1.0),
        CurvePoint(t=1.0, v=0.0),
    ]


@pytest.fixture
def overshoot_points() -> list[CurvePoint]:
    """Spring-like samples that pass the target and come back."""
    return [
        CurvePoint(t=0.0, v=0.0),
        CurvePoint(t=0.25, v=0.8),
        CurvePoint(t=0.5, v=1.12),
        CurvePoint(t=0.75, v=0.97),
        CurvePoint(t=1.0, v=1.0),
    ]
