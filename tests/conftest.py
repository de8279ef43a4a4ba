"""Shared pytest fixtures for springease tests."""

from __future__ import annotations

from collections.abc import Iterator
import logging
from pathlib import Path

import pytest

from springease.core.config import loader
from springease.core.spring.models import Keyframes, ResolvedSpring

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def reset_app_config_cache() -> None:
    """Drop the cached default app config between tests."""
    loader._app_config_cache = None


# ============================================================================
# Spring Fixtures
# ============================================================================


@pytest.fixture
def unit_keyframes() -> Keyframes:
    """Keyframes for a normalized 0 -> 1 easing."""
    return Keyframes(origin=0.0, target=1.0)


@pytest.fixture
def underdamped_spring() -> ResolvedSpring:
    """Default physics spring: damping ratio 0.5."""
    return ResolvedSpring(stiffness=100.0, damping=10.0, mass=1.0)


@pytest.fixture
def critically_damped_spring() -> ResolvedSpring:
    """Spring with damping ratio exactly 1."""
    return ResolvedSpring(stiffness=100.0, damping=20.0, mass=1.0)


@pytest.fixture
def overdamped_spring() -> ResolvedSpring:
    """Spring with damping ratio 2."""
    return ResolvedSpring(stiffness=100.0, damping=40.0, mass=1.0)


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Undo configure_logging calls made by a test."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(logging.WARNING)
