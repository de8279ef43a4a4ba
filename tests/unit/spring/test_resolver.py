"""Tests for spring parameter resolution."""

from __future__ import annotations

import math

import numpy as np
import pytest

from springease.core.spring import resolver
from springease.core.spring.defaults import DEFAULT_SPRING
from springease.core.spring.errors import SpringResolutionError
from springease.core.spring.models import (
    DurationInput,
    Keyframes,
    PhysicsInput,
    SpringOptions,
    VisualDurationInput,
)
from springease.core.spring.resolver import (
    build_envelope_functions,
    find_spring,
    resolve_spring,
    resolve_visual_duration,
)
from springease.core.spring.trajectory import build_position_function


class TestResolvePhysics:
    """Tests for the physics pass-through."""

    def test_passes_constants_through(self) -> None:
        """Physics input is returned unchanged."""
        spring = resolve_spring(PhysicsInput(stiffness=250, damping=12, mass=2, velocity=3))
        assert spring.stiffness == 250
        assert spring.damping == 12
        assert spring.mass == 2
        assert spring.velocity == 3
        assert spring.is_resolved_from_duration is False
        assert spring.duration is None

    def test_physics_keys_take_precedence(self) -> None:
        """Physics keys win over duration keys."""
        spring = resolve_spring(SpringOptions(stiffness=200, duration=800, bounce=0.3))
        assert spring.stiffness == 200
        assert spring.damping == DEFAULT_SPRING.damping
        assert spring.is_resolved_from_duration is False

    def test_empty_options_use_defaults(self) -> None:
        """No keys at all resolves to the default constants."""
        spring = resolve_spring(SpringOptions())
        assert (spring.stiffness, spring.damping, spring.mass) == (100.0, 10.0, 1.0)
        assert spring.is_resolved_from_duration is False

    def test_custom_defaults_passed_by_value(self) -> None:
        """Defaults come from the table passed in."""
        defaults = DEFAULT_SPRING.model_copy(update={"stiffness": 400.0})
        spring = resolve_spring(SpringOptions(), defaults)
        assert spring.stiffness == 400.0
        assert DEFAULT_SPRING.stiffness == 100.0


class TestResolveVisualDuration:
    """Tests for the visual-duration closed form."""

    def test_concrete_constants(self) -> None:
        """visualDuration 0.3 / bounce 0.3 gives the expected constants."""
        spring = resolve_visual_duration(0.3, bounce=0.3)
        root = 2 * math.pi / (0.3 * 1.2)
        assert root == pytest.approx(17.45, abs=0.01)
        assert spring.stiffness == pytest.approx(304.6, abs=0.1)
        assert spring.damping == pytest.approx(24.4, abs=0.05)
        assert spring.mass == DEFAULT_SPRING.mass
        assert spring.is_resolved_from_duration is False

    def test_bounce_clamps_damping_ratio(self) -> None:
        """Damping ratio stays within [0.05, 1]."""
        bouncy = resolve_visual_duration(0.5, bounce=3.0)
        stiff = resolve_visual_duration(0.5, bounce=-2.0)
        assert bouncy.damping_ratio == pytest.approx(0.05)
        assert stiff.damping_ratio == pytest.approx(1.0)

    def test_visual_duration_beats_duration(self) -> None:
        """visual_duration is used even when duration is also given."""
        spring = resolve_spring(SpringOptions(visual_duration=0.3, duration=800, bounce=0.3))
        assert spring.stiffness == pytest.approx(304.6, abs=0.1)
        assert spring.is_resolved_from_duration is False

    def test_camel_case_options(self) -> None:
        """camelCase keys from the JavaScript API are accepted."""
        options = SpringOptions.model_validate({"visualDuration": 0.3, "bounce": 0.3})
        assert isinstance(options.to_input(), VisualDurationInput)
        assert resolve_spring(options).damping == pytest.approx(24.4, abs=0.05)


class TestFindSpring:
    """Tests for the duration-based solve."""

    def test_flags_duration_resolution(self) -> None:
        """Result is marked as resolved from duration."""
        spring = find_spring(duration=800, bounce=0.3)
        assert spring.is_resolved_from_duration is True
        assert spring.duration == 800.0

    def test_damping_ratio_matches_bounce(self) -> None:
        """Damping ratio is 1 - bounce."""
        spring = find_spring(duration=800, bounce=0.3)
        assert spring.damping_ratio == pytest.approx(0.7)

    @pytest.mark.parametrize("bounce", [0.0, 0.3, 0.6])
    def test_trajectory_reaches_target_at_duration(self, bounce: float) -> None:
        """At the requested duration the spring is within the safe margin of rest."""
        spring = find_spring(duration=800, bounce=bounce)
        position = build_position_function(spring, Keyframes())
        assert position(800.0) == pytest.approx(1.0, abs=0.01)

    def test_zero_bounce_is_critically_damped(self) -> None:
        """Bounce 0 clamps to damping ratio 1."""
        spring = find_spring(duration=500, bounce=0.0)
        assert spring.damping_ratio == pytest.approx(1.0)

    def test_duration_clamped_to_bounds(self) -> None:
        """Duration is clamped to [10, 10000] ms."""
        assert find_spring(duration=5, bounce=0.3).duration == pytest.approx(10.0)
        assert find_spring(duration=20_000, bounce=0.3).duration == pytest.approx(10_000.0)

    def test_mass_scales_stiffness(self) -> None:
        """Stiffness scales with mass so the frequency is unchanged."""
        light = find_spring(duration=800, bounce=0.3, mass=1.0)
        heavy = find_spring(duration=800, bounce=0.3, mass=4.0)
        assert heavy.stiffness == pytest.approx(4 * light.stiffness)
        assert heavy.undamped_angular_freq == pytest.approx(light.undamped_angular_freq)

    def test_velocity_scaled_to_per_ms_in_solve(self) -> None:
        """Initial velocity enters the solve divided by 1000, barely moving the root."""
        still = find_spring(duration=800, bounce=0.3)
        moving = find_spring(duration=800, bounce=0.3, velocity=10.0)
        assert still.stiffness == pytest.approx(151.279, abs=0.01)
        assert moving.stiffness == pytest.approx(151.33, abs=0.01)
        assert moving.velocity == 10.0

    def test_nan_root_falls_back_to_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A NaN root yields default constants and keeps the duration."""
        monkeypatch.setattr(resolver, "approximate_root", lambda *args, **kwargs: float("nan"))
        spring = find_spring(duration=1200, bounce=0.3)
        assert spring.stiffness == DEFAULT_SPRING.stiffness
        assert spring.damping == DEFAULT_SPRING.damping
        assert spring.duration == pytest.approx(1200.0)
        assert spring.is_resolved_from_duration is True

    def test_bounce_only_uses_default_duration(self) -> None:
        """Bounce without duration uses the default 800ms."""
        options = SpringOptions(bounce=0.5)
        assert isinstance(options.to_input(), DurationInput)
        assert resolve_spring(options).duration == pytest.approx(800.0)


class TestEnvelopeFunctions:
    """Tests for the envelope/derivative pairs."""

    def test_oscillatory_derivative_uses_negative_factor_near_rest(self) -> None:
        """With zero velocity the sign factor is -1 and the slope is positive."""
        duration, ratio, freq = 0.8, 0.7, 6.25
        _, derivative = build_envelope_functions(duration, ratio, velocity=0.0)

        delta = freq * ratio * duration
        e = ratio**2 * freq**2 * duration
        g = freq**2 * np.sqrt(1 - ratio**2)
        raw = ((0.0 - e) * np.exp(-delta)) / g

        assert derivative(freq) == pytest.approx(-raw)
        assert derivative(freq) > 0

    def test_oscillatory_derivative_uses_positive_factor_for_fast_start(self) -> None:
        """When velocity dominates the envelope sign flips and the factor is 1."""
        duration, ratio, freq, velocity = 0.8, 0.7, 6.25, 100.0
        envelope, derivative = build_envelope_functions(duration, ratio, velocity=velocity)
        assert envelope(freq) > 0.001

        delta = freq * ratio * duration
        d = delta * velocity + velocity
        e = ratio**2 * freq**2 * duration
        g = freq**2 * np.sqrt(1 - ratio**2)
        raw = ((d - e) * np.exp(-delta)) / g

        assert derivative(freq) == pytest.approx(raw)

    def test_critical_pair_root_is_safe_margin(self) -> None:
        """At the solved frequency the critical envelope is ~0."""
        envelope, derivative = build_envelope_functions(0.8, 1.0)
        freq = resolver.approximate_root(envelope, derivative, 5 / 0.8)
        assert envelope(freq) == pytest.approx(0.0, abs=1e-9)

    def test_critical_derivative_is_negative_for_positive_freq(self) -> None:
        """The critical envelope decreases with frequency."""
        _, derivative = build_envelope_functions(0.8, 1.0)
        assert derivative(5.0) < 0


class TestResolutionErrors:
    """Tests for degenerate constants."""

    @pytest.mark.parametrize(
        ("stiffness", "damping", "mass"),
        [
            (0.0, 10.0, 1.0),
            (-5.0, 10.0, 1.0),
            (100.0, -1.0, 1.0),
            (100.0, 10.0, 0.0),
            (float("nan"), 10.0, 1.0),
            (float("inf"), 10.0, 1.0),
        ],
    )
    def test_degenerate_physics_raises(self, stiffness: float, damping: float, mass: float) -> None:
        """Unusable constants raise SpringResolutionError."""
        with pytest.raises(SpringResolutionError):
            resolve_spring(PhysicsInput(stiffness=stiffness, damping=damping, mass=mass))

    def test_error_is_value_error(self) -> None:
        """SpringResolutionError is a ValueError carrying the constants."""
        with pytest.raises(ValueError, match="Stiffness must be > 0") as exc_info:
            resolve_spring(PhysicsInput(stiffness=0.0))
        assert exc_info.value.stiffness == 0.0

    def test_unknown_input_type_raises(self) -> None:
        """Unsupported spec types raise TypeError."""
        with pytest.raises(TypeError):
            resolve_spring({"stiffness": 100})  # type: ignore[arg-type]
