"""Tests for spring input and resolution models."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from springease.core.spring.models import (
    DampingRegime,
    DurationInput,
    Keyframes,
    PhysicsInput,
    ResolvedSpring,
    SpringOptions,
    TrajectoryState,
    VisualDurationInput,
)


class TestDampingRegime:
    """Tests for regime selection."""

    @pytest.mark.parametrize(
        ("ratio", "expected"),
        [
            (0.0, DampingRegime.UNDERDAMPED),
            (0.999, DampingRegime.UNDERDAMPED),
            (1.0, DampingRegime.CRITICALLY_DAMPED),
            (1.001, DampingRegime.OVERDAMPED),
        ],
    )
    def test_from_ratio(self, ratio: float, expected: DampingRegime) -> None:
        """Ratio below, at and above 1 selects the three regimes."""
        assert DampingRegime.from_ratio(ratio) is expected

    def test_regime_is_string_enum(self) -> None:
        """Regimes serialize as plain strings."""
        assert DampingRegime.OVERDAMPED.value == "overdamped"


class TestResolvedSpring:
    """Tests for ResolvedSpring derived values."""

    def test_damping_ratio(self, underdamped_spring: ResolvedSpring) -> None:
        """100/10/1 has damping ratio 0.5."""
        assert underdamped_spring.damping_ratio == pytest.approx(0.5)
        assert underdamped_spring.regime is DampingRegime.UNDERDAMPED

    def test_critical_ratio_is_exact(self, critically_damped_spring: ResolvedSpring) -> None:
        """100/20/1 is exactly critically damped."""
        assert critically_damped_spring.damping_ratio == 1.0
        assert critically_damped_spring.regime is DampingRegime.CRITICALLY_DAMPED

    def test_undamped_angular_freq(self) -> None:
        """Angular frequency is sqrt(k/m) in rad/s."""
        spring = ResolvedSpring(stiffness=400.0, damping=0.0, mass=4.0)
        assert spring.undamped_angular_freq == pytest.approx(10.0)

    def test_is_frozen(self, underdamped_spring: ResolvedSpring) -> None:
        """Resolved springs are immutable."""
        with pytest.raises(ValidationError):
            underdamped_spring.stiffness = 1.0  # type: ignore[misc]


class TestKeyframes:
    """Tests for Keyframes."""

    def test_from_values_uses_first_and_last(self) -> None:
        """Intermediate keyframes are ignored."""
        keyframes = Keyframes.from_values([0.0, 0.5, 2.0])
        assert keyframes.origin == 0.0
        assert keyframes.target == 2.0
        assert keyframes.delta == 2.0

    def test_from_values_requires_two(self) -> None:
        """A single keyframe is rejected."""
        with pytest.raises(ValueError, match="at least 2"):
            Keyframes.from_values([1.0])


class TestSpringOptions:
    """Tests for SpringOptions classification."""

    def test_physics_family(self) -> None:
        """Any physics key selects PhysicsInput with defaults filled in."""
        spring_input = SpringOptions(mass=2.0).to_input()
        assert isinstance(spring_input, PhysicsInput)
        assert spring_input.mass == 2.0
        assert spring_input.stiffness == 100.0

    def test_duration_family(self) -> None:
        """Duration keys select DurationInput."""
        spring_input = SpringOptions(duration=600).to_input()
        assert isinstance(spring_input, DurationInput)
        assert spring_input.bounce == 0.3

    def test_visual_family_defaults_bounce_to_zero(self) -> None:
        """Visual duration without bounce uses bounce 0."""
        spring_input = SpringOptions(visual_duration=0.5).to_input()
        assert isinstance(spring_input, VisualDurationInput)
        assert spring_input.bounce == 0.0

    def test_velocity_carried_to_every_family(self) -> None:
        """Velocity reaches the selected family."""
        assert SpringOptions(velocity=4.0).to_input().velocity == 4.0
        assert SpringOptions(velocity=4.0, bounce=0.2).to_input().velocity == 4.0

    def test_default_keyframes(self) -> None:
        """Keyframes default to [0, 1]."""
        assert SpringOptions().keyframes == [0.0, 1.0]

    def test_keyframes_need_two_values(self) -> None:
        """Fewer than two keyframes fail validation."""
        with pytest.raises(ValidationError):
            SpringOptions(keyframes=[1.0])

    def test_unknown_keys_rejected(self) -> None:
        """Extra keys fail validation."""
        with pytest.raises(ValidationError):
            SpringOptions.model_validate({"stifness": 100})

    def test_negative_rest_speed_rejected(self) -> None:
        """Thresholds must be non-negative."""
        with pytest.raises(ValidationError):
            SpringOptions(rest_speed=-1.0)

    def test_merged_applies_non_none_overrides(self) -> None:
        """merged ignores None and validates the result."""
        options = SpringOptions(duration=800, bounce=0.3)
        merged = options.merged(bounce=0.5, stiffness=None)
        assert merged.bounce == 0.5
        assert merged.duration == 800
        assert merged.stiffness is None

    def test_merged_without_overrides_returns_self(self) -> None:
        """No overrides returns the same instance."""
        options = SpringOptions(duration=800)
        assert options.merged(bounce=None) is options

    def test_merged_validates(self) -> None:
        """Invalid overrides are rejected."""
        with pytest.raises(ValidationError):
            SpringOptions().merged(keyframes=[0.0])


class TestInputModels:
    """Tests for the input family models."""

    def test_visual_duration_must_be_positive(self) -> None:
        """visual_duration <= 0 fails validation."""
        with pytest.raises(ValidationError):
            VisualDurationInput(visual_duration=0.0)

    def test_family_tags(self) -> None:
        """Each family carries its tag."""
        assert PhysicsInput().family == "physics"
        assert DurationInput().family == "duration"
        assert VisualDurationInput(visual_duration=0.3).family == "visual_duration"


class TestTrajectoryState:
    """Tests for TrajectoryState."""

    def test_is_immutable(self) -> None:
        """State records cannot be mutated."""
        state = TrajectoryState(t=0.0, value=0.0, done=False)
        with pytest.raises(AttributeError):
            state.done = True  # type: ignore[misc]
