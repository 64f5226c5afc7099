"""Tests for clamped scales and entity interpolation."""

import math

import pytest

from bar_race.chart.interpolation import ClampedLinearScale, EntityInterpolator, interpolate


def make_interpolator(seconds, values) -> EntityInterpolator:
    return EntityInterpolator("x", seconds, {"value": values}, "value")


def test_scale_maps_and_clamps():
    """The linear scale maps the domain and clamps outside it."""
    scale = ClampedLinearScale((0.0, 10.0), (100.0, 200.0))

    assert scale(5.0) == 150.0
    assert scale(-1.0) == 100.0
    assert scale(11.0) == 200.0
    assert scale.invert(175.0) == 7.5
    assert scale.invert(500.0) == 10.0


def test_scale_with_degenerate_domain_returns_range_middle():
    """A single-point domain maps to the middle of the range."""
    scale = ClampedLinearScale((3.0, 3.0), (0.0, 10.0))

    assert scale(3.0) == 5.0
    assert scale(100.0) == 5.0


def test_interpolate_rejects_nan_endpoints():
    """Interpolation with a NaN endpoint gives NaN."""
    assert interpolate(1.0, 3.0, 0.5) == 2.0
    assert math.isnan(interpolate(math.nan, 3.0, 0.0))
    assert math.isnan(interpolate(1.0, math.nan, 0.0))


def test_before_and_after_observations_clamp_to_boundary_values():
    """Queries outside the observations return the first or last value."""
    interpolator = make_interpolator([2.0, 4.0], [10.0, 20.0])

    assert interpolator(0.0) == 10.0
    assert interpolator(3.0) == 15.0
    assert interpolator(9.0) == 20.0


def test_nan_boundary_stays_nan_when_clamped():
    """A NaN first or last observation stays NaN when clamped."""
    interpolator = make_interpolator([2.0, 4.0], [math.nan, 20.0])

    assert math.isnan(interpolator(0.0))
    assert math.isnan(interpolator(3.0))
    assert interpolator(4.0) == 20.0


def test_segment_touching_nan_is_nan_but_observation_itself_is_not():
    """Only the inside of a segment with a NaN endpoint is NaN."""
    interpolator = make_interpolator([0.0, 1.0, 2.0], [5.0, 7.0, math.nan])

    assert interpolator(1.0) == 7.0
    assert math.isnan(interpolator(1.5))
    assert interpolator(0.5) == 6.0


def test_single_observation_is_constant():
    """One observation gives a constant value."""
    interpolator = make_interpolator([1.0], [42.0])

    assert interpolator(-5.0) == 42.0
    assert interpolator(5.0) == 42.0


def test_values_at_samples_every_field():
    """values_at samples every configured value field."""
    interpolator = EntityInterpolator(
        "x",
        [0.0, 2.0],
        {"value": [0.0, 10.0], "other": [100.0, 300.0]},
        "value",
    )

    assert interpolator.values_at(1.0) == {"value": 5.0, "other": 200.0}


def test_entity_needs_observations():
    """An interpolator needs at least one observation."""
    with pytest.raises(ValueError, match="no observations"):
        make_interpolator([], [])
