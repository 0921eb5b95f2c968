import pytest

import weather_shot_engine as wse


def test_headwind_costs_distance_tailwind_helps():
    into = wse.calculate_wind_effect(10, 0, 150, 30)
    helping = wse.calculate_wind_effect(10, 180, 150, 30)

    assert into["distance"] == pytest.approx(-0.09)
    assert helping["distance"] == pytest.approx(0.09)
    assert into["lateral"] == 0.0


def test_pure_crosswind_has_no_distance_component():
    effect = wse.calculate_wind_effect(10, 90, 150, 30)

    # cos(90°) is ~6e-17, snapped to exactly zero
    assert effect["distance"] == 0.0
    assert effect["lateral"] == pytest.approx(-0.08)


def test_zero_wind_is_zero_for_any_direction_distance_height():
    for direction in (0, 45, 90, 180, 270, 360):
        for height in (5, 30, 80):
            effect = wse.calculate_wind_effect(0, direction, 200, height)
            assert effect == {"distance": 0.0, "lateral": 0.0}


def test_height_factor_saturates_outside_15_to_45_yards():
    low = wse.calculate_wind_effect(20, 30, 150, 15)
    lower = wse.calculate_wind_effect(20, 30, 150, 5)
    mid = wse.calculate_wind_effect(20, 30, 150, 30)
    high = wse.calculate_wind_effect(20, 30, 150, 45)
    higher = wse.calculate_wind_effect(20, 30, 150, 90)

    assert low == lower
    assert high == higher
    assert abs(low["distance"]) < abs(mid["distance"]) < abs(high["distance"])
    assert abs(low["lateral"]) < abs(mid["lateral"]) < abs(high["lateral"])


def test_results_are_rounded_to_three_decimals():
    effect = wse.calculate_wind_effect(7, 33, 150, 27)
    for value in effect.values():
        assert round(value, 3) == value


@pytest.mark.parametrize(
    "speed, direction",
    [(-1, 0), (10, -5), (10, 361), ("10", 0), (None, 0), (True, 0), (10, float("nan"))],
)
def test_invalid_wind_inputs_raise(speed, direction):
    with pytest.raises(wse.InvalidInputError):
        wse.calculate_wind_effect(speed, direction, 100, 30)


def test_invalid_input_error_is_a_value_error():
    with pytest.raises(ValueError):
        wse.calculate_wind_effect(-1, 0, 100, 30)


def test_effective_wind_speed_at_altitude():
    assert wse.calculate_effective_wind_speed(10, 20000) == pytest.approx(13.0)
    assert wse.calculate_effective_wind_speed(10, 0) == 10.0


def test_effective_wind_speed_clamps_altitude():
    assert wse.calculate_effective_wind_speed(10, 50000) == pytest.approx(13.0)
    assert wse.calculate_effective_wind_speed(10, -500) == 10.0


def test_effective_wind_speed_degrades_instead_of_raising():
    assert wse.calculate_effective_wind_speed("gusty", 1000) == 0.0
    assert wse.calculate_effective_wind_speed(None, 1000) == 0.0
    assert wse.calculate_effective_wind_speed(float("nan"), 0) == 0.0
    assert wse.calculate_effective_wind_speed(10, "high") == 10.0
    assert wse.calculate_effective_wind_speed(10, None) == 10.0
    assert wse.calculate_effective_wind_speed("12", 0) == 12.0


def test_effective_wind_speed_uses_magnitude():
    assert wse.calculate_effective_wind_speed(-10, 0) == 10.0


def test_infinite_wind_is_rejected_by_formula_and_defaulted_by_coercion():
    with pytest.raises(wse.InvalidInputError):
        wse.calculate_wind_effect(float("inf"), 0, 100, 30)

    assert wse.calculate_effective_wind_speed(float("inf"), 0) == 0.0
    assert wse.calculate_effective_wind_speed("inf", 0) == 0.0
    assert wse.calculate_effective_wind_speed(10, float("inf")) == 10.0
