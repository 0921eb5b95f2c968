import pytest

import weather_shot_engine as wse


def _conditions(**overrides):
    base = {
        "temperature": 70,
        "humidity": 50,
        "pressure": 29.92,
        "wind_speed": 0,
        "wind_direction": 0,
        "altitude": 0,
    }
    base.update(overrides)
    return base


def test_calm_day_only_applies_flight_factor():
    res = wse.calculate_shot_adjustment(_conditions(), "7i")

    assert res["wind_effect"] == {"distance": 0.0, "lateral": 0.0}
    assert res["lateral_yards"] == 0.0
    assert res["adjusted_carry"] == pytest.approx(
        res["nominal_carry"] * res["flight"]["total_factor"]
    )


def test_into_wind_plays_shorter_than_downwind():
    into = wse.calculate_shot_adjustment(_conditions(wind_speed=15, wind_direction=0), "7i")
    calm = wse.calculate_shot_adjustment(_conditions(), "7i")
    down = wse.calculate_shot_adjustment(_conditions(wind_speed=15, wind_direction=180), "7i")

    assert into["adjusted_carry"] < calm["adjusted_carry"] < down["adjusted_carry"]


def test_wind_from_left_pushes_ball_left():
    res = wse.calculate_shot_adjustment(_conditions(wind_speed=10, wind_direction=90), "6i")
    assert res["lateral_yards"] < 0


def test_altitude_strengthens_the_wind():
    sea = wse.calculate_shot_adjustment(_conditions(wind_speed=15), "7i")
    mile_high = wse.calculate_shot_adjustment(_conditions(wind_speed=15, altitude=5280), "7i")

    assert mile_high["effective_wind_speed"] > sea["effective_wind_speed"]
    assert mile_high["adjusted_carry"] < sea["adjusted_carry"]


def test_explicit_shot_height_overrides_club_apex():
    low = wse.calculate_shot_adjustment(_conditions(wind_speed=20), "7i", shot_height=10)
    high = wse.calculate_shot_adjustment(_conditions(wind_speed=20), "7i", shot_height=50)
    assert low["adjusted_carry"] > high["adjusted_carry"]


def test_unknown_club_raises():
    with pytest.raises(wse.InvalidInputError):
        wse.calculate_shot_adjustment(_conditions(), "1i")


def test_every_club_in_bag_adjusts_to_a_sane_carry():
    for club, data in wse.CLUB_DATA.items():
        res = wse.calculate_shot_adjustment(_conditions(wind_speed=10, wind_direction=45), club)
        assert 0.8 * data["carry_distance"] < res["adjusted_carry"] < 1.1 * data["carry_distance"]
