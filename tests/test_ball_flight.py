import pytest

import weather_shot_engine as wse

STANDARD_DAY = {"temperature": 70, "humidity": 50, "pressure": 29.92}


def test_compression_neutral_at_70():
    assert wse.calculate_ball_compression(70) == 0.95


def test_compression_stays_within_bounds_at_extremes():
    for temp in (-40, 0, 20, 120, 150):
        value = wse.calculate_ball_compression(temp)
        assert 0.85 <= value <= 1.0


def test_compression_increases_with_temperature():
    temps = [0, 20, 50, 70, 90, 120]
    values = [wse.calculate_ball_compression(t) for t in temps]
    assert values == sorted(values)
    assert wse.calculate_ball_compression(20) == pytest.approx(0.90)
    assert wse.calculate_ball_compression(120) == pytest.approx(1.0)


def test_dew_point_effect_neutral_in_dry_air():
    assert wse.calculate_dew_point_effect(30, 70) == {"spin_factor": 1.0, "carry_factor": 1.0}
    assert wse.calculate_dew_point_effect(float("-inf"), 70) == {"spin_factor": 1.0, "carry_factor": 1.0}


def test_dew_point_effect_saturated_muggy_air():
    effect = wse.calculate_dew_point_effect(70, 70)
    assert effect["spin_factor"] == pytest.approx(0.97)
    assert effect["carry_factor"] == pytest.approx(1.01)


def test_trajectory_shape_driver_flatter_than_seven_iron():
    driver = wse.calculate_trajectory_shape(wse.CLUB_DATA["Driver"])
    seven = wse.calculate_trajectory_shape(wse.CLUB_DATA["7i"])

    assert driver["trajectory_shape"] < 1.0 < seven["trajectory_shape"]
    assert 0.5 <= driver["trajectory_shape"] <= 1.5
    assert driver["flight_time"] == pytest.approx(4.89, abs=0.01)


def test_denser_air_bleeds_spin_faster():
    club = wse.CLUB_DATA["PW"]
    thin = wse.calculate_trajectory_shape(club, 1.0)
    thick = wse.calculate_trajectory_shape(club, 1.3)
    assert thick["spin_decay_rate"] > thin["spin_decay_rate"]


def test_trajectory_shape_requires_club_fields():
    with pytest.raises(wse.InvalidInputError):
        wse.calculate_trajectory_shape({"apex_height": 30, "carry_distance": 150})


def test_ball_flight_adjustments_shape():
    res = wse.calculate_ball_flight_adjustments(STANDARD_DAY, {}, wse.CLUB_DATA["Driver"])

    assert set(res) == {"final_spin", "spin_factor", "carry_factor", "trajectory_data", "total_factor"}
    assert 0 < res["final_spin"] < wse.CLUB_DATA["Driver"]["spin_rate"]
    assert res["total_factor"] == res["carry_factor"]


def test_ball_data_spin_overrides_club_spin():
    stock = wse.calculate_ball_flight_adjustments(STANDARD_DAY, None, wse.CLUB_DATA["Driver"])
    spinny = wse.calculate_ball_flight_adjustments(
        STANDARD_DAY, {"spin_rate": 3500}, wse.CLUB_DATA["Driver"]
    )
    assert spinny["final_spin"] > stock["final_spin"]


def test_flat_trajectory_carries_further_than_high_one():
    driver = wse.calculate_ball_flight_adjustments(STANDARD_DAY, {}, wse.CLUB_DATA["Driver"])
    seven = wse.calculate_ball_flight_adjustments(STANDARD_DAY, {}, wse.CLUB_DATA["7i"])
    assert driver["total_factor"] > 1.0 > seven["total_factor"]


def test_missing_conditions_raise():
    with pytest.raises(wse.InvalidInputError):
        wse.calculate_ball_flight_adjustments({"temperature": 70, "humidity": 50}, {}, wse.CLUB_DATA["7i"])
    with pytest.raises(wse.InvalidInputError):
        wse.calculate_ball_flight_adjustments(None, {}, wse.CLUB_DATA["7i"])


def test_bone_dry_air_is_neutral_through_ball_flight():
    dry = {"temperature": 70, "humidity": 0, "pressure": 29.92}
    res = wse.calculate_ball_flight_adjustments(dry, {}, wse.CLUB_DATA["7i"])

    assert res["spin_factor"] == 1.0
