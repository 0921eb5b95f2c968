import logging
import math

logger = logging.getLogger(__name__)

# ============================================================
# Constants & Baselines
# ============================================================

# ---- Wind model ---- #
HEADWIND_DISTANCE_COEF = 0.009   # fraction of carry lost per mph of headwind
CROSSWIND_LATERAL_COEF = 0.008   # fraction of carry pushed offline per mph
REFERENCE_SHOT_HEIGHT = 30.0     # yards; height factor == 1.0 here
HEIGHT_FACTOR_MIN = 0.5
HEIGHT_FACTOR_MAX = 1.5
ZERO_SNAP = 1e-10

MAX_WIND_DIRECTION = 360.0
MAX_ALTITUDE_FT = 20000.0
ALTITUDE_WIND_SCALE_FT = 66667.0  # +1.5% effective wind per 1000 ft

# ---- Atmosphere ---- #
INHG_TO_KPA = 3.38639
R_DRY_AIR_KJ = 0.287042          # kJ/(kg·K)
STANDARD_AIR_DENSITY = 1.225     # kg/m^3 at 59°F, 29.92 inHg

# Magnus formula constants (°C)
MAGNUS_A = 17.27
MAGNUS_B = 237.7

# ---- Ball ---- #
BASELINE_COMPRESSION = 0.95
COMPRESSION_NEUTRAL_TEMP_F = 70.0
COMPRESSION_MIN = 0.85
COMPRESSION_MAX = 1.0

GRAVITY_FT_S2 = 32.174
BASE_SPIN_DECAY = 0.04           # per second, standard air, neutral shape

# Club data at ~100 mph driver speed
# club, ball_speed, spin_rate, launch_angle, apex_height (yds), landing_angle, carry
CLUB_DATA_BASE = [
    ("Driver", 148, 2500, 13.0, 32, 38, 233),
    ("3W",     140, 3300, 14.5, 31, 41, 216),
    ("3H",     135, 3900, 16.0, 30, 44, 202),
    ("4i",     128, 4600, 14.5, 28, 45, 182),
    ("5i",     122, 5000, 15.5, 29, 47, 172),
    ("6i",     116, 5400, 17.0, 29, 48, 162),
    ("7i",     110, 6200, 18.5, 30, 50, 151),
    ("8i",     104, 7000, 20.5, 30, 50, 139),
    ("9i",      98, 7800, 23.0, 29, 51, 127),
    ("PW",      92, 8500, 28.0, 28, 52, 118),
    ("GW",      86, 9000, 30.0, 26, 52, 104),
    ("SW",      81, 9500, 32.0, 24, 52,  89),
    ("LW",      75, 10500, 34.0, 22, 53, 75),
]

CLUB_DATA = {
    club: {
        "ball_speed": float(bs),
        "spin_rate": float(spin),
        "launch_angle": float(launch),
        "apex_height": float(apex),
        "landing_angle": float(landing),
        "carry_distance": float(carry),
    }
    for club, bs, spin, launch, apex, landing, carry in CLUB_DATA_BASE
}


class InvalidInputError(ValueError):
    """Raised when a formula receives a missing, non-numeric or out-of-range value."""


# ============================================================
# Utility functions
# ============================================================

def _clamp(value, low, high):
    return max(low, min(high, value))


def _is_number(value) -> bool:
    # bool is an int subclass but never a valid measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _require_number(value, name):
    if not _is_number(value):
        logger.debug("Rejected %s=%r: not a number", name, value)
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    return float(value)


def _number_or_default(value, default=0.0):
    """
    Explicit default-substitution policy for lenient inputs.

    Real numbers pass through, strings that parse as a float are parsed,
    everything else (None, NaN, inf, junk text) becomes ``default``.
    """
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return default
        return parsed if math.isfinite(parsed) else default
    return default


def _snap(value: float, digits: int) -> float:
    if abs(value) < ZERO_SNAP:
        return 0.0
    return round(value, digits)


# ============================================================
# Wind
# ============================================================

def calculate_wind_effect(wind_speed, wind_direction, shot_distance, shot_height):
    """
    Split the wind into headwind / crosswind and scale by shot height.

    wind_direction is measured from the target line: 0° blows straight into
    the player's face, 90° blows from the left. Returned deltas are fractions
    of the nominal shot (negative distance = shot comes up short, negative
    lateral = pushed left).

    High shots sit in the wind longer, so the effect grows with shot_height
    until the height factor saturates at 1.5 (45+ yards); very low shots
    bottom out at 0.5 (15 yards or less).
    """
    speed = _require_number(wind_speed, "wind_speed")
    direction = _require_number(wind_direction, "wind_direction")
    _require_number(shot_distance, "shot_distance")
    height = _require_number(shot_height, "shot_height")

    if speed < 0:
        raise InvalidInputError(f"wind_speed must be >= 0, got {speed}")
    if not 0.0 <= direction <= MAX_WIND_DIRECTION:
        raise InvalidInputError(
            f"wind_direction must be within [0, 360], got {direction}"
        )

    theta = math.radians(direction)
    headwind = speed * math.cos(theta)
    crosswind = speed * math.sin(theta)

    height_factor = _clamp(
        height / REFERENCE_SHOT_HEIGHT, HEIGHT_FACTOR_MIN, HEIGHT_FACTOR_MAX
    )

    distance_delta = -headwind * HEADWIND_DISTANCE_COEF * height_factor
    lateral_delta = -crosswind * CROSSWIND_LATERAL_COEF * height_factor

    return {
        "distance": _snap(distance_delta, 3),
        "lateral": _snap(lateral_delta, 3),
    }


def calculate_effective_wind_speed(wind_speed, altitude=0.0):
    """Wind speed felt by the ball, boosted by thinner air at altitude. Never raises."""
    speed = _number_or_default(wind_speed, 0.0)
    alt = _clamp(_number_or_default(altitude, 0.0), 0.0, MAX_ALTITUDE_FT)

    altitude_factor = 1.0 + alt / ALTITUDE_WIND_SCALE_FT
    return round(abs(speed) * altitude_factor, 2)


# ============================================================
# Atmosphere
# ============================================================

def calculate_air_density(temperature_f, pressure_inhg):
    """
    Dry-air density (kg/m^3) from temperature (°F) and station pressure (inHg).

    59°F / 29.92 inHg gives the standard 1.225.
    """
    temp = _require_number(temperature_f, "temperature")
    pressure = _require_number(pressure_inhg, "pressure")

    temp_k = (temp + 459.67) * 5.0 / 9.0
    if temp_k <= 0:
        raise InvalidInputError(f"temperature below absolute zero: {temp}")

    density = pressure * INHG_TO_KPA / (temp_k * R_DRY_AIR_KJ)
    return round(density, 3)


def calculate_dew_point(temperature_f, humidity):
    """
    Magnus approximation of the dew point.

    The Magnus expression is applied to the temperature as given, so the
    result is on the same scale as the input and equals it at 100%.
    """
    temp = _require_number(temperature_f, "temperature")
    rh = _require_number(humidity, "humidity")
    if not 0.0 <= rh <= 100.0:
        raise InvalidInputError(f"humidity must be within [0, 100], got {rh}")

    # Bone-dry air never saturates
    if rh == 0.0:
        return -math.inf

    if MAGNUS_B + temp == 0:
        raise InvalidInputError(f"temperature {temp} is a pole of the Magnus formula")
    alpha = (MAGNUS_A * temp) / (MAGNUS_B + temp) + math.log(rh / 100.0)
    if MAGNUS_A - alpha == 0:
        raise InvalidInputError(f"no dew point for temperature={temp}, humidity={rh}")

    return round((MAGNUS_B * alpha) / (MAGNUS_A - alpha), 2)


# ============================================================
# Ball flight
# ============================================================

def calculate_dew_point_effect(dew_point_f, temperature_f):
    """
    Spin / carry multipliers from moisture in the air.

    Moist air is slightly less dense (a touch more carry), but a damp cover
    grabs the grooves less (a touch less spin). Both effects scale with how
    much moisture there is (dew point) and spin loss grows as the air nears
    saturation (small temperature / dew-point spread).
    """
    temp = _require_number(temperature_f, "temperature")
    # Bone-dry air: no moisture at all
    if dew_point_f == -math.inf:
        return {"spin_factor": 1.0, "carry_factor": 1.0}
    dew = _require_number(dew_point_f, "dew_point")

    moisture = _clamp((dew - 40.0) / 30.0, 0.0, 1.0)
    saturation = _clamp(1.0 - (temp - dew) / 30.0, 0.0, 1.0)

    spin_factor = 1.0 - 0.03 * moisture * (0.5 + 0.5 * saturation)
    carry_factor = 1.0 + 0.01 * moisture

    return {
        "spin_factor": round(spin_factor, 4),
        "carry_factor": round(carry_factor, 4),
    }


def _club_value(club_data, key):
    if club_data is None or key not in club_data:
        raise InvalidInputError(f"club data is missing '{key}'")
    return _require_number(club_data[key], key)


def calculate_trajectory_shape(club_data, air_density=STANDARD_AIR_DENSITY):
    """
    Normalized descriptor of a club's arc plus its spin decay rate.

    trajectory_shape ~ 1.0 is a stock mid-height flight; < 1 is flatter and
    more penetrating, > 1 is higher and steeper. Denser air bleeds spin
    faster, as does a taller arc.
    """
    apex = _club_value(club_data, "apex_height")
    carry = _club_value(club_data, "carry_distance")
    landing = _club_value(club_data, "landing_angle")
    density = _require_number(air_density, "air_density")
    if carry <= 0:
        raise InvalidInputError(f"carry_distance must be > 0, got {carry}")

    height_ratio = _clamp(apex / (0.15 * carry), 0.5, 1.5)
    steepness = 0.5 + 0.5 * landing / 45.0
    shape = _clamp(height_ratio * steepness, 0.5, 1.5)

    spin_decay_rate = BASE_SPIN_DECAY * (density / STANDARD_AIR_DENSITY) * shape

    # Drag-free hang time from the apex: up and back down
    apex_ft = max(apex, 0.0) * 3.0
    flight_time = 2.0 * math.sqrt(2.0 * apex_ft / GRAVITY_FT_S2)

    return {
        "trajectory_shape": shape,
        "spin_decay_rate": spin_decay_rate,
        "flight_time": flight_time,
        "apex_height": apex,
        "carry_distance": carry,
    }


def calculate_ball_flight_adjustments(conditions, ball_data, club_data):
    """
    Combine dew-point and trajectory-shape effects for one shot.

    Returns:
      final_spin:      spin (rpm) left at landing
      spin_factor:     moisture spin multiplier
      carry_factor:    moisture carry * trajectory-shape multiplier
      trajectory_data: output of calculate_trajectory_shape
      total_factor:    same as carry_factor; multiply nominal carry by it
    """
    if conditions is None:
        raise InvalidInputError("conditions are required")
    for key in ("temperature", "humidity", "pressure"):
        if key not in conditions:
            raise InvalidInputError(f"conditions are missing '{key}'")

    temp = conditions["temperature"]
    dew_point = calculate_dew_point(temp, conditions["humidity"])
    dew_effect = calculate_dew_point_effect(dew_point, temp)

    air_density = calculate_air_density(temp, conditions["pressure"])
    trajectory = calculate_trajectory_shape(club_data, air_density)

    ball_data = ball_data or {}
    initial_spin = ball_data.get("spin_rate", club_data.get("spin_rate"))
    initial_spin = _require_number(initial_spin, "spin_rate")

    final_spin = initial_spin * math.exp(
        -trajectory["spin_decay_rate"] * trajectory["flight_time"]
    )
    trajectory_factor = 1.0 + (1.0 - trajectory["trajectory_shape"]) * 0.05
    carry_factor = dew_effect["carry_factor"] * trajectory_factor

    return {
        "final_spin": final_spin,
        "spin_factor": dew_effect["spin_factor"],
        "carry_factor": carry_factor,
        "trajectory_data": trajectory,
        "total_factor": carry_factor,
    }


def calculate_ball_compression(temperature_f):
    """
    Effective ball compression vs temperature.

    Non-linear: a few degrees off 70°F barely matters, extremes matter more.
    """
    temp = _require_number(temperature_f, "temperature")
    delta = temp - COMPRESSION_NEUTRAL_TEMP_F

    if delta == 0:
        return BASELINE_COMPRESSION

    temp_effect = math.copysign(1.0, delta) * (abs(delta) / 50.0) ** 1.2 * 0.05
    return _clamp(BASELINE_COMPRESSION + temp_effect, COMPRESSION_MIN, COMPRESSION_MAX)


# ============================================================
# Plays-like (all factors for one club)
# ============================================================

def calculate_shot_adjustment(conditions, club_name, shot_height=None):
    """
    Shared plays-like calculator for a single club.

    Steps:
      1) Effective wind speed at altitude.
      2) Wind effect at the club's apex (or an explicit shot_height).
      3) Ball-flight adjustment (dew point + trajectory shape).
      4) Adjusted carry = nominal * total_factor * (1 + wind distance delta).

    NOTE:
      - Wind deltas are fractions of the nominal carry, so lateral_yards is
        nominal carry * lateral delta.
    """
    club = CLUB_DATA.get(club_name)
    if club is None:
        raise InvalidInputError(f"unknown club: {club_name!r}")
    if conditions is None:
        raise InvalidInputError("conditions are required")

    nominal = club["carry_distance"]
    height = club["apex_height"] if shot_height is None else shot_height

    effective_wind = calculate_effective_wind_speed(
        conditions.get("wind_speed"), conditions.get("altitude")
    )
    wind = calculate_wind_effect(
        effective_wind,
        conditions.get("wind_direction"),
        nominal,
        height,
    )
    flight = calculate_ball_flight_adjustments(conditions, {"spin_rate": club["spin_rate"]}, club)

    adjusted_carry = nominal * flight["total_factor"] * (1.0 + wind["distance"])
    lateral_yards = nominal * wind["lateral"]

    return {
        "club": club_name,
        "nominal_carry": nominal,
        "adjusted_carry": adjusted_carry,
        "lateral_yards": lateral_yards,
        "effective_wind_speed": effective_wind,
        "air_density": calculate_air_density(conditions["temperature"], conditions["pressure"]),
        "dew_point": calculate_dew_point(conditions["temperature"], conditions["humidity"]),
        "compression": calculate_ball_compression(conditions["temperature"]),
        "wind_effect": wind,
        "flight": flight,
    }
