import logging
import os

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_TIMEOUT_S = 10.0

HPA_TO_INHG = 0.0295299830714
METERS_TO_FEET = 3.28084


class WeatherConfigError(ValueError):
    """Raised when the weather API is called without an API key."""


class WeatherDataError(ValueError):
    """Raised when the weather API returns a payload we can't read."""


def load_weather_config():
    """Read weather API settings from the environment."""
    return {
        "api_key": os.environ.get("WEATHER_API_KEY", ""),
        "base_url": os.environ.get("WEATHER_API_BASE_URL", DEFAULT_BASE_URL),
        "timeout": float(os.environ.get("WEATHER_API_TIMEOUT", DEFAULT_TIMEOUT_S)),
    }


def _altitude_from_pressure(station_hpa, sea_level_hpa):
    """Barometric formula: station altitude (ft) from station / sea-level pressure."""
    if not station_hpa or not sea_level_hpa:
        return 0.0
    altitude_m = 44330.0 * (1.0 - (station_hpa / sea_level_hpa) ** 0.190284)
    return max(0.0, altitude_m * METERS_TO_FEET)


def parse_weather_payload(payload):
    """
    Map a current-weather response (imperial units) to the engine's
    conditions dict: temperature °F, humidity %, pressure inHg, wind mph /
    degrees, altitude ft.
    """
    try:
        main = payload["main"]
        wind = payload.get("wind", {})
        sea_level = main.get("sea_level", main["pressure"])
        station = main.get("grnd_level", sea_level)

        return {
            "temperature": float(main["temp"]),
            "humidity": float(main["humidity"]),
            "pressure": round(float(station) * HPA_TO_INHG, 2),
            "wind_speed": float(wind.get("speed", 0.0)),
            "wind_direction": float(wind.get("deg", 0.0)) % 360.0,
            "altitude": round(_altitude_from_pressure(float(station), float(sea_level))),
        }
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Unreadable weather payload: %s", e)
        raise WeatherDataError(f"unreadable weather payload: {e}") from e


def fetch_weather_data(location, config=None, session=None):
    """
    Fetch current conditions for a location ("Pebble Beach,US" or similar).

    Failures are logged and re-raised; callers decide what to show.
    """
    config = config or load_weather_config()
    api_key = config.get("api_key")
    if not api_key:
        raise WeatherConfigError("WEATHER_API_KEY is not configured")

    http = session or requests
    url = f"{config.get('base_url', DEFAULT_BASE_URL).rstrip('/')}/weather"
    params = {"q": location, "appid": api_key, "units": "imperial"}

    logger.info("Fetching weather for %s", location)
    try:
        response = http.get(url, params=params, timeout=config.get("timeout", DEFAULT_TIMEOUT_S))
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as e:
        logger.error("Weather fetch failed for %s: %s", location, e)
        raise

    return parse_weather_payload(payload)
