"""OpenWeather Current Weather and 5-day Forecast API provider implementation."""
import logging
import requests
from typing import Any, Dict, Optional
from weather_provider import (
    WeatherProviderBase,
    PlaceNotFoundError,
    InvalidCredentialsError,
    FetchFailedError,
    MalformedPayloadError,
)
from weather_data import CurrentConditions, WeatherCondition

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"

# Dashboard-facing messages per endpoint: (not found, bad credentials, anything else)
CURRENT_MESSAGES = (
    "City not found. Please check the spelling and try again.",
    "Invalid API key. Please check your OpenWeatherMap credentials.",
    "Failed to fetch weather data. Please try again.",
)
FORECAST_MESSAGES = (
    "Forecast data not found for this city.",
    "Invalid API key for forecast data. Please check your credentials.",
    "Failed to fetch forecast data.",
)


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using the free OpenWeather 2.5 endpoints.

    Current Weather: https://openweathermap.org/current
    5 day / 3 hour forecast: https://openweathermap.org/forecast5

    Units are fixed to metric. No retries are attempted. With the default
    ``timeout=None`` a hung request blocks until the server gives up.
    """

    UNITS = "metric"

    def __init__(
        self,
        api_key: str,
        lang: str = "en",
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            lang: Language code for descriptions (e.g., "en", "de")
            base_url: API root, without trailing slash
            timeout: HTTP request timeout in seconds (None blocks indefinitely)
        """
        self.api_key = api_key
        self.lang = lang
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def get_current(self, place: str) -> CurrentConditions:
        """
        Fetch current conditions from the Current Weather API.

        Returns:
            CurrentConditions: Current weather information

        Raises:
            WeatherFetchError: If the API request fails
            MalformedPayloadError: If the response lacks 'main' or 'weather'
        """
        data = self._get_json("weather", place, CURRENT_MESSAGES)

        weather_array = data.get("weather") or []
        if not weather_array:
            logging.error("Response missing 'weather' array")
            raise MalformedPayloadError("Response missing 'weather' array")
        weather = weather_array[0]

        main_data = data.get("main") or {}
        if not main_data:
            logging.error("Response missing 'main' block")
            raise MalformedPayloadError("Response missing 'main' block")

        wind_data = data.get("wind") or {}

        try:
            current = CurrentConditions(
                name=data.get("name", place),
                country=(data.get("sys") or {}).get("country", ""),
                temp=float(main_data["temp"]),
                feels_like=float(main_data.get("feels_like", main_data["temp"])),
                humidity=main_data.get("humidity", 0),
                wind_speed=wind_data.get("speed", 0.0),
                condition=WeatherCondition(
                    description=weather.get("description", ""),
                    icon=weather.get("icon", ""),
                    main=weather.get("main", ""),
                ),
                visibility=data.get("visibility"),
                pressure=main_data.get("pressure"),
                timestamp=data.get("dt", 0),
                timezone_offset=data.get("timezone", 0),
            )
        except (KeyError, ValueError, TypeError) as e:
            logging.error(f"Failed to parse current weather: {e}", exc_info=True)
            raise MalformedPayloadError(f"Failed to parse response: {str(e)}")

        logging.info(f"Parsed current weather for {current.name}: {current.temp}°C, {current.condition.description}")
        return current

    def get_forecast_raw(self, place: str) -> Dict[str, Any]:
        """
        Fetch the raw 5-day/3-hour forecast payload.

        The payload is returned untouched; see forecast_normalizer for shaping.
        """
        data = self._get_json("forecast", place, FORECAST_MESSAGES)
        logging.info(f"Forecast samples received for {place}: {len(data.get('list') or [])}")
        return data

    def _get_json(self, endpoint: str, place: str, messages) -> Dict[str, Any]:
        url = f"{self.base_url}/{endpoint}"
        params = {
            "q": place,
            "appid": self.api_key,
            "units": self.UNITS,
            "lang": self.lang,
        }
        not_found, bad_credentials, failed = messages

        try:
            logging.info(f"Making OpenWeather API request: {url}")
            logging.debug(f"Request parameters: q={place}, units={self.UNITS}, lang={self.lang}")
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise FetchFailedError(failed) from e

        logging.info(f"API response status: {response.status_code}")

        if not response.ok:
            logging.error(f"API request to {endpoint} failed with status {response.status_code}")
            if response.status_code == 404:
                raise PlaceNotFoundError(not_found)
            if response.status_code == 401:
                raise InvalidCredentialsError(bad_credentials)
            raise FetchFailedError(failed)

        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Non-JSON response from {endpoint}: {e}")
            raise FetchFailedError(failed) from e

        if not isinstance(data, dict):
            logging.error(f"Unexpected JSON document from {endpoint}: {type(data).__name__}")
            raise MalformedPayloadError(f"Unexpected response from {endpoint}")

        logging.debug(f"API response (truncated): {str(data)[:500]}...")
        return data
