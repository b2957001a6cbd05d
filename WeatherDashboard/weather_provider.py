"""Provider abstractions - allow swapping weather APIs and history sources."""
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Optional
from weather_data import CurrentConditions, HistoryPoint


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, place: str) -> CurrentConditions:
        """
        Fetch current conditions for a place.

        Args:
            place: Free-text place name, resolved by the provider

        Returns:
            CurrentConditions: Current weather information

        Raises:
            WeatherFetchError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def get_forecast_raw(self, place: str) -> Dict[str, Any]:
        """
        Fetch the raw 5-day/3-hour forecast payload for a place.

        Raises:
            WeatherFetchError: If the provider fails to fetch data
        """
        pass


class HistoryProviderBase(ABC):
    """Abstract base class for trailing-week history sources."""

    @abstractmethod
    def get_history(self, current_temp: float, today: Optional[date] = None) -> List[HistoryPoint]:
        """
        Return the trailing week, oldest first, ending with today.

        Args:
            current_temp: Current temperature the series is anchored to
            today: Last day of the series (defaults to the local date)
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass


class WeatherFetchError(WeatherProviderError):
    """A request to the weather API did not produce a usable response."""
    pass


class PlaceNotFoundError(WeatherFetchError):
    """The API could not resolve the place name (HTTP 404)."""
    pass


class InvalidCredentialsError(WeatherFetchError):
    """The API rejected the access credential (HTTP 401)."""
    pass


class FetchFailedError(WeatherFetchError):
    """Any other HTTP failure or a transport error."""
    pass


class MalformedPayloadError(WeatherProviderError):
    """The response did not have the expected shape."""
    pass


class MalformedForecastError(MalformedPayloadError):
    """The forecast payload is empty or lacks per-sample fields."""
    pass
