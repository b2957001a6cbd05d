"""Weather domain model - pure data structures independent of any API."""
import math
from dataclasses import dataclass
from typing import Optional


def round_half_up(value: float) -> int:
    """Round to the nearest whole number, halves toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class WeatherCondition:
    """Primary weather condition reported for a sample."""
    description: str  # e.g., "broken clouds", "light rain"
    icon: str  # OpenWeather icon code, e.g., "01d"
    main: str = ""  # e.g., "Clouds", "Rain", "Clear"


@dataclass(frozen=True)
class CurrentConditions:
    """Current weather for a resolved place, replaced wholesale on every fetch."""
    name: str
    country: str
    temp: float
    feels_like: float
    humidity: float
    wind_speed: float
    condition: WeatherCondition
    visibility: Optional[int] = None  # metres

    pressure: Optional[float] = None
    timestamp: int = 0  # UNIX timestamp (UTC)
    timezone_offset: int = 0  # Offset from UTC in seconds


@dataclass(frozen=True)
class ForecastDay:
    """One display record per forecast day."""
    label: str  # short weekday name, e.g., "Mon"
    temperature: int
    humidity: int
    description: str
    icon: str
    timestamp: int = 0


@dataclass(frozen=True)
class HistoryPoint:
    """One synthetic trailing-week sample. Not authoritative data."""
    label: str  # e.g., "Oct 19"
    temperature: float  # one decimal
    humidity: int
    pressure: int
