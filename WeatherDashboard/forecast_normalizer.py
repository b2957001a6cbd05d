"""Shape the raw 3-hour forecast series into one display record per day."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List
from weather_data import ForecastDay, round_half_up
from weather_provider import MalformedForecastError

SAMPLES_PER_DAY = 8  # 3-hour intervals * 8 = 24 hours
FORECAST_DAYS = 5


def weekday_label(timestamp: int, offset_seconds: int = 0) -> str:
    """Short weekday name ("Mon") for a UNIX timestamp shifted by a UTC offset."""
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc) + timedelta(seconds=offset_seconds)
    return moment.strftime("%a")


def select_daily_samples(samples: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Pick one sample per 24 hours: every 8th starting at index 0, first 5 kept.

    Assumes the series starts at a fixed hour alignment. If it does not, the
    day boundaries drift; that is left as is.
    """
    return samples[::SAMPLES_PER_DAY][:FORECAST_DAYS]


def _to_forecast_day(sample: Dict[str, Any], offset_seconds: int) -> ForecastDay:
    try:
        main = sample["main"]
        weather = sample["weather"][0]
        return ForecastDay(
            label=weekday_label(int(sample["dt"]), offset_seconds),
            temperature=round_half_up(float(main["temp"])),
            humidity=int(main["humidity"]),
            description=weather.get("description", ""),
            icon=weather.get("icon", ""),
            timestamp=int(sample["dt"]),
        )
    except (KeyError, IndexError, TypeError, ValueError, AttributeError, OverflowError, OSError) as e:
        raise MalformedForecastError(f"Forecast sample missing expected fields: {e}") from e


def normalize_forecast(payload: Dict[str, Any]) -> List[ForecastDay]:
    """
    Convert a raw forecast payload into ForecastDay records.

    Args:
        payload: OpenWeather forecast response ({"list": [...], "city": {...}})

    Returns:
        Up to 5 ForecastDay records in chronological order (exactly 5 for a
        full 40-sample series)

    Raises:
        MalformedForecastError: If there are no samples or a selected sample
            lacks dt, main.temp, main.humidity or weather[0]
    """
    samples = payload.get("list") if isinstance(payload, dict) else None
    if not isinstance(samples, list) or not samples:
        logging.error("Forecast payload has no samples")
        raise MalformedForecastError("Forecast payload has no samples")

    city = payload.get("city")
    offset_seconds = int(city.get("timezone") or 0) if isinstance(city, dict) else 0

    days = [_to_forecast_day(sample, offset_seconds) for sample in select_daily_samples(samples)]
    logging.debug(f"Normalized {len(samples)} forecast samples into {len(days)} days")
    return days
