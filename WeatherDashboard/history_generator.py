"""Synthetic trailing-week history.

OpenWeather's historical endpoints need a paid subscription, so the dashboard
fabricates a plausible week around the current temperature instead. A real
history source should implement HistoryProviderBase and replace this class.
"""
import logging
import math
import random
from datetime import date, timedelta
from typing import List, Optional
from weather_data import HistoryPoint
from weather_provider import HistoryProviderBase

HISTORY_DAYS = 7
TEMP_JITTER = 4.0  # +/- degrees around the current temperature
HUMIDITY_RANGE = (40, 90)  # percent
PRESSURE_RANGE = (980, 1040)  # hPa


def date_label(day: date) -> str:
    """Format a date as "Oct 19" (no zero padding)."""
    return f"{day.strftime('%b')} {day.day}"


def _temperature_bounds(current_temp: float, jitter: float):
    # Snap the bounds onto the one-decimal grid so rounding can't escape them
    low = math.ceil(round((current_temp - jitter) * 10, 6)) / 10
    high = math.floor(round((current_temp + jitter) * 10, 6)) / 10
    return low, high


class SyntheticHistoryProvider(HistoryProviderBase):
    """
    Jitters the current temperature into a 7-day series.

    Values are random on purpose. Pass a seeded random.Random for
    reproducible output in tests.
    """

    def __init__(self, rng: Optional[random.Random] = None, jitter: float = TEMP_JITTER):
        self.rng = rng or random.Random()
        self.jitter = jitter

    def get_history(self, current_temp: float, today: Optional[date] = None) -> List[HistoryPoint]:
        today = today or date.today()
        low, high = _temperature_bounds(current_temp, self.jitter)

        points = []
        for days_ago in range(HISTORY_DAYS - 1, -1, -1):
            day = today - timedelta(days=days_ago)
            temp = round(current_temp + self.rng.uniform(-self.jitter, self.jitter), 1)
            points.append(HistoryPoint(
                label=date_label(day),
                temperature=min(max(temp, low), high),
                humidity=round(self.rng.uniform(*HUMIDITY_RANGE)),
                pressure=round(self.rng.uniform(*PRESSURE_RANGE)),
            ))

        logging.debug(f"Generated {len(points)} synthetic history points around {current_temp}°C")
        return points
