"""Tests for weather_data module."""
import dataclasses
import pytest
from weather_data import CurrentConditions, WeatherCondition, ForecastDay, HistoryPoint, round_half_up


def test_current_conditions_creation():
    """Test creating CurrentConditions with required fields."""
    current = CurrentConditions(
        name="London",
        country="GB",
        temp=15.0,
        feels_like=14.2,
        humidity=60,
        wind_speed=3.1,
        condition=WeatherCondition(description="clear sky", icon="01d", main="Clear"),
        visibility=10000,
    )

    assert current.name == "London"
    assert current.country == "GB"
    assert current.temp == 15.0
    assert current.condition.icon == "01d"
    assert current.visibility == 10000
    assert current.pressure is None
    assert current.timezone_offset == 0


def test_records_are_immutable():
    """Records are replaced wholesale, never edited."""
    day = ForecastDay(label="Mon", temperature=15, humidity=60, description="clear sky", icon="01d")
    point = HistoryPoint(label="Oct 19", temperature=14.3, humidity=55, pressure=1012)

    with pytest.raises(dataclasses.FrozenInstanceError):
        day.temperature = 20
    with pytest.raises(dataclasses.FrozenInstanceError):
        point.humidity = 10


@pytest.mark.parametrize("value, expected", [
    (15.0, 15),
    (14.5, 15),
    (14.49, 14),
    (-2.5, -2),
    (-2.6, -3),
    (0.0, 0),
])
def test_round_half_up(value, expected):
    """Halves round up like the browser's Math.round."""
    assert round_half_up(value) == expected
    assert isinstance(round_half_up(value), int)
