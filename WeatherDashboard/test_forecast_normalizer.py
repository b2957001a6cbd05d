"""Tests for forecast normalization."""
import pytest
from forecast_normalizer import normalize_forecast, select_daily_samples, weekday_label
from weather_provider import MalformedForecastError

MONDAY_MIDNIGHT_UTC = 1704067200  # 2024-01-01 00:00 UTC
THREE_HOURS = 3 * 3600


def make_forecast_payload(count=40, start=MONDAY_MIDNIGHT_UTC, timezone=0):
    """Forecast payload with `count` 3-hourly samples; temperature = index + 0.5."""
    samples = []
    for i in range(count):
        samples.append({
            "dt": start + i * THREE_HOURS,
            "main": {"temp": i + 0.5, "humidity": 50 + i % 10},
            "weather": [{"main": "Clouds", "description": f"sample {i}", "icon": "04d"}],
        })
    return {"cod": "200", "cnt": count, "list": samples, "city": {"name": "London", "timezone": timezone}}


def test_full_series_gives_five_days():
    """Forty 3-hour samples collapse to exactly five days."""
    days = normalize_forecast(make_forecast_payload())

    assert len(days) == 5
    assert [d.label for d in days] == ["Mon", "Tue", "Wed", "Thu", "Fri"]
    assert [d.description for d in days] == ["sample 0", "sample 8", "sample 16", "sample 24", "sample 32"]


def test_temperatures_are_rounded_integers():
    days = normalize_forecast(make_forecast_payload())

    assert [d.temperature for d in days] == [1, 9, 17, 25, 33]
    assert all(isinstance(d.temperature, int) for d in days)


def test_fields_copied_from_sample():
    day = normalize_forecast(make_forecast_payload())[1]

    assert day.humidity == 58
    assert day.icon == "04d"
    assert day.timestamp == MONDAY_MIDNIGHT_UTC + 8 * THREE_HOURS


def test_chronological_order():
    days = normalize_forecast(make_forecast_payload())

    timestamps = [d.timestamp for d in days]
    assert timestamps == sorted(timestamps)


def test_select_daily_samples_every_eighth():
    samples = list(range(40))
    assert select_daily_samples(samples) == [0, 8, 16, 24, 32]
    assert select_daily_samples(list(range(10))) == [0, 8]


def test_short_series_keeps_available_days():
    """A partial series yields fewer days instead of failing."""
    days = normalize_forecast(make_forecast_payload(count=10))
    assert len(days) == 2


def test_weekday_uses_place_timezone():
    """Late Sunday UTC is already Monday in UTC+3."""
    sunday_late = MONDAY_MIDNIGHT_UTC - 2 * 3600
    assert weekday_label(sunday_late) == "Sun"
    assert weekday_label(sunday_late, offset_seconds=3 * 3600) == "Mon"

    days = normalize_forecast(make_forecast_payload(start=sunday_late, timezone=3 * 3600))
    assert days[0].label == "Mon"


@pytest.mark.parametrize("payload", [
    {},
    {"list": []},
    {"list": None},
    {"list": "oops"},
])
def test_empty_or_missing_list(payload):
    with pytest.raises(MalformedForecastError):
        normalize_forecast(payload)


@pytest.mark.parametrize("broken", [
    {"main": {"temp": 1.0, "humidity": 50}, "weather": [{"icon": "01d"}]},  # no dt
    {"dt": 1, "weather": [{"icon": "01d"}]},  # no main
    {"dt": 1, "main": {"humidity": 50}, "weather": [{"icon": "01d"}]},  # no temp
    {"dt": 1, "main": {"temp": 1.0, "humidity": 50}, "weather": []},  # empty weather
    {"dt": 1, "main": {"temp": float("inf"), "humidity": 50}, "weather": [{"icon": "01d"}]},  # infinite temp
    {"dt": 10 ** 20, "main": {"temp": 1.0, "humidity": 50}, "weather": [{"icon": "01d"}]},  # dt out of range
])
def test_sample_missing_fields(broken):
    payload = make_forecast_payload()
    payload["list"][0] = broken

    with pytest.raises(MalformedForecastError):
        normalize_forecast(payload)
