"""Tests for layout and rendering logic."""
import pytest
from dashboard_controller import ViewState, DashboardStatus
from weather_data import CurrentConditions, WeatherCondition, ForecastDay, HistoryPoint
from layout import (
    get_weather_icon,
    get_temperature_color,
    format_temperature,
    format_visibility,
    format_wind,
    summarize_state,
    calculate_layout,
    DEFAULT_ICON,
)


@pytest.fixture
def ready_state():
    """Ready state for London at 15°C under a clear sky."""
    current = CurrentConditions(
        name="London",
        country="GB",
        temp=15.0,
        feels_like=14.4,
        humidity=60,
        wind_speed=3.1,
        condition=WeatherCondition(description="clear sky", icon="01d", main="Clear"),
        visibility=10000,
    )
    forecast = tuple(
        ForecastDay(label=label, temperature=15 + i, humidity=60, description="light rain", icon="10d")
        for i, label in enumerate(["Mon", "Tue", "Wed", "Thu", "Fri"])
    )
    history = tuple(
        HistoryPoint(label=f"Oct {13 + i}", temperature=13.0 + i * 0.5, humidity=40 + i * 5, pressure=1010)
        for i in range(7)
    )
    return ViewState(status=DashboardStatus.READY, place="London", current=current,
                     forecast=forecast, history=history)


def test_clear_day_is_sun():
    assert get_weather_icon("01d").name == "sun"
    assert get_weather_icon("01n").name == "sun"


@pytest.mark.parametrize("code, name", [
    ("02d", "cloud"),
    ("04n", "cloud"),
    ("09d", "rain"),
    ("10n", "rain"),
    ("11d", "rain"),
    ("13d", "cloud"),
    ("50n", "cloud"),
])
def test_icon_groups(code, name):
    assert get_weather_icon(code).name == name


def test_unknown_icon_falls_back_to_cloud():
    assert get_weather_icon("99x") == DEFAULT_ICON
    assert get_weather_icon(None) == DEFAULT_ICON


def test_temperature_color_gradient():
    assert get_temperature_color(-10.0) == (0, 0, 255)
    assert get_temperature_color(15.0) == (0, 255, 255)
    assert get_temperature_color(60.0) == (255, 0, 0)
    warm = get_temperature_color(30.0)
    assert warm[0] == 255 and warm[2] == 0


def test_formatting():
    assert format_temperature(15.0) == "15°C"
    assert format_temperature(-0.4) == "0°C"
    assert format_temperature(14.5) == "15°C"
    assert format_visibility(10000) == "10 km"
    assert format_visibility(None) == "N/A"
    assert format_wind(3.1) == "3.1 m/s"


def test_summary_for_ready_state(ready_state):
    lines = summarize_state(ready_state)

    assert lines[0] == "Weather Dashboard"
    assert "London, GB: 15°C [sun] clear sky" in lines
    assert any("Visibility 10 km" in line for line in lines)
    assert sum(1 for line in lines if "[rain]" in line) == 5
    assert any("Oct 19: 16.0°C" in line for line in lines)


def test_summary_for_loading_state():
    state = ViewState(status=DashboardStatus.LOADING, place="Paris")
    assert summarize_state(state) == ["Loading weather data for Paris..."]


def test_summary_for_failed_state():
    state = ViewState(status=DashboardStatus.FAILED, place="Nowhere123",
                      error="City not found. Please check the spelling and try again.")
    assert summarize_state(state) == [
        "Weather Dashboard",
        "Error: City not found. Please check the spelling and try again.",
    ]


def test_layout_ready_state(ready_state):
    ops = calculate_layout(ready_state, 960, 640)

    texts = [op.kwargs["text"] for op in ops if op.op_type == "text"]
    assert "London, GB" in texts
    assert "15°C" in texts
    assert "7-Day Temperature Trend" in texts
    assert "7-Day Humidity Levels" in texts
    assert "5-Day Forecast" in texts

    icons = [op.kwargs["name"] for op in ops if op.op_type == "icon"]
    assert icons[0] == "sun"
    assert icons[1:] == ["rain"] * 5

    lines = [op for op in ops if op.op_type == "line"]
    assert len(lines) == 1
    assert len(lines[0].kwargs["points"]) == 7

    bars = [op for op in ops if op.op_type == "rect" and op.kwargs["color"] == (16, 185, 129)]
    assert len(bars) == 7


def test_layout_stays_on_canvas(ready_state):
    width, height = 960, 640
    for op in calculate_layout(ready_state, width, height):
        if op.op_type == "line":
            for x, y in op.kwargs["points"]:
                assert 0 <= x <= width and 0 <= y <= height
        elif op.op_type == "rect":
            assert 0 <= op.kwargs["x0"] <= op.kwargs["x1"] <= width
            assert 0 <= op.kwargs["y0"] <= op.kwargs["y1"] <= height


def test_layout_failed_state_has_banner_only():
    state = ViewState(status=DashboardStatus.FAILED, place="Nowhere123", error="City not found.")
    ops = calculate_layout(state)

    texts = [op.kwargs["text"] for op in ops if op.op_type == "text"]
    assert texts == ["Weather Dashboard", "Error: City not found."]
    assert not any(op.op_type in ("line", "icon") for op in ops)


def test_flat_history_does_not_divide_by_zero(ready_state):
    flat = tuple(HistoryPoint(label=f"Oct {i}", temperature=10.0, humidity=50, pressure=1000) for i in range(7))
    state = ViewState(status=DashboardStatus.READY, place="London", current=ready_state.current,
                      forecast=ready_state.forecast, history=flat)

    line = next(op for op in calculate_layout(state) if op.op_type == "line")
    assert len({y for _, y in line.kwargs["points"]}) == 1
