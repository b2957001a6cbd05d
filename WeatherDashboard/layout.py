"""Layout and rendering logic for the dashboard - pure functions for testability."""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
from weather_data import HistoryPoint, round_half_up
from dashboard_controller import ViewState, DashboardStatus

Color = Tuple[int, int, int]

WHITE = (255, 255, 255)
DARK = (31, 41, 55)
PANEL = (255, 255, 255)
ERROR_RED = (239, 68, 68)
TREND_BLUE = (59, 130, 246)
HUMIDITY_GREEN = (16, 185, 129)


@dataclass(frozen=True)
class WeatherIcon:
    name: str  # "sun", "cloud" or "rain"
    color: Color


ICON_MAP = {
    "01d": WeatherIcon("sun", (234, 179, 8)),
    "01n": WeatherIcon("sun", (253, 224, 71)),
    "02d": WeatherIcon("cloud", (107, 114, 128)),
    "02n": WeatherIcon("cloud", (156, 163, 175)),
    "03d": WeatherIcon("cloud", (75, 85, 99)),
    "03n": WeatherIcon("cloud", (107, 114, 128)),
    "04d": WeatherIcon("cloud", (55, 65, 81)),
    "04n": WeatherIcon("cloud", (75, 85, 99)),
    "09d": WeatherIcon("rain", (59, 130, 246)),
    "09n": WeatherIcon("rain", (96, 165, 250)),
    "10d": WeatherIcon("rain", (37, 99, 235)),
    "10n": WeatherIcon("rain", (59, 130, 246)),
    "11d": WeatherIcon("rain", (168, 85, 247)),
    "11n": WeatherIcon("rain", (192, 132, 252)),
    "13d": WeatherIcon("cloud", (209, 213, 219)),
    "13n": WeatherIcon("cloud", (229, 231, 235)),
    "50d": WeatherIcon("cloud", (156, 163, 175)),
    "50n": WeatherIcon("cloud", (209, 213, 219)),
}
DEFAULT_ICON = WeatherIcon("cloud", (107, 114, 128))

# (temperature °C, color) stops, interpolated linearly
TEMPERATURE_STOPS = [
    (0.0, (0, 0, 255)),
    (15.0, (0, 255, 255)),
    (25.0, (255, 255, 0)),
    (35.0, (255, 128, 0)),
    (45.0, (255, 0, 0)),
]


class DrawOp:
    """Represents a drawing operation (for testing/layout calculation)."""
    def __init__(self, op_type: str, **kwargs):
        self.op_type = op_type
        self.kwargs = kwargs

    def __repr__(self):
        return f"DrawOp({self.op_type!r}, {self.kwargs!r})"


def get_weather_icon(icon_code: Optional[str]) -> WeatherIcon:
    """Icon for an OpenWeather icon code; unknown codes get a grey cloud."""
    return ICON_MAP.get(icon_code or "", DEFAULT_ICON)


def get_temperature_color(temp_c: float) -> Color:
    """
    Color for a temperature: blue when freezing through cyan and yellow to red above 45°C.
    """
    if temp_c <= TEMPERATURE_STOPS[0][0]:
        return TEMPERATURE_STOPS[0][1]
    for (low_t, low_c), (high_t, high_c) in zip(TEMPERATURE_STOPS, TEMPERATURE_STOPS[1:]):
        if temp_c <= high_t:
            ratio = (temp_c - low_t) / (high_t - low_t)
            return tuple(int(a + (b - a) * ratio) for a, b in zip(low_c, high_c))
    return TEMPERATURE_STOPS[-1][1]


def format_temperature(temp: float) -> str:
    return f"{round_half_up(temp)}°C"


def format_wind(speed: float) -> str:
    return f"{speed} m/s"


def format_visibility(metres: Optional[int]) -> str:
    if metres is None:
        return "N/A"
    return f"{round_half_up(metres / 1000)} km"


def summarize_state(state: ViewState) -> List[str]:
    """
    Text rendition of the dashboard, one line per entry.

    Used by the terminal front end and for logging.
    """
    if state.status is DashboardStatus.LOADING:
        return [f"Loading weather data for {state.place}..."]

    lines = ["Weather Dashboard"]
    if state.error:
        lines.append(f"Error: {state.error}")
    if state.current is None:
        return lines

    current = state.current
    icon = get_weather_icon(current.condition.icon)
    lines.append(f"{current.name}, {current.country}: {format_temperature(current.temp)} "
                 f"[{icon.name}] {current.condition.description}")
    lines.append(
        f"Feels like {format_temperature(current.feels_like)} | "
        f"Humidity {current.humidity}% | "
        f"Wind {format_wind(current.wind_speed)} | "
        f"Visibility {format_visibility(current.visibility)}"
    )

    lines.append("5-Day Forecast:")
    for day in state.forecast:
        lines.append(f"  {day.label}: {day.temperature}°C [{get_weather_icon(day.icon).name}] "
                     f"{day.description}, {day.humidity}% humidity")

    lines.append("7-Day Trend (simulated):")
    for point in state.history:
        lines.append(f"  {point.label}: {point.temperature}°C, {point.humidity}% humidity, {point.pressure} hPa")
    return lines


def _trend_points(history: Sequence[HistoryPoint], x0: int, y0: int, x1: int, y1: int) -> List[Tuple[int, int]]:
    temps = [p.temperature for p in history]
    low, high = min(temps), max(temps)
    span = (high - low) or 1.0
    step = (x1 - x0) / max(len(temps) - 1, 1)
    return [
        (int(x0 + i * step), int(y1 - (t - low) / span * (y1 - y0)))
        for i, t in enumerate(temps)
    ]


def _humidity_bars(history: Sequence[HistoryPoint], x0: int, y0: int, x1: int, y1: int) -> List[DrawOp]:
    slot = (x1 - x0) / len(history)
    bar = max(int(slot * 0.6), 1)
    ops = []
    for i, point in enumerate(history):
        left = int(x0 + i * slot + (slot - bar) / 2)
        top = int(y1 - min(max(point.humidity, 0), 100) / 100 * (y1 - y0))
        ops.append(DrawOp("rect", x0=left, y0=top, x1=left + bar, y1=y1, color=HUMIDITY_GREEN))
    return ops


def calculate_layout(state: ViewState, width: int = 960, height: int = 640) -> List[DrawOp]:
    """
    Calculate drawing operations for the whole dashboard.

    This is a pure function that returns drawing operations,
    making it easy to test without actual rendering.

    Args:
        state: View state to display
        width: Canvas width
        height: Canvas height

    Returns:
        List of DrawOp objects representing what to draw
    """
    ops = []
    margin = 20

    if state.status is DashboardStatus.LOADING:
        ops.append(DrawOp("text", text=f"Loading weather data for {state.place}...",
                          x=margin, y=height // 2, color=WHITE, size=20))
        return ops

    ops.append(DrawOp("text", text="Weather Dashboard", x=margin, y=margin, color=WHITE, size=28))
    y = margin + 44

    if state.error:
        ops.append(DrawOp("rect", x0=margin, y0=y, x1=width - margin, y1=y + 30, color=ERROR_RED))
        ops.append(DrawOp("text", text=f"Error: {state.error}", x=margin + 8, y=y + 6, color=WHITE, size=14))
        y += 44

    current = state.current
    if current is None:
        return ops

    # Current conditions card
    icon = get_weather_icon(current.condition.icon)
    ops.append(DrawOp("text", text=f"{current.name}, {current.country}", x=margin, y=y, color=WHITE, size=22))
    ops.append(DrawOp("text", text=current.condition.description.capitalize(),
                      x=margin, y=y + 28, color=WHITE, size=14))
    ops.append(DrawOp("icon", name=icon.name, x=width - margin - 140, y=y, color=icon.color))
    ops.append(DrawOp("text", text=format_temperature(current.temp), x=width - margin - 90, y=y,
                      color=get_temperature_color(current.temp), size=32))
    details = (f"Feels like {format_temperature(current.feels_like)}   Humidity {current.humidity}%   "
               f"Wind {format_wind(current.wind_speed)}   Visibility {format_visibility(current.visibility)}")
    ops.append(DrawOp("text", text=details, x=margin, y=y + 56, color=WHITE, size=14))
    y += 90

    # History charts, side by side
    chart_h = max((height - y) // 2 - 30, 60)
    half = (width - 3 * margin) // 2
    left_x0, left_x1 = margin, margin + half
    right_x0, right_x1 = left_x1 + margin, width - margin
    for x0, x1, title in ((left_x0, left_x1, "7-Day Temperature Trend"),
                          (right_x0, right_x1, "7-Day Humidity Levels")):
        ops.append(DrawOp("rect", x0=x0, y0=y, x1=x1, y1=y + chart_h, color=PANEL))
        ops.append(DrawOp("text", text=title, x=x0 + 8, y=y + 6, color=DARK, size=14))

    plot_top, plot_bottom = y + 30, y + chart_h - 24
    if state.history:
        ops.append(DrawOp("line", points=_trend_points(state.history, left_x0 + 16, plot_top,
                                                       left_x1 - 16, plot_bottom),
                          color=TREND_BLUE, width=3))
        ops.extend(_humidity_bars(state.history, right_x0 + 16, plot_top, right_x1 - 16, plot_bottom))
        ops.append(DrawOp("text", text=f"{state.history[0].label} - {state.history[-1].label}",
                          x=left_x0 + 8, y=plot_bottom + 4, color=DARK, size=12))
    y += chart_h + margin

    # 5-day forecast row
    if state.forecast:
        ops.append(DrawOp("text", text="5-Day Forecast", x=margin, y=y, color=WHITE, size=18))
        y += 26
        cell = (width - 2 * margin) // len(state.forecast)
        for i, day in enumerate(state.forecast):
            x = margin + i * cell
            day_icon = get_weather_icon(day.icon)
            ops.append(DrawOp("text", text=day.label, x=x, y=y, color=WHITE, size=14))
            ops.append(DrawOp("icon", name=day_icon.name, x=x, y=y + 20, color=day_icon.color))
            ops.append(DrawOp("text", text=f"{day.temperature}°C", x=x, y=y + 44, color=WHITE, size=18))
            ops.append(DrawOp("text", text=day.description, x=x, y=y + 68, color=WHITE, size=12))
            ops.append(DrawOp("text", text=f"{day.humidity}% humidity", x=x, y=y + 84, color=WHITE, size=12))

    return ops


def render_dashboard(canvas, state: ViewState) -> None:
    """
    Render the view state onto a canvas.

    Args:
        canvas: DashboardCanvas instance (PNG or fake)
        state: View state to display
    """
    canvas.clear()

    for op in calculate_layout(state, canvas.width, canvas.height):
        kw = op.kwargs
        if op.op_type == "text":
            canvas.draw_text(kw["x"], kw["y"], kw["text"], kw["color"], kw.get("size", 14))
        elif op.op_type == "line":
            canvas.draw_line(kw["points"], kw["color"], kw.get("width", 1))
        elif op.op_type == "rect":
            canvas.draw_rect(kw["x0"], kw["y0"], kw["x1"], kw["y1"], kw["color"])
        elif op.op_type == "icon":
            # Swatch plus the icon name; glyph art is left to richer front ends
            canvas.draw_rect(kw["x"], kw["y"], kw["x"] + 16, kw["y"] + 16, kw["color"])
            canvas.draw_text(kw["x"] + 20, kw["y"], kw["name"], kw["color"], 12)
