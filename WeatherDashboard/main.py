"""Weather dashboard front end: terminal summary plus optional PNG snapshot."""
import argparse
import logging
import os
import signal
import sys
from typing import Optional, TextIO, Tuple

from dotenv import load_dotenv

from dashboard_canvas import PILDashboardCanvas
from dashboard_controller import DashboardController, ViewState, DashboardStatus
from history_generator import SyntheticHistoryProvider
from layout import render_dashboard, summarize_state
from openweather_provider import OpenWeatherProvider, DEFAULT_BASE_URL

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_LOG_FILE = os.path.join(BASE_DIR, "weather-dashboard.log")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Weather dashboard")
    parser.add_argument("--place", default=None, help="Place loaded on start (default: $WEATHER_PLACE or London)")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--output", default=None, help="Write a PNG snapshot after every refresh")
    parser.add_argument("--width", type=int, default=960)
    parser.add_argument("--height", type=int, default=640)
    parser.add_argument("--timeout", type=float, default=None,
                        help="HTTP timeout in seconds (default: wait indefinitely)")
    parser.add_argument("--once", action="store_true", help="Load the start place and exit")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def load_config() -> Tuple[str, str, str, str]:
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    place = os.getenv("WEATHER_PLACE", "London")
    lang = os.getenv("WEATHER_LANG", "en")
    base_url = os.getenv("WEATHER_BASE_URL", DEFAULT_BASE_URL)

    if not api_key:
        raise SystemExit("Missing WEATHER_API_KEY in environment")

    logging.info("Configuration loaded: place=%s lang=%s base_url=%s", place, lang, base_url)
    return api_key, place, lang, base_url


def build_controller(api_key: str, place: str, lang: str, base_url: str,
                     timeout: Optional[float] = None) -> DashboardController:
    provider = OpenWeatherProvider(api_key=api_key, lang=lang, base_url=base_url, timeout=timeout)
    controller = DashboardController(
        provider=provider,
        history_provider=SyntheticHistoryProvider(),
        default_place=place,
    )
    logging.info("Dashboard controller ready (default place=%s)", place)
    return controller


def make_renderer(output: Optional[str], width: int, height: int, out: TextIO = sys.stdout):
    """Listener that prints settled states and optionally saves a PNG snapshot."""
    canvas = PILDashboardCanvas(width=width, height=height) if output else None
    last_shown = [None]

    def on_state(state: ViewState) -> None:
        # Search-field edits republish the same version; draw each version once
        version = (state.sequence, state.status)
        if state.status is DashboardStatus.IDLE or version == last_shown[0]:
            return
        last_shown[0] = version
        out.write("\n".join(summarize_state(state)) + "\n")
        out.flush()
        if canvas is not None and state.status is not DashboardStatus.LOADING:
            render_dashboard(canvas, state)
            canvas.save(output)
            logging.info("Dashboard snapshot written to %s", output)

    return on_state


def search_loop(controller: DashboardController, stream: TextIO = sys.stdin) -> None:
    """Read place names, one per line, and submit each as a search."""
    for line in stream:
        controller.set_pending_place(line.rstrip("\n"))
        controller.submit()


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    api_key, place, lang, base_url = load_config()

    controller = build_controller(api_key, args.place or place, lang, base_url, args.timeout)
    controller.subscribe(make_renderer(args.output, args.width, args.height))

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        controller.start()
        if not args.once:
            print("Enter a city name to search (Ctrl-D to quit):")
            search_loop(controller)
    except KeyboardInterrupt:
        logging.info("Stopping dashboard")


if __name__ == "__main__":
    main()
