"""Dashboard controller - runs refresh cycles and owns the view state."""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
from weather_data import CurrentConditions, ForecastDay, HistoryPoint
from weather_provider import WeatherProviderBase, HistoryProviderBase, WeatherProviderError
from forecast_normalizer import normalize_forecast
from history_generator import SyntheticHistoryProvider

DEFAULT_PLACE = "London"
UNEXPECTED_ERROR_MESSAGE = "Unexpected error while loading weather data. Please try again."


class DashboardStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class ViewState:
    """
    Everything the presentation layer needs, as one immutable version.

    Results are only populated in READY; LOADING and FAILED always carry
    empty results so stale data never shows under a spinner or an error.
    """
    status: DashboardStatus = DashboardStatus.IDLE
    place: str = DEFAULT_PLACE
    pending_place: str = DEFAULT_PLACE
    current: Optional[CurrentConditions] = None
    forecast: Tuple[ForecastDay, ...] = ()
    history: Tuple[HistoryPoint, ...] = ()
    error: Optional[str] = None
    sequence: int = 0

    @property
    def is_loading(self) -> bool:
        return self.status is DashboardStatus.LOADING


Listener = Callable[[ViewState], None]


class DashboardController:
    """
    Orchestrates one refresh cycle per load or search.

    Each refresh fetches current conditions and the raw forecast in
    parallel, waits for both, then normalizes the forecast and builds the
    synthetic history. Either fetch failing fails the whole refresh.

    Refreshes are numbered. A refresh that settles after a newer one was
    started is discarded, so the most recently started search always wins.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        history_provider: Optional[HistoryProviderBase] = None,
        default_place: str = DEFAULT_PLACE
    ):
        """
        Initialize dashboard controller.

        Args:
            provider: Weather provider used for both endpoints
            history_provider: Trailing-week source (synthetic by default)
            default_place: Place loaded by start()
        """
        self.provider = provider
        self.history_provider = history_provider or SyntheticHistoryProvider()
        self.default_place = default_place

        self._lock = threading.RLock()
        self._state = ViewState(place=default_place, pending_place=default_place)
        self._last_started = 0
        self._listeners: List[Listener] = []
        self._notify_lock = threading.Lock()
        self._version = 0
        self._delivered = 0

    @property
    def state(self) -> ViewState:
        with self._lock:
            return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback for every published state. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> ViewState:
        """Initial load for the default place."""
        logging.info(f"Dashboard starting with default place '{self.default_place}'")
        return self.refresh(self.default_place)

    def set_pending_place(self, text: str) -> ViewState:
        """Track the unsubmitted search field value."""
        with self._lock:
            state = replace(self._state, pending_place=text)
            delivery = self._swap(state)
        self._notify(*delivery)
        return state

    def submit(self) -> ViewState:
        """Refresh using the current search field value."""
        return self.refresh(self.state.pending_place)

    def refresh(self, place: str) -> ViewState:
        """
        Run one refresh cycle for a place.

        Blank place text is ignored. This never raises for provider errors:
        failures end in the FAILED state with the error's message.

        Returns:
            ViewState: The state after this refresh settled (which may belong
            to a newer refresh if this one was superseded)
        """
        place = (place or "").strip()
        if not place:
            logging.debug("Ignoring refresh with empty place")
            return self.state

        with self._lock:
            self._last_started += 1
            sequence = self._last_started
            delivery = self._swap(ViewState(
                status=DashboardStatus.LOADING,
                place=place,
                pending_place=self._state.pending_place,
                sequence=sequence,
            ))
        self._notify(*delivery)

        logging.info(f"Refresh #{sequence}: fetching weather data for '{place}'")
        try:
            current, forecast_raw = self._fetch_both(place)
            forecast = normalize_forecast(forecast_raw)
            history = self.history_provider.get_history(current.temp)
            outcome = dict(
                status=DashboardStatus.READY,
                current=current,
                forecast=tuple(forecast),
                history=tuple(history),
            )
            logging.info(
                f"Refresh #{sequence}: {current.name}, {current.country} {current.temp}°C, "
                f"{len(forecast)} forecast days, {len(history)} history points"
            )
        except WeatherProviderError as err:
            logging.error(f"Refresh #{sequence} failed: {err}")
            outcome = dict(status=DashboardStatus.FAILED, error=str(err))
        except Exception as exc:
            logging.exception(f"Refresh #{sequence}: unexpected error: {exc}")
            outcome = dict(status=DashboardStatus.FAILED, error=UNEXPECTED_ERROR_MESSAGE)

        return self._settle(sequence, place, outcome)

    def _fetch_both(self, place: str):
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="weather-fetch") as pool:
            current_future = pool.submit(self.provider.get_current, place)
            forecast_future = pool.submit(self.provider.get_forecast_raw, place)
            # Join: both requests settle before either result is used
            wait([current_future, forecast_future])
            return current_future.result(), forecast_future.result()

    def _settle(self, sequence: int, place: str, outcome: Dict[str, Any]) -> ViewState:
        with self._lock:
            if sequence != self._last_started:
                logging.info(
                    f"Refresh #{sequence} for '{place}' superseded by #{self._last_started}, discarding result"
                )
                return self._state
            state = ViewState(
                place=place,
                pending_place=self._state.pending_place,
                sequence=sequence,
                **outcome
            )
            delivery = self._swap(state)
        self._notify(*delivery)
        return state

    def _swap(self, state: ViewState):
        # Caller holds the lock; listeners run later, outside it
        self._state = state
        self._version += 1
        return self._version, state, list(self._listeners)

    def _notify(self, version: int, state: ViewState, listeners: List[Listener]) -> None:
        with self._notify_lock:
            # A newer state already went out; never deliver an older one after it
            if version <= self._delivered:
                return
            self._delivered = version
            for listener in listeners:
                try:
                    listener(state)
                except Exception:
                    logging.exception("Dashboard listener failed")
