"""
URL synchronizer — keeps the form in shareable query parameters.

On start the form is hydrated from the current query string exactly once.
After that every change reschedules a debounced write; only the last edit
inside the quiet period rewrites the URL, and an unchanged query string is
never rewritten. Reset clears the URL immediately.
"""

import logging
import threading
from typing import Callable, List, Mapping, Optional, Tuple, Union
from urllib.parse import parse_qs, urlencode

from .config import settings
from .schemas import DimensionInputs, FormState, InputMode, VolumeInputs

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50  # Location.history entries kept

# Parameter order is fixed so equal states always produce equal query strings
PARAM_CONTAINER_TYPE = "containerType"
PARAM_VOID_TYPE = "voidType"
QUERY_PARAMS = [
    PARAM_CONTAINER_TYPE,
    "containerLength",
    "containerWidth",
    "containerHeight",
    "containerVolume",
    PARAM_VOID_TYPE,
    "voidLength",
    "voidWidth",
    "voidHeight",
    "voidVolume",
    "density",
]


def _parse_mode(value: Optional[str], param: str) -> InputMode:
    if not value:
        return InputMode.DIMENSIONS
    try:
        return InputMode(value)
    except ValueError:
        logger.warning("Ignoring unrecognised %s=%r, using dimensions", param, value)
        return InputMode.DIMENSIONS


def hydrate_state(query: Union[str, Mapping[str, str], None]) -> FormState:
    """
    Build a FormState from query parameters.

    Accepts a raw query string (with or without the leading '?') or any
    mapping of parameter name to value. Absent parameters become empty text;
    absent or unknown modes fall back to dimensions.
    """
    if query is None:
        params: Mapping[str, str] = {}
    elif isinstance(query, str):
        parsed = parse_qs(query.lstrip("?"), keep_blank_values=True)
        params = {key: values[0] for key, values in parsed.items()}
    else:
        params = query

    def get(name: str) -> str:
        return params.get(name) or ""

    return FormState(
        container_type=_parse_mode(params.get(PARAM_CONTAINER_TYPE), PARAM_CONTAINER_TYPE),
        container_dimensions=DimensionInputs(
            length=get("containerLength"),
            width=get("containerWidth"),
            height=get("containerHeight"),
        ),
        container_volume=VolumeInputs(volume=get("containerVolume")),
        void_type=_parse_mode(params.get(PARAM_VOID_TYPE), PARAM_VOID_TYPE),
        void_dimensions=DimensionInputs(
            length=get("voidLength"),
            width=get("voidWidth"),
            height=get("voidHeight"),
        ),
        void_volume=VolumeInputs(volume=get("voidVolume")),
        density=get("density"),
    )


def state_to_params(state: FormState) -> List[Tuple[str, str]]:
    """Ordered (name, value) pairs; modes always, other fields only when non-empty."""
    values = {
        PARAM_CONTAINER_TYPE: state.container_type.value,
        "containerLength": state.container_dimensions.length,
        "containerWidth": state.container_dimensions.width,
        "containerHeight": state.container_dimensions.height,
        "containerVolume": state.container_volume.volume,
        PARAM_VOID_TYPE: state.void_type.value,
        "voidLength": state.void_dimensions.length,
        "voidWidth": state.void_dimensions.width,
        "voidHeight": state.void_dimensions.height,
        "voidVolume": state.void_volume.volume,
        "density": state.density,
    }
    return [(name, values[name]) for name in QUERY_PARAMS if values[name]]


def serialize_state(state: FormState) -> str:
    return urlencode(state_to_params(state))


def share_url(state: FormState, base_url: str = "") -> str:
    base = base_url or (settings.PUBLIC_URL.rstrip("/") + settings.BASE_PATH)
    return f"{base}?{serialize_state(state)}"


class Location:
    """
    The address the form is shown at. replace() swaps the query string in
    place, with no navigation; the most recent replacements are kept in history.
    """

    def __init__(self, path: str = "/", query: str = ""):
        self.path = path
        self.query = query.lstrip("?")
        self.history: List[str] = []

    @property
    def url(self) -> str:
        return f"{self.path}?{self.query}" if self.query else self.path

    def replace(self, path: str, query: str = "") -> None:
        self.path = path
        self.query = query.lstrip("?")
        self.history.append(self.url)
        del self.history[:-HISTORY_LIMIT]


class Debouncer:
    """
    Runs callback once the calls to trigger() have stopped for `delay` seconds.
    Each trigger cancels the pending timer and schedules a new one.

    Every scheduled timer carries the generation it was created in; a timer
    whose generation is no longer current has been superseded or cancelled
    and does nothing, even if its thread was already running.
    """

    def __init__(self, delay: float, callback: Callable[[], None],
                 timer_factory: Callable = threading.Timer):
        self.delay = delay
        self.callback = callback
        self._timer_factory = timer_factory
        self._timer = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def trigger(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            self._timer = self._timer_factory(self.delay, lambda: self._fire(generation))
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> None:
        """Run the pending callback now instead of waiting for the timer."""
        with self._lock:
            if self._timer is None:
                return
            self._generation += 1
            self._timer.cancel()
            self._timer = None
        self.callback()

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
        self.callback()


class UrlSynchronizer:

    def __init__(self, manager, location: Location, delay: Optional[float] = None,
                 timer_factory: Callable = threading.Timer,
                 base_path: Optional[str] = None):
        if delay is None:
            delay = settings.URL_DEBOUNCE_MS / 1000.0
        self.manager = manager
        self.location = location
        self.base_path = base_path or settings.BASE_PATH
        self.debouncer = Debouncer(delay, self.write, timer_factory)
        self._unsubscribe = None
        self._hydrated = False

    def start(self) -> None:
        """
        Hydrate the manager from the current URL, then start listening.
        Hydration happens once and never schedules a write, so a freshly
        opened link is not overwritten by a blank form.
        """
        if self._hydrated:
            return
        self._hydrated = True
        self.manager.load(hydrate_state(self.location.query))
        logger.debug("Hydrated form from %r", self.location.query)
        self._unsubscribe = self.manager.subscribe(self._on_change)

    def _on_change(self, manager, reset: bool) -> None:
        if reset:
            self.debouncer.cancel()
            self.location.replace(self.base_path, "")
            return
        self.debouncer.trigger()

    def write(self) -> None:
        query = serialize_state(self.manager.state)
        if query == self.location.query:
            return
        logger.debug("Rewriting query string: %s", query)
        self.location.replace(self.location.path, query)

    def close(self) -> None:
        """Stop listening and drop any pending write."""
        self.debouncer.cancel()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
