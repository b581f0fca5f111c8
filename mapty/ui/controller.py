"""Session controller wiring map, form and list events to the workout store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Protocol, TypedDict

from loguru import logger

from mapty.core.config import AppConfig
from mapty.core.state import SessionState
from mapty.ui.render import (
    WorkoutListEntry,
    build_list_entry,
    marker_popup_text,
    marker_style,
)
from mapty.workout.model import Coords, Workout, create_cycling, create_running
from mapty.workout.persistence import StorageWriteError, WorkoutPersistence
from mapty.workout.store import WorkoutStore
from mapty.workout.validator import parse_number, validate

VALIDATION_MESSAGE = "Inputs have to be positive number!"
GEOLOCATION_MESSAGE = "Could not get your position"


class FormFields(TypedDict):
    kind: str
    distance: str
    duration: str
    cadence: str
    elevation: str


class MapView(Protocol):
    def render(self, center: Coords, zoom: int) -> None: ...

    def place_marker(
        self, coords: Coords, popup_content: str | None, style_class: str | None
    ) -> None: ...

    def pan_to(self, coords: Coords, zoom: int) -> None: ...

    def on_click(self, handler: Callable[[Coords], None]) -> None: ...


class WorkoutForm(Protocol):
    def show(self) -> None: ...

    def hide(self) -> None: ...

    def focus_first_field(self) -> None: ...

    def read_fields(self) -> FormFields: ...

    def toggle_cadence_elevation_visibility(self) -> None: ...

    def on_submit(self, handler: Callable[[], None]) -> None: ...

    def on_kind_change(self, handler: Callable[[], None]) -> None: ...

    def on_cancel(self, handler: Callable[[], None]) -> None: ...


class WorkoutList(Protocol):
    def render_entry(self, entry: WorkoutListEntry) -> None: ...

    def on_activate(self, handler: Callable[[str], None]) -> None: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


class Geolocation(Protocol):
    def get_current_position(
        self,
        on_success: Callable[[Coords], None],
        on_failure: Callable[[], None],
    ) -> None: ...


@dataclass(frozen=True)
class SubmitResult:
    accepted: bool
    workout: Workout | None = None
    persist_error: StorageWriteError | None = None


class SessionController:
    def __init__(
        self,
        map_view: MapView,
        form: WorkoutForm,
        workout_list: WorkoutList,
        notifier: Notifier,
        geolocation: Geolocation,
        persistence: WorkoutPersistence,
        store: WorkoutStore | None = None,
        *,
        config: AppConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._map = map_view
        self._form = form
        self._list = workout_list
        self._notifier = notifier
        self._geolocation = geolocation
        self._persistence = persistence
        self._store = store if store is not None else WorkoutStore()
        self._config = config or AppConfig()
        self._clock = clock or datetime.now
        self.state = SessionState()
        self.last_persist_error: StorageWriteError | None = None

    @property
    def store(self) -> WorkoutStore:
        return self._store

    @property
    def awaiting_form_input(self) -> bool:
        return self.state.phase == "awaiting_form_input"

    def start(self) -> None:
        records = self._persistence.load()
        if records:
            self._store.load_from(records)
            logger.info(f"Restored {len(self._store)} workouts")
        for workout in self._store:
            self._list.render_entry(build_list_entry(workout))

        self._form.on_submit(lambda: self.on_form_submitted(self._form.read_fields()))
        self._form.on_kind_change(self.on_kind_changed)
        self._form.on_cancel(self.on_form_cancelled)
        self._list.on_activate(self.on_workout_list_item_activated)

        self._geolocation.get_current_position(
            self.on_geolocation_ready, self.on_geolocation_failed
        )

    def on_geolocation_ready(self, coords: Coords) -> None:
        self._map.render(coords, self._config.default_zoom)
        self._map.on_click(self.on_map_clicked)
        self.state.map_ready = True
        # Restored records are inert data; markers are only drawn here.
        for workout in self._store:
            self._map.place_marker(
                workout.coords, marker_popup_text(workout), marker_style(workout)
            )

    def on_geolocation_failed(self) -> None:
        logger.warning("Geolocation unavailable; map not initialized")
        self._notifier.notify(GEOLOCATION_MESSAGE)

    def on_map_clicked(self, coords: Coords) -> None:
        self.state.begin_entry(coords)
        self._form.show()
        self._form.focus_first_field()
        self._map.place_marker(coords, None, None)

    def on_kind_changed(self) -> None:
        self._form.toggle_cadence_elevation_visibility()

    def on_form_cancelled(self) -> None:
        # The unlabeled marker from the click stays on the map.
        self.state.reset()
        self._form.hide()

    def on_form_submitted(self, raw_fields: FormFields) -> SubmitResult:
        coords = self.state.pending_coords
        if not self.awaiting_form_input or coords is None:
            logger.debug("Form submitted without a pending map click; ignored")
            return SubmitResult(accepted=False)

        kind = str(raw_fields.get("kind", "")).strip()
        distance = raw_fields.get("distance", "")
        duration = raw_fields.get("duration", "")
        cadence = _blank_as_zero(raw_fields.get("cadence", ""))
        elevation = _blank_as_zero(raw_fields.get("elevation", ""))

        if not validate(kind, distance, duration, cadence, elevation):
            self._notifier.notify(VALIDATION_MESSAGE)
            return SubmitResult(accepted=False)

        workout = self._build_workout(kind, coords, distance, duration, cadence, elevation)
        self._store.add(workout)
        logger.info(f"Added {workout.kind} workout {workout.id} at {coords}")

        self._map.place_marker(workout.coords, marker_popup_text(workout), marker_style(workout))
        self._list.render_entry(build_list_entry(workout))
        self._form.hide()
        self.state.reset()

        persist_error = self._persist()
        return SubmitResult(accepted=True, workout=workout, persist_error=persist_error)

    def on_workout_list_item_activated(self, workout_id: str) -> None:
        workout = self._store.find_by_id(workout_id)
        if workout is None:
            logger.debug(f"No workout with id {workout_id}")
            return
        self._map.pan_to(workout.coords, self._config.default_zoom)

    def _build_workout(
        self,
        kind: str,
        coords: Coords,
        distance: object,
        duration: object,
        cadence: object,
        elevation: object,
    ) -> Workout:
        distance_km = _as_float(distance)
        duration_min = _as_float(duration)
        now = self._clock()
        if kind == "running":
            return create_running(coords, distance_km, duration_min, _as_float(cadence), now=now)
        return create_cycling(coords, distance_km, duration_min, _as_float(elevation), now=now)

    def _persist(self) -> StorageWriteError | None:
        try:
            self._persistence.save(self._store)
        except StorageWriteError as exc:
            logger.warning(f"Workout history not saved: {exc}")
            self.last_persist_error = exc
            return exc
        self.last_persist_error = None
        return None


def _blank_as_zero(raw: object) -> object:
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        return "0"
    return raw


def _as_float(raw: object) -> float:
    value = parse_number(raw)
    if value is None:
        raise ValueError(f"Not a finite number: {raw!r}")
    return value
