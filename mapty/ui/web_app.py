"""NiceGUI web UI for Mapty."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

from loguru import logger
from nicegui import background_tasks, events, ui

from mapty.core.config import AppConfig
from mapty.ui.controller import FormFields, SessionController
from mapty.ui.render import WorkoutListEntry
from mapty.workout.model import Coords
from mapty.workout.persistence import FileKeyValueStore, WorkoutPersistence

GEOLOCATION_TIMEOUT_SEC = 30.0

GEOLOCATION_JS = """
new Promise((resolve) => {
  if (!navigator.geolocation) { resolve(null); return; }
  navigator.geolocation.getCurrentPosition(
    (p) => resolve([p.coords.latitude, p.coords.longitude]),
    () => resolve(null),
  );
})
"""

POPUP_OPTIONS = {
    "maxWidth": 250,
    "minWidth": 100,
    "autoClose": False,
    "closeOnClick": False,
}

HEAD_HTML = """
<style>
  :root {
    --mt-brand-1: #ffb545;
    --mt-brand-2: #00c46a;
    --mt-dark-1: #2d3439;
    --mt-dark-2: #42484d;
    --mt-light: #ececec;
  }
  body { background: var(--mt-dark-1); color: var(--mt-light); }
  .mt-sidebar { background: var(--mt-dark-1); min-width: 340px; max-width: 420px; }
  .mt-form, .mt-workout { background: var(--mt-dark-2); border-radius: 6px; }
  .mt-workout { cursor: pointer; }
  .mt-workout--running { border-left: 5px solid var(--mt-brand-2); }
  .mt-workout--cycling { border-left: 5px solid var(--mt-brand-1); }
  .running-popup .leaflet-popup-content-wrapper { border-left: 5px solid var(--mt-brand-2); }
  .cycling-popup .leaflet-popup-content-wrapper { border-left: 5px solid var(--mt-brand-1); }
</style>
"""


class LeafletMapView:
    def __init__(self, container: ui.element) -> None:
        self._container = container
        self._map: ui.leaflet | None = None

    def render(self, center: Coords, zoom: int) -> None:
        with self._container:
            self._map = ui.leaflet(center=center, zoom=zoom).classes("w-full h-full")

    def place_marker(
        self, coords: Coords, popup_content: str | None, style_class: str | None
    ) -> None:
        leaflet = self._require_map()
        marker = leaflet.marker(latlng=coords)
        if popup_content is not None:
            background_tasks.create(
                self._open_popup(leaflet, marker, popup_content, style_class)
            )

    def pan_to(self, coords: Coords, zoom: int) -> None:
        self._require_map().run_map_method(
            "setView",
            [coords[0], coords[1]],
            zoom,
            {"animate": True, "pan": {"duration": 1}},
        )

    def on_click(self, handler: Callable[[Coords], None]) -> None:
        def _on_map_click(e: events.GenericEventArguments) -> None:
            latlng = e.args["latlng"]
            handler((float(latlng["lat"]), float(latlng["lng"])))

        self._require_map().on("map-click", _on_map_click)

    async def _open_popup(
        self,
        leaflet: ui.leaflet,
        marker: Any,
        content: str,
        style_class: str | None,
    ) -> None:
        await leaflet.initialized()
        options: dict[str, Any] = dict(POPUP_OPTIONS)
        if style_class:
            options["className"] = style_class
        marker.run_method("bindPopup", content, options)
        marker.run_method("openPopup")

    def _require_map(self) -> ui.leaflet:
        if self._map is None:
            raise RuntimeError("Map has not been rendered yet")
        return self._map


class NiceGuiWorkoutForm:
    def __init__(self) -> None:
        with ui.card().classes("mt-form w-full") as self._card:
            with ui.grid(columns=2).classes("w-full gap-2"):
                self._kind = ui.select(
                    {"running": "Running", "cycling": "Cycling"},
                    value="running",
                    label="Type",
                )
                self._distance = ui.input(label="Distance", placeholder="km")
                self._duration = ui.input(label="Duration", placeholder="min")
                self._cadence = ui.input(label="Cadence", placeholder="step/min")
                self._elevation = ui.input(label="Elev Gain", placeholder="meters")
            with ui.row().classes("w-full justify-end"):
                self._cancel_btn = ui.button("Cancel").props("flat")
                self._submit_btn = ui.button("OK")
        self._elevation.set_visibility(False)
        self._card.set_visibility(False)

    def show(self) -> None:
        self._card.set_visibility(True)

    def hide(self) -> None:
        for field in (self._distance, self._duration, self._cadence, self._elevation):
            field.set_value("")
        self._card.set_visibility(False)

    def focus_first_field(self) -> None:
        self._distance.run_method("focus")

    def read_fields(self) -> FormFields:
        return FormFields(
            kind=str(self._kind.value or ""),
            distance=str(self._distance.value or ""),
            duration=str(self._duration.value or ""),
            cadence=str(self._cadence.value or ""),
            elevation=str(self._elevation.value or ""),
        )

    def toggle_cadence_elevation_visibility(self) -> None:
        self._cadence.set_visibility(not self._cadence.visible)
        self._elevation.set_visibility(not self._elevation.visible)

    def on_submit(self, handler: Callable[[], None]) -> None:
        self._submit_btn.on_click(lambda: handler())
        for field in (self._distance, self._duration, self._cadence, self._elevation):
            field.on("keydown.enter", lambda: handler())

    def on_kind_change(self, handler: Callable[[], None]) -> None:
        self._kind.on_value_change(lambda _: handler())

    def on_cancel(self, handler: Callable[[], None]) -> None:
        self._cancel_btn.on_click(lambda: handler())


class NiceGuiWorkoutList:
    def __init__(self) -> None:
        self._column = ui.column().classes("w-full gap-2")
        self._handler: Callable[[str], None] | None = None

    def render_entry(self, entry: WorkoutListEntry) -> None:
        with self._column:
            card = ui.card().classes(f"mt-workout mt-workout--{entry.kind} w-full")
            with card:
                ui.label(entry.title).classes("text-lg font-bold")
                with ui.row().classes("w-full justify-between"):
                    for row in entry.details:
                        ui.label(f"{row.icon} {row.value} {row.unit}")
        card.on("click", lambda _, workout_id=entry.workout_id: self._activate(workout_id))
        card.move(target_index=0)

    def on_activate(self, handler: Callable[[str], None]) -> None:
        self._handler = handler

    def _activate(self, workout_id: str) -> None:
        if self._handler is not None:
            self._handler(workout_id)


class NiceGuiNotifier:
    def __init__(self, anchor: ui.element) -> None:
        self._anchor = anchor

    def notify(self, message: str) -> None:
        with self._anchor:
            ui.notify(message, color="negative")


class BrowserGeolocation:
    def __init__(self, anchor: ui.element, timeout: float = GEOLOCATION_TIMEOUT_SEC) -> None:
        self._anchor = anchor
        self._timeout = timeout

    def get_current_position(
        self,
        on_success: Callable[[Coords], None],
        on_failure: Callable[[], None],
    ) -> None:
        background_tasks.create(self._locate(on_success, on_failure))

    async def _locate(
        self,
        on_success: Callable[[Coords], None],
        on_failure: Callable[[], None],
    ) -> None:
        with self._anchor:
            try:
                result = await ui.run_javascript(GEOLOCATION_JS, timeout=self._timeout)
            except (TimeoutError, asyncio.TimeoutError) as exc:
                logger.warning(f"Geolocation request timed out: {exc}")
                result = None
            if not result:
                on_failure()
                return
            on_success((float(result[0]), float(result[1])))


def run_web_ui(config: AppConfig | None = None) -> int:
    cfg = config or AppConfig()

    @ui.page("/")
    async def index() -> None:
        ui.add_head_html(HEAD_HTML)
        with ui.row().classes("w-full no-wrap").style("height: 95vh") as root:
            with ui.column().classes("mt-sidebar h-full p-4 gap-3 overflow-auto"):
                ui.label("Mapty").classes("text-2xl font-bold")
                form = NiceGuiWorkoutForm()
                workout_list = NiceGuiWorkoutList()
            map_container = ui.column().classes("h-full grow")

        persistence = WorkoutPersistence(
            FileKeyValueStore(cfg.storage_dir), key=cfg.storage_key
        )
        controller = SessionController(
            map_view=LeafletMapView(map_container),
            form=form,
            workout_list=workout_list,
            notifier=NiceGuiNotifier(root),
            geolocation=BrowserGeolocation(root),
            persistence=persistence,
            config=cfg,
        )
        await ui.context.client.connected()
        controller.start()

    logger.info(f"Serving Mapty on http://{cfg.host}:{cfg.port}")
    ui.run(host=cfg.host, port=cfg.port, reload=False, title=cfg.title)
    return 0
