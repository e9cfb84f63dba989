"""NiceGUI web UI for Mapty."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from nicegui import Client, ui

from mapty.map.leaflet import DEFAULT_CENTER, LeafletSurface
from mapty.ui.controller import DEFAULT_ZOOM, FormInput, SessionController
from mapty.ui.labels import metric_line
from mapty.workout.model import Coordinates, Workout, WorkoutKind

logger = logging.getLogger(__name__)

KIND_LABELS: dict[str, str] = {"running": "Running", "cycling": "Cycling"}


@dataclass(frozen=True)
class WebConfig:
    host: str = "127.0.0.1"
    port: int = 8080
    zoom: int = DEFAULT_ZOOM
    location_timeout_sec: float = 10.0
    simulated_location: Coordinates | None = None


class WorkoutFormPanel:
    """Sidebar form; rows for cadence and elevation swap with the type."""

    def __init__(self) -> None:
        with ui.card().classes("w-full mapty-form") as self.card:
            with ui.row().classes("w-full items-end gap-2"):
                self.type_select = ui.select(KIND_LABELS, value="running", label="Type")
                self.distance_input = ui.number("Distance (km)", min=0)
                self.duration_input = ui.number("Duration (min)", min=0)
                self.cadence_input = ui.number("Cadence (step/min)", min=0)
                self.elevation_input = ui.number("Elev Gain (m)")
            with ui.row().classes("w-full justify-end gap-2"):
                self.cancel_btn = ui.button("Cancel").props("outline")
                self.submit_btn = ui.button("OK").props("color=primary")
        self.show_fields_for("running")
        self.hide()

    @property
    def kind(self) -> str:
        return str(self.type_select.value or "running")

    def values(self) -> FormInput:
        return FormInput(
            kind=self.kind,
            distance=self.distance_input.value,
            duration=self.duration_input.value,
            cadence=self.cadence_input.value,
            elevation=self.elevation_input.value,
        )

    def show(self) -> None:
        self.card.set_visibility(True)

    def hide(self) -> None:
        self.card.set_visibility(False)

    def focus_distance(self) -> None:
        self.distance_input.run_method("focus")

    def clear(self) -> None:
        for field in (
            self.distance_input,
            self.duration_input,
            self.cadence_input,
            self.elevation_input,
        ):
            field.value = None

    def show_fields_for(self, kind: WorkoutKind) -> None:
        self.cadence_input.set_visibility(kind == "running")
        self.elevation_input.set_visibility(kind == "cycling")


def _render_workout_item(container: ui.column, workout: Workout) -> None:
    with container:
        with ui.card().classes(f"w-full workout workout--{workout.kind}") as item:
            ui.label(workout.description).classes("text-base font-semibold")
            ui.label(metric_line(workout)).classes("text-sm")
    item.move(target_index=0)


def _build_page(config: WebConfig) -> Any:
    async def index(client: Client) -> None:
        with ui.row().classes("w-full h-screen no-wrap gap-0"):
            with ui.column().classes("w-1/3 h-full p-4 gap-3 mapty-sidebar"):
                ui.label("MAPTY").classes("text-xl font-semibold tracking-wide")
                status_label = ui.label("Waiting for your location...").classes("text-sm")
                form = WorkoutFormPanel()
                workout_list = ui.column().classes("w-full gap-2")
            leaflet = ui.leaflet(center=DEFAULT_CENTER, zoom=config.zoom).classes(
                "w-2/3 h-full"
            )

        surface = LeafletSurface(
            leaflet,
            location_timeout_sec=config.location_timeout_sec,
            simulated_location=config.simulated_location,
        )
        controller = SessionController(
            surface,
            form,
            alert=lambda message: ui.notify(message, color="negative"),
            zoom=config.zoom,
        )
        controller.add_workout_listener(
            lambda workout: _render_workout_item(workout_list, workout)
        )

        def on_submit() -> None:
            controller.submit_form(form.values())

        form.type_select.on_value_change(lambda e: controller.on_type_changed(str(e.value)))
        form.submit_btn.on_click(on_submit)
        form.cancel_btn.on_click(controller.cancel_form)
        for field in (
            form.distance_input,
            form.duration_input,
            form.cadence_input,
            form.elevation_input,
        ):
            field.on("keydown.enter", on_submit)

        await client.connected()
        if await controller.start():
            status_label.text = "Click on the map to log a workout"
        else:
            status_label.text = "Map unavailable: location access failed"

    return index


def run_web_ui(config: WebConfig | None = None) -> int:
    config = config or WebConfig()
    ui.add_head_html(
        """
        <style>
          .mapty-sidebar { background: #2d3439; color: #ececec; }
          .workout--running { border-left: 5px solid #00c46a; }
          .workout--cycling { border-left: 5px solid #ffb545; }
          .running-popup .leaflet-popup-content-wrapper { border-left: 5px solid #00c46a; }
          .cycling-popup .leaflet-popup-content-wrapper { border-left: 5px solid #ffb545; }
          .location-popup .leaflet-popup-content-wrapper { border-left: 5px solid #38bdf8; }
        </style>
        """,
        shared=True,
    )
    ui.page("/")(_build_page(config))
    logger.info("Serving Mapty on http://%s:%d", config.host, config.port)
    ui.run(host=config.host, port=config.port, reload=False, title="Mapty")
    return 0
