"""Session controller wiring map clicks, the workout form and markers."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Protocol

from mapty.core.state import SessionPhase, SessionState
from mapty.map.surface import (
    LOCATION_POPUP,
    LocationUnavailable,
    MapSurface,
    popup_style_for,
)
from mapty.ui.labels import location_label, summary_label
from mapty.workout.model import (
    Coordinates,
    InvalidMetric,
    Workout,
    WorkoutIdClock,
    WorkoutKind,
    create_workout,
)

logger = logging.getLogger(__name__)

DEFAULT_ZOOM = 12
INVALID_INPUT_MESSAGE = "Inputs need to be positive numbers."
LOCATION_FAILED_MESSAGE = "Could not access your location."

FormNumber = float | int | str | None
AlertCallback = Callable[[str], None]
WorkoutCallback = Callable[[Workout], None]


@dataclass(frozen=True)
class FormInput:
    kind: str
    distance: FormNumber
    duration: FormNumber
    cadence: FormNumber = None
    elevation: FormNumber = None


class FormView(Protocol):
    def show(self) -> None:
        ...

    def hide(self) -> None:
        ...

    def focus_distance(self) -> None:
        ...

    def clear(self) -> None:
        ...

    def show_fields_for(self, kind: WorkoutKind) -> None:
        ...


def parse_form_number(raw: FormNumber) -> float:
    """Convert a raw form value; blanks and garbage become NaN."""
    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (int, float)):
        return float(raw)
    text = raw.strip()
    if not text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


class SessionController:
    def __init__(
        self,
        surface: MapSurface,
        form: FormView,
        alert: AlertCallback | None = None,
        zoom: int = DEFAULT_ZOOM,
        clock: WorkoutIdClock | None = None,
    ) -> None:
        self._surface = surface
        self._form = form
        self._alert = alert or (lambda message: logger.warning("%s", message))
        self._zoom = zoom
        self._clock = clock or WorkoutIdClock()
        self._state = SessionState()
        self._workout_listeners: list[WorkoutCallback] = []

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    @property
    def pending_coordinates(self) -> Coordinates | None:
        return self._state.pending_coordinates

    @property
    def current_location(self) -> Coordinates | None:
        return self._state.current_location

    @property
    def workouts(self) -> tuple[Workout, ...]:
        return tuple(self._state.workouts)

    def add_workout_listener(self, callback: WorkoutCallback) -> None:
        self._workout_listeners.append(callback)

    async def start(self) -> bool:
        if self._state.started:
            logger.info("Session already started (phase=%s); ignoring", self._state.phase)
            return self._state.phase != "idle"
        self._state.started = True
        self._set_phase("awaiting_location")

        try:
            coordinates = await self._surface.request_current_location()
        except LocationUnavailable as exc:
            logger.warning("Location unavailable: %s", exc)
            self._set_phase("idle")
            self._alert(f"{LOCATION_FAILED_MESSAGE} ({exc})")
            return False

        self._state.current_location = coordinates
        try:
            self._surface.center_on(coordinates, self._zoom)
            self._surface.place_marker(
                coordinates, location_label(coordinates), LOCATION_POPUP
            )
            self._surface.subscribe_to_click(self.on_map_clicked)
        except Exception as exc:
            logger.exception("Map setup failed after locating the user")
            self._set_phase("idle")
            self._alert(f"Could not prepare the map ({exc})")
            return False
        self._set_phase("ready")
        return True

    def on_map_clicked(self, coordinates: Coordinates) -> None:
        if self._state.phase != "ready":
            logger.debug("Map click ignored in phase %s", self._state.phase)
            return
        self._state.pending_coordinates = coordinates
        self._form.show()
        self._form.focus_distance()
        self._set_phase("form_open")

    def on_type_changed(self, kind: str) -> None:
        if kind not in ("running", "cycling"):
            logger.warning("Unknown activity type %r", kind)
            return
        self._state.selected_kind = kind  # type: ignore[assignment]
        if self._state.phase == "form_open":
            self._form.show_fields_for(self._state.selected_kind)

    def submit_form(self, form_input: FormInput) -> Workout | None:
        if self._state.phase != "form_open" or self._state.pending_coordinates is None:
            logger.debug("Form submit ignored in phase %s", self._state.phase)
            return None

        extra = form_input.cadence if form_input.kind == "running" else form_input.elevation
        try:
            workout = create_workout(
                form_input.kind,
                self._state.pending_coordinates,
                parse_form_number(form_input.distance),
                parse_form_number(form_input.duration),
                parse_form_number(extra),
                clock=self._clock,
            )
        except InvalidMetric as exc:
            logger.info("Rejected workout form: %s", exc)
            self._alert(INVALID_INPUT_MESSAGE)
            return None

        self._state.workouts.append(workout)
        self._state.selected_kind = workout.kind
        logger.info(
            "Logged %s workout %s at %s", workout.kind, workout.id, workout.coordinates
        )
        try:
            self._surface.place_marker(
                workout.coordinates, summary_label(workout), popup_style_for(workout.kind)
            )
        except Exception as exc:
            logger.exception("Marker placement failed for %s", workout.id)
            self._alert(f"Workout logged, but its marker could not be shown ({exc})")
        self._close_form()
        for callback in self._workout_listeners:
            try:
                callback(workout)
            except Exception as exc:
                logger.exception("Workout listener failed for %s", workout.id)
                self._alert(f"Workout logged, but the display could not be updated ({exc})")
        return workout

    def cancel_form(self) -> None:
        if self._state.phase != "form_open":
            return
        self._close_form()

    def _close_form(self) -> None:
        self._state.pending_coordinates = None
        self._form.clear()
        self._form.hide()
        self._form.show_fields_for(self._state.selected_kind)
        self._set_phase("ready")

    def _set_phase(self, phase: SessionPhase) -> None:
        logger.debug("Session phase %s -> %s", self._state.phase, phase)
        self._state.phase = phase
