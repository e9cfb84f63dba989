"""Display strings for popups and the workout list."""

from __future__ import annotations

from html import escape

from mapty.workout.model import Coordinates, Cycling, Running, Workout

KIND_ICONS = {"running": "🏃‍♂️", "cycling": "🚴‍♀️"}


def _fmt_number(value: float, digits: int = 1) -> str:
    return f"{value:.{digits}f}"


def fmt_coordinates(coordinates: Coordinates) -> str:
    lat, lng = coordinates
    return f"<b>Latitude:</b> {lat}<br><b>Longitude:</b> {lng}"


def metric_line(workout: Workout) -> str:
    if isinstance(workout, Running):
        return (
            f"{KIND_ICONS['running']} {_fmt_number(workout.distance_km)} km | "
            f"{_fmt_number(workout.duration_min, 0)} min | "
            f"{_fmt_number(workout.pace_min_per_km)} min/km | "
            f"{_fmt_number(workout.cadence_steps_per_min, 0)} spm"
        )
    if isinstance(workout, Cycling):
        return (
            f"{KIND_ICONS['cycling']} {_fmt_number(workout.distance_km)} km | "
            f"{_fmt_number(workout.duration_min, 0)} min | "
            f"{_fmt_number(workout.speed_kmh)} km/h | "
            f"{_fmt_number(workout.elevation_gain_m, 0)} m"
        )
    raise TypeError(f"Unsupported workout type: {type(workout).__name__}")


def location_label(coordinates: Coordinates) -> str:
    return f"<b>You are here</b><br>{fmt_coordinates(coordinates)}"


def summary_label(workout: Workout) -> str:
    """Popup HTML for a logged workout; always carries the coordinate pair."""
    return (
        f"<b>{escape(workout.description)}</b><br>"
        f"{escape(metric_line(workout))}<br>"
        f"{fmt_coordinates(workout.coordinates)}"
    )
