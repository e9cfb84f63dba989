from __future__ import annotations

import math
from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from mapty.workout.model import (
    BaseWorkout,
    Cycling,
    InvalidMetric,
    Running,
    WorkoutIdClock,
    compute_pace,
    compute_speed,
    create_cycling,
    create_running,
    create_workout,
)


def test_create_running_matches_reference_example() -> None:
    workout = create_running((51.505, -0.09), 5, 25, 180)

    assert isinstance(workout, Running)
    assert isinstance(workout, BaseWorkout)
    assert workout.kind == "running"
    assert workout.coordinates == (51.505, -0.09)
    assert workout.distance_km == 5
    assert workout.duration_min == 25
    assert workout.cadence_steps_per_min == 180
    assert workout.pace_min_per_km == 5


def test_create_cycling_matches_reference_example() -> None:
    workout = create_cycling((51.505, -0.09), 20, 60, 150)

    assert isinstance(workout, Cycling)
    assert workout.kind == "cycling"
    assert workout.elevation_gain_m == 150
    assert workout.speed_kmh == 20


@pytest.mark.parametrize(
    ("distance", "duration"),
    [(1.0, 1.0), (0.3, 7.5), (42.195, 180.0), (1e-3, 1e6), (12.7, 0.5)],
)
def test_derived_metrics_follow_formulas(distance: float, duration: float) -> None:
    running = create_running((0.0, 0.0), distance, duration, 170)
    cycling = create_cycling((0.0, 0.0), distance, duration, 0)

    assert math.isclose(running.pace_min_per_km, duration / distance)
    assert math.isclose(cycling.speed_kmh, distance / (duration / 60))
    assert running.pace_min_per_km == compute_pace(distance, duration)
    assert cycling.speed_kmh == compute_speed(distance, duration)


@pytest.mark.parametrize(
    ("distance", "duration", "cadence", "field_name"),
    [
        (0, 25, 180, "distance_km"),
        (-5, 25, 180, "distance_km"),
        (5, 0, 180, "duration_min"),
        (5, 25, -1, "cadence_steps_per_min"),
        (math.nan, 25, 180, "distance_km"),
        (5, math.inf, 180, "duration_min"),
        (5, 25, math.nan, "cadence_steps_per_min"),
    ],
)
def test_create_running_rejects_bad_numbers(
    distance: float, duration: float, cadence: float, field_name: str
) -> None:
    with pytest.raises(InvalidMetric) as excinfo:
        create_running((10.0, 10.0), distance, duration, cadence)
    assert excinfo.value.field == field_name


@pytest.mark.parametrize(
    ("distance", "duration", "elevation"),
    [(0, 60, 10), (20, -1, 10), (20, 60, math.nan), (20, 60, -math.inf)],
)
def test_create_cycling_rejects_bad_numbers(
    distance: float, duration: float, elevation: float
) -> None:
    with pytest.raises(InvalidMetric):
        create_cycling((10.0, 10.0), distance, duration, elevation)


def test_cycling_allows_zero_and_negative_elevation() -> None:
    assert create_cycling((0.0, 0.0), 10, 30, 0).elevation_gain_m == 0
    assert create_cycling((0.0, 0.0), 10, 30, -120).elevation_gain_m == -120


@pytest.mark.parametrize(
    "coordinates",
    [(91.0, 0.0), (0.0, -180.5), (math.nan, 0.0), (1.0,), "51,0", None],
)
def test_invalid_coordinates_rejected(coordinates: object) -> None:
    with pytest.raises(InvalidMetric) as excinfo:
        create_running(coordinates, 5, 25, 180)  # type: ignore[arg-type]
    assert excinfo.value.field == "coordinates"


def test_non_numeric_values_rejected() -> None:
    with pytest.raises(InvalidMetric):
        create_running((0.0, 0.0), "5", 25, 180)  # type: ignore[arg-type]
    with pytest.raises(InvalidMetric):
        create_cycling((0.0, 0.0), 5, 25, True)


def test_create_workout_dispatches_on_kind() -> None:
    assert isinstance(create_workout("running", (0.0, 0.0), 5, 25, 180), Running)
    assert isinstance(create_workout("cycling", (0.0, 0.0), 5, 25, 180), Cycling)
    with pytest.raises(InvalidMetric) as excinfo:
        create_workout("swimming", (0.0, 0.0), 5, 25, 180)
    assert excinfo.value.field == "kind"


def test_workouts_are_immutable() -> None:
    workout = create_running((51.505, -0.09), 5, 25, 180)
    with pytest.raises(FrozenInstanceError):
        workout.pace_min_per_km = 1.0  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        workout.coordinates = (0.0, 0.0)  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        workout.id = "x"  # type: ignore[misc]


def test_rapid_creations_get_unique_ids() -> None:
    clock = WorkoutIdClock()
    ids = [create_running((0.0, 0.0), 5, 25, 180, clock=clock).id for _ in range(200)]

    assert len(set(ids)) == len(ids)
    assert all(len(workout_id) <= 10 for workout_id in ids)


def test_description_uses_month_and_day() -> None:
    workout = Cycling(
        coordinates=(0.0, 0.0),
        distance_km=20,
        duration_min=60,
        id="1",
        created_at=datetime(2026, 4, 14, 9, 30, tzinfo=timezone.utc),
        elevation_gain_m=10,
    )
    assert workout.description == "Cycling on April 14"
    assert workout.speed_kmh == 20


@pytest.mark.parametrize("coordinates", [(90.0, 180.0), (-90.0, -180.0), (0.0, 0.0)])
def test_coordinate_range_bounds_are_inclusive(coordinates: tuple[float, float]) -> None:
    assert create_running(coordinates, 5, 25, 180).coordinates == coordinates
    assert create_cycling(coordinates, 20, 60, 0).coordinates == coordinates


def test_direct_construction_is_validated() -> None:
    created_at = datetime(2026, 4, 14, 9, 30, tzinfo=timezone.utc)
    with pytest.raises(InvalidMetric) as excinfo:
        Running(
            coordinates=(0.0, 0.0),
            distance_km=0,
            duration_min=25,
            id="1",
            created_at=created_at,
            cadence_steps_per_min=180,
        )
    assert excinfo.value.field == "distance_km"

    with pytest.raises(InvalidMetric) as excinfo:
        Running(
            coordinates=(0.0, 0.0),
            distance_km=5,
            duration_min=25,
            id="1",
            created_at=created_at,
            cadence_steps_per_min=0,
        )
    assert excinfo.value.field == "cadence_steps_per_min"

    with pytest.raises(InvalidMetric) as excinfo:
        Cycling(
            coordinates=(0.0, 0.0),
            distance_km=5,
            duration_min=0,
            id="1",
            created_at=created_at,
            elevation_gain_m=0,
        )
    assert excinfo.value.field == "duration_min"

    with pytest.raises(TypeError):
        Running(  # type: ignore[call-arg]
            coordinates=(0.0, 0.0),
            distance_km=5,
            duration_min=25,
            id="1",
            created_at=created_at,
        )


def test_created_at_uses_local_time() -> None:
    workout = create_running((0.0, 0.0), 5, 25, 180)
    local_now = datetime.now().astimezone()

    assert workout.created_at.tzinfo is not None
    assert workout.created_at.utcoffset() == local_now.utcoffset()
    assert workout.description.endswith(f"{workout.created_at:%B} {workout.created_at.day}")
