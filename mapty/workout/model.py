"""Workout domain models."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Literal, Union

WorkoutKind = Literal["running", "cycling"]
Coordinates = tuple[float, float]

WORKOUT_KINDS: tuple[WorkoutKind, ...] = ("running", "cycling")


class InvalidMetric(ValueError):
    """Raised when a workout field is not a usable number."""

    def __init__(self, field_name: str, value: object, reason: str) -> None:
        super().__init__(f"{field_name} {reason} (got {value!r})")
        self.field = field_name
        self.value = value


class WorkoutIdClock:
    """Hands out millisecond-based ids, bumping when creations collide."""

    def __init__(self) -> None:
        self._last_ms = 0

    def next_id(self) -> str:
        now_ms = time.time_ns() // 1_000_000
        self._last_ms = max(now_ms, self._last_ms + 1)
        return str(self._last_ms)[-10:]


_default_clock = WorkoutIdClock()


@dataclass(frozen=True)
class BaseWorkout:
    """Common workout record; fields are validated and normalized on construction."""

    coordinates: Coordinates
    distance_km: float
    duration_min: float
    id: str
    created_at: datetime

    kind: ClassVar[WorkoutKind]

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", _validate_coordinates(self.coordinates))
        object.__setattr__(self, "distance_km", _positive("distance_km", self.distance_km))
        object.__setattr__(self, "duration_min", _positive("duration_min", self.duration_min))

    @property
    def description(self) -> str:
        return f"{self.kind.capitalize()} on {self.created_at:%B} {self.created_at.day}"


@dataclass(frozen=True)
class Running(BaseWorkout):
    cadence_steps_per_min: float
    pace_min_per_km: float = field(init=False)

    kind: ClassVar[WorkoutKind] = "running"

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(
            self,
            "cadence_steps_per_min",
            _positive("cadence_steps_per_min", self.cadence_steps_per_min),
        )
        object.__setattr__(
            self, "pace_min_per_km", compute_pace(self.distance_km, self.duration_min)
        )


@dataclass(frozen=True)
class Cycling(BaseWorkout):
    elevation_gain_m: float
    speed_kmh: float = field(init=False)

    kind: ClassVar[WorkoutKind] = "cycling"

    def __post_init__(self) -> None:
        super().__post_init__()
        # Descents are allowed, so only finiteness is checked here.
        object.__setattr__(
            self, "elevation_gain_m", _finite("elevation_gain_m", self.elevation_gain_m)
        )
        object.__setattr__(
            self, "speed_kmh", compute_speed(self.distance_km, self.duration_min)
        )


Workout = Union[Running, Cycling]


def compute_pace(distance_km: float, duration_min: float) -> float:
    """Minutes per kilometer."""
    return duration_min / distance_km


def compute_speed(distance_km: float, duration_min: float) -> float:
    """Kilometers per hour."""
    return distance_km / (duration_min / 60)


def _created_now() -> datetime:
    return datetime.now().astimezone()


def create_running(
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    cadence_steps_per_min: float,
    *,
    clock: WorkoutIdClock | None = None,
) -> Running:
    return Running(
        coordinates=coordinates,
        distance_km=distance_km,
        duration_min=duration_min,
        id=(clock or _default_clock).next_id(),
        created_at=_created_now(),
        cadence_steps_per_min=cadence_steps_per_min,
    )


def create_cycling(
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    elevation_gain_m: float,
    *,
    clock: WorkoutIdClock | None = None,
) -> Cycling:
    return Cycling(
        coordinates=coordinates,
        distance_km=distance_km,
        duration_min=duration_min,
        id=(clock or _default_clock).next_id(),
        created_at=_created_now(),
        elevation_gain_m=elevation_gain_m,
    )


def create_workout(
    kind: str,
    coordinates: Coordinates,
    distance_km: float,
    duration_min: float,
    extra: float,
    *,
    clock: WorkoutIdClock | None = None,
) -> Workout:
    """Build the variant for ``kind``; ``extra`` is cadence or elevation gain."""
    if kind == "running":
        return create_running(coordinates, distance_km, duration_min, extra, clock=clock)
    if kind == "cycling":
        return create_cycling(coordinates, distance_km, duration_min, extra, clock=clock)
    raise InvalidMetric("kind", kind, "must be one of " + ", ".join(WORKOUT_KINDS))


def _finite(field_name: str, raw: object) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise InvalidMetric(field_name, raw, "must be a number")
    value = float(raw)
    if not math.isfinite(value):
        raise InvalidMetric(field_name, raw, "must be finite")
    return value


def _positive(field_name: str, raw: object) -> float:
    value = _finite(field_name, raw)
    if value <= 0:
        raise InvalidMetric(field_name, raw, "must be > 0")
    return value


def _validate_coordinates(raw: object) -> Coordinates:
    try:
        lat_obj, lng_obj = raw  # type: ignore[misc]
    except (TypeError, ValueError) as exc:
        raise InvalidMetric("coordinates", raw, "must be a (lat, lng) pair") from exc
    lat = _finite("coordinates", lat_obj)
    lng = _finite("coordinates", lng_obj)
    if not -90.0 <= lat <= 90.0:
        raise InvalidMetric("coordinates", raw, "latitude must be within [-90, 90]")
    if not -180.0 <= lng <= 180.0:
        raise InvalidMetric("coordinates", raw, "longitude must be within [-180, 180]")
    return (lat, lng)
