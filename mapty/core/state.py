"""Mutable state owned by a single map session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from mapty.workout.model import Coordinates, Workout, WorkoutKind

SessionPhase = Literal["idle", "awaiting_location", "ready", "form_open"]


@dataclass
class SessionState:
    phase: SessionPhase = "idle"
    started: bool = False
    current_location: Coordinates | None = None
    pending_coordinates: Coordinates | None = None
    selected_kind: WorkoutKind = "running"
    workouts: list[Workout] = field(default_factory=list)
