# app/models/workout.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class SetRecord:
    reps: int
    weight: float | None = None  # kg; None means "not recorded", not zero


@dataclass(frozen=True, slots=True)
class ExerciseRecord:
    name: str
    sets: tuple[SetRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class WorkoutRecord:
    """One training session.

    Frozen, and nested collections are tuples, so a record handed out by the
    store can be shared freely without exposing the store's state.
    `id` and the timestamps are owned by the store; candidates built from a
    request leave them at their defaults.
    """
    title: str
    date: str  # YYYY-MM-DD
    notes: str = ""
    exercises: tuple[ExerciseRecord, ...] = ()
    id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
