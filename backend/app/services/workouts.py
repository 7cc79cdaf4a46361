# app/services/workouts.py
"""
Request -> domain translation for workouts.

Both write paths build a complete candidate record first, validate it as a
whole and only then touch the store, so a rejected request never leaves a
half-applied change behind.
"""
from __future__ import annotations
import logging
import re
from dataclasses import replace
from datetime import date
from typing import Iterable

from app.errors import BadRequestError, NotFoundError
from app.models.workout import ExerciseRecord, SetRecord, WorkoutRecord
from app.repositories.workout_store import WorkoutStore
from app.schemas.workout import ExerciseIn, WorkoutCreate, WorkoutUpdate

log = logging.getLogger(__name__)

DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def to_exercises(items: Iterable[ExerciseIn]) -> tuple[ExerciseRecord, ...]:
    return tuple(
        ExerciseRecord(
            name=ex.name.strip(),
            sets=tuple(SetRecord(reps=s.reps, weight=s.weight) for s in ex.sets),
        )
        for ex in items
    )


def is_valid_date(value: str) -> bool:
    if not DATE_RE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_exercises(exercises: Iterable[ExerciseRecord]) -> None:
    # an empty list is allowed on purpose
    for i, ex in enumerate(exercises):
        name = ex.name.strip()
        if not name:
            raise BadRequestError(f"exercise name is required (at index {i})")
        if not ex.sets:
            raise BadRequestError(f"exercise sets must have at least 1 set for: {name}")
        for si, s in enumerate(ex.sets):
            if s.reps <= 0:
                raise BadRequestError(f"reps must be > 0 for exercise: {name}, set index {si}")
            if s.weight is not None and s.weight < 0:
                raise BadRequestError(f"weight must be >= 0 for exercise: {name}, set index {si}")


def validate_workout(candidate: WorkoutRecord) -> None:
    """Raise BadRequestError for the first problem found, checked in field order."""
    if not candidate.title:
        raise BadRequestError("title is required")
    if not candidate.date:
        raise BadRequestError("date is required")
    if not is_valid_date(candidate.date):
        raise BadRequestError("date must be YYYY-MM-DD")
    validate_exercises(candidate.exercises)


def build_candidate(payload: WorkoutCreate) -> WorkoutRecord:
    return WorkoutRecord(
        title=payload.title.strip(),
        date=payload.date.strip(),
        notes=payload.notes.strip(),
        exercises=to_exercises(payload.exercises),
    )


def merge_patch(current: WorkoutRecord, patch: WorkoutUpdate) -> WorkoutRecord:
    """Overlay the fields present in `patch` onto `current`.

    Absent fields keep their value. `exercises`, when sent, replaces the
    whole list; there is no per-exercise merge.
    """
    changes = {}
    for name, value in patch.present_fields().items():
        if name == "exercises":
            changes[name] = to_exercises(value)
        else:
            changes[name] = value.strip()
    return replace(current, **changes)


def create_workout(store: WorkoutStore, payload: WorkoutCreate) -> WorkoutRecord:
    candidate = build_candidate(payload)
    try:
        validate_workout(candidate)
    except BadRequestError as e:
        log.debug("rejected new workout: %s", e.message)
        raise
    created = store.create(candidate)
    log.info("created workout id=%s", created.id)
    return created


def get_workout(store: WorkoutStore, workout_id: int) -> WorkoutRecord:
    workout = store.get(workout_id)
    if workout is None:
        raise NotFoundError()
    return workout


def update_workout(store: WorkoutStore, workout_id: int, patch: WorkoutUpdate) -> WorkoutRecord:
    current = get_workout(store, workout_id)
    candidate = merge_patch(current, patch)
    try:
        validate_workout(candidate)
    except BadRequestError as e:
        log.debug("rejected update of workout id=%s: %s", workout_id, e.message)
        raise
    # NotFoundError here means it was deleted after the read above
    updated = store.update(workout_id, lambda _current: candidate)
    log.info("updated workout id=%s", workout_id)
    return updated


def delete_workout(store: WorkoutStore, workout_id: int) -> None:
    if not store.delete(workout_id):
        raise NotFoundError()
    log.info("deleted workout id=%s", workout_id)
