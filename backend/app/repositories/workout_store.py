# app/repositories/workout_store.py
from __future__ import annotations
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from app.errors import NotFoundError
from app.models.workout import WorkoutRecord
from app.repositories.locks import ReadWriteLock

Clock = Callable[[], datetime]
MergeFn = Callable[[WorkoutRecord], WorkoutRecord]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutStore:
    """In-memory workout repository; owns ids and timestamps.

    Reads share the lock, writes (create/update/delete) hold it exclusively.
    Records are immutable, so everything returned is already a safe copy.
    With `lock_timeout` set, an operation that cannot get the lock in time
    raises StoreBusyError and leaves the map untouched.
    """

    def __init__(self, *, clock: Clock = utcnow, lock_timeout: float | None = None):
        self._lock = ReadWriteLock()
        self._workouts: dict[int, WorkoutRecord] = {}
        self._next_id = 1
        self._clock = clock
        self._last_stamp: datetime | None = None
        self._lock_timeout = lock_timeout

    def _stamp(self) -> datetime:
        # call with the write lock held; stamps never repeat or go backwards
        now = self._clock()
        if self._last_stamp is not None and now <= self._last_stamp:
            now = self._last_stamp + timedelta(microseconds=1)
        self._last_stamp = now
        return now

    # READS
    def list(self) -> list[WorkoutRecord]:
        with self._lock.read(self._lock_timeout):
            return list(self._workouts.values())

    def get(self, workout_id: int) -> Optional[WorkoutRecord]:
        with self._lock.read(self._lock_timeout):
            return self._workouts.get(workout_id)

    def __len__(self) -> int:
        with self._lock.read(self._lock_timeout):
            return len(self._workouts)

    # WRITES
    def create(self, candidate: WorkoutRecord) -> WorkoutRecord:
        with self._lock.write(self._lock_timeout):
            now = self._stamp()
            record = replace(candidate, id=self._next_id, created_at=now, updated_at=now)
            self._workouts[record.id] = record
            self._next_id += 1
            return record

    def update(self, workout_id: int, merge: MergeFn) -> WorkoutRecord:
        """Apply `merge` to the current record and store the result.

        `merge` must be pure. id and created_at always survive from the
        current record, whatever `merge` returns.
        """
        with self._lock.write(self._lock_timeout):
            current = self._workouts.get(workout_id)
            if current is None:
                raise NotFoundError()
            record = replace(
                merge(current),
                id=current.id,
                created_at=current.created_at,
                updated_at=self._stamp(),
            )
            self._workouts[workout_id] = record
            return record

    def delete(self, workout_id: int) -> bool:
        with self._lock.write(self._lock_timeout):
            return self._workouts.pop(workout_id, None) is not None

