from concurrent.futures import ThreadPoolExecutor
from dataclasses import FrozenInstanceError, replace
from datetime import datetime, timezone

import pytest

from app.errors import NotFoundError, StoreBusyError
from app.models.workout import ExerciseRecord, SetRecord, WorkoutRecord
from app.repositories.workout_store import WorkoutStore

def leg_day(**kw):
    base = WorkoutRecord(
        title="Leg Day",
        date="2025-01-01",
        exercises=(ExerciseRecord(name="Squat", sets=(SetRecord(reps=5, weight=100.0),)),),
    )
    return replace(base, **kw)

def frozen_clock():
    stamp = datetime(2026, 1, 16, 9, 0, tzinfo=timezone.utc)
    return lambda: stamp

def test_create_assigns_id_and_timestamps(store):
    w = store.create(leg_day(id=42))
    assert w.id == 1  # caller-supplied id is ignored
    assert w.created_at is not None
    assert w.created_at == w.updated_at
    assert store.get(w.id) == w

def test_ids_increase_and_are_never_reused(store):
    a = store.create(leg_day())
    b = store.create(leg_day())
    assert store.delete(b.id)
    c = store.create(leg_day())
    assert (a.id, b.id, c.id) == (1, 2, 3)
    assert store.get(b.id) is None

def test_get_missing_returns_none(store):
    assert store.get(999) is None

def test_list_is_a_snapshot(store):
    store.create(leg_day())
    snapshot = store.list()
    snapshot.clear()
    assert len(store.list()) == 1
    assert len(store) == 1

def test_records_cannot_be_mutated_from_outside(store):
    w = store.create(leg_day())
    with pytest.raises(FrozenInstanceError):
        w.title = "hacked"
    assert store.get(w.id).title == "Leg Day"

def test_delete_twice(store):
    w = store.create(leg_day())
    assert store.delete(w.id) is True
    assert store.delete(w.id) is False

def test_update_keeps_id_and_created_at():
    store = WorkoutStore(clock=frozen_clock())
    w = store.create(leg_day())
    # merge tries to rewrite identity; the store keeps the original
    u = store.update(w.id, lambda cur: replace(cur, notes="heavy", id=99, created_at=None))
    assert u.id == w.id
    assert u.created_at == w.created_at
    assert u.notes == "heavy"
    assert u.updated_at > w.updated_at  # same clock reading still moves forward
    assert store.get(w.id) == u

def test_update_missing_raises(store):
    with pytest.raises(NotFoundError):
        store.update(5, lambda cur: cur)

def test_timestamps_strictly_increase_with_coarse_clock():
    store = WorkoutStore(clock=frozen_clock())
    stamps = [store.create(leg_day()).created_at for _ in range(5)]
    assert stamps == sorted(set(stamps))

def test_concurrent_creates_are_gap_free(store):
    n = 200
    with ThreadPoolExecutor(max_workers=16) as pool:
        ids = list(pool.map(lambda _: store.create(leg_day()).id, range(n)))
    assert sorted(ids) == list(range(1, n + 1))
    assert {w.id for w in store.list()} == set(range(1, n + 1))

def test_concurrent_updates_last_writer_wins(store):
    w = store.create(leg_day(notes=""))
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(
            lambda i: store.update(w.id, lambda cur: replace(cur, notes=cur.notes + "x")),
            range(50),
        ))
    # each update saw the previous one's result as current
    assert store.get(w.id).notes == "x" * 50

def test_lock_timeout_aborts_without_mutation():
    store = WorkoutStore(lock_timeout=0.05)
    assert store._lock.acquire_write()
    try:
        with pytest.raises(StoreBusyError):
            store.create(leg_day())
        with pytest.raises(StoreBusyError):
            store.get(1)
    finally:
        store._lock.release_write()
    assert store.list() == []
    assert store.create(leg_day()).id == 1
