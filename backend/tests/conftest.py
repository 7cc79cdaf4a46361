"""
Every test gets its own app and store, so ids always start at 1.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.repositories.workout_store import WorkoutStore


@pytest.fixture
def store():
    return WorkoutStore()


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store))


@pytest.fixture
def push_day():
    return {
        "title": "Push Day",
        "date": "2026-01-16",
        "notes": "",
        "exercises": [{"name": "Bench Press", "sets": [{"reps": 8, "weight": 60}]}],
    }
