from datetime import datetime
from typing import Any
from pydantic import BaseModel, ConfigDict, Field

# Requests are decoded strictly: unknown keys anywhere in the body are rejected
# and values are not coerced ("8" or true is not a rep count).
# Value checks (blank title, reps > 0, ...) live in app.services.workouts so the
# error messages stay stable and first-failure ordering is under our control.
_strict = ConfigDict(extra="forbid", strict=True)


class SetIn(BaseModel):
    model_config = _strict
    reps: int
    weight: float | None = None


class ExerciseIn(BaseModel):
    model_config = _strict
    name: str
    sets: list[SetIn] = []


class WorkoutCreate(BaseModel):
    model_config = _strict
    title: str = ""
    date: str = ""
    notes: str = ""
    exercises: list[ExerciseIn] = []


class WorkoutUpdate(BaseModel):
    """Patch body; a field counts as present only if sent with a non-null value."""
    model_config = _strict
    title: str | None = None
    date: str | None = None
    notes: str | None = None
    exercises: list[ExerciseIn] | None = None

    def present_fields(self) -> dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class SetRead(BaseModel):
    reps: int
    weight: float | None = None

    model_config = {"from_attributes": True}


class ExerciseRead(BaseModel):
    name: str
    sets: list[SetRead]

    model_config = {"from_attributes": True}


class WorkoutRead(BaseModel):
    id: int
    title: str
    date: str
    notes: str
    exercises: list[ExerciseRead]
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = {"from_attributes": True}


class ErrorRead(BaseModel):
    error: str
