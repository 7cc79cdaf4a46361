# app/deps/store.py
from fastapi import Request
from starlette.convertors import Convertor, register_url_convertor

from app.repositories.workout_store import WorkoutStore


def get_store(request: Request) -> WorkoutStore:
    # one store per app instance, built in create_app()
    return request.app.state.workouts


class WorkoutIdConvertor(Convertor):
    """Positive integer id segment.

    Anything else ("abc", "0", "-1") does not match the route at all, so it
    is a 404 whatever the method.
    """
    regex = "0*[1-9][0-9]*"

    def convert(self, value: str) -> int:
        return int(value)

    def to_string(self, value: int) -> str:
        return str(value)


register_url_convertor("workout_id", WorkoutIdConvertor())
