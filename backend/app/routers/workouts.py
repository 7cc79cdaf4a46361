from fastapi import APIRouter, Depends, Response, status
from app.deps.store import get_store  # also registers the {..:workout_id} convertor
from app.repositories.workout_store import WorkoutStore
from app.schemas.workout import ErrorRead, WorkoutCreate, WorkoutRead, WorkoutUpdate
from app.services import workouts as service

router = APIRouter(prefix="/workouts", tags=["workouts"])

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorRead},
    status.HTTP_404_NOT_FOUND: {"model": ErrorRead},
}

# response_model_exclude_none: weight is left out of the JSON when never recorded

@router.get("", response_model=list[WorkoutRead], response_model_exclude_none=True)
def list_workouts(store: WorkoutStore = Depends(get_store)):
    return store.list()


@router.post("", response_model=WorkoutRead, response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED, responses=ERROR_RESPONSES)
def create_workout(payload: WorkoutCreate, store: WorkoutStore = Depends(get_store)):
    return service.create_workout(store, payload)


@router.get("/{workout_id:workout_id}", response_model=WorkoutRead,
            response_model_exclude_none=True, responses=ERROR_RESPONSES)
def get_workout(workout_id: int, store: WorkoutStore = Depends(get_store)):
    return service.get_workout(store, workout_id)


@router.put("/{workout_id:workout_id}", response_model=WorkoutRead,
            response_model_exclude_none=True, responses=ERROR_RESPONSES)
def update_workout(
    workout_id: int,
    payload: WorkoutUpdate,
    store: WorkoutStore = Depends(get_store),
):
    return service.update_workout(store, workout_id, payload)


@router.delete("/{workout_id:workout_id}", status_code=status.HTTP_204_NO_CONTENT,
               responses=ERROR_RESPONSES)
def delete_workout(workout_id: int, store: WorkoutStore = Depends(get_store)):
    service.delete_workout(store, workout_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
