# app/main.py
import time
import logging
import uuid
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.errors import MalformedRouteError, MethodNotAllowedError, WorkoutAPIError
from app.repositories.workout_store import WorkoutStore
from app.routers.workouts import router as workouts_router
from app.settings import Settings, get_settings

log = logging.getLogger("uvicorn")


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def describe_validation_error(exc: RequestValidationError) -> str:
    """First decoding problem of a request body, in one line."""
    errors = exc.errors()
    if not errors:
        return "Invalid JSON"
    first = errors[0]
    loc = [str(p) for p in first.get("loc", ()) if p != "body"]
    kind = first.get("type")
    if kind == "json_invalid" or (kind == "missing" and not loc):
        return "Invalid JSON"
    if kind == "extra_forbidden":
        return f'unknown field "{loc[-1]}"'
    where = ".".join(loc) or "body"
    return f"invalid value for {where}: {first.get('msg')}"


async def handle_workout_error(request: Request, exc: WorkoutAPIError):
    return error_response(exc.status_code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    return error_response(status.HTTP_400_BAD_REQUEST, describe_validation_error(exc))


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    # no route matched (bad id segment included), or the route lacks this method
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = MalformedRouteError.default_message
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = MethodNotAllowedError.default_message
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


def create_app(
    settings: Settings | None = None,
    store: WorkoutStore | None = None,
) -> FastAPI:
    if settings is None:
        settings = get_settings()
    app = FastAPI(
        title="Gym API",
        version=settings.API_VERSION,
        redirect_slashes=False,
        openapi_tags=[
            {"name": "workouts", "description": "Workouts with their exercises and sets"},
        ],
    )
    if store is None:
        store = WorkoutStore(lock_timeout=settings.STORE_LOCK_TIMEOUT_SECONDS)
    app.state.workouts = store

    # CORS (relax for local dev; tighten origins in prod via env)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def add_request_id_and_log(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = req_id
        log.info("rid=%s %s %s -> %s in %.1fms",
                 req_id, request.method, request.url.path, response.status_code, duration_ms)
        return response

    app.add_exception_handler(WorkoutAPIError, handle_workout_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(workouts_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    log.info("Gym API starting on http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT,
                log_level=settings.LOG_LEVEL)


if __name__ == "__main__":
    run()
