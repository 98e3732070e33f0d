import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import auth, health, projects, statuses, tasks
from app.config import settings
from app.db import init_db
from app.logger import request_id_var, setup_logging

setup_logging(level=settings.log_level, log_file=settings.log_file)
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    logger.info("Starting application...")
    init_db()

    yield

    logger.info("Application shutdown complete")


async def tag_request(request: Request, call_next):
    """Bind a request id to the logging context and echo it back."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
    token = request_id_var.set(request_id)
    try:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.0f} ms)")
    finally:
        request_id_var.reset(token)

    response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are plain validation failures (400)."""
    errors = jsonable_encoder(exc.errors())
    logger.warning(f"Rejected {request.method} {request.url.path}: {len(errors)} invalid field(s)")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": errors})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Task Tracker Backend",
        description="Projects, statuses and tasks behind bearer-token authentication",
        version="1.0.0",
        lifespan=app_lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(tag_request)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(statuses.router)
    app.include_router(tasks.router)
    app.include_router(projects.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
