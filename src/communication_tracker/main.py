"""
# Application Entry Point

Builds the FastAPI application for the Communication Tracker.

## Lifespan

**Startup:**
1.  **Logging**: lifecycle events are logged for observability.
2.  **Database**: `db_manager.connect()` runs as a background task. It retries on a fixed delay
    until MongoDB answers, then the lookup indexes are created. The API accepts requests
    immediately; until the connection is up, store-backed endpoints fail fast with 500 and
    `/health` reports 503.

**Shutdown:**
1.  **Cancellation**: a still-running connection task is cancelled.
2.  **Database**: the MongoDB client is closed.

## Middleware

- `CORSMiddleware` with origins from `CORS_ORIGINS`
- `RequestLoggingMiddleware` for per-request log lines
- Prometheus instrumentation exposed at `/metrics`

## Running

```bash
uvicorn communication_tracker.main:app --port 5000
# or
python -m communication_tracker.main
```
"""

import asyncio
from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.middleware.cors import CORSMiddleware
import uvicorn

from communication_tracker import __version__
from communication_tracker.config import settings
from communication_tracker.database import db_manager
from communication_tracker.errors import ValidationError, error_response
from communication_tracker.managers.logging_manager import get_logger
from communication_tracker.models.base import format_validation_errors
from communication_tracker.routes import (
    communications_router,
    companies_router,
    health_router,
    next_communications_router,
)
from communication_tracker.utils.logging_utils import (
    RequestLoggingMiddleware,
    log_application_lifecycle,
    log_error_with_context,
)

logger = get_logger()


async def connect_database() -> None:
    """Connect to MongoDB (retrying until it succeeds) and then verify indexes."""
    connect_start = time.time()
    await db_manager.connect()
    log_application_lifecycle(
        "database_connected",
        {
            "connection_duration": f"{time.time() - connect_start:.3f}s",
            "attempts": db_manager.connection_attempts,
            "database_name": settings.MONGODB_DATABASE,
        },
    )
    try:
        await db_manager.create_indexes()
        log_application_lifecycle("database_indexes_ready")
    except Exception as e:
        # Serving continues without the indexes
        log_error_with_context(e, {"operation": "create_indexes"})


def log_connect_task_failure(task: asyncio.Task) -> None:
    """Done-callback that logs an exception which ended the background connection task."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        log_error_with_context(error, {"operation": "connect_database"})


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Start the background database connection and tear it down on shutdown.

    Args:
        _app (FastAPI): The FastAPI application instance.

    Yields:
        None: Control is yielded to the application to start serving requests.
    """
    log_application_lifecycle(
        "startup_initiated",
        {"version": __version__, "debug_mode": settings.DEBUG, "port": settings.PORT},
    )

    connect_task = asyncio.create_task(connect_database())
    connect_task.add_done_callback(log_connect_task_failure)
    try:
        yield
    finally:
        shutdown_start = time.time()
        log_application_lifecycle("shutdown_initiated")
        if not connect_task.done():
            connect_task.cancel()
            try:
                await connect_task
            except asyncio.CancelledError:
                logger.info("Database connection attempt cancelled during shutdown")
        if db_manager.client is not None:
            await db_manager.disconnect()
        log_application_lifecycle("shutdown_completed", {"duration": f"{time.time() - shutdown_start:.3f}s"})


app = FastAPI(
    title="Communication Tracker API",
    description="""
    ## Communication Tracker API

    Track companies, the communications you have had with them, and the ones you plan to have.

    ### Resources
    - **Companies**: profiles with contact details and communication history
    - **Communications**: logged contact events; logging one updates the company's history
    - **Next Communications**: scheduled contact events that can be completed or cancelled
    """,
    version=__version__,
    lifespan=lifespan,
    redirect_slashes=False,
    openapi_tags=[
        {"name": "Companies", "description": "Company profiles and communication history"},
        {"name": "Communications", "description": "Logging and removing past communications"},
        {"name": "Next Communications", "description": "Scheduling, completing and cancelling future communications"},
        {"name": "System", "description": "System health endpoints"},
    ],
)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(_request: Request, exc: RequestValidationError):
    """Report malformed request bodies (e.g. invalid JSON) as 400 in the API's error shape."""
    errors = format_validation_errors(exc.errors())
    return error_response(400, "Invalid request", ValidationError("Invalid request", errors))


cors_origins = settings.cors_origins_list
logger.info("Configuring CORS with origins: %s", cors_origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

routers_config = [
    ("companies", companies_router, "Company management endpoints"),
    ("communications", communications_router, "Communication logging endpoints"),
    ("next_communications", next_communications_router, "Scheduled communication endpoints"),
    ("health", health_router, "Health check endpoint"),
]
for router_name, router, description in routers_config:
    app.include_router(router)
    logger.info("Included %s router: %s", router_name, description)

try:
    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
    ).instrument(app).expose(app, include_in_schema=False, endpoint="/metrics")
except Exception as e:
    log_error_with_context(e, {"operation": "prometheus_setup"})


def run() -> None:
    """Console entry point: serve the app with uvicorn on `HOST`:`PORT`."""
    uvicorn.run("communication_tracker.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    run()
