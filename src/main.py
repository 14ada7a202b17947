from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.routes import router as routes_router
from src.adapters.api.controllers.timetable import router as timetable_router
from src.adapters.api.dependencies import get_settings, get_timetable_store
from src.adapters.settings import env_int
from src.domain.exceptions import (
    InvalidStationIndex,
    RoutingError,
    UnknownStation,
    UnsortedTimetable,
)

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if get_settings().preload:
        try:
            get_timetable_store().refresh()
        except Exception:
            # Queries answer "no_route" until POST /timetable/refresh succeeds.
            logger.exception("Initial timetable load failed")
    yield


app = FastAPI(title="Transit CSA Router", lifespan=lifespan)
app.include_router(routes_router)
app.include_router(timetable_router)


@app.exception_handler(RoutingError)
async def routing_error_handler(request: Request, exc: RoutingError) -> JSONResponse:
    if isinstance(exc, UnknownStation):
        status_code = 404
    elif isinstance(exc, (InvalidStationIndex, UnsortedTimetable)):
        status_code = 400
    else:
        status_code = 503
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so clients can display them.

    Starlette's default 500 handler may return plain text/HTML.
    """

    logger.exception("Unhandled exception", extra={"path": str(request.url.path)})

    reveal = (os.getenv("TRANSIT_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }

    if reveal or isinstance(exc, (FileNotFoundError, RuntimeError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


def serve() -> None:
    """Run the API with uvicorn.

    Env vars:
      - API_HOST: bind address (default: 127.0.0.1)
      - API_PORT: port (default: 8000)
    """

    uvicorn.run(
        app,
        host=os.getenv("API_HOST") or "127.0.0.1",
        port=env_int("API_PORT", 8000),
    )


if __name__ == "__main__":
    serve()
