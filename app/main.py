from __future__ import annotations
import math
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api import router
from app.web import router as web_router
from logging_config import configure_logging
from services.house_session import build_default_session
from services.readings_store import build_default_readings_store
from storage.kv_store import build_default_store


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    try:
        yield
    finally:
        build_default_session.cache_clear()
        build_default_readings_store.cache_clear()
        build_default_store.cache_clear()


def _finite_only(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: _finite_only(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_finite_only(item) for item in value]
    return value


async def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Echo validation errors; rejected ``inf``/``nan`` inputs are rendered as strings."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": _finite_only(jsonable_encoder(exc.errors()))},
    )


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Home Electricity Tracker",
        description="Per-house day/evening/night and solar meter readings with monthly averages.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(router)
    app.include_router(web_router)
    return app

app = create_app()
