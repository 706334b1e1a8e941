"""
Main entrypoint for the Flights API.

This module assembles the FastAPI application, sets up logging,
creates the in‑memory flight store, registers the exception handlers
that map domain errors to HTTP responses and includes versioned
routers.  The ``create_app`` function builds and configures the app,
which is then instantiated at module import time as ``app``, e.g.::

    uvicorn flights_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.exceptions import FlightsAPIError
from .core.logging_config import configure_logging
from .core.store import FlightStore
from .schemas.response import error_response

logger = logging.getLogger(__name__)


def _error_field(loc) -> str:
    """Name the field an error points at, e.g. ``("body", "flightName")``.

    Errors with no field after the location (an unparsable JSON body,
    a missing body) are keyed by the location itself, e.g. ``"body"``.
    """
    names = [part for part in loc[1:] if isinstance(part, str)]
    return names[-1] if names else str(loc[0])


def register_exception_handlers(app: FastAPI) -> None:
    """Wrap every failure in the standard ``success=false`` envelope."""

    @app.exception_handler(FlightsAPIError)
    async def flights_api_error_handler(request: Request, exc: FlightsAPIError):
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = {_error_field(err["loc"]): err["msg"] for err in exc.errors()}
        return error_response(status.HTTP_400_BAD_REQUEST, "Validation error", errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return error_response(exc.status_code, f"Route not found: {request.url.path}")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"ERROR INTERNO: {exc}")


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[FlightStore] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the environment‑derived defaults.
    store : Optional[FlightStore]
        Store to serve.  When omitted a new one is created, seeded
        with the sample flights if ``seed_sample_data`` is enabled.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    configure_logging(app_settings)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
    )
    app.state.flight_store = store if store is not None else FlightStore(seed=app_settings.seed_sample_data)

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=app_settings.api_prefix)

    logger.info("%s %s ready", app_settings.project_name, app_settings.api_version)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
