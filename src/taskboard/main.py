"""
Application entry point for the Taskboard backend
Builds the FastAPI app, wires storage and token signing, and maps errors to HTTP
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from . import __version__
from .api.routes import auth_router, tasks_router
from .config import Settings, get_settings
from .database.database import create_db_engine, init_db
from .services.token_service import Clock, TokenService
from .utils.errors import AppError
from .utils.logging import setup_logging


logger = logging.getLogger(__name__)


def _error_body(message: str, code: str, **extra) -> dict:
    return {"detail": message, "error": code, **extra}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.code),
        headers=headers,
    )


def _field_name(loc: list) -> str:
    # Drop the leading "body"/"query"/"path" segment
    return ".".join(loc[1:]) or (loc[0] if loc else "request")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and parameters are a 400, same as a service-level ValidationError."""
    errors = [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    message = "; ".join(f"{_field_name(e['loc'])}: {e['msg']}" for e in errors) or "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(message, "validation_error", errors=errors),
    )


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    clock: Optional[Clock] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Explicit settings; read from the environment when omitted
        engine: Pre-built engine (tests pass an in-memory one)
        clock: Time source for token issue/verify

    Returns:
        A ready FastAPI app with tables created
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    engine = engine or create_db_engine(settings.database_url, echo=settings.debug)
    init_db(engine)

    app = FastAPI(title="Taskboard API", version=__version__, debug=settings.debug)
    app.state.settings = settings
    app.state.engine = engine
    app.state.token_service = TokenService.from_settings(settings, clock=clock)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(tasks_router, prefix=settings.api_prefix)

    @app.get("/", include_in_schema=False)
    def health():
        return {"status": "API is running"}

    logger.info("Taskboard API ready (prefix=%s, token ttl=%ss)", settings.api_prefix, settings.access_token_ttl_seconds)
    return app


def run() -> None:
    """Serve the API with uvicorn using host/port from settings."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("taskboard.main:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
