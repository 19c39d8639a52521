"""
FastAPI application for role-rag.

create_app() assembles routers, middleware and error handlers around a
ServiceContainer. The container is either passed in (tests, embedding
the app elsewhere) or built once in the lifespan hook from config.

Every error response has the shape {"error": message}:
    malformed input       → 400
    HTTPException         → its own status
    anything else         → 500 {"error": "Internal Server Error"}

Usage:
    uvicorn --factory role_rag.api.app:app --port 3001
    # or
    role-rag serve
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import role_rag
from role_rag.api.middleware import RequestLoggingMiddleware
from role_rag.api.routers import chat_router, health_router, reports_router
from role_rag.config import ServiceConfig
from role_rag.exceptions import ValidationError
from role_rag.services import ServiceContainer, build_services
from role_rag.utils.logger import configure_logging

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _describe_validation_error(exc)})

    @app.exception_handler(ValidationError)
    async def domain_validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_app(
    services: Optional[ServiceContainer] = None,
    config: Optional[ServiceConfig] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        services: A ready container. When omitted, one is built from
            config during startup.
        config: Service configuration. Defaults to the container's own
            config, then to ServiceConfig.from_env().
    """
    if config is None:
        config = services.config if services is not None else ServiceConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(config.server.log_level)
        if getattr(app.state, "services", None) is None:
            logger.info("Building services...")
            app.state.services = build_services(config)
        yield
        logger.info("Shutting down")

    app = FastAPI(
        title="role-rag",
        description="Role-aware retrieval-augmented question answering",
        version=role_rag.__version__,
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(chat_router)
    app.include_router(reports_router)

    return app


def app() -> FastAPI:
    """Factory for `uvicorn --factory role_rag.api.app:app`."""
    return create_app()
