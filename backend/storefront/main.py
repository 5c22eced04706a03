"""
Storefront Backend: FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn storefront.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌───────────────────┐ ┌────────────┐  │
    │  │ Req ID   │→│ Logging + counter │→│ CORS       │  │
    │  └──────────┘ └───────────────────┘ └────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌─────────┐ ┌────────┐ ┌───────┐ ┌──────────────┐  │
    │  │ catalog │ │ orders │ │ users │ │ / and health │  │
    │  └─────────┘ └────────┘ └───────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ValidationError→400 │ NotFound→404 │ DB→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log where the server listens
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront import __version__
from storefront.config import settings
from storefront.database import dispose_engine
from storefront.exceptions import (
    DatabaseError,
    NotFoundError,
    PartialWriteError,
    StorefrontError,
    ValidationError,
)
from storefront.middleware.logging import RequestLoggingMiddleware
from storefront.middleware.request_id import RequestIDMiddleware, request_id_var
from storefront.routes import catalog, health, orders, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s on stdout.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request/per-statement chatter from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Storefront backend %s starting up...", __version__)
    if settings.transactional_writes:
        logger.info("Order writes run inside a single transaction")
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Storefront backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy onto HTTP responses.

        ValidationError    → 400
        NotFoundError      → 404
        PartialWriteError  → 500 (logged with the completed step count)
        DatabaseError      → 500
        StorefrontError    → 500
        Exception          → 500

    Database details are logged server-side only; clients get a generic
    message and the request id.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(PartialWriteError)
    async def handle_partial_write(request: Request, exc: PartialWriteError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Partial write for order %s (%d/%d steps committed) | Context: %s",
            rid,
            exc.order_id,
            exc.completed_steps,
            exc.total_steps,
            exc.context,
            exc_info=exc.__cause__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Database error: %s | Context: %s",
            rid,
            exc.message,
            exc.context,
            exc_info=exc.__cause__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(StorefrontError)
    async def handle_storefront_error(request: Request, exc: StorefrontError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Products, categories, users and orders backed by a relational store.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Order matters! Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → route
    # Why RequestID outermost: the logging middleware and every exception
    # handler read the id from its ContextVar
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        # Why expose: browsers hide non-safelisted headers from scripts, and
        # clients quote this id when reporting errors
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(orders.router)
    app.include_router(users.router)

    return app


# uvicorn expects `storefront.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
    )
