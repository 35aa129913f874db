"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- The middleware pipeline, ending in the error boundary
- Error handlers for failures raised outside route bodies
- Logging configuration

No business logic belongs here.
"""

from typing import Optional

from fastapi import FastAPI
from starlette.middleware import Middleware

from futureself.core.config import Environment, Settings, settings
from futureself.interfaces.health import router as health_router
from futureself.interfaces.letters.router import router as letters_router
from futureself.shared.errors.handlers import (
    ErrorBoundaryMiddleware,
    register_error_handlers,
)
from futureself.shared.logging import configure_logging
from futureself.shared.security.headers import SecurityHeadersMiddleware

API_PREFIX = "/api/v1"


def build_middleware(mode: Environment) -> list[Middleware]:
    """Middleware pipeline, outermost first.

    The error boundary is the last stage so it sits directly around the
    routes and sees every failure they raise.
    """
    return [
        Middleware(SecurityHeadersMiddleware),
        Middleware(ErrorBoundaryMiddleware, mode=mode),
    ]


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        config: Settings to use; defaults to the environment-loaded settings.

    Returns:
        A fully configured FastAPI application instance.
    """
    config = config or settings
    configure_logging(level=config.log_level)

    app = FastAPI(
        title=config.project_name,
        version=config.version,
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
        middleware=build_middleware(config.environment),
    )

    # --- Error Handlers ---
    register_error_handlers(app, config.environment)

    # --- Routers ---
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(letters_router, prefix=API_PREFIX)

    return app


app = create_app()
