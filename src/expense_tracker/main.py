from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError

from expense_tracker.api.middleware.error_handler import (
    handle_domain_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from expense_tracker.api.middleware.logging import RequestLoggingMiddleware
from expense_tracker.api.v1 import build_router
from expense_tracker.api.v1.health import router as health_router
from expense_tracker.config import Settings
from expense_tracker.config import settings as default_settings
from expense_tracker.core.exceptions import ExpenseTrackerError
from expense_tracker.core.logging import setup_logging
from expense_tracker.core.security import TokenService
from expense_tracker.db.session import create_engine, create_session_factory


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    yield
    # Shutdown
    await app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    setup_logging(settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title="Expense Tracker API",
        description="Personal expense tracking with per-user ownership",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Built here so a weak or missing secret stops the process at startup.
    app.state.token_service = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_days=settings.jwt_expire_days,
    )
    app.state.engine = create_engine(settings)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.debug = settings.debug

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(ExpenseTrackerError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(build_router(settings.api_prefix))

    return app


app = create_app()
