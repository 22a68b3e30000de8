from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from src.adapter.services.database import Database
from src.adapter.services.session_sweeper import SessionSweepScheduler
from src.libs.result import Error
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


def _is_debug(request: Request) -> bool:
    return bool(getattr(request.app.state.config, "DEBUG", False))


async def handle_client_error(request: Request, exc: ClientError):
    error = exc.base_error
    logger.warning(f"Client error: {error.code} on {request.method} {request.url.path}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def handle_server_error(request: Request, exc: ServerError):
    error = exc.base_error
    logger.error(f"Server error: {error.code} - {error.message}")
    return JSONResponse(
        status_code=exc.status_code, content=exc.to_body(debug=_is_debug(request))
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        details.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return await handle_client_error(
        request, ClientError(Error("VALIDATION_FAILED", "Invalid request", details))
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error", exc_info=exc)
    server_error = ServerError(Error("DATABASE_ERROR", str(exc)))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=server_error.to_body(debug=_is_debug(request)),
    )


def create_app(ApplicationConfig, database: Optional[Database] = None) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    if database is None:
        database = Database(ApplicationConfig.DB_URI)

    sweeper = SessionSweepScheduler(
        database,
        interval_minutes=ApplicationConfig.SESSION_SWEEP_INTERVAL_MINUTES,
        enabled=ApplicationConfig.SESSION_SWEEP_ENABLED,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.CREATE_TABLES_ON_STARTUP:
            await database.create_all()
        await sweeper.start()
        yield
        await sweeper.stop()
        await database.dispose()

    app = FastAPI(title="Finly API", version="0.1.0", lifespan=lifespan)
    app.state.config = ApplicationConfig
    app.state.database = database
    app.state.sweeper = sweeper

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, auth, health_check, user

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(user.router, prefix=prefix, tags=["User"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)

    return app
