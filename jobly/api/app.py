"""
FastAPI application -- Jobly API server.

Run locally:
    jobly serve --reload
or
    uvicorn jobly.api.app:app --reload --port 3001
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .. import __version__
from ..config import get_settings
from ..database import close_database, init_database
from ..errors import JoblyError
from ..logger import configure_logger, get_logger
from .routes import companies, jobs


def _error_body(message, status: int) -> dict:
    return {"error": {"message": message, "status": status}}


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """
    Build the API.

    Args:
        database_url: SQLAlchemy URL; DATABASE_URL from settings when None
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logger(get_settings())
        init_database(database_url)
        yield
        get_logger().log_metrics_summary()
        close_database()

    app = FastAPI(
        title="Jobly API",
        version=__version__,
        description="Companies and jobs",
        lifespan=lifespan,
    )

    @app.exception_handler(JoblyError)
    async def jobly_error_handler(request: Request, exc: JoblyError):
        logger = get_logger()
        logger.record_error(type(exc).__name__)
        logger.info(
            "Request failed",
            method=request.method,
            path=request.url.path,
            status=exc.status,
            reason=exc.message,
        )
        return JSONResponse(status_code=exc.status, content=_error_body(exc.message, exc.status))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        messages = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        get_logger().record_error("ValidationError")
        return JSONResponse(status_code=400, content=_error_body(messages, 400))

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        # Duplicate company name or unknown company handle.
        logger = get_logger()
        logger.record_error(type(exc).__name__)
        logger.warning(
            "Constraint violation",
            method=request.method,
            path=request.url.path,
            error=str(exc.orig),
        )
        return JSONResponse(status_code=400, content=_error_body("Constraint violation", 400))

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger = get_logger()
        logger.record_error(type(exc).__name__)
        logger.error(
            "Storage failure",
            method=request.method,
            path=request.url.path,
            error=str(exc),
        )
        return JSONResponse(status_code=500, content=_error_body("Internal Server Error", 500))

    app.include_router(companies.router)
    app.include_router(jobs.router)

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
