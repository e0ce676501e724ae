"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from txntracker.config import settings
from txntracker.api.router import api_router
from txntracker.database import init_db
from txntracker.exceptions import ErrorKind, TrackerError, tracker_error_handler

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    logger.info("%s ready, database: %s", settings.app_name, settings.database_url)
    yield
    logger.info("%s shutting down", settings.app_name)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("%s %s invalid request body: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        content={
            "success": False,
            "error": ErrorKind.validation.value,
            "message": "Invalid request body",
        },
        status_code=400,
    )


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Personal expense tracker fed by forwarded bank SMS messages",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(TrackerError, tracker_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

# Include API router
app.include_router(api_router)


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "time": datetime.now(timezone.utc).isoformat(),
    }


def run() -> None:
    import uvicorn

    uvicorn.run("txntracker.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
