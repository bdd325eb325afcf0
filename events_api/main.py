"""
Main FastAPI application for the Events Registry API.
Handles application startup, middleware, error rendering and routing.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import config
from .core.exceptions import ServiceError
from .api.dependencies import db_connection
from .api.v1.router import router as api_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("Starting Events Registry API...")

    try:
        db_connection.initialize(await config.get_database_url())
        db_connection.create_tables()
        logger.info("Events Registry API started successfully")
    except Exception as e:
        logger.error(f"Failed to start Events Registry API: {e}")
        raise

    yield

    logger.info("Shutting down Events Registry API...")
    db_connection.close()


app = FastAPI(
    title="Events Registry API",
    description="Events, venues, organizers, participants, sponsors and registrations",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add request processing time to response headers."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


def _error_body(error_code: str, message: str, status_code: int, **extra) -> dict:
    return {
        "error_code": error_code,
        "error_message": message,
        "status_code": status_code,
        "timestamp": datetime.now().isoformat(),
        **extra
    }


@app.exception_handler(ServiceError)
async def service_exception_handler(request: Request, exc: ServiceError):
    """Render handler errors with their own status code."""
    if exc.status_code >= 500:
        logger.error(f"Service error: {exc.error_code} - {exc.message}", exc_info=exc)
    else:
        logger.info(f"Service error: {exc.error_code} - {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error_code, exc.message, exc.status_code)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject payloads that break a field constraint with a 400."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.info(f"Validation failed for {request.method} {request.url.path}: {details}")

    return JSONResponse(
        status_code=400,
        content=_error_body("VALIDATION_ERROR", "Request validation failed", 400, details=details)
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """HTTP exception handler for FastAPI HTTP exceptions."""
    logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("HTTP_ERROR", exc.detail, exc.status_code),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content=_error_body("INTERNAL_SERVER_ERROR", "An internal server error occurred", 500)
    )


app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": "Events Registry API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "api": "/api/v1",
            "health": "/health",
            "docs": "/docs",
            "redoc": "/redoc"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint reporting database connectivity."""
    healthy = db_connection.health_check()
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "healthy" if healthy else "unhealthy", "database": healthy}
    )
