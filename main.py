from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.database import init_db
from app.core.exceptions import AppError
from app.core.logging_config import get_logger, setup_logging
from app.api.endpoints import companies, health, jobs

setup_logging(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
logger = get_logger(__name__)


def error_response(message, status_code: int) -> JSONResponse:
    """Every error leaves the API as {"error": {"message": ..., "status": ...}}"""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    logger.info("Starting up Job Board API...")
    init_db()

    yield

    # Shutdown
    logger.info("Shutting down Job Board API...")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Job postings and companies",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return error_response(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies and query strings are client errors, reported as 400
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return error_response(messages, 400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.detail, exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response("Internal server error", 500)


# Include routers
app.include_router(health.router)
app.include_router(companies.router, prefix=settings.API_V1_STR)
app.include_router(jobs.router, prefix=settings.API_V1_STR)


@app.get("/")
async def root():
    """Root endpoint - API health check"""
    return {
        "message": "Job Board API",
        "version": "1.0.0",
        "status": "healthy"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload during development
        log_level="info"
    )
