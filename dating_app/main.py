"""
Dating App Backend API - Main Application
"""
import logging
import sys
import traceback
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from .core.config import settings
from .core.exceptions import ServiceError
from .database import init_db, check_db_connection
from .utils.time_utils import to_utc_isoformat, utc_now
from .api.v1 import api_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    print("=" * 70)
    print("[STARTUP] Starting Dating App Backend API...")
    print("=" * 70)

    try:
        settings.check_required()

        # Initialize database
        init_db()
        print("[OK] Database initialized successfully")

        if not settings.cloudinary_configured:
            logger.warning("Cloudinary is not configured; image uploads will fail")

        print(f"[DEBUG] Debug mode: {settings.DEBUG}")
        print("=" * 70)
        print(f"[API] Running at: http://{settings.API_HOST}:{settings.API_PORT}")
        print(f"[DOCS] API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")
        print("=" * 70)

    except Exception as e:
        logger.error(f"Failed to initialize backend: {e}")
        print(f"[ERROR] Failed to initialize backend: {e}")
        raise

    yield  # Application runs here

    # Shutdown
    print("[SHUTDOWN] Shutting down Dating App Backend API...")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Dating app backend: profiles, match requests and chat between matched users",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Render domain errors raised by services."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.detail}")
    else:
        logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.detail}")

    content = {"success": False, "detail": exc.detail}
    errors = getattr(exc, "errors", None)
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed ids and bodies are client errors (400) with per-field messages."""
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", []) if part != "body") or "request"
        errors[field] = error.get("msg", "Invalid value")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "detail": "Invalid input", "errors": errors}
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unexpected errors."""
    # Generate a unique error ID for tracking
    error_id = str(uuid.uuid4())[:8]

    # Always log the full error on the server
    logger.error(
        f"[ERROR_ID: {error_id}] Unhandled exception on {request.method} {request.url.path}",
        exc_info=True
    )

    if settings.DEBUG:
        # Development: return detailed error for debugging
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "detail": str(exc),
                "error_id": error_id,
                "type": type(exc).__name__,
                "path": str(request.url.path),
                "traceback": traceback.format_exc()
            }
        )
    else:
        # Production: return generic error, hide internal details
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "detail": "An internal server error occurred. Please try again later.",
                "error_id": error_id
            }
        )


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "service": settings.PROJECT_NAME,
        "version": "1.0.0",
        "status": "running",
        "environment": settings.ENVIRONMENT,
        "docs_url": "/docs" if settings.DEBUG else "disabled",
        "features": [
            "Username/password auth with JWT",
            "Profiles with swipe images",
            "Match requests",
            "Chat between matched users",
            "Image uploads via Cloudinary"
        ]
    }


# Health check endpoint
@app.get("/health")
def health_check():
    """Health check endpoint for monitoring."""
    try:
        check_db_connection()
        return {
            "status": "healthy",
            "timestamp": to_utc_isoformat(utc_now()),
            "service": "dating-app-api",
            "version": "1.0.0",
            "services": {
                "database": {
                    "status": "connected"
                },
                "media": {
                    "status": "configured" if settings.cloudinary_configured else "not_configured"
                }
            }
        }

    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "error": str(e)
            }
        )


# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


def main():
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "dating_app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG and settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
