"""
Job Board - Main FastAPI application
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from jobboard.core.config import settings
from jobboard.core.database import init_db
from jobboard.core.logging_config import configure_logging
from jobboard.core.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    ExceptionHandlerMiddleware,
    error_response,
)
from jobboard.core.exceptions import JobBoardException
from jobboard.core.storage import storage
from jobboard.auth.router import router as auth_router
from jobboard.users.router import router as users_router
from jobboard.jobs.router import router as jobs_router
from jobboard.applications.router import router as applications_router
from jobboard.notifications.router import router as notifications_router
from jobboard.reports.router import router as reports_router
from jobboard.admin.router import router as admin_router

# Configure logging
configure_logging()
logger = structlog.get_logger()

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Job board with employer verification and moderated postings",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

# Add middleware
app.add_middleware(CorrelationIDMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(ExceptionHandlerMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(JobBoardException)
async def jobboard_exception_handler(request: Request, exc: JobBoardException):
    """Handle application exceptions"""
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and parameters get the standard 400 envelope"""
    errors = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "message": "Invalid request data",
                "details": {"errors": errors},
                "type": "ValidationError",
            }
        },
    )


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/api/docs",
    }


# Include routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(jobs_router)
app.include_router(applications_router)
app.include_router(notifications_router)
app.include_router(reports_router)
app.include_router(admin_router)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    logger.info("application_starting", version=settings.APP_VERSION)

    storage.ensure_dirs()

    # Initialize database
    try:
        init_db()
    except Exception as e:
        logger.error("database_init_failed", error=str(e))


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("application_shutting_down")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "jobboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
