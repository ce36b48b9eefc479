# Main application entry point
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .api import auth_router, health_router, notes_router
from .config import get_settings
from .core.exceptions import StoreFailureError
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.storage import ImageStorage
from .database import Database, run_migrations

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Starting Notekeep application",
        extra={"version": __version__, "environment": settings.environment, "debug": settings.debug},
    )

    app.state.database = Database.from_settings()
    app.state.image_storage = ImageStorage.from_settings(settings)
    logger.info("Database engine ready", extra={"dialect": app.state.database.engine.dialect.name})

    yield

    # Shutdown
    logger.info("Shutting down Notekeep application")
    await app.state.database.dispose()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.app_name,
    description="Personal notes with colors, images, pinning and archiving",
    version=__version__,
    lifespan=lifespan,
)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router, prefix="/api")
app.include_router(notes_router, prefix="/api")
app.include_router(health_router, prefix="/api")


@app.exception_handler(SQLAlchemyError)
async def store_failure_handler(request: Request, exc: SQLAlchemyError):
    """Database errors become a generic 500; the cause goes to the log."""
    logger.error(
        "Database operation failed",
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path},
    )
    return await http_exception_handler(request, StoreFailureError())


# Root endpoint
@app.get("/")
async def root():
    return {"message": "Notekeep API"}


# API root endpoint for better navigation
@app.get("/api/")
async def api_root():
    return {
        "message": "Notekeep API",
        "version": __version__,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json",
        },
        "endpoints": {
            "authentication": "/api/auth/",
            "notes": "/api/notes/",
            "health": "/api/health/",
        },
    }


# Basic unprefixed health endpoint for load balancers
@app.get("/health")
async def basic_health():
    return {"status": "ok"}


def run() -> None:
    """Migrate the database, then serve."""
    import uvicorn

    run_migrations()
    uvicorn.run(
        "notekeep.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=None,
    )


if __name__ == "__main__":
    run()
