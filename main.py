"""Main entry point for the Virtual Shell FastAPI application.

This module creates and configures the FastAPI app instance that serves the REST API
for the virtual filesystem and its command shell.

To run the development server:
    uv run uvicorn main:app --reload

To run in production:
    uv run uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_filesystem, shutdown_filesystem
from api.exceptions import (
    FileSystemOperationError,
    filesystem_error_handler,
    generic_exception_handler,
    runtime_error_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import filesystem as filesystem_routes
from api.routes import shell as shell_routes
from models.settings import ShellSettings


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    This context manager runs code at startup (before yield) and shutdown (after yield).

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = ShellSettings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Startup: load the snapshot (or the default layout)
    logger.info("Starting Virtual Shell - loading filesystem...")
    initialize_filesystem(settings)

    yield  # App runs and handles requests here

    # Shutdown: every mutation is already persisted
    logger.info("Shutting down Virtual Shell")
    shutdown_filesystem()


# Create the FastAPI application instance
app = FastAPI(
    title="Virtual Shell",
    description="API for a persistent virtual filesystem and its command shell",
    version="0.1.0",
    lifespan=lifespan,
)

# Register exception handlers
# Order matters: specific exceptions before general ones
app.add_exception_handler(FileSystemOperationError, filesystem_error_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Register route modules
app.include_router(shell_routes.router)
app.include_router(filesystem_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message.

    Returns:
        A dictionary with a welcome message.
    """
    return {
        "message": "Welcome to the Virtual Shell API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring.

    Returns:
        A dictionary indicating the service is healthy.
    """
    return {"status": "healthy"}
