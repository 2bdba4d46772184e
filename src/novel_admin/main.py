"""Main entry point for the novel platform admin API."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from novel_admin.api.v1 import ROUTERS
from novel_admin.core.logging import configure_logging
from novel_admin.core.settings import settings
from novel_admin.services.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DataAccessError,
    InvalidRangeError,
    ProcedureError,
    RecordNotFoundError,
    ServiceError,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

configure_logging()

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Back-office API for the web novel and forum platform",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
for api_router in ROUTERS:
    app.include_router(api_router, prefix="/api/v1")

# Uploaded banner images and coin icons
app.mount(
    "/storage",
    StaticFiles(directory=Path(settings.storage_root), check_dir=False),
    name="storage",
)

_STATUS_BY_ERROR: tuple[tuple[type[ServiceError], int], ...] = (
    (RecordNotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationFailure, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidRangeError, status.HTTP_400_BAD_REQUEST),
    (ProcedureError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
    (DataAccessError, status.HTTP_502_BAD_GATEWAY),
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Translate service-layer failures into HTTP error responses."""
    status_code = next(
        (code for error_type, code in _STATUS_BY_ERROR if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    content: dict[str, object] = {"detail": str(exc)}
    if isinstance(exc, ValidationFailure) and exc.field:
        content["field"] = exc.field
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected (%d): %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(status_code=status_code, content=content)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("novel_admin.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
