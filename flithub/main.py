"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from flithub.api.v1 import api_router
from flithub.core.config import get_settings
from flithub.schemas.common import HealthResponse
from flithub.services.exceptions import (
    ForbiddenError,
    IdentityServiceError,
    ServiceError,
    UnauthorizedError,
    ValidationError,
)

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"{settings.app_name} {settings.app_version} starting")
    # Schema is managed by Alembic migrations
    yield


app = FastAPI(
    title=settings.app_name,
    description="Bulk import and reconciliation of financial-literacy resources and providers",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handlers for service layer exceptions
@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    """Convert ValidationError to 400 response."""
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed top-level bodies are 400, like an empty batch."""
    messages = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{loc}: {error.get('msg')}")
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages)})


@app.exception_handler(UnauthorizedError)
async def unauthorized_exception_handler(request: Request, exc: UnauthorizedError):
    """Convert UnauthorizedError to 401 response."""
    return JSONResponse(
        status_code=401,
        content={"detail": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(ForbiddenError)
async def forbidden_exception_handler(request: Request, exc: ForbiddenError):
    """Convert ForbiddenError to 403 response."""
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(IdentityServiceError)
async def identity_exception_handler(request: Request, exc: IdentityServiceError):
    """Convert IdentityServiceError to 503 response."""
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.exception_handler(ServiceError)
async def service_exception_handler(request: Request, exc: ServiceError):
    """Convert generic ServiceError (incl. ReferenceDataError) to 500 response."""
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.get("/health", tags=["Health"], response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", app=settings.app_name, version=settings.app_version)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "api": settings.api_v1_prefix,
    }


app.include_router(api_router, prefix=settings.api_v1_prefix)
