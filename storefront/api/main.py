"""FastAPI main application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api import auth, settings as settings_api, upload
from storefront.api.upload import get_upload_storage
from storefront.config import settings
from storefront.core.errors import StoreUnavailable, ValidationError
from storefront.core.logging import setup_logging
from storefront.database import Base, dispose_engine, engine
from storefront import models  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # Create tables; Alembic owns schema changes in production.
    Base.metadata.create_all(bind=engine)
    get_upload_storage().ensure_root()
    logger.info(f"Upload directory: {settings.upload_dir}")
    yield
    dispose_engine()


app = FastAPI(title=settings.app_name, version="1.0.0", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _error(400, str(exc))


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    return _error(500, "Database error")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error(400, "Invalid request data")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == 404 and message == "Not Found":
        message = "API endpoint not found"
    response = _error(exc.status_code, str(message))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error(500, "Internal server error")


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(settings_api.router, prefix="/api/settings", tags=["settings"])
app.include_router(upload.router, prefix="/api/upload", tags=["upload"])

# Uploaded files; the directory is created at startup.
app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}
