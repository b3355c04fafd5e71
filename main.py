"""Atelier - Art Marketplace API."""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.config import get_settings
from app.database import SessionLocal
from app.exceptions import AppError
from app.rate_limit import limiter
from app.routers import admin_router, artworks_router, auth_router, categories_router, contact_router
from app.services.bootstrap import seed_super_admin
from app.services.jwt import get_jwt_service

# Logging
logger = logging.getLogger("atelier")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

settings = get_settings()
UPLOAD_ROOT = Path(settings.UPLOAD_DIR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Refuse to start on bad configuration, then seed the super admin."""
    for warning in settings.validate():
        logger.warning("Config: %s", warning)
    get_jwt_service()

    (UPLOAD_ROOT / "artworks").mkdir(parents=True, exist_ok=True)

    if settings.SUPER_ADMIN_EMAIL and settings.SUPER_ADMIN_PASSWORD:
        db = SessionLocal()
        try:
            seed_super_admin(db, settings)
        finally:
            db.close()

    logger.info("Atelier started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(title="Atelier", version="0.1.0", lifespan=lifespan)
app.state.limiter = limiter


# --- Security headers middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cross-Origin-Resource-Policy"] = "cross-origin"
        return response


# --- Request size limit middleware ---
class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    # A thumbnail plus ten images at the per-file limit, with room for form fields
    MAX_BODY_SIZE = (settings.MAX_UPLOAD_SIZE_MB * 11 + 1) * 1024 * 1024

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.MAX_BODY_SIZE:
            return JSONResponse(status_code=413, content={"success": False, "message": "Request body too large"})
        return await call_next(request)


# --- Audit logging middleware ---
class AuditLogMiddleware(BaseHTTPMiddleware):
    AUDIT_PATHS = ("/api/auth/", "/api/admin/", "/api/artworks", "/api/categories")

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000

        path = request.url.path
        method = request.method
        if method in ("POST", "PUT", "DELETE") and path.startswith(self.AUDIT_PATHS):
            logger.info(
                "AUDIT %s %s -> %d (%.0fms) from %s",
                method,
                path,
                response.status_code,
                duration_ms,
                request.client.host if request.client else "unknown",
            )

        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)
app.add_middleware(AuditLogMiddleware)

# Uploaded artwork images
app.mount("/artworks", StaticFiles(directory=UPLOAD_ROOT / "artworks", check_dir=False), name="artworks")

# API routers
app.include_router(auth_router)
app.include_router(artworks_router)
app.include_router(categories_router)
app.include_router(admin_router)
app.include_router(contact_router)


# --- Error handlers: every failure becomes {"success": false, "message": ...} ---
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Translate service errors into structured responses."""
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded."""
    return JSONResponse(
        status_code=429, content={"success": False, "message": "Too many requests. Please try again later."}
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first invalid field of a request body in the structured shape."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"] if part != "body")
    message = f"{field}: {error['msg']}" if field else error["msg"]
    return JSONResponse(status_code=422, content={"success": False, "message": message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by the framework (404 routes, 405 methods)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=exc.headers,
    )


# --- Health check ---
@app.get("/api/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"success": True, "message": "Server is running", "app": "atelier", "version": "0.1.0"}
