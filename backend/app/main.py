"""
ShopAdmin FastAPI Application
Main entry point for the backend API server.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from app.config import Settings, get_settings
from app.database import close_db, create_engine_from_settings, create_session_factory, init_db
from app.exceptions import AppError
from app.logging_config import request_context, setup_logging

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and cleanup on shutdown.
    """
    settings: Settings = app.state.settings
    setup_logging(log_dir=settings.log_dir, log_level=settings.log_level)
    
    logger.info("Starting ShopAdmin Backend...")
    
    # Create tables directly in debug mode; use Alembic migrations in production
    if settings.debug:
        await init_db(app.state.engine)
        logger.info("Database initialized (debug mode)")
    
    logger.info("ShopAdmin Backend ready")
    
    yield
    
    logger.info("Shutting down ShopAdmin Backend...")
    await close_db(app.state.engine)
    logger.info("Database connections closed")


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "message": exc.detail},
        headers=exc.headers,
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    detail = "Internal server error"
    return JSONResponse(status_code=500, content={"detail": detail, "message": detail})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag log records emitted while serving a request with its id, method and path."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        token = request_context.set(f"{request_id} {request.method} {request.url.path}")
        try:
            response = await call_next(request)
        finally:
            request_context.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around an explicit settings object."""
    from app.api import auth, products, users

    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
        ## E-commerce Administration API

        Authenticates users and manages the product catalog.

        ### Features
        - **Authentication**: Register, log in and receive a signed, time-limited token
        - **Catalog**: Any authenticated user can browse products
        - **Administration**: Only administrators can create, update or delete products
        """,
        version=VERSION,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = create_engine_from_settings(settings)
    app.state.session_factory = create_session_factory(app.state.engine)

    # Configure rate limiting
    app.state.limiter = auth.create_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Health Check Endpoints
    # =========================================================================

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint - API information."""
        return {
            "name": f"{settings.app_name} API",
            "version": VERSION,
            "docs": f"{settings.api_prefix}/docs",
            "status": "running"
        }

    @app.get(f"{settings.api_prefix}/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for container orchestration."""
        return {
            "status": "healthy",
            "service": "shopadmin-backend",
            "version": VERSION
        }

    @app.get(f"{settings.api_prefix}/health/db", tags=["Health"])
    async def database_health(request: Request):
        """Database connectivity check."""
        try:
            async with request.app.state.session_factory() as session:
                result = await session.execute(text("SELECT 1"))
                result.fetchone()
            return {
                "status": "healthy",
                "database": "connected"
            }
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "database": "disconnected"
            }

    # =========================================================================
    # API Routers
    # =========================================================================

    app.include_router(auth.create_router(app.state.limiter), prefix=f"{settings.api_prefix}/auth", tags=["Auth"])
    app.include_router(products.router, prefix=f"{settings.api_prefix}/products", tags=["Products"])
    app.include_router(users.router, prefix=f"{settings.api_prefix}/users", tags=["Users"])

    return app


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
