"""Admin Auth Service

Main FastAPI application entry point.
Bootstraps the admin authentication providers at startup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from admin_auth.config.providers import load_credential_checker
from admin_auth.config.settings import get_settings
from admin_auth.core.auth import bootstrap, get_provider_callback_url

LOG_FORMATS = {
    "text": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    "json": '{"time": "%(asctime)s", "logger": "%(name)s", "level": "%(levelname)s", "message": "%(message)s"}',
}

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMATS["text"]
)
logger = logging.getLogger(__name__)


def configure_logging(settings) -> None:
    """Apply the configured log level and format to the root logger"""
    log_format = settings.log_format.lower()
    if log_format not in LOG_FORMATS:
        logger.warning(f"Unknown LOG_FORMAT '{settings.log_format}', using text")
        log_format = "text"

    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMATS[log_format],
        force=True
    )


async def refuse_credentials(identifier: str, secret: str):
    """Credential check used when the host configures none: every login is refused"""
    return (None, False, {"message": "Local authentication is not configured"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    settings = get_settings()
    configure_logging(settings)

    # Startup
    logger.info(f"Starting {settings.service_name} v{settings.service_version}")
    logger.info(f"Environment: {settings.environment}")

    if settings.credential_checker:
        check_credentials = load_credential_checker(settings)
    else:
        logger.warning("No CREDENTIAL_CHECKER configured, local logins will be refused")
        check_credentials = refuse_credentials

    # Providers are sealed once bootstrap returns
    try:
        registry, middleware = bootstrap(settings, check_credentials)
    except Exception as e:
        logger.error(f"Failed to initialize authentication providers: {e}")
        raise

    app.state.provider_registry = registry
    app.state.auth_middleware = middleware

    yield

    # Shutdown
    logger.info("Shutting down Admin Auth Service")
    registry.clear()


# Create FastAPI application
settings = get_settings()
app = FastAPI(
    title="Admin Auth Service",
    version=settings.service_version,
    description="Pluggable authentication providers for the admin panel",
    lifespan=lifespan
)


# Health check endpoint
@app.get("/health")
async def root_health_check():
    """Root health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
        "environment": settings.environment
    }


@app.get("/")
async def root():
    """Root endpoint with service information"""
    return {
        "service": settings.service_name,
        "version": settings.service_version,
        "description": "Admin authentication providers",
        "docs": "/docs",
        "health": "/health",
        "providers": "/admin/providers"
    }


@app.get("/admin/providers")
async def list_providers(request: Request):
    """Registered providers with their callback URLs"""
    registry = request.app.state.provider_registry
    return {
        "providers": [
            {"uid": uid, "callback_url": get_provider_callback_url(uid)}
            for uid in registry
        ],
        "sealed": registry.is_sealed,
    }


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later."
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "admin_auth.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
