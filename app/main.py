"""
FastAPI application setup.
The phrase index is loaded once during lifespan startup; a missing or
malformed dataset aborts startup.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware
from typing import Optional
import logging
import time
from contextlib import asynccontextmanager

from app.config import Settings, get_settings
from app.core.dependencies import ServiceContainer
from app.core.error_handlers import setup_error_handlers
from app.core.logging import configure_logging
from app.middleware import (
    RateLimitMiddleware,
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
)
from app.models.api_models import ServiceInfo

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        app_settings: Settings to use instead of the global settings

    Returns:
        FastAPI: Configured application instance
    """
    settings = app_settings or get_settings()

    configure_logging(
        level=settings.log_level.value,
        fmt=settings.log_format.value,
        log_file=settings.log_file,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Load the phrase index before serving and release it on shutdown.
        """
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")

        service_container = ServiceContainer(settings)
        try:
            await service_container.initialize_services()
        except Exception as e:
            logger.error(f"Application startup failed: {e}", exc_info=True)
            raise

        app.state.service_container = service_container
        logger.info("Application startup complete")

        try:
            yield
        finally:
            logger.info("Shutting down application")
            await service_container.cleanup_services()
            app.state.service_container = None
            logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.service_container = None

    # Innermost first: each add_middleware call wraps the previous ones
    app.add_middleware(RateLimitMiddleware, limits=settings.rate_limit)

    app.add_middleware(
        CORSMiddleware,
        **settings.get_cors_config()
    )

    if settings.is_hsts_enabled():
        app.add_middleware(
            SecurityHeadersMiddleware,
            max_age_seconds=settings.security.hsts_max_age_seconds,
            include_subdomains=settings.security.hsts_include_subdomains,
            preload=settings.security.hsts_preload,
        )

    if settings.is_https_redirect_enabled():
        app.add_middleware(HTTPSRedirectMiddleware)

    setup_error_handlers(app)

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        """Collect request count and latency per route."""
        from app.api.metrics_endpoints import metrics_collector

        if request.url.path == "/metrics":
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        latency = time.perf_counter() - start_time

        route = request.scope.get("route")
        route_path = getattr(route, "path", "<unmatched>")
        metrics_collector.record_request(
            f"{request.method} {route_path}", latency, response.status_code
        )

        return response

    app.add_middleware(RequestContextMiddleware)

    @app.get("/", response_model=ServiceInfo, tags=["root"])
    async def root():
        """Service banner."""
        return ServiceInfo(name=settings.app_name, status="Sharp sharp!")

    from app.api.phrase_endpoints import router as phrase_router
    from app.api.health_endpoints import router as health_router
    from app.api.metrics_endpoints import router as metrics_router
    app.include_router(phrase_router)
    app.include_router(health_router)
    app.include_router(metrics_router)

    return app


# Create application instance
app = create_app()
