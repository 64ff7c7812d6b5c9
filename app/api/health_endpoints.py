"""
Health check endpoint.

Reports whether the phrase index has been published, with dataset counts
and error statistics.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
import logging
import time

from app.core.error_handlers import error_handler
from app.models.api_models import HealthCheckResponse, PhraseIndexStats

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

# Application start time for uptime calculation
_app_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Basic health check",
    description="Returns application health with phrase dataset counts"
)
async def health_check(request: Request):
    """
    Healthy once the phrase index is loaded; 503 otherwise.
    """
    container = getattr(request.app.state, 'service_container', None)
    settings = request.app.state.settings
    uptime_seconds = int(time.time() - _app_start_time)

    if container is None or not container.initialized:
        logger.warning("Health check requested before phrase index was loaded")
        response = HealthCheckResponse(
            status="unhealthy",
            version=settings.app_version,
            uptime_seconds=uptime_seconds,
            error_statistics=error_handler.get_error_statistics(),
        )
        return JSONResponse(status_code=503, content=response.model_dump(mode="json"))

    stats = container.get_phrase_index().stats()
    return HealthCheckResponse(
        status="healthy",
        version=settings.app_version,
        uptime_seconds=uptime_seconds,
        phrases=PhraseIndexStats(**stats),
        error_statistics=error_handler.get_error_statistics(),
    )
