# API endpoints and routers

from .phrase_endpoints import router as phrase_router
from .health_endpoints import router as health_router
from .metrics_endpoints import router as metrics_router

__all__ = [
    "phrase_router",
    "health_router",
    "metrics_router"
]
